"""ValidationService: parse and format-check submitted receipts.

A receipt is accepted whole or rejected whole. Checks run in a fixed order and
the first failing field is reported. Date validation is purely syntactic:
"2022-13-99" passes.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Union

from pydantic import ValidationError

from app.models.schema import Receipt
from app.utils.helpers.exceptions import InvalidReceiptFieldError, MalformedReceiptError

logger = logging.getLogger(__name__)

# Whole-string patterns with ASCII classes. Whitespace is [\t\n\f\r ] only; \v is not.
MONEY_PATTERN = re.compile(r"\d+\.\d{2}", re.ASCII)
RECEIPT_PATTERNS: Dict[str, "re.Pattern[str]"] = {
    "retailer": re.compile(r"[^\t\n\f\r ]+", re.ASCII),
    "purchaseDate": re.compile(r"[12]\d{3}-[01]\d-[0123]\d", re.ASCII),
    "purchaseTime": re.compile(r"([01]\d|2[0-3]):[0-5]\d", re.ASCII),
    "total": MONEY_PATTERN,
}
DESCRIPTION_PATTERN = re.compile(r"[\w\t\n\f\r \-]+", re.ASCII)


class ValidationService:
    """Turn raw request bytes into a validated Receipt."""

    def validate(self, payload: Union[bytes, str]) -> Receipt:
        receipt = self.parse(payload)
        self.check(receipt)
        return receipt

    def parse(self, payload: Union[bytes, str]) -> Receipt:
        try:
            return Receipt.model_validate_json(payload)
        except ValidationError as exc:
            logger.debug("Receipt payload rejected as malformed: %s", exc)
            raise MalformedReceiptError("Receipt payload could not be deserialized") from exc

    def check(self, receipt: Receipt) -> None:
        """Raise InvalidReceiptFieldError on the first field that breaks its rule."""
        for field_name, pattern in RECEIPT_PATTERNS.items():
            value = getattr(receipt, field_name)
            if not pattern.fullmatch(value):
                raise InvalidReceiptFieldError(field_name, value)

        for index, item in enumerate(receipt.items):
            if not DESCRIPTION_PATTERN.fullmatch(item.shortDescription):
                raise InvalidReceiptFieldError(f"items[{index}].shortDescription", item.shortDescription)
            if not MONEY_PATTERN.fullmatch(item.price):
                raise InvalidReceiptFieldError(f"items[{index}].price", item.price)


def validate_receipt(payload: Union[bytes, str]) -> Receipt:
    """Module-level convenience wrapper around ValidationService.validate."""
    return ValidationService().validate(payload)


__all__ = ["ValidationService", "validate_receipt", "RECEIPT_PATTERNS", "MONEY_PATTERN", "DESCRIPTION_PATTERN"]
