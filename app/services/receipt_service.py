"""Receipt Service Layer

Orchestrates the two receipt operations on top of the validator, the points
engine and the in-memory repository.

    API layer (app/api/routes.py)
        ↓
    ReceiptService (this module)
        ↓                  ↓
    ValidationService   PointsEngine
        ↓
    ReceiptRepository

Rules:
- Ingest either stores the full receipt or nothing
- Points are computed at most once per receipt id; later queries hit the cache
- The repository lock is held for the whole points lookup, so concurrent
  queries for one id never compute twice
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from app.models.schema import Receipt
from app.repositories.receipt_repository import ReceiptRepository
from app.scoring.points_engine import calculate_points
from app.services.validation_service import ValidationService
from app.utils.helpers.exceptions import (
    InvalidReceiptFieldError,
    MalformedReceiptError,
    MissingReceiptIdError,
    ReceiptNotFoundError,
)
from app.utils.logging_utils import log_receipt_event

logger = logging.getLogger(__name__)


class ReceiptService:
    """Service layer for receipt ingest and points lookup."""

    def __init__(
        self,
        repository: ReceiptRepository | None = None,
        validator: ValidationService | None = None,
        calculator: Callable[[Receipt], int] | None = None,
    ):
        """Initialize service with dependencies.

        Args:
            repository: Store for receipts and cached points. If None, creates an empty one.
            validator: Parses and checks payloads. If None, creates default.
            calculator: Scores a receipt. Defaults to the shared PointsEngine.
        """
        self.repository = repository or ReceiptRepository()
        self.validator = validator or ValidationService()
        self.calculator = calculator or calculate_points

    def process_receipt(self, payload: Union[bytes, str]) -> str:
        """Validate a serialized receipt, store it and return its new id.

        Raises:
            MalformedReceiptError: payload is not a receipt-shaped JSON object
            InvalidReceiptFieldError: a field fails its format rule
        """
        try:
            receipt = self.validator.validate(payload)
        except InvalidReceiptFieldError as exc:
            logger.info("ProcessReceipt::Invalid field %s", exc.field)
            log_receipt_event({"event_type": "receipt_rejected", "reason": "invalid_field", "field": exc.field})
            raise
        except MalformedReceiptError:
            logger.info("ProcessReceipt::Malformed payload")
            log_receipt_event({"event_type": "receipt_rejected", "reason": "malformed"})
            raise

        receipt_id = self.repository.create_receipt(receipt)
        logger.info("ProcessReceipt::Stored receipt %s (%d items)", receipt_id, len(receipt.items))
        log_receipt_event({
            "event_type": "receipt_processed",
            "receipt_id": receipt_id,
            "retailer": receipt.retailer,
            "item_count": len(receipt.items),
        })
        return receipt_id

    def get_points(self, receipt_id: Optional[str]) -> int:
        """Return the points for a stored receipt, computing them on first request.

        Raises:
            MissingReceiptIdError: no id supplied
            ReceiptNotFoundError: id was never issued
        """
        if not receipt_id:
            logger.info("GetPoints::No id")
            raise MissingReceiptIdError()

        with self.repository.lock:
            cached = self.repository.get_cached_points(receipt_id)
            if cached is None:
                receipt = self.repository.get_receipt(receipt_id)
                if receipt is None:
                    logger.info("GetPoints::Receipt not found %s", receipt_id)
                    raise ReceiptNotFoundError(receipt_id)

                points = self.calculator(receipt)
                self.repository.put_cached_points(receipt_id, points)

        if cached is not None:
            logger.debug("GetPoints::Cache hit for %s", receipt_id)
            log_receipt_event({"event_type": "points_cache_hit", "receipt_id": receipt_id, "points": cached})
            return cached

        logger.info("GetPoints::Computed %d points for %s", points, receipt_id)
        log_receipt_event({"event_type": "points_computed", "receipt_id": receipt_id, "points": points})
        return points


__all__ = ["ReceiptService"]
