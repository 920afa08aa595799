"""Exception taxonomy for the receipt points service.

Every error raised by the service layer derives from ReceiptProcessingError and
carries the HTTP status the API should answer with. Bodies are always empty.
"""

from typing import Optional


class ReceiptProcessingError(Exception):
    """Raised when a receipt workflow cannot complete."""

    status_code = 500

    def __init__(self, message: str = "", *, status_code: Optional[int] = None):
        super().__init__(message or self.__class__.__name__)
        if status_code is not None:
            self.status_code = status_code


class MalformedReceiptError(ReceiptProcessingError):
    """Payload does not deserialize into a receipt-shaped object."""

    status_code = 400


class InvalidReceiptFieldError(ReceiptProcessingError):
    """Receipt parsed but a field failed its format rule."""

    status_code = 400

    def __init__(self, field: str, value: object = None):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}")


class MissingReceiptIdError(ReceiptProcessingError):
    status_code = 400

    def __init__(self):
        super().__init__("No receipt id supplied")


class ReceiptNotFoundError(ReceiptProcessingError):
    status_code = 404

    def __init__(self, receipt_id: str):
        self.receipt_id = receipt_id
        super().__init__(f"Receipt not found: {receipt_id}")


class ResponseEncodingError(ReceiptProcessingError):
    """Response payload could not be serialized."""

    status_code = 500


class ConfigurationError(Exception):
    """Raised when configuration loading encounters issues."""
