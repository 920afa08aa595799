import logging
from typing import Optional

from fastapi import FastAPI, Request, Response

from app.api.routes import router as receipts_router
from app.repositories.receipt_repository import ReceiptRepository
from app.services.config_service import ConfigService
from app.services.receipt_service import ReceiptService
from app.utils.helpers.exceptions import ReceiptProcessingError
from app.utils.logging_utils import configure_logging, set_event_log_file

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[ConfigService] = None,
    repository: Optional[ReceiptRepository] = None,
) -> FastAPI:
    """Build the application with its own receipt store.

    The store lives exactly as long as the returned app; nothing is shared
    between two apps built by separate calls.
    """
    config = config or ConfigService()
    configure_logging(config.log_level)
    set_event_log_file(config.event_log_path)

    app = FastAPI(
        title="Receipt Points Service",
        description="API for submitting purchase receipts and retrieving their reward points.",
        version="0.1.0",
    )
    app.state.config = config
    app.state.receipt_repository = repository or ReceiptRepository()
    app.state.receipt_service = ReceiptService(repository=app.state.receipt_repository)

    @app.exception_handler(ReceiptProcessingError)
    async def receipt_error_handler(request: Request, exc: ReceiptProcessingError) -> Response:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc)
        return Response(content=b"", status_code=exc.status_code, media_type="application/json")

    @app.get("/health", tags=["health"])
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "receipts": app.state.receipt_repository.count_receipts()}

    app.include_router(receipts_router)

    logger.info("Receipt points service initialized")
    return app


app = create_app()
