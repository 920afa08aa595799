"""Receipt API endpoints.

Endpoints:
- POST /receipts/process          - Validate and store a receipt, returns {"id": ...}
- GET  /receipts/{receipt_id}/points - Points for a stored receipt, returns {"points": ...}

Failures answer with an empty body and the status carried by the raised
ReceiptProcessingError (see app.main for the handler).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.models.schema import PointsResponse, ProcessReceiptResponse
from app.services.receipt_service import ReceiptService
from app.utils.helpers.exceptions import ResponseEncodingError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["receipts"])


def get_receipt_service(request: Request) -> ReceiptService:
    """Return the ReceiptService created for this application instance."""
    return request.app.state.receipt_service


def _json_response(model: BaseModel) -> Response:
    try:
        body = model.model_dump_json()
    except (TypeError, ValueError) as exc:
        logger.error("Response encoding failed: %s", exc)
        raise ResponseEncodingError("Response payload could not be encoded") from exc
    return Response(content=body, status_code=status.HTTP_200_OK, media_type="application/json")


@router.post(
    "/receipts/process",
    response_model=ProcessReceiptResponse,
    summary="Submit a receipt for processing",
)
async def process_receipt(
    request: Request,
    service: ReceiptService = Depends(get_receipt_service),
) -> Response:
    payload = await request.body()
    # store lock waits and event log writes must not run on the event loop
    receipt_id = await run_in_threadpool(service.process_receipt, payload)
    return _json_response(ProcessReceiptResponse(id=receipt_id))


# The path convertor lets an empty id ("/receipts//points") reach the handler
# so it can be answered with 400 rather than a routing 404.
@router.get(
    "/receipts/{receipt_id:path}/points",
    response_model=PointsResponse,
    summary="Get points awarded for a receipt",
)
def get_points(
    receipt_id: str,
    service: ReceiptService = Depends(get_receipt_service),
) -> Response:
    points = service.get_points(receipt_id)
    return _json_response(PointsResponse(points=points))
