"""Inquiry endpoint

Visitors can ask for missing documents or send a question. The text is
stored as entered; on failure the client keeps it and resubmits.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from ..dependencies import get_inquiry_log
from ..domain.errors import InquiryRejected, LogUnavailable
from ..gate.dependencies import UnlockedSession
from ..observability import metrics
from .schemas import InquiryRequest, InquiryResponse
from .service import InquiryLog

router = APIRouter(prefix="/inquiries", tags=["Inquiries"])


@router.post("", response_model=InquiryResponse, status_code=status.HTTP_201_CREATED)
def submit_inquiry(
    request: InquiryRequest,
    session: UnlockedSession,
    inquiry_log: Annotated[InquiryLog, Depends(get_inquiry_log)],
):
    """Append an inquiry to the log.

    Raises:
        InquiryRejected: 422 when the text is blank
        LogUnavailable: 503 when the write fails
    """
    try:
        record = inquiry_log.submit(request.text)
    except InquiryRejected:
        metrics.inquiries_total.labels(status="rejected").inc()
        raise
    except LogUnavailable:
        metrics.inquiries_total.labels(status="error").inc()
        raise

    metrics.inquiries_total.labels(status="success").inc()
    return InquiryResponse(text=record.text, created_at=record.created_at)
