"""Inquiry log service

Append-only sink for document requests and questions. A failed write is
reported once; there is no retry and no local queue, so the caller keeps the
text and the user resubmits.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..database import get_db_session
from ..domain.errors import InquiryRejected, LogUnavailable
from ..models.inquiry import Inquiry

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class InquiryRecord:
    text: str
    created_at: datetime


class InquiryLog:
    """Writes inquiries to the ``inquiries`` table.

    Example:
        log = InquiryLog(get_session_factory())
        log.submit("Please add the 2023 audited financials")
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._session_factory = session_factory
        self._clock = clock

    def submit(self, text: str) -> InquiryRecord:
        """Append one inquiry.

        Args:
            text: Free-text request, must be non-empty after trimming

        Returns:
            InquiryRecord: The stored record

        Raises:
            InquiryRejected: If the text is empty (nothing is written)
            LogUnavailable: If the database write fails
        """
        if not text or not text.strip():
            raise InquiryRejected()

        record = InquiryRecord(text=text, created_at=self._clock())

        try:
            with get_db_session(self._session_factory) as session:
                session.add(Inquiry(text=record.text, created_at=record.created_at))
        except SQLAlchemyError as e:
            logger.error(f"Failed to write inquiry: {e}", exc_info=True)
            raise LogUnavailable("Could not submit your request. Please try again.") from e

        logger.info(f"Inquiry logged: length={len(record.text)}")
        return record
