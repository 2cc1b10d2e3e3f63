"""Global FastAPI dependencies for application-scoped services.

Services are created once per application in ``create_app`` and stored on
``app.state``; these dependencies hand them to endpoints so tests can swap
any of them through ``app.dependency_overrides``.
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from .config import Settings
from .domain.documents.ports.object_storage_port import ObjectStoragePort
from .gate.sessions import SessionRegistry
from .inquiries.service import InquiryLog


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> ObjectStoragePort:
    return request.app.state.storage


def get_session_registry(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_inquiry_log(request: Request) -> InquiryLog:
    return request.app.state.inquiry_log


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency for FastAPI endpoints.

    Usage:
        @app.get("/health")
        def health(db: Session = Depends(get_db)):
            ...
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
