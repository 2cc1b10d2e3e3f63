"""Data Room Backend - Main FastAPI Application

Creates and configures the FastAPI application:
- API routers (gate, documents, viewer, inquiries)
- Middleware (request ID correlation, CORS)
- Exception handlers mapping domain errors to HTTP responses
- Health and observability endpoints

Run with:
    uvicorn dataroom.main:create_app --factory
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from . import __version__
from .config import Settings, get_settings
from .database import create_db_engine, create_session_factory, init_db
from .documents.router import router as documents_router
from .domain.documents.ports.object_storage_port import ObjectStoragePort
from .domain.errors import (
    DataRoomError,
    DeleteRejected,
    DeletionNotConfirmed,
    GateLocked,
    InquiryRejected,
    InvalidCredentials,
    LogUnavailable,
    StoreUnavailable,
    UploadRejected,
)
from .domain.gate.access_gate import GateCredentials
from .gate.router import router as gate_router
from .gate.sessions import SessionRegistry
from .infrastructure.storage import build_storage_adapter
from .inquiries.router import router as inquiries_router
from .inquiries.service import InquiryLog
from .observability.logging_config import configure_logging
from .observability.middleware import RequestIDMiddleware
from .observability.router import router as observability_router
from .viewer.router import router as viewer_router

logger = logging.getLogger(__name__)

# Domain error class -> HTTP status. Subclasses not listed fall back to 500.
ERROR_STATUS_CODES = {
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    GateLocked: status.HTTP_401_UNAUTHORIZED,
    StoreUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    LogUnavailable: status.HTTP_503_SERVICE_UNAVAILABLE,
    UploadRejected: status.HTTP_502_BAD_GATEWAY,
    DeleteRejected: status.HTTP_502_BAD_GATEWAY,
    DeletionNotConfirmed: status.HTTP_400_BAD_REQUEST,
    InquiryRejected: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def _gate_credentials(settings: Settings) -> GateCredentials:
    if settings.DATAROOM_PASSWORD is None:
        raise RuntimeError("DATAROOM_PASSWORD must be set")
    return GateCredentials(
        username=settings.DATAROOM_USERNAME,
        password=settings.DATAROOM_PASSWORD.get_secret_value(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the inquiry table on startup."""
    settings: Settings = app.state.settings
    logger.info("Data room API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}, storage backend: {settings.STORAGE_BACKEND}")
    init_db(app.state.engine)

    yield

    logger.info("Data room API shutting down...")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DataRoomError)
    async def dataroom_exception_handler(request: Request, exc: DataRoomError) -> JSONResponse:
        status_code = ERROR_STATUS_CODES.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
        headers = None
        if status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}

        logger.warning(
            f"{exc.code} on {request.method} {request.url.path}",
            extra={"method": request.method, "path": request.url.path, "status_code": status_code},
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "message": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning(f"Validation error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Log the full error, return a generic message."""
        logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "database_error",
                "message": "A database error occurred. Please try again later.",
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred. Please try again later.",
            },
        )


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[ObjectStoragePort] = None,
    session_factory: Optional[sessionmaker] = None,
) -> FastAPI:
    """Application factory.

    Args:
        settings: Settings to use; loaded from the environment when omitted
        storage: Object store adapter; built from settings when omitted
        session_factory: SQLAlchemy session factory for the inquiry log;
            built from DATABASE_URL when omitted

    Raises:
        RuntimeError: If the gate password is not configured
    """
    settings = settings or get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

    credentials = _gate_credentials(settings)
    storage = storage or build_storage_adapter(settings)
    if session_factory is None:
        engine = create_db_engine(settings.DATABASE_URL)
        session_factory = create_session_factory(engine)
    else:
        engine = session_factory.kw["bind"]

    app = FastAPI(
        title="Data Room API",
        description="Gated document data room backed by S3-compatible object storage",
        version=__version__,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.sessions = SessionRegistry(
        credentials,
        storage,
        page_size=settings.CATALOG_PAGE_SIZE,
        max_upload_size=settings.MAX_UPLOAD_SIZE_BYTES,
    )
    app.state.inquiry_log = InquiryLog(session_factory)

    # Request ID middleware wraps CORS so every response carries X-Request-ID
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(observability_router)
    app.include_router(gate_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(viewer_router, prefix="/api/v1")
    app.include_router(inquiries_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        return {
            "name": "Data Room API",
            "version": __version__,
            "status": "running",
            "docs": None if settings.is_production else "/docs",
        }

    @app.get("/api/v1", include_in_schema=False)
    async def api_root() -> dict[str, Any]:
        return {
            "version": "v1",
            "status": "active",
            "endpoints": {
                "gate": "/api/v1/gate",
                "documents": "/api/v1/documents",
                "viewer": "/api/v1/viewer",
                "inquiries": "/api/v1/inquiries",
            },
        }

    return app


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        "dataroom.main:create_app",
        factory=True,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=get_settings().LOG_LEVEL.lower(),
    )
