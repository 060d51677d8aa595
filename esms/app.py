"""FastAPI application factory for the compliance registers."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from esms.modules._infra import api as audit_api
from esms.modules._infra.errors import ESMSError
from esms.modules._infra.validators import error_fields
from esms.modules.communications import api as communications_api
from esms.modules.documents import api as documents_api
from esms.modules.emergency import api as emergency_api
from esms.modules.reference import api as reference_api
from esms.modules.risks import api as risks_api
from esms.modules.training import api as training_api
from esms.modules.waste import api as waste_api
from esms.utils import app_settings

logger = logging.getLogger(__name__)


def install_error_handlers(app: FastAPI) -> None:
    """Render every error response as ``{"error": ...}``."""

    @app.exception_handler(ESMSError)
    async def _esms_error(request: Request, exc: ESMSError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(status_code=exc.status_code, content={"error": detail})

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        fields = error_fields(exc.errors())
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, fields)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Validation failed", "fields": fields},
        )

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app() -> FastAPI:
    app = FastAPI(title="ESMS Compliance Registers")
    install_error_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in reference_api.routers:
        app.include_router(router)
    app.include_router(risks_api.router)
    app.include_router(emergency_api.router)
    for router in communications_api.routers:
        app.include_router(router)
    for router in documents_api.routers:
        app.include_router(router)
    app.include_router(training_api.router)
    for router in waste_api.routers:
        app.include_router(router)
    app.include_router(audit_api.router)

    uploads = app_settings.upload_dir()
    uploads.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(uploads)), name="uploads")
    return app


__all__ = ["create_app", "install_error_handlers"]
