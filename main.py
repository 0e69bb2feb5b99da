"""
App entrypoint.

- create_app() builds the store once and hangs it (via QuizService) on app.state
- All routes are included under settings.api_prefix (default /api/v1)
- Errors leave as {"success": false, "message": ...}
"""
from __future__ import annotations
from typing import Iterable, Optional
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

import routers
from config import Settings, load_settings
from logging_config import configure_logging
from schemas import describe_validation_errors
from service.core import QuizService
from store import QuizStore

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": "default-src 'self'",
}


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds SECURITY_HEADERS to every response.

    Paths in csp_exempt (the interactive docs, which load Swagger UI and
    ReDoc from a CDN) get every header except Content-Security-Policy.
    """

    def __init__(self, app, csp_exempt: Iterable[Optional[str]] = ()) -> None:
        super().__init__(app)
        self.csp_exempt = frozenset(p for p in csp_exempt if p)

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        skip_csp = request.url.path in self.csp_exempt
        for name, value in SECURITY_HEADERS.items():
            if skip_csp and name == "Content-Security-Policy":
                continue
            response.headers.setdefault(name, value)
        return response


def _failure(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)


def _install_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404 and exc.detail == "Not Found":
            return _failure(404, f"Endpoint {request.url.path} not found")
        return _failure(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _failure(400, "Data validation failed", describe_validation_errors(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("System error on %s %s", request.method, request.url.path)
        detail = str(exc) if settings.is_development else "Something went wrong"
        return _failure(500, "System error occurred", detail)


def create_app(settings: Optional[Settings] = None, store: Optional[QuizStore] = None) -> FastAPI:
    settings = settings or load_settings()
    service_logger = configure_logging(settings.log_level)

    app = FastAPI(
        title="Quiz Management API",
        version=settings.version,
        description="Create quizzes, attach questions, serve participant views and score submissions",
    )
    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.quiz_service = QuizService(store or QuizStore())

    app.add_middleware(
        SecurityHeadersMiddleware,
        csp_exempt=(app.docs_url, app.redoc_url, app.swagger_ui_oauth2_redirect_url),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLogMiddleware)
    _install_error_handlers(app, settings)

    app.include_router(routers.router, prefix=settings.api_prefix)

    @app.get("/", include_in_schema=False)
    def index() -> dict:
        prefix = settings.api_prefix
        return {
            "message": "Quiz Management System API",
            "version": settings.version,
            "endpoints": {
                "healthCheck": f"{prefix}/health",
                "quizManagement": f"{prefix}/quizzes",
                "documentation": app.docs_url,
            },
        }

    service_logger.info("%s %s ready (%s)", settings.service_name, settings.version, settings.environment)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
