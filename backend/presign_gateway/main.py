import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from presign_gateway.api.routers import health as health_router
from presign_gateway.api.routers import presign as presign_router
from presign_gateway.core.config import Settings, get_settings
from presign_gateway.core.errors import GatewayError, InvalidBodyError
from presign_gateway.core.log_config import configure_logging
from presign_gateway.core.security import verify_api_token
from presign_gateway.services.alias import ensure_alias
from presign_gateway.services.presign import PresignService
from presign_gateway.services.signer import McShareSigner, Signer

logger = logging.getLogger(__name__)

PUBLIC_PATHS = frozenset({"/health"})


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    await ensure_alias(settings)
    logger.info(
        "minio-presign-gateway ready (alias=%s, public base=%s)",
        settings.minio_alias,
        settings.public_base_url or "-",
    )
    if not settings.api_token:
        logger.warning("API_TOKEN is not set; every /presign request will be refused")
    yield
    logger.info("minio-presign-gateway shutting down")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(GatewayError)
    async def _gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug("Rejected body for %s: %s", request.url.path, exc.errors())
        return _error(InvalidBodyError.status_code, InvalidBodyError.default_message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            return _error(exc.status_code, "method not allowed", exc.headers)
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return _error(exc.status_code, "not found", exc.headers)
        return _error(exc.status_code, str(exc.detail), exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


def create_app(settings: Settings | None = None, signer: Signer | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        debug=settings.debug,
        title="MinIO Presign Gateway",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.presign_service = PresignService(settings, signer or McShareSigner(settings))

    # Registered first so it sits inside the logging middleware but ahead of
    # routing and body parsing.
    @app.middleware("http")
    async def _require_api_token(request: Request, call_next):
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)
        try:
            verify_api_token(
                settings.api_token,
                request.headers.get("x-api-token"),
                request.headers.get("authorization"),
            )
        except GatewayError as exc:
            return _error(exc.status_code, exc.message)
        return await call_next(request)

    @app.middleware("http")
    async def _log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    register_exception_handlers(app)
    app.include_router(health_router.router)
    app.include_router(presign_router.router)
    return app


configure_logging(get_settings().log_level)
app = create_app()
