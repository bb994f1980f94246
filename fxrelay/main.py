import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .routers import health, rates
from .services.upstream import ExchangeRateUpstream

logger = logging.getLogger("fxrelay")


def create_app(
    settings_override: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., no API key). Falls back to cached get_settings().
    transport: outbound transport for upstream calls; tests pass an
    httpx.MockTransport so no request leaves the process.
    """
    settings = settings_override or get_settings()
    # Initialize logging early
    init_logging(debug=settings.debug)

    http = httpx.AsyncClient(timeout=settings.http_timeout_seconds, transport=transport)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("proxy listening on http://%s:%s", settings.host, settings.port)
        if settings.public_url:
            logger.info("public url: %s", settings.public_url)
        if not settings.has_api_key:
            logger.warning("EXCHANGERATE_API_KEY not set; /codes and /rates will fail")
        yield
        await http.aclose()

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.upstream = ExchangeRateUpstream(
        http, settings.exchangerate_api_key, settings.upstream_base_url
    )

    # Middleware (request id / structured logging, CORS)
    app.middleware("http")(request_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Error handlers
    app.add_exception_handler(errors.ProxyError, errors.proxy_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(rates.router)

    @app.get("/")
    async def root():
        return {"message": "fxrelay exchange-rate proxy", "version": settings.version}

    return app


app = create_app()
