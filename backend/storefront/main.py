"""
Game Account Storefront - FastAPI application.
Public catalogue and admin back-office under /api/v1, legacy admin routes under /api.
"""

import logging
import os
import sys
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest

from storefront.api import legacy
from storefront.api.v1.endpoints import auth
from storefront.api.v1.routes import api_router
from storefront.core.config import get_settings
from storefront.services.image_service import ImageValidationError
from storefront.services.supabase_service import StorageRemovalError

API_VERSION = "1.0.0"
PREFLIGHT_MAX_AGE = "86400"


def configure_logging(level: int = logging.INFO) -> None:
    """Send every storefront.* logger to stdout so request and cleanup logs reach the host."""
    package_logger = logging.getLogger("storefront")
    package_logger.setLevel(level)
    if package_logger.handlers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s:     %(name)s: %(message)s"))
    package_logger.addHandler(handler)


configure_logging()
logger = logging.getLogger(__name__)
_settings = get_settings()


def _preflight_headers(origin: str) -> dict[str, str]:
    allowed = _settings.cors_origins_list
    if origin in allowed:
        allow_origin = origin
    else:
        allow_origin = allowed[0] if allowed else "*"
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "*",
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Max-Age": PREFLIGHT_MAX_AGE,
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, path and response status."""

    async def dispatch(self, request: StarletteRequest, call_next: Callable) -> Response:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response


class PreflightCorsMiddleware(BaseHTTPMiddleware):
    """Answer OPTIONS requests directly, before routing and auth dependencies run."""

    async def dispatch(self, request: StarletteRequest, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            origin = request.headers.get("origin", "").strip()
            return Response(status_code=200, headers=_preflight_headers(origin))
        return await call_next(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting Storefront API (%s)", _settings.ENVIRONMENT)
    logger.info("CORS origins: %s", ", ".join(_settings.cors_origins_list))
    if _settings.ENVIRONMENT == "production":
        _settings.validate_for_production()
    yield
    logger.info("Storefront API stopped")


app = FastAPI(
    title="Game Account Storefront API",
    version=API_VERSION,
    description="Storefront and admin back-office for game accounts and rank boosts, backed by Supabase.",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(PreflightCorsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)


@app.exception_handler(ImageValidationError)
async def image_validation_error(request: Request, exc: ImageValidationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(StorageRemovalError)
async def storage_removal_error(request: Request, exc: StorageRemovalError) -> JSONResponse:
    logger.error("Storage removal failed in %s: %s", exc.bucket, exc.message)
    return JSONResponse(status_code=502, content={"detail": "Image storage unavailable"})


@app.middleware("http")
async def catch_exceptions(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(api_router, prefix="/api/v1")
app.include_router(legacy.router, prefix="/api")


@app.get("/")
def root():
    return {
        "message": "Game Account Storefront API",
        "version": API_VERSION,
        "docs": "/docs",
        "endpoints": {
            "auth": "/api/v1/auth",
            "catalog": "/api/v1/accounts",
            "admin": "/api/v1/admin",
            "legacy": "/api/admin-login",
        },
    }


@app.get("/health")
def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storefront.main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8080")))
