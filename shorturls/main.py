"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware and exception handlers.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shorturls.api import api_router
from shorturls.core.config import settings
from shorturls.core.logging import setup_logging
from shorturls.core.url_logger import setup_click_logging, teardown_click_logging
from shorturls.db import create_tables, dispose_engine
from shorturls.middleware.logging import add_logging_middleware

# Setup logging
logger = setup_logging()


def is_api_request(request: Request) -> bool:
    path = request.url.path
    return path == settings.API_PREFIX or path.startswith(settings.API_PREFIX + "/")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run startup and shutdown tasks."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    setup_click_logging()
    logger.info("Link click logging initialized")

    await create_tables()
    logger.info("Database tables ready")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}")
    await dispose_engine()
    teardown_click_logging()


app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

if settings.REQUEST_LOGGING_ENABLED:
    add_logging_middleware(app)

app.include_router(api_router)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    # API errors carry their body as a dict detail
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"detail": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400."""
    logger.warning(f"Request validation error: {exc}")
    if is_api_request(request):
        content = {"error": "invalid_request"}
    else:
        content = {"detail": "Validation error"}
    if settings.DEBUG:
        content["errors"] = jsonable_errors(exc)
    return JSONResponse(status_code=400, content=content)


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler to catch and log all unhandled exceptions."""
    error_id = f"error-{time.time()}"

    logger.bind(
        error_id=error_id,
        url=str(request.url),
        method=request.method,
        path_params=request.path_params,
        client_host=request.client.host if request.client else None,
    ).opt(exception=exc).error(f"Unhandled exception in {request.method} {request.url.path}")

    if is_api_request(request):
        return JSONResponse(status_code=500, content={"error": "internal_error"})

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error occurred",
            "error_id": error_id,
            "message": str(exc) if settings.DEBUG else "Internal server error",
        },
    )
