"""
Serviflex API - FastAPI Application Entry Point

This module initializes the FastAPI application with all middleware,
routes, exception handlers and lifecycle event handlers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from google.api_core.exceptions import GoogleAPICallError

from serviflex import __version__
from serviflex.core.config import settings
from serviflex.core.firebase import close_firebase, init_firebase
from serviflex.core.logging_config import setup_logging
from serviflex.middleware.logging import LoggingMiddleware
from serviflex.middleware.request_id import RequestIDMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up logging
        - Initialize the Firebase Admin app

    Shutdown:
        - Tear down the Firebase Admin app
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)

    init_firebase()

    yield

    close_firebase()


# Create FastAPI application instance
app = FastAPI(
    title=settings.project_name,
    version=__version__,
    description="Service marketplace API: clients, professionals, establishments, schedules and appointments",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Configure middleware
# Note: Middleware is executed in reverse order of registration
# (last registered = first executed)

# Logging middleware (runs after RequestID to access request_id)
app.add_middleware(LoggingMiddleware)

# Request ID middleware (sets correlation ID)
app.add_middleware(RequestIDMiddleware)

# CORS middleware - configured from environment
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GoogleAPICallError)
async def firestore_error_handler(request: Request, exc: GoogleAPICallError) -> JSONResponse:
    """Report Firestore failures as 500 without leaking backend details."""
    logger.error(
        f"Firestore call failed: {exc}",
        extra={
            "method": request.method,
            "path": request.url.path,
            "request_id": getattr(request.state, "request_id", None),
        },
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database operation failed"},
    )


# Import and include routers
from serviflex.api.v1 import (  # noqa: E402
    admins,
    appointments,
    auth,
    establishments,
    health,
    procedures,
    professionals,
    ratings,
    uploads,
    users,
    working_hours,
)

app.include_router(health.router, prefix=settings.api_prefix)
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(users.router, prefix=settings.api_prefix)
app.include_router(professionals.router, prefix=settings.api_prefix)
app.include_router(establishments.router, prefix=settings.api_prefix)
app.include_router(procedures.router, prefix=settings.api_prefix)
app.include_router(working_hours.router, prefix=settings.api_prefix)
app.include_router(appointments.router, prefix=settings.api_prefix)
app.include_router(uploads.router, prefix=settings.api_prefix)
app.include_router(admins.router, prefix=settings.api_prefix)
app.include_router(ratings.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns basic API information.
    """
    return {
        "message": "Serviflex API",
        "version": __version__,
        "docs": "/docs",
    }
