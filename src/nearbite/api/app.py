# src/nearbite/api/app.py
"""
FastAPI application wiring.

This file creates the `FastAPI` instance and installs middleware and error handlers.
Business logic lives in `nearbite.api.routes` and `nearbite.search`.
"""

from __future__ import annotations

import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from nearbite.config.settings import get_settings
from nearbite.core.logging import configure_logging

from .routes import error_response, router

configure_logging(get_settings())

app = FastAPI(title="Nearbite API", version="0.1.0")

# CORS (dev-friendly): allow local frontends to call this API.
# Configure via env:
# - NEARBITE_CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000"
# - NEARBITE_CORS_ALLOW_LOCAL=0 to disable the default localhost allowance
cors_origins = [s.strip() for s in os.getenv("NEARBITE_CORS_ORIGINS", "").split(",") if s.strip()]
cors_allow_local = os.getenv("NEARBITE_CORS_ALLOW_LOCAL", "1").strip().lower() in {"1", "true", "yes", "y"}
cors_origin_regex = os.getenv("NEARBITE_CORS_ALLOW_ORIGIN_REGEX", "").strip() or (
    r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$" if cors_allow_local and not cors_origins else ""
)
if cors_origins or cors_origin_regex:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_origin_regex=cors_origin_regex or None,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request (e.g. a body that is not JSON) is a client error, not a 422."""
    return error_response(400, "Malformed request", "VALIDATION_ERROR")


app.include_router(router)
