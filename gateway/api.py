# -*- coding: utf-8 -*-
"""
SmartMeal edge gateway

Proxies nutrient lookups (USDA FoodData Central) and text generation (Gemini)
for the mobile app behind one normalized JSON contract.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .config import settings as default_settings
from .errors import GatewayError
from .generation.api import router as generation_router
from .nutrients.api import router as nutrients_router
from .upstream import UpstreamClient

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = {"error": "route not found"}


def _build_upstream(settings: Settings, transport: Optional[httpx.AsyncBaseTransport]) -> UpstreamClient:
    return UpstreamClient(timeout=settings.upstream_timeout, transport=transport)


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.upstream.closed:
            app.state.upstream = _build_upstream(settings, transport)
        yield
        await app.state.upstream.aclose()

    app = FastAPI(
        title="SmartMeal Gateway",
        description="Nutrient lookup and AI generation proxy for the SmartMeal app",
        version="1.0.0",
        # Only the two proxy routes answer; everything else is a JSON 404.
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.state.settings = settings
    # Built eagerly so requests work even when lifespan events are not triggered.
    app.state.upstream = _build_upstream(settings, transport)

    @app.middleware("http")
    async def _worker_error_boundary(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("unhandled error on %s %s", request.method, request.url.path)
            message = str(exc) or type(exc).__name__
            return JSONResponse(status_code=500, content={"error": f"Worker Error: {message}"})

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def _gateway_error(request: Request, exc: GatewayError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_payload()))

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=ROUTE_NOT_FOUND)
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"error": "invalid request", "details": jsonable_encoder(exc.errors())},
        )

    app.include_router(nutrients_router)
    app.include_router(generation_router)
    return app


app = create_app()


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    logging.basicConfig(
        level=default_settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("GATEWAY_HOST") or os.environ.get("HOST") or "127.0.0.1"
    port_raw = os.environ.get("GATEWAY_PORT") or os.environ.get("PORT") or "8000"
    try:
        port = int(port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("gateway.api:app", host=host, port=port, reload=False)
