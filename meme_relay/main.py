"""
Purpose:
- FastAPI application factory and router mounts.
- Adds CORS (open by default, tools call us from anywhere).
- Owns the shared outbound clients and the error -> {"error": ...} mapping.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional
import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import OpenAI
from .core.errors import MemeLookupError
from .core.settings import Settings, get_settings
from .api.health import router as health_router
from .api.memes import build_router

logger = logging.getLogger(__name__)

async def _lookup_error_handler(request: Request, exc: MemeLookupError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def _body_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = f"{loc}: {first.get('msg')}" if loc else str(first.get("msg"))
    else:
        detail = "malformed body"
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {detail}"})

def create_app(
    settings: Optional[Settings] = None,
    *,
    http_client: Optional[httpx.Client] = None,
    llm_client: Any = None,
) -> FastAPI:
    settings = settings or get_settings()
    owned = []
    if http_client is None:
        http_client = httpx.Client(timeout=settings.search_timeout)
        owned.append(http_client)
    if llm_client is None and settings.refined_enabled:
        llm_client = OpenAI(api_key=settings.openai_api_key, timeout=settings.llm_timeout, max_retries=0)
        owned.append(llm_client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Meme Search Plugin listening on port %s", settings.port)
        yield
        for client in owned:
            client.close()

    app = FastAPI(title="Meme Relay", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.http_client = http_client
    app.state.llm_client = llm_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(MemeLookupError, _lookup_error_handler)
    app.add_exception_handler(RequestValidationError, _body_error_handler)

    app.include_router(health_router)
    app.include_router(build_router(settings))
    return app
