"""
Purpose:
- Expose POST /find_meme plus the explicit per-variant routes.
- /find_meme/giphy takes {"args": {"description": ...}}; /find_meme/refined takes {"text", "model"}.
- /find_meme serves whichever variant settings.meme_backend selects.
"""

import logging
from typing import Any, Callable
import httpx
from fastapi import APIRouter, Body, Depends
from ..core.errors import InternalError, MemeLookupError
from ..core.settings import Settings
from ..search.schema import FindMemeResponse, GiphyLookupRequest, RefinedLookupRequest
from ..search.service import find_meme_giphy, find_meme_refined
from .deps import get_app_settings, get_http_client, get_llm_client

logger = logging.getLogger(__name__)

def _guarded(run: Callable[[], FindMemeResponse]) -> FindMemeResponse:
    # Anything that isn't already part of the error taxonomy becomes a 500 with its message.
    try:
        return run()
    except MemeLookupError:
        raise
    except Exception as e:
        logger.exception("Error in /find_meme")
        raise InternalError(str(e) or e.__class__.__name__) from e

def giphy_lookup(
    payload: GiphyLookupRequest = Body(default_factory=GiphyLookupRequest),
    settings: Settings = Depends(get_app_settings),
    client: httpx.Client = Depends(get_http_client),
) -> FindMemeResponse:
    return _guarded(lambda: find_meme_giphy(payload.args.description, settings=settings, client=client))

def refined_lookup(
    payload: RefinedLookupRequest = Body(default_factory=RefinedLookupRequest),
    settings: Settings = Depends(get_app_settings),
    client: httpx.Client = Depends(get_http_client),
    llm: Any = Depends(get_llm_client),
) -> FindMemeResponse:
    return _guarded(lambda: find_meme_refined(
        payload.text, payload.model, settings=settings, client=client, llm=llm
    ))

def build_router(settings: Settings) -> APIRouter:
    router = APIRouter(tags=["memes"])
    if settings.giphy_enabled:
        router.add_api_route("/find_meme/giphy", giphy_lookup, methods=["POST"], response_model=FindMemeResponse)
    if settings.refined_enabled:
        router.add_api_route("/find_meme/refined", refined_lookup, methods=["POST"], response_model=FindMemeResponse)

    primary = giphy_lookup if settings.meme_backend == "giphy" else refined_lookup
    router.add_api_route("/find_meme", primary, methods=["POST"], response_model=FindMemeResponse)
    return router
