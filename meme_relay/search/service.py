"""
Purpose:
- The "service" orchestrates query -> search -> select -> fetch -> encode -> response.
- Two pipelines: Giphy top-hit (simple) and OpenAI-refined Google image search.
- Raises MemeLookupError subclasses; the API layer maps them to HTTP statuses.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Optional
import httpx
from .schema import FindMemeResponse, SearchCandidate
from .giphy import giphy_top_result
from .google_cse import google_search_images
from .fetcher import DownloadedImage, encode_artifact, fetch_image, first_image_candidate
from ..core.errors import ValidationError
from ..core.settings import Settings
from ..services.query_gen import refine_query

logger = logging.getLogger(__name__)

GIPHY_DEFAULT_MIME = "image/gif"

def _require_text(value: Optional[str], field: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"Missing {field} parameter")
    return text

def _envelope(image: DownloadedImage, candidate: SearchCandidate, query: str, tokens_used: int) -> FindMemeResponse:
    meta = {"url": candidate.link, "title": candidate.title, "query": query}
    return FindMemeResponse(
        ok=True,
        tokens_used=tokens_used,
        artifacts=[encode_artifact(image)],
        result=json.dumps(meta),
    )

def find_meme_giphy(description: Optional[str], *, settings: Settings, client: httpx.Client) -> FindMemeResponse:
    query = _require_text(description, "description")
    logger.info("Searching Giphy for meme: %r", query)

    top = giphy_top_result(
        client,
        query,
        api_key=settings.giphy_api_key or "",
        limit=settings.giphy_limit,
        rating=settings.giphy_rating,
        timeout=settings.search_timeout,
    )
    image = fetch_image(
        client,
        top.link,
        timeout=settings.download_timeout,
        require_image=False,
        default_mime=GIPHY_DEFAULT_MIME,
    )
    return _envelope(image, top, query, tokens_used=0)

def find_meme_refined(text: Optional[str], model: Optional[str], *, settings: Settings,
                      client: httpx.Client, llm: Any) -> FindMemeResponse:
    raw = _require_text(text, "text")
    model = model or settings.default_model
    logger.info("Searching for meme: %r using model: %s", raw, model)

    refined = refine_query(llm, raw, model)
    candidates = google_search_images(
        client,
        refined.query,
        api_key=settings.google_api_key or "",
        cx=settings.google_cx or "",
        num=settings.google_num_results,
        safe=settings.google_safe,
        timeout=settings.search_timeout,
    )
    chosen = first_image_candidate(
        client, candidates, user_agent=settings.user_agent, timeout=settings.probe_timeout
    )
    image = fetch_image(
        client,
        chosen.candidate.link,
        user_agent=settings.user_agent,
        timeout=settings.download_timeout,
        require_image=True,
    )
    return _envelope(image, chosen.candidate, refined.query, tokens_used=refined.tokens_used)
