"""
Purpose:
- Query Google Custom Search JSON API in image mode.
- Return ranked candidates (link + title) in the order Google gave them.

Notes:
- Requires: settings.google_api_key, settings.google_cx (from .env or env)
- num is capped at 10 by the API; we ask for a handful so dead links can be skipped.
"""

from __future__ import annotations
import logging
from typing import Dict, List
import httpx
from .schema import SearchCandidate
from ..core.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

GOOGLE_ENDPOINT = "https://www.googleapis.com/customsearch/v1"

def _api_params(query: str, api_key: str, cx: str, num: int, safe: str) -> Dict[str, str]:
    return {
        "key": api_key,
        "cx": cx,
        "q": query,
        "searchType": "image",
        "num": str(min(num, 10)),
        "safe": safe,
    }

def google_search_images(
    client: httpx.Client,
    query: str,
    *,
    api_key: str,
    cx: str,
    num: int = 5,
    safe: str = "off",
    timeout: float = 10.0,
) -> List[SearchCandidate]:
    params = _api_params(query, api_key, cx, num, safe)
    try:
        r = client.get(GOOGLE_ENDPOINT, params=params, timeout=timeout)
    except httpx.HTTPError as e:
        raise UpstreamError(f"Google Search API failed: {e}") from e
    if not r.is_success:
        logger.warning("Google Search API returned %s for %r", r.status_code, query)
        raise UpstreamError(f"Google Search API failed: {r.status_code} {r.reason_phrase}")

    items = r.json().get("items") or []
    if not items:
        raise NotFoundError("No meme found for this description.")

    out: List[SearchCandidate] = []
    for it in items:
        link = it.get("link")
        if not link:
            continue
        out.append(SearchCandidate(link=link, title=it.get("title") or ""))
    return out
