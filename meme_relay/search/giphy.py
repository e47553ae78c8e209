"""
Purpose:
- Keyword search against the Giphy GIF search endpoint.
- Only the top hit matters; we return it as a candidate with its original-size URL.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional
import httpx
from .schema import SearchCandidate
from ..core.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

GIPHY_ENDPOINT = "https://api.giphy.com/v1/gifs/search"

def _image_url(item: Dict[str, Any]) -> Optional[str]:
    images = item.get("images") or {}
    for variant in ("original", "downsized"):
        url = (images.get(variant) or {}).get("url")
        if url:
            return url
    return None

def giphy_top_result(
    client: httpx.Client,
    query: str,
    *,
    api_key: str,
    limit: int = 1,
    rating: str = "pg-13",
    timeout: float = 10.0,
) -> SearchCandidate:
    """
    Search Giphy and return the first hit.
    Raises UpstreamError on a failed call, NotFoundError when nothing usable comes back.
    """
    params = {"api_key": api_key, "q": query, "limit": str(limit), "rating": rating}
    try:
        r = client.get(GIPHY_ENDPOINT, params=params, timeout=timeout)
    except httpx.HTTPError as e:
        raise UpstreamError(f"Giphy search failed: {e}") from e
    if not r.is_success:
        logger.warning("Giphy search returned %s for %r", r.status_code, query)
        raise UpstreamError(f"Giphy search failed: {r.status_code} {r.reason_phrase}")

    data = r.json().get("data") or []
    if not data:
        raise NotFoundError("No meme found for this description.")

    top = data[0]
    url = _image_url(top)
    if not url:
        raise NotFoundError("Top Giphy result has no image URL.")
    return SearchCandidate(link=url, title=top.get("title") or "")
