"""
Purpose:
- Probe search candidates (HEAD) and download the chosen image.
- Encode the downloaded bytes into an ImageArtifact.

Probing is lazy and strictly in order: nothing after the first accepted
candidate is ever requested.
"""

from __future__ import annotations
import base64
import logging
import threading
import time
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional
import httpx
from .schema import ImageArtifact, SearchCandidate
from ..core.errors import NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = "img"

@dataclass
class ProbedImage:
    candidate: SearchCandidate
    mime_type: str

@dataclass
class DownloadedImage:
    content: bytes
    mime_type: str

def _content_type(resp: httpx.Response) -> str:
    return resp.headers.get("content-type", "")

def is_image_type(mime_type: str) -> bool:
    return mime_type.lower().startswith("image/")

def probe_candidate(client: httpx.Client, candidate: SearchCandidate, *,
                    user_agent: str, timeout: float = 5.0) -> Optional[ProbedImage]:
    """HEAD a single candidate. Returns None when it isn't a reachable image."""
    try:
        resp = client.head(candidate.link, headers={"User-Agent": user_agent},
                           timeout=timeout, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.info("Failed to check image %s: %r", candidate.link, e)
        return None
    if not resp.is_success:
        logger.info("Skipping %s: HEAD returned %s", candidate.link, resp.status_code)
        return None
    ctype = _content_type(resp)
    if not is_image_type(ctype):
        logger.info("Skipping non-image content: %s (%s)", ctype or "<none>", candidate.link)
        return None
    return ProbedImage(candidate=candidate, mime_type=ctype)

def iter_image_candidates(client: httpx.Client, candidates: Iterable[SearchCandidate], *,
                          user_agent: str, timeout: float = 5.0) -> Iterator[ProbedImage]:
    for cand in candidates:
        logger.info("Checking image: %s", cand.link)
        probed = probe_candidate(client, cand, user_agent=user_agent, timeout=timeout)
        if probed is not None:
            yield probed

def first_image_candidate(client: httpx.Client, candidates: Iterable[SearchCandidate], *,
                          user_agent: str, timeout: float = 5.0) -> ProbedImage:
    found = next(iter_image_candidates(client, candidates, user_agent=user_agent, timeout=timeout), None)
    if found is None:
        raise NotFoundError("No valid image accessible from search results.")
    logger.info("Found valid image: %s", found.candidate.link)
    return found

def fetch_image(client: httpx.Client, url: str, *, user_agent: Optional[str] = None,
                timeout: float = 20.0, require_image: bool = True,
                default_mime: str = "application/octet-stream") -> DownloadedImage:
    """
    GET the image bytes. With require_image, a non-image Content-Type is an UpstreamError;
    otherwise the declared type is trusted and default_mime fills in when absent.
    """
    headers = {"User-Agent": user_agent} if user_agent else None
    try:
        resp = client.get(url, headers=headers, timeout=timeout, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise UpstreamError(f"Failed to download image: {e}") from e
    if not resp.is_success:
        raise UpstreamError(f"Failed to download image: {resp.status_code} {resp.reason_phrase}")

    mime = _content_type(resp) or default_mime
    if require_image and not is_image_type(mime):
        logger.warning("URL returned non-image content type: %s", mime)
        raise UpstreamError(f"URL returned non-image content: {mime}")
    if not resp.content:
        raise UpstreamError(f"Downloaded image is empty: {url}")
    return DownloadedImage(content=resp.content, mime_type=mime)

# --- Artifact naming -----------------------------------------------------------

_stamp_lock = threading.Lock()
_last_stamp = 0

def _next_stamp() -> int:
    """Millisecond timestamp, bumped when needed so names never repeat in-process."""
    global _last_stamp
    with _stamp_lock:
        now = int(time.time() * 1000)
        _last_stamp = now if now > _last_stamp else _last_stamp + 1
        return _last_stamp

def extension_for(mime_type: str) -> str:
    subtype = mime_type.split("/", 1)[1] if "/" in mime_type else ""
    subtype = subtype.split(";", 1)[0].strip().lower()
    return subtype or DEFAULT_EXTENSION

def encode_artifact(image: DownloadedImage) -> ImageArtifact:
    mime = image.mime_type.split(";", 1)[0].strip() or image.mime_type
    return ImageArtifact(
        name=f"meme_{_next_stamp()}.{extension_for(mime)}",
        base64=base64.b64encode(image.content).decode("ascii"),
        mime_type=mime,
    )
