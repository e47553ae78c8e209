"""
Purpose:
- Turn a free-text meme description into one image-search query via OpenAI chat completions.
- Report the tokens the call consumed so the response can pass them through.

Design:
- Short, fixed system prompt; user text goes in verbatim.
- Empty model output falls back to the user's own text.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

SYSTEM_HINT = (
    "You are a meme expert. Convert the user input into a specific Google Image Search "
    "query to find the best matching meme image. Return ONLY the query string, nothing else. "
    "Do not use quotes."
)

@dataclass
class RefinedQuery:
    query: str
    tokens_used: int = 0

def refine_query(llm: Any, text: str, model: str) -> RefinedQuery:
    """
    `llm` is an openai.OpenAI client (or anything with the same chat.completions.create shape).
    Errors from the SDK propagate; the API layer turns them into a 500.
    """
    resp = llm.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": SYSTEM_HINT},
            {"role": "user", "content": text},
        ],
    )
    content = ""
    if resp.choices:
        content = (resp.choices[0].message.content or "").strip()
    usage = getattr(resp, "usage", None)
    tokens = (getattr(usage, "total_tokens", 0) or 0) if usage is not None else 0
    query = content or text
    logger.info("Refined query: %r (%d tokens)", query, tokens)
    return RefinedQuery(query=query, tokens_used=tokens)
