"""
Purpose:
- Pydantic models for lookup in/out so the API is self-documenting and stable.
- Two explicit request types, one per route, instead of one loose body.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Optional

# --- Requests -----------------------------------------------------------------

class GiphyArgs(BaseModel):
    description: Optional[str] = Field(default=None, description="What the meme should show")

class GiphyLookupRequest(BaseModel):
    """Tool-call shape: {"args": {"description": "..."}}."""
    args: GiphyArgs = Field(default_factory=GiphyArgs)

class RefinedLookupRequest(BaseModel):
    text: Optional[str] = Field(default=None, description="Free-text meme description")
    model: Optional[str] = Field(default=None, description="Chat model used to refine the query")

# --- Search -------------------------------------------------------------------

class SearchCandidate(BaseModel):
    link: str
    title: str = ""

# --- Response -----------------------------------------------------------------

class ImageArtifact(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: Literal["image"] = "image"
    base64: str
    mime_type: str = Field(alias="mimeType")

class FindMemeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    tokens_used: int = Field(default=0, ge=0, alias="tokensUsed")
    artifacts: List[ImageArtifact] = Field(default_factory=list, max_length=1)
    # JSON string of {"url", "title", "query"}
    result: str
