"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Frozen once built; the app factory receives it explicitly.
- Missing credentials for the selected backend fail at startup, not per request.
"""

from functools import lru_cache
from typing import List, Literal, Optional
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for Uvicorn")
    port: int = Field(default=8080, description="Port for Uvicorn (PORT)")
    log_level: str = Field(default="INFO")

    # CORS
    cors_allow_origins: List[str] = Field(default=["*"], description="Allowed origins for browser apps")

    # Which backend answers POST /find_meme
    meme_backend: Literal["giphy", "google"] = Field(default="google")

    # Giphy (simple variant)
    giphy_api_key: Optional[str] = None
    giphy_limit: int = Field(default=1, ge=1, le=50)
    giphy_rating: str = Field(default="pg-13")

    # Google Custom Search (refined variant): GOOGLE_API_KEY, GOOGLE_CX
    google_api_key: Optional[str] = None
    google_cx: Optional[str] = None
    google_num_results: int = Field(default=5, ge=1, le=10)
    google_safe: Literal["active", "off"] = Field(default="off")

    # OpenAI query refinement
    openai_api_key: Optional[str] = None
    default_model: str = Field(default="gpt-4o")

    # ---- Outbound timeouts (seconds) ----
    search_timeout: float = Field(default=10.0, gt=0)
    probe_timeout: float = Field(default=5.0, gt=0)
    download_timeout: float = Field(default=20.0, gt=0)
    llm_timeout: float = Field(default=30.0, gt=0)

    user_agent: str = Field(default=BROWSER_USER_AGENT)

    @property
    def giphy_enabled(self) -> bool:
        return bool(self.giphy_api_key)

    @property
    def refined_enabled(self) -> bool:
        return bool(self.google_api_key and self.google_cx and self.openai_api_key)

    @model_validator(mode="after")
    def _require_backend_keys(self) -> "Settings":
        if self.meme_backend == "giphy":
            missing = [] if self.giphy_api_key else ["GIPHY_API_KEY"]
        else:
            missing = [
                name for name, value in (
                    ("GOOGLE_API_KEY", self.google_api_key),
                    ("GOOGLE_CX", self.google_cx),
                    ("OPENAI_API_KEY", self.openai_api_key),
                ) if not value
            ]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
