# Liveness probe plus an ops view of library versions and which credentials are configured.

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from ..core.settings import Settings
from .deps import get_app_settings
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

@router.get("/health", response_class=PlainTextResponse)
def health():
    return "OK"

@router.get("/healthz")
def healthz(settings: Settings = Depends(get_app_settings)):
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "httpx": _ver("httpx"),
            "openai": _ver("openai"),
            "pydantic_settings": _ver("pydantic_settings"),
        },
        "backend": settings.meme_backend,
        "routes": {
            "giphy": settings.giphy_enabled,
            "refined": settings.refined_enabled,
        },
        "env_keys_present": {
            "GIPHY_API_KEY": bool(settings.giphy_api_key),
            "GOOGLE_API_KEY": bool(settings.google_api_key),
            "GOOGLE_CX": bool(settings.google_cx),
            "OPENAI_API_KEY": bool(settings.openai_api_key),
        },
    }
