"""
Purpose:
- FastAPI dependencies that hand route handlers the objects built once in create_app().
"""

from typing import Any
import httpx
from fastapi import Request
from ..core.settings import Settings

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_http_client(request: Request) -> httpx.Client:
    return request.app.state.http_client

def get_llm_client(request: Request) -> Any:
    return request.app.state.llm_client
