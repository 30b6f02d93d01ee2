"""
FastAPI dependencies shared by the routers.

Everything is derived from one Settings object so tests can swap any piece
through `app.dependency_overrides`.
"""

from __future__ import annotations

import hmac
from functools import lru_cache

from fastapi import Depends, Request

from bookingdesk.config import Settings, get_settings
from bookingdesk.core.brain import Brain
from bookingdesk.core.business_loader import load_business_config
from bookingdesk.core.errors import NotAuthorized
from bookingdesk.core.schemas import BusinessConfig
from bookingdesk.integrations.google_script import GoogleScriptClient


def get_script_client(settings: Settings = Depends(get_settings)) -> GoogleScriptClient:
    return GoogleScriptClient.from_settings(settings)


def get_business(settings: Settings = Depends(get_settings)) -> BusinessConfig:
    return _cached_business(settings.businesses_dir, settings.business_slug)


@lru_cache(maxsize=8)
def _cached_business(businesses_dir: str, slug: str) -> BusinessConfig:
    return load_business_config(businesses_dir, slug)


def get_brain(settings: Settings = Depends(get_settings)) -> Brain | None:
    return Brain.from_settings(settings)


def is_logged_in(request: Request, settings: Settings) -> bool:
    expected = settings.admin_session_secret.strip()
    value = request.cookies.get(settings.admin_cookie_name, "")
    if not expected or not value:
        return False
    return hmac.compare_digest(value.encode("utf-8"), expected.encode("utf-8"))


def require_admin(request: Request, settings: Settings = Depends(get_settings)) -> None:
    if not is_logged_in(request, settings):
        raise NotAuthorized()
