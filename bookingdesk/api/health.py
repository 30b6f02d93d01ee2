from __future__ import annotations

from fastapi import APIRouter, Depends

from bookingdesk.config import Settings, get_settings


router = APIRouter()


@router.get("/health")
async def health(settings: Settings = Depends(get_settings)) -> dict:
    """Liveness plus which outside services this deployment can reach."""
    return {
        "status": "ok",
        "business": settings.business_slug,
        "backend_configured": bool(settings.google_script_url.strip() and settings.google_script_secret.strip()),
        "chat_provider_configured": bool(settings.openai_api_key),
    }
