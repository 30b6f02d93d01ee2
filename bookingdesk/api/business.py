from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from bookingdesk.api.deps import get_business
from bookingdesk.api.responses import no_store_json
from bookingdesk.core.schemas import BusinessConfig

router = APIRouter(prefix="/api", tags=["business"])


@router.get("/business")
async def business_info(business: BusinessConfig = Depends(get_business)) -> JSONResponse:
    """Public business details for the landing page and the booking form."""
    return no_store_json({"ok": True, "business": business.public_view()})
