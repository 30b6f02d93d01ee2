"""
Availability API — free slots for a day, computed by the booking backend.

    GET  /api/availability?date=2025-03-10&mode=BOOKING
    POST /api/availability  {"date": "2025-03-10", "mode": "REQUEST"}
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from bookingdesk.api.deps import get_script_client
from bookingdesk.api.responses import error_body, no_store_json, proxy_failure, read_json
from bookingdesk.core.normalizers import MODE_REQUEST, normalize_date, normalize_mode
from bookingdesk.core.validators import is_iso_date
from bookingdesk.integrations.google_script import GoogleScriptClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["availability"])


@router.get("/availability")
async def availability_get(
    request: Request,
    client: GoogleScriptClient = Depends(get_script_client),
) -> JSONResponse:
    return await _availability(request, {}, client)


@router.post("/availability")
async def availability_post(
    request: Request,
    client: GoogleScriptClient = Depends(get_script_client),
) -> JSONResponse:
    body = await read_json(request)
    return await _availability(request, body, client)


async def _availability(request: Request, body: dict, client: GoogleScriptClient) -> JSONResponse:
    query = request.query_params
    raw_date = str(body.get("date") or "").strip() or query.get("date", "").strip()
    date = normalize_date(raw_date)
    mode = normalize_mode(str(body.get("mode") or "").strip() or query.get("mode", ""))

    if not date or not is_iso_date(date):
        return no_store_json(
            error_body("Parametro 'date' mancante o non valido (YYYY-MM-DD)."),
            status_code=400,
        )

    result = await client.send(
        "get_availability",
        {"date": date, "mode": mode, "requestMode": mode == MODE_REQUEST},
    )
    if not result.ok:
        return proxy_failure(result, "Errore disponibilità.")

    slots = result.data.get("freeSlots")
    free_slots = [str(s) for s in slots] if isinstance(slots, list) else []
    logger.debug("Availability %s/%s: %d free slots", date, mode, len(free_slots))

    return no_store_json({"ok": True, "date": date, "mode": mode, "freeSlots": free_slots})
