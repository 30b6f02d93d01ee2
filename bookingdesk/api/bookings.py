"""
Bookings API — customer-side create and cancel, forwarded to the booking backend.

    POST /api/bookings {"action": "create_booking", "name": ..., "phone": ..., ...}
    POST /api/bookings {"action": "cancel_booking", "phone": ..., "date": ..., "time": ...}
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from bookingdesk.api.deps import get_script_client
from bookingdesk.api.responses import error_body, no_store_json, proxy_failure, read_json
from bookingdesk.core.validators import validate_cancel_booking, validate_create_booking
from bookingdesk.integrations.google_script import GoogleScriptClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bookings"])

ACTION_CREATE = "create_booking"
ACTION_CANCEL = "cancel_booking"


@router.get("/bookings")
async def bookings_ping() -> JSONResponse:
    return no_store_json({"ok": True})


@router.post("/bookings")
async def bookings(
    request: Request,
    client: GoogleScriptClient = Depends(get_script_client),
) -> JSONResponse:
    body = await read_json(request)
    action = str(body.get("action") or ACTION_CREATE).strip().lower()

    if action == ACTION_CREATE:
        booking = validate_create_booking(body)
        result = await client.send(ACTION_CREATE, booking.to_payload())
        if not result.ok:
            return proxy_failure(result, "Errore durante la prenotazione.")

        logger.info("Booking created for %s %s (%s)", booking.date, booking.time, booking.service)
        out = {"ok": True, "message": "Prenotazione registrata."}
        if result.data.get("id") is not None:
            out["id"] = result.data["id"]
        return no_store_json(out)

    if action == ACTION_CANCEL:
        cancel = validate_cancel_booking(body)
        result = await client.send(ACTION_CANCEL, cancel.to_payload())
        if not result.ok:
            return proxy_failure(result, "Errore durante l’annullamento.")

        logger.info("Booking cancelled for %s %s", cancel.date, cancel.time)
        return no_store_json({"ok": True, "message": result.data.get("message") or "Prenotazione annullata."})

    return no_store_json(error_body("Azione non valida."), status_code=400)
