"""
Admin API — booking list and status changes for the admin panel.

All booking endpoints need the admin session cookie. The cookie holds the
configured ADMIN_SESSION_SECRET and is compared for exact equality.
"""

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from bookingdesk.api.deps import get_business, get_script_client, is_logged_in, require_admin
from bookingdesk.api.responses import NO_CACHE_HEADERS, error_body, no_store_json, proxy_failure, read_json
from bookingdesk.config import Settings, get_settings
from bookingdesk.core.normalizers import clamp_int
from bookingdesk.core.schemas import AdminRow, BusinessConfig
from bookingdesk.core.status import to_backend_status, to_ui_status
from bookingdesk.core.validators import validate_status_update
from bookingdesk.integrations.google_script import GoogleScriptClient
from bookingdesk.integrations.whatsapp import booking_links

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

DEFAULT_LIST_LIMIT = 300
MAX_LIST_LIMIT = 1000
SESSION_MAX_AGE = 60 * 60 * 24 * 30


@router.get("/bookings", dependencies=[Depends(require_admin)])
async def list_bookings(
    request: Request,
    client: GoogleScriptClient = Depends(get_script_client),
    business: BusinessConfig = Depends(get_business),
) -> JSONResponse:
    limit = clamp_int(request.query_params.get("limit"), 1, MAX_LIST_LIMIT, DEFAULT_LIST_LIMIT)

    result = await client.send("admin_list", {"limit": limit})
    if not result.ok:
        return proxy_failure(result, "Errore admin_list.")

    raw_rows = result.data.get("rows")
    rows: list[dict] = []
    for raw in raw_rows if isinstance(raw_rows, list) else []:
        if not isinstance(raw, dict):
            continue
        row = AdminRow.from_backend(raw).model_dump()
        row["status"] = to_ui_status(row.get("status"))
        row.update(booking_links(row, business.whatsapp_templates))
        rows.append(row)

    count = result.data.get("count")
    return no_store_json({"ok": True, "rows": rows, "count": count if count is not None else len(rows)})


@router.post("/bookings", dependencies=[Depends(require_admin)])
async def set_booking_status(
    request: Request,
    client: GoogleScriptClient = Depends(get_script_client),
) -> JSONResponse:
    update = validate_status_update(await read_json(request))
    backend_status = to_backend_status(update.status)

    result = await client.send("admin_set_status", {"id": update.id, "status": backend_status})
    if not result.ok:
        return proxy_failure(result, "Errore admin_set_status.")

    logger.info("Booking %s set to %s", update.id, backend_status)
    return no_store_json({
        "ok": True,
        "status": to_ui_status(result.data.get("status") or backend_status),
        "message": result.data.get("message") or "Stato aggiornato.",
    })


@router.post("/login")
async def login(request: Request, settings: Settings = Depends(get_settings)) -> JSONResponse:
    body = await read_json(request)
    password = str(body.get("password") or "")
    expected = settings.admin_password
    session = settings.admin_session_secret.strip()

    if not expected or not session:
        return no_store_json(error_body("Login admin non configurato."), status_code=500)
    if not hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Failed admin login attempt")
        return no_store_json(error_body("Password errata."), status_code=401)

    response = no_store_json({"ok": True})
    _set_session_cookie(response, settings, session, SESSION_MAX_AGE)
    return response


@router.get("/me")
async def me(request: Request, settings: Settings = Depends(get_settings)) -> JSONResponse:
    return no_store_json({"ok": True, "loggedIn": is_logged_in(request, settings)})


@router.post("/logout")
async def logout_post(settings: Settings = Depends(get_settings)) -> JSONResponse:
    response = no_store_json({"ok": True})
    _clear_session_cookie(response, settings)
    return response


@router.get("/logout")
async def logout_get(settings: Settings = Depends(get_settings)) -> RedirectResponse:
    response = RedirectResponse(url=settings.admin_login_path, status_code=303, headers=NO_CACHE_HEADERS)
    _clear_session_cookie(response, settings)
    return response


def _set_session_cookie(response: Response, settings: Settings, value: str, max_age: int, expires=None) -> None:
    response.set_cookie(
        key=settings.admin_cookie_name,
        value=value,
        max_age=max_age,
        expires=expires,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def _clear_session_cookie(response: Response, settings: Settings) -> None:
    _set_session_cookie(
        response,
        settings,
        value="",
        max_age=0,
        expires=datetime(1970, 1, 1, tzinfo=timezone.utc),
    )
