"""
Google Script Integration — the spreadsheet-backed booking backend.

The backend is an Apps Script web app that owns every booking, computes free
slots and detects double bookings. We talk to it with one JSON POST per
action:

    {"action": "get_availability", "date": "2025-03-10", ..., "secret": "..."}

and get back JSON with at least {"ok": bool}, optionally "_status" (the
backend's own HTTP-like status, since Apps Script always answers 200),
"conflict", "error" and "details".
"""

from __future__ import annotations

import json
import math
import logging
from typing import Any

import httpx

from bookingdesk.config import Settings
from bookingdesk.integrations.results import (
    ApplicationError,
    ConfigError,
    ParseError,
    ProxyOk,
    ProxyResult,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15.0
MAX_RAW_DETAILS = 800


class GoogleScriptClient:
    """
    Proxy client for the booking backend.

    Config:
        url: Apps Script web app URL (GOOGLE_SCRIPT_URL)
        secret: shared secret added to every request body (GOOGLE_SCRIPT_SECRET)
        timeout: seconds before the call is abandoned (default 15)
        transport: optional httpx transport, used by tests
    """

    def __init__(
        self,
        url: str,
        secret: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = (url or "").strip()
        self.secret = (secret or "").strip()
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleScriptClient":
        return cls(
            url=settings.google_script_url,
            secret=settings.google_script_secret,
            timeout=settings.google_script_timeout,
        )

    async def send(self, action: str, payload: dict) -> ProxyResult:
        """Run one backend action. Never raises; failures come back as values."""
        if not self.url:
            return ConfigError("GOOGLE_SCRIPT_URL mancante in env.")
        if not self.secret:
            return ConfigError("GOOGLE_SCRIPT_SECRET mancante in env.")

        body = {**payload, "action": action, "secret": self.secret}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                resp = await client.post(
                    self.url,
                    json=body,
                    headers={"Cache-Control": "no-store"},
                )
                text = resp.text
        except httpx.TimeoutException:
            logger.warning("Google Script %s timed out after %ss", action, self.timeout)
            return TransportError("timeout", "Timeout chiamata Google Script.")
        except httpx.HTTPError as e:
            logger.warning("Google Script %s network error: %s", action, e)
            return TransportError("network", f"Errore chiamata Google Script: {e}")

        result = self._interpret(resp.status_code, text)
        if result.ok:
            logger.info("Google Script %s -> %s", action, result.http_status)
        else:
            logger.warning("Google Script %s failed (%s): %s", action, result.http_status, result.error)
        return result

    @staticmethod
    def _interpret(transport_status: int, text: str) -> ProxyResult:
        try:
            data = json.loads(text)
        except ValueError:
            return ParseError(
                raw=text[:MAX_RAW_DETAILS],
                http_status=_failure_status(None, transport_status, conflict=False),
            )

        if not isinstance(data, dict):
            return ParseError(
                raw=text[:MAX_RAW_DETAILS],
                http_status=_failure_status(None, transport_status, conflict=False),
            )

        embedded = _embedded_status(data.get("_status"))
        effective = embedded if embedded is not None else transport_status

        if data.get("ok") is True and 200 <= effective < 300:
            return ProxyOk(data=data, http_status=effective)

        conflict = data.get("conflict") is True
        return ApplicationError(
            http_status=_failure_status(embedded, transport_status, conflict),
            message=str(data.get("error") or "Errore dal Google Script."),
            conflict=conflict,
            details=data.get("details"),
        )


def _embedded_status(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # json.loads accepts NaN, Infinity and 1e400
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _failure_status(embedded: int | None, transport_status: int, conflict: bool) -> int:
    """An error _status (>= 400) wins; then a conflict flag means 409; then a transport error status; else 500."""
    if embedded is not None and embedded >= 400:
        return embedded
    if conflict:
        return 409
    if transport_status >= 400:
        return transport_status
    return 500
