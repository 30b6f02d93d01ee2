from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def no_store_json(content: Any, status_code: int = 200) -> JSONResponse:
    """JSON response that browsers and proxies must never cache."""
    return JSONResponse(content=content, status_code=status_code, headers=NO_CACHE_HEADERS)


def error_body(error: str, details: Any = None, **extra: Any) -> dict:
    body: dict[str, Any] = {"ok": False, "error": error}
    body.update(extra)
    if details is not None:
        body["details"] = details
    return body


async def read_json(request: Request) -> dict:
    """Request body as a dict; anything unparsable counts as an empty body."""
    try:
        data = await request.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def proxy_failure(result, default_error: str) -> JSONResponse:
    """Render a failed ProxyResult; a conflict (slot taken) is surfaced as such."""
    extra = {"conflict": True} if result.conflict else {}
    return no_store_json(
        error_body(result.error or default_error, result.details, **extra),
        status_code=result.http_status or 500,
    )
