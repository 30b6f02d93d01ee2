from __future__ import annotations

from typing import Any


class BookingDeskError(Exception):
    """Base error rendered to the browser as {"ok": false, "error": ...}."""

    status_code: int = 500

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationFailed(BookingDeskError):
    status_code = 400


class NotAuthorized(BookingDeskError):
    status_code = 401

    def __init__(self, message: str = "Non autorizzato."):
        super().__init__(message)
