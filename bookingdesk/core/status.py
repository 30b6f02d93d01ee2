"""
Booking status vocabulary.

The admin panel says RICHIESTA where the spreadsheet backend still stores
NUOVA. `BookingStatus.value` is the UI token, `BookingStatus.wire` the
backend token. The two boundary helpers go through the enum and pass any
token it does not know through unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


def _token(value: Any) -> str:
    return str(value if value is not None else "").strip().upper()


class BookingStatus(str, Enum):
    RICHIESTA = "RICHIESTA"
    CONFERMATA = "CONFERMATA"
    ANNULLATA = "ANNULLATA"

    @property
    def wire(self) -> str:
        return "NUOVA" if self is BookingStatus.RICHIESTA else self.value

    @classmethod
    def parse(cls, value: Any) -> "BookingStatus | None":
        """UI token -> status, or None when the token is not ours."""
        token = _token(value)
        return next((s for s in cls if s.value == token), None)

    @classmethod
    def from_wire(cls, value: Any) -> "BookingStatus | None":
        """Backend token -> status, or None when the token is not ours."""
        token = _token(value)
        return next((s for s in cls if s.wire == token), None)


# Accepted from the admin panel; NUOVA is tolerated from older clients.
ALLOWED_STATUS_INPUTS = frozenset({*(s.value for s in BookingStatus), *(s.wire for s in BookingStatus)})


def to_backend_status(value: Any) -> str:
    status = BookingStatus.parse(value)
    return status.wire if status is not None else _token(value)


def to_ui_status(value: Any) -> str:
    status = BookingStatus.from_wire(value)
    return status.value if status is not None else _token(value)
