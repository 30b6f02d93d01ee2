"""
Input normalizers — turn what people type into the canonical forms the
booking backend expects.

    normalize_date("10/03/2025") -> "2025-03-10"
    normalize_time("9.30")       -> "09:30"
    normalize_phone("0039 333-1234567") -> "+393331234567"

All functions are total: they never raise and return the (trimmed) input
when it cannot be recognised, leaving the rejection to the validators.
"""

from __future__ import annotations

import re
from typing import Any

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_IT_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")
_SEP_TIME_RE = re.compile(r"^(\d{1,2})[.,](\d{2})$")
_HOUR_RE = re.compile(r"^(\d{1,2})$")

MODE_BOOKING = "BOOKING"
MODE_REQUEST = "REQUEST"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_date(value: Any) -> str:
    s = _text(value)
    if _ISO_DATE_RE.match(s):
        return s
    m = _IT_DATE_RE.match(s)
    if m:
        day, month, year = m.groups()
        return f"{year}-{month}-{day}"
    return s


def normalize_time(value: Any) -> str:
    s = _text(value)
    if _TIME_RE.match(s):
        return s
    m = _SEP_TIME_RE.match(s)
    if m:
        return f"{m.group(1).zfill(2)}:{m.group(2)}"
    m = _HOUR_RE.match(s)
    if m:
        return f"{m.group(1).zfill(2)}:00"
    return s


def normalize_phone(value: Any) -> str:
    """Keep digits and a single leading '+'; an international '00' prefix becomes '+'.

    A value with no digits at all normalizes to "".
    """
    s = re.sub(r"[^\d+]", "", _text(value))
    if s.startswith("00"):
        s = "+" + s[2:]
    leading_plus = s.startswith("+")
    digits = s.replace("+", "")
    if not digits:
        return ""
    return f"+{digits}" if leading_plus else digits


def normalize_mode(value: Any) -> str:
    """Availability flow: REQUEST when asked for explicitly, BOOKING otherwise."""
    return MODE_REQUEST if _text(value).upper() == MODE_REQUEST else MODE_BOOKING


def clamp_int(value: Any, lo: int, hi: int, default: int) -> int:
    try:
        n = int(float(_text(value))) if _text(value) else default
    except (TypeError, ValueError, OverflowError):
        return lo
    return min(max(n, lo), hi)
