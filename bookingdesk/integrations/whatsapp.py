"""
WhatsApp deep links (https://wa.me/<number>?text=<message>) for the admin panel.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from bookingdesk.core.normalizers import normalize_phone
from bookingdesk.core.schemas import WhatsAppTemplates

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def wa_number(phone: str) -> str:
    """wa.me accepts digits only, without the leading '+'."""
    return normalize_phone(phone).lstrip("+")


def build_whatsapp_url(phone: str, text: str) -> str:
    return f"https://wa.me/{wa_number(phone)}?text={quote(text, safe='')}"


def to_it_date(iso: str) -> str:
    s = (iso or "").strip()
    m = _ISO_DATE_RE.match(s)
    if not m:
        return s or "—"
    year, month, day = m.groups()
    return f"{day}/{month}/{year}"


def render_template(template: str, *, name: str, date: str, time: str, service: str) -> str:
    values = {
        "name": name.strip(),
        "date": to_it_date(date),
        "time": time or "—",
        "service": service or "appuntamento",
    }
    out = template
    for key, value in values.items():
        out = out.replace("{" + key + "}", value)
    return out


def booking_links(row: dict, templates: WhatsAppTemplates) -> dict[str, str]:
    """Hello/confirm/cancel links for one admin row; empty when the row has no phone."""
    phone = str(row.get("phone") or "")
    if not wa_number(phone):
        return {}

    fields = {
        "name": str(row.get("name") or ""),
        "date": str(row.get("date") or ""),
        "time": str(row.get("time") or ""),
        "service": str(row.get("service") or ""),
    }
    return {
        "whatsappHelloUrl": build_whatsapp_url(phone, render_template(templates.generic_hello, **fields)),
        "whatsappConfirmUrl": build_whatsapp_url(phone, render_template(templates.confirm_booking, **fields)),
        "whatsappCancelUrl": build_whatsapp_url(phone, render_template(templates.cancel_booking, **fields)),
    }
