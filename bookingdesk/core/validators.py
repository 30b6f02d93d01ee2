"""
Request validators. Each one returns a normalized request model or raises
ValidationFailed naming the first rule that was broken.
"""

from __future__ import annotations

import re
from typing import Any

from bookingdesk.core.errors import ValidationFailed
from bookingdesk.core.normalizers import normalize_date, normalize_phone, normalize_time
from bookingdesk.core.schemas import BookingRequest, CancelRequest, StatusUpdate
from bookingdesk.core.status import ALLOWED_STATUS_INPUTS

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")

ORDER_PICKUP = "ASPORTO"
ORDER_DELIVERY = "CONSEGNA"
ORDER_TABLE = "TAVOLO"
ORDER_TYPES = (ORDER_PICKUP, ORDER_DELIVERY, ORDER_TABLE)

# English field name -> legacy Italian aliases still sent by older pages.
_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("nome",),
    "phone": ("telefono",),
    "service": ("servizio",),
    "date": ("data", "dateISO"),
    "time": ("ora",),
    "notes": ("note",),
    "channel": ("canale",),
    "order_type": ("tipo",),
    "address": ("indirizzo",),
    "party_size": ("persone",),
    "order": ("ordine",),
    "payment": ("pagamento",),
    "allergens": ("allergeni",),
}


def is_iso_date(value: Any) -> bool:
    return bool(_ISO_DATE_RE.match(str(value or "").strip()))


def is_time(value: Any) -> bool:
    return bool(_TIME_RE.match(str(value or "").strip()))


def field(payload: dict, name: str) -> str:
    """Read a field by its English name or any legacy alias, trimmed."""
    for key in (name, *_ALIASES.get(name, ())):
        value = payload.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def check_honeypot(payload: dict) -> None:
    if str(payload.get("honeypot") or "").strip():
        raise ValidationFailed("Richiesta non valida.")


def _check_date_time(date: str, time: str) -> None:
    if not is_iso_date(date):
        raise ValidationFailed("Formato data non valido (YYYY-MM-DD o DD/MM/YYYY).")
    if not is_time(time):
        raise ValidationFailed("Formato ora non valido (HH:mm).")


def validate_create_booking(payload: dict) -> BookingRequest:
    check_honeypot(payload)

    name = field(payload, "name")
    phone = normalize_phone(field(payload, "phone"))
    order_type = field(payload, "order_type").upper() or None
    service = field(payload, "service") or (order_type or "")
    date = normalize_date(field(payload, "date"))
    time = normalize_time(field(payload, "time"))

    if not name or not phone or not service or not date or not time:
        raise ValidationFailed("Campi obbligatori mancanti (nome, telefono, servizio, data, ora).")
    _check_date_time(date, time)

    address = field(payload, "address")
    party_size = field(payload, "party_size")
    order = field(payload, "order")

    if order_type is not None:
        if order_type not in ORDER_TYPES:
            raise ValidationFailed("Tipo non valido.")
        if order_type == ORDER_DELIVERY and not address:
            raise ValidationFailed("Per la consegna serve l’indirizzo.")
        if order_type == ORDER_TABLE and not party_size:
            raise ValidationFailed("Per il tavolo serve il numero persone.")
        if order_type in (ORDER_PICKUP, ORDER_DELIVERY) and not order:
            raise ValidationFailed("Per asporto/consegna serve l’ordine.")

    return BookingRequest(
        name=name,
        phone=phone,
        service=service,
        date=date,
        time=time,
        notes=field(payload, "notes"),
        channel=(field(payload, "channel") or "WEB").upper(),
        order_type=order_type,
        address=address if order_type == ORDER_DELIVERY else "",
        party_size=party_size if order_type == ORDER_TABLE else "",
        order=order,
        payment=field(payload, "payment"),
        allergens=field(payload, "allergens"),
    )


def validate_cancel_booking(payload: dict) -> CancelRequest:
    check_honeypot(payload)

    phone = normalize_phone(field(payload, "phone"))
    date = normalize_date(field(payload, "date"))
    time = normalize_time(field(payload, "time"))

    if not phone or not date or not time:
        raise ValidationFailed("Campi obbligatori mancanti (telefono, data, ora).")
    _check_date_time(date, time)

    return CancelRequest(phone=phone, date=date, time=time)


def validate_status_update(payload: dict) -> StatusUpdate:
    booking_id = str(payload.get("id") or "").strip()
    status = str(payload.get("status") or "").strip().upper()

    if not booking_id:
        raise ValidationFailed("ID mancante.")
    if status not in ALLOWED_STATUS_INPUTS:
        raise ValidationFailed("Status non valido. Usa: RICHIESTA / CONFERMATA / ANNULLATA")

    return StatusUpdate(id=booking_id, status=status)
