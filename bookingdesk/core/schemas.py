from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BotTexts(BaseModel):
    greeting: str = ""
    booking_guide: str = ""
    cancel_guide: str = ""
    fallback: str = ""


class WhatsAppTemplates(BaseModel):
    generic_hello: str = "Ciao {name}!"
    confirm_booking: str = (
        "Ciao {name}! ✅ Il tuo appuntamento è CONFERMATO per {date} alle {time} ({service}). A presto!"
    )
    cancel_booking: str = (
        "Ciao {name}. ❌ Il tuo appuntamento {service} del {date} alle {time} è ANNULLATO. "
        "Se vuoi riprenotare, scrivimi qui."
    )


class FeatureFlags(BaseModel):
    enable_bookings: bool = True
    enable_orders: bool = False
    enable_openai_chat: bool = True


class BusinessConfig(BaseModel):
    """One business variant (barbershop, pizzeria, grooming...) loaded from YAML."""

    slug: str
    headline: str
    kind: str = "barber"
    city: str = ""
    phone: str = ""
    address: str = ""
    whatsapp_phone: str = ""
    services_short: str = ""
    services_list: list[str] = Field(default_factory=list)
    # Extra words that should route a chat question to the services answer.
    service_keywords: list[str] = Field(default_factory=list)
    price_hint: str = ""
    hours_title: str = "Orari"
    hours_lines: list[str] = Field(default_factory=list)
    bot: BotTexts = Field(default_factory=BotTexts)
    whatsapp_templates: WhatsAppTemplates = Field(default_factory=WhatsAppTemplates)
    features: FeatureFlags = Field(default_factory=FeatureFlags)

    def public_view(self) -> dict:
        view = self.model_dump(include={
            "slug", "headline", "kind", "city", "phone", "address", "services_short",
            "services_list", "hours_title", "hours_lines", "features",
        })
        # where the cancel form sends its WhatsApp request
        view["whatsapp_phone"] = self.whatsapp_phone or self.phone
        return view


class BookingRequest(BaseModel):
    """A validated create_booking request, already normalized."""

    name: str
    phone: str
    service: str
    date: str
    time: str
    notes: str = ""
    channel: str = "WEB"
    order_type: Optional[str] = None
    address: str = ""
    party_size: str = ""
    order: str = ""
    payment: str = ""
    allergens: str = ""

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class CancelRequest(BaseModel):
    phone: str
    date: str
    time: str

    def to_payload(self) -> dict:
        return self.model_dump()


class StatusUpdate(BaseModel):
    id: str
    status: str


class AdminRow(BaseModel):
    """Read projection of one backend booking record; unknown columns are kept."""

    model_config = ConfigDict(extra="allow")

    id: str = ""
    name: str = ""
    phone: str = ""
    service: str = ""
    date: str = ""
    time: str = ""
    notes: str = ""
    status: str = ""
    channel: str = ""

    @classmethod
    def from_backend(cls, raw: dict) -> "AdminRow":
        known = cls.model_fields
        cleaned = {
            k: ("" if v is None else str(v)) if k in known else v
            for k, v in raw.items()
        }
        return cls.model_validate(cleaned)
