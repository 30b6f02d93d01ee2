"""
Intent Router — picks a canned-reply intent by matching keywords.

Usage:
    router = IntentRouter.for_business(business)
    router.detect("vorrei prenotare")
    # → "BOOKING"
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bookingdesk.core.schemas import BusinessConfig


@dataclass(frozen=True)
class Intent:
    id: str
    markers: tuple[str, ...]
    priority: int = 50


DEFAULT_INTENTS: tuple[Intent, ...] = (
    Intent("BOOKING", ("prenot", "appunt"), priority=10),
    Intent("CANCEL", ("annull", "cancell"), priority=20),
    Intent("HOURS", ("orari", "apert", "chius"), priority=30),
    Intent("PRICE", ("prezzo", "costa", "quanto"), priority=40),
    Intent("SERVICES", ("servizi", "fate"), priority=50),
    Intent("CONTACT", ("telefono", "contatt"), priority=60),
)


@dataclass
class IntentRouter:
    """
    Intents are checked in priority order (lower number = higher priority).
    The first one with a marker contained in the text wins; otherwise fallback.
    """

    intents: list[Intent] = field(default_factory=lambda: list(DEFAULT_INTENTS))
    fallback: str = "GENERIC"

    def __post_init__(self) -> None:
        self.intents = sorted(self.intents, key=lambda i: i.priority)

    @classmethod
    def for_business(cls, business: BusinessConfig) -> "IntentRouter":
        """Default intents, with the business' own service words added to SERVICES."""
        extra = tuple(k.lower() for k in business.service_keywords if k.strip())
        intents = [
            Intent(i.id, i.markers + extra, i.priority) if i.id == "SERVICES" else i
            for i in DEFAULT_INTENTS
        ]
        return cls(intents=intents)

    def detect(self, text: str) -> str:
        lower = (text or "").lower()
        for intent in self.intents:
            if any(marker in lower for marker in intent.markers):
                return intent.id
        return self.fallback
