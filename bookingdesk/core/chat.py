"""
Chat Responder — answers informational questions for the page chat widget.

With a provider key the question goes to the LLM together with a system
prompt built from the business config. Without one (or with the chat feature
switched off) a keyword-matched canned reply is returned instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bookingdesk.core.brain import Brain
from bookingdesk.core.intent_router import IntentRouter
from bookingdesk.core.prompt_builder import (
    DEFAULT_BOOKING_GUIDE,
    DEFAULT_CANCEL_GUIDE,
    DEFAULT_PRICE_HINT,
    PromptBuilder,
)
from bookingdesk.core.schemas import BusinessConfig

logger = logging.getLogger(__name__)


class EmptyCompletion(Exception):
    """The provider answered with no text."""


@dataclass
class ChatReply:
    text: str
    fallback: bool = False


class ChatResponder:
    def __init__(self, business: BusinessConfig, brain: Brain | None = None):
        self.business = business
        self.brain = brain if business.features.enable_openai_chat else None
        self.router = IntentRouter.for_business(business)

    async def reply(self, message: str) -> ChatReply:
        if self.brain is None:
            return ChatReply(text=self.fallback_answer(message), fallback=True)

        system_prompt = PromptBuilder.build(self.business)
        response = await self.brain.think(system_prompt, message)
        if not response.content:
            raise EmptyCompletion("Risposta vuota dal modello.")

        logger.info("Chat reply via %s (%s)", response.model, response.usage)
        return ChatReply(text=response.content)

    def fallback_answer(self, message: str) -> str:
        biz = self.business
        name = biz.headline or "Attività"
        intent = self.router.detect(message)

        if intent == "BOOKING":
            return biz.bot.booking_guide or DEFAULT_BOOKING_GUIDE
        if intent == "CANCEL":
            return biz.bot.cancel_guide or DEFAULT_CANCEL_GUIDE
        if intent == "HOURS":
            if biz.hours_lines:
                return "Orari: " + " • ".join(biz.hours_lines)
            return "Dimmi il giorno che ti interessa e ti confermo gli orari."
        if intent == "PRICE":
            return biz.price_hint or DEFAULT_PRICE_HINT
        if intent == "SERVICES":
            if biz.services_short:
                return f"Servizi principali: {biz.services_short}. Dimmi cosa ti serve e ti dico come prenotare."
            return "Dimmi che servizio ti serve e ti aiuto."
        if intent == "CONTACT":
            if biz.phone:
                return f"Puoi contattarci al: {biz.phone}"
            return "Dimmi come preferisci essere contattato e ti dico la soluzione migliore."

        return biz.bot.fallback or (
            f"Posso aiutarti con info su servizi, orari e contatti di {name}. "
            "Se vuoi prenotare usa “Prenota adesso” nella pagina."
        )
