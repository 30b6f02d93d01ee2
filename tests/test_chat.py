from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from bookingdesk.api.deps import get_brain
from bookingdesk.core.brain import BrainResponse
from bookingdesk.core.business_loader import load_business_config
from bookingdesk.core.chat import ChatResponder, EmptyCompletion
from tests.conftest import BUSINESSES_DIR


def _barber():
    return load_business_config(BUSINESSES_DIR, "idee-per-la-testa")


class FakeBrain:
    def __init__(self, content: str = "Risposta", exc: Exception | None = None):
        self.think = AsyncMock(
            side_effect=exc,
            return_value=BrainResponse(content=content, model="fake", usage={}),
        )


@pytest.mark.asyncio
async def test_fallback_reply_without_brain():
    business = _barber()
    reply = await ChatResponder(business).reply("vorrei prenotare")

    assert reply.fallback is True
    assert reply.text == business.bot.booking_guide


@pytest.mark.asyncio
async def test_fallback_hours_and_contacts():
    responder = ChatResponder(_barber())

    assert (await responder.reply("che orari fate?")).text.startswith("Orari: Lunedì")
    assert (await responder.reply("numero di telefono?")).text == "Puoi contattarci al: 333 123 4567"
    assert "Servizi principali" in (await responder.reply("fate la barba?")).text


@pytest.mark.asyncio
async def test_brain_reply_uses_system_prompt():
    brain = FakeBrain("Chiudiamo alle 20.")
    reply = await ChatResponder(_barber(), brain).reply("a che ora chiudete?")

    assert reply.fallback is False
    assert reply.text == "Chiudiamo alle 20."
    system_prompt, message = brain.think.await_args.args
    assert "Idee per la Testa" in system_prompt
    assert message == "a che ora chiudete?"


@pytest.mark.asyncio
async def test_empty_completion_raises():
    with pytest.raises(EmptyCompletion):
        await ChatResponder(_barber(), FakeBrain("")).reply("ciao")


@pytest.mark.asyncio
async def test_feature_flag_disables_brain():
    grooming = load_business_config(BUSINESSES_DIR, "toelettatura-fido")
    brain = FakeBrain()
    reply = await ChatResponder(grooming, brain).reply("quanto costa il bagno?")

    assert reply.fallback is True
    assert "taglia" in reply.text
    brain.think.assert_not_awaited()


@pytest.mark.asyncio
async def test_chat_endpoint_fallback_without_provider_key(overrides, http, monkeypatch: pytest.MonkeyPatch):
    # Real dependency: no OPENAI_API_KEY configured -> no Brain at all.
    overrides.pop(get_brain)
    completion = AsyncMock()
    monkeypatch.setattr("bookingdesk.core.brain.litellm.acompletion", completion)

    async with http as client:
        resp = await client.post("/api/chat", json={"message": "vorrei prenotare"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "reply": _barber().bot.booking_guide, "fallback": True}
    assert resp.headers["expires"] == "0"
    completion.assert_not_awaited()


@pytest.mark.asyncio
async def test_chat_endpoint_with_brain(overrides, http):
    overrides[get_brain] = lambda: FakeBrain("Certo!")

    async with http as client:
        resp = await client.post("/api/chat", json={"userMessage": "info"})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "reply": "Certo!"}


@pytest.mark.asyncio
async def test_chat_endpoint_empty_message(overrides, http):
    async with http as client:
        resp = await client.post("/api/chat", json={"message": "   "})

    assert resp.status_code == 400
    assert resp.json() == {"ok": False, "error": "Messaggio vuoto."}


@pytest.mark.asyncio
async def test_chat_endpoint_empty_completion_is_500(overrides, http):
    overrides[get_brain] = lambda: FakeBrain("")

    async with http as client:
        resp = await client.post("/api/chat", json={"message": "ciao"})

    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "Risposta vuota dal modello."}


@pytest.mark.asyncio
async def test_chat_endpoint_provider_error_is_500(overrides, http):
    overrides[get_brain] = lambda: FakeBrain(exc=RuntimeError("rate limited"))

    async with http as client:
        resp = await client.post("/api/chat", json={"message": "ciao"})

    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "Errore server (chat).", "details": "rate limited"}
