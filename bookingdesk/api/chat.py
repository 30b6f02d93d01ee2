from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from bookingdesk.api.deps import get_brain, get_business
from bookingdesk.api.responses import error_body, no_store_json, read_json
from bookingdesk.core.brain import Brain
from bookingdesk.core.chat import ChatResponder, EmptyCompletion
from bookingdesk.core.schemas import BusinessConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


@router.post("/chat")
async def chat(
    request: Request,
    business: BusinessConfig = Depends(get_business),
    brain: Brain | None = Depends(get_brain),
) -> JSONResponse:
    body = await read_json(request)
    message = str(body.get("message") or body.get("userMessage") or "").strip()
    if not message:
        return no_store_json(error_body("Messaggio vuoto."), status_code=400)

    responder = ChatResponder(business, brain)
    try:
        reply = await responder.reply(message)
    except EmptyCompletion as e:
        return no_store_json(error_body(str(e)), status_code=500)
    except Exception as e:
        logger.exception("Chat completion failed: %s", e)
        return no_store_json(error_body("Errore server (chat).", str(e)), status_code=500)

    out: dict = {"ok": True, "reply": reply.text}
    if reply.fallback:
        out["fallback"] = True
    return no_store_json(out)
