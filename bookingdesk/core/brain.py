from __future__ import annotations

from dataclasses import dataclass

import litellm

from bookingdesk.config import Settings


@dataclass
class BrainResponse:
    content: str
    model: str
    usage: dict


class Brain:
    """
    Single non-streaming chat completion via LiteLLM.

    Example:
        brain = Brain(provider="openai", model="gpt-4o-mini", api_key="sk-...")
        response = await brain.think(system_prompt, "Quanto costa un taglio?")
    """

    def __init__(
        self,
        provider: str,
        model: str,
        temperature: float = 0.4,
        max_tokens: int = 450,
        api_key: str | None = None,
    ):
        self.provider = provider
        self.model = self._resolve_model(provider, model)
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.api_key = api_key

    async def think(self, system_prompt: str, user_message: str) -> BrainResponse:
        response = await litellm.acompletion(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            api_key=self.api_key,
        )

        content = (response.choices[0].message.content or "").strip()
        return BrainResponse(
            content=content,
            model=response.model,
            usage=self._safe_usage(getattr(response, "usage", None)),
        )

    @staticmethod
    def _safe_usage(usage_obj) -> dict:
        """Keep only the common integer token counters."""
        if usage_obj is None:
            return {}

        out: dict[str, int] = {}
        for key in ("prompt_tokens", "completion_tokens", "total_tokens"):
            if isinstance(usage_obj, dict):
                val = usage_obj.get(key)
            else:
                val = getattr(usage_obj, key, None)
            if isinstance(val, int):
                out[key] = val
        return out

    @staticmethod
    def _resolve_model(provider: str, model: str) -> str:
        """
        LiteLLM uses prefixes for some providers. OpenAI models do not require a prefix.
        """
        prefix_map = {
            "anthropic": "anthropic/",
            "google": "gemini/",
            "openrouter": "openrouter/",
        }
        prefix = prefix_map.get(provider, "")
        if prefix and model.startswith(prefix):
            return model
        return f"{prefix}{model}"

    @classmethod
    def from_settings(cls, settings: Settings) -> "Brain | None":
        """None when no provider key is configured (chat falls back to canned replies)."""
        api_key = settings.openai_api_key.strip()
        if not api_key:
            return None
        return cls(
            provider=settings.llm_provider,
            model=settings.openai_model.strip() or "gpt-4o-mini",
            api_key=api_key,
        )
