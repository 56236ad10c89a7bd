from __future__ import annotations

import logging

from gameguessr.config import Settings, settings as default_settings
from gameguessr.llm.anthropic import AnthropicProvider
from gameguessr.llm.base import LLMProvider
from gameguessr.llm.groq import GroqProvider
from gameguessr.llm.openai import OpenAIProvider

log = logging.getLogger(__name__)

_PROVIDER_MAP = {
    "openai": (OpenAIProvider, "openai_api_key"),
    "anthropic": (AnthropicProvider, "anthropic_api_key"),
    "groq": (GroqProvider, "groq_api_key"),
}


def get_provider(
    name: str | None = None,
    model: str | None = None,
    temperature: float | None = None,
    config: Settings | None = None,
) -> LLMProvider:
    """Instantiate an LLM provider by name and optional explicit model.

    Parameters
    ----------
    name:
        ``"openai"`` | ``"anthropic"`` | ``"groq"``.
        Defaults to ``settings.default_provider``.
    model:
        Explicit model id.  Falls back to ``settings.default_model`` and then
        to the provider's own default.
    temperature:
        Override; falls back to ``settings.default_temperature``.
    """
    config = config or default_settings
    name = name or config.default_provider
    if name not in _PROVIDER_MAP:
        raise ValueError(
            f"Unknown provider '{name}'. Choose from: {list(_PROVIDER_MAP)}"
        )

    cls, key_attr = _PROVIDER_MAP[name]
    api_key = getattr(config, key_attr)
    if not api_key:
        raise ValueError(
            f"API key for provider '{name}' is not configured "
            f"(set {key_attr.upper()} in .env)."
        )

    chosen_model = model or config.default_model or cls.DEFAULT_MODEL
    temp = temperature if temperature is not None else config.default_temperature

    log.info("Creating %s provider: model=%s, temperature=%.2f", name, chosen_model, temp)
    return cls(api_key=api_key, model=chosen_model, temperature=temp)


def list_providers(config: Settings | None = None) -> dict:
    """Return info about all providers and whether each has a key configured."""
    config = config or default_settings
    return {
        name: {
            "configured": bool(getattr(config, key_attr)),
            "default_model": cls.DEFAULT_MODEL,
            "models": cls.MODELS,
            "is_default": name == config.default_provider,
        }
        for name, (cls, key_attr) in _PROVIDER_MAP.items()
    }
