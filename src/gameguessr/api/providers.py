from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from gameguessr.api import dependencies
from gameguessr.llm.registry import list_providers

log = logging.getLogger(__name__)
router = APIRouter(prefix="/providers", tags=["providers"])


class ProviderChoice(BaseModel):
    name: str  # openai | anthropic | groq
    model: Optional[str] = None


def _active() -> dict:
    return {
        "active": dependencies.get_active_provider(),
        "active_model": dependencies.get_active_model(),
    }


def _check_choice(choice: ProviderChoice) -> None:
    available = list_providers()
    info = available.get(choice.name)
    if info is None:
        raise HTTPException(400, f"Unknown provider '{choice.name}'. Choose from: {list(available)}")
    if not info["configured"]:
        raise HTTPException(400, f"Provider '{choice.name}' has no API key configured.")
    if choice.model and choice.model not in info["models"]:
        raise HTTPException(400, f"Model '{choice.model}' is not offered by '{choice.name}'.")


@router.get("")
def get_providers():
    """Which LLM hosts Bot Boy, and which others could."""
    return {**_active(), "providers": list_providers()}


@router.put("/active")
def switch_provider(body: ProviderChoice):
    """Switch the provider for both game modes; running sessions keep their history."""
    _check_choice(body)
    dependencies.set_active_provider(body.name)
    dependencies.set_active_model(body.model)
    return _active()
