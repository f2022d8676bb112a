"""Prompt templates for the cosmic assistant."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

CHATBOT_SYSTEM_PROMPT = (
    "You are Glimmer Cosmic Assistant: magical, warm and a little romantic. "
    "Help the user explore their memories, their cosmic pet, their friendships and games. "
    "Keep every reply short, friendly and cosmic."
)

MEMORY_INSIGHT_SYSTEM_PROMPT = (
    "You analyze a user's personal memories and reflect on them kindly. "
    'Answer ONLY in JSON with the keys "insight" and "suggestion".'
)

PET_SYSTEM_PROMPT = "You voice a magical cosmic pet. Reply in under 40 words, cute and sparkly."

MAX_INSIGHT_MEMORIES = 6


def chatbot_system_prompt(context: Optional[str] = None) -> str:
    if context:
        return f"{CHATBOT_SYSTEM_PROMPT}\nContext: {context}"
    return CHATBOT_SYSTEM_PROMPT


def memory_insight_prompt(memories: List[Dict[str, Any]]) -> str:
    snippet = json.dumps(memories[:MAX_INSIGHT_MEMORIES], ensure_ascii=False, default=str)
    return (
        'Analyze these user memories and respond ONLY in JSON with keys "insight" and "suggestion".\n\n'
        f"Memories: {snippet}\n\n"
        'Return strictly JSON, for example: {"insight":"...","suggestion":"..."}'
    )


def pet_reaction_prompt(name: str, species: str, level: int, mood: str, action: str) -> str:
    return f"Pet: {name} ({species}), Level {level}, Mood {mood}\nAction: {action}"
