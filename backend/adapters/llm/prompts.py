"""
System prompt construction for the rules assistant.

The prompt text is derived entirely from a GameProfile so that adding a game
never touches this module.
"""

from __future__ import annotations

import json

from games.base import GameProfile


def build_system_prompt(profile: GameProfile) -> str:
    """Render the fixed system instruction for one game."""
    overview = "\n".join(f"- {line}" for line in profile.overview)
    knowledge = json.dumps(profile.rules_knowledge, indent=2, ensure_ascii=False)
    guidelines = "\n".join(f"- {line}" for line in profile.guidelines)
    examples = "\n\n".join(
        f"User: \"{ex.question}\"\nResponse: \"{ex.answer}\""
        for ex in profile.examples
    )

    sections = [
        f"You are {profile.assistant_name}, an AI assistant specializing in "
        f"{profile.name} board game rules.",
        "You are knowledgeable about all aspects of the gameplay and should provide "
        "clear, accurate, and helpful answers to player questions.",
        f"GAME OVERVIEW:\n{overview}",
        f"KEY RULES KNOWLEDGE:\n{knowledge}",
    ]
    if guidelines:
        sections.append(f"RESPONSE GUIDELINES:\n{guidelines}")
    if examples:
        sections.append(f"EXAMPLE INTERACTIONS:\n{examples}")
    sections.append("Answer the user's question now:")

    return "\n\n".join(sections)
