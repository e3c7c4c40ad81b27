"""
Game profile primitives.

A profile is static data: what the responder knows about one tabletop game
and how its local keyword fallback answers. No I/O, no provider calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class TopicRule:
    """
    One fallback topic.

    keywords:
        Lowercase substrings; any match selects this topic.
    answer:
        Fixed explanation returned for the topic.
    """
    name: str
    keywords: tuple[str, ...]
    answer: str

    def matches(self, lowered_question: str) -> bool:
        return any(k in lowered_question for k in self.keywords)


@dataclass(frozen=True)
class ExampleExchange:
    """A sample question/answer pair shown to the text-generation model."""
    question: str
    answer: str


@dataclass(frozen=True)
class GameProfile:
    """
    Everything the responder needs for one game.

    topics is a priority chain: order matters because a question may
    contain keywords from several topics.

    default_answer is a format string with a single ``{question}`` field.
    """
    name: str
    version: str
    assistant_name: str
    overview: tuple[str, ...]
    rules_knowledge: Mapping[str, Any]
    topics: tuple[TopicRule, ...]
    default_answer: str
    guidelines: tuple[str, ...] = ()
    examples: tuple[ExampleExchange, ...] = ()

    def info(self) -> dict[str, Any]:
        """Public game summary (name, version, setup facts)."""
        return {
            "name": self.name,
            "version": self.version,
            "setup": dict(self.rules_knowledge.get("setup", {})),
        }
