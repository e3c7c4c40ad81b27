"""
Deterministic keyword fallback.

Pure functions only: no I/O, no provider calls, cannot fail.
"""

from __future__ import annotations

from games.base import GameProfile, TopicRule


def match_topic(profile: GameProfile, question: str) -> TopicRule | None:
    """
    Return the first topic (in profile order) whose keywords appear in
    the question, case-insensitively. None if nothing matches.
    """
    lowered = question.lower()
    for topic in profile.topics:
        if topic.matches(lowered):
            return topic
    return None


def fallback_answer(profile: GameProfile, question: str) -> str:
    """Keyword answer, or the default message echoing the question verbatim."""
    topic = match_topic(profile, question)
    if topic is not None:
        return topic.answer
    return profile.default_answer.format(question=question)
