# pylint: disable=missing-module-docstring,missing-function-docstring

import asyncio

import pytest

from adapters.errors import TextGenerationError
from adapters.llm.base import TextGenerationAdapter
from games.munchkin import (
    COMBAT_RULES,
    CURSE_RULES,
    LEVELING_RULES,
    MUNCHKIN,
    SETUP_RULES,
)
from responder.fallback import fallback_answer, match_topic
from responder.responder import Responder


class FailingGenerator(TextGenerationAdapter):
    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        raise TextGenerationError("network down")


class RecordingGenerator(TextGenerationAdapter):
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.calls: list[tuple[str, str]] = []

    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        self.calls.append((system_prompt, user_message))
        return self.reply


class SlowGenerator(TextGenerationAdapter):
    async def complete(self, *, system_prompt: str, user_message: str) -> str:
        await asyncio.sleep(10)
        return "too late"


# ---------------------------------------------------------------------
# Fallback path
# ---------------------------------------------------------------------

def test_combat_question_falls_back_to_combat_rules():
    responder = Responder(profile=MUNCHKIN, generator=FailingGenerator())

    answer = asyncio.run(responder.answer("How does combat work?"))

    assert answer == COMBAT_RULES


def test_unmatched_question_echoes_input_verbatim():
    responder = Responder(profile=MUNCHKIN, generator=FailingGenerator())

    answer = asyncio.run(responder.answer("what is the weather"))

    assert "what is the weather" in answer
    assert answer == MUNCHKIN.default_answer.format(question="what is the weather")


@pytest.mark.parametrize(
    "question, expected",
    [
        ("Can I CURSE someone during combat?", CURSE_RULES),
        ("How do I win a fight?", COMBAT_RULES),
        ("What about battles at level 9?", COMBAT_RULES),
        ("How do I start to level up?", LEVELING_RULES),
        ("How do I win?", LEVELING_RULES),
        ("Explain the setup", SETUP_RULES),
        ("Who goes first at the start?", SETUP_RULES),
    ],
)
def test_fallback_priority_chain(question: str, expected: str):
    assert fallback_answer(MUNCHKIN, question) == expected


def test_match_topic_none_for_unmatched():
    assert match_topic(MUNCHKIN, "what is the weather") is None


def test_default_answer_survives_braces_in_question():
    answer = fallback_answer(MUNCHKIN, "what does {this} mean")

    assert "what does {this} mean" in answer


# ---------------------------------------------------------------------
# Primary path
# ---------------------------------------------------------------------

def test_generator_answer_is_returned_with_game_system_prompt():
    generator = RecordingGenerator("You can help for treasure.")
    responder = Responder(profile=MUNCHKIN, generator=generator)

    answer = asyncio.run(responder.answer("Can other players help me?"))

    assert answer == "You can help for treasure."
    system_prompt, user_message = generator.calls[0]
    assert user_message == "Can other players help me?"
    assert system_prompt == responder.system_prompt
    assert "Hexpert" in system_prompt
    assert "KEY RULES KNOWLEDGE" in system_prompt
    assert "Roll 5 or higher on a d6" in system_prompt


def test_generator_timeout_falls_back():
    responder = Responder(profile=MUNCHKIN, generator=SlowGenerator(), timeout_s=0.01)

    answer = asyncio.run(responder.answer("how do curses work"))

    assert answer == CURSE_RULES


def test_no_generator_uses_fallback():
    responder = Responder(profile=MUNCHKIN)

    assert asyncio.run(responder.answer("setup please")) == SETUP_RULES


def test_game_info():
    info = Responder(profile=MUNCHKIN).game_info()

    assert info["name"] == "Steve Jackson Games' Munchkin"
    assert info["version"] == "Classic Munchkin"
    assert info["setup"]["players"] == "3-6 players (best with 4-5)"
