"""Steve Jackson Games' Munchkin: rules knowledge and fallback answers."""

from __future__ import annotations

from typing import Any, Final

from games.base import ExampleExchange, GameProfile, TopicRule


RULES_KNOWLEDGE: Final[dict[str, Any]] = {
    "setup": {
        "players": "3-6 players (best with 4-5)",
        "ageRange": "10 and up",
        "playTime": "60-120 minutes",
        "components": "168 cards (Door cards and Treasure cards), 6 d6 dice, level counters",
    },
    "basicRules": {
        "objective": "Be the first player to reach Level 10",
        "turnStructure": [
            "1. 'Kick Open the Door' - Draw a Door card face up",
            "2. 'Look for Trouble' or 'Loot the Room'",
            "3. 'Charity' - Discard down to 5 cards if needed",
        ],
        "levelGain": "Gain levels by killing monsters or through certain cards",
    },
    "combat": {
        "basics": "Player combat strength + equipment vs Monster level + any bonuses",
        "helpingInCombat": "Other players can help for a share of treasure",
        "runAway": "Roll 5 or higher on a d6 to escape (4+ if you're an Elf)",
        "winCombat": "Gain levels and treasure as specified on monster card",
        "loseCombat": "Face the 'Bad Stuff' listed on the monster card",
    },
    "commonQuestions": {
        "curses": "Curses can be played on any player at any time unless the curse specifies otherwise",
        "tradingItems": "Items can be traded freely except during combat",
        "handLimit": "5 cards in hand at end of turn, excess must be given to lowest level player",
        "multipleClasses": "You can only be one Class at a time (unless you have Super Munchkin)",
        "cardsInPlay": "Items and other cards stay in play until removed by game effects",
    },
}


CURSE_RULES: Final[str] = (
    "Curse cards can be played on any player at any time, unless the specific curse card states otherwise. "
    "Most curses take effect immediately when played. Some curses affect items, others affect the player directly. "
    "You cannot curse yourself unless the card specifically allows it."
)

COMBAT_RULES: Final[str] = (
    "In combat, add your Level plus your equipment bonuses to fight the monster. "
    "If your total equals or exceeds the monster's level, you win! "
    "Other players can help you for a share of the treasure. "
    "If you lose, you can try to Run Away by rolling 5 or higher on a d6 (Elves need 4+). "
    "If you fail to run away, you face the Bad Stuff on the monster card."
)

LEVELING_RULES: Final[str] = (
    "You gain levels primarily by killing monsters - usually 1 level per monster, but some give more. "
    "Certain cards can also give you levels. "
    "The first player to reach Level 10 wins the game! "
    "However, you must reach Level 10 through combat - you cannot win with a card effect or 'Go Up a Level' card."
)

SETUP_RULES: Final[str] = (
    "Shuffle the Door and Treasure decks separately. "
    "Deal 4 Door cards and 4 Treasure cards to each player. "
    "Everyone starts at Level 1 with no class or race. "
    "The player with the most unusual hair goes first, or roll dice to determine starting player. "
    "Place both decks within reach of all players."
)

DEFAULT_ANSWER: Final[str] = (
    "I heard your question about \"{question}\" but I'm not sure how to answer that specific Munchkin rule question yet. "
    "Could you try rephrasing it, or ask about curses, combat, leveling, or game setup? "
    "My knowledge base is still growing!"
)


MUNCHKIN: Final[GameProfile] = GameProfile(
    name="Steve Jackson Games' Munchkin",
    version="Classic Munchkin",
    assistant_name="Hexpert",
    overview=(
        "Objective: Be the first player to reach Level 10",
        "Players: 3-6 players (best with 4-5)",
        "Components: Door cards, Treasure cards, dice, level counters",
    ),
    rules_knowledge=RULES_KNOWLEDGE,
    # Priority chain: curse -> combat -> level/win -> setup
    topics=(
        TopicRule(name="curses", keywords=("curse",), answer=CURSE_RULES),
        TopicRule(name="combat", keywords=("combat", "fight", "battle"), answer=COMBAT_RULES),
        TopicRule(name="leveling", keywords=("level", "win"), answer=LEVELING_RULES),
        TopicRule(name="setup", keywords=("setup", "start"), answer=SETUP_RULES),
    ),
    default_answer=DEFAULT_ANSWER,
    guidelines=(
        "Be conversational and friendly, like a knowledgeable game expert",
        "Give concise but complete answers",
        "If a rule has exceptions or special cases, mention them",
        "If you're not certain about a specific rule interaction, say so",
        "Keep responses under 200 words when possible",
        "Use \"you\" to address the player directly",
    ),
    examples=(
        ExampleExchange(
            question="Can I curse myself?",
            answer=(
                "Generally, no - most curse cards cannot be played on yourself unless the card "
                "specifically states otherwise. This prevents players from using curses "
                "strategically on themselves to avoid worse consequences."
            ),
        ),
        ExampleExchange(
            question="What happens if I tie in combat?",
            answer=(
                "If your total combat strength equals the monster's level exactly, you win the "
                "combat! You need to equal or exceed the monster's level to defeat it."
            ),
        ),
    ),
)
