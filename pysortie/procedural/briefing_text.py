"""Briefing text helpers: placeholder substitution, random choices and objective names."""
from __future__ import annotations

import random
import re
from typing import Any, List, Optional, Sequence

# Innermost {a|b|c} group, so nested choices resolve from the inside out
_RANDOM_CHOICE_PATTERN = re.compile(r"\{([^{}]*)\}")

# Fallback operation words when the database provides no waypoint names
_FALLBACK_ADJECTIVES = [
    "THUNDER", "LIGHTNING", "STEEL", "IRON", "GOLDEN", "CRIMSON",
    "SILVER", "PHANTOM", "SHADOW", "EAGLE", "VIPER", "COBRA",
]


def replace_key(text: str, key: str, value: Any) -> str:
    """
    Replace every ``$KEY$`` placeholder in ``text`` (case-insensitive).

    Examples:
        >>> replace_key("Destroy $unitfamily$ at $OBJECTIVENAME$", "UnitFamily", "tanks")
        'Destroy tanks at $OBJECTIVENAME$'
    """
    pattern = re.compile(re.escape(f"${key}$"), re.IGNORECASE)
    return pattern.sub(lambda _: str(value), text)


def parse_random_string(text: str, rng: Optional[random.Random] = None) -> str:
    """Resolve every ``{a|b|c}`` group to one of its options, picked uniformly."""
    rng = rng or random
    if not text:
        return ""

    def choose(match: "re.Match") -> str:
        return rng.choice(match.group(1).split("|"))

    previous = None
    while previous != text:
        previous = text
        text = _RANDOM_CHOICE_PATTERN.sub(choose, text)
    return text


class WaypointNameGenerator:
    """Hands out unique objective code names, shuffled once per build."""

    def __init__(self, names: Sequence[str], rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        pool = list(names) if names else list(_FALLBACK_ADJECTIVES)
        self.rng.shuffle(pool)
        self._names: List[str] = pool
        self._issued = 0

    def get_waypoint_name(self) -> str:
        self._issued += 1
        if self._names:
            return self._names.pop(0).upper()
        return f"OBJECTIVE {self._issued}"
