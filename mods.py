# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Modifiers ("mods") and the per-entity modifier set.

A mod is attached to a player or team together with a lifetime. Expiry is
driven from outside the match (end of game, week, season, or when a
legendary item changes hands) through the ``clear_*`` methods.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Mod(str, Enum):
    """Every mod the rules react to, keyed by its league-file name."""
    TARGETED_SHAME = "TARGETED_SHAME"
    FLINCH = "FLINCH"
    MILD = "WILD"
    REVERBERATING = "REVERBERATING"
    FIREPROOF = "FIREPROOF"
    SOUNDPROOF = "SOUNDPROOF"
    SHELLED = "SHELLED"
    LIFE_OF_THE_PARTY = "LIFE_OF_PARTY"
    GRAVITY = "GRAVITY"
    NIGHT_VISION = "NIGHT_VISION"
    FOURTH_STRIKE = "EXTRA_STRIKE"
    DEBT_U = "DEBT_THREE"
    UNSTABLE = "MARKED"
    SUPERALLERGIC = "SUPERALLERGIC"
    SPICY = "SPICY"
    HEATING_UP = "HEATING_UP"
    RED_HOT = "ON_FIRE"
    MINIMIZED = "MINIMIZED"
    ELECTRIC = "ELECTRIC"
    REFINANCED_DEBT = "REFINANCED_DEBT"
    FLICKERING = "FLICKERING"
    STABLE = "STABLE"
    HOME_FIELD_ADVANTAGE = "HOME_FIELD_ADVANTAGE"
    BASE_INSTINCTS = "BASE_INSTINCTS"
    AFFINITY_FOR_CROWS = "AFFINITY_FOR_CROWS"
    GROWTH = "GROWTH"
    CONSOLIDATED_DEBT = "CONSOLIDATED_DEBT"
    REPEATING = "REPEATING"
    FIFTH_BASE = "EXTRA_BASE"
    CHARM = "LOVE"
    SUPER_FLICKERING = "FLIICKERRRIIING"
    SQUIDDISH = "SQUIDDISH"
    SIPHON = "SIPHON"
    FRIEND_OF_CROWS = "FRIEND_OF_CROWS"
    FIRE_EATER = "FIRE_EATER"
    MAGMATIC = "MAGMATIC"
    HONEY_ROASTED = "HONEY_ROASTED"
    TRAVELING = "TRAVELING"
    HAUNTED = "HAUNTED"
    SEALANT = "SEALANT"
    BLASERUNNING = "BLASERUNNING"
    BIRD_SEED = "BIRD_SEED"
    SUPERYUMMY = "SUPERYUMMY"
    OVERPERFORMING = "OVERPERFORMING"
    UNDERPERFORMING = "UNDERPERFORMING"
    WALK_IN_THE_PARK = "WALK_IN_THE_PARK"
    O_NO = "O_NO"
    WIRED = "WIRED"
    TIRED = "TIRED"
    FREE_REFILL = "COFFEE_RALLY"
    TRIPLE_THREAT = "TRIPLE_THREAT"
    PERK = "PERK"
    ELSEWHERE = "ELSEWHERE"
    SCATTERED = "SCATTERED"
    FLIPPERS = "SWIM_BLADDER"
    EARLBIRDS = "EARLBIRDS"
    LATE_TO_THE_PARTY = "LATE_TO_THE_PARTY"
    ROAMING = "WANDERER"
    HARD_BOILED = "HARD_BOILED"
    UNDERSEA = "UNDERSEA"
    AMBUSH = "AMBUSH"


class ModLifetime(str, Enum):
    GAME = "GAME"
    WEEK = "WEEK"
    SEASON = "SEASON"
    LEGENDARY_ITEM = "LEGENDARY_ITEM"
    PERMANENT = "PERMANENT"


# ---------------------------------------------------------------------------
# Modifier set
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ModEntry:
    mod: Mod
    lifetime: ModLifetime


class Mods:
    """Small ordered collection of (mod, lifetime) pairs.

    Entities carry a handful of mods at most, so a list scan is all the
    lookup structure needed.
    """

    def __init__(self, entries: list[ModEntry] | None = None):
        self._entries: list[ModEntry] = []
        for entry in entries or []:
            self.add(entry.mod, entry.lifetime)

    def has(self, mod: Mod) -> bool:
        return any(e.mod == mod for e in self._entries)

    def add(self, mod: Mod, lifetime: ModLifetime) -> None:
        """Attach ``mod`` with ``lifetime``; a repeated pair is a no-op."""
        entry = ModEntry(mod=mod, lifetime=lifetime)
        if entry not in self._entries:
            self._entries.append(entry)

    def remove(self, mod: Mod) -> None:
        """Drop ``mod`` under every lifetime it was added with."""
        self._entries = [e for e in self._entries if e.mod != mod]

    def _clear_lifetime(self, lifetime: ModLifetime) -> None:
        self._entries = [e for e in self._entries if e.lifetime != lifetime]

    def clear_game(self) -> None:
        self._clear_lifetime(ModLifetime.GAME)

    def clear_weekly(self) -> None:
        self._clear_lifetime(ModLifetime.WEEK)

    def clear_season(self) -> None:
        self._clear_lifetime(ModLifetime.SEASON)

    def clear_legendary_item(self) -> None:
        self._clear_lifetime(ModLifetime.LEGENDARY_ITEM)

    def copy(self) -> Mods:
        clone = Mods()
        clone._entries = list(self._entries)
        return clone

    def __iter__(self) -> Iterator[ModEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mods):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        inner = ", ".join(f"{e.mod.name}:{e.lifetime.value}" for e in self._entries)
        return f"Mods([{inner}])"
