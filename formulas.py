# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Probability formulas.

Every function here is pure: it reads attribute snapshots, the season
ruleset and the cached ``MultiplierData`` and returns a threshold that a
uniform roll is compared against. Nothing in this module draws randomness.

The attribute scale is roughly 0..1.2 with 0.5 as league average. Thresholds
are clamped to [0.001, 0.999] so that no roll is ever certain.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from entities import Player


# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------

@dataclass
class MultiplierData:
    """Per-player attribute multipliers derived from mods and match context."""
    multipliers: dict[str, float] = field(default_factory=dict)

    def for_player(self, player_id: str) -> float:
        return self.multipliers.get(player_id, 1.0)


def _clamp(v: float, lo: float = 0.001, hi: float = 0.999) -> float:
    return max(lo, min(hi, v))


def _stat(player: Player, attr: str, md: MultiplierData) -> float:
    value = player.attr(attr)
    m = md.for_player(player.id)
    # inverted stats get better when they shrink
    if attr in ("patheticism", "tragicness"):
        return value / m if m > 0 else value
    return value * m


def _batting_power(batter: Player, md: MultiplierData) -> float:
    return (
        _stat(batter, "divinity", md)
        + _stat(batter, "musclitude", md)
        + (1.0 - _stat(batter, "patheticism", md))
        + _stat(batter, "thwackability", md)
    ) / 4.0


# ---------------------------------------------------------------------------
# Pitch
# ---------------------------------------------------------------------------

def strike_threshold(pitcher: Player, batter: Player, is_flinching: bool,
                     ruleset: int, md: MultiplierData) -> float:
    ruth = _stat(pitcher, "ruthlessness", md)
    cold = _stat(pitcher, "coldness", md)
    const = 0.285 if ruleset >= 14 else 0.3
    threshold = 0.2 + const * ruth + 0.1 * cold
    if is_flinching:
        threshold += 0.2
    cap = 0.86 if ruleset >= 12 else 0.9
    return _clamp(threshold, hi=cap)


def swing_threshold(pitcher: Player, batter: Player, is_strike: bool,
                    ruleset: int, md: MultiplierData) -> float:
    moxie = _stat(batter, "moxie", md)
    path = _stat(batter, "patheticism", md)
    ruth = _stat(pitcher, "ruthlessness", md)
    if is_strike:
        threshold = 0.6 + 0.35 * _batting_power(batter, md) - 0.1 * ruth
    else:
        threshold = 0.1 + 0.35 * (path ** 0.5) - 0.2 * moxie + 0.15 * ruth
        if ruleset >= 18:
            threshold -= 0.02
    return _clamp(threshold, hi=0.95)


def contact_threshold(pitcher: Player, batter: Player, is_strike: bool,
                      ruleset: int, md: MultiplierData) -> float:
    power = _batting_power(batter, md)
    ruth = _stat(pitcher, "ruthlessness", md)
    if is_strike:
        threshold = 0.78 - 0.08 * ruth + 0.16 * power
    else:
        threshold = 0.4 - 0.1 * ruth + 0.35 * power
    return _clamp(threshold, hi=0.9)


def foul_threshold(pitcher: Player, batter: Player, ruleset: int,
                   md: MultiplierData) -> float:
    fwd = (
        _stat(batter, "musclitude", md)
        + _stat(batter, "thwackability", md)
        + _stat(batter, "divinity", md)
    ) / 3.0
    threshold = 0.25 + 0.1 * fwd - 0.1 * _stat(pitcher, "shakespearianism", md)
    return _clamp(threshold)


# ---------------------------------------------------------------------------
# Batted ball
# ---------------------------------------------------------------------------

def out_threshold(pitcher: Player, batter: Player, defender: Player,
                  ruleset: int, md: MultiplierData) -> float:
    """Probability the ball in play falls for a hit.

    Callers treat a roll *above* this value as an out.
    """
    thwack = _stat(batter, "thwackability", md)
    unthwack = _stat(pitcher, "unthwackability", md)
    omni = _stat(defender, "omniscience", md)
    threshold = 0.315 + 0.1 * thwack - 0.08 * unthwack - 0.07 * omni
    return _clamp(threshold)


def fly_threshold(batter: Player, pitcher: Player, ruleset: int,
                  md: MultiplierData) -> float:
    buoy = _stat(batter, "buoyancy", md)
    supp = _stat(pitcher, "suppression", md)
    return _clamp(0.18 + 0.3 * buoy - 0.16 * supp)


def flyout_advancement_threshold(runner: Player, base_from: int, ruleset: int,
                                 md: MultiplierData) -> float:
    indulgence = _stat(runner, "indulgence", md)
    if base_from == 2:
        return _clamp(0.45 + 0.35 * indulgence)
    if base_from == 1:
        return _clamp(0.14 + 0.25 * indulgence)
    return _clamp(0.05 + 0.14 * indulgence)


def double_play_threshold(batter: Player, pitcher: Player, defender: Player,
                          ruleset: int, md: MultiplierData) -> float:
    mart = _stat(batter, "martyrdom", md)
    tenacity = _stat(defender, "tenaciousness", md)
    threshold = 0.05 + 0.2 * _stat(pitcher, "shakespearianism", md) - 0.1 * mart + 0.05 * tenacity
    return _clamp(threshold)


def groundout_sacrifice_threshold(batter: Player, ruleset: int,
                                  md: MultiplierData) -> float:
    return _clamp(0.05 + 0.25 * _stat(batter, "martyrdom", md))


def groundout_advancement_threshold(runner: Player, defender: Player,
                                    ruleset: int, md: MultiplierData) -> float:
    indulgence = _stat(runner, "indulgence", md)
    tenacity = _stat(defender, "tenaciousness", md)
    return _clamp(0.5 + 0.35 * indulgence - 0.15 * tenacity)


# ---------------------------------------------------------------------------
# Hits
# ---------------------------------------------------------------------------

def hr_threshold(pitcher: Player, batter: Player, ruleset: int,
                 md: MultiplierData) -> float:
    div = _stat(batter, "divinity", md)
    over = _stat(pitcher, "overpowerment", md)
    const = 0.12 if ruleset >= 16 else 0.1
    return _clamp(const + 0.16 * div - 0.08 * over)


def hit_advancement_threshold(runner: Player, defender: Player, ruleset: int,
                              md: MultiplierData) -> float:
    cont = _stat(runner, "continuation", md)
    tenacity = _stat(defender, "tenaciousness", md)
    return _clamp(0.2 + 0.3 * cont - 0.15 * tenacity)


def double_threshold(pitcher: Player, batter: Player, defender: Player,
                     ruleset: int, md: MultiplierData) -> float:
    musc = _stat(batter, "musclitude", md)
    chase = _stat(defender, "chasiness", md)
    return _clamp(0.17 + 0.2 * musc - 0.1 * chase)


def triple_threshold(pitcher: Player, batter: Player, defender: Player,
                     ruleset: int, md: MultiplierData) -> float:
    friction = _stat(batter, "ground_friction", md)
    chase = _stat(defender, "chasiness", md)
    return _clamp(0.045 + 0.2 * friction - 0.05 * chase)


def quadruple_threshold(pitcher: Player, batter: Player, defender: Player,
                        ruleset: int, md: MultiplierData) -> float:
    friction = _stat(batter, "ground_friction", md)
    return _clamp(0.02 + 0.05 * friction)


# ---------------------------------------------------------------------------
# Baserunning
# ---------------------------------------------------------------------------

def steal_attempt_threshold(runner: Player, defender: Player) -> float:
    thirst = runner.attr("base_thirst")
    watch = defender.attr("watchfulness")
    return _clamp(0.01 + 0.035 * thirst - 0.01 * watch)


def steal_success_threshold(runner: Player, defender: Player) -> float:
    laser = runner.attr("laserlikeness")
    anticap = defender.attr("anticapitalism")
    return _clamp(0.5 + 0.35 * laser - 0.2 * anticap)


# ---------------------------------------------------------------------------
# Weather and mod constants
# ---------------------------------------------------------------------------

def party_threshold(ruleset: int) -> float:
    return 0.0055 if ruleset < 20 else 0.00525


def flooding_threshold(ruleset: int, fort: float) -> float:
    if 11 <= ruleset < 14:
        return 0.019 - 0.02 * fort
    if 14 <= ruleset < 17:
        return 0.013 - 0.012 * fort
    if ruleset == 17:
        return 0.015 - 0.012 * fort
    if 18 <= ruleset < 24:
        return 0.016 - 0.012 * fort
    return 0.0


def elsewhere_return_threshold(ruleset: int) -> float:
    if ruleset == 11:
        return 0.001
    if ruleset == 12:
        return 0.000575
    if 13 <= ruleset < 18:
        return 0.0004
    if 18 <= ruleset < 24:
        return 0.00035
    return 0.0


def unscatter_threshold(ruleset: int) -> float:
    if ruleset in (11, 12):
        return 0.00061
    if ruleset == 13:
        return 0.0005
    if 14 <= ruleset < 17:
        return 0.0004
    if 17 <= ruleset < 20:
        return 0.00042
    if ruleset in (20, 21):
        return 0.000485
    if ruleset in (22, 23):
        return 0.000495
    return 0.0


def charm_threshold(ruleset: int, myst: float = 0.0) -> float:
    if ruleset == 18:
        return 0.014 + 0.006 * myst
    return 0.015 + 0.02 * myst


def blooddrain_threshold(ruleset: int, fort: float) -> float:
    if ruleset < 16:
        return 0.00065 - 0.001 * fort
    return 0.00125 - 0.00125 * fort


SIPHON_THRESHOLD = 0.0025
