# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Rule-provider chain and the pitch decision tree.

Each tick, ``Sim.next`` asks a fixed sequence of providers for an event; the
first one that answers wins. Providers only read the match and the roster
store and draw from the shared ``Rng``. They may draw even when they end up
returning None, and the number and order of those draws is part of the
match's identity: a change here changes every seeded replay.

``run_match`` drives a match to completion and returns the applied events;
``replay`` re-applies a recorded list on fresh state.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, assert_never

import formulas
from entities import Player, World
from errors import NoEventProducedError
from events import (
    AnyEvent,
    Ball,
    BaseHit,
    BaseSteal,
    BatterUp,
    Beaned,
    BigPeanut,
    Birds,
    BlackHole,
    BlockedDrain,
    Blooddrain,
    CaughtStealing,
    CharmStrikeout,
    CharmWalk,
    CrowAmbush,
    DoublePlay,
    Elsewhere,
    ElsewhereReturn,
    Feedback,
    FieldersChoice,
    FireEater,
    Fireproof,
    Flyout,
    Foul,
    GameOver,
    GroundOut,
    HitByPitch,
    HomeRun,
    IffeyJr,
    Incineration,
    Inhabiting,
    InningSwitch,
    InstinctWalk,
    MagmaticHomeRun,
    MildPitch,
    MildWalk,
    NightShift,
    Party,
    Peanut,
    PeckedFree,
    Performing,
    PolaritySwitch,
    PouredOver,
    Repeating,
    Reverb,
    Reverberating,
    Salmon,
    Shelled,
    Soundproof,
    Strike,
    Strikeout,
    Sun2,
    Swept,
    TasteTheInfinite,
    TripleThreat,
    TripleThreatDeactivation,
    Unscatter,
    Walk,
    Zap,
    apply_event,
)
from game import Game, Weather
from mods import Mod
from rng import Rng

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class PollScope(str, Enum):
    """Which players ``poll_for_mod`` looks at."""
    ALL = "all"            # both full lineups and rotations
    CURRENT = "current"    # both lineups and the two active pitchers
    PLAYING = "playing"    # fielding lineup + active pitcher, batter and runners


def poll_for_mod(game: Game, world: World, mod: Mod, scope: PollScope) -> list[str]:
    """Ids of players in ``scope`` carrying ``mod``; home side first."""
    players: list[str] = []
    for side, batting in ((game.scoreboard.home_team, not game.top),
                          (game.scoreboard.away_team, game.top)):
        team = world.team(side.id)
        if scope == PollScope.PLAYING and batting:
            batter = game.batter()
            players.extend([batter] if batter is not None else [])
            players.extend(game.runners.ids())
        else:
            players.extend(team.lineup)
            if scope == PollScope.ALL:
                players.extend(team.rotation)
            else:
                players.append(side.pitcher)
    return [pid for pid in players if world.player(pid).mods.has(mod)]


def roll_random_boosts(rng: Rng, base: float, spread: float,
                       exclude_pressurization: bool) -> list[float]:
    """One ``base + next() * spread`` draw per attribute."""
    width = 25 if exclude_pressurization else 26
    return [base + rng.next() * spread for _ in range(width)]


def _batter(game: Game) -> str:
    batter = game.batter()
    if batter is None:
        raise ValueError("provider needs a batter up")
    return batter


def _team_of(world: World, player_id: str) -> str | None:
    return world.player(player_id).team


def _rostered_batter(game: Game, world: World) -> str:
    """The batter up, or the lineup player an inhabiting hall player bats for."""
    batter = _batter(game)
    if _team_of(world, batter) is not None:
        return batter
    side = game.batting_team()
    lineup = world.team(side.id).lineup
    return lineup[side.batter_index % len(lineup)]


# ---------------------------------------------------------------------------
# Pitch decision tree
# ---------------------------------------------------------------------------

class PitchKind(str, Enum):
    BALL = "ball"
    STRIKE_SWINGING = "strike_swinging"
    STRIKE_LOOKING = "strike_looking"
    FOUL = "foul"
    GROUND_OUT = "ground_out"
    FLYOUT = "flyout"
    DOUBLE_PLAY = "double_play"
    FIELDERS_CHOICE = "fielders_choice"
    HOME_RUN = "home_run"
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    QUADRUPLE = "quadruple"


HIT_BASES = {
    PitchKind.SINGLE: 1,
    PitchKind.DOUBLE: 2,
    PitchKind.TRIPLE: 3,
    PitchKind.QUADRUPLE: 4,
}


@dataclass
class PitchOutcome:
    kind: PitchKind
    fielder: str | None = None
    advancing_runners: list[str] = field(default_factory=list)
    runner_out: int | None = None


def _advancing(runners: Iterable, world: World, rng: Rng, threshold) -> list[str]:
    """One roll per runner, lead first; returns the ids that advance."""
    advancing = []
    for runner in runners:
        if rng.next() < threshold(world.player(runner.id), runner.base):
            advancing.append(runner.id)
    return advancing


def do_pitch(world: World, game: Game, rng: Rng) -> PitchOutcome:
    """Resolve one pitch into an outcome, drawing in a fixed order."""
    pitcher = world.player(game.pitcher())
    batter = world.player(_batter(game))
    ruleset = world.season_ruleset
    md = game.multiplier_data

    is_flinching = game.strikes == 0 and batter.mods.has(Mod.FLINCH)

    is_strike = rng.next() < formulas.strike_threshold(pitcher, batter, is_flinching, ruleset, md)
    does_swing = False
    if not is_flinching:
        does_swing = rng.next() < formulas.swing_threshold(pitcher, batter, is_strike, ruleset, md)
    if not does_swing:
        return PitchOutcome(PitchKind.STRIKE_LOOKING if is_strike else PitchKind.BALL)

    if not rng.next() < formulas.contact_threshold(pitcher, batter, is_strike, ruleset, md):
        return PitchOutcome(PitchKind.STRIKE_SWINGING)

    if rng.next() < formulas.foul_threshold(pitcher, batter, ruleset, md):
        return PitchOutcome(PitchKind.FOUL)

    out_defender = world.player(game.pick_fielder(world, rng.next()))
    # out_threshold is the chance of a hit, so a high roll is an out
    is_out = rng.next() > formulas.out_threshold(pitcher, batter, out_defender, ruleset, md)
    if is_out:
        fly_defender = game.pick_fielder(world, rng.next())
        if rng.next() < formulas.fly_threshold(batter, pitcher, ruleset, md):
            if game.outs == 2:
                return PitchOutcome(PitchKind.FLYOUT, fielder=fly_defender)
            advancing = _advancing(
                game.runners, world, rng,
                lambda r, base: formulas.flyout_advancement_threshold(r, base, ruleset, md),
            )
            return PitchOutcome(PitchKind.FLYOUT, fielder=fly_defender,
                                advancing_runners=advancing)

        ground_defender = game.pick_fielder(world, rng.next())
        if game.outs == 2:
            return PitchOutcome(PitchKind.GROUND_OUT, fielder=ground_defender)

        ground_advance = (
            lambda r, base: formulas.groundout_advancement_threshold(r, out_defender, ruleset, md)
        )
        advancing: list[str] = []
        if not game.runners.empty():
            dp_roll = rng.next()
            if game.runners.occupied(0):
                if dp_roll < formulas.double_play_threshold(batter, pitcher, out_defender, ruleset, md):
                    return PitchOutcome(PitchKind.DOUBLE_PLAY,
                                        runner_out=game.runners.pick_runner(rng.next()))
                if rng.next() < formulas.groundout_sacrifice_threshold(batter, ruleset, md):
                    advancing = _advancing(game.runners, world, rng, ground_advance)
                    return PitchOutcome(PitchKind.GROUND_OUT, fielder=ground_defender,
                                        advancing_runners=advancing)
                return PitchOutcome(PitchKind.FIELDERS_CHOICE,
                                    runner_out=game.runners.pick_runner_fc())
            advancing = _advancing(game.runners, world, rng, ground_advance)
        return PitchOutcome(PitchKind.GROUND_OUT, fielder=ground_defender,
                            advancing_runners=advancing)

    if rng.next() < formulas.hr_threshold(pitcher, batter, ruleset, md):
        return PitchOutcome(PitchKind.HOME_RUN)

    hit_defender = world.player(game.pick_fielder(world, rng.next()))
    double_roll = rng.next()
    triple_roll = rng.next()
    quadruple_roll = rng.next() if game.get_bases(world) == 5 else 1.0
    advancing = _advancing(
        game.runners, world, rng,
        lambda r, base: formulas.hit_advancement_threshold(r, hit_defender, ruleset, md),
    )

    if quadruple_roll < formulas.quadruple_threshold(pitcher, batter, hit_defender, ruleset, md):
        kind = PitchKind.QUADRUPLE
    elif triple_roll < formulas.triple_threshold(pitcher, batter, hit_defender, ruleset, md):
        kind = PitchKind.TRIPLE
    elif double_roll < formulas.double_threshold(pitcher, batter, hit_defender, ruleset, md):
        kind = PitchKind.DOUBLE
    else:
        kind = PitchKind.SINGLE
    return PitchOutcome(kind, fielder=hit_defender.id, advancing_runners=advancing)


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------

class Plugin:
    """A rule provider. ``tick`` returns an event or None."""

    def tick(self, game: Game, world: World, rng: Rng) -> AnyEvent | None:
        return None


class PregamePlugin(Plugin):
    def tick(self, game, world, rng):
        if game.started:
            return None
        if game.weather == Weather.COFFEE3 and not game.events.has("TripleThreat"):
            return TripleThreat()

        overperforming: list[str] = []
        underperforming: list[str] = []
        superyummy = poll_for_mod(game, world, Mod.SUPERYUMMY, PollScope.CURRENT)
        if game.weather == Weather.PEANUTS:
            overperforming.extend(superyummy)
        else:
            underperforming.extend(superyummy)
        if game.weather.is_coffee:
            overperforming.extend(poll_for_mod(game, world, Mod.PERK, PollScope.CURRENT))

        if (overperforming or underperforming) and not game.events.has("Performing"):
            return Performing(overperforming=overperforming, underperforming=underperforming)
        return None


class InningStatePlugin(Plugin):
    def tick(self, game, world, rng):
        if game.outs < game.get_max_outs():
            return None
        home = game.scoreboard.home_team.score
        away = game.scoreboard.away_team.score
        home_leads = home - away > 0.01
        away_leads = away - home > 0.01
        if game.inning >= 9 and (home_leads or (not game.top and away_leads)):
            return GameOver()
        if game.top:
            return InningSwitch(inning=game.inning, top=False)
        return InningSwitch(inning=game.inning + 1, top=True)


class InningEventPlugin(Plugin):
    def tick(self, game, world, rng):
        home, away = game.scoreboard.home_team, game.scoreboard.away_team
        if (game.inning == 4 and game.top
                and not game.events.has("TripleThreatDeactivation", 1)):
            home_off = (world.player(home.pitcher).mods.has(Mod.TRIPLE_THREAT)
                        and rng.next() < 0.333)
            away_off = (world.player(away.pitcher).mods.has(Mod.TRIPLE_THREAT)
                        and rng.next() < 0.333)
            if home_off or away_off:
                return TripleThreatDeactivation(home=home_off, away=away_off)

        if game.weather != Weather.SALMON:
            return None
        away_scored = abs(game.linescore_away[-1]) > 0.01
        home_scored = game.top and abs(game.linescore_home[-1]) > 0.01
        if not (game.events.last_is("InningSwitch") and (away_scored or home_scored)):
            return None
        if not rng.next() < 0.1375:
            return None
        if not rng.next() < 0.675:
            return Salmon(home_runs_lost=False, away_runs_lost=False)
        if away_scored and home_scored:
            if rng.next() < 0.2:
                return Salmon(home_runs_lost=True, away_runs_lost=True)
            home_lost = rng.next() < 0.5
            return Salmon(home_runs_lost=home_lost, away_runs_lost=not home_lost)
        return Salmon(home_runs_lost=home_scored, away_runs_lost=away_scored)


class BatterStatePlugin(Plugin):
    def tick(self, game, world, rng):
        if game.batter() is not None:
            return None
        side = game.batting_team()
        team = world.team(side.id)
        idx = side.batter_index
        after_switch = game.events.last_is("InningSwitch")
        first_batter = not game.started or (idx == 0 and game.inning == 1 and after_switch)
        inning_begin = not first_batter and after_switch

        if not first_batter and not inning_begin:
            prev = team.lineup[(idx - 1) % len(team.lineup)]
            prev_mods = world.player(prev).mods
            if prev_mods.has(Mod.REVERBERATING) and rng.next() < 0.2:
                return Reverberating(batter=prev)
            if (prev_mods.has(Mod.REPEATING) and game.weather == Weather.REVERB
                    and (game.events.last_is("BaseHit") or game.events.last_is("HomeRun"))):
                return Repeating(batter=prev)

        batter = team.lineup[idx % len(team.lineup)]
        mods = world.player(batter).mods
        if mods.has(Mod.SHELLED):
            return Shelled(batter=batter)
        if mods.has(Mod.ELSEWHERE):
            return Elsewhere(batter=batter)
        if mods.has(Mod.HAUNTED) and rng.next() < 0.2:
            inhabit = world.random_hall_player(rng)
            if inhabit is not None:
                return Inhabiting(batter=batter, inhabit=inhabit)
        return BatterUp(batter=batter)


class WeatherPlugin(Plugin):
    def tick(self, game, world, rng):
        fort = game.fortification
        match game.weather:
            case Weather.ECLIPSE:
                return self._eclipse(game, world, rng, fort)
            case Weather.PEANUTS:
                return self._peanuts(game, world, rng, fort)
            case Weather.BIRDS:
                return self._birds(game, world, rng)
            case Weather.FEEDBACK:
                return self._feedback(game, world, rng, fort)
            case Weather.REVERB:
                return self._reverb(game, world, rng)
            case Weather.BLOODDRAIN:
                return self._blooddrain(game, world, rng, fort)
            case Weather.SUN2 | Weather.BLACK_HOLE:
                kind = Sun2 if game.weather == Weather.SUN2 else BlackHole
                if game.scoreboard.home_team.score > 9.99:
                    return kind(home_team=True)
                if game.scoreboard.away_team.score > 9.99:
                    return kind(home_team=False)
                return None
            case Weather.COFFEE:
                return Beaned() if rng.next() < 0.02 - 0.012 * fort else None
            case Weather.COFFEE2:
                roll = rng.next()
                refilled = world.player(_batter(game)).mods.has(Mod.FREE_REFILL)
                if roll < 0.01875 - 0.0075 * fort and not refilled:
                    return PouredOver()
                return None
            case Weather.POLARITY_PLUS | Weather.POLARITY_MINUS:
                return PolaritySwitch() if rng.next() < 0.035 - 0.025 * fort else None
            case Weather.NIGHT:
                return self._night(game, world, rng)
            case _:
                return None

    def _eclipse(self, game, world, rng, fort):
        fire_eaters = poll_for_mod(game, world, Mod.FIRE_EATER, PollScope.PLAYING)
        incin_roll = rng.next()
        for fe in fire_eaters:
            if rng.next() < 0.002:
                return FireEater(target=fe)

        target = game.pick_player_weighted(
            world, rng.next(), lambda pid: not game.runners.contains(pid), True)
        target_player = world.player(target)
        unstable_check = target_player.mods.has(Mod.UNSTABLE) and incin_roll < 0.002
        regular_check = incin_roll < 0.00045 - 0.0004 * fort
        if not (unstable_check or regular_check):
            return None

        target_team = world.team_of(target)
        if target_player.mods.has(Mod.FIREPROOF) or target_team.mods.has(Mod.FIREPROOF):
            return Fireproof(target=target)
        minimized = poll_for_mod(game, world, Mod.MINIMIZED, PollScope.ALL)
        if any(_team_of(world, pid) == target_team.id for pid in minimized):
            return IffeyJr(target=target)

        chain = None
        if unstable_check:
            chain_target = game.pick_player_weighted(
                world, rng.next(), lambda pid: _team_of(world, pid) != target_team.id, False)
            if not world.player(chain_target).mods.has(Mod.STABLE):
                chain = chain_target

        replacement = None
        if target_player.mods.has(Mod.SQUIDDISH):
            hall_id = world.random_hall_player(rng)
            if hall_id is not None:
                replacement = copy.deepcopy(world.hall[hall_id])
        if replacement is None:
            replacement = Player.new(rng)
        return Incineration(target=target, replacement=replacement, chain=chain)

    def _peanuts(self, game, world, rng, fort):
        if rng.next() < 0.000002:
            target = game.pick_player_weighted(world, rng.next(), lambda pid: True, True)
            return BigPeanut(target=target)
        if rng.next() < 0.0006 - 0.00055 * fort:
            target = game.pick_player_weighted(
                world, rng.next(), lambda pid: not game.runners.contains(pid), True)
            return Peanut(target=target, yummy=False)
        batter = _batter(game)
        if world.player(batter).mods.has(Mod.HONEY_ROASTED) and rng.next() < 0.0076:
            rng.next()
            return TasteTheInfinite(target=game.pick_fielder(world, rng.next()))
        if world.player(game.pitcher()).mods.has(Mod.HONEY_ROASTED) and rng.next() < 0.0061:
            return TasteTheInfinite(target=batter)
        return None

    def _birds(self, game, world, rng):
        if rng.next() < 0.03:
            return Birds()
        for pid in poll_for_mod(game, world, Mod.SHELLED, PollScope.ALL):
            roll = rng.next()
            seeded = world.team_of(pid).mods.has(Mod.BIRD_SEED)
            if (seeded and roll < 0.001) or roll < 0.00015:
                return PeckedFree(player=pid)
        return None

    def _feedback(self, game, world, rng, fort):
        is_batter = rng.next() < 9.0 / 14.0
        feedback_roll = rng.next()
        batter = _rostered_batter(game, world)
        pitcher = game.pitcher()

        def triggers(pid: str) -> bool:
            mods = world.player(pid).mods
            return ((mods.has(Mod.SUPER_FLICKERING) and feedback_roll < 0.055)
                    or (mods.has(Mod.FLICKERING) and feedback_roll < 0.02)
                    or feedback_roll < 0.0001 - 0.0001 * fort)

        if is_batter:
            if not triggers(batter):
                return None
            target1, target2 = batter, game.pick_fielder(world, rng.next())
        else:
            if not triggers(pitcher):
                return None
            rotation = world.team(game.batting_team().id).rotation
            target1, target2 = pitcher, rotation[rng.index(len(rotation))]

        if world.player(target1).mods.has(Mod.SOUNDPROOF):
            return Soundproof(resists=target1, tangled=target2,
                              decreases=roll_random_boosts(rng, 0.0, -0.05, True))
        if world.player(target2).mods.has(Mod.SOUNDPROOF):
            return Soundproof(resists=target2, tangled=target1,
                              decreases=roll_random_boosts(rng, 0.0, -0.05, True))
        return Feedback(target1=target1, target2=target2)

    def _reverb(self, game, world, rng):
        if not rng.next() < 0.00003:
            return None
        type_roll = rng.next()
        if type_roll < 0.09:
            reverb_type = 0
        elif type_roll < 0.55:
            reverb_type = 1
        elif type_roll < 0.95:
            reverb_type = 2
        else:
            reverb_type = 3
        side = game.scoreboard.home_team if rng.next() < 0.5 else game.scoreboard.away_team
        team = world.team(side.id)
        gravity = [i for i, pid in enumerate(team.roster())
                   if world.player(pid).mods.has(Mod.GRAVITY)]
        changes = team.roll_reverb_changes(rng, reverb_type, gravity)
        return Reverb(reverb_type=reverb_type, team=team.id, changes=changes)

    def _blooddrain(self, game, world, rng, fort):
        ruleset = world.season_ruleset
        drain_threshold = formulas.blooddrain_threshold(ruleset, fort)
        siphons = poll_for_mod(game, world, Mod.SIPHON, PollScope.PLAYING)
        drain_roll = rng.next()
        if not (drain_roll < drain_threshold
                or (siphons and drain_roll < formulas.SIPHON_THRESHOLD)):
            return None

        batter = _rostered_batter(game, world)
        pitcher = game.pitcher()
        batting_id = game.batting_team().id

        def pick_hitter() -> str:
            if game.runners.empty():
                return batter
            return game.pick_player_weighted(
                world, rng.next(),
                lambda pid: pid == batter or game.runners.contains(pid), True)

        siphon = drain_roll > drain_threshold
        if siphon:
            drainer = siphons[rng.index(len(siphons))]
            if rng.next() < 0.5:
                target = pitcher if drainer == batter else batter
            else:
                target_roll = rng.next()
                if _team_of(world, drainer) == batting_id:
                    target = game.pick_fielder(world, target_roll)
                else:
                    target = pick_hitter()
        else:
            fielding_drains = rng.next() < 0.5
            if rng.next() < 0.5:
                drainer, target = (pitcher, batter) if fielding_drains else (batter, pitcher)
            else:
                fielder = game.pick_fielder(world, rng.next())
                hitter = pick_hitter()
                drainer, target = (fielder, hitter) if fielding_drains else (hitter, fielder)

        if world.team_of(target).mods.has(Mod.SEALANT):
            return BlockedDrain(drainer=drainer, target=target)

        effect_roll = rng.next() if siphon else 0.0
        if effect_roll < 0.35:
            siphon_effect = -1
        elif _team_of(world, drainer) == batting_id:
            siphon_effect = 1 if game.outs > 0 and effect_roll < 0.5 else -1
        else:
            siphon_effect = 2 if game.balls > 0 and effect_roll < 0.8 else 0
        return Blooddrain(drainer=drainer, target=target, stat=rng.index(4),
                          siphon=siphon, siphon_effect=siphon_effect)

    def _night(self, game, world, rng):
        if not rng.next() < 0.01:
            return None
        batter = rng.next() < 0.5
        side = game.batting_team() if batter else game.pitching_team()
        shadows = world.team(side.id).shadows
        if not shadows:
            return None
        idx = rng.index(len(shadows))
        boosts = roll_random_boosts(rng, 0.0, 0.2, False)
        return NightShift(batter=batter, replacement=shadows[idx],
                          replacement_idx=idx, boosts=boosts)


def _roll_letters(rng: Rng, player: Player, days_gone: int) -> int:
    letters = 0
    if days_gone > 18:
        for _ in range(len(player.name) - 1):
            rng.next()
            if rng.next() < days_gone / 100.0:
                letters += 1
    return letters


class ElsewherePlugin(Plugin):
    def tick(self, game, world, rng):
        ruleset = world.season_ruleset
        team = world.team(game.batting_team().id)
        roster = team.roster()

        return_threshold = formulas.elsewhere_return_threshold(ruleset)
        returned: list[str] = []
        letters: list[int] = []
        for pid in roster:
            player = world.player(pid)
            if player.mods.has(Mod.ELSEWHERE) and rng.next() < return_threshold:
                returned.append(pid)
                swept_on = player.swept_on if player.swept_on is not None else game.day
                letters.append(_roll_letters(rng, player, game.day - swept_on))
        if returned and not game.events.last_is("ElsewhereReturn"):
            return ElsewhereReturn(returned=returned, letters=letters)

        unscatter_threshold = formulas.unscatter_threshold(ruleset)
        unscattered = [
            pid for pid in roster
            if world.player(pid).mods.has(Mod.SCATTERED) and rng.next() < unscatter_threshold
        ]
        if unscattered and not game.events.last_is("Unscatter"):
            return Unscatter(unscattered=unscattered)
        return None


class PartyPlugin(Plugin):
    def tick(self, game, world, rng):
        if not rng.next() < formulas.party_threshold(world.season_ruleset):
            return None
        side = game.scoreboard.home_team if rng.next() < 0.5 else game.scoreboard.away_team
        team = world.team(side.id)
        if not team.partying:
            return None
        roster = team.roster()
        target = roster[rng.index(len(roster))]
        amount = 0.048 if world.player(target).mods.has(Mod.LIFE_OF_THE_PARTY) else 0.04
        return Party(target=target, boosts=roll_random_boosts(rng, amount, amount, True))


class FloodingPlugin(Plugin):
    def tick(self, game, world, rng):
        if game.weather != Weather.FLOODING:
            return None
        threshold = formulas.flooding_threshold(world.season_ruleset, game.fortification)
        if not rng.next() < threshold:
            return None
        elsewhere = [runner.id for runner in game.runners if rng.next() < 0.1]
        return Swept(elsewhere=elsewhere)


class ModPlugin(Plugin):
    def tick(self, game, world, rng):
        batter = _batter(game)
        batter_mods = world.player(batter).mods
        pitcher_mods = world.player(game.pitcher()).mods
        batting_mods = world.team(game.batting_team().id).mods
        pitching_mods = world.team(game.pitching_team().id).mods

        if batting_mods.has(Mod.ELECTRIC) and game.strikes > 0 and rng.next() < 0.2:
            return Zap(batter=True)
        if pitching_mods.has(Mod.ELECTRIC) and game.balls > 0 and rng.next() < 0.2:
            return Zap(batter=False)
        for debt, effect, hbp_type in ((Mod.DEBT_U, Mod.UNSTABLE, 0),
                                       (Mod.REFINANCED_DEBT, Mod.FLICKERING, 1),
                                       (Mod.CONSOLIDATED_DEBT, Mod.REPEATING, 2)):
            if pitcher_mods.has(debt) and not batter_mods.has(effect) and rng.next() < 0.02:
                return HitByPitch(target=batter, hbp_type=hbp_type)
        if (pitcher_mods.has(Mod.FRIEND_OF_CROWS) and game.weather == Weather.BIRDS
                and rng.next() < 0.0255):
            return CrowAmbush()

        if rng.next() < 0.005 and pitcher_mods.has(Mod.MILD):
            if game.balls == game.get_max_balls(world) - 1:
                return MildWalk()
            return MildPitch()
        if game.balls == 0 and game.strikes == 0:
            charm = formulas.charm_threshold(world.season_ruleset)
            if batter_mods.has(Mod.CHARM) and rng.next() < charm:
                return CharmWalk()
            if pitcher_mods.has(Mod.CHARM) and rng.next() < charm:
                return CharmStrikeout()
            if batter_mods.has(Mod.MAGMATIC):
                rng.next()
                return MagmaticHomeRun()
        return None


class StealingPlugin(Plugin):
    def tick(self, game, world, rng):
        defender = world.player(game.pick_fielder(world, rng.next()))
        runners = game.runners
        for base in reversed(range(game.get_bases(world))):
            runner_id = runners.at(base)
            if runner_id is None or base + 1 >= runners.home or not runners.can_advance(base):
                continue
            runner = world.player(runner_id)
            if rng.next() < formulas.steal_attempt_threshold(runner, defender):
                if rng.next() < formulas.steal_success_threshold(runner, defender):
                    return BaseSteal(runner=runner_id, base_from=base, base_to=base + 1)
                return CaughtStealing(runner=runner_id, base_from=base)
        return None


class BasePlugin(Plugin):
    """Pitch resolution and its conversion into an event."""

    def tick(self, game, world, rng):
        return pitch_event(do_pitch(world, game, rng), game, world, rng)


def pitch_event(outcome: PitchOutcome, game: Game, world: World, rng: Rng) -> AnyEvent:
    """Turn a resolved pitch into the event that records it."""
    max_balls = game.get_max_balls(world)
    last_strike = game.strikes + 1 >= game.get_max_strikes(world)

    match outcome.kind:
        case PitchKind.BALL:
            if game.balls + 1 < max_balls:
                return Ball()
            batter = world.player(_batter(game))
            if batter.mods.has(Mod.BASE_INSTINCTS) and rng.next() < 0.2:
                return InstinctWalk(third=rng.next() * rng.next() < 0.5)
            return Walk()
        case PitchKind.STRIKE_SWINGING:
            return Strikeout() if last_strike else Strike()
        case PitchKind.STRIKE_LOOKING:
            if not last_strike:
                return Strike()
            if world.team(game.batting_team().id).mods.has(Mod.O_NO) and game.balls == 0:
                return Foul()
            return Strikeout()
        case PitchKind.FOUL:
            return Foul()
        case PitchKind.GROUND_OUT | PitchKind.FLYOUT:
            after = game.runners.copy()
            after.advance_if(lambda r: r.id in outcome.advancing_runners)
            kind = GroundOut if outcome.kind == PitchKind.GROUND_OUT else Flyout
            return kind(fielder=outcome.fielder, runners_after=after)
        case PitchKind.DOUBLE_PLAY | PitchKind.FIELDERS_CHOICE:
            after = game.runners.copy()
            after.remove(outcome.runner_out)
            after.advance_all(1)
            kind = DoublePlay if outcome.kind == PitchKind.DOUBLE_PLAY else FieldersChoice
            return kind(runners_after=after)
        case PitchKind.HOME_RUN:
            return HomeRun()
        case PitchKind.SINGLE | PitchKind.DOUBLE | PitchKind.TRIPLE | PitchKind.QUADRUPLE:
            bases = HIT_BASES[outcome.kind]
            after = game.runners.copy()
            after.advance_all(bases)
            after.advance_if(lambda r: r.id in outcome.advancing_runners)
            return BaseHit(bases=bases, runners_after=after)
        case _:
            assert_never(outcome.kind)


PLUGINS: tuple[Plugin, ...] = (
    PregamePlugin(),
    InningStatePlugin(),
    InningEventPlugin(),
    BatterStatePlugin(),
    WeatherPlugin(),
    ElsewherePlugin(),
    PartyPlugin(),
    FloodingPlugin(),
    ModPlugin(),
    StealingPlugin(),
    BasePlugin(),
)


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------

class Sim:
    """Asks each provider in turn for the next event."""

    def __init__(self, world: World, rng: Rng, plugins: tuple[Plugin, ...] = PLUGINS):
        self.world = world
        self.rng = rng
        self.plugins = plugins

    def next(self, game: Game) -> AnyEvent:
        for plugin in self.plugins:
            event = plugin.tick(game, self.world, self.rng)
            if event is not None:
                return event
        raise NoEventProducedError(game.inning, game.top, len(game.events))


def run_match(game: Game, world: World, rng: Rng, max_ticks: int = 20000) -> list[AnyEvent]:
    """Tick the match until ``GameOver`` (or ``max_ticks``) and return the events."""
    sim = Sim(world, rng)
    applied: list[AnyEvent] = []
    logger.info("match start: %s at %s, weather %s, day %d",
                game.scoreboard.away_team.id, game.scoreboard.home_team.id,
                game.weather.value, game.day)
    while not game.is_over():
        if len(applied) >= max_ticks:
            logger.warning("match stopped after %d ticks without a result", max_ticks)
            break
        event = sim.next(game)
        apply_event(event, game, world)
        applied.append(event)
        logger.debug("tick %d: %s (inning %d %s, %d out, %d-%d)", len(applied), event.tag,
                     game.inning, "top" if game.top else "bottom", game.outs,
                     game.balls, game.strikes)
    logger.info("match end: %s %.1f, %s %.1f after %d events (%d draws)",
                game.scoreboard.home_team.id, game.scoreboard.home_team.score,
                game.scoreboard.away_team.id, game.scoreboard.away_team.score,
                len(applied), rng.draws)
    return applied


def replay(events: Iterable[AnyEvent], game: Game, world: World) -> Game:
    """Re-apply recorded events to ``game``; no randomness is drawn."""
    for event in events:
        apply_event(event, game, world)
    return game


def game_state_to_dict(game: Game, world: World) -> dict:
    """Snapshot of match and rosters, for logging and comparison."""
    return {"game": game.to_dict(), "world": world.to_dict()}
