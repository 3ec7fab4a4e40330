# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Match events and how each one mutates the match.

Every event is a small dataclass carrying all the values it needs, including
anything that had to be rolled when it was produced. Applying an event never
draws randomness, so a recorded event list replays exactly.

``apply_event`` is the single mutation entry point: it appends the event tag
to the match log, performs the one state change for that kind, and refreshes
the cached attribute multipliers.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import TypeAlias, assert_never

from bases import Baserunners
from entities import BOOST_WIDTH, Player, World, category_boosts
from errors import UnknownSubKindError
from game import POSTSEASON_DAY, Game, Weather
from mods import Mod, ModLifetime

logger = logging.getLogger(__name__)

HIT_TAGS = ("BaseHit", "HomeRun")

# HitByPitch codes -> mod inflicted on the batter
HBP_EFFECTS = {
    0: Mod.UNSTABLE,
    1: Mod.FLICKERING,
    2: Mod.REPEATING,
}

SIPHON_BOOST = -1
SIPHON_ADD_OUT = 0
SIPHON_REMOVE_OUT = 1
SIPHON_REMOVE_BALL = 2
SIPHON_EFFECTS = (SIPHON_BOOST, SIPHON_ADD_OUT, SIPHON_REMOVE_OUT, SIPHON_REMOVE_BALL)


# ---------------------------------------------------------------------------
# Event base
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Event:
    @property
    def tag(self) -> str:
        """Name recorded in the event log."""
        return type(self).__name__


# ---------------------------------------------------------------------------
# Match flow
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BatterUp(Event):
    batter: str


@dataclass(frozen=True)
class InningSwitch(Event):
    inning: int
    top: bool


@dataclass(frozen=True)
class GameOver(Event):
    pass


# ---------------------------------------------------------------------------
# Count
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ball(Event):
    pass


@dataclass(frozen=True)
class Strike(Event):
    pass


@dataclass(frozen=True)
class Foul(Event):
    pass


@dataclass(frozen=True)
class Zap(Event):
    batter: bool


@dataclass(frozen=True)
class MildPitch(Event):
    pass


# ---------------------------------------------------------------------------
# Plate appearance endings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Strikeout(Event):
    pass


@dataclass(frozen=True)
class CharmStrikeout(Event):
    pass


@dataclass(frozen=True)
class Walk(Event):
    pass


@dataclass(frozen=True)
class CharmWalk(Event):
    pass


@dataclass(frozen=True)
class InstinctWalk(Event):
    third: bool


@dataclass(frozen=True)
class MildWalk(Event):
    pass


@dataclass(frozen=True)
class HomeRun(Event):
    pass


@dataclass(frozen=True)
class MagmaticHomeRun(Event):
    pass


@dataclass(frozen=True)
class BaseHit(Event):
    bases: int
    runners_after: Baserunners


@dataclass(frozen=True)
class GroundOut(Event):
    fielder: str
    runners_after: Baserunners


@dataclass(frozen=True)
class Flyout(Event):
    fielder: str
    runners_after: Baserunners


@dataclass(frozen=True)
class DoublePlay(Event):
    runners_after: Baserunners


@dataclass(frozen=True)
class FieldersChoice(Event):
    runners_after: Baserunners


@dataclass(frozen=True)
class HitByPitch(Event):
    target: str
    hbp_type: int


@dataclass(frozen=True)
class CrowAmbush(Event):
    pass


# ---------------------------------------------------------------------------
# Baserunning
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BaseSteal(Event):
    runner: str
    base_from: int
    base_to: int


@dataclass(frozen=True)
class CaughtStealing(Event):
    runner: str
    base_from: int


# ---------------------------------------------------------------------------
# Weather and boundary effects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Sun2(Event):
    home_team: bool


@dataclass(frozen=True)
class BlackHole(Event):
    home_team: bool


@dataclass(frozen=True)
class Salmon(Event):
    home_runs_lost: bool
    away_runs_lost: bool


@dataclass(frozen=True)
class PolaritySwitch(Event):
    pass


@dataclass(frozen=True)
class Birds(Event):
    pass


# ---------------------------------------------------------------------------
# Mod lifecycle
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Party(Event):
    target: str
    boosts: list[float]


@dataclass(frozen=True)
class Peanut(Event):
    target: str
    yummy: bool


@dataclass(frozen=True)
class BigPeanut(Event):
    target: str


@dataclass(frozen=True)
class PeckedFree(Event):
    player: str


@dataclass(frozen=True)
class FireEater(Event):
    target: str


@dataclass(frozen=True)
class TasteTheInfinite(Event):
    target: str


@dataclass(frozen=True)
class Performing(Event):
    overperforming: list[str] = field(default_factory=list)
    underperforming: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Beaned(Event):
    pass


@dataclass(frozen=True)
class PouredOver(Event):
    pass


@dataclass(frozen=True)
class TripleThreat(Event):
    pass


@dataclass(frozen=True)
class TripleThreatDeactivation(Event):
    home: bool
    away: bool


@dataclass(frozen=True)
class Blooddrain(Event):
    drainer: str
    target: str
    stat: int
    siphon: bool
    siphon_effect: int


@dataclass(frozen=True)
class BlockedDrain(Event):
    drainer: str
    target: str


@dataclass(frozen=True)
class Soundproof(Event):
    resists: str
    tangled: str
    decreases: list[float]


@dataclass(frozen=True)
class Fireproof(Event):
    target: str


@dataclass(frozen=True)
class IffeyJr(Event):
    target: str


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Incineration(Event):
    """``replacement`` is either a freshly rolled player or a hall snapshot."""
    target: str
    replacement: Player
    chain: str | None = None


@dataclass(frozen=True)
class Feedback(Event):
    target1: str
    target2: str


@dataclass(frozen=True)
class Reverb(Event):
    reverb_type: int
    team: str
    changes: list[int]


@dataclass(frozen=True)
class NightShift(Event):
    batter: bool
    replacement: str
    replacement_idx: int
    boosts: list[float]


@dataclass(frozen=True)
class Inhabiting(Event):
    batter: str
    inhabit: str


@dataclass(frozen=True)
class Reverberating(Event):
    batter: str


@dataclass(frozen=True)
class Repeating(Event):
    batter: str


@dataclass(frozen=True)
class Shelled(Event):
    batter: str


@dataclass(frozen=True)
class Elsewhere(Event):
    batter: str


# ---------------------------------------------------------------------------
# Scatter
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Swept(Event):
    elsewhere: list[str]


@dataclass(frozen=True)
class ElsewhereReturn(Event):
    returned: list[str]
    letters: list[int]


@dataclass(frozen=True)
class Unscatter(Event):
    unscattered: list[str]


AnyEvent: TypeAlias = (
    BatterUp | InningSwitch | GameOver
    | Ball | Strike | Foul | Zap | MildPitch
    | Strikeout | CharmStrikeout | Walk | CharmWalk | InstinctWalk | MildWalk
    | HomeRun | MagmaticHomeRun | BaseHit | GroundOut | Flyout | DoublePlay
    | FieldersChoice | HitByPitch | CrowAmbush
    | BaseSteal | CaughtStealing
    | Sun2 | BlackHole | Salmon | PolaritySwitch | Birds
    | Party | Peanut | BigPeanut | PeckedFree | FireEater | TasteTheInfinite
    | Performing | Beaned | PouredOver | TripleThreat | TripleThreatDeactivation
    | Blooddrain | BlockedDrain | Soundproof | Fireproof | IffeyJr
    | Incineration | Feedback | Reverb | NightShift | Inhabiting
    | Reverberating | Repeating | Shelled | Elsewhere
    | Swept | ElsewhereReturn | Unscatter
)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _current_batter(game: Game, world: World) -> Player:
    batter = game.batter()
    if batter is None:
        raise ValueError("no batter is up")
    return world.player(batter)


def _score_and_sweep(game: Game, world: World) -> None:
    game.score(world)
    game.base_sweep()


def upgrade_spicy(game: Game, world: World) -> None:
    """Heat a spicy batter up on consecutive hits.

    Called after the hit is recorded in the batter's feed.
    """
    batter = _current_batter(game, world)
    if batter.mods.has(Mod.SPICY) and batter.feed.trailing(HIT_TAGS) == 2:
        batter.mods.add(Mod.HEATING_UP, ModLifetime.PERMANENT)
    elif batter.mods.has(Mod.HEATING_UP):
        batter.mods.remove(Mod.HEATING_UP)
        batter.mods.add(Mod.RED_HOT, ModLifetime.PERMANENT)


def downgrade_spicy(game: Game, world: World) -> None:
    batter = _current_batter(game, world)
    if batter.mods.has(Mod.RED_HOT):
        batter.mods.remove(Mod.RED_HOT)
    elif batter.mods.has(Mod.HEATING_UP):
        batter.mods.remove(Mod.HEATING_UP)


def _describe_match(game: Game, world: World) -> str:
    away = world.team(game.scoreboard.away_team.id).name
    home = world.team(game.scoreboard.home_team.id).name
    return f"{away} at {home}, day {game.day}"


def _record_win(world: World, team_id: str, day: int, delta: int = 1) -> None:
    team = world.team(team_id)
    if day >= POSTSEASON_DAY:
        team.postseason_wins += delta
    else:
        team.wins += delta


def _rotation_slot(game: Game, world: World, team_id: str) -> str:
    rotation = world.team(team_id).rotation
    return rotation[game.day % len(rotation)]


# ---------------------------------------------------------------------------
# Category appliers
# ---------------------------------------------------------------------------

def _apply_plate_ending(event: AnyEvent, game: Game, world: World) -> None:
    """Outcomes that close a plate appearance."""
    batter = _current_batter(game, world)
    match event:
        case Strikeout() | CharmStrikeout():
            batter.feed.add(event.tag)
            pitcher = world.player(game.pitcher())
            if pitcher.mods.has(Mod.TRIPLE_THREAT) and (
                game.balls == 3 or game.runners.occupied(2) or len(game.runners) == 3
            ):
                game.batting_team().score -= 0.3
            game.outs += 1
        case Walk() | CharmWalk():
            batter.feed.add(event.tag)
            game.runners.walk()
            game.runners.add(0, batter.id)
            _score_and_sweep(game, world)
        case InstinctWalk(third=third):
            batter.feed.add(event.tag)
            game.runners.walk_instincts(third)
            game.runners.add(2 if third else 1, batter.id)
            _score_and_sweep(game, world)
        case MildWalk():
            batter.feed.add(event.tag)
            game.runners.advance_all(1)
            game.runners.add(0, batter.id)
            _score_and_sweep(game, world)
        case HomeRun() | MagmaticHomeRun():
            batter.feed.add(event.tag)
            if isinstance(event, MagmaticHomeRun):
                batter.mods.remove(Mod.MAGMATIC)
            upgrade_spicy(game, world)
            solo = game.runners.empty()
            game.runners.advance_all(game.get_bases(world))
            game.score(world)
            game.batting_team().score += game.get_run_value() + batter.get_run_value()
            game.base_sweep()
            if solo:
                game.scoring_plays_inning += 1
        case BaseHit(bases=bases, runners_after=runners_after):
            batter.feed.add(event.tag)
            upgrade_spicy(game, world)
            game.runners = runners_after.copy()
            _score_and_sweep(game, world)
            game.runners.add(bases - 1, batter.id)
        case GroundOut(runners_after=runners_after) | Flyout(runners_after=runners_after):
            batter.feed.add(event.tag)
            downgrade_spicy(game, world)
            game.outs += 1
            game.runners = runners_after.copy()
            _score_and_sweep(game, world)
        case DoublePlay(runners_after=runners_after):
            batter.feed.add(event.tag)
            downgrade_spicy(game, world)
            game.outs += 2
            game.runners = runners_after.copy()
            _score_and_sweep(game, world)
        case FieldersChoice(runners_after=runners_after):
            batter.feed.add(event.tag)
            downgrade_spicy(game, world)
            game.outs += 1
            game.runners = runners_after.copy()
            game.runners.add(0, batter.id)
            _score_and_sweep(game, world)
        case HitByPitch(target=target, hbp_type=hbp_type):
            if hbp_type not in HBP_EFFECTS:
                raise UnknownSubKindError(event.tag, "hbp_type", hbp_type)
            world.player(target).mods.add(HBP_EFFECTS[hbp_type], ModLifetime.WEEK)
            game.runners.walk()
            game.runners.add(0, batter.id)
            _score_and_sweep(game, world)
        case CrowAmbush():
            game.outs += 1
        case _:
            raise TypeError(f"{event.tag} does not end a plate appearance")
    game.end_pa()


def _apply_inning_switch(event: InningSwitch, game: Game, world: World) -> None:
    if game.weather == Weather.SALMON:
        # snapshot the runs of the half that just ended
        if game.top:
            runs = game.scoreboard.away_team.score - game.linescore_away[0]
            game.linescore_away.append(runs)
            game.linescore_away[0] += runs
        else:
            runs = game.scoreboard.home_team.score - game.linescore_home[0]
            game.linescore_home.append(runs)
            game.linescore_home[0] += runs
    game.inning = event.inning
    game.scoreboard.top = event.top
    game.outs = 0
    game.balls = 0
    game.strikes = 0
    game.scoring_plays_inning = 0
    game.runners = Baserunners(game.get_bases(world))


def _apply_game_over(game: Game, world: World) -> None:
    home, away = game.scoreboard.home_team, game.scoreboard.away_team
    winner, loser = (home, away) if home.score > away.score else (away, home)
    _record_win(world, winner.id, game.day)
    loser_team = world.team(loser.id)
    if game.day >= POSTSEASON_DAY:
        loser_team.postseason_losses += 1
    else:
        loser_team.losses += 1
    logger.info("game over: %s %.1f - %s %.1f", home.id, home.score, away.id, away.score)


def _apply_salmon(event: Salmon, game: Game) -> None:
    # A Salmon earlier in this inning means the rollbacks stack.
    window = 3 if game.top else 2
    if game.events.count("Salmon", window) <= 1:
        game.salmon_resets_inning = 0
    if event.away_runs_lost:
        idx = max(1, len(game.linescore_away) - 1 - game.salmon_resets_inning)
        game.scoreboard.away_team.score -= game.linescore_away[idx]
    if event.home_runs_lost:
        idx = max(1, len(game.linescore_home) - 1 - game.salmon_resets_inning)
        game.scoreboard.home_team.score -= game.linescore_home[idx]
    if not game.top:
        game.scoreboard.top = True
    else:
        game.inning -= 1
    game.salmon_resets_inning += 1


def _apply_incineration(event: Incineration, game: Game, world: World) -> None:
    target = world.player(event.target)
    logger.info("%s: incineration of %s (%s)", _describe_match(game, world),
                target.name, target.team)
    replacement = copy.deepcopy(event.replacement)
    from_hall = replacement.id in world.hall
    if not from_hall:
        world.add_player(replacement)

    batting, pitching = game.batting_team(), game.pitching_team()
    if batting.batter == event.target:
        batting.batter = replacement.id
    elif pitching.pitcher == event.target:
        pitching.pitcher = replacement.id
    elif batting.pitcher == event.target:
        batting.pitcher = replacement.id

    if from_hall:
        world.swap_hall(event.target, replacement.id)
    else:
        world.replace_player(event.target, replacement.id)
    if event.chain is not None:
        world.player(event.chain).mods.add(Mod.UNSTABLE, ModLifetime.WEEK)


def _apply_feedback(event: Feedback, game: Game, world: World) -> None:
    logger.info("%s: feedback swaps %s and %s", _describe_match(game, world),
                world.player(event.target1).name, world.player(event.target2).name)
    if game.pitcher() == event.target1:
        game.assign_pitcher(event.target2)
    elif game.batter() is not None:
        game.assign_batter(event.target2)
    if game.batting_team().pitcher == event.target2:
        game.batting_team().pitcher = event.target1
    world.swap(event.target1, event.target2)


def _apply_reverb(event: Reverb, game: Game, world: World) -> None:
    team = world.team(event.team)
    logger.info("%s: reverb type %d on %s", _describe_match(game, world),
                event.reverb_type, team.name)
    team.apply_reverb_changes(event.reverb_type, event.changes)
    if event.reverb_type != 3 and game.batting_team().id == event.team:
        idx = game.batting_team().batter_index
        game.assign_batter(team.lineup[idx % len(team.lineup)])
    elif event.reverb_type != 2:
        if game.pitching_team().id == event.team:
            game.assign_pitcher(_rotation_slot(game, world, event.team))
        else:
            game.batting_team().pitcher = _rotation_slot(game, world, event.team)


def _apply_blooddrain(event: Blooddrain, game: Game, world: World) -> None:
    if event.siphon_effect not in SIPHON_EFFECTS:
        raise UnknownSubKindError(event.tag, "siphon_effect", event.siphon_effect)
    decreases = category_boosts(event.stat, -0.1)
    drainer = world.player(event.drainer)
    logger.info("%s: %s drains %s (stat %d, effect %d)", _describe_match(game, world),
                drainer.name, world.player(event.target).name, event.stat,
                event.siphon_effect)
    match event.siphon_effect:
        case -1:
            drainer.boost(category_boosts(event.stat, 0.1))
        case 0:
            game.outs += 1
        case 1:
            game.outs = max(0, game.outs - 1)
        case 2:
            game.balls = max(0, game.balls - 1)
    world.player(event.target).boost(decreases)


def _apply_night_shift(event: NightShift, game: Game, world: World) -> None:
    if event.batter:
        side = game.batting_team()
        team = world.team(side.id)
        if side.batter is None:
            raise ValueError("night shift needs a batter up")
        slot = side.batter_index % len(team.lineup)
        # an inhabiting hall player leaves its host in the lineup slot
        active = team.lineup[slot]
        team.lineup[slot] = event.replacement
        side.batter = event.replacement
    else:
        side = game.pitching_team()
        team = world.team(side.id)
        active = side.pitcher
        if active in team.rotation:
            slot = team.rotation.index(active)
        else:
            slot = game.day % len(team.rotation)
        team.rotation[slot] = event.replacement
        side.pitcher = event.replacement
    team.shadows[event.replacement_idx] = active
    world.player(event.replacement).boost(event.boosts)
    logger.info("%s: night shift brings %s in for %s", _describe_match(game, world),
                event.replacement, active)


def _apply_swept(event: Swept, game: Game, world: World) -> None:
    for runner in game.runners:
        player = world.player(runner.id)
        if player.mods.has(Mod.FLIPPERS):
            game.batting_team().score += game.get_run_value() + player.get_run_value()
    game.runners.clear()
    for pid in event.elsewhere:
        player = world.player(pid)
        logger.info("%s: %s swept elsewhere", _describe_match(game, world), player.name)
        player.mods.add(Mod.ELSEWHERE, ModLifetime.PERMANENT)
        player.swept_on = game.day


def _apply_elsewhere_return(event: ElsewhereReturn, game: Game, world: World) -> None:
    for pid, letters in zip(event.returned, event.letters):
        player = world.player(pid)
        days = game.day - (player.swept_on if player.swept_on is not None else game.day)
        logger.info("%s: %s returned after %d days, %d letters scattered",
                    _describe_match(game, world), player.name, days, letters)
        player.mods.remove(Mod.ELSEWHERE)
        player.swept_on = None
        if letters > 0:
            player.mods.add(Mod.SCATTERED, ModLifetime.PERMANENT)
            player.scattered_letters = letters


def _apply_unscatter(event: Unscatter, world: World) -> None:
    for pid in event.unscattered:
        player = world.player(pid)
        player.scattered_letters = max(0, player.scattered_letters - 1)
        if player.scattered_letters == 0:
            logger.info("%s is no longer scattered", player.name)
            player.mods.remove(Mod.SCATTERED)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def apply_event(event: AnyEvent, game: Game, world: World) -> None:
    """Apply ``event`` to the match and the roster store."""
    if isinstance(event, Feedback):
        # both players need roster slots before anything changes
        world.locate(event.target1)
        world.locate(event.target2)
    game.events.add(event.tag)
    match event:
        case BatterUp(batter=batter):
            game.batting_team().batter = batter
            game.started = True
        case InningSwitch():
            _apply_inning_switch(event, game, world)
        case GameOver():
            _apply_game_over(game, world)

        case Ball():
            game.balls += 1
        case Strike():
            game.strikes += 1
        case Foul():
            game.strikes = min(game.strikes + 1, game.get_max_strikes(world) - 1)
        case Zap(batter=batter):
            if batter:
                game.strikes = max(0, game.strikes - 1)
            else:
                game.balls = max(0, game.balls - 1)
        case MildPitch():
            game.balls += 1
            game.runners.advance_all(1)
            _score_and_sweep(game, world)

        case (Strikeout() | CharmStrikeout() | Walk() | CharmWalk() | InstinctWalk()
              | MildWalk() | HomeRun() | MagmaticHomeRun() | BaseHit() | GroundOut()
              | Flyout() | DoublePlay() | FieldersChoice() | HitByPitch() | CrowAmbush()):
            _apply_plate_ending(event, game, world)

        case BaseSteal(runner=runner, base_from=base_from):
            if world.player(runner).mods.has(Mod.BLASERUNNING):
                game.batting_team().score += 0.2
            game.runners.advance(base_from)
        case CaughtStealing(base_from=base_from):
            game.runners.remove(base_from)
            game.outs += 1

        case Sun2(home_team=home_team):
            side = game.scoreboard.home_team if home_team else game.scoreboard.away_team
            side.score -= 10.0
            _record_win(world, side.id, game.day)
        case BlackHole(home_team=home_team):
            side, other = ((game.scoreboard.home_team, game.scoreboard.away_team) if home_team
                           else (game.scoreboard.away_team, game.scoreboard.home_team))
            side.score -= 10.0
            _record_win(world, other.id, game.day, delta=-1)
        case Salmon():
            _apply_salmon(event, game)
        case PolaritySwitch():
            game.polarity = not game.polarity

        case Party(target=target, boosts=boosts):
            world.player(target).boost(boosts)
        case Peanut(target=target, yummy=yummy):
            player = world.player(target)
            logger.info("%s: %s has a peanut reaction (yummy=%s)",
                        _describe_match(game, world), player.name, yummy)
            player.boost([0.2 if yummy else -0.2] * BOOST_WIDTH)
        case BigPeanut(target=target) | TasteTheInfinite(target=target):
            logger.info("%s: %s shelled", _describe_match(game, world),
                        world.player(target).name)
            world.player(target).mods.add(Mod.SHELLED, ModLifetime.PERMANENT)
        case PeckedFree(player=player):
            world.player(player).mods.remove(Mod.SHELLED)
            world.player(player).mods.add(Mod.SUPERALLERGIC, ModLifetime.PERMANENT)
        case FireEater(target=target):
            world.player(target).mods.add(Mod.MAGMATIC, ModLifetime.PERMANENT)
        case Performing(overperforming=over, underperforming=under):
            for pid in over:
                world.player(pid).mods.add(Mod.OVERPERFORMING, ModLifetime.GAME)
            for pid in under:
                world.player(pid).mods.add(Mod.UNDERPERFORMING, ModLifetime.GAME)
        case Beaned():
            batter = _current_batter(game, world)
            if batter.mods.has(Mod.WIRED):
                batter.mods.remove(Mod.WIRED)
                batter.mods.add(Mod.TIRED, ModLifetime.GAME)
            elif batter.mods.has(Mod.TIRED):
                batter.mods.remove(Mod.TIRED)
            else:
                batter.mods.add(Mod.WIRED, ModLifetime.GAME)
        case PouredOver():
            _current_batter(game, world).mods.add(Mod.FREE_REFILL, ModLifetime.GAME)
        case TripleThreat():
            for side in (game.scoreboard.home_team, game.scoreboard.away_team):
                world.player(side.pitcher).mods.add(Mod.TRIPLE_THREAT, ModLifetime.PERMANENT)
        case TripleThreatDeactivation(home=home, away=away):
            if home:
                world.player(game.scoreboard.home_team.pitcher).mods.remove(Mod.TRIPLE_THREAT)
            if away:
                world.player(game.scoreboard.away_team.pitcher).mods.remove(Mod.TRIPLE_THREAT)
        case Blooddrain():
            _apply_blooddrain(event, game, world)
        case Soundproof(tangled=tangled, decreases=decreases):
            world.player(tangled).boost(decreases)

        case Incineration():
            _apply_incineration(event, game, world)
        case Feedback():
            _apply_feedback(event, game, world)
        case Reverb():
            _apply_reverb(event, game, world)
        case NightShift():
            _apply_night_shift(event, game, world)
        case Inhabiting(inhabit=inhabit):
            game.batting_team().batter = inhabit
            game.started = True
        case Reverberating(batter=batter) | Repeating(batter=batter):
            side = game.batting_team()
            side.batter_index -= 1
            side.batter = batter
        case Shelled() | Elsewhere():
            game.batting_team().batter_index += 1
            game.started = True

        case Swept():
            _apply_swept(event, game, world)
        case ElsewhereReturn():
            _apply_elsewhere_return(event, game, world)
        case Unscatter():
            _apply_unscatter(event, world)

        case Birds() | Fireproof() | IffeyJr() | BlockedDrain():
            pass
        case _:
            assert_never(event)
    game.update_multiplier_data(world)
