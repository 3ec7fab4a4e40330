# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Match state.

``Game`` is the authoritative state of one match in progress: count, outs,
inning, score, runners and the match event log. Rule providers only read it;
events mutate it through ``events.apply_event``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from bases import Baserunners
from entities import Player, Team, World
from event_log import EventLog
from formulas import MultiplierData
from mods import Mod

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class Weather(str, Enum):
    SUN = "SUN"
    ECLIPSE = "ECLIPSE"
    PEANUTS = "PEANUTS"
    BIRDS = "BIRDS"
    FEEDBACK = "FEEDBACK"
    REVERB = "REVERB"
    BLOODDRAIN = "BLOODDRAIN"
    SUN2 = "SUN2"
    BLACK_HOLE = "BLACK_HOLE"
    COFFEE = "COFFEE"
    COFFEE2 = "COFFEE2"
    COFFEE3 = "COFFEE3"
    FLOODING = "FLOODING"
    SALMON = "SALMON"
    POLARITY_PLUS = "POLARITY_PLUS"
    POLARITY_MINUS = "POLARITY_MINUS"
    SUN_POINT_ONE = "SUN_POINT_ONE"
    SUM_SUN = "SUM_SUN"
    NIGHT = "NIGHT"

    @property
    def is_coffee(self) -> bool:
        return self in (Weather.COFFEE, Weather.COFFEE2, Weather.COFFEE3)


POSTSEASON_DAY = 99


# ---------------------------------------------------------------------------
# Scoreboard
# ---------------------------------------------------------------------------

@dataclass
class GameTeam:
    """One side of the match."""
    id: str
    pitcher: str
    score: float = 0.0
    batter: str | None = None
    batter_index: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "score": round(self.score, 4),
            "batter": self.batter,
            "pitcher": self.pitcher,
            "batter_index": self.batter_index,
        }


@dataclass
class Scoreboard:
    home_team: GameTeam
    away_team: GameTeam
    top: bool = True

    def batting_team(self) -> GameTeam:
        return self.away_team if self.top else self.home_team

    def pitching_team(self) -> GameTeam:
        return self.home_team if self.top else self.away_team


# ---------------------------------------------------------------------------
# Game
# ---------------------------------------------------------------------------

@dataclass
class Game:
    """Authoritative state of one match."""
    scoreboard: Scoreboard
    weather: Weather = Weather.SUN
    day: int = 0
    inning: int = 1
    outs: int = 0
    balls: int = 0
    strikes: int = 0
    polarity: bool = False
    scoring_plays_inning: int = 0
    salmon_resets_inning: int = 0
    linescore_home: list[float] = field(default_factory=lambda: [0.0])
    linescore_away: list[float] = field(default_factory=lambda: [0.0])
    runners: Baserunners = field(default_factory=Baserunners)
    events: EventLog = field(default_factory=EventLog)
    started: bool = False
    fortification: float = 0.0
    multiplier_data: MultiplierData = field(default_factory=MultiplierData)

    @classmethod
    def new(cls, world: World, home_id: str, away_id: str,
            weather: Weather = Weather.SUN, day: int = 0,
            fortification: float = 0.0) -> Game:
        """Set up a match between two teams in ``world``.

        Each side starts the pitcher in rotation slot ``day % len(rotation)``.
        """
        home = world.team(home_id)
        away = world.team(away_id)
        for team in (home, away):
            if not team.lineup or not team.rotation:
                raise ValueError(f"team {team.id} needs a lineup and a rotation")
        scoreboard = Scoreboard(
            home_team=GameTeam(id=home.id, pitcher=home.rotation[day % len(home.rotation)]),
            away_team=GameTeam(id=away.id, pitcher=away.rotation[day % len(away.rotation)]),
        )
        game = cls(
            scoreboard=scoreboard,
            weather=weather,
            day=day,
            polarity=weather == Weather.POLARITY_MINUS,
            fortification=fortification,
        )
        game.runners = Baserunners(game.get_bases(world))
        game.update_multiplier_data(world)
        return game

    # -------------------------------------------------------------------
    # Derived queries
    # -------------------------------------------------------------------

    @property
    def top(self) -> bool:
        return self.scoreboard.top

    def batting_team(self) -> GameTeam:
        return self.scoreboard.batting_team()

    def pitching_team(self) -> GameTeam:
        return self.scoreboard.pitching_team()

    def batter(self) -> str | None:
        return self.batting_team().batter

    def pitcher(self) -> str:
        return self.pitching_team().pitcher

    def _batting_team_entity(self, world: World) -> Team:
        return world.team(self.batting_team().id)

    def get_bases(self, world: World) -> int:
        return 5 if self._batting_team_entity(world).mods.has(Mod.FIFTH_BASE) else 4

    def get_max_balls(self, world: World) -> int:
        return 3 if self._batting_team_entity(world).mods.has(Mod.WALK_IN_THE_PARK) else 4

    def get_max_strikes(self, world: World) -> int:
        batter = self.batter()
        if self._batting_team_entity(world).mods.has(Mod.FOURTH_STRIKE):
            return 4
        if batter is not None and world.player(batter).mods.has(Mod.FOURTH_STRIKE):
            return 4
        return 3

    def get_max_outs(self) -> int:
        return 3

    def get_run_value(self) -> float:
        return -1.0 if self.polarity else 1.0

    def pick_fielder(self, world: World, roll: float) -> str:
        """Pick a fielder from the pitching team's lineup by ``roll``."""
        lineup = world.team(self.pitching_team().id).lineup
        return lineup[int(roll * len(lineup))]

    def pick_player_weighted(self, world: World, roll: float,
                             predicate: Callable[[str], bool],
                             include_pitchers: bool) -> str:
        """Pick one player on the field by ``roll`` among those matching.

        Candidates are both lineups, plus both active pitchers when
        ``include_pitchers`` is set, each weighted equally.
        """
        home, away = self.scoreboard.home_team, self.scoreboard.away_team
        candidates = list(world.team(home.id).lineup)
        if include_pitchers:
            candidates.append(home.pitcher)
        candidates.extend(world.team(away.id).lineup)
        if include_pitchers:
            candidates.append(away.pitcher)
        candidates = [pid for pid in candidates if predicate(pid)]
        if not candidates:
            raise ValueError("no player matches the selection")
        return candidates[int(roll * len(candidates))]

    def is_over(self) -> bool:
        return self.events.last_is("GameOver")

    # -------------------------------------------------------------------
    # Mutation helpers used by events
    # -------------------------------------------------------------------

    def end_pa(self) -> None:
        """Close the plate appearance: reset the count and move the order on."""
        self.balls = 0
        self.strikes = 0
        team = self.batting_team()
        team.batter = None
        team.batter_index += 1

    def score(self, world: World) -> float:
        """Credit every runner at or past home and take them off the bases."""
        scored = self.runners.remove_scored()
        if not scored:
            return 0.0
        runs = 0.0
        for runner in scored:
            runs += self.get_run_value() + world.player(runner.id).get_run_value()
        self.batting_team().score += runs
        self.scoring_plays_inning += 1
        logger.debug("%s scored %d runner(s) for %.1f", self.batting_team().id,
                     len(scored), runs)
        return runs

    def base_sweep(self) -> None:
        self.runners.sweep()

    def assign_batter(self, player_id: str) -> None:
        self.batting_team().batter = player_id

    def assign_pitcher(self, player_id: str) -> None:
        self.pitching_team().pitcher = player_id

    def update_multiplier_data(self, world: World) -> None:
        self.multiplier_data = compute_multiplier_data(self, world)

    # -------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "inning": self.inning,
            "top": self.top,
            "outs": self.outs,
            "balls": self.balls,
            "strikes": self.strikes,
            "weather": self.weather.value,
            "day": self.day,
            "polarity": self.polarity,
            "scoring_plays_inning": self.scoring_plays_inning,
            "salmon_resets_inning": self.salmon_resets_inning,
            "linescore_home": [round(v, 4) for v in self.linescore_home],
            "linescore_away": [round(v, 4) for v in self.linescore_away],
            "runners": {str(base): pid for base, pid in self.runners.as_dict().items()},
            "events": len(self.events),
            "started": self.started,
            "home_team": self.scoreboard.home_team.to_dict(),
            "away_team": self.scoreboard.away_team.to_dict(),
        }


# ---------------------------------------------------------------------------
# Multipliers
# ---------------------------------------------------------------------------

def _player_multiplier(player: Player, team: Team, is_away: bool, day: int) -> float:
    m = 1.0
    if player.mods.has(Mod.OVERPERFORMING):
        m += 0.2
    if player.mods.has(Mod.UNDERPERFORMING):
        m -= 0.2
    if team.mods.has(Mod.GROWTH):
        m += 0.05 * min(day, POSTSEASON_DAY) / POSTSEASON_DAY
    if team.mods.has(Mod.TRAVELING) and is_away:
        m += 0.05
    if team.mods.has(Mod.EARLBIRDS) and day < 27:
        m += 0.05
    if team.mods.has(Mod.LATE_TO_THE_PARTY) and day >= 72:
        m += 0.2
    return m


def compute_multiplier_data(game: Game, world: World) -> MultiplierData:
    """Attribute multipliers for everyone on both rosters."""
    data = MultiplierData()
    for side, is_away in ((game.scoreboard.home_team, False), (game.scoreboard.away_team, True)):
        team = world.team(side.id)
        for pid in team.roster():
            m = _player_multiplier(world.player(pid), team, is_away, game.day)
            if m != 1.0:
                data.multipliers[pid] = m
    return data
