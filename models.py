# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""League file schema and loading.

A league file is JSON with a season ruleset, the players, the teams and an
optional hall of retired players. It is validated with Pydantic and turned
into a ``World`` the simulator can run against.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, model_validator

from entities import ATTRIBUTES, Player, Team, World
from errors import LeagueValidationError
from mods import Mod, ModLifetime, Mods

logger = logging.getLogger(__name__)

_SAMPLE_LEAGUE_PATH = Path(__file__).resolve().parent / "data" / "sample_league.json"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class ModRecord(BaseModel):
    mod: Mod
    lifetime: ModLifetime = ModLifetime.PERMANENT


class PlayerRecord(BaseModel):
    """One player as stored in a league file."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    buoyancy: float = Field(default=0.5, ge=0.0)
    divinity: float = Field(default=0.5, ge=0.0)
    martyrdom: float = Field(default=0.5, ge=0.0)
    moxie: float = Field(default=0.5, ge=0.0)
    musclitude: float = Field(default=0.5, ge=0.0)
    patheticism: float = Field(default=0.5, ge=0.0)
    thwackability: float = Field(default=0.5, ge=0.0)
    tragicness: float = Field(default=0.1, ge=0.0)
    coldness: float = Field(default=0.5, ge=0.0)
    overpowerment: float = Field(default=0.5, ge=0.0)
    ruthlessness: float = Field(default=0.5, ge=0.0)
    shakespearianism: float = Field(default=0.5, ge=0.0)
    suppression: float = Field(default=0.5, ge=0.0)
    unthwackability: float = Field(default=0.5, ge=0.0)
    base_thirst: float = Field(default=0.5, ge=0.0)
    continuation: float = Field(default=0.5, ge=0.0)
    ground_friction: float = Field(default=0.5, ge=0.0)
    indulgence: float = Field(default=0.5, ge=0.0)
    laserlikeness: float = Field(default=0.5, ge=0.0)
    anticapitalism: float = Field(default=0.5, ge=0.0)
    chasiness: float = Field(default=0.5, ge=0.0)
    omniscience: float = Field(default=0.5, ge=0.0)
    tenaciousness: float = Field(default=0.5, ge=0.0)
    watchfulness: float = Field(default=0.5, ge=0.0)
    cinnamon: float = Field(default=0.5, ge=0.0)
    pressurization: float = Field(default=0.5, ge=0.0)
    mods: list[ModRecord] = Field(default_factory=list)
    swept_on: Optional[int] = Field(default=None, ge=0, description="Day the player was swept elsewhere")
    scattered_letters: int = Field(default=0, ge=0)


class TeamRecord(BaseModel):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    lineup: list[str] = Field(min_length=1, description="Batting order")
    rotation: list[str] = Field(min_length=1, description="Starting pitchers")
    shadows: list[str] = Field(default_factory=list, description="Reserve players")
    mods: list[ModRecord] = Field(default_factory=list)
    partying: bool = False
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)


class LeagueRecord(BaseModel):
    season_ruleset: int = Field(default=20, ge=0, description="Season rules version")
    players: list[PlayerRecord]
    teams: list[TeamRecord] = Field(min_length=2)
    hall: list[PlayerRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_roster_references(self) -> LeagueRecord:
        known = {p.id for p in self.players}
        if len(known) != len(self.players):
            raise ValueError("duplicate player ids")
        placed: dict[str, str] = {}
        for team in self.teams:
            for pid in team.lineup + team.rotation + team.shadows:
                if pid not in known:
                    raise ValueError(f"team {team.id} lists unknown player {pid}")
                if pid in placed:
                    raise ValueError(f"player {pid} is on both {placed[pid]} and {team.id}")
                placed[pid] = team.id
        return self


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def _mods_from_records(records: list[ModRecord]) -> Mods:
    mods = Mods()
    for r in records:
        mods.add(r.mod, r.lifetime)
    return mods


def _player_from_record(record: PlayerRecord, team_id: str | None) -> Player:
    stats = {attr: getattr(record, attr) for attr in ATTRIBUTES}
    return Player(
        id=record.id,
        name=record.name,
        team=team_id,
        mods=_mods_from_records(record.mods),
        swept_on=record.swept_on,
        scattered_letters=record.scattered_letters,
        **stats,
    )


def build_world(league: LeagueRecord) -> World:
    """Turn a validated league into a ``World``."""
    world = World(season_ruleset=league.season_ruleset)
    team_of: dict[str, str] = {}
    for t in league.teams:
        world.add_team(Team(
            id=t.id,
            name=t.name,
            lineup=list(t.lineup),
            rotation=list(t.rotation),
            shadows=list(t.shadows),
            mods=_mods_from_records(t.mods),
            partying=t.partying,
            wins=t.wins,
            losses=t.losses,
        ))
        for pid in t.lineup + t.rotation + t.shadows:
            team_of[pid] = t.id
    for p in league.players:
        world.add_player(_player_from_record(p, team_of.get(p.id)))
    for p in league.hall:
        world.add_hall_player(_player_from_record(p, None))
    return world


def league_from_dict(payload: dict[str, Any]) -> LeagueRecord:
    """Validate a parsed league payload.

    Raises:
        LeagueValidationError: If the payload fails schema validation.
    """
    try:
        return LeagueRecord(**payload)
    except ValidationError as exc:
        details = [f"{e.get('loc', '?')}: {e.get('msg', '?')}" for e in exc.errors()]
        raise LeagueValidationError(
            f"league failed validation with {len(details)} error(s)", details
        ) from exc


def load_league(path: Path | str | None = None) -> World:
    """Load and validate a league file into a ``World``.

    Defaults to the bundled sample league.
    """
    p = Path(path) if path is not None else _SAMPLE_LEAGUE_PATH
    try:
        with open(p) as f:
            payload = json.load(f)
    except json.JSONDecodeError as exc:
        raise LeagueValidationError(f"{p} is not valid JSON", [str(exc)]) from exc
    if not isinstance(payload, dict):
        raise LeagueValidationError(f"{p} must contain a JSON object")
    league = league_from_dict(payload)
    world = build_world(league)
    logger.info("loaded league from %s: %d teams, %d players", p,
                len(world.teams), len(world.players))
    return world
