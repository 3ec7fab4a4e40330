# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Roster store: players, teams and the hall of retired players.

The match core reads and mutates rosters only through ``World``. Lookups for
an id the world does not know raise ``EntityNotFoundError``; nothing is ever
created implicitly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields

from errors import EntityNotFoundError, UnknownSubKindError
from event_log import EventLog
from mods import Mod, Mods
from rng import Rng

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Attribute layout
# ---------------------------------------------------------------------------

BATTING_ATTRIBUTES = (
    "buoyancy", "divinity", "martyrdom", "moxie",
    "musclitude", "patheticism", "thwackability", "tragicness",
)
PITCHING_ATTRIBUTES = (
    "coldness", "overpowerment", "ruthlessness",
    "shakespearianism", "suppression", "unthwackability",
)
BASERUNNING_ATTRIBUTES = (
    "base_thirst", "continuation", "ground_friction", "indulgence", "laserlikeness",
)
DEFENSE_ATTRIBUTES = (
    "anticapitalism", "chasiness", "omniscience", "tenaciousness", "watchfulness",
)
# Order of a boost vector; cinnamon before pressurization so that a 25-wide
# vector leaves pressurization untouched.
ATTRIBUTES = (
    BATTING_ATTRIBUTES + PITCHING_ATTRIBUTES + BASERUNNING_ATTRIBUTES
    + DEFENSE_ATTRIBUTES + ("cinnamon", "pressurization")
)
BOOST_WIDTH = len(ATTRIBUTES)  # 26
INVERTED_ATTRIBUTES = frozenset({"patheticism", "tragicness"})
MIN_ATTRIBUTE = 0.001

# Boost-vector slices for each stat category, indexed by drain stat code.
STAT_CATEGORIES: dict[int, range] = {
    0: range(8, 14),   # pitching
    1: range(0, 8),    # batting
    2: range(19, 24),  # defense
    3: range(14, 19),  # baserunning
}


def category_boosts(stat: int, amount: float) -> list[float]:
    """Boost vector with ``amount`` across one stat category."""
    if stat not in STAT_CATEGORIES:
        raise UnknownSubKindError("Blooddrain", "stat", stat)
    boosts = [0.0] * BOOST_WIDTH
    for i in STAT_CATEGORIES[stat]:
        boosts[i] = amount
    return boosts


_NAME_PARTS = (
    "Jes", "Yaz", "Nag", "Pol", "Wyl", "Bee", "Lan", "Ort", "Sut", "Mik",
    "Ada", "Fen", "Quo", "Rho", "Tam", "Vel", "Zig", "Hob", "Kel", "Dru",
)


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------

@dataclass
class Player:
    id: str
    name: str
    team: str | None = None
    # batting
    buoyancy: float = 0.5
    divinity: float = 0.5
    martyrdom: float = 0.5
    moxie: float = 0.5
    musclitude: float = 0.5
    patheticism: float = 0.5
    thwackability: float = 0.5
    tragicness: float = 0.1
    # pitching
    coldness: float = 0.5
    overpowerment: float = 0.5
    ruthlessness: float = 0.5
    shakespearianism: float = 0.5
    suppression: float = 0.5
    unthwackability: float = 0.5
    # baserunning
    base_thirst: float = 0.5
    continuation: float = 0.5
    ground_friction: float = 0.5
    indulgence: float = 0.5
    laserlikeness: float = 0.5
    # defense
    anticapitalism: float = 0.5
    chasiness: float = 0.5
    omniscience: float = 0.5
    tenaciousness: float = 0.5
    watchfulness: float = 0.5
    # misc
    cinnamon: float = 0.5
    pressurization: float = 0.5

    mods: Mods = field(default_factory=Mods)
    feed: EventLog = field(default_factory=EventLog)
    swept_on: int | None = None
    scattered_letters: int = 0

    @classmethod
    def new(cls, rng: Rng, player_id: str | None = None) -> Player:
        """Roll a fresh player: a name, then one draw per attribute."""
        parts = [_NAME_PARTS[rng.index(len(_NAME_PARTS))] for _ in range(4)]
        name = f"{parts[0]}{parts[1].lower()} {parts[2]}{parts[3].lower()}"
        if player_id is None:
            player_id = f"p-{int(rng.next() * 16**12):012x}"
        stats = {attr: rng.next() for attr in ATTRIBUTES}
        stats["tragicness"] = 0.1
        return cls(id=player_id, name=name, **stats)

    def attr(self, name: str) -> float:
        return getattr(self, name)

    def attributes(self) -> list[float]:
        return [getattr(self, a) for a in ATTRIBUTES]

    def boost(self, boosts: list[float]) -> None:
        """Add a boost vector to the attributes, in ``ATTRIBUTES`` order.

        Inverted attributes move the other way. Short vectors touch only
        their prefix.
        """
        if len(boosts) > BOOST_WIDTH:
            raise ValueError(f"boost vector too wide: {len(boosts)} > {BOOST_WIDTH}")
        for attr, amount in zip(ATTRIBUTES, boosts):
            if attr in INVERTED_ATTRIBUTES:
                amount = -amount
            setattr(self, attr, max(MIN_ATTRIBUTE, getattr(self, attr) + amount))

    def get_run_value(self) -> float:
        """Extra run value this player carries across the plate."""
        if self.mods.has(Mod.WIRED):
            return 0.5
        if self.mods.has(Mod.TIRED):
            return -0.5
        return 0.0

    def to_dict(self) -> dict:
        d = {f.name: getattr(self, f.name) for f in fields(self)
             if f.name not in ("mods", "feed")}
        d["mods"] = [(e.mod.value, e.lifetime.value) for e in self.mods]
        d["feed"] = self.feed.tags()
        return d


# ---------------------------------------------------------------------------
# Team
# ---------------------------------------------------------------------------

REVERB_FULL = 0
REVERB_SEVERAL = 1
REVERB_LINEUP = 2
REVERB_ROTATION = 3
REVERB_TYPES = (REVERB_FULL, REVERB_SEVERAL, REVERB_LINEUP, REVERB_ROTATION)


@dataclass
class Team:
    id: str
    name: str
    lineup: list[str] = field(default_factory=list)
    rotation: list[str] = field(default_factory=list)
    shadows: list[str] = field(default_factory=list)
    mods: Mods = field(default_factory=Mods)
    partying: bool = False
    wins: int = 0
    losses: int = 0
    postseason_wins: int = 0
    postseason_losses: int = 0

    def roster(self) -> list[str]:
        return self.lineup + self.rotation

    def roll_reverb_changes(self, rng: Rng, reverb_type: int,
                            gravity: list[int]) -> list[int]:
        """Roll a reverb permutation over ``lineup + rotation`` slots.

        The result maps new slot -> old slot. Slots listed in ``gravity``
        never move.
        """
        size = len(self.lineup) + len(self.rotation)
        changes = list(range(size))
        lineup_slots = range(len(self.lineup))
        rotation_slots = range(len(self.lineup), size)

        def shuffle(slots) -> None:
            free = [i for i in slots if i not in gravity]
            # Fisher-Yates, one draw per step
            for n in range(len(free) - 1, 0, -1):
                j = rng.index(n + 1)
                a, b = free[n], free[j]
                changes[a], changes[b] = changes[b], changes[a]

        if reverb_type == REVERB_FULL:
            shuffle(range(size))
        elif reverb_type == REVERB_SEVERAL:
            free = [i for i in range(size) if i not in gravity]
            if len(free) > 1:
                for _ in range(3):
                    a = free[rng.index(len(free))]
                    b = free[rng.index(len(free))]
                    changes[a], changes[b] = changes[b], changes[a]
        elif reverb_type == REVERB_LINEUP:
            shuffle(lineup_slots)
        elif reverb_type == REVERB_ROTATION:
            shuffle(rotation_slots)
        else:
            raise UnknownSubKindError("Reverb", "reverb_type", reverb_type)
        return changes

    def apply_reverb_changes(self, reverb_type: int, changes: list[int]) -> None:
        if reverb_type not in REVERB_TYPES:
            raise UnknownSubKindError("Reverb", "reverb_type", reverb_type)
        pool = self.roster()
        if sorted(changes) != list(range(len(pool))):
            raise ValueError(f"reverb changes are not a permutation of {len(pool)} slots")
        shuffled = [pool[old] for old in changes]
        self.lineup = shuffled[:len(self.lineup)]
        self.rotation = shuffled[len(self.lineup):]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "lineup": list(self.lineup),
            "rotation": list(self.rotation),
            "shadows": list(self.shadows),
            "mods": [(e.mod.value, e.lifetime.value) for e in self.mods],
            "partying": self.partying,
            "wins": self.wins,
            "losses": self.losses,
            "postseason_wins": self.postseason_wins,
            "postseason_losses": self.postseason_losses,
        }


# ---------------------------------------------------------------------------
# World
# ---------------------------------------------------------------------------

_SLOT_LISTS = ("lineup", "rotation", "shadows")


class World:
    """Id-keyed store of every player and team taking part in a match."""

    def __init__(self, season_ruleset: int = 20):
        self.season_ruleset = season_ruleset
        self.players: dict[str, Player] = {}
        self.teams: dict[str, Team] = {}
        self.hall: dict[str, Player] = {}

    # -------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------

    def player(self, player_id: str) -> Player:
        if player_id in self.players:
            return self.players[player_id]
        if player_id in self.hall:
            return self.hall[player_id]
        raise EntityNotFoundError("player", player_id)

    def team(self, team_id: str) -> Team:
        try:
            return self.teams[team_id]
        except KeyError:
            raise EntityNotFoundError("team", team_id) from None

    def team_of(self, player_id: str) -> Team:
        team_id = self.player(player_id).team
        if team_id is None:
            raise EntityNotFoundError("team of player", player_id)
        return self.team(team_id)

    def locate(self, player_id: str) -> tuple[Team, str, int]:
        team = self.team_of(player_id)
        for slot_list in _SLOT_LISTS:
            members = getattr(team, slot_list)
            if player_id in members:
                return team, slot_list, members.index(player_id)
        raise EntityNotFoundError(f"roster slot on {team.id}", player_id)

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------

    def add_team(self, team: Team) -> Team:
        self.teams[team.id] = team
        return team

    def add_player(self, player: Player, team_id: str | None = None) -> str:
        if team_id is not None:
            player.team = team_id
        self.players[player.id] = player
        return player.id

    def add_rolled_player(self, player: Player, team_id: str) -> str:
        """Register a freshly rolled player on ``team_id``."""
        self.team(team_id)
        return self.add_player(player, team_id)

    def add_hall_player(self, player: Player) -> str:
        player.team = None
        self.hall[player.id] = player
        return player.id

    def _retire(self, player_id: str) -> None:
        player = self.players.pop(player_id)
        player.team = None
        self.hall[player_id] = player

    def replace_player(self, old_id: str, new_id: str) -> None:
        """Put ``new_id`` in ``old_id``'s roster slot and retire ``old_id``."""
        team, slot_list, idx = self.locate(old_id)
        getattr(team, slot_list)[idx] = new_id
        self.player(new_id).team = team.id
        self._retire(old_id)

    def swap_hall(self, target_id: str, hall_id: str) -> None:
        """Bring ``hall_id`` back from the hall into ``target_id``'s slot."""
        if hall_id not in self.hall:
            raise EntityNotFoundError("hall player", hall_id)
        returning = self.hall.pop(hall_id)
        team, slot_list, idx = self.locate(target_id)
        getattr(team, slot_list)[idx] = hall_id
        returning.team = team.id
        self.players[hall_id] = returning
        self._retire(target_id)

    def swap(self, a_id: str, b_id: str) -> None:
        """Exchange two players' roster slots (and teams)."""
        team_a, list_a, idx_a = self.locate(a_id)
        team_b, list_b, idx_b = self.locate(b_id)
        getattr(team_a, list_a)[idx_a] = b_id
        getattr(team_b, list_b)[idx_b] = a_id
        self.player(a_id).team = team_b.id
        self.player(b_id).team = team_a.id

    # -------------------------------------------------------------------
    # Derived queries
    # -------------------------------------------------------------------

    def random_hall_player(self, rng: Rng) -> str | None:
        """Pick a hall player with one draw; None (and no draw) if empty."""
        if not self.hall:
            return None
        ids = sorted(self.hall)
        return ids[rng.index(len(ids))]

    def to_dict(self) -> dict:
        return {
            "season_ruleset": self.season_ruleset,
            "players": {pid: p.to_dict() for pid, p in sorted(self.players.items())},
            "teams": {tid: t.to_dict() for tid, t in sorted(self.teams.items())},
            "hall": sorted(self.hall),
        }


def generate_world(rng: Rng, team_names: tuple[str, str] = ("Home", "Away"),
                   lineup_size: int = 9, rotation_size: int = 5,
                   shadow_size: int = 5, season_ruleset: int = 20) -> World:
    """Roll a two-team world for exhibition matches."""
    world = World(season_ruleset=season_ruleset)
    for t, name in enumerate(team_names):
        team = world.add_team(Team(id=f"team-{t}", name=name))
        for slot_list, size in (("lineup", lineup_size),
                                ("rotation", rotation_size),
                                ("shadows", shadow_size)):
            for i in range(size):
                player = Player.new(rng, player_id=f"team-{t}-{slot_list}-{i}")
                world.add_player(player, team.id)
                getattr(team, slot_list).append(player.id)
    logger.debug("generated world with %d players", len(world.players))
    return world
