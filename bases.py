# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Baserunner occupancy.

Bases are numbered from 0 (first base). With ``bases`` configured to 4 the
occupiable bases are 0, 1 and 2; index 3 is home. A fifth-base match moves
home to index 4. Any runner whose base reaches ``home`` has scored and is
removed by the scoring routine on ``Game``.

Iteration always runs from the lead runner down, which is the order every
per-runner roll is taken in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator


@dataclass
class Baserunner:
    id: str
    base: int

    def __repr__(self) -> str:
        return f"Runner({self.id}@{self.base})"


class Baserunners:
    """Slot map of runners, at most one per base."""

    def __init__(self, bases: int = 4, runners: list[Baserunner] | None = None):
        if bases < 2:
            raise ValueError(f"need at least two bases, got {bases}")
        self.bases = bases
        self._runners: list[Baserunner] = []
        for r in runners or []:
            self.add(r.base, r.id)

    @property
    def home(self) -> int:
        return self.bases - 1

    def _order(self) -> None:
        self._runners.sort(key=lambda r: r.base, reverse=True)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------

    def occupied(self, base: int) -> bool:
        return any(r.base == base for r in self._runners)

    def empty(self) -> bool:
        return not self._runners

    def contains(self, player_id: str) -> bool:
        return any(r.id == player_id for r in self._runners)

    def at(self, base: int) -> str | None:
        for r in self._runners:
            if r.base == base:
                return r.id
        return None

    def can_advance(self, base: int) -> bool:
        """A runner may take the next base if it is home or free."""
        return base + 1 >= self.home or not self.occupied(base + 1)

    def scored(self) -> list[Baserunner]:
        return [r for r in self._runners if r.base >= self.home]

    def ids(self) -> list[str]:
        return [r.id for r in self._runners]

    def __iter__(self) -> Iterator[Baserunner]:
        return iter([Baserunner(r.id, r.base) for r in self._runners])

    def __len__(self) -> int:
        return len(self._runners)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Baserunners):
            return NotImplemented
        return self.bases == other.bases and self.as_dict() == other.as_dict()

    def __repr__(self) -> str:
        return f"Baserunners(bases={self.bases}, {self._runners})"

    def as_dict(self) -> dict[int, str]:
        return {r.base: r.id for r in self._runners}

    # -------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------

    def add(self, base: int, player_id: str) -> None:
        if base < 0:
            raise ValueError(f"negative base {base}")
        if base < self.home and self.occupied(base):
            raise ValueError(f"base {base} already occupied by {self.at(base)}")
        self._runners.append(Baserunner(player_id, base))
        self._order()

    def remove(self, base: int) -> None:
        self._runners = [r for r in self._runners if r.base != base]

    def advance(self, base: int) -> None:
        """Move the runner on ``base`` up one."""
        for r in self._runners:
            if r.base == base:
                r.base += 1
                break
        self._order()

    def advance_all(self, amount: int) -> None:
        for r in self._runners:
            r.base += amount

    def advance_if(self, predicate: Callable[[Baserunner], bool]) -> None:
        """Advance each matching runner one base if the way is clear.

        Runners are visited lead first, so a trailing runner can take a base
        vacated earlier in the same pass.
        """
        for r in self._runners:
            if predicate(r) and self.can_advance(r.base):
                r.base += 1
        self._order()

    def _force_from(self, floor: int) -> None:
        """Push runners forward so that bases 0..floor are clear.

        Only runners forced by a chain of occupied bases move; a runner
        with an empty base behind it stays put.
        """
        for r in sorted(self._runners, key=lambda r: r.base):
            if r.base > floor:
                break
            r.base = floor + 1
            floor = r.base
        self._order()

    def walk(self) -> None:
        """Force runners ahead of a batter who is awarded first base."""
        self._force_from(0)

    def walk_instincts(self, third: bool) -> None:
        """Force runners ahead of a batter taking second (or third) base."""
        self._force_from(2 if third else 1)

    def pick_runner(self, roll: float) -> int:
        """Base of a runner chosen uniformly by ``roll``."""
        if not self._runners:
            raise ValueError("no runners to pick from")
        return self._runners[int(roll * len(self._runners))].base

    def pick_runner_fc(self) -> int:
        """Base of the lead runner in the force chain starting at first."""
        if not self.occupied(0):
            raise ValueError("fielder's choice needs a runner on first")
        base = 0
        while base + 1 < self.home and self.occupied(base + 1):
            base += 1
        return base

    def remove_scored(self) -> list[Baserunner]:
        scored = self.scored()
        self._runners = [r for r in self._runners if r.base < self.home]
        return scored

    def sweep(self) -> None:
        """Drop scored slots and restore lead-first order."""
        self._runners = [r for r in self._runners if r.base < self.home]
        self._order()

    def clear(self) -> None:
        self._runners = []

    def copy(self) -> Baserunners:
        clone = Baserunners(self.bases)
        clone._runners = [Baserunner(r.id, r.base) for r in self._runners]
        return clone
