# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Append-only history of event tags with scoped backward queries.

The match keeps one log of every applied event; each player keeps a second
one (their "feed") holding only the tags of their own plate appearances.
Queries walk backwards from the newest tag. A ``limit`` bounds how many
half-inning boundaries (``InningSwitch`` tags) the walk may cross: with
``limit=0`` only the current half-inning is searched, with ``limit=1`` the
previous one too, and ``limit=-1`` searches the whole history.
"""

from __future__ import annotations

from typing import Iterable, Iterator

BOUNDARY_TAG = "InningSwitch"
UNBOUNDED = -1


class EventLog:
    """Ordered list of event tags that only ever grows."""

    def __init__(self, tags: Iterable[str] | None = None):
        self._tags: list[str] = list(tags or [])

    def add(self, tag: str) -> None:
        self._tags.append(tag)

    def last(self) -> str:
        if not self._tags:
            raise IndexError("event log is empty")
        return self._tags[-1]

    def last_is(self, tag: str) -> bool:
        """Like ``last() == tag`` but false on an empty log."""
        return bool(self._tags) and self._tags[-1] == tag

    def _matches(self, wanted: set[str], limit: int) -> Iterator[str]:
        """Yield matching tags newest-first until the boundary budget runs out."""
        crossed = 0
        for tag in reversed(self._tags):
            if tag in wanted:
                yield tag
            elif tag == BOUNDARY_TAG and limit != UNBOUNDED:
                if crossed < limit:
                    crossed += 1
                else:
                    return

    def has(self, tag: str, limit: int = UNBOUNDED) -> bool:
        """True if ``tag`` occurs within the window."""
        return next(self._matches({tag}, limit), None) is not None

    def count(self, tag: str, limit: int = UNBOUNDED) -> int:
        """Number of times ``tag`` occurs within the window."""
        return sum(1 for _ in self._matches({tag}, limit))

    def streak(self, tags: Iterable[str], limit: int = UNBOUNDED) -> int:
        """Number of entries within the window that match any of ``tags``."""
        return sum(1 for _ in self._matches(set(tags), limit))

    def trailing(self, tags: Iterable[str]) -> int:
        """Length of the unbroken run of ``tags`` at the end of the log."""
        wanted = set(tags)
        run = 0
        for tag in reversed(self._tags):
            if tag not in wanted:
                break
            run += 1
        return run

    def tags(self) -> list[str]:
        return list(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tags))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventLog):
            return NotImplemented
        return self._tags == other._tags

    def __repr__(self) -> str:
        tail = ", ".join(self._tags[-3:])
        return f"EventLog(len={len(self._tags)}, tail=[{tail}])"
