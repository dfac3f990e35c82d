"""Start- and end-of-season roster snapshots."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from courtbook.models.roster import RosterEntry


@dataclass(frozen=True)
class RosterGroup:
    starters: list[RosterEntry] = field(default_factory=list)
    bench: list[RosterEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.starters and not self.bench


@dataclass(frozen=True)
class RosterSnapshot:
    start: RosterGroup
    end: RosterGroup


def _group(entries: list[RosterEntry]) -> RosterGroup:
    return RosterGroup(
        starters=[entry for entry in entries if entry.is_starter],
        bench=[entry for entry in entries if not entry.is_starter],
    )


def split_roster(entries: Iterable[RosterEntry]) -> RosterSnapshot:
    """Split a season's roster into start/end snapshots, starters first."""
    rows = list(entries)
    return RosterSnapshot(
        start=_group([entry for entry in rows if entry.start_end in (None, "start")]),
        end=_group([entry for entry in rows if entry.start_end == "end"]),
    )
