"""ICPC standings order and the rebuildable ranking index.

Order (best first):
- more solved problems
- lower time punishment
- latest solve time compared first, then the next latest, ...; earlier wins
- lexicographically smaller team name

`RankKey` captures that order as a plain tuple snapshot, so comparisons are a
total order by construction and a key can never change while it is indexed.
The index stores snapshots, not records; a team whose record changed must be
detached (dropping the stale snapshot) and attached again.
"""
from __future__ import annotations

import bisect
import logging
from typing import Mapping, NamedTuple

from .records import TeamRecord

logger = logging.getLogger(__name__)


class RankKey(NamedTuple):
    neg_solved: int
    time_punishment: int
    # Solve times, latest first. Only compared when solved counts match.
    times_desc: tuple[int, ...]
    team_name: str


def rank_key(team: TeamRecord) -> RankKey:
    return RankKey(
        neg_solved=-team.solved_count,
        time_punishment=team.time_punishment,
        times_desc=tuple(reversed(team.solved_times)),
        team_name=team.name,
    )


def ranks_before(a: TeamRecord, b: TeamRecord) -> bool:
    """True if team `a` strictly outranks team `b`."""
    return rank_key(a) < rank_key(b)


class RankingIndex:
    """Teams ordered by `RankKey`, best first."""

    def __init__(self) -> None:
        self._entries: list[RankKey] = []
        self._by_name: dict[str, RankKey] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, team_name: object) -> bool:
        return team_name in self._by_name

    def names(self) -> list[str]:
        return [key.team_name for key in self._entries]

    def attach(self, team: TeamRecord) -> RankKey:
        if team.name in self._by_name:
            raise KeyError(f"team {team.name!r} is already indexed")
        key = rank_key(team)
        bisect.insort(self._entries, key)
        self._by_name[team.name] = key
        return key

    def detach(self, team_name: str) -> RankKey:
        """Remove the team's indexed snapshot and return it."""
        key = self._by_name.pop(team_name)
        pos = bisect.bisect_left(self._entries, key)
        if pos == len(self._entries) or self._entries[pos] != key:
            raise KeyError(f"team {team_name!r} is missing from the ranking index")
        del self._entries[pos]
        return key

    def lower_bound(self, key: RankKey) -> RankKey | None:
        """First indexed snapshot not ranked strictly before `key`."""
        pos = bisect.bisect_left(self._entries, key)
        if pos == len(self._entries):
            return None
        return self._entries[pos]

    def last(self) -> RankKey:
        return self._entries[-1]

    def flush(self, teams: Mapping[str, TeamRecord]) -> None:
        """Rebuild from scratch and assign ranks 1..N in order."""
        self._entries = sorted(rank_key(team) for team in teams.values())
        self._by_name = {key.team_name: key for key in self._entries}
        for rank, key in enumerate(self._entries, start=1):
            teams[key.team_name].rank = rank
        logger.debug(f"Ranking flushed: {len(self._entries)} teams")
