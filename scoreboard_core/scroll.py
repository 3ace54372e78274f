"""Scoreboard freeze window and the scroll-time unveiling.

Two global states, Unfrozen and Frozen:

- freeze(): Unfrozen -> Frozen. Snapshots every problem's error_count so frozen
  cells can render "-k/m".
- scroll(): Frozen -> Unfrozen. Reveals frozen problems one at a time, always
  the worst-ranked team that still has one, and within that team the smallest
  problem index. The board is re-ordered after every single reveal, so a team
  that climbs gets its next turn only once every team now below it is done.

Every reveal works on a detached copy of the team (only the revealed problem
record and the solve times are duplicated): the new standing is computed on
the copy, the overtaken team is looked up against the index that still holds
the stale snapshot, and only then is the stale snapshot detached, the copy
stored and re-attached.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple

from .errors import ScoreboardAlreadyFrozen, ScoreboardNotFrozen
from .ranking import RankingIndex, rank_key
from .records import NO_TIME, TeamRecord
from .types import ProblemState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Overtake:
    """`team` moved ahead of `displaced` after a reveal."""

    team: str
    displaced: str
    solved_count: int
    time_punishment: int

    def __str__(self) -> str:
        return f"{self.team} {self.displaced} {self.solved_count} {self.time_punishment}"


@dataclass
class ScrollReport:
    standings_before: List[str] = field(default_factory=list)
    overtakes: List[Overtake] = field(default_factory=list)
    standings_after: List[str] = field(default_factory=list)
    # (team, problem index) in reveal order
    reveals: List[Tuple[str, int]] = field(default_factory=list)

    def lines(self) -> List[str]:
        return [*self.standings_before, *(str(o) for o in self.overtakes), *self.standings_after]


def reveal_problem(team: TeamRecord, problem_idx: int, penalty_per_error: int) -> bool:
    """Unfreeze one problem as if it had just been judged outside the freeze.

    Returns True if the problem turned into a solve.
    """
    problem = team.problems[problem_idx]
    if problem.first_accept_time == NO_TIME:
        problem.state = ProblemState.OPEN
        solved = False
    else:
        team.mark_solved(problem, penalty_per_error)
        solved = True
    team.refresh_frozen_flag()
    return solved


def detached_copy(team: TeamRecord, problem_idx: int) -> TeamRecord:
    """Copy of `team` owning its own sort state and its own record for `problem_idx`."""
    problems = list(team.problems)
    problems[problem_idx] = replace(problems[problem_idx])
    return replace(team, problems=problems, solved_times=list(team.solved_times))


def standings(teams: Dict[str, TeamRecord], index: RankingIndex) -> List[str]:
    return [teams[name].standings_line() for name in index.names()]


class FreezeScrollEngine:
    def __init__(
        self,
        teams: Dict[str, TeamRecord],
        index: RankingIndex,
        penalty_per_error: int = 20,
    ) -> None:
        self._teams = teams
        self._index = index
        self._penalty_per_error = penalty_per_error
        self.frozen = False

    def freeze(self) -> None:
        if self.frozen:
            raise ScoreboardAlreadyFrozen()
        for team in self._teams.values():
            for problem in team.problems:
                problem.before_freeze_error_count = problem.error_count
        self.frozen = True
        logger.info(f"Scoreboard frozen ({len(self._teams)} teams)")

    def scroll(self) -> ScrollReport:
        if not self.frozen:
            raise ScoreboardNotFrozen()
        self.frozen = False
        report = ScrollReport()

        self._index.flush(self._teams)
        report.standings_before = standings(self._teams, self._index)

        pending = RankingIndex()
        for team in self._teams.values():
            if team.has_frozen_problem:
                pending.attach(team)
        logger.info(f"Scrolling: {len(pending)} teams with frozen problems")

        while len(pending):
            self._reveal_next(pending, report)

        self._index.flush(self._teams)
        report.standings_after = standings(self._teams, self._index)
        logger.info(
            f"Scroll finished: {len(report.reveals)} reveals, {len(report.overtakes)} overtakes"
        )
        return report

    def _reveal_next(self, pending: RankingIndex, report: ScrollReport) -> None:
        name = pending.last().team_name
        current = self._teams[name]
        problem_idx = current.first_frozen_index()
        if problem_idx is None:
            # Flag was stale; nothing left to reveal for this team.
            current.has_frozen_problem = False
            pending.detach(name)
            return

        revealed = detached_copy(current, problem_idx)
        reveal_problem(revealed, problem_idx, self._penalty_per_error)
        new_key = rank_key(revealed)

        report.reveals.append((name, problem_idx))
        displaced = self._index.lower_bound(new_key)
        if displaced is not None and displaced.team_name != name:
            overtake = Overtake(
                team=name,
                displaced=displaced.team_name,
                solved_count=revealed.solved_count,
                time_punishment=revealed.time_punishment,
            )
            report.overtakes.append(overtake)
            logger.debug(f"Overtake: {overtake}")

        self._index.detach(name)
        pending.detach(name)
        self._teams[name] = revealed
        self._index.attach(revealed)
        if revealed.has_frozen_problem:
            pending.attach(revealed)
