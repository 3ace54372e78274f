"""Read-only lookups against the current contest state."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .errors import TeamNotFound
from .records import NO_TIME, TeamRecord
from .types import Verdict, problem_letter


@dataclass(frozen=True)
class RankingAnswer:
    team: str
    rank: int
    # Rank is as of the last flush; submissions hidden by the freeze are not in it.
    frozen: bool

    def __str__(self) -> str:
        return f"{self.team} NOW AT RANKING {self.rank}"


@dataclass(frozen=True)
class SubmissionMatch:
    team: str
    problem_index: int
    verdict: Verdict
    time: int

    def __str__(self) -> str:
        return f"{self.team} {problem_letter(self.problem_index)} {self.verdict.value} {self.time}"


class QueryEngine:
    def __init__(self, teams: Dict[str, TeamRecord], is_frozen=lambda: False) -> None:
        self._teams = teams
        self._is_frozen = is_frozen

    def _team(self, name: str, message: str | None) -> TeamRecord:
        team = self._teams.get(name)
        if team is None:
            raise TeamNotFound(name, message)
        return team

    def ranking(self, team_name: str, *, not_found_message: str | None = None) -> RankingAnswer:
        """Rank as of the last flush or scroll; never flushes implicitly."""
        team = self._team(team_name, not_found_message)
        return RankingAnswer(team=team.name, rank=team.rank, frozen=bool(self._is_frozen()))

    def submission(
        self,
        team_name: str,
        problem_idx: int | None = None,
        verdict: Verdict | None = None,
        *,
        not_found_message: str | None = None,
    ) -> SubmissionMatch | None:
        """Latest submission matching the filters; None for a filter means ALL.

        Returns None when nothing matches, including a problem index the
        contest does not have.
        """
        team = self._team(team_name, not_found_message)

        if problem_idx is None and verdict is None:
            last = team.last_submission
            if not last.is_set:
                return None
            return SubmissionMatch(team.name, last.problem_index, last.verdict, last.time)

        if problem_idx is None:
            event = team.last_event_for(verdict)
            if not event.is_set:
                return None
            return SubmissionMatch(team.name, event.problem_index, verdict, event.time)

        if not 0 <= problem_idx < len(team.problems):
            return None
        problem = team.problems[problem_idx]

        if verdict is None:
            if problem.last_submit_verdict is None:
                return None
            return SubmissionMatch(team.name, problem_idx, problem.last_submit_verdict, problem.last_submit_time)

        time = problem.last_time_for(verdict)
        if time == NO_TIME:
            return None
        return SubmissionMatch(team.name, problem_idx, verdict, time)
