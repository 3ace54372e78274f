"""Per-team and per-problem submission bookkeeping.

A `TeamRecord` owns one `ProblemRecord` per contest problem (allocated at START)
plus the derived fields the ranking order reads:

- solved_count / time_punishment / solved_times: sort key, updated incrementally
  whenever a problem becomes Solved (never recomputed from scratch)
- has_frozen_problem: true while any problem sits in the Frozen state
- last_* records: most recent event of each kind across all problems, so
  "ALL problems" queries never scan the problem list

Timestamps use -1 for "never happened".
"""
from __future__ import annotations

import bisect
from dataclasses import dataclass, field

from .types import ProblemState, Verdict

NO_TIME = -1


@dataclass
class LastEvent:
    """Most recent event of one verdict kind: which problem, and when."""

    problem_index: int = -1
    time: int = NO_TIME

    @property
    def is_set(self) -> bool:
        return self.time != NO_TIME


@dataclass
class LastSubmission:
    """Most recent submission of any verdict."""

    problem_index: int = -1
    verdict: Verdict | None = None
    time: int = NO_TIME

    @property
    def is_set(self) -> bool:
        return self.time != NO_TIME


@dataclass
class ProblemRecord:
    state: ProblemState = ProblemState.OPEN
    error_count: int = 0
    submit_count: int = 0
    # Snapshot of error_count taken at FREEZE; only used to render frozen cells.
    before_freeze_error_count: int = 0
    first_accept_time: int = NO_TIME
    last_accept: int = NO_TIME
    last_wrong: int = NO_TIME
    last_runtime_error: int = NO_TIME
    last_time_limit_exceed: int = NO_TIME
    last_submit_time: int = NO_TIME
    last_submit_verdict: Verdict | None = None

    @property
    def is_solved(self) -> bool:
        return self.state is ProblemState.SOLVED

    @property
    def is_frozen(self) -> bool:
        return self.state is ProblemState.FROZEN

    def last_time_for(self, verdict: Verdict) -> int:
        if verdict is Verdict.ACCEPTED:
            return self.last_accept
        if verdict is Verdict.WRONG_ANSWER:
            return self.last_wrong
        if verdict is Verdict.RUNTIME_ERROR:
            return self.last_runtime_error
        return self.last_time_limit_exceed

    def set_last_time(self, verdict: Verdict, time: int) -> None:
        if verdict is Verdict.ACCEPTED:
            self.last_accept = time
        elif verdict is Verdict.WRONG_ANSWER:
            self.last_wrong = time
        elif verdict is Verdict.RUNTIME_ERROR:
            self.last_runtime_error = time
        else:
            self.last_time_limit_exceed = time

    def render(self) -> str:
        """Scoreboard cell: `.`/`-k` open, `+`/`+k` solved, `0/m`/`-k/m` frozen."""
        if self.state is ProblemState.OPEN:
            return "." if self.error_count == 0 else f"-{self.error_count}"
        if self.state is ProblemState.SOLVED:
            return "+" if self.error_count == 0 else f"+{self.error_count}"
        hidden = self.submit_count - self.before_freeze_error_count
        if self.before_freeze_error_count == 0:
            return f"0/{hidden}"
        return f"-{self.before_freeze_error_count}/{hidden}"


@dataclass
class TeamRecord:
    name: str
    rank: int = 0
    time_punishment: int = 0
    has_frozen_problem: bool = False
    problems: list[ProblemRecord] = field(default_factory=list)
    # Ascending first-accept times of solved problems.
    solved_times: list[int] = field(default_factory=list)
    last_submission: LastSubmission = field(default_factory=LastSubmission)
    last_accept: LastEvent = field(default_factory=LastEvent)
    last_wrong: LastEvent = field(default_factory=LastEvent)
    last_runtime_error: LastEvent = field(default_factory=LastEvent)
    last_time_limit_exceed: LastEvent = field(default_factory=LastEvent)

    @property
    def solved_count(self) -> int:
        return len(self.solved_times)

    def allocate_problems(self, problem_count: int) -> None:
        self.problems = [ProblemRecord() for _ in range(problem_count)]

    def last_event_for(self, verdict: Verdict) -> LastEvent:
        if verdict is Verdict.ACCEPTED:
            return self.last_accept
        if verdict is Verdict.WRONG_ANSWER:
            return self.last_wrong
        if verdict is Verdict.RUNTIME_ERROR:
            return self.last_runtime_error
        return self.last_time_limit_exceed

    def mark_solved(self, problem: ProblemRecord, penalty_per_error: int) -> None:
        """Open/Frozen -> Solved using the problem's first accept time."""
        problem.state = ProblemState.SOLVED
        self.time_punishment += problem.first_accept_time + problem.error_count * penalty_per_error
        bisect.insort(self.solved_times, problem.first_accept_time)

    def first_frozen_index(self) -> int | None:
        for idx, problem in enumerate(self.problems):
            if problem.is_frozen:
                return idx
        return None

    def refresh_frozen_flag(self) -> bool:
        self.has_frozen_problem = any(p.is_frozen for p in self.problems)
        return self.has_frozen_problem

    def standings_line(self) -> str:
        fields = [self.name, str(self.rank), str(self.solved_count), str(self.time_punishment)]
        fields.extend(problem.render() for problem in self.problems)
        # Every field, the last cell included, is followed by a single space.
        return " ".join(fields) + " "
