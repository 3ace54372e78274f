"""Apply one SUBMIT event to a team record.

State transitions for the targeted problem:

    Open   --Accepted, unfrozen-->  Solved   (penalty + solve time applied now)
    Open   --Accepted, frozen---->  Frozen   (penalty deferred to scroll)
    Open   --rejected, frozen---->  Frozen   (first_accept_time stays -1)
    Frozen --any verdict--------->  Frozen
    Solved --any verdict--------->  Solved   (only last-event indices move)

Rejected verdicts count towards the penalty only before the first Accepted.
"""
from __future__ import annotations

import logging

from .records import NO_TIME, TeamRecord
from .types import ProblemState, Verdict

logger = logging.getLogger(__name__)


def apply_submission(
    team: TeamRecord,
    problem_idx: int,
    verdict: Verdict,
    time: int,
    *,
    frozen: bool,
    penalty_per_error: int = 20,
) -> None:
    """Mutate `team` for one submission.

    Args:
        team: record of the submitting team (must not be attached to a ranking
            index whose order is still relied upon; callers flush afterwards)
        problem_idx: zero-based problem index, already range-checked
        verdict: judge outcome
        time: submission time in contest minutes
        frozen: whether the freeze window is active
        penalty_per_error: minutes charged per rejected attempt on solve
    """
    problem = team.problems[problem_idx]

    problem.submit_count += 1
    problem.last_submit_time = time
    problem.last_submit_verdict = verdict
    problem.set_last_time(verdict, time)

    team.last_submission.problem_index = problem_idx
    team.last_submission.verdict = verdict
    team.last_submission.time = time
    last = team.last_event_for(verdict)
    last.problem_index = problem_idx
    last.time = time

    if problem.is_solved:
        return

    if verdict is Verdict.ACCEPTED:
        if problem.first_accept_time == NO_TIME:
            problem.first_accept_time = time
        if frozen:
            problem.state = ProblemState.FROZEN
            team.has_frozen_problem = True
        else:
            team.mark_solved(problem, penalty_per_error)
            logger.debug(
                f"{team.name} solved problem {problem_idx} at {time} "
                f"(solved={team.solved_count}, penalty={team.time_punishment})"
            )
        return

    if problem.first_accept_time == NO_TIME:
        problem.error_count += 1
    if frozen:
        problem.state = ProblemState.FROZEN
        team.has_frozen_problem = True
