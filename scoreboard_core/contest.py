"""Contest store and command dispatch (pure, no I/O).

This module owns the in-memory state of one contest and applies validated
events to it. Nothing here reads input or writes output: every command yields a
CommandOutcome whose `lines` the caller prints.

Architecture:
- Contest holds the team records keyed by name, the authoritative RankingIndex,
  the FreezeScrollEngine and a read-only QueryEngine over the same records
- apply_command() takes (contest, event) and returns CommandOutcome
- Handlers raise ScoreboardError subclasses before touching state; apply_command
  turns them into the outcome's single error line
- Malformed commands never get here (validation.parse_event raises ValueError)

Key concepts:
- rank: only recomputed by START, FLUSH and SCROLL; submissions leave it stale
- frozen: freeze window flag, owned by the FreezeScrollEngine

State transitions:
- ADDTEAM: register a team (before START only)
- START: fix problem count and duration, allocate per-problem records
- SUBMIT: update one team's problem record (see submission.apply_submission)
- FLUSH: rebuild the ranking
- FREEZE / SCROLL: enter the freeze window / unveil it
- QUERY_RANKING / QUERY_SUBMISSION: read-only
- END: final message only; later commands still apply
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from .config import Settings, get_settings
from .errors import CompetitionAlreadyStarted, DuplicateTeam, ScoreboardError
from .lexer import tokenize
from .query import QueryEngine, RankingAnswer, SubmissionMatch
from .ranking import RankingIndex
from .records import TeamRecord
from .scroll import FreezeScrollEngine, ScrollReport
from .submission import apply_submission
from .types import CommandKind, Verdict
from .validation import (
    AddTeamEvent,
    ContestEvent,
    QueryRankingEvent,
    QuerySubmissionEvent,
    StartEvent,
    SubmitEvent,
    parse_event,
)

logger = logging.getLogger(__name__)

MSG_ADD_OK = "[Info]Add successfully."
MSG_ADD_STARTED = "[Error]Add failed: competition has started."
MSG_START_OK = "[Info]Competition starts."
MSG_START_STARTED = "[Error]Start failed: competition has started."
MSG_FLUSH = "[Info]Flush scoreboard."
MSG_FREEZE = "[Info]Freeze scoreboard."
MSG_SCROLL = "[Info]Scroll scoreboard."
MSG_QUERY_RANKING = "[Info]Complete query ranking."
MSG_QUERY_RANKING_MISSING = "[Error]Query ranking failed: cannot find the team."
MSG_FROZEN_WARNING = (
    "[Warning]Scoreboard is frozen. The ranking may be inaccurate until it were scrolled."
)
MSG_QUERY_SUBMISSION = "[Info]Complete query submission."
MSG_QUERY_SUBMISSION_MISSING = "[Error]Query submission failed: cannot find the team."
MSG_NO_SUBMISSION = "Cannot find any submission."
MSG_END = "[Info]Competition ends."


@dataclass
class CommandOutcome:
    """Result of applying one event."""

    lines: List[str] = field(default_factory=list)
    error: ScoreboardError | None = None


class Contest:
    """All state of one contest, for the lifetime of the process."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.teams: Dict[str, TeamRecord] = {}
        self.ranking = RankingIndex()
        self.started = False
        self.duration = 0
        self.problem_count = 0
        self.scroller = FreezeScrollEngine(
            self.teams, self.ranking, penalty_per_error=self.settings.penalty_per_error
        )
        self.queries = QueryEngine(self.teams, is_frozen=lambda: self.scroller.frozen)

    @property
    def frozen(self) -> bool:
        return self.scroller.frozen

    def add_team(self, name: str) -> TeamRecord:
        if self.started:
            raise CompetitionAlreadyStarted(MSG_ADD_STARTED)
        if name in self.teams:
            raise DuplicateTeam(name)
        team = TeamRecord(name=name)
        self.teams[name] = team
        self.ranking.attach(team)
        logger.debug(f"Team added: {name}")
        return team

    def start(self, duration: int, problem_count: int) -> None:
        if self.started:
            raise CompetitionAlreadyStarted(MSG_START_STARTED)
        self.started = True
        self.duration = duration
        self.problem_count = problem_count
        for team in self.teams.values():
            team.allocate_problems(problem_count)
        self.ranking.flush(self.teams)
        logger.info(
            f"Competition started: {len(self.teams)} teams, {problem_count} problems, {duration} minutes"
        )

    def submit(self, team_name: str, problem_idx: int, verdict: Verdict, time: int) -> bool:
        """Apply a submission; returns False if the event was ignored."""
        if not self.started:
            logger.warning(f"Submission by {team_name} before START ignored")
            return False
        team = self.teams.get(team_name)
        if team is None:
            logger.warning(f"Submission by unknown team {team_name!r} ignored")
            return False
        if not 0 <= problem_idx < self.problem_count:
            logger.warning(f"Submission by {team_name} for problem index {problem_idx} out of range ignored")
            return False
        apply_submission(
            team,
            problem_idx,
            verdict,
            time,
            frozen=self.frozen,
            penalty_per_error=self.settings.penalty_per_error,
        )
        return True

    def flush(self) -> None:
        self.ranking.flush(self.teams)

    def freeze(self) -> None:
        self.scroller.freeze()

    def scroll(self) -> ScrollReport:
        return self.scroller.scroll()

    def query_ranking(self, team_name: str) -> RankingAnswer:
        return self.queries.ranking(team_name, not_found_message=MSG_QUERY_RANKING_MISSING)

    def query_submission(
        self, team_name: str, problem_idx: int | None = None, verdict: Verdict | None = None
    ) -> SubmissionMatch | None:
        return self.queries.submission(
            team_name, problem_idx, verdict, not_found_message=MSG_QUERY_SUBMISSION_MISSING
        )


# ==================== HANDLERS ====================


def _add_team(contest: Contest, event: AddTeamEvent) -> CommandOutcome:
    contest.add_team(event.team)
    return CommandOutcome(lines=[MSG_ADD_OK])


def _start(contest: Contest, event: StartEvent) -> CommandOutcome:
    contest.start(event.duration, event.problem_count)
    return CommandOutcome(lines=[MSG_START_OK])


def _submit(contest: Contest, event: SubmitEvent) -> CommandOutcome:
    contest.submit(event.team, event.problem_index, event.verdict, event.time)
    return CommandOutcome()


def _flush(contest: Contest, event: ContestEvent) -> CommandOutcome:
    contest.flush()
    return CommandOutcome(lines=[MSG_FLUSH])


def _freeze(contest: Contest, event: ContestEvent) -> CommandOutcome:
    contest.freeze()
    return CommandOutcome(lines=[MSG_FREEZE])


def _scroll(contest: Contest, event: ContestEvent) -> CommandOutcome:
    report = contest.scroll()
    return CommandOutcome(lines=[MSG_SCROLL, *report.lines()])


def _query_ranking(contest: Contest, event: QueryRankingEvent) -> CommandOutcome:
    answer = contest.query_ranking(event.team)
    lines = [MSG_QUERY_RANKING]
    if answer.frozen:
        lines.append(MSG_FROZEN_WARNING)
    lines.append(str(answer))
    return CommandOutcome(lines=lines)


def _query_submission(contest: Contest, event: QuerySubmissionEvent) -> CommandOutcome:
    match = contest.query_submission(event.team, event.problem_index, event.status)
    return CommandOutcome(
        lines=[MSG_QUERY_SUBMISSION, MSG_NO_SUBMISSION if match is None else str(match)]
    )


def _end(contest: Contest, event: ContestEvent) -> CommandOutcome:
    logger.info("Competition ended")
    return CommandOutcome(lines=[MSG_END])


_HANDLERS: Dict[CommandKind, Callable[[Contest, ContestEvent], CommandOutcome]] = {
    CommandKind.ADDTEAM: _add_team,
    CommandKind.START: _start,
    CommandKind.SUBMIT: _submit,
    CommandKind.FLUSH: _flush,
    CommandKind.FREEZE: _freeze,
    CommandKind.SCROLL: _scroll,
    CommandKind.QUERY_RANKING: _query_ranking,
    CommandKind.QUERY_SUBMISSION: _query_submission,
    CommandKind.END: _end,
}


def apply_command(contest: Contest, event: ContestEvent) -> CommandOutcome:
    """Apply a validated event to the contest.

    Args:
        contest: Contest store (mutated in place)
        event: Event built by validation.parse_event

    Returns:
        CommandOutcome with the lines to print. Scoreboard errors are reported
        as the outcome's only line and leave the contest untouched.
    """
    handler = _HANDLERS[event.kind]
    try:
        return handler(contest, event)
    except ScoreboardError as exc:
        logger.debug(f"{event.kind.value} rejected: {type(exc).__name__}")
        return CommandOutcome(lines=[exc.message], error=exc)


def execute_line(contest: Contest, line: str) -> CommandOutcome | None:
    """Lex, validate and apply one raw command line; None for a blank line.

    Raises:
        ValueError: If the line is not a well-formed command
    """
    payload = tokenize(line)
    if payload is None:
        return None
    return apply_command(contest, parse_event(payload))
