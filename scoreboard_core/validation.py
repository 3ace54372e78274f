"""
Event validation schemas using Pydantic v2
Turns (keyword, raw fields) from the lexer into typed contest events
"""

import logging
import re
from typing import Dict, List, Literal, Optional, Self, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .types import CommandKind, CommandPayload, Verdict, problem_index

logger = logging.getLogger(__name__)

ALL = "ALL"
_PROBLEM_LETTER = re.compile(r"^[A-Z]$")

# ==================== EVENT MODELS ====================


class ContestEvent(BaseModel):
    """Base of every validated event"""

    kind: CommandKind

    model_config = ConfigDict(frozen=True)


class AddTeamEvent(ContestEvent):
    kind: Literal[CommandKind.ADDTEAM] = CommandKind.ADDTEAM
    team: str = Field(..., min_length=1, description="Team name")


class StartEvent(ContestEvent):
    kind: Literal[CommandKind.START] = CommandKind.START
    duration: int = Field(..., ge=0, description="Contest duration in minutes")
    problem_count: int = Field(..., ge=1, le=26, description="Number of problems (A-Z)")


class SubmitEvent(ContestEvent):
    kind: Literal[CommandKind.SUBMIT] = CommandKind.SUBMIT
    problem: str = Field(..., description="Problem letter")
    team: str = Field(..., min_length=1)
    verdict: Verdict
    time: int = Field(..., ge=0, description="Submission time in minutes")

    @field_validator("problem")
    @classmethod
    def validate_problem(cls, v: str) -> str:
        """Problem must be a single upper-case letter"""
        if not _PROBLEM_LETTER.match(v):
            raise ValueError(f"problem must be a letter A-Z, got {v!r}")
        return v

    @property
    def problem_index(self) -> int:
        return problem_index(self.problem)


class QueryRankingEvent(ContestEvent):
    kind: Literal[CommandKind.QUERY_RANKING] = CommandKind.QUERY_RANKING
    team: str = Field(..., min_length=1)


class QuerySubmissionEvent(ContestEvent):
    kind: Literal[CommandKind.QUERY_SUBMISSION] = CommandKind.QUERY_SUBMISSION
    team: str = Field(..., min_length=1)
    # None means ALL
    problem: Optional[str] = None
    status: Optional[Verdict] = None

    @field_validator("problem")
    @classmethod
    def validate_problem(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == ALL:
            return None
        if not _PROBLEM_LETTER.match(v):
            raise ValueError(f"PROBLEM must be ALL or a letter A-Z, got {v!r}")
        return v

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if v == ALL:
            return None
        return v

    @property
    def problem_index(self) -> Optional[int]:
        return None if self.problem is None else problem_index(self.problem)


class BareEvent(ContestEvent):
    """FLUSH, FREEZE, SCROLL and END carry no fields"""

    @model_validator(mode="after")
    def validate_kind(self) -> Self:
        if self.kind not in _BARE_KINDS:
            raise ValueError(f"{self.kind.value} requires arguments")
        return self


Event = Union[AddTeamEvent, StartEvent, SubmitEvent, QueryRankingEvent, QuerySubmissionEvent, BareEvent]

_BARE_KINDS = {CommandKind.FLUSH, CommandKind.FREEZE, CommandKind.SCROLL, CommandKind.END}

# ==================== FIELD LAYOUTS ====================


def _expect(fields: List[str], count: int, connectors: Dict[int, str], kind: CommandKind) -> None:
    if len(fields) != count:
        raise ValueError(f"{kind.value} expects {count} fields, got {len(fields)}")
    for pos, word in connectors.items():
        if fields[pos] != word:
            raise ValueError(f"{kind.value} expects {word!r} at field {pos}, got {fields[pos]!r}")


def _strip_prefix(value: str, prefix: str) -> str:
    if not value.startswith(prefix):
        raise ValueError(f"expected {prefix!r}..., got {value!r}")
    return value[len(prefix):]


def _event_from_fields(kind: CommandKind, fields: List[str]) -> Event:
    if kind == CommandKind.ADDTEAM:
        _expect(fields, 1, {}, kind)
        return AddTeamEvent(team=fields[0])

    if kind == CommandKind.START:
        # START DURATION <int> PROBLEM <int>
        _expect(fields, 4, {0: "DURATION", 2: "PROBLEM"}, kind)
        return StartEvent(duration=fields[1], problem_count=fields[3])

    if kind == CommandKind.SUBMIT:
        # SUBMIT <letter> BY <team> WITH <verdict> AT <time>
        _expect(fields, 7, {1: "BY", 3: "WITH", 5: "AT"}, kind)
        return SubmitEvent(problem=fields[0], team=fields[2], verdict=fields[4], time=fields[6])

    if kind == CommandKind.QUERY_RANKING:
        _expect(fields, 1, {}, kind)
        return QueryRankingEvent(team=fields[0])

    if kind == CommandKind.QUERY_SUBMISSION:
        # QUERY_SUBMISSION <team> WHERE PROBLEM=<p> AND STATUS=<s>
        _expect(fields, 5, {1: "WHERE", 3: "AND"}, kind)
        return QuerySubmissionEvent(
            team=fields[0],
            problem=_strip_prefix(fields[2], "PROBLEM="),
            status=_strip_prefix(fields[4], "STATUS="),
        )

    if fields:
        raise ValueError(f"{kind.value} takes no fields, got {fields}")
    return BareEvent(kind=kind)


def parse_event(payload: CommandPayload) -> Event:
    """
    Validate a lexed command and build its typed event

    Returns:
        Event: Validated event model

    Raises:
        ValueError: If the command is malformed
    """
    kind = payload["kind"]
    try:
        return _event_from_fields(kind, list(payload["fields"]))
    except (ValidationError, ValueError) as e:
        logger.warning(f"Command validation failed: {e}")
        raise ValueError(f"Invalid {kind.value} command: {str(e)}") from e


# ==================== EXPORT ====================

__all__ = [
    "AddTeamEvent",
    "BareEvent",
    "ContestEvent",
    "Event",
    "QueryRankingEvent",
    "QuerySubmissionEvent",
    "StartEvent",
    "SubmitEvent",
    "parse_event",
]
