"""Type definitions for contest events and per-problem state."""
from __future__ import annotations

from enum import Enum
from typing import List, TypedDict


class CommandKind(str, Enum):
    """Keyword at the head of every command line."""

    ADDTEAM = "ADDTEAM"
    START = "START"
    SUBMIT = "SUBMIT"
    FLUSH = "FLUSH"
    FREEZE = "FREEZE"
    SCROLL = "SCROLL"
    QUERY_RANKING = "QUERY_RANKING"
    QUERY_SUBMISSION = "QUERY_SUBMISSION"
    END = "END"


class Verdict(str, Enum):
    """Judge outcome of a submission. Values are the wire spelling."""

    ACCEPTED = "Accepted"
    WRONG_ANSWER = "Wrong_Answer"
    RUNTIME_ERROR = "Runtime_Error"
    TIME_LIMIT_EXCEED = "Time_Limit_Exceed"


class ProblemState(str, Enum):
    OPEN = "open"
    SOLVED = "solved"
    # Only while the scoreboard is frozen, for problems not solved before freezing.
    FROZEN = "frozen"


class CommandPayload(TypedDict):
    """
    Shape delivered by the lexer for one command line.

    `fields` keeps every word after the keyword, connector words included
    (e.g. ``["A", "BY", "team1", "WITH", "Accepted", "AT", "15"]`` for SUBMIT).
    """

    kind: CommandKind
    fields: List[str]


def problem_letter(index: int) -> str:
    return chr(ord("A") + index)


def problem_index(letter: str) -> int:
    return ord(letter[0]) - ord("A")
