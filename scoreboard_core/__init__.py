from .config import Settings, get_settings
from .contest import (
    CommandOutcome,
    Contest,
    apply_command,
    execute_line,
)
from .errors import (
    CompetitionAlreadyStarted,
    DuplicateTeam,
    ScoreboardAlreadyFrozen,
    ScoreboardError,
    ScoreboardNotFrozen,
    TeamNotFound,
)
from .lexer import KEYWORDS, tokenize
from .query import QueryEngine, RankingAnswer, SubmissionMatch
from .ranking import RankingIndex, RankKey, rank_key, ranks_before
from .records import LastEvent, LastSubmission, ProblemRecord, TeamRecord
from .scroll import FreezeScrollEngine, Overtake, ScrollReport
from .submission import apply_submission
from .types import CommandKind, CommandPayload, ProblemState, Verdict
from .validation import parse_event

__all__ = [
    "CommandKind",
    "CommandOutcome",
    "CommandPayload",
    "CompetitionAlreadyStarted",
    "Contest",
    "DuplicateTeam",
    "FreezeScrollEngine",
    "KEYWORDS",
    "LastEvent",
    "LastSubmission",
    "Overtake",
    "ProblemRecord",
    "ProblemState",
    "QueryEngine",
    "RankKey",
    "RankingAnswer",
    "RankingIndex",
    "ScoreboardAlreadyFrozen",
    "ScoreboardError",
    "ScoreboardNotFrozen",
    "ScrollReport",
    "Settings",
    "SubmissionMatch",
    "TeamNotFound",
    "TeamRecord",
    "Verdict",
    "apply_command",
    "apply_submission",
    "execute_line",
    "get_settings",
    "parse_event",
    "rank_key",
    "ranks_before",
    "tokenize",
]
