"""
Scoreboard error taxonomy.

Every error is recoverable and local to one command: the core raises before
mutating anything, `apply_command` turns the exception into the single
user-visible line carried by `message`, and the read loop moves on.
"""


class ScoreboardError(Exception):
    """Base class of all command-level scoreboard failures."""

    message = "[Error]Command failed."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ============ Registration / start ============

class DuplicateTeam(ScoreboardError):
    message = "[Error]Add failed: duplicated team name."

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__()


class CompetitionAlreadyStarted(ScoreboardError):
    """ADDTEAM or START after the contest has started."""

    message = "[Error]Start failed: competition has started."


# ============ Queries ============

class TeamNotFound(ScoreboardError):
    message = "[Error]Query failed: cannot find the team."

    def __init__(self, team_name: str, message: str | None = None):
        self.team_name = team_name
        super().__init__(message)


# ============ Freeze / scroll ============

class ScoreboardAlreadyFrozen(ScoreboardError):
    message = "[Error]Freeze failed: scoreboard has been frozen."


class ScoreboardNotFrozen(ScoreboardError):
    message = "[Error]Scroll failed: scoreboard has not been frozen."
