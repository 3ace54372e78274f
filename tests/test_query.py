import pytest

from scoreboard_core import Contest, Settings, TeamNotFound, Verdict

AC = Verdict.ACCEPTED
WA = Verdict.WRONG_ANSWER
RE = Verdict.RUNTIME_ERROR
TLE = Verdict.TIME_LIMIT_EXCEED


@pytest.fixture
def contest() -> Contest:
    c = Contest(Settings())
    c.add_team("red")
    c.add_team("blue")
    c.start(duration=120, problem_count=3)
    return c


def test_query_ranking_reflects_last_flush_only(contest):
    assert contest.query_ranking("blue").rank == 1
    contest.submit("red", 0, AC, 10)
    # No implicit flush.
    assert contest.query_ranking("red").rank == 2
    contest.flush()
    answer = contest.query_ranking("red")
    assert answer.rank == 1
    assert answer.frozen is False
    assert str(answer) == "red NOW AT RANKING 1"


def test_query_ranking_flags_frozen_board(contest):
    contest.freeze()
    assert contest.query_ranking("red").frozen is True


def test_query_unknown_team_raises(contest):
    with pytest.raises(TeamNotFound):
        contest.query_ranking("green")
    with pytest.raises(TeamNotFound):
        contest.query_submission("green")


def test_all_all_returns_most_recent_submission(contest):
    assert contest.query_submission("red") is None
    contest.submit("red", 2, WA, 3)
    contest.submit("red", 0, AC, 8)
    contest.submit("red", 1, TLE, 12)
    match = contest.query_submission("red")
    assert str(match) == "red B Time_Limit_Exceed 12"


def test_specific_problem_any_status(contest):
    contest.submit("red", 0, WA, 3)
    contest.submit("red", 0, RE, 5)
    contest.submit("red", 1, AC, 9)
    assert str(contest.query_submission("red", 0)) == "red A Runtime_Error 5"
    assert contest.query_submission("red", 2) is None


def test_specific_status_any_problem(contest):
    contest.submit("red", 0, WA, 3)
    contest.submit("red", 2, WA, 6)
    contest.submit("red", 1, AC, 9)
    assert str(contest.query_submission("red", verdict=WA)) == "red C Wrong_Answer 6"
    assert str(contest.query_submission("red", verdict=AC)) == "red B Accepted 9"
    assert contest.query_submission("red", verdict=RE) is None


def test_specific_status_specific_problem(contest):
    contest.submit("red", 0, WA, 3)
    contest.submit("red", 0, AC, 7)
    contest.submit("red", 0, WA, 11)
    assert str(contest.query_submission("red", 0, WA)) == "red A Wrong_Answer 11"
    assert str(contest.query_submission("red", 0, AC)) == "red A Accepted 7"
    assert contest.query_submission("red", 0, TLE) is None


def test_problem_outside_contest_has_no_submission(contest):
    contest.submit("red", 0, AC, 7)
    assert contest.query_submission("red", 5) is None
    assert contest.query_submission("red", 5, AC) is None


def test_frozen_submissions_are_still_queryable(contest):
    contest.freeze()
    contest.submit("blue", 2, AC, 100)
    assert str(contest.query_submission("blue")) == "blue C Accepted 100"
