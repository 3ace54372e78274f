import random

import pytest

from scoreboard_core import (
    Contest,
    ProblemState,
    ScoreboardAlreadyFrozen,
    ScoreboardNotFrozen,
    Settings,
    Verdict,
    rank_key,
)

AC = Verdict.ACCEPTED
WA = Verdict.WRONG_ANSWER


def _contest(teams, problems=2) -> Contest:
    contest = Contest(Settings())
    for name in teams:
        contest.add_team(name)
    contest.start(duration=300, problem_count=problems)
    return contest


def test_freeze_twice_and_scroll_unfrozen_are_rejected():
    contest = _contest(["a"])
    with pytest.raises(ScoreboardNotFrozen):
        contest.scroll()
    contest.freeze()
    with pytest.raises(ScoreboardAlreadyFrozen):
        contest.freeze()
    assert contest.frozen is True


def test_freeze_snapshots_error_counts():
    contest = _contest(["a"])
    contest.submit("a", 0, WA, 5)
    contest.submit("a", 0, WA, 6)
    contest.freeze()
    assert contest.teams["a"].problems[0].before_freeze_error_count == 2
    assert contest.teams["a"].problems[1].before_freeze_error_count == 0


def test_scroll_reveals_worst_team_first_and_reports_overtakes():
    contest = _contest(["alpha", "bravo", "charlie"])
    contest.submit("alpha", 0, AC, 10)
    contest.submit("bravo", 0, AC, 20)
    contest.freeze()
    contest.submit("charlie", 0, AC, 30)
    contest.submit("charlie", 1, AC, 40)
    contest.submit("bravo", 1, AC, 50)
    contest.submit("alpha", 1, WA, 60)

    report = contest.scroll()

    assert report.standings_before == [
        "alpha 1 1 10 + 0/1 ",
        "bravo 2 1 20 + 0/1 ",
        "charlie 3 0 0 0/1 0/1 ",
    ]
    assert report.reveals == [("charlie", 0), ("charlie", 1), ("bravo", 1), ("alpha", 1)]
    assert [str(o) for o in report.overtakes] == ["charlie alpha 2 70", "bravo alpha 2 70"]
    assert report.standings_after == [
        "charlie 1 2 70 + + ",
        "bravo 2 2 70 + + ",
        "alpha 3 1 10 + -1 ",
    ]
    assert contest.frozen is False


def test_team_that_climbs_waits_for_teams_now_below_it():
    contest = _contest(["x", "y"])
    contest.submit("y", 0, AC, 100)
    contest.freeze()
    contest.submit("x", 0, AC, 10)
    contest.submit("x", 1, AC, 20)
    contest.submit("y", 1, WA, 110)

    report = contest.scroll()

    # x jumps over y after its first reveal, so y goes before x's second one.
    assert report.reveals == [("x", 0), ("y", 1), ("x", 1)]
    assert [str(o) for o in report.overtakes] == ["x y 1 10"]
    assert report.standings_after == ["x 1 2 30 + + ", "y 2 1 100 + -1 "]


def test_no_overtake_line_when_position_does_not_change():
    contest = _contest(["a", "b"])
    contest.submit("a", 0, AC, 5)
    contest.freeze()
    contest.submit("b", 0, AC, 50)

    report = contest.scroll()
    # b reaches (1, 50) which is still behind a (1, 5).
    assert report.overtakes == []
    assert report.reveals == [("b", 0)]


def test_after_scroll_nothing_is_frozen():
    contest = _contest(["a", "b", "c"], problems=3)
    contest.freeze()
    contest.submit("a", 0, WA, 200)
    contest.submit("a", 2, AC, 210)
    contest.submit("b", 1, AC, 220)
    contest.submit("c", 0, WA, 230)
    contest.submit("c", 0, AC, 240)
    report = contest.scroll()
    assert [str(o) for o in report.overtakes] == ["c a 1 260", "b c 1 220", "a b 1 210"]

    for team in contest.teams.values():
        assert team.has_frozen_problem is False
        assert all(p.state is not ProblemState.FROZEN for p in team.problems)
        assert team.solved_count == len(team.solved_times)

    a = contest.teams["a"]
    assert a.problems[0].state is ProblemState.OPEN
    assert a.problems[0].render() == "-1"
    assert a.solved_count == 1
    c = contest.teams["c"]
    assert c.time_punishment == 240 + 20
    assert [contest.teams[n].rank for n in ("a", "b", "c")] == [1, 2, 3]
    assert c.rank == 3


def test_scroll_with_nothing_frozen_prints_standings_twice():
    contest = _contest(["a", "b"])
    contest.submit("b", 0, AC, 1)
    contest.freeze()
    report = contest.scroll()
    assert report.standings_before == report.standings_after == ["b 1 1 1 + . ", "a 2 0 0 . . "]
    assert report.reveals == []


def test_second_freeze_window_uses_fresh_snapshot():
    contest = _contest(["a"], problems=1)
    contest.freeze()
    contest.submit("a", 0, WA, 10)
    contest.scroll()
    assert contest.teams["a"].problems[0].render() == "-1"

    contest.freeze()
    contest.submit("a", 0, AC, 20)
    assert contest.teams["a"].problems[0].render() == "-1/1"
    report = contest.scroll()
    assert report.standings_after == ["a 1 1 40 +1 "]


def test_reveal_copies_only_the_revealed_problem_record():
    contest = _contest(["a"], problems=3)
    contest.freeze()
    contest.submit("a", 1, AC, 30)
    before = contest.teams["a"]
    before_problems = list(before.problems)

    contest.scroll()

    after = contest.teams["a"]
    assert after is not before
    assert after.problems[1] is not before_problems[1]
    assert after.problems[0] is before_problems[0]
    assert after.problems[2] is before_problems[2]
    # The replaced record keeps its pre-reveal state.
    assert before.problems[1].state is ProblemState.FROZEN
    assert before.solved_times == []
    assert after.solved_times == [30]
    assert after.problems[1].state is ProblemState.SOLVED


def test_scroll_large_board_ends_fully_ordered():
    rng = random.Random(1234)
    names = [f"team{i:04d}" for i in range(2000)]
    contest = _contest(names, problems=26)
    verdicts = list(Verdict)
    for _ in range(6000):
        contest.submit(rng.choice(names), rng.randrange(26), rng.choice(verdicts), rng.randint(0, 240))
    contest.flush()
    contest.freeze()
    for _ in range(6000):
        contest.submit(rng.choice(names), rng.randrange(26), rng.choice(verdicts), rng.randint(240, 300))
    frozen_cells = sum(p.is_frozen for team in contest.teams.values() for p in team.problems)
    assert frozen_cells > 0

    report = contest.scroll()

    assert len(report.reveals) == frozen_cells
    expected = sorted(contest.teams.values(), key=rank_key)
    assert [line.split()[0] for line in report.standings_after] == [t.name for t in expected]
    assert [t.rank for t in expected] == list(range(1, len(names) + 1))
    for team in contest.teams.values():
        assert not team.has_frozen_problem
        solved = [p for p in team.problems if p.is_solved]
        assert team.solved_times == sorted(p.first_accept_time for p in solved)
        assert team.time_punishment == sum(p.first_accept_time + 20 * p.error_count for p in solved)
