from sketchroom.domain.common.scoring import (
    all_guessed,
    drawer_bonus,
    guesser_points,
    is_too_close,
    leaderboard,
)
from sketchroom.store.models import PlayerStore


def test_fast_guess_scores_high():
    assert guesser_points(0) == 120
    assert guesser_points(10) == 105
    assert drawer_bonus(105) == 42


def test_points_never_drop_below_floor():
    assert guesser_points(67) == 20
    assert guesser_points(80) == 20
    assert guesser_points(500) == 20
    assert drawer_bonus(20) == 8


def test_half_points_round_up():
    # 120 - 5 * 1.5 = 112.5
    assert guesser_points(5) == 113
    # 113 * 0.4 = 45.2
    assert drawer_bonus(113) == 45


def test_negative_elapsed_treated_as_zero():
    assert guesser_points(-3) == 120


def test_too_close_guard():
    assert is_too_close("ele", "elephant") is True
    assert is_too_close("PHANT", "elephant") is True
    # two characters are allowed through
    assert is_too_close("el", "elephant") is False
    # exact match is a correct guess, not a near miss
    assert is_too_close("Elephant", "elephant") is False
    assert is_too_close("giraffe", "elephant") is False


def test_all_guessed_ignores_drawer():
    assert all_guessed(["d", "a", "b"], "d", {"a", "b"}) is True
    assert all_guessed(["d", "a", "b"], "d", {"a"}) is False
    # nobody to guess
    assert all_guessed(["d"], "d", set()) is False


def test_leaderboard_ranks_by_score_ties_keep_join_order():
    players = [
        PlayerStore(pid="a", name="Ann", score=50),
        PlayerStore(pid="b", name="Bob", score=120),
        PlayerStore(pid="c", name="Cid", score=50),
    ]
    board = leaderboard(players)
    assert [row["name"] for row in board] == ["Bob", "Ann", "Cid"]
    assert [row["rank"] for row in board] == [1, 2, 3]
    assert board[0]["score"] == 120
