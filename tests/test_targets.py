import numpy as np
import pytest

from game.targets import Bounds, PickKickGame, PICK, KICK, is_hit, random_position
from gesture.types import GestureResult, Landmark, THUMB_TIP, INDEX_TIP, RIGHT_ANKLE


def test_hit_radius_is_strict():
    assert is_hit((0, 0), (59.9, 0))
    assert not is_hit((0, 0), (60, 0))
    assert not is_hit((0, 0), (36, 48))  # 3-4-5 -> exactly 60
    assert is_hit((100, 100), (120, 130))


def test_random_position_within_bounds():
    rng = np.random.default_rng(0)
    b = Bounds(60, 420, 100, 700)
    for _ in range(500):
        assert b.contains(random_position(b, rng))


def test_random_position_degenerate_bounds():
    b = Bounds(10, 10, 20, 20)
    assert random_position(b, np.random.default_rng(1)) == (10.0, 20.0)


def test_bounds_for_surface():
    assert Bounds.for_surface(480, 800) == Bounds(60, 420, 100, 700)


def to_norm(px, py, w, h):
    return px / w, 1.0 - py / h


def pick_result(px, py, game, detected=True):
    x, y = to_norm(px, py, game.width, game.height)
    return GestureResult(
        pick_detected=detected,
        hand_landmarks={THUMB_TIP: Landmark(x, y, 0.9), INDEX_TIP: Landmark(x, y, 0.9)},
    )


def kick_result(px, py, game, detected=True):
    x, y = to_norm(px, py, game.width, game.height)
    return GestureResult(kick_detected=detected, body_landmarks={RIGHT_ANKLE: Landmark(x, y, 0.9)})


@pytest.fixture
def game():
    return PickKickGame(width=1000, height=2000, rng=np.random.default_rng(42))


def test_pick_hit_scores_and_moves(game):
    target = game.targets[PICK]
    start = target.position
    hits = game.apply(pick_result(start[0] + 10, start[1], game), now=0.0)

    assert len(hits) == 1 and hits[0].kind == PICK
    assert game.pick_count == 1 and game.kick_count == 0
    assert game.feedback.message == "Great Pick! +1"
    assert game.feedback.visible(1.0) and not game.feedback.visible(1.6)
    assert game.bounds.contains(target.position)
    assert hits[0].old_position == start
    assert target.highlighted


def test_pick_far_from_target_is_not_a_hit(game):
    start = game.targets[PICK].position
    assert game.apply(pick_result(start[0] + 200, start[1], game), now=0.0) == []
    assert game.pick_count == 0
    assert game.targets[PICK].position == start


def test_hit_only_on_rising_edge(game):
    pos = game.targets[KICK].position
    game.apply(kick_result(pos[0], pos[1], game, detected=False), now=0.0)
    assert len(game.apply(kick_result(pos[0], pos[1], game), now=0.1)) == 1

    # flag stays true: no second check even if on the new position
    new = game.targets[KICK].position
    assert game.apply(kick_result(new[0], new[1], game), now=0.2) == []
    assert game.kick_count == 1

    game.apply(GestureResult.empty(), now=0.3)
    assert not game.targets[KICK].highlighted
    assert len(game.apply(kick_result(new[0], new[1], game), now=0.4)) == 1
    assert game.kick_count == 2
    assert game.feedback.message == "Nice Kick! +1"


def test_missing_anchor_is_not_a_hit(game):
    assert game.apply(GestureResult(pick_detected=True), now=0.0) == []
    assert game.targets[PICK].highlighted
    assert game.pick_count == 0


def test_reset(game):
    pos = game.targets[PICK].position
    game.apply(pick_result(pos[0], pos[1], game), now=0.0)
    game.reset()
    assert game.pick_count == 0 and game.kick_count == 0
    assert not game.feedback.visible(0.1)
