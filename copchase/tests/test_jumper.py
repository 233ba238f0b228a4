# copchase/tests/test_jumper.py
"""
Physics integrator and jump rule for a single jumper.

Usage (from repo root):
  pytest copchase/tests/test_jumper.py
"""
import pytest

from copchase.game.config import DEFAULT_CONFIG, GRAVITY, JUMP_FORCE, MAX_JUMPS
from copchase.game.jumper import Jumper

GROUND_Y = DEFAULT_CONFIG.ground_y


def make_jumper(y=None, dy=0.0, grounded=False, reset_jumps=True) -> Jumper:
    j = Jumper(x=50.0, y=0.0, width=60, height=60, reset_jumps_on_landing=reset_jumps)
    if y is None:
        j.place_on_ground(GROUND_Y)
    else:
        j.y, j.dy, j.grounded = y, dy, grounded
    return j


def test_gravity_adds_constant_velocity_each_step():
    j = make_jumper(y=100.0)
    prev_dy = j.dy
    for _ in range(10):
        j.update_physics(GRAVITY, GROUND_Y)
        assert not j.grounded
        assert j.dy == pytest.approx(prev_dy + GRAVITY)
        prev_dy = j.dy


def test_velocity_is_added_after_gravity():
    j = make_jumper(y=100.0, dy=-5.0)
    j.update_physics(GRAVITY, GROUND_Y)
    assert j.dy == pytest.approx(-5.0 + GRAVITY)
    assert j.y == pytest.approx(100.0 - 5.0 + GRAVITY)


def test_crossing_ground_clamps_and_grounds():
    # bottom 0.3 px above the line, the next integration crosses it
    j = make_jumper(y=GROUND_Y - 60 - 0.3, dy=0.0)
    j.jump_count = 2
    j.update_physics(GRAVITY, GROUND_Y)
    assert j.grounded
    assert j.dy == 0.0
    assert j.bottom == GROUND_Y
    assert j.jump_count == 0


def test_ground_clamp_is_a_steady_state():
    j = make_jumper()
    y0 = j.y
    for _ in range(50):
        j.update_physics(GRAVITY, GROUND_Y)
        assert j.grounded
        assert j.y == y0
        assert j.dy == 0.0


def test_landing_keeps_jump_count_when_not_resetting():
    j = make_jumper(y=GROUND_Y - 60 - 0.1, reset_jumps=False)
    j.jump_count = 3
    j.update_physics(GRAVITY, GROUND_Y)
    assert j.grounded
    assert j.jump_count == 3


def test_double_jump_budget():
    j = make_jumper()
    results = [j.try_jump(MAX_JUMPS, JUMP_FORCE) for _ in range(3)]
    assert results == [True, True, False]
    assert j.jump_count == 2
    assert j.dy == JUMP_FORCE
    assert not j.grounded


def test_third_jump_leaves_velocity_untouched():
    j = make_jumper()
    j.try_jump(MAX_JUMPS, JUMP_FORCE)
    j.update_physics(GRAVITY, GROUND_Y)
    j.try_jump(MAX_JUMPS, JUMP_FORCE)
    j.update_physics(GRAVITY, GROUND_Y)
    dy_before = j.dy
    assert j.try_jump(MAX_JUMPS, JUMP_FORCE) is False
    assert j.dy == dy_before


def test_budget_refills_after_landing():
    j = make_jumper()
    j.try_jump(MAX_JUMPS, JUMP_FORCE)
    j.try_jump(MAX_JUMPS, JUMP_FORCE)
    for _ in range(200):
        j.update_physics(GRAVITY, GROUND_Y)
        if j.grounded:
            break
    assert j.grounded and j.jump_count == 0
    assert j.try_jump(MAX_JUMPS, JUMP_FORCE)


def test_rect_is_integer_snapshot():
    j = make_jumper(y=100.7)
    j.x = 12.9
    r = j.rect
    assert (r.x, r.y, r.w, r.h) == (12, 100, 60, 60)
