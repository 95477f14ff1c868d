import random

import pytest

from minigames.breaker_model import Ball, BreakerGame, Brick, build_bricks, overlaps
from minigames.config import (
    BALL_SPEED, BREAKER_HIGH_SCORE_KEY, BRICK_TYPES, CANVAS_W, PADDLE_W,
    RESPAWN_DELAY, START_LIVES,
    STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER, STATE_VICTORY,
)
from minigames.storage import MemoryStore

FRAME = 16


def _playing(store=None, seed=5) -> BreakerGame:
    game = BreakerGame(store=store or MemoryStore(), rng=random.Random(seed))
    game.start()
    return game


def _far_brick() -> Brick:
    return Brick(x=300, y=300, kind="gem", points=30)


# ── Geometry ─────────────────────────────────────────────────────
def test_overlaps_is_strict_on_edges():
    assert overlaps(0, 0, 10, 10, 5, 5, 10, 10)
    assert not overlaps(0, 0, 10, 10, 10, 0, 10, 10)
    assert not overlaps(0, 0, 10, 10, 0, 10, 10, 10)


def test_build_bricks_lays_out_full_grid_with_known_types():
    bricks = build_bricks(random.Random(1))
    assert len(bricks) == 64
    points = {name: pts for name, pts, _color in BRICK_TYPES}
    for brick in bricks:
        assert points[brick.type] == brick.points
        assert not brick.destroyed
    assert (bricks[0].x, bricks[0].y) == (20, 50)
    assert (bricks[9].x, bricks[9].y) == (70, 80)


# ── Lifecycle ────────────────────────────────────────────────────
def test_initial_state_is_menu_with_fresh_board():
    game = BreakerGame()
    snap = game.snapshot()
    assert snap.state == STATE_MENU
    assert snap.lives == START_LIVES
    assert snap.level == 1
    assert snap.score == 0
    assert len(snap.bricks) == 64
    assert snap.ball == (200, 450, 3, -3)
    assert snap.paddle == (160, 470)


def test_tick_is_noop_outside_playing():
    game = BreakerGame()
    game.tick()
    assert game.snapshot().ball == (200, 450, 3, -3)


def test_start_arms_frame_scheduler():
    game = _playing()
    assert game.state == STATE_PLAYING
    assert game.scheduler.running
    assert game.advance(FRAME) == 1
    assert (game.ball.x, game.ball.y) == (203, 447)


def test_pause_halts_frames_and_resume_continues():
    game = _playing()
    game.toggle_pause()
    assert game.state == STATE_PAUSED
    assert not game.scheduler.running
    assert game.advance(1000) == 0
    assert (game.ball.x, game.ball.y) == (200, 450)

    game.toggle_pause()
    assert game.state == STATE_PLAYING
    assert game.advance(FRAME) == 1


# ── Walls and paddle ─────────────────────────────────────────────
def test_top_wall_reflects_vertical_only():
    game = _playing()
    game.bricks = [_far_brick()]
    game.ball = Ball(50, 50, 3, -3, 3)

    while game.ball.dy < 0:
        game.tick()

    assert game.ball.y <= 0
    assert (game.ball.dx, game.ball.dy) == (3, 3)


def test_side_walls_reflect_horizontal():
    game = _playing()
    game.bricks = [_far_brick()]
    game.ball = Ball(1, 200, -3, 3, 3)
    game.tick()
    assert game.ball.dx == 3

    game.ball = Ball(CANVAS_W - 9, 200, 3, 3, 3)
    game.tick()
    assert game.ball.dx == -3


def test_paddle_hit_forces_upward_and_angles_by_offset():
    game = _playing()
    game.bricks = [_far_brick()]
    game.ball = Ball(196, 460, 0, 3, 3)

    game.tick()

    assert game.ball.dy == -3
    assert game.ball.dx == pytest.approx((36 / PADDLE_W - 0.5) * 6)


def test_paddle_edge_hit_is_clamped_to_full_deflection():
    game = _playing()
    game.bricks = [_far_brick()]
    game.ball = Ball(155, 460, 0, 3, 3)

    game.tick()

    assert game.ball.dy == -3
    assert game.ball.dx == pytest.approx(-3)


def test_move_paddle_centres_and_clamps():
    game = _playing()
    game.move_paddle(200)
    assert game.paddle.x == 160
    game.move_paddle(-50)
    assert game.paddle.x == 0
    game.move_paddle(10_000)
    assert game.paddle.x == CANVAS_W - PADDLE_W
    game.nudge_paddle(50)
    assert game.paddle.x == CANVAS_W - PADDLE_W
    game.nudge_paddle(-20)
    assert game.paddle.x == CANVAS_W - PADDLE_W - 20


def test_paddle_input_ignored_unless_playing():
    game = BreakerGame()
    game.move_paddle(0)
    game.nudge_paddle(-100)
    assert game.paddle.x == 160


# ── Bricks ───────────────────────────────────────────────────────
def test_first_overlapping_brick_wins_and_dy_flips_once():
    game = _playing()
    first = Brick(x=100, y=100, kind="coin", points=25)
    second = Brick(x=100, y=100, kind="gem", points=30)
    game.bricks = [first, second, _far_brick()]
    game.ball = Ball(110, 120, 0, -3, 3)

    game.tick()

    assert first.destroyed
    assert not second.destroyed
    assert game.score == 25
    assert game.ball.dy == 3


def test_destroyed_bricks_stay_destroyed():
    game = _playing(seed=11)
    destroyed: set[int] = set()
    for _ in range(3000):
        game.move_paddle(game.ball.x)
        game.tick()
        now = {i for i, b in enumerate(game.bricks) if b.destroyed}
        assert destroyed <= now
        destroyed = now
        if game.state != STATE_PLAYING:
            break


def test_brick_points_update_and_persist_high_score():
    store = MemoryStore({BREAKER_HIGH_SCORE_KEY: "10"})
    game = _playing(store=store)
    assert game.high_score == 10
    game.bricks = [Brick(x=100, y=100, kind="powerup", points=20), _far_brick()]
    game.ball = Ball(110, 120, 0, -3, 3)

    game.tick()

    assert game.high_score == 20
    assert store.get(BREAKER_HIGH_SCORE_KEY) == "20"


def test_clearing_board_is_victory_and_next_level_speeds_up():
    game = _playing()
    game.bricks = [Brick(x=100, y=100, kind="card", points=15)]
    game.ball = Ball(110, 120, 0, -3, 3)

    game.tick()

    assert game.state == STATE_VICTORY
    assert game.level == 2
    assert not game.scheduler.running

    game.next_level()
    assert game.state == STATE_PLAYING
    assert game.score == 15
    assert game.lives == START_LIVES
    assert len(game.bricks) == 64
    assert game.ball.dx == BALL_SPEED + 2 * 0.5
    assert game.ball.dy == -(BALL_SPEED + 2 * 0.5)


def test_next_level_only_from_victory():
    game = _playing()
    game.next_level()
    assert game.level == 1


# ── Lives ────────────────────────────────────────────────────────
def test_lost_ball_costs_a_life_and_respawns_after_delay():
    game = _playing()
    game.ball = Ball(200, 499, 0, 3, 3)
    game.move_paddle(30)

    game.advance(FRAME)
    assert game.lives == START_LIVES - 1
    assert not game.ball_in_play
    assert game.scheduler.pending == 1

    # The out-of-play ball cannot cost a second life while waiting.
    game.advance(FRAME)
    assert game.lives == START_LIVES - 1

    game.advance(RESPAWN_DELAY)
    assert game.ball_in_play
    assert game.ball.speed == BALL_SPEED + 0.5
    assert game.ball.dy == -(BALL_SPEED + 0.5)


def test_last_life_lost_is_game_over_and_ball_frozen():
    game = _playing()
    game.lives = 1
    game.ball = Ball(200, 499, 0, 3, 3)
    game.move_paddle(30)

    game.tick()

    assert game.lives == 0
    assert game.state == STATE_OVER
    assert not game.scheduler.running
    frozen = game.snapshot().ball
    game.advance(1000)
    game.tick()
    assert game.snapshot().ball == frozen


def test_start_from_game_over_plays_again_fresh():
    game = _playing()
    game.lives = 1
    game.score = 55
    game.ball = Ball(200, 499, 0, 3, 3)
    game.move_paddle(30)
    game.tick()
    assert game.state == STATE_OVER

    game.start()
    assert game.state == STATE_PLAYING
    assert game.score == 0
    assert game.lives == START_LIVES
    assert game.level == 1


def test_close_mid_play_cancels_respawn_and_resets():
    game = _playing()
    game.ball = Ball(200, 499, 0, 3, 3)
    game.move_paddle(30)
    game.advance(FRAME)
    assert game.scheduler.pending == 1

    game.close()
    game.advance(1000)

    snap = game.snapshot()
    assert snap.state == STATE_MENU
    assert snap.lives == START_LIVES
    assert snap.score == 0
    assert snap.ball == (200, 450, 3, -3)
    assert snap.ball_in_play
    assert game.scheduler.pending == 0
    assert not game.scheduler.running


def test_pending_respawn_is_held_while_paused():
    game = _playing()
    game.ball = Ball(200, 499, 0, 3, 3)
    game.move_paddle(30)
    game.advance(FRAME)
    assert not game.ball_in_play

    game.toggle_pause()
    assert game.scheduler.pending == 0
    game.advance(500)
    assert game.state == STATE_PAUSED
    assert not game.ball_in_play

    game.toggle_pause()
    assert game.scheduler.pending == 1
    game.advance(RESPAWN_DELAY - 1)
    assert not game.ball_in_play
    game.advance(1)
    assert game.ball_in_play
    assert game.lives == START_LIVES - 1
