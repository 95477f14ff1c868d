import random

from minigames.config import (
    BASE_SPEED, MIN_SPEED, SNAKE_HIGH_SCORE_KEY,
    STATE_IDLE, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from minigames.snake_model import Direction, Snake, SnakeGame
from minigames.storage import MemoryStore


class ScriptedRng:
    """randrange() answers from a fixed script, so food placement is known."""

    def __init__(self, values):
        self._values = list(values)

    def randrange(self, n):
        value = self._values.pop(0)
        assert 0 <= value < n
        return value


def _playing(store=None, rng=None) -> SnakeGame:
    game = SnakeGame(store=store or MemoryStore(), rng=rng or random.Random(3))
    game.start()
    return game


def test_initial_state():
    game = SnakeGame()
    snap = game.snapshot()
    assert snap.body == ((10, 10),)
    assert snap.food == (15, 15)
    assert snap.direction == (0, -1)
    assert snap.score == 0
    assert snap.level == 1
    assert snap.speed == BASE_SPEED
    assert snap.state == STATE_IDLE


def test_five_ticks_straight_up():
    game = _playing()
    for _ in range(5):
        game.tick()

    snap = game.snapshot()
    assert snap.body[0] == (10, 5)
    assert len(snap.body) == 1
    assert snap.score == 0
    assert snap.state == STATE_PLAYING


def test_tick_is_noop_before_start():
    game = SnakeGame()
    game.tick()
    assert game.snapshot().body == ((10, 10),)


def test_eating_grows_scores_and_respawns_food_off_the_body():
    # First two samples land on the body and must be rejected.
    game = _playing(rng=ScriptedRng([10, 9, 10, 10, 3, 4]))
    game.food = (10, 9)

    game.tick()

    snap = game.snapshot()
    assert snap.score == 10
    assert snap.body == ((10, 9), (10, 10))
    assert snap.food == (3, 4)
    assert snap.food not in snap.body


def test_wall_collision_ends_game_and_stops_scheduler():
    game = _playing()
    game.snake = Snake([(0, 0)], Direction.UP)

    game.tick()

    assert game.state == STATE_OVER
    assert not game.scheduler.running
    assert game.snapshot().body == ((0, 0),)


def test_moving_into_own_tail_cell_ends_game():
    game = _playing()
    game.snake = Snake([(5, 5), (5, 6), (6, 6), (6, 5)], Direction.RIGHT)
    game.food = (0, 0)

    game.tick()

    assert game.state == STATE_OVER


def test_reversal_is_rejected():
    game = _playing()
    assert not game.request_direction(Direction.DOWN)
    game.tick()
    assert game.snake.head == (10, 9)


def test_queued_turn_applies_on_next_tick():
    game = _playing()
    assert game.request_direction(Direction.LEFT)
    assert game.snake.head == (10, 10)
    game.tick()
    assert game.snake.head == (9, 10)


def test_two_turns_within_one_tick_cannot_reverse():
    game = _playing()
    assert game.request_direction(Direction.LEFT)
    # Still checked against the applied direction (up), so down is a reversal.
    assert not game.request_direction(Direction.DOWN)
    game.tick()
    assert game.snake.head == (9, 10)


def test_direction_ignored_before_start_and_while_paused():
    game = SnakeGame()
    assert not game.request_direction(Direction.LEFT)

    game.start()
    game.toggle_pause()
    assert game.state == STATE_PAUSED
    assert not game.request_direction(Direction.LEFT)


def test_pause_makes_ticks_inert_and_resume_continues():
    game = _playing()
    game.toggle_pause()
    game.advance(5000)
    assert game.snake.head == (10, 10)

    game.toggle_pause()
    assert game.state == STATE_PLAYING
    game.advance(BASE_SPEED)
    assert game.snake.head == (10, 9)


def test_toggle_pause_ignored_when_not_playing():
    game = SnakeGame()
    game.toggle_pause()
    assert game.state == STATE_IDLE


def test_scheduler_drives_ticks_at_current_speed():
    game = _playing()
    assert game.advance(BASE_SPEED - 1) == 0
    assert game.advance(1) == 1
    assert game.advance(BASE_SPEED * 3) == 3
    assert game.snake.head == (10, 6)


def test_level_up_every_fifty_points_reschedules():
    game = _playing()
    game.score = 40
    game.food = (10, 9)

    game.tick()

    assert game.score == 50
    assert game.level == 2
    assert game.speed == BASE_SPEED - 10
    assert game.scheduler.period == BASE_SPEED - 10


def test_speed_only_decreases_and_respects_floor():
    game = _playing()
    speeds = [game.speed]
    for _ in range(100):
        game.snake = Snake([(10, 10)], Direction.UP)
        game.food = (10, 9)
        game.tick()
        assert game.state == STATE_PLAYING
        speeds.append(game.speed)

    assert game.score == 1000
    assert all(b <= a for a, b in zip(speeds, speeds[1:]))
    assert min(speeds) == MIN_SPEED
    assert game.level == 1000 // 50 + 1


def test_high_score_persisted_immediately():
    store = MemoryStore()
    game = _playing(store=store)
    game.food = (10, 9)
    game.tick()

    assert game.high_score == 10
    assert store.get(SNAKE_HIGH_SCORE_KEY) == "10"


def test_high_score_loaded_from_store_and_not_lowered():
    store = MemoryStore({SNAKE_HIGH_SCORE_KEY: "120"})
    game = _playing(store=store)
    assert game.high_score == 120

    game.food = (10, 9)
    game.tick()
    assert game.high_score == 120
    assert store.get(SNAKE_HIGH_SCORE_KEY) == "120"


def test_reset_restores_initial_state():
    game = _playing()
    game.food = (10, 9)
    game.tick()
    game.tick()

    game.reset()

    snap = game.snapshot()
    assert snap.body == ((10, 10),)
    assert snap.food == (15, 15)
    assert snap.score == 0
    assert snap.state == STATE_IDLE
    assert not game.scheduler.running


def test_close_mid_play_then_reopen_is_fresh():
    game = _playing()
    fresh = SnakeGame(store=MemoryStore()).snapshot()
    game.request_direction(Direction.LEFT)
    game.advance(BASE_SPEED * 2)

    game.close()
    game.advance(10_000)

    assert game.snapshot() == fresh
    assert not game.scheduler.running


def test_body_never_contains_duplicates_under_random_play():
    moves = random.Random(42)
    dirs = [Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT]
    for seed in range(20):
        game = _playing(rng=random.Random(seed))
        for _ in range(400):
            game.request_direction(moves.choice(dirs))
            if moves.random() < 0.3:
                game.food = _cell_ahead(game)
            game.tick()
            body = game.snapshot().body
            assert len(body) == len(set(body))
            if game.food is not None:
                assert game.food not in body
            if game.state == STATE_OVER:
                break


def _cell_ahead(game: SnakeGame):
    hx, hy = game.snake.head
    d = game.snake.next_dir
    cell = (hx + d.x, hy + d.y)
    if game.snake.occupies(*cell) or not (0 <= cell[0] < 20 and 0 <= cell[1] < 20):
        return game.food
    return cell
