"""
snake_model.py - Snake Engine.

Owns ALL snake game state and rules. Zero rendering, zero input handling.
Exposes a clean API for the controller to call and a snapshot for the view.

Classes:
    Direction      - immutable (dx, dy) value object
    Snake          - body, current and queued direction
    SnakeSnapshot  - frozen view of one tick, handed to the renderer
    SnakeGame      - top-level engine; owns snake, food, score and scheduler
"""

import logging
import random
from collections import deque
from dataclasses import dataclass

from .config import (
    GRID_SIZE, INITIAL_SNAKE, INITIAL_FOOD, INITIAL_DIR,
    BASE_SPEED, SPEED_INCREASE, MIN_SPEED,
    FOOD_POINTS, POINTS_PER_LEVEL, SNAKE_HIGH_SCORE_KEY,
    STATE_IDLE, STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .scheduler import Scheduler
from .storage import KeyValueStore, MemoryStore, read_high_score

logger = logging.getLogger(__name__)


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure body data. No rendering, no input handling, no scoring.
    Index 0 of body is the head.
    """

    def __init__(self, body, direction: Direction):
        self.body: deque[tuple[int, int]] = deque(tuple(seg) for seg in body)
        self.dir: Direction = direction
        self._next_dir: Direction = direction

    @property
    def head(self) -> tuple[int, int]:
        return self.body[0]

    @property
    def next_dir(self) -> Direction:
        return self._next_dir

    def request_direction(self, new_dir: Direction) -> bool:
        """Queue a direction change (ignored if it would reverse the snake)."""
        if new_dir.is_opposite(self.dir):
            return False
        self._next_dir = new_dir
        return True

    def next_head(self) -> tuple[int, int]:
        """Apply the queued direction and return the cell the head moves into."""
        self.dir = self._next_dir
        hx, hy = self.head
        return hx + self.dir.x, hy + self.dir.y

    def occupies(self, x: int, y: int) -> bool:
        return (x, y) in self.body

    def push_head(self, cell: tuple[int, int]) -> None:
        self.body.appendleft(cell)

    def drop_tail(self) -> None:
        self.body.pop()


# ─────────────────────────── Snapshot ────────────────────────────
@dataclass(frozen=True)
class SnakeSnapshot:
    body: tuple[tuple[int, int], ...]
    food: tuple[int, int] | None
    direction: tuple[int, int]
    score: int
    high_score: int
    level: int
    speed: int
    state: str


# ─────────────────────────── SnakeGame ───────────────────────────
class SnakeGame:
    """
    Top-level snake engine.

    The tick is driven by the engine's own Scheduler at a period of
    `speed` milliseconds; the controller only pumps time in through
    advance(). Randomness and persistence are injected so tests can pin
    both down.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        rng: random.Random | None = None,
        scheduler: Scheduler | None = None,
    ):
        self.store = store if store is not None else MemoryStore()
        self.rng = rng if rng is not None else random.Random()
        self.scheduler = scheduler if scheduler is not None else Scheduler()
        self.high_score: int = read_high_score(self.store, SNAKE_HIGH_SCORE_KEY)
        self.state: str = STATE_IDLE
        self.snake: Snake = None
        self.food: tuple[int, int] | None = None
        self.score: int = 0
        self.level: int = 1
        self.speed: int = BASE_SPEED
        self._reset_entities()

    # ── Public API ───────────────────────────────────────────────
    def start(self) -> None:
        """Fresh board, straight into play."""
        self.reset()
        self.state = STATE_PLAYING
        self.scheduler.start(self.speed, self.tick)
        logger.debug("snake started at %d ms/tick", self.speed)

    def toggle_pause(self) -> None:
        if self.state == STATE_PLAYING:
            self.state = STATE_PAUSED
        elif self.state == STATE_PAUSED:
            self.state = STATE_PLAYING

    def reset(self) -> None:
        self.scheduler.stop()
        self._reset_entities()
        self.state = STATE_IDLE

    def close(self) -> None:
        """Tear down: nothing scheduled before close may fire afterwards."""
        self.scheduler.cancel()
        self.reset()

    def request_direction(self, direction: Direction) -> bool:
        """Queue a turn for the next tick. Only honoured while playing."""
        if self.state != STATE_PLAYING:
            return False
        return self.snake.request_direction(direction)

    def advance(self, elapsed_ms: float) -> int:
        return self.scheduler.advance(elapsed_ms)

    def tick(self) -> None:
        """Advance the simulation by one grid step."""
        if self.state != STATE_PLAYING:
            return

        nx, ny = self.snake.next_head()

        if not (0 <= nx < GRID_SIZE and 0 <= ny < GRID_SIZE):
            self._game_over("wall")
            return

        if self.snake.occupies(nx, ny):
            self._game_over("self")
            return

        self.snake.push_head((nx, ny))

        if (nx, ny) == self.food:
            self._eat()
        else:
            self.snake.drop_tail()

    def snapshot(self) -> SnakeSnapshot:
        return SnakeSnapshot(
            body=tuple(self.snake.body),
            food=self.food,
            direction=(self.snake.dir.x, self.snake.dir.y),
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            speed=self.speed,
            state=self.state,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _reset_entities(self) -> None:
        dx, dy = INITIAL_DIR
        self.snake = Snake(INITIAL_SNAKE, Direction(dx, dy))
        self.food = INITIAL_FOOD
        self.score = 0
        self.level = 1
        self.speed = BASE_SPEED

    def _eat(self) -> None:
        self.score += FOOD_POINTS
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.set(SNAKE_HIGH_SCORE_KEY, str(self.high_score))

        if self.score % POINTS_PER_LEVEL == 0:
            self.level = self.score // POINTS_PER_LEVEL + 1
            new_speed = max(MIN_SPEED, self.speed - SPEED_INCREASE)
            if new_speed != self.speed:
                self.speed = new_speed
                self.scheduler.reschedule(self.speed)
            logger.debug("snake level %d, %d ms/tick", self.level, self.speed)

        self.food = self._spawn_food()
        if self.food is None:
            self._game_over("board full")

    def _spawn_food(self) -> tuple[int, int] | None:
        if len(self.snake.body) >= GRID_SIZE * GRID_SIZE:
            return None
        while True:
            pos = (self.rng.randrange(GRID_SIZE), self.rng.randrange(GRID_SIZE))
            if not self.snake.occupies(*pos):
                return pos

    def _game_over(self, reason: str) -> None:
        self.state = STATE_OVER
        self.scheduler.stop()
        logger.info("snake game over (%s), score %d", reason, self.score)
