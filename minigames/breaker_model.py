"""
breaker_model.py - Brick-Breaker Engine.

Owns ALL brick-breaker state and rules. Zero rendering, zero input handling.

Positions are continuous canvas pixels, origin top-left, y growing down.
The ball's (x, y) is the top-left corner of its BALL_SIZE bounding box,
and every collision is an axis-aligned rectangle overlap.

Classes:
    Ball             - position and velocity
    Paddle           - player-controlled bar on a fixed row
    Brick            - destructible target; destruction is one-way
    BreakerSnapshot  - frozen view of one frame, handed to the renderer
    BreakerGame      - top-level engine; owns board, score, lives, scheduler
"""

import logging
import random
from dataclasses import dataclass

from .config import (
    CANVAS_W, CANVAS_H,
    PADDLE_W, PADDLE_H, PADDLE_Y, PADDLE_DEFLECT,
    BALL_SIZE, BALL_START, BALL_SPEED, LEVEL_SPEEDUP, RESPAWN_DELAY,
    START_LIVES, BRICK_W, BRICK_H, BRICK_ROWS, BRICK_COLS, BRICK_GAP,
    BRICK_OFFSET, BRICK_TYPES, BREAKER_HIGH_SCORE_KEY,
    STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER, STATE_VICTORY,
)
from .scheduler import Scheduler
from .storage import KeyValueStore, MemoryStore, read_high_score

logger = logging.getLogger(__name__)


def overlaps(ax: float, ay: float, aw: float, ah: float,
             bx: float, by: float, bw: float, bh: float) -> bool:
    """Axis-aligned rectangle overlap; touching edges do not count."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# ──────────────────────────── Ball ───────────────────────────────
class Ball:
    def __init__(self, x: float, y: float, dx: float, dy: float, speed: float):
        self.x = x
        self.y = y
        self.dx = dx
        self.dy = dy
        self.speed = speed

    @classmethod
    def serve(cls, speed: float = BALL_SPEED) -> "Ball":
        """New ball at the start position heading up and to the right."""
        x, y = BALL_START
        return cls(x, y, speed, -speed, speed)

    def bounds(self) -> tuple[float, float, float, float]:
        return self.x, self.y, BALL_SIZE, BALL_SIZE


# ─────────────────────────── Paddle ──────────────────────────────
class Paddle:
    def __init__(self, x: float = CANVAS_W / 2 - PADDLE_W / 2, y: float = PADDLE_Y):
        self.x = x
        self.y = y

    def move_to(self, x: float) -> None:
        self.x = _clamp(x, 0, CANVAS_W - PADDLE_W)

    def bounds(self) -> tuple[float, float, float, float]:
        return self.x, self.y, PADDLE_W, PADDLE_H


# ──────────────────────────── Brick ──────────────────────────────
class Brick:
    """A target on the board. Once destroyed it stays destroyed."""

    def __init__(self, x: float, y: float, kind: str, points: int,
                 width: float = BRICK_W, height: float = BRICK_H):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.type = kind
        self.points = points
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def destroy(self) -> None:
        self._destroyed = True

    def bounds(self) -> tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height


def build_bricks(rng: random.Random) -> list[Brick]:
    """Full BRICK_ROWS x BRICK_COLS board with a random type per brick."""
    ox, oy = BRICK_OFFSET
    bricks = []
    for row in range(BRICK_ROWS):
        for col in range(BRICK_COLS):
            kind, points, _color = rng.choice(BRICK_TYPES)
            bricks.append(Brick(
                x=col * (BRICK_W + BRICK_GAP) + ox,
                y=row * (BRICK_H + BRICK_GAP) + oy,
                kind=kind,
                points=points,
            ))
    return bricks


# ─────────────────────────── Snapshot ────────────────────────────
@dataclass(frozen=True)
class BrickSnapshot:
    x: float
    y: float
    width: float
    height: float
    type: str
    points: int
    destroyed: bool


@dataclass(frozen=True)
class BreakerSnapshot:
    ball: tuple[float, float, float, float]     # x, y, dx, dy
    ball_in_play: bool
    paddle: tuple[float, float]
    bricks: tuple[BrickSnapshot, ...]
    score: int
    high_score: int
    lives: int
    level: int
    state: str


# ───────────────────────── BreakerGame ───────────────────────────
class BreakerGame:
    """
    Top-level brick-breaker engine.

    The scheduler runs in per-frame mode and is armed only while the game
    is playing; every other state leaves it stopped. The ball respawn
    after a lost life is a delayed call on the same scheduler, so close()
    cancels it together with the frame tick.
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
        self.high_score: int = read_high_score(self.store, BREAKER_HIGH_SCORE_KEY)
        self.state: str = STATE_MENU
        self.paddle: Paddle = Paddle()
        self.ball: Ball = Ball.serve()
        self.bricks: list[Brick] = []
        self.score: int = 0
        self.lives: int = START_LIVES
        self.level: int = 1
        self._awaiting_serve: bool = False
        self._respawn: int | None = None
        self._reset_entities()

    # ── Accessors ────────────────────────────────────────────────
    @property
    def ball_in_play(self) -> bool:
        return not self._awaiting_serve

    @property
    def remaining(self) -> int:
        return sum(1 for b in self.bricks if not b.destroyed)

    # ── Public API ───────────────────────────────────────────────
    def start(self) -> None:
        """Begin play from the menu. From game over this is 'play again'."""
        if self.state == STATE_OVER:
            self.reset()
        if self.state != STATE_MENU:
            return
        self.bricks = build_bricks(self.rng)
        self._play()
        logger.debug("breaker started")

    def next_level(self) -> None:
        """Continue after a cleared board: fresh layout, faster serve."""
        if self.state != STATE_VICTORY:
            return
        self.bricks = build_bricks(self.rng)
        self.paddle = Paddle()
        self.ball = Ball.serve(self._level_speed())
        self._play()
        logger.debug("breaker level %d", self.level)

    def toggle_pause(self) -> None:
        if self.state == STATE_PLAYING:
            self.state = STATE_PAUSED
            self.scheduler.stop()
            # A pending serve is held while paused and re-armed on resume.
            if self._respawn is not None:
                self.scheduler.cancel_call(self._respawn)
                self._respawn = None
        elif self.state == STATE_PAUSED:
            self._play()
            if self._awaiting_serve:
                self._arm_respawn()

    def reset(self) -> None:
        self.scheduler.cancel()
        self._respawn = None
        self._awaiting_serve = False
        self._reset_entities()
        self.state = STATE_MENU

    def close(self) -> None:
        """Tear down: cancel the frame loop and any pending respawn."""
        self.reset()

    def move_paddle(self, pointer_x: float) -> None:
        """Centre the paddle under the pointer, kept inside the canvas."""
        if self.state != STATE_PLAYING:
            return
        self.paddle.move_to(pointer_x - PADDLE_W / 2)

    def nudge_paddle(self, step: float) -> None:
        if self.state != STATE_PLAYING:
            return
        self.paddle.move_to(self.paddle.x + step)

    def advance(self, elapsed_ms: float) -> int:
        return self.scheduler.advance(elapsed_ms)

    def tick(self) -> None:
        """Advance the simulation by one frame."""
        if self.state != STATE_PLAYING or not self.ball_in_play:
            return

        ball = self.ball
        ball.x += ball.dx
        ball.y += ball.dy
        flipped = False

        # Walls
        if ball.x <= 0:
            ball.dx = abs(ball.dx)
        elif ball.x >= CANVAS_W - BALL_SIZE:
            ball.dx = -abs(ball.dx)
        if ball.y <= 0 and ball.dy < 0:
            ball.dy = -ball.dy
            flipped = True

        # Paddle
        if overlaps(*ball.bounds(), *self.paddle.bounds()):
            if ball.dy > 0:
                flipped = True
            ball.dy = -abs(ball.dy)
            hit = _clamp((ball.x - self.paddle.x) / PADDLE_W, 0.0, 1.0)
            ball.dx = (hit - 0.5) * PADDLE_DEFLECT

        # Ball lost
        if ball.y > CANVAS_H:
            self._lose_life()
            return

        # Bricks: first overlap in board order wins, one per frame
        for brick in self.bricks:
            if not brick.destroyed and overlaps(*ball.bounds(), *brick.bounds()):
                brick.destroy()
                self._add_score(brick.points)
                if not flipped:
                    ball.dy = -ball.dy
                break

        if self.bricks and self.remaining == 0:
            self.state = STATE_VICTORY
            self.level += 1
            self.scheduler.stop()
            logger.info("breaker board cleared, next level %d", self.level)

    def snapshot(self) -> BreakerSnapshot:
        return BreakerSnapshot(
            ball=(self.ball.x, self.ball.y, self.ball.dx, self.ball.dy),
            ball_in_play=self.ball_in_play,
            paddle=(self.paddle.x, self.paddle.y),
            bricks=tuple(
                BrickSnapshot(b.x, b.y, b.width, b.height, b.type, b.points, b.destroyed)
                for b in self.bricks
            ),
            score=self.score,
            high_score=self.high_score,
            lives=self.lives,
            level=self.level,
            state=self.state,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _reset_entities(self) -> None:
        self.paddle = Paddle()
        self.ball = Ball.serve()
        self.bricks = build_bricks(self.rng)
        self.score = 0
        self.lives = START_LIVES
        self.level = 1

    def _play(self) -> None:
        self.state = STATE_PLAYING
        self.scheduler.start(None, self.tick)

    def _level_speed(self) -> float:
        return BALL_SPEED + self.level * LEVEL_SPEEDUP

    def _add_score(self, points: int) -> None:
        self.score += points
        if self.score > self.high_score:
            self.high_score = self.score
            self.store.set(BREAKER_HIGH_SCORE_KEY, str(self.high_score))

    def _lose_life(self) -> None:
        self.lives = max(0, self.lives - 1)
        if self.lives == 0:
            self.state = STATE_OVER
            self.scheduler.stop()
            logger.info("breaker game over at level %d, score %d", self.level, self.score)
            return
        self._awaiting_serve = True
        self._arm_respawn()

    def _arm_respawn(self) -> None:
        self._respawn = self.scheduler.call_later(RESPAWN_DELAY, self._serve_after_loss)

    def _serve_after_loss(self) -> None:
        self._respawn = None
        self._awaiting_serve = False
        self.ball = Ball.serve(self._level_speed())
