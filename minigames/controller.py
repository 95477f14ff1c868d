"""
controller.py - Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Show the game-select menu and open/close one game overlay at a time.
  - Translate raw keyboard/mouse events into engine commands, for the
    active overlay only.
  - Pump elapsed time into the active engine, ask its view to render.
  - Manage background music (load, loop, pause/resume/mute/stop).

Closing an overlay calls the engine's close(), which cancels its scheduler
before resetting it. Reopening a game therefore always starts from the
initial state, never from where it was left.

Music notes:
  - song.mp3 is looked up next to this file (minigames/song.mp3).
  - It loops while a game overlay is open, pauses with the game and stops
    when the overlay closes.
  - If the file or the audio device is missing the games run silently.
"""

import logging
import os
import sys
import pygame

from .config import (
    WIDTH, HEIGHT, FPS, GAMES, HIGHSCORE_FILE, PADDLE_KEY_STEP,
    STATE_IDLE, STATE_MENU, STATE_PLAYING, STATE_PAUSED, STATE_OVER, STATE_VICTORY,
)
from .breaker_model import BreakerGame
from .breaker_view import BreakerView
from .snake_model import Direction, SnakeGame
from .snake_view import SnakeView
from .storage import JsonFileStore
from .view import MenuView

logger = logging.getLogger(__name__)

_MUSIC_PATH = os.path.join(os.path.dirname(__file__), "song.mp3")
_MUSIC_VOLUME = 0.6

SNAKE = "snake"
BREAKER = "brick-breaker"

_SNAKE_DIRECTIONS = {
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}


class ArcadeController:
    """
    Owns the main loop.
    Glues engines <-> views without them knowing about each other.
    """

    def __init__(self, store=None):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("GAMAKAY ARCADE")
        self.clock = pygame.time.Clock()

        store = store if store is not None else JsonFileStore(HIGHSCORE_FILE)
        self.games = {
            SNAKE: SnakeGame(store=store),
            BREAKER: BreakerGame(store=store),
        }
        self.views = {
            SNAKE: SnakeView(self.screen),
            BREAKER: BreakerView(self.screen),
        }
        self.menu_view = MenuView(self.screen)
        self.selected: int = 0
        self.active: str | None = None

        self._muted = False
        self._music_ok = self._load_music()

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Run the arcade until the player quits."""
        while True:
            elapsed = self.clock.tick(FPS)
            self._handle_events()
            if self.active is None:
                self.menu_view.render(self.selected)
                continue
            game = self.games[self.active]
            if self.active == BREAKER:
                self._handle_held_keys(game)
            game.advance(elapsed)
            self.views[self.active].render(game.snapshot())

    # ── Overlay lifecycle ─────────────────────────────────────────
    def open_game(self, game_id: str) -> None:
        if game_id not in self.games:
            raise KeyError(f"unknown game {game_id!r}")
        if self.active is not None:
            self.close_game()
        self.active = game_id
        logger.info("opened %s", game_id)
        self._play_music()

    def close_game(self) -> None:
        if self.active is None:
            return
        self.games[self.active].close()
        logger.info("closed %s", self.active)
        self.active = None
        self._stop_music()

    # ── Music helpers ─────────────────────────────────────────────
    def _load_music(self) -> bool:
        """Load song.mp3. Returns True on success, False on any failure."""
        if not os.path.isfile(_MUSIC_PATH):
            logger.info("song.mp3 not found at %s, running without music", _MUSIC_PATH)
            return False
        try:
            pygame.mixer.init()
            pygame.mixer.music.load(_MUSIC_PATH)
            pygame.mixer.music.set_volume(_MUSIC_VOLUME)
            return True
        except pygame.error as exc:
            logger.warning("Could not load song.mp3: %s", exc)
            return False

    def _play_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.play(loops=-1)

    def _sync_music(self, state: str) -> None:
        """Freeze music while paused, unfreeze otherwise."""
        if not self._music_ok:
            return
        if state == STATE_PAUSED:
            pygame.mixer.music.pause()
        else:
            pygame.mixer.music.unpause()

    def _toggle_mute(self) -> None:
        self._muted = not self._muted
        if self._music_ok:
            pygame.mixer.music.set_volume(0.0 if self._muted else _MUSIC_VOLUME)

    def _stop_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.stop()

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)
            elif event.type == pygame.MOUSEMOTION and self.active == BREAKER:
                x = self.views[BREAKER].canvas_x(event.pos[0])
                self.games[BREAKER].move_paddle(x)

    def _handle_keydown(self, key: int) -> None:
        if self.active is None:
            self._handle_menu_keys(key)
            return

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.close_game()
            return
        if key == pygame.K_m:
            self._toggle_mute()
            return

        if self.active == SNAKE:
            self._handle_snake_keys(key)
        else:
            self._handle_breaker_keys(key)

    # ── Per-screen key handlers ───────────────────────────────────
    def _handle_menu_keys(self, key: int) -> None:
        if key == pygame.K_q:
            self._quit()
        elif key in (pygame.K_UP, pygame.K_LEFT):
            self.selected = (self.selected - 1) % len(GAMES)
        elif key in (pygame.K_DOWN, pygame.K_RIGHT):
            self.selected = (self.selected + 1) % len(GAMES)
        elif key in (pygame.K_RETURN, pygame.K_SPACE):
            self.open_game(GAMES[self.selected]["id"])
        elif pygame.K_1 <= key < pygame.K_1 + len(GAMES):
            self.selected = key - pygame.K_1
            self.open_game(GAMES[self.selected]["id"])

    def _handle_snake_keys(self, key: int) -> None:
        game = self.games[SNAKE]
        if key in _SNAKE_DIRECTIONS:
            game.request_direction(_SNAKE_DIRECTIONS[key])
        elif key == pygame.K_SPACE:
            game.toggle_pause()
            self._sync_music(game.state)
        elif key == pygame.K_RETURN and game.state in (STATE_IDLE, STATE_OVER):
            game.start()
        elif key == pygame.K_r:
            game.reset()
            self._sync_music(game.state)

    def _handle_breaker_keys(self, key: int) -> None:
        game = self.games[BREAKER]
        if key == pygame.K_SPACE:
            game.toggle_pause()
            self._sync_music(game.state)
        elif key == pygame.K_RETURN:
            if game.state in (STATE_MENU, STATE_OVER):
                game.start()
            elif game.state == STATE_VICTORY:
                game.next_level()
        elif key == pygame.K_r:
            game.reset()
            self._sync_music(game.state)

    def _handle_held_keys(self, game: BreakerGame) -> None:
        if game.state != STATE_PLAYING:
            return
        pressed = pygame.key.get_pressed()
        if pressed[pygame.K_LEFT]:
            game.nudge_paddle(-PADDLE_KEY_STEP)
        if pressed[pygame.K_RIGHT]:
            game.nudge_paddle(PADDLE_KEY_STEP)

    # ── Utilities ─────────────────────────────────────────────────
    def _quit(self) -> None:
        self.close_game()
        pygame.quit()
        sys.exit()
