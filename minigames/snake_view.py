"""
snake_view.py - Snake renderer.

Public API:
    SnakeView(screen)          - bind to a pygame surface
    view.render(snapshot)      - draw the current frame from a SnakeSnapshot
"""

import math
import pygame

from .config import (
    WIDTH, HEIGHT, PANEL_H, GRID_SIZE, SNAKE_CELL,
    BG, GRID_COL, GOLD, GOLD_DIM, FOOD_COL, UI_COL, BLACK, ORANGE,
    STATE_IDLE, STATE_PAUSED, STATE_OVER,
)
from .snake_model import SnakeSnapshot
from .view import BaseView, lerp_color, with_alpha, brighten

BOARD = SNAKE_CELL * GRID_SIZE
OFFSET_X = (WIDTH - BOARD) // 2
OFFSET_Y = PANEL_H + 24


class SnakeView(BaseView):
    """Renders the snake board, HUD and state overlays."""

    def __init__(self, screen: pygame.Surface):
        super().__init__(screen)
        self.board_rect = pygame.Rect(OFFSET_X, OFFSET_Y, BOARD, BOARD)
        self._grid_surf = pygame.Surface((BOARD, BOARD), pygame.SRCALPHA)
        for i in range(GRID_SIZE + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (i * SNAKE_CELL, 0), (i * SNAKE_CELL, BOARD))
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (0, i * SNAKE_CELL), (BOARD, i * SNAKE_CELL))

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: SnakeSnapshot) -> None:
        self._anim_tick += 1

        self.screen.fill(BG)
        self.draw_panel([
            ("SCORE", f"{snap.score:04d}"),
            ("LEVEL", str(snap.level)),
            ("HIGH",  f"{snap.high_score:04d}"),
        ])
        self.screen.blit(self._grid_surf, self.board_rect.topleft)

        if snap.food is not None:
            self._draw_food(snap.food)
        self._draw_snake(snap)

        self.draw_scanlines()
        self.draw_frame(self.board_rect)
        self.draw_controls_hint(HEIGHT - 80, [
            ("ARROWS", "MOVE"), ("SPACE", "PAUSE"), ("R", "RESET"), ("ESC", "CLOSE"),
        ])

        if snap.state == STATE_IDLE:
            self._draw_idle_overlay()
        elif snap.state == STATE_PAUSED:
            self._draw_paused_overlay()
        elif snap.state == STATE_OVER:
            self._draw_game_over_overlay(snap)

        pygame.display.flip()

    # ── Board ────────────────────────────────────────────────────
    def _cell_center(self, x: int, y: int) -> tuple[int, int]:
        return (OFFSET_X + x * SNAKE_CELL + SNAKE_CELL // 2,
                OFFSET_Y + y * SNAKE_CELL + SNAKE_CELL // 2)

    def _draw_food(self, food: tuple[int, int]) -> None:
        pulse = 0.70 + 0.30 * math.sin(self._anim_tick * 0.10)
        r = max(2, int((SNAKE_CELL / 2 - 1) * pulse))
        x, y = self._cell_center(*food)

        glow_r = r + 8
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        for gr in range(glow_r, r, -1):
            a = int(90 * (1 - (gr - r) / (glow_r - r)) * pulse)
            pygame.draw.circle(glow, with_alpha(FOOD_COL, a), (glow_r, glow_r), gr)
        self.screen.blit(glow, (x - glow_r, y - glow_r))
        pygame.draw.circle(self.screen, FOOD_COL, (x, y), r)

    def _draw_snake(self, snap: SnakeSnapshot) -> None:
        length = len(snap.body)
        for i, (sx, sy) in enumerate(snap.body):
            # Colour fades from bright head to dim tail
            t = 1.0 - (i / max(length - 1, 1)) * 0.72
            color = lerp_color(GOLD_DIM, GOLD, t)
            shrink = 1 if i == 0 else 2
            rect = pygame.Rect(
                OFFSET_X + sx * SNAKE_CELL + shrink,
                OFFSET_Y + sy * SNAKE_CELL + shrink,
                SNAKE_CELL - shrink * 2,
                SNAKE_CELL - shrink * 2,
            )
            radius = rect.width // 2 - 1 if i == 0 else rect.width // 4
            pygame.draw.rect(self.screen, color, rect, border_radius=radius)
            if i == 0:
                hi = pygame.Rect(rect.x + 3, rect.y + 3, rect.w - 6, max(2, rect.h // 3))
                pygame.draw.rect(self.screen, brighten(color, 1.3), hi, border_radius=2)

        if snap.body:
            self._draw_eyes(snap.body[0], snap.direction)

    def _draw_eyes(self, head: tuple[int, int], direction: tuple[int, int]) -> None:
        cx, cy = self._cell_center(*head)
        dx, dy = direction
        px, py = -dy, dx  # perpendicular
        for sign in (+1, -1):
            ex = int(cx + dx * 4 + sign * px * 4)
            ey = int(cy + dy * 4 + sign * py * 4)
            pygame.draw.rect(self.screen, (240, 240, 240), (ex - 2, ey - 2, 4, 4))
            pygame.draw.rect(self.screen, BLACK, (ex - 1, ey - 1, 2, 2))

    # ── State overlays ────────────────────────────────────────────
    def _draw_idle_overlay(self) -> None:
        self.draw_overlay_base(self.board_rect)
        cy = OFFSET_Y + BOARD // 2 - 80
        cy = self.draw_animated_title("GAMAKAY SNAKE", GOLD, cy, self.font_title)
        cy = self.draw_text_line("EAT TO GROW  -  EVERY 50 POINTS SPEEDS UP",
                                 UI_COL, cy + 4, self.font_tiny)
        self.draw_button("ENTER - START GAME", GOLD, cy + 16)

    def _draw_paused_overlay(self) -> None:
        self.draw_overlay_base(self.board_rect)
        cy = OFFSET_Y + BOARD // 2 - 36
        cy = self.draw_animated_title("PAUSED", GOLD, cy, self.font_title)
        self.draw_text_line("PRESS  SPACE  TO RESUME", UI_COL, cy + 6, self.font_med)

    def _draw_game_over_overlay(self, snap: SnakeSnapshot) -> None:
        self.draw_overlay_base(self.board_rect)
        cy = OFFSET_Y + BOARD // 2 - 90
        cy = self.draw_animated_title("GAME OVER", FOOD_COL, cy, self.font_title)
        cy = self.draw_text_line(f"SCORE {snap.score:04d}   LEVEL {snap.level}",
                                 (235, 235, 235), cy + 2, self.font_med)
        if snap.score > 0 and snap.score >= snap.high_score:
            cy = self.draw_text_line("★  NEW HIGH SCORE  ★", ORANGE, cy + 4, self.font_small)
        else:
            cy = self.draw_text_line(f"BEST: {snap.high_score}", UI_COL, cy + 4, self.font_tiny)
        self.draw_button("ENTER - PLAY AGAIN", GOLD, cy + 14)
