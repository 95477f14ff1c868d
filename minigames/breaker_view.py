"""
breaker_view.py - Brick-breaker renderer.

Public API:
    BreakerView(screen)        - bind to a pygame surface
    view.render(snapshot)      - draw the current frame from a BreakerSnapshot
    view.canvas_x(screen_x)    - map a pointer x on screen into canvas space
"""

import pygame

from .config import (
    WIDTH, HEIGHT, PANEL_H,
    CANVAS_W, CANVAS_H, PADDLE_W, PADDLE_H, BALL_SIZE, BRICK_TYPES,
    BG, GOLD, ORANGE, FOOD_COL, UI_COL, WHITE, SKY_TOP, SKY_BOTTOM,
    STATE_MENU, STATE_PAUSED, STATE_OVER, STATE_VICTORY,
)
from .breaker_model import BreakerSnapshot
from .view import BaseView, lerp_color, with_alpha

OFFSET_X = (WIDTH - CANVAS_W) // 2
OFFSET_Y = PANEL_H + 12

_BRICK_COLORS = {name: color for name, _points, color in BRICK_TYPES}


class BreakerView(BaseView):
    """Renders the brick-breaker canvas, HUD and state overlays."""

    def __init__(self, screen: pygame.Surface):
        super().__init__(screen)
        self.canvas_rect = pygame.Rect(OFFSET_X, OFFSET_Y, CANVAS_W, CANVAS_H)
        # Background gradient is static, drawn once
        self._bg_surf = pygame.Surface((CANVAS_W, CANVAS_H))
        for y in range(CANVAS_H):
            color = lerp_color(SKY_TOP, SKY_BOTTOM, y / CANVAS_H)
            pygame.draw.line(self._bg_surf, color, (0, y), (CANVAS_W, y))

    def canvas_x(self, screen_x: int) -> float:
        return screen_x - OFFSET_X

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: BreakerSnapshot) -> None:
        self._anim_tick += 1

        self.screen.fill(BG)
        self.draw_panel([
            ("SCORE", f"{snap.score:04d}"),
            ("LEVEL", str(snap.level)),
            ("LIVES", "♥" * snap.lives if snap.lives else "-"),
            ("HIGH",  f"{snap.high_score:04d}"),
        ])
        self.screen.blit(self._bg_surf, self.canvas_rect.topleft)

        self._draw_bricks(snap)
        self._draw_paddle(snap.paddle)
        if snap.ball_in_play:
            self._draw_ball(snap.ball)

        self.draw_frame(self.canvas_rect, ORANGE)

        if snap.state == STATE_MENU:
            self._draw_menu_overlay()
        elif snap.state == STATE_PAUSED:
            self._draw_paused_overlay()
        elif snap.state == STATE_OVER:
            self._draw_game_over_overlay(snap)
        elif snap.state == STATE_VICTORY:
            self._draw_victory_overlay(snap)

        self.draw_text_line("MOUSE / ARROWS MOVE   SPACE PAUSE   M MUTE   ESC CLOSE",
                            UI_COL, HEIGHT - 28, self.font_tiny)
        pygame.display.flip()

    # ── Canvas ───────────────────────────────────────────────────
    def _to_screen(self, x: float, y: float) -> tuple[int, int]:
        return int(OFFSET_X + x), int(OFFSET_Y + y)

    def _draw_bricks(self, snap: BreakerSnapshot) -> None:
        for brick in snap.bricks:
            if brick.destroyed:
                continue
            x, y = self._to_screen(brick.x, brick.y)
            rect = pygame.Rect(x, y, int(brick.width), int(brick.height))
            color = _BRICK_COLORS.get(brick.type, UI_COL)
            pygame.draw.rect(self.screen, color, rect)
            pygame.draw.rect(self.screen, lerp_color(color, WHITE, 0.4), rect, 1)
            pts = self.font_tiny.render(str(brick.points), True, WHITE)
            self.screen.blit(pts, pts.get_rect(center=rect.center))

    def _draw_paddle(self, paddle: tuple[float, float]) -> None:
        x, y = self._to_screen(*paddle)
        rect = pygame.Rect(x, y, PADDLE_W, PADDLE_H)
        glow = pygame.Surface((PADDLE_W + 16, PADDLE_H + 16), pygame.SRCALPHA)
        pygame.draw.rect(glow, with_alpha(GOLD, 70), glow.get_rect(), border_radius=8)
        self.screen.blit(glow, (x - 8, y - 8))
        pygame.draw.rect(self.screen, GOLD, rect, border_radius=3)

    def _draw_ball(self, ball: tuple[float, float, float, float]) -> None:
        x, y = self._to_screen(ball[0], ball[1])
        r = BALL_SIZE // 2
        pygame.draw.circle(self.screen, WHITE, (x + r, y + r), r)

    # ── State overlays ────────────────────────────────────────────
    def _draw_menu_overlay(self) -> None:
        self.draw_overlay_base(self.canvas_rect)
        cy = OFFSET_Y + CANVAS_H // 2 - 90
        cy = self.draw_animated_title("BRICK BREAKER", ORANGE, cy, self.font_title)
        cy = self.draw_text_line("BREAK ALL BRICKS TO ADVANCE", UI_COL, cy + 4, self.font_small)
        cy = self.draw_text_line("EACH LEVEL INCREASES SPEED", UI_COL, cy, self.font_tiny)
        self.draw_button("ENTER - START GAME", GOLD, cy + 16)

    def _draw_paused_overlay(self) -> None:
        self.draw_overlay_base(self.canvas_rect)
        cy = OFFSET_Y + CANVAS_H // 2 - 36
        cy = self.draw_animated_title("PAUSED", GOLD, cy, self.font_title)
        self.draw_text_line("PRESS  SPACE  TO RESUME", UI_COL, cy + 6, self.font_med)

    def _draw_game_over_overlay(self, snap: BreakerSnapshot) -> None:
        self.draw_overlay_base(self.canvas_rect)
        cy = OFFSET_Y + CANVAS_H // 2 - 90
        cy = self.draw_animated_title("GAME OVER", FOOD_COL, cy, self.font_title)
        cy = self.draw_text_line(f"FINAL SCORE: {snap.score}", WHITE, cy + 2, self.font_med)
        cy = self.draw_text_line(f"LEVEL REACHED: {snap.level}", UI_COL, cy, self.font_small)
        self.draw_button("ENTER - PLAY AGAIN", GOLD, cy + 14)

    def _draw_victory_overlay(self, snap: BreakerSnapshot) -> None:
        self.draw_overlay_base(self.canvas_rect)
        cy = OFFSET_Y + CANVAS_H // 2 - 90
        cy = self.draw_animated_title("LEVEL CLEARED!", GOLD, cy, self.font_title)
        cy = self.draw_text_line(f"SCORE: {snap.score}", WHITE, cy + 2, self.font_med)
        cy = self.draw_text_line(f"NEXT LEVEL: {snap.level}", UI_COL, cy, self.font_small)
        self.draw_button("ENTER - CONTINUE", GOLD, cy + 14)
