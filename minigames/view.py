"""
view.py - Shared rendering helpers and the game-select menu.

Views never read an engine directly: they paint a frozen snapshot, so the
simulation can be tested without a display and the renderer without a
running game.

Public API:
    BaseView(screen)        - fonts, overlays, titles, buttons, key hints
    MenuView(screen)        - the game-select screen
    menu_view.render(i)     - draw the menu with game i highlighted
"""

import math
import pygame

from .config import (
    WIDTH, HEIGHT, PANEL_H,
    BG, GOLD, ORANGE, FOOD_COL, UI_COL, BLACK, PANEL_BG, BORDER_COL,
    GAMES,
)


# ─────────────────────── colour helpers ──────────────────────────
def lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


# ─────────────────────────── BaseView ────────────────────────────
class BaseView:
    """Common chrome shared by every screen."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._anim_tick: int = 0
        self._scanline_surf = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        for y in range(0, HEIGHT, 2):
            pygame.draw.line(self._scanline_surf, (0, 0, 0, 18), (0, y), (WIDTH, y))

    # ── HUD ──────────────────────────────────────────────────────
    def draw_panel(self, stats: list[tuple[str, str]]) -> None:
        """Top panel with evenly spaced LABEL / value columns."""
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL,
                         (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)
        col_w = WIDTH // max(1, len(stats))
        for i, (label, value) in enumerate(stats):
            cx = col_w * i + col_w // 2
            lab = self.font_small.render(label, True, GOLD)
            self.screen.blit(lab, lab.get_rect(center=(cx, 16)))
            val = self.font_big.render(value, True, (235, 235, 235))
            self.screen.blit(val, val.get_rect(center=(cx, 40)))

    def draw_scanlines(self) -> None:
        self.screen.blit(self._scanline_surf, (0, 0))

    def draw_frame(self, rect: pygame.Rect, accent: tuple = GOLD) -> None:
        """Outer border with corner accents around a play area."""
        pygame.draw.rect(self.screen, BORDER_COL, rect.inflate(2, 2), 1)
        size = 14
        x0, y0 = rect.left - 1, rect.top - 1
        x1, y1 = rect.right, rect.bottom
        for pts in [
            [(x0, y0 + size), (x0, y0), (x0 + size, y0)],
            [(x1 - size, y0), (x1, y0), (x1, y0 + size)],
            [(x0, y1 - size), (x0, y1), (x0 + size, y1)],
            [(x1 - size, y1), (x1, y1), (x1, y1 - size)],
        ]:
            pygame.draw.lines(self.screen, accent, False, pts, 2)

    # ── Overlay infrastructure ────────────────────────────────────
    def draw_overlay_base(self, rect: pygame.Rect) -> None:
        surf = pygame.Surface(rect.size, pygame.SRCALPHA)
        surf.fill((5, 5, 12, 215))
        self.screen.blit(surf, rect.topleft)
        pygame.draw.rect(self.screen, lerp_color(BG, UI_COL, 0.12),
                         rect.inflate(-16, -16), 1)

    def draw_animated_title(self, title: str, color: tuple,
                            cy: int, font: pygame.font.Font) -> int:
        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        bright = brighten(color, pulse)
        surf = font.render(title, True, bright)
        # Background glow slab
        gw, gh = surf.get_width() + 50, surf.get_height() + 16
        glow = pygame.Surface((gw, gh), pygame.SRCALPHA)
        glow.fill(with_alpha(color, int(35 * pulse)))
        self.screen.blit(glow, (WIDTH // 2 - gw // 2, cy - 8))
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy + surf.get_height() // 2)))
        return cy + surf.get_height() + 14

    def draw_text_line(self, text: str, color: tuple,
                       cy: int, font: pygame.font.Font) -> int:
        if not text:
            return cy + 10
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))
        return cy + surf.get_height() + 8

    def draw_button(self, label: str, color: tuple, cy: int) -> int:
        btn_w = max(240, self.font_small.size(label)[0] + 40)
        btn_h = 38
        bx = WIDTH // 2 - btn_w // 2
        bg = pygame.Surface((btn_w, btn_h), pygame.SRCALPHA)
        bg.fill(with_alpha(color, 22))
        self.screen.blit(bg, (bx, cy))
        pygame.draw.rect(self.screen, color, (bx, cy, btn_w, btn_h), 2, border_radius=4)
        txt = self.font_small.render(label, True, color)
        self.screen.blit(txt, txt.get_rect(center=(WIDTH // 2, cy + btn_h // 2)))
        return cy + btn_h + 10

    def draw_controls_hint(self, cy: int, hints: list[tuple[str, str]]) -> None:
        slot = min(108, WIDTH // max(1, len(hints)))
        total_w = len(hints) * slot
        sx = WIDTH // 2 - total_w // 2
        for i, (key, action) in enumerate(hints):
            x = sx + i * slot + slot // 2
            k_surf = self.font_tiny.render(key,    True, (200, 200, 255))
            a_surf = self.font_tiny.render(action, True, UI_COL)
            kw = k_surf.get_width() + 12
            kh = k_surf.get_height() + 4
            # Key cap background
            pygame.draw.rect(self.screen, (28, 28, 48),
                             (x - kw // 2, cy, kw, kh), border_radius=3)
            pygame.draw.rect(self.screen, (55, 55, 88),
                             (x - kw // 2, cy, kw, kh), 1, border_radius=3)
            self.screen.blit(k_surf, k_surf.get_rect(center=(x, cy + kh // 2)))
            self.screen.blit(a_surf, a_surf.get_rect(center=(x, cy + kh + 10)))

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "courier", 40, True),
            ("font_big",   "courier", 22, True),
            ("font_med",   "courier", 17, False),
            ("font_small", "courier", 13, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except (pygame.error, OSError):
                setattr(self, attr, pygame.font.Font(None, size))


# ─────────────────────────── MenuView ────────────────────────────
class MenuView(BaseView):
    """Game-select screen: one card per entry in GAMES."""

    def render(self, selected: int) -> None:
        self._anim_tick += 1
        self.screen.fill(BG)

        cy = self.draw_animated_title("GAMAKAY ARCADE", GOLD, 60, self.font_title)
        cy = self.draw_text_line("CHOOSE YOUR GAME", UI_COL, cy + 6, self.font_med)
        cy += 24

        for i, game in enumerate(GAMES):
            cy = self._draw_card(i, game, i == selected, cy)

        self.draw_controls_hint(HEIGHT - 70, [
            ("1-2", "PICK"), ("ARROWS", "SELECT"), ("ENTER", "PLAY"), ("Q", "QUIT"),
        ])
        self.draw_scanlines()
        pygame.display.flip()

    def _draw_card(self, index: int, game: dict, active: bool, cy: int) -> int:
        card = pygame.Rect(60, cy, WIDTH - 120, 96)
        accent = GOLD if active else lerp_color(UI_COL, BG, 0.3)
        bg = pygame.Surface(card.size, pygame.SRCALPHA)
        bg.fill(with_alpha(ORANGE if active else PANEL_BG, 40 if active else 200))
        self.screen.blit(bg, card.topleft)
        pygame.draw.rect(self.screen, accent, card, 2 if active else 1, border_radius=6)

        num = self.font_small.render(str(index + 1), True, accent)
        self.screen.blit(num, num.get_rect(center=(card.left + 30, card.top + 18)))
        self._draw_icon(game.get("icon"), (card.left + 30, card.centery + 10), accent)
        name = self.font_big.render(game["name"], True, GOLD if active else UI_COL)
        self.screen.blit(name, (card.left + 60, card.top + 20))
        desc = self.font_tiny.render(game["description"], True,
                                     (220, 220, 220) if active else UI_COL)
        self.screen.blit(desc, (card.left + 60, card.top + 56))
        if active:
            pygame.draw.rect(self.screen, BLACK, card.inflate(6, 6), 1, border_radius=8)
        return card.bottom + 18

    def _draw_icon(self, icon: str | None, center: tuple[int, int], color: tuple) -> None:
        """Small glyph drawn from primitives; fonts rarely carry the emoji."""
        cx, cy = center
        if icon == "snake":
            # Three body cells turning up into a head
            for dx, dy in ((-12, 6), (-4, 6), (4, 6), (4, -2)):
                pygame.draw.rect(self.screen, color, (cx + dx, cy + dy - 4, 7, 7),
                                 border_radius=2)
            pygame.draw.rect(self.screen, FOOD_COL, (cx + 4, cy - 16, 6, 6), border_radius=3)
        elif icon == "bricks":
            for row in range(2):
                for col in range(3):
                    pygame.draw.rect(self.screen, color,
                                     (cx - 16 + col * 11, cy - 14 + row * 7, 10, 6))
            pygame.draw.circle(self.screen, (235, 235, 235), (cx + 2, cy + 4), 3)
            pygame.draw.rect(self.screen, color, (cx - 10, cy + 10, 20, 3))
