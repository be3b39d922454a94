"""
view.py — View layer.

Reads engine snapshots and draws them; never mutates the engine.

Layers, back to front:
  - Pre-rendered grid surface (built once per grid size)
  - Obstacles, power-up, food, snake (head brightest, tail darker)
  - HUD panel with score, best score and current speed
  - Paused / game-over overlays

Public API:
    GameView(screen)             — bind to a pygame surface
    view.render(engine, state)   — draw the current frame (caller flips)
"""

import math
import pygame

from .config import (
    WIDTH, PANEL_H, GAME_W, GAME_H, OFFSET_X, OFFSET_Y,
    BG, GRID_COL, SNAKE_COL, FOOD_COL, POWER_UP_COL,
    OBSTACLE_COL, UI_COL, PANEL_BG, BORDER_COL,
    STATE_PAUSED, STATE_OVER,
)
from .model import GameEngine

# pygame's bundled default font, by pixel height
FONT_SIZES = {"title": 48, "big": 30, "med": 22, "small": 18, "tiny": 15}


def _shade(color: tuple, factor: float) -> tuple:
    return tuple(max(0, min(255, int(c * factor))) for c in color)


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a GameEngine snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.fonts = {name: pygame.font.Font(None, size) for name, size in FONT_SIZES.items()}
        self._grid_size: int = 0
        self._cell: int = 0
        self._grid_surf: pygame.Surface = None
        self._anim_tick: int = 0

    # ── Main entry ───────────────────────────────────────────────
    def render(self, engine: GameEngine, state: str) -> None:
        self._anim_tick += 1
        if engine.grid_size != self._grid_size:
            self._build_grid(engine.grid_size)

        self.screen.fill(BG)
        self.screen.blit(self._grid_surf, (OFFSET_X, OFFSET_Y))

        for cell in engine.obstacles:
            pygame.draw.rect(self.screen, OBSTACLE_COL, self._cell_rect(cell))
        if engine.power_up is not None:
            pulse = 0.75 + 0.25 * math.sin(self._anim_tick * 0.15)
            pygame.draw.rect(self.screen, _shade(POWER_UP_COL, pulse),
                             self._cell_rect(engine.power_up))
        pygame.draw.rect(self.screen, FOOD_COL, self._cell_rect(engine.food))
        self._draw_snake(engine)

        self._draw_border()
        self._draw_panel(engine, state)

        if state == STATE_PAUSED:
            self._draw_paused_overlay()
        elif state == STATE_OVER:
            self._draw_game_over_overlay(engine)

    # ── Geometry ─────────────────────────────────────────────────
    def _build_grid(self, grid_size: int) -> None:
        self._grid_size = grid_size
        self._cell = max(1, min(GAME_W, GAME_H) // grid_size)
        span = self._cell * grid_size
        self._grid_surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        for i in range(grid_size + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (i * self._cell, 0), (i * self._cell, span))
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (0, i * self._cell), (span, i * self._cell))

    def _cell_rect(self, cell: tuple[int, int]) -> pygame.Rect:
        # one pixel gap between cells, like the classic canvas version
        size = max(1, self._cell - 1)
        return pygame.Rect(OFFSET_X + cell[0] * self._cell,
                           OFFSET_Y + cell[1] * self._cell, size, size)

    # ── Entities ─────────────────────────────────────────────────
    def _draw_snake(self, engine: GameEngine) -> None:
        cells = engine.snake_cells
        length = len(cells)
        for i, cell in enumerate(cells):
            if not (0 <= cell[0] < engine.grid_size and 0 <= cell[1] < engine.grid_size):
                continue  # head that crashed through the wall
            factor = 1.0 - (i / max(length - 1, 1)) * 0.45
            pygame.draw.rect(self.screen, _shade(SNAKE_COL, factor), self._cell_rect(cell))

    def _draw_border(self) -> None:
        span = self._cell * self._grid_size
        pygame.draw.rect(self.screen, BORDER_COL,
                         (OFFSET_X - 1, OFFSET_Y - 1, span + 2, span + 2), 1)

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, engine: GameEngine, state: str) -> None:
        pygame.draw.rect(self.screen, PANEL_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, BORDER_COL,
                         (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self._blit("SCORE", "small", SNAKE_COL, topleft=(16, 6))
        self._blit(str(engine.score), "big", SNAKE_COL, topleft=(16, 24))

        best = max(engine.high_score, engine.score)
        self._blit("BEST", "small", POWER_UP_COL, topright=(WIDTH - 16, 6))
        self._blit(str(best), "big", POWER_UP_COL, topright=(WIDTH - 16, 24))

        self._blit(f"{engine.speed} MS/TICK", "tiny", UI_COL, center=(WIDTH // 2, 20))
        if state == STATE_PAUSED:
            self._blit("[ PAUSED ]", "tiny", POWER_UP_COL, center=(WIDTH // 2, 40))

    # ── Overlays ──────────────────────────────────────────────────
    def _blit(self, text: str, font: str, color: tuple, **anchor) -> pygame.Rect:
        surf = self.fonts[font].render(text, True, color)
        rect = surf.get_rect(**anchor)
        self.screen.blit(surf, rect)
        return rect

    def _draw_text_line(self, text: str, color: tuple, cy: int, font: str) -> int:
        rect = self._blit(text, font, color, center=(WIDTH // 2, cy))
        return cy + rect.height + 10

    def _draw_overlay(self, title: str, color: tuple, cy: int) -> int:
        veil = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        veil.fill((5, 5, 5, 200))
        self.screen.blit(veil, (OFFSET_X, OFFSET_Y))
        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        return self._draw_text_line(title, _shade(color, pulse), cy, "title")

    def _draw_paused_overlay(self) -> None:
        cy = self._draw_overlay("PAUSED", POWER_UP_COL, OFFSET_Y + GAME_H // 2 - 30)
        self._draw_text_line("PRESS  P  TO RESUME", UI_COL, cy, "med")

    def _draw_game_over_overlay(self, engine: GameEngine) -> None:
        cy = self._draw_overlay("GAME OVER", FOOD_COL, OFFSET_Y + GAME_H // 2 - 80)
        cy = self._draw_text_line(f"FINAL SCORE: {engine.score}", UI_COL, cy, "med")
        if engine.new_high_score:
            cy = self._draw_text_line("NEW HIGH SCORE", POWER_UP_COL, cy, "small")
        else:
            cy = self._draw_text_line(f"BEST: {engine.high_score}", UI_COL, cy, "tiny")
        self._draw_text_line("R / ENTER  TO PLAY AGAIN", SNAKE_COL, cy + 10, "small")
