"""
Rendering helpers for the board snapshot.

- Pre-render one block Surface per color (outer frame + darker inner face) and an empty-cell Surface.
- Pre-render the flash and darken overlays once per Dims.
- Draw purely from a Snapshot; nothing here touches game state.
"""
from __future__ import annotations
import pygame
from typing import Dict, Optional, Tuple
from tetris_game import DisplayMode, Snapshot
from tetris_layout import Dims
from tetris_shape import Color

RGB = Tuple[int, int, int]

COLORS: Dict[Color, RGB] = {
    Color.RED: (255, 0, 0),
    Color.GREEN: (0, 255, 0),
    Color.BLUE: (128, 128, 255),
    Color.MAGENTA: (255, 0, 255),
    Color.CYAN: (0, 255, 255),
    Color.YELLOW: (255, 255, 0),
    Color.ORANGE: (255, 128, 0),
}

EMPTY_OUTER: RGB = (51, 51, 51)
EMPTY_INNER: RGB = (26, 26, 26)
FLASH_RGBA = (255, 255, 255, 128)
DARKEN_RGBA = (0, 0, 0, 230)


def _shade(col: RGB, k: float = 0.8) -> RGB:
    return tuple(int(v * k) for v in col)


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims):
        self.dims = dims
        self._make_cells()
        self._make_overlays()

    def _block(self, outer: RGB, inner: RGB) -> pygame.Surface:
        c = self.dims.cell
        b = self.dims.border
        s = pygame.Surface((c, c))
        s.fill(outer)
        pygame.draw.rect(s, inner, pygame.Rect(round(b), round(b), round(c - 2 * b), round(c - 2 * b)))
        return s

    # ---------- Cell sprites ----------
    def _make_cells(self):
        self.empty_surf = self._block(EMPTY_OUTER, EMPTY_INNER)
        self.cell_surf: Dict[Color, pygame.Surface] = {
            t: self._block(col, _shade(col)) for t, col in COLORS.items()
        }

    # ---------- Effect overlays ----------
    def _make_overlays(self):
        d = self.dims
        self.flash_row = pygame.Surface((d.total_w, d.cell), pygame.SRCALPHA)
        self.flash_row.fill(FLASH_RGBA)
        self.darken = pygame.Surface((d.total_w, d.total_h), pygame.SRCALPHA)
        self.darken.fill(DARKEN_RGBA)

    def cell_rect(self, bx: int, by: int) -> pygame.Rect:
        c = self.dims.cell
        return pygame.Rect(bx * c, by * c, c, c)

    def cell_sprite(self, color: Optional[Color]) -> pygame.Surface:
        return self.empty_surf if color is None else self.cell_surf[color]

    def draw(self, screen: pygame.Surface, snap: Snapshot):
        grid = snap.grid
        for y, row in enumerate(grid.rows):
            for x, color in enumerate(row):
                screen.blit(self.cell_sprite(color), self.cell_rect(x, y).topleft)
        if snap.mode is DisplayMode.FLASH:
            for y in snap.rows:
                screen.blit(self.flash_row, (0, y * self.dims.cell))
        elif snap.mode is DisplayMode.DARKENED:
            screen.blit(self.darken, (0, 0))
