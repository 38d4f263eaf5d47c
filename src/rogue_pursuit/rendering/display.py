from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

DEFAULT_COLOR: Color = (180, 180, 180)


class Display(Protocol):
    """Anything that can draw a glyph at a map cell."""

    def draw(self, x: int, y: int, glyph: str, color: Optional[Color] = None) -> None:
        ...


class TextDisplay:
    """Fixed-size character buffer.

    Used directly by the headless runner and tests, and read row by row by
    the Arcade window. Cells never drawn render as blanks.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._glyphs: List[List[str]] = [[" "] * width for _ in range(height)]
        self._colors: List[List[Color]] = [[DEFAULT_COLOR] * width for _ in range(height)]
        self.revision = 0

    def draw(self, x: int, y: int, glyph: str, color: Optional[Color] = None) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            logger.debug("Ignoring draw outside display at (%d,%d)", x, y)
            return
        self._glyphs[y][x] = glyph[:1] or " "
        self._colors[y][x] = color or DEFAULT_COLOR
        self.revision += 1

    def glyph_at(self, x: int, y: int) -> str:
        return self._glyphs[y][x]

    def color_at(self, x: int, y: int) -> Color:
        return self._colors[y][x]

    def rows(self) -> List[str]:
        return ["".join(row) for row in self._glyphs]

    def render(self) -> str:
        return "\n".join(row.rstrip() for row in self.rows())
