from __future__ import annotations

"""Built-in 5x7 bitmap font used by the headless raster surface.

Each glyph is 7 rows of 5 columns; '#' marks a lit cell. Glyphs advance by
6 cells (one blank column). Unknown characters render as a hollow box.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

GLYPH_W = 5
GLYPH_H = 7
ADVANCE = 6

_GLYPHS: Dict[str, Tuple[str, ...]] = {
    " ": ("     ",) * 7,
    "a": ("     ", "     ", " ### ", "    #", " ####", "#   #", " ####"),
    "b": ("#    ", "#    ", "#### ", "#   #", "#   #", "#   #", "#### "),
    "c": ("     ", "     ", " ####", "#    ", "#    ", "#    ", " ####"),
    "d": ("    #", "    #", " ####", "#   #", "#   #", "#   #", " ####"),
    "e": ("     ", "     ", " ### ", "#   #", "#####", "#    ", " ### "),
    "f": ("  ## ", " #   ", "#### ", " #   ", " #   ", " #   ", " #   "),
    "g": ("     ", " ####", "#   #", "#   #", " ####", "    #", " ### "),
    "h": ("#    ", "#    ", "#### ", "#   #", "#   #", "#   #", "#   #"),
    "i": ("  #  ", "     ", " ##  ", "  #  ", "  #  ", "  #  ", " ### "),
    "j": ("   # ", "     ", "  ## ", "   # ", "   # ", "#  # ", " ##  "),
    "k": ("#    ", "#    ", "#  # ", "# #  ", "##   ", "# #  ", "#  # "),
    "l": (" ##  ", "  #  ", "  #  ", "  #  ", "  #  ", "  #  ", " ### "),
    "m": ("     ", "     ", "## # ", "# # #", "# # #", "# # #", "# # #"),
    "n": ("     ", "     ", "#### ", "#   #", "#   #", "#   #", "#   #"),
    "o": ("     ", "     ", " ### ", "#   #", "#   #", "#   #", " ### "),
    "p": ("     ", "#### ", "#   #", "#   #", "#### ", "#    ", "#    "),
    "q": ("     ", " ####", "#   #", "#   #", " ####", "    #", "    #"),
    "r": ("     ", "     ", "# ## ", "##  #", "#    ", "#    ", "#    "),
    "s": ("     ", "     ", " ####", "#    ", " ### ", "    #", "#### "),
    "t": (" #   ", " #   ", "#### ", " #   ", " #   ", " #  #", "  ## "),
    "u": ("     ", "     ", "#   #", "#   #", "#   #", "#  ##", " ## #"),
    "v": ("     ", "     ", "#   #", "#   #", "#   #", " # # ", "  #  "),
    "w": ("     ", "     ", "#   #", "#   #", "# # #", "# # #", " # # "),
    "x": ("     ", "     ", "#   #", " # # ", "  #  ", " # # ", "#   #"),
    "y": ("     ", "#   #", "#   #", "#   #", " ####", "    #", " ### "),
    "z": ("     ", "     ", "#####", "   # ", "  #  ", " #   ", "#####"),
    ".": ("     ", "     ", "     ", "     ", "     ", " ##  ", " ##  "),
    ",": ("     ", "     ", "     ", "     ", " ##  ", "  #  ", " #   "),
    "'": ("  #  ", "  #  ", "     ", "     ", "     ", "     ", "     "),
    "-": ("     ", "     ", "     ", "#####", "     ", "     ", "     "),
}

_MISSING = ("#####", "#   #", "#   #", "#   #", "#   #", "#   #", "#####")


@dataclass(frozen=True)
class BitmapFont:
    name: str = "flowbook-5x7"

    @staticmethod
    def cell_size(size: float) -> float:
        """Edge length of one glyph cell for a given text size (glyph height ~ 0.7 * size)."""
        return max(1.0, float(size) * 0.7 / GLYPH_H)

    def glyph(self, ch: str) -> Tuple[str, ...]:
        return _GLYPHS.get(ch, _GLYPHS.get(ch.lower(), _MISSING))

    def bounds(self, text: str, size: float) -> Tuple[float, float]:
        """Tight (width, height) of `text` at `size`."""
        n = len(text)
        if n == 0:
            return 0.0, 0.0
        k = self.cell_size(size)
        return (ADVANCE * n - (ADVANCE - GLYPH_W)) * k, GLYPH_H * k

    def cells(self, text: str) -> List[Tuple[int, int]]:
        """Lit (col, row) cells of `text` laid out on the glyph grid."""
        out: List[Tuple[int, int]] = []
        for i, ch in enumerate(text):
            rows = self.glyph(ch)
            for r, line in enumerate(rows):
                for c, mark in enumerate(line):
                    if mark == "#":
                        out.append((i * ADVANCE + c, r))
        return out
