"""
Color Pool Module

This module implements the ColorPool class, which hands out display
colors to species so that no two living species share one.

Classes:
    ColorPool: Set of available and in-use species colors
"""

import logging
import random

logger = logging.getLogger(__name__)

# Fully transparent; never handed out
TRANSPARENT = "#00000000"

# Named colors a species can be displayed with
PALETTE = [
    TRANSPARENT,
    "#000000",  # black
    "#ffffff",  # white
    "#bfbfbf",  # light gray
    "#7f7f7f",  # gray
    "#3f3f3f",  # dark gray
    "#0000ff",  # blue
    "#00007f",  # navy
    "#4169e1",  # royal
    "#708090",  # slate
    "#87ceeb",  # sky
    "#00ffff",  # cyan
    "#007f7f",  # teal
    "#00ff00",  # green
    "#7fff00",  # chartreuse
    "#32cd32",  # lime
    "#228b22",  # forest
    "#6b8e23",  # olive
    "#ffff00",  # yellow
    "#ffd700",  # gold
    "#daa520",  # goldenrod
    "#ffa500",  # orange
    "#8b4513",  # brown
    "#d2b48c",  # tan
    "#b22222",  # firebrick
    "#ff0000",  # red
    "#ff341c",  # scarlet
    "#ff7f50",  # coral
    "#fa8072",  # salmon
    "#ffc0cb",  # pink
    "#ff00ff",  # magenta
    "#a020f0",  # purple
    "#ee82ee",  # violet
    "#b03060",  # maroon
]

class ColorPool:
    """
    The display colors of the species of one population.

    A color is either available or in use by exactly one species. Species
    acquire a color when they are created and release it when they are
    removed from the population.

    Public Attributes:
        in_use: The colors currently held by a species

    Public Properties:
        available: The colors that can still be acquired

    Public Methods:
        acquire(): Draw a random available color
        release(): Return a color to the pool
    """

    def __init__(self, palette: list[str] | None = None):
        """
        Parameters:
            palette: The colors to hand out (default: PALETTE)
        """
        self._palette: list[str] = list(PALETTE if palette is None else palette)
        self.in_use  : set[str]  = set()

    @property
    def available(self) -> set[str]:
        return {color for color in self._palette if color != TRANSPARENT and color not in self.in_use}

    def acquire(self) -> str | None:
        """
        Draw colors at random until an unused, non-transparent one comes up.

        Returns:
            The acquired color, or None if every color is already in use
        """
        if not self.available:
            logger.warning("All %d species colors are in use", len(self.in_use))
            return None

        while True:
            color = random.choice(self._palette)
            if color != TRANSPARENT and color not in self.in_use:
                break

        self.in_use.add(color)
        return color

    def release(self, color: str | None) -> None:
        """
        Make a color available again (None is ignored).
        """
        if color is not None:
            self.in_use.discard(color)
