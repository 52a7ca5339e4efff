"""
Unit tests for ColorPool.
"""

import logging
import pytest

from agentneat.pool.color_pool import ColorPool, PALETTE, TRANSPARENT


class TestColorPool:
    """Test acquiring and releasing species colors."""

    def test_palette(self):
        """Test that the default palette holds distinct colors."""
        assert len(PALETTE) == len(set(PALETTE))
        assert TRANSPARENT in PALETTE

    def test_acquire_marks_color_in_use(self):
        """Test that an acquired color is no longer available."""
        pool  = ColorPool()
        color = pool.acquire()
        assert color in pool.in_use
        assert color not in pool.available
        assert color != TRANSPARENT

    def test_colors_are_unique(self):
        """Test that no color is handed out twice."""
        pool   = ColorPool()
        colors = [pool.acquire() for _ in range(len(PALETTE) - 1)]
        assert len(set(colors)) == len(colors)
        assert TRANSPARENT not in colors
        assert pool.available == set()

    def test_exhausted_pool_returns_none(self, caplog):
        """Test that acquiring from an exhausted pool returns None and logs a warning."""
        pool = ColorPool([TRANSPARENT, "#ff0000", "#00ff00"])
        pool.acquire()
        pool.acquire()
        with caplog.at_level(logging.WARNING, logger="agentneat.pool.color_pool"):
            assert pool.acquire() is None
        assert "in use" in caplog.text

    def test_release(self):
        """Test that a released color can be acquired again."""
        pool  = ColorPool([TRANSPARENT, "#ff0000"])
        color = pool.acquire()
        assert color == "#ff0000"

        pool.release(color)
        assert pool.available == {"#ff0000"}
        assert pool.acquire() == "#ff0000"

    def test_release_none_is_ignored(self):
        """Test that releasing None does nothing."""
        pool = ColorPool()
        pool.acquire()
        pool.release(None)
        assert len(pool.in_use) == 1

    def test_pools_are_independent(self):
        """Test that two pools do not share colors."""
        pool1 = ColorPool([TRANSPARENT, "#ff0000"])
        pool2 = ColorPool([TRANSPARENT, "#ff0000"])
        assert pool1.acquire() == pool2.acquire() == "#ff0000"
