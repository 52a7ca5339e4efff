"""
Unit tests for InnovationRegistry.
"""

import pytest

from agentneat.genotype import InnovationRegistry


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def tracker():
    """Create a fresh InnovationRegistry instance for each test."""
    return InnovationRegistry()


# ============================================================================
# Test innovation numbers
# ============================================================================

class TestInnovationNumbers:
    """Test the assignment of innovation numbers to links."""

    def test_first_link_gets_zero(self, tracker):
        """Test that the first registered link gets innovation number 0."""
        assert tracker.get_innovation_number(0, 3) == 0

    def test_new_links_get_consecutive_numbers(self, tracker):
        """Test that new links are numbered in order of registration."""
        assert tracker.get_innovation_number(0, 3) == 0
        assert tracker.get_innovation_number(1, 3) == 1
        assert tracker.get_innovation_number(-1, 3) == 2

    def test_same_link_same_number(self, tracker):
        """Test that asking twice for the same link returns the same number."""
        first  = tracker.get_innovation_number(2, 5)
        tracker.get_innovation_number(1, 5)
        second = tracker.get_innovation_number(2, 5)
        assert first == second
        assert len(tracker) == 2

    def test_direction_matters(self, tracker):
        """Test that (a, b) and (b, a) are different links."""
        assert tracker.get_innovation_number(4, 5) != tracker.get_innovation_number(5, 4)

    def test_contains(self, tracker):
        """Test membership checks on (source, destination) pairs."""
        tracker.get_innovation_number(0, 1)
        assert (0, 1) in tracker
        assert (1, 0) not in tracker

    def test_registries_are_independent(self):
        """Test that two registries do not share state."""
        registry1 = InnovationRegistry()
        registry2 = InnovationRegistry()
        registry1.get_innovation_number(0, 1)
        registry1.get_innovation_number(0, 2)
        assert registry2.get_innovation_number(0, 2) == 0


# ============================================================================
# Test descriptions
# ============================================================================

class TestDescribe:
    """Test the 'describe' method."""

    def test_describe_returns_key(self, tracker):
        """Test that the canonical 'source dest' key is returned."""
        innovation = tracker.get_innovation_number(-1, 7)
        assert tracker.describe(innovation) == "-1 7"

    def test_describe_unknown_raises(self, tracker):
        """Test that an unknown innovation number raises KeyError."""
        tracker.get_innovation_number(0, 1)
        with pytest.raises(KeyError):
            tracker.describe(5)
        with pytest.raises(KeyError):
            tracker.describe(-1)
