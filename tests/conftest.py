"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest
import random
import sys
from pathlib import Path

# Add the source directory to the Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    np.random.seed(42)
    random.seed(42)

    yield

    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def config():
    """A default configuration, with 2 inputs and 1 output."""
    from agentneat.run.config import Config
    return Config()


@pytest.fixture
def registry():
    """A fresh innovation registry."""
    from agentneat.genotype import InnovationRegistry
    return InnovationRegistry()
