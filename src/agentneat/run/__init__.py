"""
Run Package

This package contains the configuration and the classes driving complete runs.

Modules:
    config:     Config class (INI file parsing and defaults)
    trial:      Trial abstract class (one independent run)
    experiment: Experiment abstract class (many independent trials)

Only Config is imported here, since every other package depends on it;
import Trial and Experiment from their modules or from 'agentneat'.
"""

from agentneat.run.config import Config

__all__ = ['Config']
