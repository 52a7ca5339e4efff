"""
Pool Package

This package contains the classes managing the population and its species.

The pool package coordinates the evolutionary process at the population level,
organizing genomes into species based on compatibility distance and managing
reproduction across generations.

Modules:
    color_pool: Display colors shared by the species of a population
    species:    Individual species representation and reproduction
    population: Top-level population management and evolution

Exported Classes:
    ColorPool:  Set of available and in-use species colors
    Species:    A cluster of genetically similar genomes
    Population: Top-level evolutionary coordinator
"""

from agentneat.pool.color_pool import ColorPool
from agentneat.pool.species    import Species
from agentneat.pool.population import Population

__all__ = [
    'ColorPool',
    'Species',
    'Population',
]
