"""
agentneat - neuroevolution of agent controllers with NEAT and HyperNEAT.

This package evolves the neural networks controlling a population of agents.
Each agent is bound to a genome; the environment asks the population for the
agent's actions, reports the agent's fitness, and advances the population one
generation at a time.

Main components:
- genotype:    Direct encoding (nodes, links, genome, innovation registry)
- hyperneat:   Indirect encoding (CPPN-painted substrate)
- pool:        Population, species and species colors
- run:         Configuration, trial and experiment framework
- activations: Activation functions for network nodes

Example:
    >>> from agentneat import Config, Population
    >>> population = Population(Config(), agent_ids=["cat", "dog"])
    >>> action = population.evaluate("cat", [0.2, 0.7])
    >>> population.report_fitness("cat", 12)
    >>> population.advance_generation()
"""

__version__ = "0.1.0"

from agentneat.run.config       import Config
from agentneat.genotype         import Genome, InnovationRegistry
from agentneat.hyperneat        import HyperGenome, Substrate
from agentneat.pool             import ColorPool, Population, Species
from agentneat.run.trial        import Trial
from agentneat.run.experiment   import Experiment
from agentneat.visualization    import visualize

__all__ = [
    "Config",
    "Genome",
    "InnovationRegistry",
    "HyperGenome",
    "Substrate",
    "ColorPool",
    "Population",
    "Species",
    "Trial",
    "Experiment",
    "visualize",
]
