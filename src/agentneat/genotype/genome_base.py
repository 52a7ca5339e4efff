"""
Genome Base Module

This module defines the abstract contract shared by every kind of genome
the population can evolve: the direct encoding (a NEAT network) and the
indirect encoding (a CPPN painting the weights of a HyperNEAT substrate).

Classes:
    GenomeBase: Abstract base class for evolvable genomes
"""

from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from agentneat.genotype.genome import Genome

class GenomeBase(ABC):
    """
    Abstract base class for all evolvable genomes.

    A genome maps an input (vision) vector to an output (action) vector,
    carries the fitness reported for it, and knows how to mutate, clone
    and cross itself over with another genome of the same kind.

    Speciation only ever compares direct-encoding networks: each genome
    exposes the network that stands for it during speciation through
    'compatibility_network'.

    Concrete classes must expose a read/write 'fitness' attribute.
    """

    fitness: float

    @abstractmethod
    def evaluate(self, inputs) -> list[float]:
        """
        Feed an input vector through the network and return its outputs.
        """
        pass

    @abstractmethod
    def mutate(self) -> None:
        pass

    @abstractmethod
    def clone(self) -> 'GenomeBase':
        pass

    @abstractmethod
    def crossover(self, recessive: 'GenomeBase') -> 'GenomeBase':
        """
        Create a child from this (dominant) genome and a recessive one.
        """
        pass

    @property
    @abstractmethod
    def compatibility_network(self) -> 'Genome':
        pass

    def is_compatible(self, representative: 'Genome') -> bool:
        """
        Check whether this genome belongs to the species represented by 'representative'.
        """
        return self.compatibility_network.is_compatible(representative)
