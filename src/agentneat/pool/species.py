"""
NEAT Species Module

This module implements the Species class. A species represents a
cluster of genetically similar genomes that compete primarily
within their own niche.

Classes:
    Species: A single species with its members, fitness and staleness tracking
"""

import random
from collections.abc import Hashable

from agentneat.genotype        import Genome, GenomeBase
from agentneat.pool.color_pool import ColorPool
from agentneat.run.config      import Config

class Species:
    """
    A species representing a cluster of genetically similar genomes.

    The population is divided into species based on compatibility distance,
    which protects new structures from being eliminated by competition with
    more mature networks: genomes mostly compete within their own species.

    Membership is decided against a compatibility representative, a clone
    of one member's network. It is never a live member, so later mutations of
    the population cannot change it.

    Public Attributes:
        id:               Unique species identifier
        organisms:        The members of this species: agent ID => genome
        representative:   Genome used for compatibility checks during speciation
        best_organism_id: Agent ID of the fittest member this generation
        best_fitness:     Best fitness ever achieved by this species
        average_fitness:  Average (shared) fitness of the members
        staleness:        Number of generations without improvement
        color:            Display color (None if the pool ran out of colors)
        fitness_history:  List of average fitness values over generations

    Public Methods:
        add(agent_id, genome):        Add a member
        is_compatible(genome):        Whether a genome belongs to this species
        set_compatibility_network():  Pick a new representative among the members
        reset_members():              Remove all members before speciation
        cull():                       Keep only the fittest fraction of members
        set_staleness():              Update best fitness and staleness
        share_fitness():              Divide each member's fitness by the species size
        set_average_fitness():        Compute the average member fitness
        reproduce():                  Create one offspring
        release_color():              Return the display color to the pool
    """

    def __init__(self,
                 species_id : int,
                 seed_agent : Hashable,
                 seed_genome: GenomeBase,
                 config     : Config,
                 color_pool : ColorPool):
        """
        Initialize a new species with a single member.

        Parameters:
            species_id:  unique species identifier
            seed_agent:  ID of the agent whose genome founds the species
            seed_genome: the genome that founds the species
            config:      stores configuration parameters
            color_pool:  pool from which the species takes its display color
        """
        self._config    : Config    = config
        self._color_pool: ColorPool = color_pool

        self.id: int = species_id

        self.organisms     : dict[Hashable, GenomeBase] = {seed_agent: seed_genome}
        self.representative: Genome                     = seed_genome.compatibility_network.clone()

        self.best_organism_id: Hashable    = seed_agent
        self.best_fitness    : float       = float('-inf')
        self.average_fitness : float       = 0.0
        self.staleness       : int         = 0
        self.fitness_history : list[float] = []

        self.color: str | None = color_pool.acquire()

    def add(self, agent_id: Hashable, genome: GenomeBase) -> None:
        self.organisms[agent_id] = genome

    def is_compatible(self, genome: GenomeBase) -> bool:
        return genome.is_compatible(self.representative)

    def set_compatibility_network(self) -> None:
        """
        Replace the representative by a clone of a random current member.
        """
        if self.organisms:
            member = random.choice(list(self.organisms.values()))
            self.representative = member.compatibility_network.clone()

    def reset_members(self) -> None:
        self.organisms       = {}
        self.average_fitness = 0.0

    def cull(self) -> None:
        """
        Keep only the fittest members of the species.

        Members are picked in order of decreasing fitness (ties go to the
        member added first) until the number of survivors reaches
        'cull_fraction' of the species size. Survivors are clones of the
        original genomes.
        """
        target    = len(self.organisms) * self._config.cull_fraction
        remaining = dict(self.organisms)
        survivors = {}

        while remaining:
            best_id = None
            for agent_id, genome in remaining.items():
                if best_id is None or genome.fitness > remaining[best_id].fitness:
                    best_id = agent_id

            survivors[best_id] = remaining.pop(best_id).clone()
            if len(survivors) >= target:
                break

        self.organisms = survivors

    def set_staleness(self) -> None:
        """
        Find this generation's fittest member. Staleness goes back to 0 if its
        fitness beats the best fitness ever seen in the species, and grows by 1 otherwise.
        """
        best_id = None
        for agent_id, genome in self.organisms.items():
            if best_id is None or genome.fitness > self.organisms[best_id].fitness:
                best_id = agent_id

        if best_id is None:
            self.staleness += 1
            return

        self.best_organism_id = best_id
        generation_best = self.organisms[best_id].fitness
        if generation_best > self.best_fitness:
            self.best_fitness = generation_best
            self.staleness    = 0
        else:
            self.staleness += 1

    def share_fitness(self) -> None:
        size = len(self.organisms)
        for genome in self.organisms.values():
            genome.fitness /= size

    def set_average_fitness(self) -> None:
        if self.organisms:
            self.average_fitness = sum(g.fitness for g in self.organisms.values()) / len(self.organisms)
        else:
            self.average_fitness = 0.0
        self.fitness_history.append(self.average_fitness)

    def best_organism(self) -> GenomeBase:
        """
        Return a clone of the fittest member.
        """
        return self.organisms[self.best_organism_id].clone()

    def reproduce(self) -> GenomeBase:
        """
        Create one offspring from the members of this species.

        With probability 'crossover_probability' two random members are crossed
        over, the fitter one being the dominant parent (on a tie, the first one
        drawn). Otherwise a random member is cloned. The offspring is then mutated.

        Returns:
            The new genome
        """
        assert self.organisms, f"species {self.id} has no members to reproduce from"

        members = list(self.organisms.values())
        if random.random() < self._config.crossover_probability:
            parent1 = random.choice(members)
            parent2 = random.choice(members)
            if parent1.fitness < parent2.fitness:
                parent1, parent2 = parent2, parent1
            child = parent1.crossover(parent2)
        else:
            child = random.choice(members).clone()

        child.mutate()
        return child

    def release_color(self) -> None:
        self._color_pool.release(self.color)
        self.color = None

    def __repr__(self):
        return (f"Species(id={self.id}, size={len(self.organisms)}, staleness={self.staleness}, "
                f"average_fitness={self.average_fitness:.3f}, color={self.color})")
