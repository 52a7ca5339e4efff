"""
NEAT Population Module

This module implements the Population class, the top-level orchestrator of
the evolutionary algorithm. The population binds a genome to every agent,
answers the environment's evaluation and fitness calls, and runs one full
generational step on request.

Classes:
    Population: Top-level evolutionary coordinator managing agents, genomes and species
"""

import logging
import math
import random
from collections.abc import Hashable, Iterable
from itertools       import count

from agentneat.genotype        import Genome, GenomeBase, InnovationRegistry
from agentneat.hyperneat       import HyperGenome
from agentneat.pool.color_pool import ColorPool
from agentneat.pool.species    import Species
from agentneat.run.config      import Config

logger = logging.getLogger(__name__)

class Population:
    """
    A population of evolving genomes, one per agent.

    The environment drives the population through four calls:
    'evaluate' (once per simulation tick per agent), 'report_fitness',
    'assign_display_color' and 'advance_generation' (once per episode).

    One generation goes through the following steps:

    Step 1: Speciation
    - Every species picks a new representative and drops its members
    - Each genome joins the first compatible species, in order of
      creation, or founds a new species
    - Species left without members are removed

    Step 2: Best tracking
    - The agent with the highest fitness is recorded (first one on ties)

    Step 3: Culling
    - Each species keeps its fittest members, updates its staleness,
      shares fitness among its members and computes its average fitness

    Step 4: Removal of stale species
    - Species that have not improved for more than 'max_stagnation_period'
      generations are removed, unless they hold the best agent

    Step 5: Removal of bad species
    - Species whose expected number of offspring is below 1 are removed,
      unless they hold the best agent

    Step 6: Reproduction
    - Each species carries over its fittest genome and produces its share of
      offspring; any shortfall is filled by randomly chosen species

    Step 7: Reassignment
    - The offspring are bound to the agents, in agent order

    Public Attributes:
        registry:      Innovation registry shared by the genomes of this population
        color_pool:    Pool of species display colors
        species:       List of living species, in order of creation
        generation:    Number of completed generations
        best_agent_id: ID of the fittest agent at the last generational step
        history:       Statistics recorded at each generational step

    Public Properties:
        agent_ids:       IDs of all agents
        size:            Number of agents
        average_fitness: Average fitness reported in the current generation
        max_fitness:     Maximum fitness reported in the current generation
        number_species:  Number of living species

    Public Methods:
        genome(agent_id):                 The genome currently bound to an agent
        evaluate(agent_id, vision):       Compute an agent's action vector
        report_fitness(agent_id, score):  Record the fitness of an agent's genome
        assign_display_color(agent_id):   Color of the species holding the agent
        get_fittest_agent():              ID of the agent with the highest fitness
        statistics():                     Current generation statistics
        advance_generation():             Run one complete generational step
    """

    def __init__(self,
                 config    : Config,
                 agent_ids : Iterable[Hashable] | None = None,
                 registry  : InnovationRegistry | None = None,
                 color_pool: ColorPool          | None = None):
        """
        Create one new genome per agent.

        Parameters:
            config:     Stores configuration parameters
            agent_ids:  The agents to evolve genomes for (default: 0 .. population_size - 1)
            registry:   Innovation registry to use (default: a new, empty one)
            color_pool: Pool of species colors to use (default: a new, full one)
        """
        self._config: Config = config

        self.registry  : InnovationRegistry = InnovationRegistry() if registry   is None else registry
        self.color_pool: ColorPool          = ColorPool()          if color_pool is None else color_pool

        if agent_ids is None:
            agent_ids = range(config.population_size)

        self._genomes: dict[Hashable, GenomeBase] = {agent_id: self._new_genome() for agent_id in agent_ids}
        if not self._genomes:
            raise ValueError("A population needs at least one agent")

        self.species         : list[Species]            = []
        self._agent_species  : dict[Hashable, Species]  = {}
        self._species_counter                           = count(0)
        self.generation      : int                      = 0
        self.best_agent_id   : Hashable | None          = None
        self.history         : list[dict]               = []

    def _new_genome(self) -> GenomeBase:
        if self._config.algorithm == "hyperneat":
            return HyperGenome(self._config, self.registry)
        return Genome(self._config, self.registry)

    @property
    def agent_ids(self) -> list[Hashable]:
        return list(self._genomes.keys())

    @property
    def size(self) -> int:
        return len(self._genomes)

    def genome(self, agent_id: Hashable) -> GenomeBase:
        """
        Return the genome bound to an agent.
        Raises KeyError for agents that are not part of the population.
        """
        try:
            return self._genomes[agent_id]
        except KeyError:
            raise KeyError(f"No genome for agent '{agent_id}'") from None

    def evaluate(self, agent_id: Hashable, vision) -> list[float]:
        """
        Feed an agent's vision vector through its genome's network.

        Parameters:
            agent_id: the agent being simulated
            vision:   sequence of 'num_inputs' values

        Returns:
            The action vector ('num_outputs' values)
        """
        return self.genome(agent_id).evaluate(vision)

    def report_fitness(self, agent_id: Hashable, fitness: float) -> None:
        """
        Record the fitness of an agent's genome for the current generation.
        Fitness is expected to be a positive number (or zero).
        """
        self.genome(agent_id).fitness = float(fitness)

    def assign_display_color(self, agent_id: Hashable) -> str | None:
        """
        Return the color of the species the agent's genome belongs to,
        or None if it has not been assigned to a species yet.
        """
        self.genome(agent_id)
        species = self._agent_species.get(agent_id)
        return species.color if species is not None else None

    def get_fittest_agent(self) -> Hashable:
        """
        Return the ID of the agent with the highest fitness (the first one on ties).
        """
        best_id = None
        for agent_id, genome in self._genomes.items():
            if best_id is None or genome.fitness > self._genomes[best_id].fitness:
                best_id = agent_id
        return best_id

    @property
    def average_fitness(self) -> float:
        return sum(genome.fitness for genome in self._genomes.values()) / len(self._genomes)

    @property
    def max_fitness(self) -> float:
        return max(genome.fitness for genome in self._genomes.values())

    @property
    def number_species(self) -> int:
        return len(self.species)

    def statistics(self) -> dict:
        return {"generation"     : self.generation,
                "average_fitness": self.average_fitness,
                "max_fitness"    : self.max_fitness,
                "number_species" : self.number_species}

    def advance_generation(self) -> None:
        """
        Run one complete generational step (see the class documentation)
        and increment the generation counter.
        """
        self._speciate()

        stats = self.statistics()
        self.history.append(stats)

        self.best_agent_id = self.get_fittest_agent()

        for species in self.species:
            species.cull()
            species.set_staleness()
            species.share_fitness()
            species.set_average_fitness()

        self._remove_stale_species()
        self._remove_bad_species()

        offspring = self._reproduce()
        self._reassign(offspring)

        self.generation += 1
        logger.info("Generation %d: average fitness %.3f, max fitness %.3f, %d species",
                    stats["generation"], stats["average_fitness"], stats["max_fitness"], self.number_species)

    def _speciate(self) -> None:
        """
        Assign every genome to the first compatible species, creating new species as needed.
        """
        for species in self.species:
            species.set_compatibility_network()
            species.reset_members()

        self._agent_species = {}
        for agent_id, genome in self._genomes.items():
            home = None
            for species in self.species:
                if species.is_compatible(genome):
                    home = species
                    break

            if home is None:
                home = Species(next(self._species_counter), agent_id, genome, self._config, self.color_pool)
                self.species.append(home)
                logger.debug("Created species %d (color %s)", home.id, home.color)
            else:
                home.add(agent_id, genome)

            self._agent_species[agent_id] = home

        for species in [s for s in self.species if not s.organisms]:
            self._remove_species(species, "extinct")

    def _expected_offspring(self, species: Species, total_average: float) -> float:
        """
        The number of offspring a species is entitled to: its share of the total
        average fitness, scaled by the population size. All species get an equal
        share when the total is not positive.
        """
        if total_average > 0:
            return species.average_fitness / total_average * self.size
        return self.size / len(self.species)

    def _remove_stale_species(self) -> None:
        for species in list(self.species):
            if species.staleness > self._config.max_stagnation_period and \
               self.best_agent_id not in species.organisms:
                self._remove_species(species, "stale")

    def _remove_bad_species(self) -> None:
        total_average = sum(species.average_fitness for species in self.species)
        expected      = {species.id: self._expected_offspring(species, total_average) for species in self.species}

        for species in list(self.species):
            if self.best_agent_id in species.organisms:
                continue
            if expected[species.id] < 1:
                self._remove_species(species, "unproductive")

    def _remove_species(self, species: Species, reason: str) -> None:
        self.species.remove(species)
        species.release_color()
        logger.debug("Removed %s species %d", reason, species.id)

    def _reproduce(self) -> list[tuple[Species, GenomeBase]]:
        """
        Produce exactly one offspring per agent.

        Returns:
            (parent species, offspring genome) pairs
        """
        total_average = sum(species.average_fitness for species in self.species)

        offspring = []
        for species in self.species:
            assert species.organisms, f"species {species.id} has no members to reproduce from"
            offspring.append((species, species.best_organism()))

            num_children = math.floor(self._expected_offspring(species, total_average)) - 1
            for _ in range(num_children):
                offspring.append((species, species.reproduce()))

        while len(offspring) < self.size:
            species = random.choice(self.species)
            offspring.append((species, species.reproduce()))

        return offspring

    def _reassign(self, offspring: list[tuple[Species, GenomeBase]]) -> None:
        """
        Bind the offspring to the agents; each agent is then known
        to belong to the species its new genome came from.
        """
        self._agent_species = {}
        for agent_id, (species, genome) in zip(self.agent_ids, offspring):
            genome.fitness = 0.0
            self._genomes[agent_id] = genome
            self._agent_species[agent_id] = species
