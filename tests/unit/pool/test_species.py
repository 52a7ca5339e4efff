"""
Unit tests for Species.
"""

import pytest
import random
from unittest.mock import Mock, patch

from agentneat.genotype   import Genome, GenomeBase, InnovationRegistry
from agentneat.pool       import ColorPool, Species
from agentneat.run.config import Config


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config():
    config = Config()
    config.cull_fraction = 0.5
    return config


@pytest.fixture
def registry():
    return InnovationRegistry()


@pytest.fixture
def color_pool():
    return ColorPool()


def make_genome(config, registry, fitness=0.0):
    genome = Genome(config, registry)
    genome.fitness = fitness
    return genome


def make_species(config, registry, color_pool, fitnesses):
    """
    Create a species whose members are agents 'a0', 'a1', ...
    with the given fitness values.
    """
    genomes = [make_genome(config, registry, f) for f in fitnesses]
    species = Species(0, "a0", genomes[0], config, color_pool)
    for i, genome in enumerate(genomes[1:], start=1):
        species.add(f"a{i}", genome)
    return species


# ============================================================================
# Test construction
# ============================================================================

class TestSpeciesInitialization:
    """Test a newly created species."""

    def test_seed_member(self, config, registry, color_pool):
        """Test that the founding genome is the only member."""
        genome  = make_genome(config, registry)
        species = Species(7, "cat", genome, config, color_pool)
        assert species.id == 7
        assert species.organisms == {"cat": genome}
        assert species.best_organism_id == "cat"
        assert species.staleness == 0
        assert species.best_fitness == float('-inf')

    def test_representative_is_a_clone(self, config, registry, color_pool):
        """Test that the representative is not a live member."""
        genome  = make_genome(config, registry)
        species = Species(0, "cat", genome, config, color_pool)
        assert species.representative is not genome
        assert species.representative.distance(genome) == 0.0

        genome.links[0].weight += 0.5
        assert species.representative.links[0].weight != genome.links[0].weight

    def test_color_acquired_and_released(self, config, registry, color_pool):
        """Test that a species holds a color until it releases it."""
        species = Species(0, "cat", make_genome(config, registry), config, color_pool)
        color   = species.color
        assert color in color_pool.in_use

        species.release_color()
        assert species.color is None
        assert color not in color_pool.in_use


# ============================================================================
# Test membership
# ============================================================================

class TestMembership:
    """Test compatibility and representative selection."""

    def test_clone_is_compatible(self, config, registry, color_pool):
        """Test that a clone of the founder is compatible."""
        genome  = make_genome(config, registry)
        species = Species(0, "cat", genome, config, color_pool)
        assert species.is_compatible(genome.clone())

    def test_distant_genome_is_incompatible(self, config, registry, color_pool):
        """Test that a genome sharing no link is incompatible."""
        species = Species(0, "cat", make_genome(config, registry), config, color_pool)
        other   = Genome(config, registry, 3, 3)
        assert not species.is_compatible(other)

    def test_set_compatibility_network(self, config, registry, color_pool):
        """Test that the new representative is a clone of a member."""
        species = make_species(config, registry, color_pool, [1.0, 2.0, 3.0])
        species.set_compatibility_network()
        members = list(species.organisms.values())
        assert all(species.representative is not m for m in members)
        assert any(species.representative.distance(m) == 0.0 for m in members)

    def test_reset_members(self, config, registry, color_pool):
        """Test that resetting removes all members but keeps the representative."""
        species        = make_species(config, registry, color_pool, [1.0, 2.0])
        representative = species.representative
        species.reset_members()
        assert species.organisms == {}
        assert species.representative is representative


# ============================================================================
# Test culling, staleness and fitness sharing
# ============================================================================

class TestCull:
    """Test culling of the weaker members."""

    def test_cull_keeps_fittest_fraction(self, config, registry, color_pool):
        """Test that the fittest ceil(size * cull_fraction) members survive."""
        species = make_species(config, registry, color_pool, [3.0, 1.0, 5.0, 2.0, 4.0])
        species.cull()
        assert list(species.organisms.keys()) == ["a2", "a4", "a0"]

    def test_cull_keeps_at_least_one(self, config, registry, color_pool):
        """Test that culling never empties a species."""
        config.cull_fraction = 0.1
        species = make_species(config, registry, color_pool, [3.0])
        species.cull()
        assert list(species.organisms.keys()) == ["a0"]

    def test_cull_ties_go_to_first_member(self, config, registry, color_pool):
        """Test that equal fitness values keep their order."""
        species = make_species(config, registry, color_pool, [2.0, 2.0, 2.0, 2.0])
        species.cull()
        assert list(species.organisms.keys()) == ["a0", "a1"]

    def test_survivors_are_clones(self, config, registry, color_pool):
        """Test that survivors are copies of the original genomes."""
        species  = make_species(config, registry, color_pool, [3.0, 1.0])
        original = species.organisms["a0"]
        species.cull()
        assert species.organisms["a0"] is not original
        assert species.organisms["a0"].fitness == 3.0


class TestStaleness:
    """Test staleness tracking."""

    def test_first_generation_improves(self, config, registry, color_pool):
        """Test that any fitness beats the initial best."""
        species = make_species(config, registry, color_pool, [0.0, 0.0])
        species.set_staleness()
        assert species.staleness == 0
        assert species.best_fitness == 0.0

    def test_no_improvement(self, config, registry, color_pool):
        """Test that staleness grows while the best fitness is not beaten."""
        species = make_species(config, registry, color_pool, [3.0, 7.0])
        species.set_staleness()
        assert species.best_organism_id == "a1"

        species.set_staleness()
        species.set_staleness()
        assert species.staleness == 2
        assert species.best_fitness == 7.0

    def test_improvement_resets_staleness(self, config, registry, color_pool):
        """Test that a new best fitness resets staleness."""
        species = make_species(config, registry, color_pool, [3.0, 7.0])
        species.set_staleness()
        species.set_staleness()
        species.organisms["a0"].fitness = 8.0
        species.set_staleness()
        assert species.staleness == 0
        assert species.best_fitness == 8.0
        assert species.best_organism_id == "a0"


class TestFitnessSharing:
    """Test fitness sharing and averaging."""

    def test_share_fitness(self, config, registry, color_pool):
        """Test that each fitness is divided by the species size."""
        species = make_species(config, registry, color_pool, [8.0, 4.0, 12.0, 0.0])
        species.share_fitness()
        assert [g.fitness for g in species.organisms.values()] == [2.0, 1.0, 3.0, 0.0]

    def test_average_fitness(self, config, registry, color_pool):
        """Test the average and its history."""
        species = make_species(config, registry, color_pool, [1.0, 2.0, 6.0])
        species.set_average_fitness()
        assert species.average_fitness == pytest.approx(3.0)
        assert species.fitness_history == [pytest.approx(3.0)]

    def test_average_fitness_of_empty_species(self, config, registry, color_pool):
        """Test that an empty species has average fitness 0."""
        species = make_species(config, registry, color_pool, [5.0])
        species.reset_members()
        species.set_average_fitness()
        assert species.average_fitness == 0.0


# ============================================================================
# Test reproduction
# ============================================================================

class TestReproduce:
    """Test offspring creation."""

    def mock_member(self, fitness):
        member = Mock(spec=GenomeBase)
        member.fitness = fitness
        return member

    def test_clone_and_mutate(self, config, registry, color_pool):
        """Test that without crossover the child is a mutated clone."""
        config.crossover_probability = 0.0
        species = make_species(config, registry, color_pool, [1.0])
        member  = self.mock_member(1.0)
        species.organisms = {"a0": member}

        child = species.reproduce()

        assert child is member.clone.return_value
        child.mutate.assert_called_once()

    def test_fitter_parent_dominates(self, config, registry, color_pool):
        """Test that the fitter parent is the dominant one in crossover."""
        config.crossover_probability = 1.0
        species = make_species(config, registry, color_pool, [1.0])
        weak, strong = self.mock_member(1.0), self.mock_member(9.0)
        species.organisms = {"weak": weak, "strong": strong}

        with patch.object(random, 'choice', side_effect=[weak, strong]):
            child = species.reproduce()

        strong.crossover.assert_called_once_with(weak)
        weak.crossover.assert_not_called()
        assert child is strong.crossover.return_value
        child.mutate.assert_called_once()

    def test_tie_first_parent_dominates(self, config, registry, color_pool):
        """Test that on equal fitness the first parent drawn is dominant."""
        config.crossover_probability = 1.0
        species = make_species(config, registry, color_pool, [1.0])
        first, second = self.mock_member(4.0), self.mock_member(4.0)
        species.organisms = {"first": first, "second": second}

        with patch.object(random, 'choice', side_effect=[first, second]):
            species.reproduce()

        first.crossover.assert_called_once_with(second)

    def test_real_offspring(self, config, registry, color_pool):
        """Test reproduction with real genomes."""
        config.crossover_probability = 0.5
        species = make_species(config, registry, color_pool, [1.0, 2.0, 3.0])
        for _ in range(10):
            child = species.reproduce()
            assert isinstance(child, Genome)
            assert all(child is not member for member in species.organisms.values())

    def test_empty_species_cannot_reproduce(self, config, registry, color_pool):
        """Test that reproducing from an empty species is an error."""
        species = make_species(config, registry, color_pool, [1.0])
        species.reset_members()
        with pytest.raises(AssertionError):
            species.reproduce()

    def test_best_organism(self, config, registry, color_pool):
        """Test that the best organism is returned as a clone."""
        species = make_species(config, registry, color_pool, [1.0, 5.0])
        species.set_staleness()
        best = species.best_organism()
        assert best is not species.organisms["a1"]
        assert best.fitness == 5.0
