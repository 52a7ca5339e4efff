"""
Unit tests for Experiment abstract base class.
"""

import pytest
from unittest.mock import patch

from agentneat.pool           import Population
from agentneat.run.config     import Config
from agentneat.run.experiment import Experiment
from agentneat.run.trial      import Trial


# ============================================================================
# Concrete Implementations for Testing
# ============================================================================

class ConcreteTrial(Trial):
    """Trial giving every agent the same fitness."""

    def __init__(self, config, suppress_output=False, fitness=10):
        super().__init__(config, suppress_output)
        self.fitness = fitness

    def _reset(self):
        super()._reset()

    def _run_episode(self, population: Population):
        for agent_id in population.agent_ids:
            population.report_fitness(agent_id, self.fitness)

    def _report_progress(self):
        pass

    def _final_report(self):
        pass


class ConcreteExperiment(Experiment):
    """Experiment recording the calls made to its hooks."""

    def __init__(self, trial_class, num_trials, config, *args, **kwargs):
        super().__init__(trial_class, num_trials, config, *args, **kwargs)
        self.reset_called = False
        self.prepare_trial_calls = []
        self.analyzed_results = []
        self.final_report_called = False

    def _reset(self):
        super()._reset()
        self.reset_called = True

    def _prepare_trial(self, trial, trial_number):
        self.prepare_trial_calls.append((trial, trial_number))

    def _extract_trial_results(self, trial, trial_number):
        return super()._extract_trial_results(trial, trial_number)

    def _analyze_trial_results(self, results):
        super()._analyze_trial_results(results)
        self.analyzed_results.append(results)

    def _final_report(self):
        self.final_report_called = True


class SerialParallel:
    """Stands in for joblib.Parallel, running the tasks in this process."""

    instances = []

    def __init__(self, n_jobs):
        self.n_jobs = n_jobs
        SerialParallel.instances.append(self)

    def __call__(self, tasks):
        return [function(*args, **kwargs) for function, args, kwargs in tasks]


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config():
    config = Config()
    config.population_size           = 6
    config.max_number_generations    = 2
    config.fitness_termination_check = True
    config.fitness_criterion         = "max"
    config.fitness_threshold         = 5.0
    return config


# ============================================================================
# Test initialization and reset
# ============================================================================

class TestExperimentInit:
    """Test Experiment construction."""

    def test_cannot_instantiate_abstract_class(self, config):
        with pytest.raises(TypeError):
            Experiment(ConcreteTrial, 3, config)

    def test_init_stores_arguments(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 3, config, fitness=2)
        assert experiment._trial_class is ConcreteTrial
        assert experiment._num_trials == 3
        assert experiment._config is config
        assert experiment._trial_kwargs == {"fitness": 2}

    def test_reset_clears_statistics(self, config):
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)
        experiment._trial_counter   = 5
        experiment._success_counter = 2
        experiment._max_fitness     = [1.0, 2.0]
        experiment._reset()
        assert experiment._trial_counter == 0
        assert experiment._success_counter == 0
        assert experiment._max_fitness == []


# ============================================================================
# Test running trials
# ============================================================================

class TestExperimentRun:
    """Test Experiment.run()."""

    def test_serial_execution(self, config):
        """Test that all trials run, one after the other."""
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)
        experiment.run()

        assert experiment.reset_called
        assert experiment._trial_counter == 3
        assert [n for _, n in experiment.prepare_trial_calls] == [1, 2, 3]
        assert [r["trial_number"] for r in experiment.analyzed_results] == [1, 2, 3]
        assert experiment.final_report_called

    def test_trials_are_quiet(self, config):
        """Test that trials run by an experiment suppress their output."""
        experiment = ConcreteExperiment(ConcreteTrial, 1, config)
        experiment.run()
        trial, _ = experiment.prepare_trial_calls[0]
        assert trial._suppress_output

    def test_successful_trials(self, config):
        """Test the statistics gathered from successful trials."""
        experiment = ConcreteExperiment(ConcreteTrial, 2, config)
        experiment.run()

        assert experiment._success_counter == 2
        assert experiment._number_generations == [0, 0]
        assert experiment._max_fitness == [10.0, 10.0]
        assert experiment._number_hidden == [0, 0]
        assert experiment._number_links == [3, 3]

    def test_failed_trials(self, config):
        """Test that failed trials are not counted as successes."""
        experiment = ConcreteExperiment(ConcreteTrial, 2, config, fitness=1)
        experiment.run()

        assert experiment._success_counter == 0
        assert experiment._max_fitness == []
        for results in experiment.analyzed_results:
            assert results["success"] is False
            assert results["number_generations"] == 2

    def test_extract_trial_results_keys(self, config):
        """Test the contents of a trial's results."""
        experiment = ConcreteExperiment(ConcreteTrial, 1, config)
        experiment.run()
        assert set(experiment.analyzed_results[0]) == {"trial_number", "number_generations", "max_fitness",
                                                       "number_hidden", "number_links", "success"}

    def test_parallel_execution(self, config):
        """Test that trials are handed to joblib when more than one job is requested."""
        SerialParallel.instances = []
        experiment = ConcreteExperiment(ConcreteTrial, 3, config)

        with patch('agentneat.run.experiment.Parallel', SerialParallel):
            experiment.run(num_jobs=2)

        assert len(SerialParallel.instances) == 1
        assert SerialParallel.instances[0].n_jobs == 2
        assert experiment._trial_counter == 3
        assert experiment._success_counter == 3
        assert [r["trial_number"] for r in experiment.analyzed_results] == [1, 2, 3]
