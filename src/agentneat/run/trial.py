"""
Trial Module

This module defines the abstract base class for trials.

A trial represents one independent run of the algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached.
"""

import numpy as np
import random
from abc             import ABC, abstractmethod
from collections.abc import Hashable

from agentneat.pool       import Population
from agentneat.run.config import Config

class Trial(ABC):
    """
    Abstract base class for implementing a trial.

    A trial represents one independent run, evolving a population through
    generations until a solution is found or the maximum number of generations
    is reached. Every trial builds its own population, and with it its own
    innovation registry and color pool, so trials never share state.

    Each generation is one episode: the subclass lets the agents act in its
    environment (calling 'population.evaluate' for their actions) and reports
    the score of each agent with 'population.report_fitness'.

    Subclasses must implement:
    - _reset(): Reset trial-specific state and call super()._reset()
    - _run_episode(population): Simulate one episode and report fitness for every agent
    - _report_progress(): Display progress after each generation
    - _final_report(): Display final results

    Subclasses can override:
    - _agent_ids(): The IDs of the agents (default: 0 .. population_size - 1)
    - _terminate(): Custom termination logic (default: max generations + fitness threshold)

    Public Methods:
        run(): Execute a complete trial
    """

    def __init__(self, config: Config, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
                             (useful when running multiple trials in experiments)
        """
        self._config            : Config            = config
        self._generation_counter: int               = 0
        self._population        : Population | None = None
        self._suppress_output   : bool              = suppress_output
        self.failed             : bool              = True

    def run(self) -> None:
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population
        self._population = Population(self._config, self._agent_ids())

        # Play the first episode with the initial population
        self._run_episode(self._population)

        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            self._population.advance_generation()
            self._run_episode(self._population)

            if not self._suppress_output:
                self._report_progress()

        if not self._suppress_output:
            self._final_report()

    def _agent_ids(self) -> list[Hashable]:
        return list(range(self._config.population_size))

    @abstractmethod
    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses should call super()._reset() and then
        initialize their problem-specific data.
        """
        if self._config.random_seed is not None:
            random.seed(self._config.random_seed)
            np.random.seed(self._config.random_seed)
        self._generation_counter = 0
        self.failed = True

    @abstractmethod
    def _run_episode(self, population: Population):
        """
        Simulate one episode and report the fitness of every agent.

        IMPORTANT: The fitness must be a positive number (or zero).

        Parameters:
            population: the population whose agents are simulated
        """
        pass

    @abstractmethod
    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials, as part of an experiment.
        """
        pass

    @abstractmethod
    def _final_report(self):
        """
        Produce final report at the end of the trial.
        """
        pass

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if a given measure of
        population fitness has reached a given threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            if self._config.fitness_criterion == "max":
                overall_fitness = self._population.max_fitness
            elif self._config.fitness_criterion == "mean":
                overall_fitness = self._population.average_fitness
            else:
                raise RuntimeError("bad 'fitness_criterion' in configuration file")

            # Compare a measure of population fitness (max, mean) against a threshold
            success   = overall_fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
