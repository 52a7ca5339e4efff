"""
Experiment Module

This module defines the abstract base class for experiments with built-in
support for CPU-based parallelization using joblib.

An experiment represents a collection of multiple independent trials (runs),
used to gather statistical data about the algorithm's performance.
"""

from abc    import ABC, abstractmethod
from joblib import Parallel, delayed
from sys    import stdout
from typing import Type

from agentneat.run.config import Config
from agentneat.run.trial  import Trial

class Experiment(ABC):
    """
    Abstract base class for implementing an experiment.

    An experiment runs many independent trials on the same problem and
    aggregates their results: success rate, length of successful trials,
    fitness reached and size of the fittest network.

    Trials share no state (each one owns its population, innovation registry
    and color pool), so they can run in parallel processes.

    Subclasses must implement:
    - _reset(): Reset experiment-specific state and call super()._reset()
    - _prepare_trial(trial, trial_number): Configure each trial before execution
    - _extract_trial_results(trial, trial_number): Extract results after trial completes
    - _analyze_trial_results(results): Process and display individual trial results
    - _final_report(): Produce aggregated statistical report for entire experiment

    Public Methods:
        run(num_jobs=1): Execute the complete experiment

    Parallelization:
         1:  Serial trial execution (no parallelization)
        >1:  Use specified number of parallel processes for trials
        -1:  Use all available CPU cores for trials
    """

    def __init__(self, trial_class: Type[Trial], num_trials: int, config: Config,
                 *args, **kwargs):
        """
        Parameters:
            trial_class: the class describing the trials in this experiment
            num_trials:  number of trials in this experiment
            config:      configuration parameters
            *args:       positional arguments to pass to trial class constructor
            **kwargs:    keyword arguments to pass to trial class constructor
        """
        self._num_trials : int         = num_trials
        self._trial_class: Type[Trial] = trial_class
        self._config     : Config      = config
        self._trial_args               = args
        self._trial_kwargs             = kwargs

        # progress counters
        self._trial_counter  : int = 0  # how many trials we've run so far
        self._success_counter: int = 0  # how many trials found an acceptable solution

        # for each successful trial, some stats
        self._number_generations: list[int]   = []  # length of trial, in generations
        self._max_fitness       : list[float] = []  # max fitness achieved in trial
        self._number_hidden     : list[int]   = []  # hidden nodes of the fittest network
        self._number_links      : list[int]   = []  # *enabled* links of the fittest network

    @abstractmethod
    def _reset(self):
        """
        Reset experiment state before starting a new run.
        """
        self._trial_counter      = 0
        self._success_counter    = 0
        self._number_generations = []
        self._max_fitness        = []
        self._number_hidden      = []
        self._number_links       = []

    def run(self, num_jobs: int = 1):
        """
        Run the experiment.

        Parameters:
            num_jobs: Number of parallel processes for running trials
                       1 = serial trial execution (default)
                      -1 = use all available CPU cores
                      >1 = use specified number of processes
        """
        self._reset()

        if num_jobs == 1:
            results = []
            while self._trial_counter < self._num_trials:
                self._trial_counter += 1
                results.append(self._run_trial(self._trial_counter))
        else:
            results = Parallel(num_jobs)(
                delayed(self._run_trial)(n) for n in range(1, self._num_trials + 1)
            )
            self._trial_counter = self._num_trials

        # Analyze and display data for each trial, then
        # assemble all the data gathered in a final report
        for r in results:
            self._analyze_trial_results(r)
        self._final_report()

    def _run_trial(self, trial_number: int) -> dict:
        """
        Prepare, run, analyze one trial.
        Returns the relevant data generated by the trial.
        """
        trial = self._trial_class(*self._trial_args, config=self._config, suppress_output=True, **self._trial_kwargs)
        self._prepare_trial(trial, trial_number)
        trial.run()
        return self._extract_trial_results(trial, trial_number)

    @abstractmethod
    def _prepare_trial(self, trial: Trial, trial_number: int):
        """
        Configure the experiment in preparation for the next run.
        The default implementation prints a progress report.
        """
        s = f"Starting trial {trial_number:03d} of {self._num_trials}..."
        stdout.write(s + '\r')
        stdout.flush()

    @abstractmethod
    def _extract_trial_results(self, trial: Trial, trial_number: int) -> dict:
        """
        Extract relevant results at the end of a trial.
        Derived implementations MUST call this method.
        """
        population = trial._population
        network    = population.genome(population.get_fittest_agent()).compatibility_network

        return {"trial_number"      : trial_number,
                "number_generations": trial._generation_counter,
                "max_fitness"       : population.max_fitness,
                "number_hidden"     : network.number_hidden,
                "number_links"      : network.number_links_enabled,
                "success"           : not trial.failed}

    @abstractmethod
    def _analyze_trial_results(self, results: dict):
        """
        Update the statistics with the results of one trial.
        Derived implementations MUST call this method.
        """
        if results["success"]:
            self._success_counter += 1
            self._number_generations.append(results["number_generations"])
            self._max_fitness.append(results["max_fitness"])
            self._number_hidden.append(results["number_hidden"])
            self._number_links.append(results["number_links"])

    @abstractmethod
    def _final_report(self):
        """
        Produce the final report, aggregating the data obtained from each trial.
        """
        pass
