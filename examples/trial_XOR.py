"""
XOR Problem Implementation

This module uses the XOR (exclusive OR) problem as a minimal benchmark
for the NEAT population. Every agent is handed the four XOR cases as
four vision vectors; its score is how close its actions come to the
expected outputs.

The XOR Problem:
    Input (0, 0) → Output 0
    Input (0, 1) → Output 1
    Input (1, 0) → Output 1
    Input (1, 1) → Output 0

    XOR is not linearly separable, so a network needs at least one
    hidden node to solve it.

Fitness Function:
    Fitness = round(100 * (4.0 - Σ(output - target)²))

    Fitness is reported as an integer score, like a game would report it;
    the maximum of 400 is reached when all four cases are exact.

Classes:
    Trial_XOR:      Trial for solving XOR
    Experiment_XOR: Multi-trial experiment for XOR with statistical analysis

Usage:
    python examples/trial_XOR.py
"""

from pathlib    import Path
from statistics import mean

from agentneat     import Config, Experiment, Trial, visualize
from agentneat.pool import Population

XOR_INPUTS  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
XOR_OUTPUTS = [0.0, 1.0, 1.0, 0.0]

class Trial_XOR(Trial):
    """
    Trial evolving networks that compute the XOR boolean function.

    Implemented Methods:
        _run_episode(population): Test every agent on the 4 XOR cases
        _report_progress():       Display generation statistics and XOR truth table
        _final_report():          Visualize the evolved network structure
    """

    def _reset(self):
        super()._reset()

    def _run_episode(self, population: Population):
        for agent_id in population.agent_ids:
            error = 0.0
            for inputs, target in zip(XOR_INPUTS, XOR_OUTPUTS):
                output = population.evaluate(agent_id, inputs)[0]
                error += (output - target) ** 2
            population.report_fitness(agent_id, round(100 * (4.0 - error)))

    def _report_progress(self):
        fittest_id = self._population.get_fittest_agent()
        fittest    = self._population.genome(fittest_id)

        s  = f"===============\n"
        s += f"GENERATION {self._generation_counter:04d}\n"
        s += f"population size = {self._population.size}\n"
        s += f"number species  = {self._population.number_species}\n"
        s += f"maximum fitness = {fittest.fitness:.0f}\n"
        s += '\n'
        s += str(fittest)
        s += '\n\n'

        s += "input         output   target\n"
        s += "-----------------------------\n"
        for inputs, target in zip(XOR_INPUTS, XOR_OUTPUTS):
            output = fittest.evaluate(inputs)[0]
            s += f"{inputs} -> {output:.4f}    {target}\n"
        print(s)

    def _final_report(self):
        fittest = self._population.genome(self._population.get_fittest_agent())
        try:
            visualize(fittest, view=True)
            print("Network visualization saved as 'Digraph.gv.pdf'")
        except Exception as e:
            print(f"Could not visualize network: {e}")

class Experiment_XOR(Experiment):

    def __init__(self, num_trials: int, config: Config):
        super().__init__(Trial_XOR, num_trials, config)

    def _reset(self):
        super()._reset()

    def _prepare_trial(self, trial: Trial_XOR, trial_number: int):
        super()._prepare_trial(trial, trial_number)

    def _extract_trial_results(self, trial: Trial_XOR, trial_number: int) -> dict:
        return super()._extract_trial_results(trial, trial_number)

    def _analyze_trial_results(self, results: dict):
        super()._analyze_trial_results(results)

        s  = f"Trial {results['trial_number']:03d}: "
        s += f"max fitness={results['max_fitness']:.0f}, "
        s += f"hidden={results['number_hidden']:2}, "
        s += f"links={results['number_links']:3}, "
        s += f"generations={results['number_generations']:3} "
        s += "[SUCCESS]" if results['success'] else "[FAILED]"
        print(s)

    def _final_report(self):
        success_rate = self._success_counter / self._trial_counter

        s  = "\nSUMMARY:\n"
        s += f"Total trials:         = {self._trial_counter}\n"
        s += f"Success rate          = {100*success_rate:.0f}%\n"
        if self._number_hidden:
            s += f"Avg # hidden nodes    = {mean(self._number_hidden):.2f}\n"
            s += f"Avg # enabled links   = {mean(self._number_links):.2f}\n"
            s += f"Avg # generations     = {mean(self._number_generations):.0f}\n"
            s += f"Avg max fitness       = {mean(self._max_fitness):.2f}\n"
        else:
            s += "No successful trials - cannot compute statistics\n"
        print(s)

if __name__ == "__main__":
    config = Config(str(Path(__file__).parent / "config_xor.ini"))
    Trial_XOR(config).run()
