"""
Chase Game Implementation (HyperNEAT)

A small game in the shape of the environments the population is meant for:
every agent starts at the origin of a plane and must reach a target. At each
tick the agent sees the normalized direction to the target (its vision vector)
and picks one of four moves (up, down, left, right) from its action vector.

The agents' networks are HyperNEAT substrates painted by evolving CPPNs.
Each species is given a display color, which a renderer would use to draw
the agents; here the colors are only listed in the progress report.

Fitness Function:
    Fitness = max(0, round(100 - 10 * final distance to the target))

Classes:
    Trial_Chase: Trial evolving agents that chase a target

Usage:
    python examples/trial_chase.py
"""

import logging
import math
import random
from pathlib import Path

from agentneat      import Config, Trial
from agentneat.pool import Population

MOVES     = [(0.0, 1.0), (0.0, -1.0), (-1.0, 0.0), (1.0, 0.0)]
NUM_TICKS = 30
STEP      = 0.5

class Trial_Chase(Trial):
    """
    Trial evolving agents that move towards a target.

    Implemented Methods:
        _run_episode(population): Play one game per agent
        _report_progress():       Display generation statistics and species colors
        _final_report():          Display the fitness history
    """

    def _reset(self):
        super()._reset()
        self._target = (random.uniform(-8, 8), random.uniform(-8, 8))

    def _run_episode(self, population: Population):
        for agent_id in population.agent_ids:
            x, y = 0.0, 0.0
            for _ in range(NUM_TICKS):
                dx, dy   = self._target[0] - x, self._target[1] - y
                distance = math.hypot(dx, dy) or 1.0
                action   = population.evaluate(agent_id, [dx / distance, dy / distance])
                move     = MOVES[max(range(len(action)), key=action.__getitem__)]
                x, y     = x + STEP * move[0], y + STEP * move[1]

            final_distance = math.hypot(self._target[0] - x, self._target[1] - y)
            population.report_fitness(agent_id, max(0, round(100 - 10 * final_distance)))

    def _report_progress(self):
        colors = {self._population.assign_display_color(agent_id) for agent_id in self._population.agent_ids}
        colors.discard(None)

        s  = f"GENERATION {self._generation_counter:04d}: "
        s += f"max fitness = {self._population.max_fitness:.0f}, "
        s += f"average fitness = {self._population.average_fitness:.1f}, "
        s += f"species = {self._population.number_species}, "
        s += f"colors = {sorted(colors)}"
        print(s)

    def _final_report(self):
        print("\ngeneration  average  max  species")
        for stats in self._population.history:
            print(f"{stats['generation']:10d}  {stats['average_fitness']:7.1f}  "
                  f"{stats['max_fitness']:3.0f}  {stats['number_species']:7d}")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    config = Config(str(Path(__file__).parent / "config_chase.ini"))
    Trial_Chase(config).run()
