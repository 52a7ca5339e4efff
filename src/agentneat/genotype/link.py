"""
NEAT Link Module

This module implements the Link class, the gene describing
a weighted, directed edge between two nodes of a genome.

Classes:
    Link: Gene encoding a weighted link between nodes
"""

import numpy as np
import random
from agentneat.run.config import Config

class Link:
    """
    A gene describing a weighted link between two nodes in a Neural Network.

    Links are identified by their innovation number, which is the same for
    every genome holding a link between the same pair of node IDs. Two links
    with the same innovation number are the same gene for the purposes of
    crossover and compatibility distance.

    Disabled links are kept in the genome (they no longer carry a signal),
    which preserves the history needed to compare genomes.

    Public Attributes:
        innovation: Innovation number uniquely identifying this link
        source_id:  ID of the source node
        dest_id:    ID of the destination node
        weight:     Weight of the link
        enabled:    Whether this link is active in the network

    Public Methods:
        mutate(config): Replace or perturb the weight
        copy():         Return an independent copy of the link
    """

    __slots__ = ('innovation', 'source_id', 'dest_id', 'weight', 'enabled')

    def __init__(self,
                 innovation: int,
                 source_id : int,
                 dest_id   : int,
                 weight    : float,
                 enabled   : bool = True):
        self.innovation: int   = innovation
        self.source_id : int   = source_id
        self.dest_id   : int   = dest_id
        self.weight    : float = weight
        self.enabled   : bool  = enabled

    def mutate(self, config: Config) -> None:
        """
        Mutate the weight of the link.

        With probability 'weight_replace_prob' the weight is replaced by
        a new value drawn uniformly from [min_weight, max_weight];
        otherwise it is perturbed by a zero-centered Gaussian value and
        clipped to the same range.

        Parameters:
            config: Stores configuration parameters
        """
        if random.random() < config.weight_replace_prob:
            self.weight = random.uniform(config.min_weight, config.max_weight)
        else:
            new_weight  = self.weight + random.gauss(0, config.weight_perturb_strength)
            self.weight = float(np.maximum(config.min_weight, np.minimum(config.max_weight, new_weight)))  # Clip it

    def copy(self) -> 'Link':
        return Link(self.innovation, self.source_id, self.dest_id, self.weight, self.enabled)

    def __repr__(self):
        return (f"Link(innovation={self.innovation:03d}, source_id={self.source_id:+03d}, "
                f"dest_id={self.dest_id:+03d}, weight={self.weight:+.6f}, enabled={self.enabled})")

    def __str__(self):
        s  = f"[{self.innovation:03d},{'E' if self.enabled else 'D'},"
        s += f"{self.source_id:02d}=>{self.dest_id:02d},{self.weight:+.02f}]"
        return s
