"""
HyperNEAT Package

This package implements the indirect encoding: a CPPN (an ordinary
genome) paints the link weights of a fixed three-layer substrate.

Modules:
    substrate:    Substrate class
    hyper_genome: HyperGenome class

Exported Classes:
    Substrate:   Fixed-topology lattice with CPPN-generated weights
    HyperGenome: CPPN genome expressed through a substrate
"""

from agentneat.hyperneat.hyper_genome import HyperGenome
from agentneat.hyperneat.substrate    import Substrate

__all__ = ['HyperGenome',
           'Substrate']
