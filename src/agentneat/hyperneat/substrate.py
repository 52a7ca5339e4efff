"""
HyperNEAT Substrate Module

This module implements the Substrate class: a fixed-topology network
whose link weights are painted by a CPPN rather than evolved directly.

Classes:
    Substrate: Three-layer lattice of nodes with CPPN-generated weights
"""

import copy
import numpy as np
from typing import TYPE_CHECKING

from agentneat.activations import apply_activation, parse_activation
from agentneat.run.config  import Config
if TYPE_CHECKING:
    from agentneat.genotype import Genome

class Substrate:
    """
    A fixed three-layer network (input, sandwich, output), each layer a
    square grid of N x N nodes.

    Every node of a layer is linked to every node of the next layer. The
    weights live in one 4-D array, 'weights[ix, iy, ox, oy]', which holds
    the weight of both the input(ix, iy) -> sandwich(ox, oy) link and the
    sandwich(ix, iy) -> output(ox, oy) link. All weights start at zero and
    are generated by 'paint()', which queries a CPPN once per pair of grid
    coordinates.

    Inputs fill the input layer in row-major order starting at (0, 0);
    outputs are read from the last row of the output layer.

    Public Attributes:
        size:        Side of each square layer
        num_inputs:  Number of values fed to the input layer
        num_outputs: Number of values read from the output layer
        weights:     4-D array of link weights

    Public Methods:
        coordinates():            Grid coordinates, normalized to [-1, 1]
        set_link_weight(...):     Set the weight of one pair of links
        paint(cppn):              Regenerate all weights from a CPPN
        evaluate(inputs):         Feed an input vector through the substrate
        copy():                   Independent copy of the substrate
    """

    def __init__(self, num_inputs: int, num_outputs: int, config: Config):
        """
        Parameters:
            num_inputs:  Number of values fed to the input layer (at most N*N)
            num_outputs: Number of values read from the output layer (at most N)
            config:      Stores configuration parameters
        """
        size = config.substrate_size
        if num_inputs > size * size:
            raise ValueError(f"A substrate of size {size} cannot hold {num_inputs} inputs")
        if num_outputs > size:
            raise ValueError(f"A substrate of size {size} cannot hold {num_outputs} outputs")

        self.size       : int        = size
        self.num_inputs : int        = num_inputs
        self.num_outputs: int        = num_outputs
        self.weights    : np.ndarray = np.zeros((size, size, size, size))

        self._activation = parse_activation(config.substrate_activation)
        self._slope      = config.prelu_slope_init
        self._threshold  = config.substrate_weight_threshold

    def coordinates(self) -> np.ndarray:
        """
        The coordinate of each grid index along one axis, evenly spaced in [-1, 1].
        """
        if self.size == 1:
            return np.zeros(1)
        return np.linspace(-1.0, 1.0, self.size)

    def set_link_weight(self, in_x: int, in_y: int, out_x: int, out_y: int, weight: float) -> None:
        """
        Set the weight of the links (in_x, in_y) -> (out_x, out_y) between
        the input and sandwich layers and between the sandwich and output layers.
        """
        self.weights[in_x, in_y, out_x, out_y] = weight

    def paint(self, cppn: 'Genome') -> None:
        """
        Regenerate every weight of the substrate from a CPPN.

        The CPPN is evaluated on (x1, y1, x2, y2) for every pair of grid
        positions; outputs smaller in magnitude than the weight threshold
        are written as 0. This has to be re-run after every change to the CPPN.

        Parameters:
            cppn: a genome with 4 inputs and 1 output
        """
        coords = self.coordinates()
        for in_x, x1 in enumerate(coords):
            for in_y, y1 in enumerate(coords):
                for out_x, x2 in enumerate(coords):
                    for out_y, y2 in enumerate(coords):
                        weight = cppn.evaluate([x1, y1, x2, y2])[0]
                        if abs(weight) < self._threshold:
                            weight = 0.0
                        self.set_link_weight(in_x, in_y, out_x, out_y, weight)

    def evaluate(self, inputs) -> list[float]:
        """
        Feed an input vector through the substrate.

        Input nodes pass their value unchanged; sandwich and output
        nodes apply the substrate's activation function.

        Parameters:
            inputs: sequence of 'num_inputs' values

        Returns:
            The values of the first 'num_outputs' nodes in the last row of the output layer
        """
        if len(inputs) != self.num_inputs:
            raise ValueError(f"Expected {self.num_inputs} inputs, got {len(inputs)}")

        input_layer = np.zeros(self.size * self.size)
        input_layer[:self.num_inputs] = inputs
        input_layer = input_layer.reshape(self.size, self.size)

        sandwich_layer = np.tensordot(input_layer, self.weights, axes=2)
        sandwich_layer = apply_activation(self._activation, sandwich_layer, self._slope)

        output_layer = np.tensordot(sandwich_layer, self.weights, axes=2)
        output_layer = apply_activation(self._activation, output_layer, self._slope)

        return output_layer[self.size - 1, :self.num_outputs].tolist()

    def copy(self) -> 'Substrate':
        substrate = copy.copy(self)
        substrate.weights = self.weights.copy()
        return substrate
