"""
HyperNEAT Genome Module

This module implements the HyperGenome class, the indirect encoding
used by HyperNEAT: a CPPN together with the substrate it paints.

Classes:
    HyperGenome: CPPN genome expressed through a fixed substrate
"""

from agentneat.genotype              import Genome, GenomeBase, InnovationRegistry
from agentneat.hyperneat.substrate   import Substrate
from agentneat.run.config            import Config

class HyperGenome(GenomeBase):
    """
    An indirectly encoded genome.

    The evolving part is the CPPN, an ordinary Genome with 4 inputs
    (the coordinates of two grid points) and 1 output (the weight of
    the link between them). The agent's behaviour comes from the
    substrate, whose weights are repainted from the CPPN every time
    the CPPN changes.

    Speciation compares CPPNs, and the fitness reported for the agent is
    stored on the CPPN.

    Public Attributes:
        cppn:      The evolving Genome
        substrate: The Substrate painted by the CPPN

    Public Properties:
        fitness:               The CPPN's fitness
        compatibility_network: The CPPN

    Public Methods:
        evaluate(inputs):     Feed an input vector through the substrate
        mutate():             Mutate the CPPN and repaint the substrate
        crossover(recessive): Cross the CPPNs and paint a new substrate
        clone():              Independent copy of CPPN and substrate
    """

    CPPN_INPUTS  = 4
    CPPN_OUTPUTS = 1

    def __init__(self,
                 config     : Config,
                 registry   : InnovationRegistry,
                 num_inputs : int | None = None,
                 num_outputs: int | None = None):
        """
        Create a random CPPN and paint a new substrate with it.

        Parameters:
            config:      Stores configuration parameters
            registry:    Innovation registry shared by all CPPNs of this lineage
            num_inputs:  Number of substrate inputs (default: 'config.num_inputs')
            num_outputs: Number of substrate outputs (default: 'config.num_outputs')
        """
        num_inputs  = config.num_inputs  if num_inputs  is None else num_inputs
        num_outputs = config.num_outputs if num_outputs is None else num_outputs

        self.cppn      = Genome(config, registry, self.CPPN_INPUTS, self.CPPN_OUTPUTS,
                                activation=config.cppn_activation_initial)
        self.substrate = Substrate(num_inputs, num_outputs, config)
        self.substrate.paint(self.cppn)

    @classmethod
    def _from_parts(cls, cppn: Genome, substrate: Substrate) -> 'HyperGenome':
        genome = cls.__new__(cls)
        genome.cppn      = cppn
        genome.substrate = substrate
        return genome

    @property
    def fitness(self) -> float:
        return self.cppn.fitness

    @fitness.setter
    def fitness(self, value: float) -> None:
        self.cppn.fitness = value

    @property
    def compatibility_network(self) -> Genome:
        return self.cppn

    def evaluate(self, inputs) -> list[float]:
        return self.substrate.evaluate(inputs)

    def mutate(self) -> None:
        self.cppn.mutate()
        self.substrate.paint(self.cppn)

    def crossover(self, recessive: 'HyperGenome') -> 'HyperGenome':
        cppn      = self.cppn.crossover(recessive.cppn)
        substrate = self.substrate.copy()
        substrate.paint(cppn)
        return self._from_parts(cppn, substrate)

    def clone(self) -> 'HyperGenome':
        return self._from_parts(self.cppn.clone(), self.substrate.copy())
