"""
NEAT Genome Module

This module implements the Genome class, the direct encoding of a
feed-forward neural network evolved by NEAT.

Classes:
    Genome: Complete genome representing a layered neural network
"""

import math
import random
from collections import Counter

from agentneat.activations                   import ActivationType, parse_activation
from agentneat.genotype.genome_base          import GenomeBase
from agentneat.genotype.innovation_registry  import InnovationRegistry
from agentneat.genotype.link                 import Link
from agentneat.genotype.node                 import Node, NodeType
from agentneat.run.config                    import Config

# The bias node always has this ID
BIAS_ID = -1

class Genome(GenomeBase):
    """
    A NEAT genome representing a layered neural network as a collection of nodes and links.

    The genome owns its nodes (input, bias, output and hidden) and its links.
    Nodes live in a table keyed by node ID; links live in a list and nodes
    refer to their outgoing links by list index. Nothing points from one
    genome into another, so cloning is a flat copy of nodes and links.

    Every node sits on a layer. Input and bias nodes are on layer 0, output
    nodes are on the highest layer ('num_layers') and hidden nodes are placed
    in between. Links always go from a lower layer to a higher one, which makes
    a single pass in layer order enough to evaluate the network.

    A new genome links every input node and the bias node to every output node,
    with weights drawn uniformly from [min_weight, max_weight].

    Node numbering convention:
        - Bias node:    -1
        - Input nodes:  [0, num_inputs)
        - Output nodes: [num_inputs, num_inputs + num_outputs)
        - Hidden nodes: [num_inputs + num_outputs, ...), in order of creation

    Public Attributes:
        nodes:        Dictionary mapping node IDs to Node objects
        links:        List of all links (enabled and disabled)
        input_nodes:  List of the input nodes
        output_nodes: List of the output nodes
        hidden_nodes: List of the hidden nodes, in order of creation
        bias_node:    The bias node (constant output of 1)
        num_layers:   Index of the output layer
        num_nodes:    Number of nodes, bias included
        fitness:      Fitness reported for this genome

    Public Methods:
        evaluate(inputs):       Feed an input vector through the network
        mutate():               Apply all mutation operators stochastically
        is_bad_link(a, b):      Whether a link between two nodes is not allowed
        is_fully_connected():   Whether no further link can be added
        distance(other):        Compatibility distance to another genome
        is_compatible(other):   Whether another genome belongs to the same species
        crossover(recessive):   Create offspring with this genome as the dominant parent
        clone():                Structural copy of this genome

    Static Methods:
        show_aligned(genome1, genome2): Print two genomes with aligned links for comparison
    """

    def __init__(self,
                 config     : Config,
                 registry   : InnovationRegistry,
                 num_inputs : int | None = None,
                 num_outputs: int | None = None,
                 activation : str | ActivationType | None = None):
        """
        Initialize a fully connected genome with no hidden nodes.

        Parameters:
            config:      Stores configuration parameters
            registry:    Innovation registry shared by all genomes of this lineage
            num_inputs:  Number of input nodes (default: 'config.num_inputs')
            num_outputs: Number of output nodes (default: 'config.num_outputs')
            activation:  Activation for hidden and output nodes, or "random" to draw
                         one per node (default: 'config.activation_initial')
        """
        self._config  : Config             = config
        self._registry: InnovationRegistry = registry
        self._activation                   = config.activation_initial if activation is None else activation

        num_inputs  = config.num_inputs  if num_inputs  is None else num_inputs
        num_outputs = config.num_outputs if num_outputs is None else num_outputs

        self.nodes       : dict[int, Node]     = {}
        self.links       : list[Link]          = []
        self._connected  : set[tuple[int, int]] = set()   # (source ID, destination ID) of every link
        self.num_layers  : int                 = 1
        self.num_nodes   : int                 = num_inputs + num_outputs + 1
        self.fitness     : float               = 0.0

        self.input_nodes : list[Node] = [Node(i, NodeType.INPUT, 0) for i in range(num_inputs)]
        self.output_nodes: list[Node] = [self._new_node(num_inputs + i, NodeType.OUTPUT, 1)
                                         for i in range(num_outputs)]
        self.hidden_nodes: list[Node] = []
        self.bias_node   : Node       = Node(BIAS_ID, NodeType.BIAS, 0)

        for node in self.input_nodes + [self.bias_node] + self.output_nodes:
            self.nodes[node.id] = node

        # Connect all input nodes and the bias node to all output nodes
        for source in self.input_nodes + [self.bias_node]:
            for dest in self.output_nodes:
                self._add_link(source.id, dest.id, self._random_weight())

    def _new_node(self, node_id: int, node_type: NodeType, layer: int) -> Node:
        """
        Create a hidden or output node with this genome's activation policy.
        """
        return Node(node_id, node_type, layer,
                    activation = parse_activation(self._activation),
                    slope      = self._config.prelu_slope_init)

    def _random_weight(self) -> float:
        return random.uniform(self._config.min_weight, self._config.max_weight)

    def _add_link(self, source_id: int, dest_id: int, weight: float) -> Link:
        """
        Append a new enabled link, registering its innovation number.
        """
        innovation = self._registry.get_innovation_number(source_id, dest_id)
        link       = Link(innovation, source_id, dest_id, weight)
        self.links.append(link)
        self.nodes[source_id].outgoing.append(len(self.links) - 1)
        self._connected.add((source_id, dest_id))
        return link

    @property
    def compatibility_network(self) -> 'Genome':
        return self

    @property
    def number_hidden(self) -> int:
        return len(self.hidden_nodes)

    @property
    def number_links_enabled(self) -> int:
        return sum(1 for link in self.links if link.enabled)

    def evaluation_order(self) -> list[Node]:
        """
        The order in which nodes are activated: inputs, bias,
        hidden nodes by ascending layer, outputs.
        """
        hidden = sorted(self.hidden_nodes, key=lambda node: node.layer)
        return self.input_nodes + [self.bias_node] + hidden + self.output_nodes

    def evaluate(self, inputs) -> list[float]:
        """
        Feed an input vector through the network.

        Each node is activated in layer order and then pushes 'weight * output'
        into the accumulated input of the destination of each of its enabled
        outgoing links. All accumulated inputs are reset once the outputs have
        been read, so evaluating the same inputs twice gives the same outputs.

        Parameters:
            inputs: sequence of values, one per input node

        Returns:
            The values of the output nodes
        """
        if len(inputs) != len(self.input_nodes):
            raise ValueError(f"Expected {len(self.input_nodes)} inputs, got {len(inputs)}")

        for node, value in zip(self.input_nodes, inputs):
            node.output_value = float(value)
        self.bias_node.output_value = 1.0

        for node in self.evaluation_order():
            output = node.activate()
            for index in node.outgoing:
                link = self.links[index]
                if link.enabled:
                    self.nodes[link.dest_id].input_value += link.weight * output

        outputs = [node.output_value for node in self.output_nodes]

        for node in self.nodes.values():
            node.input_value = 0.0

        return outputs

    def mutate(self) -> None:
        """
        Apply to the current genome all possible mutation operations.

        The list of possible mutations is:
          + change the weight of each link
          + add a link
          + add a node
          + nudge the slope of a PRELU hidden node
        Each mutation occurs randomly, and independently, with a given probability.
        """
        for link in self.links:
            if random.random() < self._config.weight_mutate_prob:
                link.mutate(self._config)

        if random.random() < self._config.connection_add_probability:
            self._mutate_add_link()

        if random.random() < self._config.node_add_probability:
            self._mutate_add_node()

        if random.random() < self._config.slope_mutate_prob:
            self._mutate_slope()

    def is_bad_link(self, node_a: Node, node_b: Node) -> bool:
        """
        Check whether a link between two nodes is not allowed, either because
        they sit on the same layer or because they are already connected
        (in either direction).
        """
        return node_a.layer == node_b.layer              or \
               (node_a.id, node_b.id) in self._connected or \
               (node_b.id, node_a.id) in self._connected

    def is_fully_connected(self) -> bool:
        """
        Check whether every pair of nodes on different layers is already connected.
        """
        layer_sizes = Counter(node.layer for node in self.nodes.values())
        num_nodes   = len(self.nodes)
        max_links   = (num_nodes * num_nodes - sum(size * size for size in layer_sizes.values())) // 2
        return len(self.links) >= max_links

    def _mutate_add_link(self) -> None:
        """
        Add a new link between two unconnected nodes on different layers.

        Candidate pairs are drawn at random until a valid one comes up; the link
        always goes from the lower layer to the higher one. Nothing happens if
        the genome is already fully connected.
        """
        if self.is_fully_connected():
            return

        nodes = list(self.nodes.values())
        while True:
            node_a = random.choice(nodes)
            node_b = random.choice(nodes)
            if not self.is_bad_link(node_a, node_b):
                break

        if node_a.layer > node_b.layer:
            node_a, node_b = node_b, node_a

        self._add_link(node_a.id, node_b.id, self._random_weight())

    def _mutate_add_node(self) -> None:
        """
        Split an existing link by adding a new hidden node.

        The link to split is chosen at random among the enabled links that do
        not start at the bias node; it is disabled and replaced by:
          + old source -> new node (weight 1)
          + new node   -> old destination (weight of the old link)
          + bias       -> new node (weight 0)
        The new node goes on the layer halfway between the old endpoints. If
        there is no layer in between, every node from the destination's layer
        upward is moved up by one layer to make room.
        """
        candidates = [link for link in self.links if link.enabled and link.source_id != BIAS_ID]
        if not candidates:
            return
        split_link = random.choice(candidates)
        split_link.enabled = False

        source = self.nodes[split_link.source_id]
        dest   = self.nodes[split_link.dest_id]

        new_layer = math.ceil((source.layer + dest.layer) / 2)
        if new_layer == dest.layer:
            for node in self.nodes.values():
                if node.layer >= new_layer:
                    node.layer += 1
            self.num_layers += 1

        new_node = self._new_node(self.num_nodes - 1, NodeType.HIDDEN, new_layer)
        self.num_nodes += 1
        self.nodes[new_node.id] = new_node
        self.hidden_nodes.append(new_node)

        self._add_link(source.id, new_node.id, 1.0)
        self._add_link(new_node.id, dest.id, split_link.weight)
        self._add_link(BIAS_ID, new_node.id, 0.0)

    def _mutate_slope(self) -> None:
        """
        Increase the slope of a random PRELU hidden node.
        """
        prelu_nodes = [node for node in self.hidden_nodes if node.activation is ActivationType.PRELU]
        if prelu_nodes:
            random.choice(prelu_nodes).slope += self._config.slope_step

    def distance(self, other: 'Genome') -> float:
        """
        Calculate the compatibility distance between this genome and another.

           distance = c1 * D / N + c2 * W

        Where:
        - D  = number of links present in only one of the two genomes
        - N  = number of links in the larger genome (1 for small genomes)
        - W  = average weight difference of matching links (a large
               constant if the genomes share no link)
        - c1, c2 = weight of each term (from configuration file)

        Parameters:
            other: the genome relative to which we are calculating the distance

        Returns:
            the compatibility distance between this genome and 'other'
        """
        links_self  = {link.innovation: link for link in self.links}
        links_other = {link.innovation: link for link in other.links}

        num_disjoint    = len(links_self.keys() ^ links_other.keys())
        matching_innovs = sorted(links_self.keys() & links_other.keys())

        if matching_innovs:
            weight_diff     = sum(abs(links_self[i].weight - links_other[i].weight) for i in matching_innovs)
            avg_weight_diff = weight_diff / len(matching_innovs)
        else:
            avg_weight_diff = self._config.no_match_weight_difference

        N = max(len(self.links), len(other.links))
        if N < self._config.small_genome_threshold:
            N = 1

        return (self._config.distance_disjoint_coeff * num_disjoint / N +
                self._config.distance_weight_coeff   * avg_weight_diff)

    def is_compatible(self, other: 'Genome') -> bool:
        return self.distance(other) <= self._config.compatibility_threshold

    def crossover(self, recessive: 'Genome') -> 'Genome':
        """
        Create offspring from this genome (the dominant parent) and a recessive parent.

        The offspring starts as a clone of the dominant parent. For every link
        whose innovation number is also found in the recessive parent, a fair
        coin decides whether the offspring takes the recessive parent's weight
        and enabled flag. Links found only in the recessive parent are not
        inherited, so the offspring always has the dominant parent's topology.

        Parameters:
            recessive: the other (less fit) parent

        Returns:
            New offspring genome
        """
        offspring       = self.clone()
        recessive_links = {link.innovation: link for link in recessive.links}

        for link in offspring.links:
            match = recessive_links.get(link.innovation)
            if match is not None and random.random() < 0.5:
                link.weight  = match.weight
                link.enabled = match.enabled

        return offspring

    def clone(self) -> 'Genome':
        """
        Return a structural copy of this genome: the nodes, links,
        counters and fitness are copied; the registry is shared.
        """
        genome = Genome.__new__(Genome)
        genome._config     = self._config
        genome._registry   = self._registry
        genome._activation = self._activation

        genome.nodes        = {node_id: node.copy() for node_id, node in self.nodes.items()}
        genome.links        = [link.copy() for link in self.links]
        genome._connected   = set(self._connected)
        genome.num_layers   = self.num_layers
        genome.num_nodes    = self.num_nodes
        genome.fitness      = self.fitness
        genome.input_nodes  = [genome.nodes[node.id] for node in self.input_nodes]
        genome.output_nodes = [genome.nodes[node.id] for node in self.output_nodes]
        genome.hidden_nodes = [genome.nodes[node.id] for node in self.hidden_nodes]
        genome.bias_node    = genome.nodes[BIAS_ID]
        return genome

    def __str__(self):
        node_str  = ''.join(str(node) for node in self.input_nodes)
        node_str += str(self.bias_node)
        node_str += ''.join(str(node) for node in self.hidden_nodes)
        node_str += ''.join(str(node) for node in self.output_nodes)
        link_str  = ''.join(str(link) for link in self.links)
        return f"Nodes: {node_str}\nLinks: {link_str}"

    @staticmethod
    def show_aligned(genome1: 'Genome', genome2: 'Genome') -> None:
        """
        Print the links of two genomes, aligned by innovation number.
        """
        links1 = {link.innovation: link for link in genome1.links}
        links2 = {link.innovation: link for link in genome2.links}

        innovs_all = sorted(links1.keys() | links2.keys())
        link_str1 = ""
        link_str2 = ""
        padding   = ' ' * 18
        for innov in innovs_all:
            link_str1 += str(links1[innov]) if innov in links1 else padding
            link_str2 += str(links2[innov]) if innov in links2 else padding

        print(f"Links:\n{link_str1}\n{link_str2}\n")
