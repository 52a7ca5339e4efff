"""
NEAT Node Module.

This module implements the Node class and NodeType enumeration.

Classes:
    NodeType: Enumeration for node types (INPUT, BIAS, HIDDEN, OUTPUT)
    Node:     A single network node, with its layer and activation state
"""

from enum import Enum

from agentneat.activations import ActivationType, activation_codes, activate

class NodeType(Enum):
    """
    Nodes come in four types: input, bias, hidden, output.
    """
    INPUT  = "I"
    BIAS   = "B"
    HIDDEN = "H"
    OUTPUT = "O"

class Node:
    """
    A node in a Neural Network.

    Besides its genetic description (ID, type, layer, activation function
    and slope), a node carries the transient values used while the network
    is evaluated: the input accumulated from incoming links and the output
    it pushes downstream.

    The outgoing links are referenced by their index in the owning genome's
    link list, so a node can be copied without copying any other object.

    Layer 0 holds the input and bias nodes; hidden nodes sit on intermediate
    layers and the output nodes always sit on the highest layer. A node's
    layer never decreases.

    Public Attributes:
        id:           Unique (within its genome) identifier for this node
        type:         Type of node (INPUT, BIAS, HIDDEN, or OUTPUT)
        layer:        Layer index
        activation:   Activation function (None for INPUT and BIAS nodes)
        slope:        Slope applied to negative inputs by PRELU nodes
        input_value:  Accumulated weighted input
        output_value: Last computed output
        outgoing:     Indices of the outgoing links in the genome's link list

    Public Methods:
        activate(): Compute the output from the accumulated input
        copy():     Return an independent copy of the node
    """

    __slots__ = ('id', 'type', 'layer', 'activation', 'slope', 'input_value', 'output_value', 'outgoing')

    def __init__(self,
                 node_id   : int,
                 node_type : NodeType,
                 layer     : int,
                 activation: ActivationType | None = None,
                 slope     : float = 1.0):
        self.id          : int                   = node_id
        self.type        : NodeType              = node_type
        self.layer       : int                   = layer
        self.activation  : ActivationType | None = activation
        self.slope       : float                 = slope
        self.input_value : float                 = 0.0
        self.output_value: float                 = 0.0
        self.outgoing    : list[int]             = []

    def activate(self) -> float:
        """
        Compute the node output from the accumulated input.
        Input and bias nodes keep the output they were given.
        """
        if self.activation is not None:
            self.output_value = activate(self.activation, self.input_value, self.slope)
        return self.output_value

    def copy(self) -> 'Node':
        node = Node(self.id, self.type, self.layer, self.activation, self.slope)
        node.outgoing = list(self.outgoing)
        return node

    def __repr__(self):
        return (f"Node(node_id={self.id:+03d}, node_type=NodeType.{self.type.name:6s}, "
                f"layer={self.layer}, activation={self.activation}, slope={self.slope})")

    def __str__(self):
        if self.activation is None:
            return f"[{self.type.value}{self.id}]"
        act_code = activation_codes.get(self.activation, "???")
        return f"[{self.type.value}{self.id},L{self.layer},{act_code}]"
