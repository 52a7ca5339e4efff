"""
Genotype Package

This package implements the direct genetic encoding of a neural network.

A genome consists of two kinds of elements:
- Nodes: neurons arranged on layers, each with an activation function
- Links: weighted connections between nodes, identified by innovation numbers

Modules:
    node:                NodeType enumeration and Node class
    link:                Link class
    genome_base:         GenomeBase abstract class
    genome:              Genome class
    innovation_registry: InnovationRegistry class

Exported Classes:
    NodeType:           Enumeration for node types (INPUT, BIAS, HIDDEN, OUTPUT)
    Node:               A single network node
    Link:               Gene encoding a weighted link between nodes
    GenomeBase:         Contract shared by direct and indirect encodings
    Genome:             Complete genome representing a neural network
    InnovationRegistry: Ledger of innovation numbers for one lineage
"""

from agentneat.genotype.genome              import BIAS_ID, Genome
from agentneat.genotype.genome_base         import GenomeBase
from agentneat.genotype.innovation_registry import InnovationRegistry
from agentneat.genotype.link                import Link
from agentneat.genotype.node                import NodeType, Node

__all__ = ['BIAS_ID',
           'Genome',
           'GenomeBase',
           'InnovationRegistry',
           'Link',
           'Node',
           'NodeType']
