"""
Visualization Module

Draws the network described by a (direct encoding) genome using Graphviz.
"""

import graphviz

from agentneat.genotype import Genome, NodeType
from agentneat.activations import activation_codes

def visualize(genome: Genome, view: bool = False) -> graphviz.Digraph:
    """
    Visualize a genome's network using Graphviz.

    Nodes are grouped by layer, left to right; disabled links are drawn in light gray.

    Parameters:
        genome: the genome to draw
        view:   If True, automatically open the visualization after rendering

    Returns:
        graphviz.Digraph object representing the network
    """
    dot = graphviz.Digraph()
    dot.attr(rankdir='LR')  # Left to right layout

    common = {'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5',
              'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}
    fill   = {NodeType.INPUT : 'lightgrey',
              NodeType.BIAS  : 'khaki',
              NodeType.HIDDEN: 'lightblue',
              NodeType.OUTPUT: 'white'}

    layers: dict[int, list] = {}
    for node in genome.nodes.values():
        layers.setdefault(node.layer, []).append(node)

    for layer in sorted(layers):
        with dot.subgraph(name=f'cluster_layer{layer}') as cluster:
            cluster.attr(rank='same', label=f'Layer {layer}', style='invisible')
            for node in sorted(layers[layer], key=lambda n: n.id):
                label = f"id={node.id}"
                if node.activation is not None:
                    label += f"\\n{activation_codes[node.activation]}"
                cluster.node(str(node.id), label=label, fillcolor=fill[node.type], **common)

    for link in genome.links:
        dot.edge(str(link.source_id), str(link.dest_id),
                 label     = f"i={link.innovation},w={link.weight:.2f}",
                 color     = 'black' if link.enabled else 'lightgray',
                 fontsize  = '5',
                 penwidth  = '0.5',
                 arrowsize = '0.5')

    if view:
        dot.view(cleanup=True)

    return dot
