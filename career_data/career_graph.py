"""
Career progression graph built from a Dataset.

Paths become directed edges between node ids. Parallel paths and self-loops
are legitimate in the dataset, so a MultiDiGraph is used. Endpoints that do
not match any node are added as placeholder nodes marked known=False.
"""

import logging
from collections import Counter
from typing import Any, Dict

import networkx as nx

from .data_structures import Dataset

logger = logging.getLogger(__name__)


def build_career_graph(dataset: Dataset) -> nx.MultiDiGraph:
    """Build a directed multigraph with one node per role and one edge per path."""
    graph = nx.MultiDiGraph()

    for node in dataset.nodes:
        graph.add_node(node.id, label=node.label or '', department=node.department or '',
                       level=node.level or '', known=True)

    for path in dataset.paths:
        for endpoint in (path.source, path.target):
            if endpoint not in graph:
                graph.add_node(endpoint, label='', department='', level='', known=False)
        attrs = {'timeframe': path.timeframe or ''}
        if path.row is not None:
            attrs['row'] = path.row
        graph.add_edge(path.source, path.target, **attrs)

    return graph


def get_graph_statistics(graph: nx.MultiDiGraph) -> Dict[str, Any]:
    """Get statistics about the career graph."""
    known = [n for n, data in graph.nodes(data=True) if data.get('known', True)]
    pair_counts = Counter((u, v) for u, v, _ in graph.edges(keys=True))

    stats = {
        'nodes': graph.number_of_nodes(),
        'edges': graph.number_of_edges(),
        'known_nodes': len(known),
        'dangling_nodes': graph.number_of_nodes() - len(known),
        'self_loops': nx.number_of_selfloops(graph),
        'parallel_edges': sum(count - 1 for count in pair_counts.values()),
        'isolated_roles': sorted(n for n in known if graph.degree(n) == 0),
        'entry_roles': sorted(n for n in known
                              if graph.in_degree(n) == 0 and graph.out_degree(n) > 0),
        'terminal_roles': sorted(n for n in known
                                 if graph.out_degree(n) == 0 and graph.in_degree(n) > 0),
        'weakly_connected_components': nx.number_weakly_connected_components(graph),
        'is_dag': nx.is_directed_acyclic_graph(graph),
        'departments': dict(Counter(graph.nodes[n].get('department', '') for n in known)),
    }
    return stats


def save_graph(graph: nx.MultiDiGraph, filepath: str) -> None:
    """Save the career graph as GEXF for desktop graph tools."""
    nx.write_gexf(graph, filepath)
    logger.info(f"Career graph saved to {filepath}")
