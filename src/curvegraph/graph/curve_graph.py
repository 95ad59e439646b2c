"""
Directed multigraph over curve vertices.

A small adjacency structure: vertices keep insertion order, every vertex maps
to its out-edges and in-edges, and parallel edges and self-loops are kept.
The topology algorithms only rely on `vertices` and `out_edges`.
"""

import networkx as nx

from curvegraph.models import Edge


class CurveGraph:
    """Adjacency graph of CurveVertex objects with directed multi-edges."""

    def __init__(self):
        self._out = {}
        self._in = {}
        self._edge_count = 0

    @classmethod
    def from_edges(cls, edges, isolated=None):
        """Build a graph from edges, then add any `isolated` vertices not yet present."""
        graph = cls()
        for edge in edges:
            graph.add_edge(edge)
        for vertex in isolated or ():
            graph.add_vertex(vertex)
        return graph

    def add_vertex(self, vertex):
        if vertex not in self._out:
            self._out[vertex] = []
            self._in[vertex] = []

    def add_edge(self, edge):
        """Add a directed edge, creating its vertices as needed."""
        if not isinstance(edge, Edge):
            edge = Edge(*edge)
        self.add_vertex(edge.source)
        self.add_vertex(edge.target)
        self._out[edge.source].append(edge)
        self._in[edge.target].append(edge)
        self._edge_count += 1

    @property
    def vertices(self):
        return list(self._out.keys())

    @property
    def edges(self):
        return [e for out in self._out.values() for e in out]

    @property
    def vertex_count(self):
        return len(self._out)

    @property
    def edge_count(self):
        return self._edge_count

    def __contains__(self, vertex):
        return vertex in self._out

    def __len__(self):
        return len(self._out)

    def out_edges(self, vertex):
        """Out-edges of a vertex; unknown vertices have none."""
        return self._out.get(vertex, [])

    def in_edges(self, vertex):
        return self._in.get(vertex, [])

    def out_degree(self, vertex):
        return len(self._out.get(vertex, ()))

    def in_degree(self, vertex):
        return len(self._in.get(vertex, ()))

    def curve_ids(self):
        """Distinct curve ids owning at least one vertex, in first-seen order."""
        return list(dict.fromkeys(v.curve_id for v in self._out))

    def subgraph_from_edges(self, edges):
        """A new graph holding only the given edges."""
        return CurveGraph.from_edges(edges)

    def to_networkx(self):
        """Export as a networkx MultiDiGraph with `point` and `curve_id` node attributes."""
        graph = nx.MultiDiGraph()
        for vertex in self._out:
            graph.add_node(vertex, point=vertex.point.to_list(), curve_id=vertex.curve_id)
        for edge in self.edges:
            graph.add_edge(edge.source, edge.target)
        return graph
