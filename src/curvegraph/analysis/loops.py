"""
Explicit loop enumeration.

Every back edge found by a depth-first search closes exactly one cycle of the
DFS tree. Overlapping cycles are reported once per back edge, so a theta
shape yields two loops sharing a side.
"""

from curvegraph.analysis.search import depth_first_search


def search_loops(graph):
    """
    All loops of the graph, one per DFS back edge.

    Each loop is a list of edges in traversal order: the tree edges leading
    from the back edge's target down to its source, then the back edge.
    """
    search = depth_first_search(graph)
    return [loop_from_back_edge(search.predecessors, edge) for edge in search.back_edges]


def loop_from_back_edge(predecessors, back_edge):
    """Close the cycle of `back_edge` by walking tree predecessors up to its target."""
    loop = [back_edge]
    vertex = back_edge.source
    while vertex != back_edge.target:
        edge = predecessors.get(vertex)
        if edge is None:
            break
        loop.append(edge)
        vertex = edge.source
    loop.reverse()
    return loop


def search_all_ids_in_loop(graph, loops=None):
    """
    Curve ids that genuinely take part in a loop.

    Only edges running along a single curve count; edges that merely link two
    curves at a shared point do not put either curve in a loop.
    """
    if loops is None:
        loops = search_loops(graph)

    ids = set()
    for loop in loops:
        for edge in loop:
            if edge.source.curve_id == edge.target.curve_id:
                ids.add(edge.source.curve_id)
    return ids
