"""
Dangling path and dangling vertex detection.
"""

from curvegraph.analysis.scc import non_loop_vertices
from curvegraph.analysis.search import depth_first_search


def dangling_paths(graph, non_loop=None):
    """
    Stub segments hanging off the loop structure.

    The out-edges of all non-loop vertices form a small sub-graph; every
    root-to-leaf path of a depth-first search over it is one stub.
    """
    if non_loop is None:
        non_loop = non_loop_vertices(graph)

    # keep graph order so the result is repeatable
    dangling_edges = []
    for vertex in graph.vertices:
        if vertex in non_loop:
            dangling_edges.extend(graph.out_edges(vertex))

    subgraph = graph.subgraph_from_edges(dangling_edges)
    return depth_first_search(subgraph).all_paths()


def dangling_vertices(graph, non_loop=None):
    """
    Strict dangling vertices.

        |\\
        | \\
        |__\\Y_________Z

    Z is dangling, Y is not: Y still lies on the triangle's loop.

    A dangling vertex is the far end of a depth-first path that is not on any
    loop. A search root off every loop is reported too when it is a free
    curve end, so the result does not depend on where the search started.
    """
    if non_loop is None:
        non_loop = non_loop_vertices(graph)

    search = depth_first_search(graph)
    result = set()
    for vertex in search.end_path_vertices:
        # isolated vertices are not the end of any path
        if vertex in non_loop and vertex in search.predecessors:
            result.add(vertex)
    for root in search.roots:
        if root in non_loop and _is_free_start(graph, root):
            result.add(root)
    return result


def _is_free_start(graph, vertex):
    """Nothing leads in, and the only way out runs along the vertex's own curve."""
    if graph.in_degree(vertex) != 0 or graph.out_degree(vertex) != 1:
        return False
    return graph.out_edges(vertex)[0].is_curve_owned
