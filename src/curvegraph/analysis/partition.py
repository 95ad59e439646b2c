"""
Connected-component partitioning of a curve graph.

Groups are the weakly connected components: edge direction is ignored, cycle
structure is irrelevant.
"""

from curvegraph.analysis.search import depth_first_search


def partition_vertices(graph):
    """
    Partition graph vertices into groups that are not connected to each other.

    One depth-first search records tree predecessors. Each unvisited vertex
    then seeds a group which grows breadth-wise through out-edges, in-edges
    and the predecessor link until nothing new is added. Growth uses an
    explicit frontier list, never recursion.
    """
    search = depth_first_search(graph)
    visited = set()
    groups = []

    for vertex in graph.vertices:
        if vertex in visited:
            continue

        group = [vertex]
        visited.add(vertex)
        frontier = [vertex]
        while frontier:
            next_frontier = []
            for current in frontier:
                for neighbour in _neighbours(graph, search.predecessors, current):
                    if neighbour in visited:
                        continue
                    visited.add(neighbour)
                    group.append(neighbour)
                    next_frontier.append(neighbour)
            frontier = next_frontier

        groups.append(group)

    return groups


def _neighbours(graph, predecessors, vertex):
    for edge in graph.out_edges(vertex):
        yield edge.target
    for edge in graph.in_edges(vertex):
        yield edge.source
    edge = predecessors.get(vertex)
    if edge is not None:
        yield edge.source


def partition(graph):
    """
    Partition curve ids into groups not connected to each other.

    Returns a list of sets of curve ids, one per vertex group.
    """
    result = []
    for group in partition_vertices(graph):
        ids = set()
        for vertex in group:
            ids.add(vertex.curve_id)
        result.append(ids)
    return result
