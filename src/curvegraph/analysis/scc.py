"""
Strongly connected components and loop membership.

A vertex that forms a strongly connected component on its own has no partner
it can both reach and be reached from, so it lies on no cycle of the graph.
"""


def strongly_connected_components(graph):
    """
    Tarjan's algorithm, iterative.

    Returns a dict vertex -> component index (0-based, in completion order).
    Linear in vertices plus edges.
    """
    index_of = {}
    lowlink = {}
    on_stack = set()
    component_stack = []
    components = {}
    next_index = 0
    next_component = 0

    for root in graph.vertices:
        if root in index_of:
            continue

        index_of[root] = lowlink[root] = next_index
        next_index += 1
        component_stack.append(root)
        on_stack.add(root)
        work = [(root, iter(graph.out_edges(root)))]

        while work:
            vertex, edges = work[-1]
            descended = False
            for edge in edges:
                target = edge.target
                if target not in index_of:
                    index_of[target] = lowlink[target] = next_index
                    next_index += 1
                    component_stack.append(target)
                    on_stack.add(target)
                    work.append((target, iter(graph.out_edges(target))))
                    descended = True
                    break
                if target in on_stack:
                    lowlink[vertex] = min(lowlink[vertex], index_of[target])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[vertex])

            if lowlink[vertex] == index_of[vertex]:
                while True:
                    member = component_stack.pop()
                    on_stack.discard(member)
                    components[member] = next_component
                    if member == vertex:
                        break
                next_component += 1

    return components


def group_components(components):
    """Invert a vertex -> component mapping into a list of vertex lists."""
    groups = {}
    for vertex, component in components.items():
        groups.setdefault(component, []).append(vertex)
    return [groups[k] for k in sorted(groups)]


def non_loop_vertices(graph):
    """
    Vertices that are not part of any loop.

           /\\              /\\
          /  \\            /  \\
         /____\\A____C___B/____\\

    A and B lie on loops, C (the midpoint of the bridge) does not.
    """
    components = strongly_connected_components(graph)
    result = set()
    for group in group_components(components):
        if len(group) <= 1:
            result.update(group)
    return result
