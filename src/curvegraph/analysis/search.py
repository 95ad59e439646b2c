"""
Depth-first search over a CurveGraph.

Iterative (explicit stack) so deep chains of curves cannot exhaust the
interpreter's recursion limit. One pass records everything the topology
analyses need: tree predecessors, leaf ("end path") vertices, and the
classification of every non-tree edge.
"""

WHITE, GRAY, BLACK = 0, 1, 2


class DepthFirstSearch:
    """
    Depth-first search visiting every vertex of the graph.

    Roots are taken in graph vertex order and out-edges in insertion order,
    so a search over the same graph is repeatable.

    After `run()`:
        predecessors: vertex -> tree edge that discovered it (roots absent)
        end_path_vertices: vertices that finished without a tree child
        back_edges: edges to a vertex still on the stack (each closes a cycle)
        forward_or_cross_edges: edges to an already finished vertex
    """

    def __init__(self, graph):
        self.graph = graph
        self.colors = {}
        self.predecessors = {}
        self.roots = []
        self.discover_order = []
        self.finish_order = []
        self.end_path_vertices = []
        self.tree_edges = []
        self.back_edges = []
        self.forward_or_cross_edges = []

    def run(self):
        for vertex in self.graph.vertices:
            if self.colors.get(vertex, WHITE) == WHITE:
                self.roots.append(vertex)
                self._visit(vertex)
        return self

    def _discover(self, vertex):
        self.colors[vertex] = GRAY
        self.discover_order.append(vertex)

    def _visit(self, root):
        self._discover(root)
        stack = [(root, iter(self.graph.out_edges(root)))]
        has_child = set()

        while stack:
            vertex, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                stack.pop()
                self.colors[vertex] = BLACK
                self.finish_order.append(vertex)
                if vertex not in has_child:
                    self.end_path_vertices.append(vertex)
                continue

            color = self.colors.get(edge.target, WHITE)
            if color == WHITE:
                self.tree_edges.append(edge)
                self.predecessors[edge.target] = edge
                has_child.add(vertex)
                self._discover(edge.target)
                stack.append((edge.target, iter(self.graph.out_edges(edge.target))))
            elif color == GRAY:
                self.back_edges.append(edge)
            else:
                self.forward_or_cross_edges.append(edge)

    def path_to(self, vertex):
        """Tree edges from the DFS root down to `vertex` (empty for a root)."""
        path = []
        edge = self.predecessors.get(vertex)
        while edge is not None:
            path.append(edge)
            edge = self.predecessors.get(edge.source)
        path.reverse()
        return path

    def all_paths(self):
        """Every root-to-leaf tree path with at least one edge."""
        paths = []
        for vertex in self.end_path_vertices:
            path = self.path_to(vertex)
            if path:
                paths.append(path)
        return paths


def depth_first_search(graph):
    """Run a DepthFirstSearch over `graph` and return it."""
    return DepthFirstSearch(graph).run()
