"""
Curve graph construction and topology queries.

Turns a set of curve ids into a directed multigraph whose vertices are
(point, curve id) pairs. Curves are discovered through shared endpoints using
a k-d tree, one connected island at a time, with an explicit candidate stack
instead of recursion.

Each curve contributes a chain of edges between its distinct endpoints, with
a synthetic midpoint vertex inserted between every pair:

       /\\             /\\
      /  \\           /  \\
     /____\\A_______B/____\\

A and B both lie on loops, yet the line AB does not. Without the midpoint the
two-way links at A and B would make AB look strongly connected; the midpoint
is reachable only one way and stays out of every loop.
"""

from collections import Counter

from curvegraph.analysis import dangling, loops, partition, scc
from curvegraph.graph.curve_graph import CurveGraph
from curvegraph.models import CurveVertex, Edge, Point
from curvegraph.spatial.kdtree import CurveVertexKdTree
from curvegraph.tracer import get_tracer, trace


DEFAULT_ADJACENCY_RADIUS = 0.1


class CandidateStack:
    """
    Stack of (curve id, source vertex) work items.

    Keeps a count of live items so the builder can ask "was this pair pushed
    and not yet popped" without scanning the stack.
    """

    def __init__(self):
        self._items = []
        self._live = Counter()

    def push(self, curve_id, vertex):
        self._items.append((curve_id, vertex))
        self._live[(curve_id, vertex)] += 1

    def pop(self):
        item = self._items.pop()
        self._live[item] -= 1
        if self._live[item] <= 0:
            del self._live[item]
        return item

    def contains(self, curve_id, vertex):
        return (curve_id, vertex) in self._live

    def __len__(self):
        return len(self._items)


def _resolve_provider(endpoint_provider):
    if hasattr(endpoint_provider, "get_curve_endpoints"):
        return endpoint_provider.get_curve_endpoints
    if callable(endpoint_provider):
        return endpoint_provider
    raise TypeError("endpoint_provider must be callable or have get_curve_endpoints()")


class CurveGraphBuilder:
    """
    Builds the curve graph for one analysis pass and answers topology queries.

    Args:
        curve_ids: ids of the curves to analyse; must not be empty
        endpoint_provider: callable or object with get_curve_endpoints(curve_id)
            returning the ordered endpoints of a curve
        include_self_loop: give single-point curves a synthetic 2-cycle
        adjacency_radius: kd-tree radius used to find coincident endpoints
        self_loop_offset: X/Y offset of the synthetic self-loop vertex
        ignore_z: index and query endpoints on X/Y only

    Nothing is shared between builder instances.
    """

    def __init__(self, curve_ids, endpoint_provider, include_self_loop=False,
                 adjacency_radius=DEFAULT_ADJACENCY_RADIUS, self_loop_offset=1.0, ignore_z=True):
        if curve_ids is None:
            raise ValueError("curve_ids must not be None")
        curve_ids = list(dict.fromkeys(curve_ids))
        if not curve_ids:
            raise ValueError("curve_ids must not be empty")
        if endpoint_provider is None:
            raise ValueError("endpoint_provider must not be None")
        if adjacency_radius <= 0:
            raise ValueError("adjacency_radius must be positive")

        self.curve_ids = curve_ids
        self._get_endpoints = _resolve_provider(endpoint_provider)
        self.include_self_loop = include_self_loop
        self.adjacency_radius = adjacency_radius
        self.self_loop_offset = self_loop_offset
        self.ignore_z = ignore_z

        self._graph = None
        self._curve_vertices = {}
        self._isolated_vertices = []
        self._missing_ids = []

    @classmethod
    def from_config(cls, curve_ids, endpoint_provider, config):
        """Create a builder using the topology section of an AnalysisConfig."""
        topology = config.topology
        return cls(
            curve_ids,
            endpoint_provider,
            include_self_loop=topology.include_self_loop,
            adjacency_radius=topology.adjacency_radius,
            self_loop_offset=topology.self_loop_offset,
            ignore_z=topology.ignore_z,
        )

    @property
    def graph(self):
        return self._require_graph()

    @property
    def is_built(self):
        return self._graph is not None

    @property
    def missing_geometry_ids(self):
        """Ids whose endpoint provider returned nothing."""
        self._require_graph()
        return list(self._missing_ids)

    def curve_vertices(self, curve_id):
        """Endpoint vertices of a curve as returned by the provider."""
        self._require_graph()
        return list(self._curve_vertices.get(curve_id, ()))

    def _require_graph(self):
        if self._graph is None:
            raise RuntimeError("build_graph() must be called before querying the curve graph")
        return self._graph

    @trace(label="build_graph")
    def build_graph(self):
        """Discover adjacency between the curves and build the graph."""
        tracer = get_tracer()

        with tracer.span("build_kdtree", module="builder"):
            kdtree = self._build_kdtree()

        with tracer.span("collect_edges", module="builder"):
            self._isolated_vertices = []
            edges = self._collect_edges(kdtree)

        self._graph = CurveGraph.from_edges(edges, isolated=self._isolated_vertices)
        tracer.event(
            f"Graph: vertices={self._graph.vertex_count}, edges={self._graph.edge_count}, "
            f"missing_geometry={len(self._missing_ids)}"
        )
        return self._graph

    def _build_kdtree(self):
        self._curve_vertices = {}
        self._missing_ids = []
        all_vertices = []
        for curve_id in self.curve_ids:
            points = self._get_endpoints(curve_id) or []
            if not points:
                self._missing_ids.append(curve_id)
                continue
            vertices = [CurveVertex(p if isinstance(p, Point) else Point.from_sequence(p), curve_id) for p in points]
            self._curve_vertices[curve_id] = vertices
            all_vertices.extend(vertices)
        return CurveVertexKdTree(all_vertices, ignore_z=self.ignore_z)

    def _collect_edges(self, kdtree):
        tracer = get_tracer()
        visited = set()
        candidates = CandidateStack()
        result = []
        islands = 0

        pending = [i for i in self.curve_ids if i not in visited]
        while pending:
            pending_set = set(pending)

            # 1. Take the first pending curve that yields edges as the root
            for curve_id in pending:
                if curve_id in visited:
                    continue
                edges = self._visit_curve(None, curve_id, pending_set, visited, candidates, kdtree)
                if edges:
                    result.extend(edges)
                    break

            # 2. Drain the candidates
            while candidates:
                curve_id, source_vertex = candidates.pop()
                # e.g. the last curve of a loop, reached from both sides
                if curve_id in visited:
                    continue
                result.extend(self._visit_curve(source_vertex, curve_id, pending_set, visited, candidates, kdtree))

            islands += 1
            pending = [i for i in pending if i not in visited]

        tracer.event(f"Traversed {islands} islands, {len(result)} edges")
        return result

    def _visit_curve(self, source_vertex, curve_id, pending, visited, candidates, kdtree):
        """
        Visit one curve, pushing its unvisited neighbours and returning its edges.

        A visit from `source_vertex` is abandoned when none of the curve's
        endpoints lies exactly on the source point; the curve will be
        reached again from another side.
        """
        origin_vertices = self._curve_vertices.get(curve_id)
        if not origin_vertices:
            visited.add(curve_id)
            return []

        if source_vertex is not None and not any(v.point == source_vertex.point for v in origin_vertices):
            return []

        visited.add(curve_id)

        # consecutive duplicates collapse; a curve ending where it starts
        # and nowhere else collapses to a single vertex
        distinct = [origin_vertices[0]]
        for vertex in origin_vertices[1:]:
            if vertex != distinct[-1]:
                distinct.append(vertex)

        result = []
        for vertex in distinct:
            if source_vertex is not None and vertex.point == source_vertex.point:
                continue

            for adjacent in kdtree.nearest_neighbours(vertex.point, self.adjacency_radius):
                adjacent_id = adjacent.curve_id
                if adjacent_id in visited:
                    # the adjacent curve pushed us earlier from this point:
                    # link back to its vertex so the loop is explicit
                    origin_vertex = CurveVertex(vertex.point, adjacent_id)
                    if candidates.contains(curve_id, origin_vertex):
                        result.append(Edge(vertex, origin_vertex))
                    continue

                if adjacent_id not in pending:
                    continue

                candidates.push(adjacent_id, vertex)

        start = 0
        if source_vertex is not None:
            for i, vertex in enumerate(distinct):
                if vertex.point == source_vertex.point:
                    start = i
                    result.append(Edge(source_vertex, vertex))
                    break

        if len(distinct) == 1:
            result.extend(self._self_loop_edges(distinct[0], curve_id))
            return result

        # walk outward from the start vertex in both directions
        previous = distinct[start]
        for i in range(start + 1, len(distinct)):
            result.extend(self._chain_edges(previous, distinct[i], curve_id))
            previous = distinct[i]

        previous = distinct[start]
        for i in range(start - 1, -1, -1):
            result.extend(self._chain_edges(previous, distinct[i], curve_id))
            previous = distinct[i]

        return result

    def _chain_edges(self, previous, current, curve_id):
        middle = CurveVertex(previous.point.midpoint(current.point), curve_id)
        return [Edge(previous, middle), Edge(middle, current)]

    def _self_loop_edges(self, vertex, curve_id):
        if not self.include_self_loop:
            # no edges; keep the vertex so its curve still shows up in partitions
            self._isolated_vertices.append(vertex)
            return []
        dummy = CurveVertex(vertex.point.offset(self.self_loop_offset, self.self_loop_offset), curve_id)
        return [Edge(vertex, dummy), Edge(dummy, vertex)]

    # Topology queries

    def search_non_loop_vertices(self):
        """Vertices that are not part of any loop."""
        return scc.non_loop_vertices(self._require_graph())

    @trace(label="search_dangling_paths")
    def search_dangling_paths(self):
        """Root-to-leaf edge paths of the stubs hanging off the loop structure."""
        return dangling.dangling_paths(self._require_graph())

    @trace(label="search_dangling_vertices")
    def search_dangling_vertices(self):
        """Strict dangling vertices."""
        return dangling.dangling_vertices(self._require_graph())

    @trace(label="partition_graph")
    def partition_graph(self):
        """Sets of curve ids not connected to each other."""
        return partition.partition(self._require_graph())

    def partition_graph_vertices(self):
        """Vertex groups not connected to each other."""
        return partition.partition_vertices(self._require_graph())

    @trace(label="search_loops")
    def search_loops(self):
        """One edge list per DFS back edge."""
        return loops.search_loops(self._require_graph())

    def search_all_ids_in_loop(self):
        """Curve ids owning an edge of some loop."""
        return loops.search_all_ids_in_loop(self._require_graph())
