"""
k-d tree over curve vertices.

Used by the graph builder to find, for a given endpoint, every endpoint of
other curves lying within the adjacency radius.
"""

import numpy as np
from scipy.spatial import KDTree

from curvegraph.tracer import get_tracer


class CurveVertexKdTree:
    """
    Read-only spatial index of CurveVertex objects.

    Duplicate coordinates are allowed (many curves sharing one point). With
    ignore_z the index and its queries work on X/Y only.
    """

    def __init__(self, vertices, ignore_z=True):
        self.vertices = list(vertices)
        self.ignore_z = ignore_z
        self._tree = None

        if self.vertices:
            coords = np.array([v.point.to_list(ignore_z=ignore_z) for v in self.vertices], dtype=float)
            self._tree = KDTree(coords)

        get_tracer().event(f"KdTree built with {len(self.vertices)} vertices", level="DEBUG")

    def __len__(self):
        return len(self.vertices)

    def nearest_neighbours(self, point, radius):
        """
        All indexed vertices within Euclidean `radius` of `point`.

        Results are in index order. An empty index returns an empty list.
        """
        if self._tree is None:
            return []
        indices = self._tree.query_ball_point(point.to_list(ignore_z=self.ignore_z), r=radius)
        return [self.vertices[i] for i in sorted(indices)]

    def nearest(self, point, exclude_id=None, k=8):
        """
        Closest vertex not owned by `exclude_id`, with its distance.

        Looks at the k nearest candidates only; returns (None, inf) when none
        of them qualifies or the index is empty.
        """
        if self._tree is None:
            return None, float("inf")
        k = min(k, len(self.vertices))
        dists, indices = self._tree.query(point.to_list(ignore_z=self.ignore_z), k=k)
        for dist, idx in zip(np.atleast_1d(dists), np.atleast_1d(indices)):
            vertex = self.vertices[int(idx)]
            if exclude_id is not None and vertex.curve_id == exclude_id:
                continue
            return vertex, float(dist)
        return None, float("inf")


def build_kdtree(vertices, ignore_z=True):
    """Build a CurveVertexKdTree from any iterable of vertices."""
    return CurveVertexKdTree(vertices, ignore_z=ignore_z)
