"""Tests for the curve vertex k-d tree."""

from curvegraph.models import CurveVertex, Point
from curvegraph.spatial.kdtree import CurveVertexKdTree, build_kdtree


def vertices():
    return [
        CurveVertex(Point(0, 0), "L1"),
        CurveVertex(Point(10, 0), "L1"),
        CurveVertex(Point(10, 0), "L2"),
        CurveVertex(Point(10, 0), "L3"),
        CurveVertex(Point(10.05, 0), "L4"),
        CurveVertex(Point(20, 0, 50), "L5"),
    ]


class TestKdTree:
    """Tests for radius queries."""

    def test_empty_index_returns_empty(self):
        tree = CurveVertexKdTree([])
        assert len(tree) == 0
        assert tree.nearest_neighbours(Point(0, 0), 1.0) == []
        assert tree.nearest(Point(0, 0)) == (None, float("inf"))

    def test_duplicate_coordinates(self):
        tree = build_kdtree(vertices())
        found = tree.nearest_neighbours(Point(10, 0), 0.01)
        assert {v.curve_id for v in found} == {"L1", "L2", "L3"}

    def test_radius_bound(self):
        tree = build_kdtree(vertices())
        found = tree.nearest_neighbours(Point(10, 0), 0.1)
        assert {v.curve_id for v in found} == {"L1", "L2", "L3", "L4"}

    def test_results_in_index_order(self):
        tree = build_kdtree(vertices())
        found = tree.nearest_neighbours(Point(10, 0), 0.1)
        assert [v.curve_id for v in found] == ["L1", "L2", "L3", "L4"]

    def test_z_ignored(self):
        tree = build_kdtree(vertices())
        found = tree.nearest_neighbours(Point(20, 0, 0), 0.1)
        assert [v.curve_id for v in found] == ["L5"]

    def test_z_used_when_requested(self):
        tree = CurveVertexKdTree(vertices(), ignore_z=False)
        assert tree.nearest_neighbours(Point(20, 0, 0), 0.1) == []

    def test_nearest_excludes_own_curve(self):
        tree = build_kdtree(vertices())
        vertex, dist = tree.nearest(Point(0, 0), exclude_id="L1")
        assert vertex.point == Point(10, 0)
        assert abs(dist - 10.0) < 1e-9
