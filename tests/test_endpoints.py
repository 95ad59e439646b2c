"""Tests for curve endpoint evaluation."""

import pytest
from shapely.geometry import LineString, Point as ShapelyPoint, Polygon

from curvegraph.geometry.endpoints import (
    InMemoryCurveSource, curve_endpoints, endpoints_from_geometry,
)
from curvegraph.models import CurveKind, CurveRecord, Point


class TestCurveEndpoints:
    """Tests for CurveRecord endpoints."""

    def test_line_uses_first_and_last(self):
        record = CurveRecord(curve_id="L", kind=CurveKind.LINE, points=[[0, 0], [5, 5], [10, 0]])
        assert curve_endpoints(record) == [Point(0, 0), Point(10, 0)]

    def test_closed_polyline_repeats_first_vertex(self):
        record = CurveRecord(curve_id="P", points=[[0, 0], [1, 0], [1, 1]], closed=True)
        points = curve_endpoints(record)
        assert len(points) == 4
        assert points[0] == points[-1]

    def test_closed_polyline_already_repeated(self):
        record = CurveRecord(curve_id="P", points=[[0, 0], [1, 0], [1, 1], [0, 0]], closed=True)
        assert len(curve_endpoints(record)) == 4

    def test_arc_in_degrees(self):
        record = CurveRecord(curve_id="A", kind=CurveKind.ARC, center=[0, 0], radius=2.0,
                             start_angle=0, end_angle=90)
        start, end = curve_endpoints(record)
        assert start.x == pytest.approx(2.0)
        assert start.y == pytest.approx(0.0)
        assert end.x == pytest.approx(0.0, abs=1e-12)
        assert end.y == pytest.approx(2.0)

    def test_arc_in_radians(self):
        record = CurveRecord(curve_id="A", kind=CurveKind.ARC, center=[1, 1], radius=1.0,
                             start_angle=0, end_angle=3.141592653589793)
        start, end = curve_endpoints(record, angle_units="radians")
        assert start.x == pytest.approx(2.0)
        assert end.x == pytest.approx(0.0)

    def test_circle_is_raw_self_loop(self):
        record = CurveRecord(curve_id="C", kind=CurveKind.CIRCLE, center=[0, 0], radius=1.0)
        points = curve_endpoints(record)
        assert len(points) == 2
        assert points[0] == points[1]

    def test_arc_without_radius_has_no_endpoints(self):
        record = CurveRecord(curve_id="A", kind=CurveKind.ARC, center=[0, 0])
        assert curve_endpoints(record) == []

    def test_degenerate_line(self):
        record = CurveRecord(curve_id="L", kind=CurveKind.LINE, points=[[0, 0]])
        assert curve_endpoints(record) == []


class TestGeometryEndpoints:
    """Tests for shapely geometries."""

    def test_linestring(self):
        points = endpoints_from_geometry(LineString([(0, 0), (1, 0), (1, 1)]))
        assert points == [Point(0, 0), Point(1, 0), Point(1, 1)]

    def test_polygon_uses_closed_exterior(self):
        points = endpoints_from_geometry(Polygon([(0, 0), (1, 0), (1, 1)]))
        assert len(points) == 4
        assert points[0] == points[-1]

    def test_point_is_not_a_curve(self):
        assert endpoints_from_geometry(ShapelyPoint(0, 0)) == []


class TestInMemoryCurveSource:
    """Tests for the in-memory endpoint provider."""

    def test_mixed_inputs(self):
        source = InMemoryCurveSource({
            "seq": [(0, 0), (1, 0)],
            "geom": LineString([(1, 0), (2, 0)]),
            "rec": CurveRecord(curve_id="rec", kind=CurveKind.LINE, points=[[2, 0], [3, 0]]),
        })
        assert source.ids == ["seq", "geom", "rec"]
        assert source.get_curve_endpoints("geom") == [Point(1, 0), Point(2, 0)]
        assert source("rec") == [Point(2, 0), Point(3, 0)]

    def test_unknown_id_is_empty(self):
        source = InMemoryCurveSource({"L1": [(0, 0), (1, 0)]})
        assert source.get_curve_endpoints("missing") == []
        assert "missing" not in source

    def test_records_list(self):
        records = [CurveRecord(curve_id="a", kind=CurveKind.LINE, points=[[0, 0], [1, 1]])]
        source = InMemoryCurveSource(records)
        assert len(source) == 1
        assert source.get_curve("a") is records[0]
