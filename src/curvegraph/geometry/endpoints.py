"""
Curve endpoint evaluation.

The graph builder only needs, for each curve id, the ordered sequence of
points where the curve starts, bends and ends. This module computes that
sequence for the curve records of a drawing and for shapely geometries, and
provides an in-memory source the builder can query by id.

Curves that cannot be evaluated yield an empty sequence; the builder treats
those as missing geometry.
"""

import math

from shapely.geometry import LinearRing, LineString, Polygon
from shapely.geometry.base import BaseGeometry

from curvegraph.models import CurveKind, CurveRecord, Point


def curve_endpoints(record, angle_units="degrees"):
    """
    Ordered endpoints of a curve record.

    - line: first and last point
    - polyline: every vertex; closed polylines repeat the first vertex at the end
    - arc: start and end point on the circle
    - circle: a single point repeated, i.e. a raw self-loop
    """
    if record.kind == CurveKind.LINE:
        if len(record.points) < 2:
            return []
        return [Point.from_sequence(record.points[0]), Point.from_sequence(record.points[-1])]

    if record.kind == CurveKind.POLYLINE:
        points = [Point.from_sequence(p) for p in record.points]
        if record.closed and points and points[0] != points[-1]:
            points.append(points[0])
        return points

    if record.kind in (CurveKind.ARC, CurveKind.CIRCLE):
        if record.center is None or record.radius is None:
            return []
        center = Point.from_sequence(record.center)
        if record.kind == CurveKind.CIRCLE:
            start = _point_on_circle(center, record.radius, 0.0)
            return [start, start]
        start_angle, end_angle = record.start_angle, record.end_angle
        if angle_units == "degrees":
            start_angle, end_angle = math.radians(start_angle), math.radians(end_angle)
        return [
            _point_on_circle(center, record.radius, start_angle),
            _point_on_circle(center, record.radius, end_angle),
        ]

    return []


def _point_on_circle(center, radius, angle):
    return Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle), center.z)


def endpoints_from_geometry(geom):
    """
    Ordered endpoints of a shapely geometry.

    LineString and LinearRing coordinates are used as-is (rings already repeat
    their first coordinate). Polygons contribute their exterior ring. Other
    geometry types are not curves and yield an empty list.
    """
    if geom is None or geom.is_empty:
        return []
    if isinstance(geom, Polygon):
        geom = geom.exterior
    if isinstance(geom, (LineString, LinearRing)):
        return [Point.from_sequence(c) for c in geom.coords]
    return []


def record_from_geometry(curve_id, geom):
    """Build a polyline CurveRecord from a shapely geometry."""
    points = [p.to_list(ignore_z=False) if geom.has_z else p.to_list() for p in endpoints_from_geometry(geom)]
    return CurveRecord(curve_id=str(curve_id), kind=CurveKind.POLYLINE, points=points)


class InMemoryCurveSource:
    """
    Endpoint provider backed by a dict of curves.

    Values may be CurveRecord objects, shapely geometries, or plain point
    sequences. Endpoints are computed once on insertion.
    """

    def __init__(self, curves=None, angle_units="degrees"):
        self.angle_units = angle_units
        self._curves = {}
        self._endpoints = {}
        if curves:
            items = curves.items() if isinstance(curves, dict) else ((c.curve_id, c) for c in curves)
            for curve_id, curve in items:
                self.add(curve_id, curve)

    def add(self, curve_id, curve):
        """Register a curve under curve_id, replacing any previous one."""
        if isinstance(curve, CurveRecord):
            endpoints = curve_endpoints(curve, self.angle_units)
        elif isinstance(curve, BaseGeometry):
            endpoints = endpoints_from_geometry(curve)
        else:
            endpoints = [p if isinstance(p, Point) else Point.from_sequence(p) for p in curve]
        self._curves[curve_id] = curve
        self._endpoints[curve_id] = endpoints

    @property
    def ids(self):
        return list(self._curves.keys())

    def get_curve(self, curve_id):
        return self._curves.get(curve_id)

    def get_curve_endpoints(self, curve_id):
        """Endpoints of a curve; unknown ids yield an empty list."""
        return list(self._endpoints.get(curve_id, ()))

    def __call__(self, curve_id):
        return self.get_curve_endpoints(curve_id)

    def __len__(self):
        return len(self._curves)

    def __contains__(self, curve_id):
        return curve_id in self._curves
