"""
Data models for curvegraph.

Graph-level value types (Point, CurveVertex, Edge) are plain frozen classes
because they are hashed millions of times during an analysis pass. Records that
cross file boundaries (curve records, check results, reports) are pydantic
models so that loaded drawings and written reports are validated.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class Point:
    """A 2D point with optional Z. Equality is exact, no tolerance."""
    x: float
    y: float
    z: float = 0.0

    @classmethod
    def from_sequence(cls, coords):
        """Create a point from [x, y] or [x, y, z]."""
        if len(coords) < 2:
            raise ValueError(f"Point needs at least 2 coordinates, got {list(coords)}")
        z = float(coords[2]) if len(coords) > 2 else 0.0
        return cls(float(coords[0]), float(coords[1]), z)

    def midpoint(self, other):
        return Point(
            self.x + (other.x - self.x) / 2.0,
            self.y + (other.y - self.y) / 2.0,
            self.z + (other.z - self.z) / 2.0,
        )

    def offset(self, dx, dy, dz=0.0):
        return Point(self.x + dx, self.y + dy, self.z + dz)

    def to_list(self, ignore_z=True):
        if ignore_z:
            return [self.x, self.y]
        return [self.x, self.y, self.z]


@dataclass(frozen=True, eq=False)
class CurveVertex:
    """
    "Curve `curve_id` has an endpoint at `point`".

    Two vertices are equal when their points are exactly equal and they belong
    to the same curve. The hash truncates coordinates to integers so that
    hashing stays cheap and stable under floating point noise; equal vertices
    always truncate to the same integers, so hash and equality agree.
    """
    point: Point
    curve_id: Any

    def __eq__(self, other):
        if not isinstance(other, CurveVertex):
            return NotImplemented
        return self.point == other.point and self.curve_id == other.curve_id

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        h = 17
        h = 23 * h + hash(int(self.point.x))
        h = 23 * h + hash(int(self.point.y))
        h = 23 * h + hash(self.curve_id)
        return h

    def __repr__(self):
        return f"CurveVertex(({self.point.x:g}, {self.point.y:g}), {self.curve_id!r})"


class Edge(NamedTuple):
    """Directed edge between two curve vertices."""
    source: CurveVertex
    target: CurveVertex

    @property
    def is_curve_owned(self):
        """True when both ends belong to the same curve."""
        return self.source.curve_id == self.target.curve_id


# Records loaded from drawing files

class CurveKind(str, Enum):
    """Curve types understood by the in-memory endpoint provider."""
    LINE = "line"
    POLYLINE = "polyline"
    ARC = "arc"
    CIRCLE = "circle"


class CurveRecord(BaseModel):
    """A single curve of a drawing."""
    curve_id: str
    kind: CurveKind = CurveKind.POLYLINE
    points: List[List[float]] = Field(default_factory=list)
    closed: bool = False
    center: Optional[List[float]] = Field(default=None, min_length=2, max_length=3)
    radius: Optional[float] = Field(default=None, gt=0.0)
    start_angle: float = 0.0
    end_angle: float = 0.0
    layer: str = ""

    model_config = ConfigDict(extra="forbid")


class Drawing(BaseModel):
    """A collection of curve records loaded from one file."""
    name: str = ""
    curves: List[CurveRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


# Validation and report models

class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationReport(BaseModel):
    """Collection of validation check results."""
    checks: List[CheckResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self):
        """Check if any errors exist."""
        return any(c.severity == Severity.ERROR and not c.passed for c in self.checks)

    @property
    def error_count(self):
        """Count of failed error-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        """Count of failed warning-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)


class VertexRecord(BaseModel):
    """Serializable form of a CurveVertex."""
    curve_id: str
    point: List[float]

    model_config = ConfigDict(extra="forbid")


class AnalysisReport(BaseModel):
    """Topology facts for one analysis pass over a drawing."""
    drawing: str = ""
    curve_count: int = 0
    graph_vertices: int = 0
    graph_edges: int = 0
    partitions: List[List[str]] = Field(default_factory=list)
    loop_count: int = 0
    loop_curve_ids: List[str] = Field(default_factory=list)
    dangling_vertices: List[VertexRecord] = Field(default_factory=list)
    dangling_path_count: int = 0
    validation: ValidationReport = Field(default_factory=ValidationReport)

    model_config = ConfigDict(extra="forbid")


def vertex_record(vertex):
    """Convert a CurveVertex into a VertexRecord."""
    return VertexRecord(curve_id=str(vertex.curve_id), point=vertex.point.to_list())


def sorted_vertex_records(vertices):
    """VertexRecords ordered by curve id then coordinates for stable output."""
    records = [vertex_record(v) for v in vertices]
    return sorted(records, key=lambda r: (r.curve_id, r.point))
