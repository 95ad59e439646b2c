"""Pytest fixtures for curvegraph tests."""

import os
import tempfile

import pytest


def make_source(curves):
    """InMemoryCurveSource from a dict of curve id -> list of (x, y) points."""
    from curvegraph.geometry.endpoints import InMemoryCurveSource
    return InMemoryCurveSource(curves)


def build(curves, **kwargs):
    """Built CurveGraphBuilder over every curve in `curves`."""
    from curvegraph.graph.builder import CurveGraphBuilder
    source = make_source(curves)
    builder = CurveGraphBuilder(source.ids, source, **kwargs)
    builder.build_graph()
    return builder


TRIANGLE = {
    "L1": [(0, 0), (10, 0)],
    "L2": [(10, 0), (0, 10)],
    "L3": [(0, 10), (0, 0)],
}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def isolated_line():
    return {"L1": [(0, 0), (10, 0)]}


@pytest.fixture
def triangle():
    return dict(TRIANGLE)


@pytest.fixture
def triangle_with_stub():
    """Triangle plus a line hanging off its (0, 0) corner."""
    curves = dict(TRIANGLE)
    curves["L4"] = [(0, 0), (-10, 0)]
    return curves


@pytest.fixture
def stub_first():
    """Same drawing as triangle_with_stub, stub listed first."""
    curves = {"L4": [(0, 0), (-10, 0)]}
    curves.update(TRIANGLE)
    return curves


@pytest.fixture
def stub_first_free_end_first():
    """Stub listed first with its free end as its first point."""
    curves = {"L4": [(-10, 0), (0, 0)]}
    curves.update(TRIANGLE)
    return curves


@pytest.fixture
def y_junction_first():
    """Three lines meeting at (0, 0); the first one starts at the junction."""
    return {
        "L1": [(0, 0), (-10, 0)],
        "L2": [(0, 0), (10, 0)],
        "L3": [(0, 0), (0, 10)],
    }


@pytest.fixture
def y_free_end_first():
    """Same Y shape, the first line starting at its free end."""
    return {
        "L1": [(-10, 0), (0, 0)],
        "L2": [(0, 0), (10, 0)],
        "L3": [(0, 0), (0, 10)],
    }


@pytest.fixture
def two_triangles():
    curves = dict(TRIANGLE)
    curves.update({
        "U1": [(100, 0), (110, 0)],
        "U2": [(110, 0), (100, 10)],
        "U3": [(100, 10), (100, 0)],
    })
    return curves


@pytest.fixture
def closed_polyline():
    return {"P1": [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]}


@pytest.fixture
def theta():
    """Square with one diagonal: two independent cycles sharing the diagonal."""
    return {
        "L1": [(0, 0), (10, 0)],
        "L2": [(10, 0), (10, 10)],
        "L3": [(10, 10), (0, 10)],
        "L4": [(0, 10), (0, 0)],
        "L5": [(0, 0), (10, 10)],
    }


@pytest.fixture
def barbell():
    """Two triangles joined by a bridge line B (L7)."""
    return {
        "L1": [(0, 0), (10, 0)],
        "L2": [(10, 0), (0, 10)],
        "L3": [(0, 10), (0, 0)],
        "L7": [(10, 0), (20, 0)],
        "L4": [(20, 0), (30, 0)],
        "L5": [(30, 0), (20, 10)],
        "L6": [(20, 10), (20, 0)],
    }


@pytest.fixture
def circle():
    """A curve that starts and ends at the same point."""
    return {"C1": [(5, 0), (5, 0)]}


@pytest.fixture
def default_config():
    """Create default analysis configuration."""
    from curvegraph.config import AnalysisConfig
    return AnalysisConfig()


@pytest.fixture
def stub_drawing_file(temp_dir):
    """JSON drawing of a triangle with a dangling line."""
    import json

    data = {
        "name": "stub",
        "curves": [
            {"curve_id": "L1", "kind": "line", "points": [[0, 0], [10, 0]]},
            {"curve_id": "L2", "kind": "line", "points": [[10, 0], [0, 10]]},
            {"curve_id": "L3", "kind": "line", "points": [[0, 10], [0, 0]]},
            {"curve_id": "L4", "kind": "line", "points": [[0, 0], [-10, 0]]},
        ],
    }
    path = os.path.join(temp_dir, "stub.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return path


@pytest.fixture
def build_curves():
    """Factory fixture: build_curves(curves, **builder_kwargs) -> built builder."""
    return build
