"""
Drawing loading for curvegraph.

A drawing file is JSON or YAML holding a list of curve records, either at the
top level or under a "curves" key. A record may give its geometry as WKT
instead of explicit fields:

    curves:
      - {curve_id: L1, kind: line, points: [[0, 0], [10, 0]]}
      - {curve_id: A1, kind: arc, center: [0, 0], radius: 5, start_angle: 0, end_angle: 90}
      - {curve_id: P1, wkt: "LINESTRING (10 0, 10 10, 0 10)"}
"""

import json
import os

import yaml
from pydantic import ValidationError
from shapely import wkt as shapely_wkt
from shapely.errors import ShapelyError

from curvegraph.geometry.endpoints import InMemoryCurveSource, record_from_geometry
from curvegraph.models import Drawing
from curvegraph.tracer import get_tracer, trace


YAML_EXTENSIONS = (".yaml", ".yml")


def validate_drawing_path(path):
    """
    Check that a drawing file can be loaded.

    Returns a list of error messages (empty if valid).
    """
    errors = []
    if not path:
        errors.append("No drawing file provided")
    elif not os.path.exists(path):
        errors.append(f"File not found: {path}")
    elif not os.path.isfile(path):
        errors.append(f"Not a file: {path}")
    elif not path.lower().endswith((".json",) + YAML_EXTENSIONS):
        errors.append(f"Unsupported drawing format: {os.path.splitext(path)[1]}")
    return errors


def parse_drawing(data, name=""):
    """Validate raw drawing data (dict or list) into a Drawing."""
    if isinstance(data, list):
        data = {"curves": data}
    if not isinstance(data, dict):
        raise ValueError(f"Drawing {name!r} must be a mapping or a list of curves")

    data = dict(data)
    data.setdefault("name", name)
    data["curves"] = [_expand_wkt(entry) for entry in data.get("curves") or []]

    try:
        return Drawing.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid drawing {name!r}: {e}") from e


def _expand_wkt(entry):
    if not isinstance(entry, dict) or "wkt" not in entry:
        return entry
    try:
        geom = shapely_wkt.loads(entry["wkt"])
    except ShapelyError as e:
        raise ValueError(f"Invalid WKT for curve {entry.get('curve_id')!r}: {e}") from e
    record = record_from_geometry(entry.get("curve_id", ""), geom)
    expanded = record.model_dump()
    expanded.update({k: v for k, v in entry.items() if k not in ("wkt", "points", "kind")})
    return expanded


@trace(label="load_drawing")
def load_drawing(path):
    """Load and validate a drawing file."""
    tracer = get_tracer()

    errors = validate_drawing_path(path)
    if errors:
        raise ValueError(f"Input validation failed: {errors}")

    with open(path, "r", encoding="utf-8") as f:
        if path.lower().endswith(YAML_EXTENSIONS):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    name = os.path.splitext(os.path.basename(path))[0]
    drawing = parse_drawing(data or {}, name=name)

    ids = [c.curve_id for c in drawing.curves]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValueError(f"Duplicate curve ids in {path}: {duplicates[:5]}")

    tracer.event(f"Loaded {len(drawing.curves)} curves from {path}")
    return drawing


def drawing_to_source(drawing, angle_units="degrees"):
    """Endpoint provider for the curves of a drawing."""
    return InMemoryCurveSource(drawing.curves, angle_units=angle_units)
