"""
Artifact saving utilities for curvegraph.

Handles writing reports, debug JSON and SVG overlays.
"""

import json
import os

from curvegraph.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_json(data, path, indent=2):
    """
    Save a dictionary or pydantic model to JSON.
    """
    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    get_tracer().event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """
    Save SVG content to file.

    Accepts an svgwrite Drawing or a string.
    """
    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    get_tracer().event(f"Saved SVG: {path}")


class DebugArtifactWriter:
    """
    Writes debug artifacts for one analysis pass under <out_dir>/debug.

    Every method is a no-op when disabled.
    """

    def __init__(self, out_dir, enabled=True):
        self.out_dir = out_dir
        self.enabled = enabled

    def get_debug_dir(self):
        debug_dir = os.path.join(self.out_dir, "debug")
        ensure_dir(debug_dir)
        return debug_dir

    def save_json(self, data, filename):
        """Save a JSON artifact."""
        if not self.enabled:
            return None
        path = os.path.join(self.get_debug_dir(), filename)
        save_json(data, path)
        return path

    def save_svg(self, svg_content, filename):
        """Save an SVG artifact."""
        if not self.enabled:
            return None
        path = os.path.join(self.get_debug_dir(), filename)
        save_svg(svg_content, path)
        return path
