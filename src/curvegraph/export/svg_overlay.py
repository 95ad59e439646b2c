"""
Debug SVG overlay for curvegraph.

Draws every curve through its endpoints, loop curves in black and the rest in
grey, with dangling vertices marked in red. Drawing Y points up, so the
overlay flips Y to keep the picture the right way round.
"""

import re

import svgwrite

from curvegraph.tracer import get_tracer, trace


LOOP_COLOR = "black"
OPEN_COLOR = "#999999"
DANGLING_COLOR = "red"


def _svg_id(curve_id):
    return "curve_" + re.sub(r"[^A-Za-z0-9_.-]", "_", str(curve_id))


def _bounds(points):
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), min(ys), max(xs), max(ys)


@trace(label="emit_overlay_svg")
def emit_overlay_svg(source, curve_ids, loop_ids, dangling_vertices, stroke_width=0.5, marker_radius=1.5):
    """
    Create an svgwrite Drawing of the analysed curves.

    Args:
        source: endpoint provider (get_curve_endpoints)
        curve_ids: curves to draw
        loop_ids: ids drawn as loop curves
        dangling_vertices: CurveVertex objects to mark
    """
    tracer = get_tracer()

    polylines = {}
    for curve_id in curve_ids:
        points = source.get_curve_endpoints(curve_id)
        if points:
            polylines[curve_id] = points

    all_points = [p for pts in polylines.values() for p in pts]
    if all_points:
        min_x, min_y, max_x, max_y = _bounds(all_points)
    else:
        min_x = min_y = 0.0
        max_x = max_y = 1.0
    margin = max(marker_radius * 2, 0.05 * max(max_x - min_x, max_y - min_y, 1.0))
    width = (max_x - min_x) + 2 * margin
    height = (max_y - min_y) + 2 * margin

    def to_svg(p):
        return (p.x - min_x + margin, max_y - p.y + margin)

    dwg = svgwrite.Drawing(size=(f"{width:.2f}", f"{height:.2f}"))
    dwg.viewbox(0, 0, width, height)

    curves_group = dwg.g(id="curves", fill="none", stroke_width=stroke_width)
    for curve_id, points in polylines.items():
        color = LOOP_COLOR if curve_id in loop_ids else OPEN_COLOR
        svg_points = [to_svg(p) for p in points]
        if len(svg_points) == 1 or all(p == svg_points[0] for p in svg_points):
            curves_group.add(dwg.circle(center=svg_points[0], r=marker_radius, stroke=color, id=_svg_id(curve_id)))
        else:
            curves_group.add(dwg.polyline(svg_points, stroke=color, id=_svg_id(curve_id)))
    dwg.add(curves_group)

    markers = dwg.g(id="dangling", fill=DANGLING_COLOR)
    for vertex in dangling_vertices:
        markers.add(dwg.circle(center=to_svg(vertex.point), r=marker_radius))
    dwg.add(markers)

    tracer.event(f"Overlay emitted with {len(polylines)} curves, {len(dangling_vertices)} dangling markers")
    return dwg
