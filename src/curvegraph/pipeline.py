"""
Analysis pipeline for curvegraph.

Loads a drawing, builds the curve graph, runs the topology queries and the
defect checks, and optionally writes reports and debug artifacts.
"""

import os

from curvegraph.config import load_config
from curvegraph.export.svg_overlay import emit_overlay_svg
from curvegraph.graph.builder import CurveGraphBuilder
from curvegraph.io.load_curves import drawing_to_source, load_drawing
from curvegraph.io.save_artifacts import DebugArtifactWriter, ensure_dir
from curvegraph.models import AnalysisReport, sorted_vertex_records
from curvegraph.tracer import get_tracer, trace
from curvegraph.validate.report import generate_report
from curvegraph.validate.rules import TopologyFacts, run_validation


@trace(label="run_analysis")
def run_analysis(curves_path=None, source=None, curve_ids=None, out_dir=None,
                 config=None, config_path=None, debug=False, name=""):
    """
    Run a full topology analysis.

    Args:
        curves_path: drawing file (JSON or YAML); alternative to `source`
        source: endpoint provider, e.g. an InMemoryCurveSource
        curve_ids: ids to analyse; defaults to every id of the source
        out_dir: if given, report files are written here
        config: AnalysisConfig object (optional)
        config_path: path to YAML config file (optional)
        debug: write debug artifacts under out_dir/debug

    Returns:
        AnalysisReport
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)
    if debug:
        config.debug.enabled = True

    if source is None:
        if curves_path is None:
            raise ValueError("Either curves_path or source is required")
        with tracer.span("load", module="pipeline"):
            drawing = load_drawing(curves_path)
            source = drawing_to_source(drawing, angle_units=config.arc.angle_units)
            name = name or drawing.name

    if curve_ids is None:
        curve_ids = source.ids

    with tracer.span("build", module="pipeline"):
        builder = CurveGraphBuilder.from_config(curve_ids, source, config)
        graph = builder.build_graph()

    with tracer.span("analyse", module="pipeline"):
        facts = TopologyFacts(builder)

    with tracer.span("validate", module="pipeline"):
        validation = run_validation(builder, config, facts=facts)

    report = AnalysisReport(
        drawing=name,
        curve_count=len(builder.curve_ids),
        graph_vertices=graph.vertex_count,
        graph_edges=graph.edge_count,
        partitions=sorted(sorted(str(i) for i in group) for group in facts.partitions),
        loop_count=len(facts.loops),
        loop_curve_ids=sorted(str(i) for i in facts.loop_ids),
        dangling_vertices=sorted_vertex_records(facts.dangling_vertices),
        dangling_path_count=len(facts.dangling_paths),
        validation=validation,
    )

    if out_dir:
        with tracer.span("write_reports", module="pipeline"):
            ensure_dir(out_dir)
            generate_report(report, out_dir)

            if config.debug.enabled:
                debug_writer = DebugArtifactWriter(out_dir, enabled=True)
                debug_writer.save_json(graph_metrics(builder, facts), "graph_metrics.json")
                overlay = emit_overlay_svg(
                    source, builder.curve_ids, facts.loop_ids, facts.dangling_vertices,
                    stroke_width=config.debug.stroke_width,
                    marker_radius=config.debug.marker_radius,
                )
                debug_writer.save_svg(overlay, "overlay.svg")

    tracer.event(
        f"Analysis complete: {report.curve_count} curves, {len(report.partitions)} islands, "
        f"{report.loop_count} loops, {len(report.dangling_vertices)} dangling vertices"
    )
    return report


def graph_metrics(builder, facts):
    """Graph statistics for debugging a pass."""
    graph = builder.graph
    non_loop = builder.search_non_loop_vertices()
    return {
        "num_curves": len(builder.curve_ids),
        "num_vertices": graph.vertex_count,
        "num_edges": graph.edge_count,
        "num_non_loop_vertices": len(non_loop),
        "num_partitions": len(facts.partitions),
        "num_loops": len(facts.loops),
        "loop_lengths": [len(loop) for loop in facts.loops],
        "dangling_path_lengths": [len(path) for path in facts.dangling_paths],
        "missing_geometry": [str(i) for i in facts.missing_ids],
    }


def default_out_dir(curves_path):
    """<drawing dir>/<drawing name>_topology"""
    base = os.path.splitext(os.path.basename(curves_path))[0]
    return os.path.join(os.path.dirname(os.path.abspath(curves_path)), f"{base}_topology")
