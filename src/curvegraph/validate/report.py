"""
Report generation for curvegraph.

Writes the analysis report, the validation report and a human-readable summary.
"""

import os

from curvegraph.io.save_artifacts import ensure_dir, save_json
from curvegraph.tracer import get_tracer, trace


@trace(label="generate_report")
def generate_report(report, out_dir):
    """
    Generate report files for an AnalysisReport.

    Creates:
    - analysis_report.json: topology facts and check results
    - validation_report.json: check results only
    - validation_summary.txt: human-readable summary

    Returns the three paths.
    """
    tracer = get_tracer()
    ensure_dir(out_dir)

    analysis_path = os.path.join(out_dir, "analysis_report.json")
    save_json(report, analysis_path)

    validation_path = os.path.join(out_dir, "validation_report.json")
    save_json(report.validation, validation_path)

    summary_path = os.path.join(out_dir, "validation_summary.txt")
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write(format_summary(report))

    tracer.event(f"Report saved: {len(report.validation.checks)} checks, {report.validation.warning_count} warnings")
    return analysis_path, validation_path, summary_path


def format_summary(report):
    """Plain-text summary of an AnalysisReport."""
    validation = report.validation
    title = f"Curve Topology Report: {report.drawing}" if report.drawing else "Curve Topology Report"
    lines = [title, "=" * 40, ""]

    lines.append(f"Curves: {report.curve_count}")
    lines.append(f"Graph: {report.graph_vertices} vertices, {report.graph_edges} edges")
    lines.append(f"Islands: {len(report.partitions)}")
    lines.append(f"Loops: {report.loop_count} ({len(report.loop_curve_ids)} curves in loops)")
    lines.append(f"Dangling vertices: {len(report.dangling_vertices)}")
    lines.append(f"Dangling paths: {report.dangling_path_count}")
    lines.append("")

    failed = [c for c in validation.checks if not c.passed]
    if failed:
        lines.append("ISSUES:")
        lines.append("-" * 40)
        for check in failed:
            lines.append(f"[{check.severity.value.upper()}] {check.rule_id}: {check.message}")
        lines.append("")

    lines.append("ALL CHECKS:")
    lines.append("-" * 40)
    for check in validation.checks:
        lines.append(format_check_result(check))

    return "\n".join(lines) + "\n"


def format_check_result(check):
    """Format a single check result for display."""
    status = "PASS" if check.passed else "FAIL"
    severity = check.severity.value.upper()
    return f"[{status}][{severity}] {check.rule_id}: {check.message}"
