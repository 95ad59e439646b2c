"""
Drawing defect checks for curvegraph.

Each rule turns one topology query into a CheckResult that a repair step (or
a person) can act on.
"""

from curvegraph.models import CheckResult, Severity, ValidationReport
from curvegraph.spatial.kdtree import CurveVertexKdTree
from curvegraph.tracer import get_tracer, trace


class TopologyFacts:
    """
    Results of the topology queries for one built graph.

    Computed once and shared by all rules.
    """

    def __init__(self, builder):
        self.builder = builder
        self.partitions = builder.partition_graph()
        self.loops = builder.search_loops()
        self.loop_ids = builder.search_all_ids_in_loop()
        self.dangling_vertices = builder.search_dangling_vertices()
        self.dangling_paths = builder.search_dangling_paths()
        self.missing_ids = builder.missing_geometry_ids


@trace(label="run_validation")
def run_validation(builder, config, facts=None):
    """
    Run all defect checks against a built CurveGraphBuilder.

    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()

    if facts is None:
        facts = TopologyFacts(builder)
    max_evidence = config.validation.max_evidence

    checks = [
        check_dangling_vertices(facts, max_evidence),
        check_isolated_curves(facts, max_evidence),
        check_disjoint_islands(facts, max_evidence),
        check_open_curves(facts, max_evidence),
        check_missing_geometry(facts, max_evidence),
    ]

    report = ValidationReport(checks=checks)
    tracer.event(f"Validation complete: {report.error_count} errors, {report.warning_count} warnings")
    return report


def _sorted_ids(ids):
    return sorted((str(i) for i in ids))


def check_dangling_vertices(facts, max_evidence=5):
    """
    Check for curve ends that do not connect to anything.

    Evidence includes the gap to the nearest endpoint of another curve, which
    is what a repair step would have to bridge.
    """
    dangling = sorted(facts.dangling_vertices, key=lambda v: (str(v.curve_id), v.point.x, v.point.y))

    if not dangling:
        return CheckResult(
            rule_id="dangling_vertices",
            severity=Severity.WARN,
            passed=True,
            message="No dangling vertices",
            evidence={},
        )

    all_vertices = []
    for curve_id in facts.builder.curve_ids:
        all_vertices.extend(facts.builder.curve_vertices(curve_id))
    kdtree = CurveVertexKdTree(all_vertices)

    samples = []
    for vertex in dangling[:max_evidence]:
        nearest, gap = kdtree.nearest(vertex.point, exclude_id=vertex.curve_id)
        samples.append({
            "curve_id": str(vertex.curve_id),
            "point": vertex.point.to_list(),
            "nearest_curve_id": str(nearest.curve_id) if nearest is not None else None,
            "gap": gap if nearest is not None else None,
        })

    return CheckResult(
        rule_id="dangling_vertices",
        severity=Severity.WARN,
        passed=False,
        message=f"Found {len(dangling)} dangling vertices on {len({v.curve_id for v in dangling})} curves",
        evidence={"count": len(dangling), "vertices": samples},
    )


def check_isolated_curves(facts, max_evidence=5):
    """
    Check for curves that touch nothing else and do not close on themselves.
    """
    isolated = []
    for group in facts.partitions:
        if len(group) == 1:
            (curve_id,) = group
            if curve_id not in facts.loop_ids:
                isolated.append(curve_id)
    isolated = _sorted_ids(isolated)

    if isolated:
        return CheckResult(
            rule_id="isolated_curves",
            severity=Severity.WARN,
            passed=False,
            message=f"Found {len(isolated)} isolated curves",
            evidence={"count": len(isolated), "curve_ids": isolated[:max_evidence]},
        )

    return CheckResult(
        rule_id="isolated_curves",
        severity=Severity.WARN,
        passed=True,
        message="No isolated curves",
        evidence={},
    )


def check_disjoint_islands(facts, max_evidence=5):
    """
    Check whether the drawing falls apart into several unconnected islands.
    """
    sizes = sorted((len(g) for g in facts.partitions), reverse=True)

    if len(sizes) > 1:
        return CheckResult(
            rule_id="disjoint_islands",
            severity=Severity.INFO,
            passed=False,
            message=f"Drawing has {len(sizes)} disjoint islands",
            evidence={"count": len(sizes), "largest_sizes": sizes[:max_evidence]},
        )

    return CheckResult(
        rule_id="disjoint_islands",
        severity=Severity.INFO,
        passed=True,
        message="Drawing is a single connected island" if sizes else "Drawing has no connected curves",
        evidence={"count": len(sizes)},
    )


def check_open_curves(facts, max_evidence=5):
    """
    Check for curves that are not part of any loop.
    """
    connected = set()
    for group in facts.partitions:
        connected.update(group)
    open_ids = _sorted_ids(connected - facts.loop_ids)

    if open_ids:
        return CheckResult(
            rule_id="open_curves",
            severity=Severity.INFO,
            passed=False,
            message=f"{len(open_ids)} curves are not part of any loop",
            evidence={"count": len(open_ids), "curve_ids": open_ids[:max_evidence], "loops": len(facts.loops)},
        )

    return CheckResult(
        rule_id="open_curves",
        severity=Severity.INFO,
        passed=True,
        message="All curves are part of a loop",
        evidence={"loops": len(facts.loops)},
    )


def check_missing_geometry(facts, max_evidence=5):
    """
    Check for curve ids the endpoint provider could not evaluate.
    """
    missing = _sorted_ids(facts.missing_ids)

    if missing:
        return CheckResult(
            rule_id="missing_geometry",
            severity=Severity.WARN,
            passed=False,
            message=f"{len(missing)} curves have no endpoints and were skipped",
            evidence={"count": len(missing), "curve_ids": missing[:max_evidence]},
        )

    return CheckResult(
        rule_id="missing_geometry",
        severity=Severity.WARN,
        passed=True,
        message="All curves have endpoints",
        evidence={},
    )
