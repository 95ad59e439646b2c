"""
Command-line interface for curvegraph.

Provides commands for analysing drawings and creating a default config.
"""

import argparse
import sys

from curvegraph.config import load_config, save_default_config
from curvegraph.tracer import configure_tracer, get_tracer


def build_parser():
    parser = argparse.ArgumentParser(
        prog="curvegraph",
        description="curvegraph: find loops, dangling curves and disjoint islands in line drawings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    analyze_parser = subparsers.add_parser("analyze", help="Analyse the topology of a drawing")
    analyze_parser.add_argument(
        "--curves", "-i",
        required=True,
        help="Drawing file (JSON or YAML)",
    )
    analyze_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Output directory for reports (default: <drawing>_topology next to the input)",
    )
    analyze_parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    analyze_parser.add_argument(
        "--radius",
        type=float,
        default=None,
        help="Override topology.adjacency_radius",
    )
    analyze_parser.add_argument(
        "--include-self-loop",
        action="store_true",
        help="Treat curves that start and end at the same point as loops",
    )
    analyze_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when any warning-level check fails",
    )
    analyze_parser.add_argument(
        "--debug",
        action="store_true",
        help="Write debug artifacts (graph metrics, SVG overlay)",
    )
    analyze_parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    analyze_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    analyze_parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    analyze_parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )

    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="curvegraph_config.yaml",
        help="Output path for config file",
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "analyze":
        return handle_analyze(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def handle_analyze(args):
    """Handle the analyze command."""
    configure_tracer(
        enabled=args.trace,
        level=args.trace_level,
        file_path=args.trace_file,
        json_output=args.trace_json,
    )

    tracer = get_tracer()

    try:
        from curvegraph.pipeline import default_out_dir, run_analysis

        config = load_config(args.config)
        if args.radius is not None:
            if args.radius <= 0:
                raise ValueError("--radius must be positive")
            config.topology.adjacency_radius = args.radius
        if args.include_self_loop:
            config.topology.include_self_loop = True

        out_dir = args.out or default_out_dir(args.curves)

        with tracer.span("cli_analyze", module="cli"):
            report = run_analysis(
                curves_path=args.curves,
                out_dir=out_dir,
                config=config,
                debug=args.debug,
            )

        validation = report.validation
        print(f"\nAnalysis completed.")
        print(f"  Curves: {report.curve_count}")
        print(f"  Islands: {len(report.partitions)}")
        print(f"  Loops: {report.loop_count}")
        print(f"  Dangling vertices: {len(report.dangling_vertices)}")
        print(f"  Validation errors: {validation.error_count}")
        print(f"  Validation warnings: {validation.warning_count}")
        print(f"\nReports saved to: {out_dir}/")

        if validation.has_errors or (args.strict and validation.warning_count):
            print(f"\n[!] Defects detected. Review validation_report.json")
            return 1

        return 0

    except Exception as e:
        tracer.event(f"Analysis failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1
    finally:
        tracer.config.close()


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
