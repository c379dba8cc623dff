"""
Dependency Analysis CLI

Builds the dependency graph of a registry file (JSON or YAML), reports
statistics, cycles and the load order, and optionally exports the graph.

Usage:
    depgraph-analyze registry.yaml
    depgraph-analyze registry.json --resolver-fields extends mixins
    depgraph-analyze registry.json --chain layout/desktop/admin
    depgraph-analyze registry.json --json -o output/analysis.json
    depgraph-analyze registry.json --visualization output/graph.json --layout tree
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .analysis.analyzer import DependencyAnalyzer
from .analysis.chain_tracer import dependency_chain
from .analysis.cycle_detector import cycle_members
from .analysis.display import Colors, colored, format_report
from .config import Settings
from .core.graph_exporter import GraphExporter
from .core.resolvers import default_resolver, field_resolver
from .visualization.exporter import LayoutAlgorithm, VisualizationExporter

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CYCLES = 2


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depgraph-analyze",
        description="Dependency graph analysis for registries of interdependent artifacts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s registry.yaml                        Print the analysis report
  %(prog)s registry.json --chain base/web/home  Show root-to-entity chains
  %(prog)s registry.json --json                 Print the result as JSON
  %(prog)s registry.json --fail-on-cycles       Exit with 2 when cycles exist
""",
    )
    parser.add_argument("registry", help="Registry file (.json, .yaml, .yml)")
    parser.add_argument(
        "--resolver-fields", nargs="+", metavar="FIELD",
        help="Metadata fields holding dependency IDs (default: extends mixins dependencies)",
    )
    parser.add_argument("--chain", metavar="ID", help="Print every dependency chain ending at ID")
    parser.add_argument(
        "--limit", type=int, default=settings.report_limit,
        help=f"Load-order entries shown in the report (default: {settings.report_limit})",
    )
    parser.add_argument(
        "--fail-on-cycles", action="store_true",
        help="Exit with status 2 when circular dependencies are found",
    )

    output = parser.add_argument_group("Output")
    output.add_argument("--output", "-o", metavar="FILE", help="Export the analysis result to JSON")
    output.add_argument("--graphml", metavar="FILE", help="Export the graph to GraphML")
    output.add_argument("--gexf", metavar="FILE", help="Export the graph to GEXF")
    output.add_argument("--visualization", metavar="FILE", help="Export visualization data to JSON")
    output.add_argument(
        "--layout", choices=[la.value for la in LayoutAlgorithm], default=settings.layout,
        help=f"Layout hint for visualization data (default: {settings.layout})",
    )
    output.add_argument("--json", action="store_true", help="Print results as JSON to stdout")
    output.add_argument("--no-color", action="store_true", help="Disable colored output")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_ERROR
    args = build_parser(settings).parse_args(argv)

    log_level = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet
        else getattr(logging, settings.log_level, logging.INFO)
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    use_color = not args.no_color and sys.stdout.isatty()

    try:
        resolver = field_resolver(*args.resolver_fields) if args.resolver_fields else default_resolver
        analyzer = DependencyAnalyzer(resolver=resolver, detect_cycles=settings.detect_cycles)
        result = analyzer.analyze_file(args.registry)

        exporter = GraphExporter()
        members = cycle_members(result.cycles)
        if args.output:
            exporter.export_to_json(result, args.output)
        if args.graphml:
            exporter.export_to_graphml(result.graph, args.graphml, in_cycle=members)
        if args.gexf:
            exporter.export_to_gexf(result.graph, args.gexf, in_cycle=members)
        if args.visualization:
            data = VisualizationExporter().export(result.graph, cycles=result.cycles,
                                                  layout=args.layout)
            exporter.export_to_json(data, args.visualization)

        chains = dependency_chain(result.graph, args.chain) if args.chain else None

        if args.json:
            payload = result.to_dict()
            if chains is not None:
                payload['chains'] = {args.chain: chains}
            print(json.dumps(payload, indent=2, default=str))
        elif not args.quiet:
            print(format_report(result, order_limit=args.limit, color=use_color))
            if args.chain:
                print()
                print(colored(f"Dependency chains for {args.chain}", Colors.BLUE,
                              bold=True, enabled=use_color))
                if not chains:
                    print("  (none)")
                for chain in chains or []:
                    print("  " + " -> ".join(chain))

        if args.fail_on_cycles and result.has_cycles:
            return EXIT_CYCLES
        return EXIT_OK

    except Exception as exc:
        print(colored(f"Error: {exc}", Colors.RED, enabled=use_color), file=sys.stderr)
        if args.verbose:
            logging.exception("Analysis failed")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
