#!/usr/bin/env python3
"""
Solution Dependency Analysis CLI

Builds the dependency graph of a solution scan and reports circular
references, missing references, layering and complexity metrics.

Pipeline:
    1. Component Catalog     → normalised components
    2. Reference Extraction  → dependency facts from form / view payloads
    3. Graph Build           → graph + missing references
    4. Cycle Detection, Layering, Metrics

Usage:
    python bin/analyze_solution.py scan.json
    python bin/analyze_solution.py scan.yaml --top 10 -o output/analysis.json
    python bin/analyze_solution.py scan.json --csv output/components.csv --quiet
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import argparse
import json
import logging
from typing import List, Optional

from solution_deps.adapters.inbound import load_scan
from solution_deps.adapters.inbound.cli import ConsoleDisplay
from solution_deps.adapters.outbound.export import CsvResultExporter, JsonResultExporter
from solution_deps.application.services import AnalysisService
from solution_deps.config import Settings


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="analyze_solution",
        description="Dependency analysis for Dataverse solution scans.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s scan.json                     Analyze and print the report
  %(prog)s scan.json -o out.json         Also export the full result as JSON
  %(prog)s scan.json --csv out.csv       Also export the component table
  %(prog)s scan.json --json              Print the JSON export to stdout
""",
    )
    parser.add_argument("scan", help="Solution scan file (.json, .yaml or .yml)")

    policy = parser.add_argument_group("Metrics policy")
    policy.add_argument("--top", type=int, metavar="N", help="Size of the most-connected list")
    policy.add_argument("--precision", type=int, metavar="DIGITS", help="Complexity score rounding")

    output = parser.add_argument_group("Output")
    output.add_argument("--output", "-o", metavar="FILE", help="Export results to JSON file")
    output.add_argument("--csv", metavar="FILE", help="Export the component table to CSV")
    output.add_argument("--json", action="store_true", help="Print results as JSON to stdout")
    output.add_argument("--no-color", action="store_true", help="Disable colored output")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    display = ConsoleDisplay(use_color=not args.no_color)

    try:
        settings = Settings.from_env().with_overrides(top_n=args.top, precision=args.precision)
    except ValueError as exc:
        print(display.colored(f"analysis failed: invalid input: {exc}", display.Colors.RED), file=sys.stderr)
        return 1

    log_level = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet or args.json
        else getattr(logging, settings.log_level, logging.INFO)
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    service = AnalysisService(settings)

    try:
        scan = load_scan(args.scan)
        result = service.analyze_scan(scan)
    except (TypeError, ValueError, OSError) as exc:
        print(display.colored(f"analysis failed: invalid input: {exc}", display.Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Analysis failed")
        return 1

    json_exporter = JsonResultExporter()
    if args.output:
        json_exporter.export(result, args.output)
    if args.csv:
        CsvResultExporter().export(result, args.csv)

    if args.json:
        print(json_exporter.dumps(result))
    elif not args.quiet:
        findings, summary = service.findings(result)
        display.display_result(result)
        display.display_findings(findings, summary)
        display.display_warnings(list(result.warnings))
        for path in (args.output, args.csv):
            if path:
                print(display.colored(f"\n✓ Results exported to: {path}", display.Colors.GREEN))

    return 0


if __name__ == "__main__":
    sys.exit(main())
