#!/usr/bin/env python
"""Run xmldifference scenarios from the command line."""

import argparse
import json
import logging
import sys
from pathlib import Path

from xmldifference import EngineConfig, load_config, run_scenarios


def main():
    parser = argparse.ArgumentParser(
        description="Compare control/test XML pairs and check the expected outcome",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_scenarios.py scenarios/ report.json
  python run_scenarios.py scenarios/ report.json --config config.yaml
  python run_scenarios.py -d scenarios/ -r report.json -q
        """
    )

    parser.add_argument(
        "scenarios",
        nargs="?",
        help="Path to folder containing scenario YAML/JSON files"
    )
    parser.add_argument(
        "report",
        nargs="?",
        help="Path to output JSON report file"
    )

    # Also support named arguments
    parser.add_argument("-d", "--scenarios", dest="scenarios_named", help="Path to scenarios folder")
    parser.add_argument("-r", "--report", dest="report_named", help="Path to output report")
    parser.add_argument("-c", "--config", help="Path to YAML/JSON engine config")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress console output")

    args = parser.parse_args()

    # Use named args if positional not provided
    scenarios_path = args.scenarios or args.scenarios_named
    report_path = args.report or args.report_named

    if not scenarios_path:
        parser.error("Scenarios path is required")
    if not report_path:
        parser.error("Report path is required")

    if not Path(scenarios_path).exists():
        print(f"Error: Scenarios folder not found: {scenarios_path}", file=sys.stderr)
        return 1

    config = EngineConfig()
    if args.config:
        if not Path(args.config).exists():
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            return 1
        config = load_config(args.config)

    logging.basicConfig(
        level=config.log_level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not args.quiet:
        print(f"Scenarios: {scenarios_path}")
        print(f"Report: {report_path}")
        print(f"Ignore whitespace: {config.ignore_whitespace}\n")

    report = run_scenarios(
        scenario_folder=scenarios_path,
        engine_config=config,
        print_report=not args.quiet
    )

    with open(report_path, 'w') as f:
        json.dump(report.to_dict(), indent=2, fp=f)

    if not args.quiet:
        print(f"\nReport saved to: {report_path}")

    return 0 if report.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
