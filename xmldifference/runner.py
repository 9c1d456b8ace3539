"""Scenario runner: compares folders of control/test XML pairs."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml

from .engine import DifferenceEngine
from .exceptions import ScenarioError
from .models import EngineConfig, DiffReport

logger = logging.getLogger(__name__)

OUTCOMES = ("identical", "similar", "different")
SCENARIO_PATTERNS = ("*.yaml", "*.yml", "*.json")


@dataclass
class Scenario:
    """A control/test pair and the outcome expected from comparing them."""
    name: str
    control: str
    test: str
    expect: str = "identical"

    @classmethod
    def from_dict(cls, data: Any, path: str) -> Scenario:
        if not isinstance(data, dict):
            raise ScenarioError(path, "expected a mapping")

        for key in ("control", "test"):
            if not isinstance(data.get(key), str):
                raise ScenarioError(path, f"'{key}' must be an XML string")

        expect = data.get("expect", "identical")
        if expect not in OUTCOMES:
            raise ScenarioError(path, f"'expect' must be one of {list(OUTCOMES)}")

        return cls(
            name=data.get("name", Path(path).stem),
            control=data["control"],
            test=data["test"],
            expect=expect
        )


@dataclass
class ScenarioResult:
    """Result of a single scenario."""
    name: str
    scenario_path: str
    expected: str
    outcome: str
    passed: bool
    diff_report: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "scenario_path": self.scenario_path,
            "expected": self.expected,
            "outcome": self.outcome,
            "passed": self.passed,
        }
        if self.diff_report:
            result["diff_report"] = self.diff_report
        return result


@dataclass
class GlobalReport:
    """Report across all scenarios in a folder."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    scenarios: list[ScenarioResult] = field(default_factory=list)
    aggregations: dict[str, int] = field(default_factory=dict)
    breakdown: dict[str, list[str]] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        if not self.breakdown:
            self.breakdown = {
                "identical": [],
                "similar": [],
                "different": [],
                "error": []
            }

    def to_dict(self) -> dict:
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_scenarios": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "pass_rate": pass_rate
            },
            "breakdown": self.breakdown,
            "aggregations": self.aggregations,
            "scenarios": [s.to_dict() for s in self.scenarios]
        }

    def print_summary(self):
        pass_rate = f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"
        print(f"\nScenario Results: {self.passed}/{self.total} passed ({pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")

        for outcome, names in self.breakdown.items():
            if names:
                print(f"  {outcome.capitalize()}: {len(names)} scenarios")

        if self.aggregations:
            print(f"\nDifferences by type:")
            for name, count in sorted(self.aggregations.items()):
                print(f"  {name}: {count}")


class ScenarioRunner:
    """
    Runs every scenario file in a folder through the engine.

    A scenario file is YAML (or JSON) holding `name`, `control`, `test`
    and `expect`, where `expect` is one of identical, similar, different.

    Usage:
        runner = ScenarioRunner(EngineConfig(ignore_whitespace=True))
        report = runner.run_folder("scenarios/")
        report.print_summary()
    """

    def __init__(self, engine_config: Optional[EngineConfig] = None):
        self.engine = DifferenceEngine(engine_config or EngineConfig())

    def load_scenario(self, path: Path) -> Scenario:
        """Load a scenario from a YAML or JSON file."""
        with open(path, 'r') as f:
            content = f.read()

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ScenarioError(str(path), f"failed to parse: {e}")

        return Scenario.from_dict(data, str(path))

    def run_scenario(self, scenario: Scenario, scenario_path: str = "") -> ScenarioResult:
        """Run a single scenario."""
        result = self.engine.diff(scenario.control, scenario.test)

        if isinstance(result, DiffReport):
            outcome = _outcome(result)
            return ScenarioResult(
                name=scenario.name,
                scenario_path=scenario_path,
                expected=scenario.expect,
                outcome=outcome,
                passed=outcome == scenario.expect,
                diff_report=result.to_dict()
            )

        return ScenarioResult(
            name=scenario.name,
            scenario_path=scenario_path,
            expected=scenario.expect,
            outcome="error",
            passed=False,
            diff_report={"error": result.error}
        )

    def run_folder(self, folder: str | Path, print_report: bool = True) -> GlobalReport:
        """Run all scenario files in a folder."""
        report = GlobalReport()
        folder_path = Path(folder)

        scenario_files = sorted(
            {p for pattern in SCENARIO_PATTERNS for p in folder_path.glob(pattern)}
        )

        for scenario_file in scenario_files:
            try:
                scenario = self.load_scenario(scenario_file)
            except ScenarioError as e:
                logger.warning("Skipping scenario: %s", e)
                result = _invalid_result(scenario_file, e)
            else:
                result = self.run_scenario(scenario, str(scenario_file))

            report.scenarios.append(result)
            report.total += 1
            report.breakdown[result.outcome].append(result.name)

            if result.passed:
                report.passed += 1
            else:
                report.failed += 1
                logger.info("Scenario %s expected %s but was %s",
                            result.name, result.expected, result.outcome)

            if print_report:
                print(f"{'PASS' if result.passed else 'FAIL'}: {result.name} ({result.outcome})")

            if result.diff_report:
                for entry in result.diff_report.get("differences", []):
                    report.aggregations[entry["type"]] = report.aggregations.get(entry["type"], 0) + 1

        if print_report:
            report.print_summary()

        return report


def _invalid_result(path: Path, error: ScenarioError) -> ScenarioResult:
    """Error result for a scenario file that could not be loaded."""
    return ScenarioResult(
        name=path.stem,
        scenario_path=str(path),
        expected="unknown",
        outcome="error",
        passed=False,
        diff_report={"error": {
            "code": "SCENARIO_ERROR",
            "message": error.message,
            "details": {"path": error.path}
        }}
    )


def _outcome(report: DiffReport) -> str:
    if report.identical:
        return "identical"
    if report.similar:
        return "similar"
    return "different"


def run_scenarios(
    scenario_folder: str | Path,
    engine_config: Optional[EngineConfig] = None,
    print_report: bool = True
) -> GlobalReport:
    """
    Run every scenario in a folder.

        from xmldifference.runner import run_scenarios
        report = run_scenarios("scenarios/")

    Args:
        scenario_folder: Folder containing scenario YAML/JSON files
        engine_config: Optional engine configuration
        print_report: Whether to print the summary report

    Returns:
        GlobalReport with all results
    """
    folder = Path(scenario_folder)
    if not folder.exists():
        raise FileNotFoundError(f"Scenario folder not found: {folder}")

    runner = ScenarioRunner(engine_config)
    return runner.run_folder(folder, print_report)
