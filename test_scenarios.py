"""Tests for configuration loading and the scenario runner."""

import json
import sys
import textwrap

import pytest
from xmldifference import (
    EngineConfig,
    LogLevel,
    ConfigError,
    ScenarioError,
    ScenarioRunner,
    load_config,
    run_scenarios,
)

import run_scenarios as cli


SCENARIOS = {
    "01_identical.yaml": """
        name: identical
        control: <a><b>x</b></a>
        test: <a><b>x</b></a>
        expect: identical
    """,
    "02_reordered.yaml": """
        name: reordered attributes
        control: '<a x="1" y="2"/>'
        test: '<a y="2" x="1"/>'
        expect: similar
    """,
    "03_changed.yml": """
        name: changed text
        control: <a>old</a>
        test: <a>new</a>
        expect: identical
    """,
}


def write_scenarios(folder, scenarios=SCENARIOS):
    for filename, content in scenarios.items():
        (folder / filename).write_text(textwrap.dedent(content))


class TestEngineConfig:
    """Test building EngineConfig from mappings and files."""

    def test_defaults(self):
        config = EngineConfig.from_dict(None)
        assert config.ignore_whitespace is False
        assert config.log_level == LogLevel.INFO

    def test_from_dict(self):
        config = EngineConfig.from_dict({
            "ignore_whitespace": True,
            "log_level": "debug",
            "max_document_size_mb": 5,
        })
        assert config.ignore_whitespace is True
        assert config.log_level == LogLevel.DEBUG
        assert config.max_document_size_mb == 5

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="ignore_comments"):
            EngineConfig.from_dict({"ignore_comments": True})

    def test_bad_values(self):
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({"ignore_whitespace": "yes"})
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({"max_document_size_mb": -1})
        with pytest.raises(ConfigError):
            EngineConfig.from_dict({"log_level": "LOUD"})

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("ignore_whitespace: true\nlog_level: WARN\n")
        config = load_config(path)
        assert config.ignore_whitespace is True
        assert config.log_level == LogLevel.WARN

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"collect_statistics": False}))
        assert load_config(path).collect_statistics is False

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == EngineConfig()

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("ignore_whitespace: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)


class TestScenarioRunner:
    """Test running folders of scenarios."""

    def test_run_folder(self, tmp_path):
        write_scenarios(tmp_path)

        report = ScenarioRunner().run_folder(tmp_path, print_report=False)

        assert report.total == 3
        assert report.passed == 2
        assert report.failed == 1
        assert report.breakdown["identical"] == ["identical"]
        assert report.breakdown["similar"] == ["reordered attributes"]
        assert report.breakdown["different"] == ["changed text"]
        assert report.aggregations == {"ATTR_SEQUENCE": 2, "TEXT_VALUE": 1}

    def test_report_dict(self, tmp_path):
        write_scenarios(tmp_path)

        data = run_scenarios(tmp_path, print_report=False).to_dict()

        assert data["summary"]["pass_rate"] == "66.7%"
        failed = [s for s in data["scenarios"] if not s["passed"]]
        assert failed[0]["outcome"] == "different"
        assert failed[0]["diff_report"]["differences"][0]["expected"] == "old"

    def test_ignore_whitespace_config(self, tmp_path):
        write_scenarios(tmp_path, {
            "indented.yaml": """
                name: indented
                control: "<a>\\n  <b>x</b>\\n</a>"
                test: <a><b> x </b></a>
                expect: identical
            """,
        })

        strict = run_scenarios(tmp_path, print_report=False)
        lenient = run_scenarios(
            tmp_path, EngineConfig(ignore_whitespace=True), print_report=False
        )

        assert strict.failed == 1
        assert lenient.passed == 1

    def test_parse_error_is_reported(self, tmp_path):
        write_scenarios(tmp_path, {
            "broken.yaml": """
                control: <a>
                test: <a/>
            """,
        })

        report = run_scenarios(tmp_path, print_report=False)

        assert report.breakdown["error"] == ["broken"]
        assert report.scenarios[0].diff_report["error"]["code"] == "PARSE_ERROR"

    def test_invalid_scenario_is_recorded(self, tmp_path):
        """Test that a malformed file is an error result and the run continues."""
        write_scenarios(tmp_path, {
            "bad.yaml": """
                control: <a/>
                expect: maybe
            """,
            "good.yaml": SCENARIOS["01_identical.yaml"],
        })

        report = run_scenarios(tmp_path, print_report=False)

        assert report.total == 2
        assert report.passed == 1
        assert report.failed == 1
        assert report.breakdown["error"] == ["bad"]
        assert report.breakdown["identical"] == ["identical"]
        error = report.scenarios[0].diff_report["error"]
        assert error["code"] == "SCENARIO_ERROR"
        assert error["details"]["path"].endswith("bad.yaml")

    def test_load_scenario_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("control: <a/>\nexpect: maybe\n")
        with pytest.raises(ScenarioError):
            ScenarioRunner().load_scenario(path)

    def test_element_against_text_is_different(self, tmp_path):
        """Test that a node kind mismatch is a difference, not an error."""
        write_scenarios(tmp_path, {
            "kinds.yaml": """
                name: element meets text
                control: <a><b/></a>
                test: <a>t</a>
                expect: different
            """,
        })

        report = run_scenarios(tmp_path, print_report=False)

        assert report.passed == 1
        assert report.breakdown["different"] == ["element meets text"]
        assert report.breakdown["error"] == []
        assert report.aggregations == {"NODE_TYPE": 1}

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_scenarios(tmp_path / "nowhere")

    def test_print_summary(self, tmp_path, capsys):
        write_scenarios(tmp_path)
        run_scenarios(tmp_path)
        out = capsys.readouterr().out
        assert "FAIL: changed text (different)" in out
        assert "Scenario Results: 2/3 passed (66.7%)" in out


class TestCommandLine:
    """Test the run_scenarios.py script."""

    def test_writes_report(self, tmp_path, monkeypatch):
        folder = tmp_path / "scenarios"
        folder.mkdir()
        write_scenarios(folder)
        report_path = tmp_path / "report.json"
        monkeypatch.setattr(sys, "argv", ["run_scenarios.py", str(folder), str(report_path), "-q"])

        exit_code = cli.main()

        assert exit_code == 1
        assert json.loads(report_path.read_text())["summary"]["total_scenarios"] == 3

    def test_with_config(self, tmp_path, monkeypatch):
        folder = tmp_path / "scenarios"
        folder.mkdir()
        write_scenarios(folder, {"01_identical.yaml": SCENARIOS["01_identical.yaml"]})
        config_path = tmp_path / "config.yaml"
        config_path.write_text("ignore_whitespace: true\n")
        report_path = tmp_path / "report.json"
        monkeypatch.setattr(sys, "argv", [
            "run_scenarios.py", "-d", str(folder), "-r", str(report_path),
            "--config", str(config_path), "--quiet",
        ])

        assert cli.main() == 0

    def test_missing_folder(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", [
            "run_scenarios.py", str(tmp_path / "nowhere"), str(tmp_path / "r.json"),
        ])
        assert cli.main() == 1
        assert "Scenarios folder not found" in capsys.readouterr().err
