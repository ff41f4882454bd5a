"""
Tests for the Typer command line interface.
"""

import json

from typer.testing import CliRunner

from slotmatcher import __version__
from slotmatcher.adapters.sample_data import load_sample_request
from slotmatcher.cli.app import app

runner = CliRunner()


def test_match_sample_json():
    """--sample --json prints the raw response."""
    result = runner.invoke(app, ["match", "--sample", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["total_employees"] == 5
    assert payload["best_availability"][0]["employee_name"] == "Fatih"


def test_match_sample_tables():
    """Without --json the result is rendered as tables."""
    result = runner.invoke(app, ["match", "--sample"])

    assert result.exit_code == 0
    assert "Mehmet" in result.stdout
    assert "09:45:00" in result.stdout


def test_match_request_file(tmp_path):
    """A request file with a target employee is matched."""
    body = load_sample_request()
    body["target_employee"] = {"name": "Nadi"}
    request_file = tmp_path / "request.json"
    request_file.write_text(json.dumps(body), encoding="utf-8")

    result = runner.invoke(app, ["match", str(request_file), "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["availability_target_employee"]["success"] is True


def test_match_invalid_request(tmp_path):
    """A rejected request exits with code 1."""
    request_file = tmp_path / "request.json"
    request_file.write_text(json.dumps({"client_booking_time": "2025-09-10T09:00:00"}), encoding="utf-8")

    result = runner.invoke(app, ["match", str(request_file)])

    assert result.exit_code == 1
    assert "employees is required" in result.stdout


def test_match_requires_input():
    """Without a file or --sample there is nothing to match."""
    result = runner.invoke(app, ["match"])

    assert result.exit_code == 1


def test_match_missing_config(tmp_path):
    """An explicit config path must exist."""
    result = runner.invoke(app, ["match", "--sample", "--config", str(tmp_path / "nope.yaml")])

    assert result.exit_code == 1
    assert "Config file not found" in result.stdout


def test_version():
    """version prints the package version."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
