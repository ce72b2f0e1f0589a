"""Tests for the command line runner."""

import json

import pytest

from src.spokesperson import runner


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("SPOKESPERSON_RANGE_DAYS", "SPOKESPERSON_TIMEZONE", "SPOKESPERSON_TOP_N"):
        monkeypatch.delenv(name, raising=False)


def test_main_writes_json_output(tmp_path):
    output = tmp_path / "dashboard.json"

    exit_code = runner.main(["--seed", "3", "--format", "json", "--range-days", "90", "--output", str(output)])

    assert exit_code == 0
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["filters"]["range_days"] == 90
    assert len(payload["hourly_metrics"]) == 24


def test_main_prints_text_to_stdout(capsys):
    exit_code = runner.main(["--seed", "3", "--channel", "bloomberg", "--metric", "shares"])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "KEY METRICS" in captured.out
    assert "TOP STORIES (Shares)" in captured.out


def test_main_reads_dataset_file(tmp_path, now):
    from src.spokesperson.mock_data import generate_dataset

    data_path = tmp_path / "dataset.json"
    data_path.write_text(json.dumps(generate_dataset(now, seed=9)), encoding="utf-8")
    output = tmp_path / "articles.csv"

    exit_code = runner.main(["--data", str(data_path), "--format", "csv", "-o", str(output)])

    assert exit_code == 0
    assert output.read_text(encoding="utf-8").startswith("Title,Source,Company,Sector,Region,Published,Status")


def test_main_reports_missing_dataset(tmp_path, capsys):
    exit_code = runner.main(["--data", str(tmp_path / "missing.json")])

    assert exit_code == 1
    assert "Dataset not found" in capsys.readouterr().err


def test_main_rejects_invalid_range(capsys):
    exit_code = runner.main(["--seed", "1", "--range-days", "-5"])

    assert exit_code == 1
    assert "range_days must be positive" in capsys.readouterr().err
