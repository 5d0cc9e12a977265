"""End-to-end tests for the file pipeline and CLI."""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
from click.testing import CliRunner

from packages.core.errors import DegenerateInputError
from packages.core.types import FitReport
from packages.pipeline.cli import main
from packages.pipeline.process import fit_file, fit_file_to_json


def _write_csv(path: Path, points: np.ndarray) -> None:
    path.write_text("\n".join(",".join(f"{c:.10f}" for c in p) for p in points))


class TestFitFile:
    def test_produces_valid_report(self, exact_parabola_points: np.ndarray, tmp_path: Path):
        csv_file = tmp_path / "arc.csv"
        _write_csv(csv_file, exact_parabola_points)

        report = fit_file(csv_file, steps=20)

        assert isinstance(report, FitReport)
        assert report.version == "0.1.0"
        assert report.source_file == "arc.csv"
        assert report.point_count == len(exact_parabola_points)
        assert report.fit.a == pytest.approx(0.05, abs=1e-6)
        assert len(report.samples) == 21
        assert report.bounds.min.z == pytest.approx(4.0)
        assert report.bounds.max.z == pytest.approx(5.25)

    def test_without_samples(self, scenario_points: np.ndarray, tmp_path: Path):
        csv_file = tmp_path / "scenario.csv"
        _write_csv(csv_file, scenario_points)
        assert fit_file(csv_file, steps=None).samples == []

    def test_too_few_points(self, tmp_path: Path):
        csv_file = tmp_path / "short.csv"
        csv_file.write_text("0,0,0\n1,1,1\n")
        with pytest.raises(DegenerateInputError):
            fit_file(csv_file)

    def test_json_output(self, scenario_points: np.ndarray, tmp_path: Path):
        csv_file = tmp_path / "scenario.csv"
        _write_csv(csv_file, scenario_points)

        json_str = fit_file_to_json(csv_file)

        out_json = tmp_path / "scenario.fit.json"
        assert out_json.exists()
        data = json.loads(json_str)
        assert "fit" in data
        assert "bounds" in data
        # Validate it round-trips through Pydantic
        report = FitReport.model_validate(data)
        assert report.fit.point_count == 5
        assert len(report.samples) == 61


class TestCli:
    def test_fit_command(self, scenario_points: np.ndarray, tmp_path: Path):
        csv_file = tmp_path / "scenario.csv"
        _write_csv(csv_file, scenario_points)
        out_json = tmp_path / "out.json"

        result = CliRunner().invoke(
            main, ["fit", str(csv_file), "-o", str(out_json), "--steps", "10"]
        )

        assert result.exit_code == 0, result.output
        report = FitReport.model_validate_json(out_json.read_text())
        assert len(report.samples) == 11

    def test_fit_command_reports_failure(self, tmp_path: Path):
        csv_file = tmp_path / "short.csv"
        csv_file.write_text("0,0,0\n1,1,1\n")

        result = CliRunner().invoke(main, ["fit", str(csv_file)])

        assert result.exit_code == 1
        assert "at least 3 points" in result.output

    def test_sample_command_rejects_foreign_json(self, tmp_path: Path):
        bogus = tmp_path / "other.json"
        bogus.write_text("{}")

        result = CliRunner().invoke(main, ["sample", str(bogus)])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_sample_command(self, scenario_points: np.ndarray, tmp_path: Path):
        csv_file = tmp_path / "scenario.csv"
        _write_csv(csv_file, scenario_points)
        out_json = tmp_path / "out.json"
        runner = CliRunner()
        runner.invoke(main, ["fit", str(csv_file), "-o", str(out_json), "--no-samples"])

        result = runner.invoke(main, ["sample", str(out_json), "--steps", "8"])

        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if line.count(",") == 2]
        assert len(lines) == 9
