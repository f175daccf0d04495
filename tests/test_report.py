import contextlib
import io
from pathlib import Path

import numpy as np
import pandas as pd
import pytest
import yaml

import reliability_report
from reliability_core import load_scenario


def test_build_results_is_structured(config_path: Path) -> None:
    results = reliability_report.build_results(load_scenario(config_path))

    assert results["per_job"]["cost"]["cost_a"] == pytest.approx(574.5)
    assert results["per_job"]["time"]["faster"] == "A"
    assert [b["attempts"] for b in results["batches"]] == [18, 16]
    assert results["break_even_unit_price"] == pytest.approx(244.5)
    assert results["premium"]["max_premium"] == pytest.approx(78.75)
    assert [s["name"] for s in results["sweeps"]] == ["capped", "verifier"]
    assert results["sweeps"][0]["sweet_spot"] is None
    assert results["sweeps"][1]["sweet_spot"]["profit_delta"] > 0


def test_build_results_filters_sweeps(config_path: Path) -> None:
    results = reliability_report.build_results(load_scenario(config_path), ["verifier"])

    assert [s["name"] for s in results["sweeps"]] == ["verifier"]


def test_main_prints_report_and_exports(config_path: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    export = tmp_path / "results.yaml"

    code = reliability_report.main(["--config", str(config_path), "--export", str(export)])

    assert code == 0
    out = capsys.readouterr().out
    assert "PER-JOB VIEW" in out
    assert "PARAM SWEEP 'verifier'" in out
    assert "Sweet spot" in out

    data = yaml.safe_load(export.read_text(encoding="utf-8"))
    assert data["batches"][0]["attempts"] == 18
    assert len(data["sweeps"][0]["rows"]) == 14


def test_main_reports_unknown_sweep(config_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert reliability_report.main(["--config", str(config_path), "--sweep", "nope"]) == 0

    captured = capsys.readouterr()
    assert "Unknown sweep 'nope'" in captured.err
    assert "PARAM SWEEP" not in captured.out


def test_main_exits_on_bad_config(tmp_path: Path) -> None:
    with pytest.raises(SystemExit, match="Failed to load scenario"):
        reliability_report.main(["--config", str(tmp_path / "missing.yaml")])


def test_numpy_safe_dumper_converts_scalars() -> None:
    text = yaml.dump({"n": np.int64(3), "x": np.float64(0.5)}, Dumper=reliability_report.NumpySafeDumper)

    assert yaml.safe_load(text) == {"n": 3, "x": 0.5}


def test_report_follows_redirected_stdout(config_path: Path) -> None:
    buf = io.StringIO()
    with contextlib.redirect_stdout(buf):
        assert reliability_report.main(["--config", str(config_path)]) == 0

    assert "PER-JOB VIEW" in buf.getvalue()


def test_batch_table_keeps_counts_integral(config_path: Path) -> None:
    scenario = load_scenario(config_path)
    results = reliability_report.build_results(scenario, [])
    table = reliability_report.batch_table(results)

    assert pd.api.types.is_integer_dtype(table["attempts"])
    assert pd.api.types.is_integer_dtype(table["finished_correct_units"])

    out = io.StringIO()
    reliability_report.print_report(scenario, results, out)
    batch_view = out.getvalue().split("=== BATCH VIEW")[1].split("=== DELTAS")[0]
    assert "18.00" not in batch_view
    assert "574.50" in batch_view
