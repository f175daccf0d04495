from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from reliability_core.models import SearchGrid, SharedCost, SharedTime
from reliability_core.scenarios import ScenarioError, load_scenario, scenario_from_mapping


def _minimal() -> Dict[str, Any]:
    return {
        "workers": {
            "fast": {"label": "fast", "p": 0.7, "w": 360, "t_work": 3},
            "slow": {"label": "slow", "p": 0.95, "hourly_rate": 120, "t_work": 4},
        },
        "shared_cost": {"verify_cost": 120, "fix_cost": 315},
        "shared_time": {"t_verify": 0.75, "t_fix": 2.25},
        "batch": {"sprint_hours": 80, "unit_prices": [600, "1000"]},
    }


def test_load_shipped_scenario(config_path: Path) -> None:
    scenario = load_scenario(config_path)

    assert scenario.fast.p == 0.7
    assert scenario.fast.w == pytest.approx(360.0)
    assert scenario.slow.w == pytest.approx(480.0)
    assert scenario.shared_cost == SharedCost(C=120.0, F=315.0)
    assert scenario.shared_time == SharedTime(t_verify=0.75, t_fix=2.25)
    assert scenario.sprint_hours == 80.0
    assert scenario.unit_prices == (600.0, 1000.0, 2000.0)

    capped, verifier = scenario.sweeps
    assert capped.speed_policy == "capped_linear"
    assert capped.shared_cost is scenario.shared_cost
    assert capped.points[-1] == 0.0
    assert capped.search is None

    assert verifier.speed_policy == "uncapped_linear"
    assert verifier.wage_source == "fixed_rate"
    assert verifier.fast_hourly_rate == 80.0
    assert verifier.shared_cost == SharedCost(C=120.0, F=720.0)
    assert verifier.shared_time == SharedTime(t_verify=0.75, t_fix=4.0)
    assert verifier.search == SearchGrid(start=0.2, stop=0.95, step=0.01)
    assert verifier.baseline == scenario.slow


def test_mapping_without_sweeps() -> None:
    scenario = scenario_from_mapping(_minimal())

    assert scenario.sweeps == ()
    assert scenario.unit_prices == (600.0, 1000.0)


def test_load_scenario_from_file(tmp_path: Path) -> None:
    path = tmp_path / "scenario.yaml"
    path.write_text(yaml.safe_dump(_minimal()), encoding="utf-8")

    assert load_scenario(path).slow.hourly_rate == pytest.approx(120.0)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ScenarioError, match="Unable to open"):
        load_scenario(tmp_path / "missing.yaml")


def test_missing_section_names_key() -> None:
    raw = _minimal()
    del raw["shared_time"]

    with pytest.raises(ScenarioError, match="shared_time"):
        scenario_from_mapping(raw)


def test_worker_needs_wage_or_rate() -> None:
    raw = _minimal()
    del raw["workers"]["fast"]["w"]

    with pytest.raises(ScenarioError, match="hourly_rate"):
        scenario_from_mapping(raw)


def test_invalid_number_is_reported() -> None:
    raw = _minimal()
    raw["workers"]["fast"]["p"] = "seventy"

    with pytest.raises(ScenarioError, match="workers.fast: invalid numeric value for 'p'"):
        scenario_from_mapping(raw)


def test_model_validation_errors_carry_context() -> None:
    raw = _minimal()
    raw["workers"]["slow"]["p"] = 1.5

    with pytest.raises(ScenarioError, match="workers.slow"):
        scenario_from_mapping(raw)


def test_unknown_speed_policy() -> None:
    raw = _minimal()
    raw["sweeps"] = [{"name": "odd", "unit_price": 1000, "sprint_hours": 80, "speed_policy": "quadratic"}]

    with pytest.raises(ScenarioError, match="speed_policy"):
        scenario_from_mapping(raw)


def test_fixed_rate_requires_fast_rate() -> None:
    raw = _minimal()
    raw["sweeps"] = [{"name": "cheap", "unit_price": 1000, "sprint_hours": 80, "wage_source": "fixed_rate"}]

    with pytest.raises(ScenarioError, match="cheap"):
        scenario_from_mapping(raw)
