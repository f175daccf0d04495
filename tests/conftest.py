from pathlib import Path

import pytest

from reliability_core.models import SearchGrid, SharedCost, SharedTime, SweepConfig, Worker

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def fast_worker() -> Worker:
    """Fast but sloppy dev: 3 h per ticket at 120/h."""
    return Worker(p=0.7, w=360.0, t_work=3.0, label="Fast but sloppy dev")


@pytest.fixture
def slow_worker() -> Worker:
    """Slow but careful dev: 4 h per ticket at 120/h."""
    return Worker(p=0.95, w=480.0, t_work=4.0, label="Slow but careful dev")


@pytest.fixture
def shared_cost() -> SharedCost:
    return SharedCost(C=120.0, F=315.0)


@pytest.fixture
def shared_time() -> SharedTime:
    return SharedTime(t_verify=0.75, t_fix=2.25)


@pytest.fixture
def capped_sweep(slow_worker: Worker, shared_cost: SharedCost, shared_time: SharedTime) -> SweepConfig:
    return SweepConfig(
        name="capped",
        baseline=slow_worker,
        shared_cost=shared_cost,
        shared_time=shared_time,
        unit_price=1000.0,
        sprint_hours=80.0,
        speed_policy="capped_linear",
        speed_floor=0.5,
        wage_source="baseline_rate",
        points=(0.9, 0.8, 0.7, 0.6, 0.5, 0.4, 0.3, 0.2, 0.18, 0.16, 0.14, 0.12, 0.10, 0.0),
    )


@pytest.fixture
def verifier_sweep(slow_worker: Worker) -> SweepConfig:
    return SweepConfig(
        name="verifier",
        baseline=slow_worker,
        shared_cost=SharedCost(C=120.0, F=720.0),
        shared_time=SharedTime(t_verify=0.75, t_fix=4.0),
        unit_price=1000.0,
        sprint_hours=80.0,
        speed_policy="uncapped_linear",
        wage_source="fixed_rate",
        fast_hourly_rate=80.0,
        points=(0.9, 0.85, 0.8, 0.75, 0.7, 0.65, 0.6, 0.55, 0.5, 0.45, 0.4, 0.3, 0.2),
        search=SearchGrid(start=0.2, stop=0.95, step=0.01),
    )


@pytest.fixture
def config_path() -> Path:
    """The scenario file shipped at the repository root."""
    return REPO_ROOT / "config.yaml"
