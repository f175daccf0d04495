"""Core math package for trust-vs-verify reliability economics."""

from .models import (
    BatchDelta,
    BatchSummary,
    DegenerateTimeError,
    ModelError,
    PerJobResult,
    PriceComparison,
    Scenario,
    SearchGrid,
    SharedCost,
    SharedTime,
    SweepBaseline,
    SweepConfig,
    SweepRow,
    SweetSpot,
    Worker,
    WorkerComparison,
)
from .engine import (
    actual_wage_gap,
    attempts_for_budget,
    batch_profit,
    break_even_unit_price,
    compare_batches,
    compare_profits_at_prices,
    compare_workers_cost_and_speed,
    expected_cost_with_verification,
    expected_time_with_verification,
    expected_value_trust,
    expected_value_verify,
    jobs_per_hour,
    max_wage_premium_for_higher_reliability,
    per_job,
    summarize_batch_by_attempts,
    summarize_batch_for_budget,
)
from .sweep import evaluate_point, find_sweet_spot, run_sweep, sweep_baseline, t_work_fast
from .scenarios import ScenarioError, load_scenario, scenario_from_mapping

__all__ = [
    "BatchDelta",
    "BatchSummary",
    "DegenerateTimeError",
    "ModelError",
    "PerJobResult",
    "PriceComparison",
    "Scenario",
    "ScenarioError",
    "SearchGrid",
    "SharedCost",
    "SharedTime",
    "SweepBaseline",
    "SweepConfig",
    "SweepRow",
    "SweetSpot",
    "Worker",
    "WorkerComparison",
    "actual_wage_gap",
    "attempts_for_budget",
    "batch_profit",
    "break_even_unit_price",
    "compare_batches",
    "compare_profits_at_prices",
    "compare_workers_cost_and_speed",
    "evaluate_point",
    "expected_cost_with_verification",
    "expected_time_with_verification",
    "expected_value_trust",
    "expected_value_verify",
    "find_sweet_spot",
    "jobs_per_hour",
    "load_scenario",
    "max_wage_premium_for_higher_reliability",
    "per_job",
    "run_sweep",
    "scenario_from_mapping",
    "summarize_batch_by_attempts",
    "summarize_batch_for_budget",
    "sweep_baseline",
    "t_work_fast",
]
