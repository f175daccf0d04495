"""Profit sweeps over the fast worker's reliability."""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np

from .engine import (
    attempts_for_budget,
    batch_profit,
    expected_time_with_verification,
    summarize_batch_by_attempts,
)
from .models import (
    BatchSummary,
    ModelError,
    SearchGrid,
    SweepBaseline,
    SweepConfig,
    SweepRow,
    SweetSpot,
    Worker,
)

PROFIT_EPS = 1e-6


def t_work_fast(p_fast: float, baseline: Worker, policy: str, speed_floor: float = 0.5) -> float:
    """Return the fast worker's hours per attempt at reliability ``p_fast``.

    Work time scales linearly with ``p_fast / baseline.p``. The capped policy
    never goes below ``speed_floor * baseline.t_work``.
    """

    if baseline.p <= 0:
        raise ModelError("Baseline reliability must be positive to scale work time.")

    linear = baseline.t_work * (p_fast / baseline.p)
    if policy == "uncapped_linear":
        return linear
    if policy == "capped_linear":
        return max(linear, speed_floor * baseline.t_work)
    raise ModelError(f"Unknown speed policy: {policy}")


def fast_wage(hours: float, config: SweepConfig) -> float:
    """Return the cost per attempt of the fast worker for ``hours`` of work."""

    if config.wage_source == "fixed_rate":
        return float(config.fast_hourly_rate) * hours
    return config.baseline.hourly_rate * hours


def _batch_for(worker: Worker, config: SweepConfig) -> BatchSummary:
    time_per_job = expected_time_with_verification(
        worker.p, worker.t_work, config.shared_time.t_verify, config.shared_time.t_fix
    )
    attempts = attempts_for_budget(config.sprint_hours, time_per_job)
    return summarize_batch_by_attempts(worker, config.shared_cost, config.shared_time, attempts)


def sweep_baseline(config: SweepConfig) -> SweepBaseline:
    batch = _batch_for(config.baseline, config)
    return SweepBaseline(
        attempts=batch.attempts,
        cost_per_job=batch.cost_per_job,
        time_per_job=batch.time_per_job,
        profit=batch_profit(batch, config.unit_price),
    )


def classify_profit_delta(delta: float) -> str:
    if delta > PROFIT_EPS:
        return "Fast"
    if delta < -PROFIT_EPS:
        return "Slow"
    return "Tie"


def evaluate_point(
    config: SweepConfig,
    p_fast: float,
    baseline: Optional[SweepBaseline] = None,
) -> SweepRow:
    """Return the sweep row for a single ``p_fast`` value."""

    if baseline is None:
        baseline = sweep_baseline(config)

    p_fast = float(p_fast)
    hours = t_work_fast(p_fast, config.baseline, config.speed_policy, config.speed_floor)
    worker = Worker(p=p_fast, w=fast_wage(hours, config), t_work=hours, label=f"Fast p={p_fast:.2f}")
    batch = _batch_for(worker, config)

    profit = batch_profit(batch, config.unit_price)
    delta = profit - baseline.profit
    return SweepRow(
        p_fast=p_fast,
        t_work_fast=hours,
        attempts=batch.attempts,
        profit_fast=profit,
        profit_delta=delta,
        winner=classify_profit_delta(delta),
    )


def run_sweep(config: SweepConfig, points: Optional[Iterable[float]] = None) -> List[SweepRow]:
    """Evaluate every point in declared order. Defaults to ``config.points``."""

    baseline = sweep_baseline(config)
    domain = config.points if points is None else points
    return [evaluate_point(config, p_fast, baseline) for p_fast in domain]


def grid_points(grid: SearchGrid) -> np.ndarray:
    """Return ``start, start + step, ...`` up to and including ``stop``."""

    count = int(np.floor((grid.stop - grid.start) / grid.step + 1e-9)) + 1
    values = grid.start + grid.step * np.arange(count)
    # Rounding removes accumulated drift so 0.2 + 75 * 0.01 reads back as 0.95.
    return np.minimum(np.round(values, 12), grid.stop)


def find_sweet_spot(config: SweepConfig, grid: Optional[SearchGrid] = None) -> SweetSpot:
    """Brute-force scan for the most profitable ``p_fast``.

    The profit surface has kinks from the speed floor and steps from the
    whole-number attempts, so every grid point is evaluated. The first point
    with the highest profit wins.
    """

    grid = grid or config.search
    if grid is None:
        raise ModelError(f"Sweep '{config.name}' has no search grid configured.")

    baseline = sweep_baseline(config)
    points = grid_points(grid)
    best = evaluate_point(config, float(points[0]), baseline)
    for p_fast in points[1:]:
        row = evaluate_point(config, float(p_fast), baseline)
        if row.profit_fast > best.profit_fast:
            best = row

    return SweetSpot(
        p_fast=best.p_fast,
        t_work_fast=best.t_work_fast,
        attempts=best.attempts,
        profit_fast=best.profit_fast,
        profit_delta=best.profit_delta,
    )
