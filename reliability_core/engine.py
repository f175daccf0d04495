"""Pure math routines for trust-vs-verify economics."""

from __future__ import annotations

import math
import numbers
from typing import Iterable, List, Optional

from .models import (
    BatchDelta,
    BatchSummary,
    CostComparison,
    DegenerateTimeError,
    ModelError,
    PerJobResult,
    PriceComparison,
    SharedCost,
    SharedTime,
    TimeComparison,
    Worker,
    WorkerComparison,
)

COMPARE_EPS = 1e-9


def expected_value_trust(p: float, B: float, L: float) -> float:
    """Expected value when the result is used without checking it."""

    return p * B - (1.0 - p) * L


def expected_value_verify(p: float, B: float, C: float, F: float) -> float:
    """Expected value when every attempt is verified and failures are fixed."""

    return B - C - (1.0 - p) * F


def expected_cost_with_verification(p: float, w: float, C: float, F: float) -> float:
    """Return the expected cost of one finished, correct unit.

    Verification ``C`` is paid on every attempt, rework ``F`` only on the
    ``1 - p`` share of attempts that fail.
    """

    return w + C + (1.0 - p) * F


def expected_time_with_verification(p: float, t_work: float, t_verify: float, t_fix: float) -> float:
    """Return the expected hours needed for one finished, correct unit."""

    return t_work + t_verify + (1.0 - p) * t_fix


def jobs_per_hour(time_per_job: float) -> float:
    if time_per_job <= 0:
        raise DegenerateTimeError(
            f"Throughput is undefined for a time per job of {time_per_job!r} hours."
        )
    return 1.0 / time_per_job


def per_job(worker: Worker, shared_cost: SharedCost, shared_time: SharedTime) -> PerJobResult:
    """Return cost, time and throughput for ``worker`` under mandatory verification."""

    cost = expected_cost_with_verification(worker.p, worker.w, shared_cost.C, shared_cost.F)
    time = expected_time_with_verification(worker.p, worker.t_work, shared_time.t_verify, shared_time.t_fix)
    return PerJobResult(cost_per_job=cost, time_per_job=time, throughput=jobs_per_hour(time))


def compare_workers_cost_and_speed(
    worker_a: Worker,
    worker_b: Worker,
    shared_cost: SharedCost,
    shared_time: SharedTime,
) -> WorkerComparison:
    """Compare two workers per finished job.

    ``cheaper``/``faster`` name the strictly better side ("A" or "B"), or are
    ``None`` when the values differ by no more than ``COMPARE_EPS``.
    """

    job_a = per_job(worker_a, shared_cost, shared_time)
    job_b = per_job(worker_b, shared_cost, shared_time)

    cost_diff = abs(job_a.cost_per_job - job_b.cost_per_job)
    time_diff = abs(job_a.time_per_job - job_b.time_per_job)

    cheaper = None
    if cost_diff > COMPARE_EPS:
        cheaper = "A" if job_a.cost_per_job < job_b.cost_per_job else "B"

    faster = None
    if time_diff > COMPARE_EPS:
        faster = "A" if job_a.time_per_job < job_b.time_per_job else "B"

    return WorkerComparison(
        cost=CostComparison(
            cost_a=job_a.cost_per_job,
            cost_b=job_b.cost_per_job,
            cheaper=cheaper,
            diff=cost_diff,
        ),
        time=TimeComparison(
            time_a=job_a.time_per_job,
            time_b=job_b.time_per_job,
            throughput_a=job_a.throughput,
            throughput_b=job_b.throughput,
            faster=faster,
            diff=time_diff,
        ),
    )


def max_wage_premium_for_higher_reliability(p_low: float, p_high: float, F: float) -> float:
    """Return the largest extra wage per attempt that the rework savings pay for.

    Inputs are not checked; a negative result means the less reliable worker
    is the one worth paying more.
    """

    return (p_high - p_low) * F


def actual_wage_gap(low: Worker, high: Worker) -> float:
    return high.w - low.w


def attempts_for_budget(budget_hours: float, time_per_job: float) -> int:
    """Return how many whole attempts fit into ``budget_hours``."""

    if time_per_job <= 0:
        raise DegenerateTimeError(
            f"Cannot size a batch with a time per job of {time_per_job!r} hours."
        )
    if not math.isfinite(budget_hours) or budget_hours < 0:
        raise ModelError(f"Budget hours must be finite and non-negative (got {budget_hours!r}).")
    return int(math.floor(budget_hours / time_per_job))


def summarize_batch_by_attempts(
    worker: Worker,
    shared_cost: SharedCost,
    shared_time: SharedTime,
    attempts: int,
    label: Optional[str] = None,
) -> BatchSummary:
    """Scale the per-job expectations of ``worker`` to ``attempts`` units.

    Every attempt is verified and failures are reworked, so in expectation all
    attempts end up as finished correct units.
    """

    if isinstance(attempts, bool) or not isinstance(attempts, numbers.Integral) or attempts < 0:
        raise ModelError(f"attempts must be a non-negative integer (got {attempts!r}).")
    attempts = int(attempts)

    cost_per_job = expected_cost_with_verification(worker.p, worker.w, shared_cost.C, shared_cost.F)
    time_per_job = expected_time_with_verification(
        worker.p, worker.t_work, shared_time.t_verify, shared_time.t_fix
    )

    return BatchSummary(
        label=worker.label if label is None else label,
        attempts=attempts,
        p=worker.p,
        w=worker.w,
        cost_per_job=cost_per_job,
        time_per_job=time_per_job,
        total_cost=attempts * cost_per_job,
        total_time=attempts * time_per_job,
        expected_correct_first_pass=worker.p * attempts,
        expected_wrong_first_pass=(1.0 - worker.p) * attempts,
        finished_correct_units=attempts,
    )


def summarize_batch_for_budget(
    worker: Worker,
    shared_cost: SharedCost,
    shared_time: SharedTime,
    budget_hours: float,
    label: Optional[str] = None,
) -> BatchSummary:
    """Size a batch from a time budget, then summarize it."""

    time_per_job = expected_time_with_verification(
        worker.p, worker.t_work, shared_time.t_verify, shared_time.t_fix
    )
    attempts = attempts_for_budget(budget_hours, time_per_job)
    return summarize_batch_by_attempts(worker, shared_cost, shared_time, attempts, label)


def compare_batches(first: BatchSummary, second: BatchSummary) -> BatchDelta:
    extra_units = first.finished_correct_units - second.finished_correct_units
    extra_cost = first.total_cost - second.total_cost
    extra_time = first.total_time - second.total_time

    if extra_units != 0:
        cost_per_unit: Optional[float] = extra_cost / extra_units
        time_per_unit: Optional[float] = extra_time / extra_units
    else:
        cost_per_unit = None
        time_per_unit = None

    return BatchDelta(
        extra_units=extra_units,
        extra_cost=extra_cost,
        extra_time=extra_time,
        extra_cost_per_unit=cost_per_unit,
        extra_time_per_unit=time_per_unit,
    )


def batch_revenue(summary: BatchSummary, unit_price: float) -> float:
    return summary.finished_correct_units * unit_price


def batch_profit(summary: BatchSummary, unit_price: float) -> float:
    return batch_revenue(summary, unit_price) - summary.total_cost


def break_even_unit_price(fast: BatchSummary, slow: BatchSummary) -> Optional[float]:
    """Return the unit price at which the extra units of ``fast`` pay for themselves.

    ``None`` when both batches finish the same number of units.
    """

    return compare_batches(fast, slow).extra_cost_per_unit


def compare_profits_at_prices(
    fast: BatchSummary,
    slow: BatchSummary,
    unit_prices: Iterable[float],
) -> List[PriceComparison]:
    """Return one profit comparison per price, in the given order."""

    rows: List[PriceComparison] = []
    for price in unit_prices:
        price = float(price)
        profit_fast = batch_profit(fast, price)
        profit_slow = batch_profit(slow, price)
        diff = profit_fast - profit_slow
        if abs(diff) < COMPARE_EPS:
            winner = "Tie"
        elif diff > 0:
            winner = "Fast"
        else:
            winner = "Slow"
        rows.append(
            PriceComparison(
                unit_price=price,
                revenue_fast=batch_revenue(fast, price),
                revenue_slow=batch_revenue(slow, price),
                profit_fast=profit_fast,
                profit_slow=profit_slow,
                diff=diff,
                winner=winner,
            )
        )
    return rows
