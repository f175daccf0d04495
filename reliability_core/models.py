"""Domain models for reliability economics computations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Optional, Tuple

SpeedPolicy = Literal["capped_linear", "uncapped_linear"]
WageSource = Literal["baseline_rate", "fixed_rate"]
Side = Literal["A", "B"]
Winner = Literal["Fast", "Slow", "Tie"]

SPEED_POLICIES: Tuple[str, ...] = ("capped_linear", "uncapped_linear")
WAGE_SOURCES: Tuple[str, ...] = ("baseline_rate", "fixed_rate")


class ModelError(ValueError):
    """Raised when model inputs fall outside their valid domain."""


class DegenerateTimeError(ModelError):
    """Raised when a non-positive time would be used as a divisor."""


def _require_non_negative(value: float, name: str) -> None:
    if not math.isfinite(value) or value < 0:
        raise ModelError(f"{name} must be a finite, non-negative number (got {value!r}).")


def _require_probability(value: float, name: str) -> None:
    if not math.isfinite(value) or not 0.0 <= value <= 1.0:
        raise ModelError(f"{name} must lie in [0, 1] (got {value!r}).")


@dataclass(frozen=True)
class Worker:
    """A producer characterised by reliability, cost and time per attempt."""

    p: float  # First-try success probability
    w: float  # Cost per attempt (currency)
    t_work: float  # Hours of work per attempt
    label: str = ""

    def __post_init__(self) -> None:
        _require_probability(self.p, "p")
        _require_non_negative(self.w, "w")
        _require_non_negative(self.t_work, "t_work")

    @property
    def hourly_rate(self) -> float:
        if self.t_work <= 0:
            raise DegenerateTimeError(
                f"{self.label or 'worker'}: hourly rate is undefined for t_work <= 0."
            )
        return self.w / self.t_work


@dataclass(frozen=True)
class SharedCost:
    """Verification and rework costs shared by every worker."""

    C: float  # Verification cost per attempt
    F: float  # Rework cost per bad attempt

    def __post_init__(self) -> None:
        _require_non_negative(self.C, "C")
        _require_non_negative(self.F, "F")


@dataclass(frozen=True)
class SharedTime:
    """Verification and rework durations in hours."""

    t_verify: float
    t_fix: float

    def __post_init__(self) -> None:
        _require_non_negative(self.t_verify, "t_verify")
        _require_non_negative(self.t_fix, "t_fix")


@dataclass(frozen=True)
class PerJobResult:
    cost_per_job: float
    time_per_job: float
    throughput: float  # Finished jobs per hour


@dataclass(frozen=True)
class CostComparison:
    cost_a: float
    cost_b: float
    cheaper: Optional[Side]
    diff: float


@dataclass(frozen=True)
class TimeComparison:
    time_a: float
    time_b: float
    throughput_a: float
    throughput_b: float
    faster: Optional[Side]
    diff: float


@dataclass(frozen=True)
class WorkerComparison:
    cost: CostComparison
    time: TimeComparison


@dataclass(frozen=True)
class BatchSummary:
    """Per-job expectations scaled to a whole number of attempts."""

    label: str
    attempts: int
    p: float
    w: float
    cost_per_job: float
    time_per_job: float
    total_cost: float
    total_time: float
    expected_correct_first_pass: float
    expected_wrong_first_pass: float
    finished_correct_units: int


@dataclass(frozen=True)
class BatchDelta:
    """Differences of one batch against another (first minus second)."""

    extra_units: int
    extra_cost: float
    extra_time: float
    extra_cost_per_unit: Optional[float]
    extra_time_per_unit: Optional[float]


@dataclass(frozen=True)
class PriceComparison:
    unit_price: float
    revenue_fast: float
    revenue_slow: float
    profit_fast: float
    profit_slow: float
    diff: float
    winner: Winner


@dataclass(frozen=True)
class SearchGrid:
    """Inclusive ``[start, stop]`` scan of ``p_fast`` with a fixed step."""

    start: float
    stop: float
    step: float

    def __post_init__(self) -> None:
        _require_probability(self.start, "start")
        _require_probability(self.stop, "stop")
        if self.start > self.stop:
            raise ModelError("Search grid start must not exceed stop.")
        if not math.isfinite(self.step) or self.step <= 0:
            raise ModelError(f"Search grid step must be positive (got {self.step!r}).")


@dataclass(frozen=True)
class SweepConfig:
    """Everything one profit sweep needs, passed explicitly."""

    name: str
    baseline: Worker
    shared_cost: SharedCost
    shared_time: SharedTime
    unit_price: float
    sprint_hours: float
    speed_policy: SpeedPolicy = "capped_linear"
    speed_floor: float = 0.5
    wage_source: WageSource = "baseline_rate"
    fast_hourly_rate: Optional[float] = None
    points: Tuple[float, ...] = ()
    search: Optional[SearchGrid] = None
    title: str = ""

    def __post_init__(self) -> None:
        if self.speed_policy not in SPEED_POLICIES:
            raise ModelError(f"Unknown speed policy: {self.speed_policy}")
        if self.wage_source not in WAGE_SOURCES:
            raise ModelError(f"Unknown wage source: {self.wage_source}")
        if self.wage_source == "fixed_rate":
            if self.fast_hourly_rate is None:
                raise ModelError("fast_hourly_rate is required for the fixed_rate wage source.")
            _require_non_negative(self.fast_hourly_rate, "fast_hourly_rate")
        _require_non_negative(self.unit_price, "unit_price")
        _require_non_negative(self.sprint_hours, "sprint_hours")
        _require_non_negative(self.speed_floor, "speed_floor")
        for point in self.points:
            _require_probability(point, "p_fast")


@dataclass(frozen=True)
class SweepRow:
    p_fast: float
    t_work_fast: float
    attempts: int
    profit_fast: float
    profit_delta: float
    winner: Winner


@dataclass(frozen=True)
class SweepBaseline:
    """The non-swept reference worker over the sweep's sprint."""

    attempts: int
    cost_per_job: float
    time_per_job: float
    profit: float


@dataclass(frozen=True)
class SweetSpot:
    p_fast: float
    t_work_fast: float
    attempts: int
    profit_fast: float
    profit_delta: float


@dataclass(frozen=True)
class Scenario:
    """A full run: two workers, shared parameters, batch settings and sweeps."""

    fast: Worker
    slow: Worker
    shared_cost: SharedCost
    shared_time: SharedTime
    sprint_hours: float
    unit_prices: Tuple[float, ...] = ()
    sweeps: Tuple[SweepConfig, ...] = ()
