"""Helpers that turn YAML scenario data into runtime-ready model records."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .models import (
    SPEED_POLICIES,
    WAGE_SOURCES,
    ModelError,
    Scenario,
    SearchGrid,
    SharedCost,
    SharedTime,
    SweepConfig,
    Worker,
)


class ScenarioError(ValueError):
    """Raised when scenario data cannot be translated into model records."""


def load_scenario(path: Union[str, Path]) -> Scenario:
    """Read a scenario file with ``yaml.safe_load`` and build a :class:`Scenario`."""

    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except OSError as e:
        raise ScenarioError(f"Unable to open scenario file \"{path}\": {e}") from e
    except yaml.YAMLError as e:
        raise ScenarioError(f"Invalid YAML in \"{path}\": {e}") from e
    return scenario_from_mapping(data)


def scenario_from_mapping(raw: Mapping[str, Any]) -> Scenario:
    """Build a :class:`Scenario` from already parsed configuration data.

    Parameters
    ----------
    raw:
        Mapping with the sections ``workers`` (``fast`` and ``slow``),
        ``shared_cost``, ``shared_time``, ``batch`` and an optional list of
        ``sweeps``. Sweep entries may carry their own ``shared_cost`` and
        ``shared_time`` blocks; otherwise the scenario-wide ones apply.
    """

    if not isinstance(raw, Mapping):
        raise ScenarioError("Scenario data must be a mapping.")

    workers = _section(raw, "workers", "scenario")
    fast = worker_from_mapping(_section(workers, "fast", "workers"), "workers.fast")
    slow = worker_from_mapping(_section(workers, "slow", "workers"), "workers.slow")
    shared_cost = shared_cost_from_mapping(_section(raw, "shared_cost", "scenario"), "shared_cost")
    shared_time = shared_time_from_mapping(_section(raw, "shared_time", "scenario"), "shared_time")

    batch = _section(raw, "batch", "scenario")
    sprint_hours = _required_float(batch, "sprint_hours", "batch")
    unit_prices = _float_list(batch, "unit_prices", "batch")

    sweeps_raw = raw.get("sweeps") or []
    if not isinstance(sweeps_raw, list):
        raise ScenarioError("scenario: 'sweeps' must be a list.")
    sweeps = tuple(
        sweep_from_mapping(entry, slow, shared_cost, shared_time, f"sweeps[{index}]")
        for index, entry in enumerate(sweeps_raw)
    )

    return Scenario(
        fast=fast,
        slow=slow,
        shared_cost=shared_cost,
        shared_time=shared_time,
        sprint_hours=sprint_hours,
        unit_prices=unit_prices,
        sweeps=sweeps,
    )


def worker_from_mapping(raw: Mapping[str, Any], context: str) -> Worker:
    """Return a :class:`Worker`. Cost per attempt is ``w`` or ``hourly_rate * t_work``."""

    p = _required_float(raw, "p", context)
    t_work = _required_float(raw, "t_work", context)
    w = _optional_float(raw, "w", context)
    if w is None:
        rate = _optional_float(raw, "hourly_rate", context)
        if rate is None:
            raise ScenarioError(f"{context}: either 'w' or 'hourly_rate' must be provided.")
        w = rate * t_work
    label = raw.get("label") or ""
    return _build(Worker, context, p=p, w=w, t_work=t_work, label=str(label))


def shared_cost_from_mapping(raw: Mapping[str, Any], context: str) -> SharedCost:
    return _build(
        SharedCost,
        context,
        C=_required_float(raw, "verify_cost", context),
        F=_required_float(raw, "fix_cost", context),
    )


def shared_time_from_mapping(raw: Mapping[str, Any], context: str) -> SharedTime:
    return _build(
        SharedTime,
        context,
        t_verify=_required_float(raw, "t_verify", context),
        t_fix=_required_float(raw, "t_fix", context),
    )


def sweep_from_mapping(
    raw: Mapping[str, Any],
    baseline: Worker,
    default_cost: SharedCost,
    default_time: SharedTime,
    context: str,
) -> SweepConfig:
    if not isinstance(raw, Mapping):
        raise ScenarioError(f"{context}: sweep entries must be mappings.")

    name = raw.get("name") or context
    context = f"{context} ({name})" if name != context else context

    speed_policy = raw.get("speed_policy", "capped_linear")
    if speed_policy not in SPEED_POLICIES:
        raise ScenarioError(
            f"{context}: unsupported speed_policy '{speed_policy}' (expected one of {', '.join(SPEED_POLICIES)})."
        )
    wage_source = raw.get("wage_source", "baseline_rate")
    if wage_source not in WAGE_SOURCES:
        raise ScenarioError(
            f"{context}: unsupported wage_source '{wage_source}' (expected one of {', '.join(WAGE_SOURCES)})."
        )

    shared_cost = default_cost
    if raw.get("shared_cost") is not None:
        shared_cost = shared_cost_from_mapping(_section(raw, "shared_cost", context), f"{context}.shared_cost")
    shared_time = default_time
    if raw.get("shared_time") is not None:
        shared_time = shared_time_from_mapping(_section(raw, "shared_time", context), f"{context}.shared_time")

    search = None
    if raw.get("sweet_spot") is not None:
        grid = _section(raw, "sweet_spot", context)
        search = _build(
            SearchGrid,
            f"{context}.sweet_spot",
            start=_required_float(grid, "start", f"{context}.sweet_spot"),
            stop=_required_float(grid, "stop", f"{context}.sweet_spot"),
            step=_required_float(grid, "step", f"{context}.sweet_spot"),
        )

    speed_floor = _optional_float(raw, "speed_floor", context)
    return _build(
        SweepConfig,
        context,
        name=str(name),
        title=str(raw.get("title") or ""),
        baseline=baseline,
        shared_cost=shared_cost,
        shared_time=shared_time,
        unit_price=_required_float(raw, "unit_price", context),
        sprint_hours=_required_float(raw, "sprint_hours", context),
        speed_policy=speed_policy,
        speed_floor=0.5 if speed_floor is None else speed_floor,
        wage_source=wage_source,
        fast_hourly_rate=_optional_float(raw, "fast_hourly_rate", context),
        points=_float_list(raw, "points", context),
        search=search,
    )


def _build(cls, context: str, **kwargs: Any):
    try:
        return cls(**kwargs)
    except ModelError as e:
        raise ScenarioError(f"{context}: {e}") from e


def _section(raw: Mapping[str, Any], key: str, context: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if not isinstance(value, Mapping):
        raise ScenarioError(f"{context}: section '{key}' is missing or not a mapping.")
    return value


def _required_float(raw: Mapping[str, Any], key: str, context: str) -> float:
    value = _optional_float(raw, key, context)
    if value is None:
        raise ScenarioError(f"{context}: missing required value '{key}'.")
    return value


def _optional_float(
    raw: Mapping[str, Any],
    key: str,
    context: str,
) -> Optional[float]:
    value = raw.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        raise ScenarioError(f"{context}: invalid numeric value for '{key}'.")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ScenarioError(f"{context}: invalid numeric value for '{key}'.")


def _float_list(raw: Mapping[str, Any], key: str, context: str) -> Tuple[float, ...]:
    values = raw.get(key)
    if values is None:
        return ()
    if not isinstance(values, list):
        raise ScenarioError(f"{context}: '{key}' must be a list of numbers.")
    return tuple(
        _required_float({key: item}, key, f"{context}.{key}[{index}]")
        for index, item in enumerate(values)
    )
