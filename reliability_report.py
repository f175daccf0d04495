#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reliability report (console) for the trust-vs-verify model
- Per-job view, batch view, reliability premium, price comparison
- One table per configured profit sweep, plus the sweet spot where configured
- Optional YAML export of every structured result
"""

import argparse
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

import numpy as np
import pandas as pd
import yaml

from reliability_core import (
    ModelError,
    Scenario,
    ScenarioError,
    actual_wage_gap,
    break_even_unit_price,
    compare_batches,
    compare_profits_at_prices,
    compare_workers_cost_and_speed,
    find_sweet_spot,
    load_scenario,
    max_wage_premium_for_higher_reliability,
    run_sweep,
    summarize_batch_for_budget,
    sweep_baseline,
)


class NumpySafeDumper(yaml.SafeDumper):
    def represent_data(self, data):
        if isinstance(data, (np.integer, np.floating)):
            return super().represent_data(data.item())
        return super().represent_data(data)


def _money(value: float) -> str:
    return f"{value:.2f}"


# ==========================
# Computation (structured results only)
# ==========================

def build_results(scenario: Scenario, sweep_names: Optional[List[str]] = None) -> Dict[str, Any]:
    """Evaluate every stage of ``scenario`` and return plain structured data."""

    fast, slow = scenario.fast, scenario.slow
    per_job = compare_workers_cost_and_speed(fast, slow, scenario.shared_cost, scenario.shared_time)

    fast_batch = summarize_batch_for_budget(fast, scenario.shared_cost, scenario.shared_time, scenario.sprint_hours)
    slow_batch = summarize_batch_for_budget(slow, scenario.shared_cost, scenario.shared_time, scenario.sprint_hours)

    results: Dict[str, Any] = {
        "per_job": asdict(per_job),
        "batches": [asdict(fast_batch), asdict(slow_batch)],
        "batch_delta": asdict(compare_batches(fast_batch, slow_batch)),
        "premium": {
            "max_premium": max_wage_premium_for_higher_reliability(fast.p, slow.p, scenario.shared_cost.F),
            "actual_wage_gap": actual_wage_gap(fast, slow),
        },
        "break_even_unit_price": break_even_unit_price(fast_batch, slow_batch),
        "prices": [asdict(row) for row in compare_profits_at_prices(fast_batch, slow_batch, scenario.unit_prices)],
        "sweeps": [],
    }

    for config in scenario.sweeps:
        if sweep_names and config.name not in sweep_names:
            continue
        entry: Dict[str, Any] = {
            "name": config.name,
            "title": config.title,
            "baseline": asdict(sweep_baseline(config)),
            "rows": [asdict(row) for row in run_sweep(config)],
            "sweet_spot": None,
        }
        if config.search is not None:
            entry["sweet_spot"] = asdict(find_sweet_spot(config))
        results["sweeps"].append(entry)

    return results


# ==========================
# Presentation
# ==========================

def batch_table(results: Dict[str, Any]) -> pd.DataFrame:
    """One row per batch, indexed by label, keeping integer counts as integers."""
    return pd.DataFrame(results["batches"]).set_index("label")


def print_report(scenario: Scenario, results: Dict[str, Any], out: Optional[TextIO] = None) -> None:
    out = sys.stdout if out is None else out
    fast, slow = scenario.fast, scenario.slow
    cost = results["per_job"]["cost"]
    time = results["per_job"]["time"]

    print("=== PER-JOB VIEW ===\n", file=out)
    print("Cost per finished job:", file=out)
    print(f"  Fast: {_money(cost['cost_a'])} USD | Slow: {_money(cost['cost_b'])} USD\n", file=out)
    print("Time per finished job (hours) and jobs/hour:", file=out)
    print(f"  Fast: {time['time_a']:.2f} h ({time['throughput_a']:.2f} jobs/h)", file=out)
    print(f"  Slow: {time['time_b']:.2f} h ({time['throughput_b']:.2f} jobs/h)\n", file=out)

    print(f"=== BATCH VIEW: {scenario.sprint_hours:g}-hour sprint ===\n", file=out)
    print(batch_table(results).to_string(float_format=_money), file=out)
    delta = results["batch_delta"]
    print("\n=== DELTAS (Fast minus Slow) ===", file=out)
    print(f"Extra finished correct units : {delta['extra_units']}", file=out)
    print(f"Extra total cost             : {_money(delta['extra_cost'])}", file=out)
    print(f"Extra total time (hours)     : {_money(delta['extra_time'])}", file=out)
    if delta["extra_cost_per_unit"] is not None:
        print(f"Extra cost per extra finished unit : {_money(delta['extra_cost_per_unit'])}", file=out)
        print(f"Extra time per extra finished unit : {delta['extra_time_per_unit']:.3f} h", file=out)

    premium = results["premium"]
    print("\nReliability premium (per attempt):", file=out)
    print(f"  Max extra wage justified for {slow.label or 'slow'} over {fast.label or 'fast'}: "
          f"{_money(premium['max_premium'])} USD", file=out)
    print(f"  Actual wage gap (slow - fast): {_money(premium['actual_wage_gap'])} USD\n", file=out)

    print("=== FINANCIAL COMPARISON GIVEN UNIT PRICE ===\n", file=out)
    break_even = results["break_even_unit_price"]
    if break_even is None:
        print("Both workers finish the same number of units; no break-even price.\n", file=out)
    else:
        print(f"Break-even price per extra unit: {_money(break_even)} USD\n", file=out)
    if results["prices"]:
        prices = pd.DataFrame(results["prices"])
        print(prices.to_string(index=False, float_format=_money), file=out)

    for sweep in results["sweeps"]:
        baseline = sweep["baseline"]
        print(f"\n=== PARAM SWEEP '{sweep['name']}': {sweep['title']} ===\n", file=out)
        print(f"Slow attempts ~ {baseline['attempts']}, profit ~ {_money(baseline['profit'])} USD\n", file=out)
        rows = pd.DataFrame(sweep["rows"]).rename(
            columns={
                "p_fast": "pFast",
                "t_work_fast": "tWorkFast(h)",
                "profit_fast": "profitFast",
                "profit_delta": "Δprofit",
            }
        )
        print(rows.to_string(index=False, float_format=_money), file=out)
        spot = sweep["sweet_spot"]
        if spot is not None:
            print("\nSweet spot:", file=out)
            print(f"  pFast ~ {spot['p_fast']:.2f}, tWorkFast ~ {spot['t_work_fast']:.2f} h, "
                  f"attempts ~ {spot['attempts']}, profitFast ~ {_money(spot['profit_fast'])}", file=out)
            print(f"  Profit advantage over Slow: {_money(spot['profit_delta'])} USD", file=out)


def export_results(results: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.dump(results, f, sort_keys=False, allow_unicode=True, Dumper=NumpySafeDumper)


# ==========================
# main
# ==========================

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Trust-vs-verify reliability report")
    parser.add_argument("--config", type=str, default="config.yaml", help="Path to scenario YAML file")
    parser.add_argument("--export", type=str, default=None, help="Write structured results to this YAML file")
    parser.add_argument("--sweep", action="append", default=None, help="Only run the named sweep (repeatable)")
    args = parser.parse_args(argv)

    try:
        scenario = load_scenario(args.config)
    except ScenarioError as e:
        raise SystemExit(f"Failed to load scenario: {e}")

    if args.sweep:
        known = {config.name for config in scenario.sweeps}
        for name in args.sweep:
            if name not in known:
                print(f"[sweep] Unknown sweep '{name}' skipped", file=sys.stderr)

    try:
        results = build_results(scenario, args.sweep)
    except ModelError as e:
        print(f"[model] {e}", file=sys.stderr)
        return 1

    print_report(scenario, results)

    if args.export:
        export_results(results, Path(args.export))
        print(f"[export] Results written to {args.export}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
