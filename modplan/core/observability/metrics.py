from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter
from prometheus_client import Histogram

# Named counters (custom)
_NAMED = Counter()

_PROM_RESOLUTIONS = PromCounter(
    "modplan_plan_resolutions_total",
    "Build plan resolutions by outcome",
    ["outcome"],
)

_PROM_RESOLUTION_SECONDS = Histogram(
    "modplan_plan_resolution_seconds",
    "Build plan resolution duration in seconds",
)


def reset_metrics() -> None:
    """
    Test helper: clears named counters to avoid cross-test leakage.
    Prometheus collectors are process-global and are not reset.
    """
    _NAMED.clear()


def observe_resolution(outcome: str, seconds: float) -> None:
    _NAMED[f"resolutions_{outcome}"] += 1
    _PROM_RESOLUTIONS.labels(outcome=outcome).inc()
    _PROM_RESOLUTION_SECONDS.observe(max(0.0, seconds))


def inc_named(name: str, value: int = 1) -> None:
    """
    Increment a named counter (error codes, health probes, etc.).
    """
    if not name:
        return
    _NAMED[name] += int(value)


def snapshot_named() -> Dict[str, int]:
    return dict(_NAMED)
