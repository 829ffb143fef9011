"""
FIELD ENCRYPTION METRICS
========================
Prometheus-backed counters for cipher and transform events.
"""

from __future__ import annotations

import threading
from typing import Dict

from prometheus_client import Counter

from FieldEncryption.encryption_config import ENCRYPTION_SETTINGS


_EVENTS = None
_LOCK = threading.Lock()


def _init_metrics() -> None:
    global _EVENTS
    if _EVENTS is not None or not ENCRYPTION_SETTINGS["METRICS_ENABLED"]:
        return
    # First calls may race from several host threads; register once.
    with _LOCK:
        if _EVENTS is None:
            _EVENTS = Counter(
                "field_encryption_events_total",
                "Count of field encryption events",
                ["event"],
            )


def increment_event(event: str, amount: int = 1) -> None:
    _init_metrics()
    if _EVENTS is None:
        return
    _EVENTS.labels(event=event).inc(amount)


def _counter_value(counter, event: str) -> int:
    try:
        return int(counter.labels(event=event)._value.get())
    except Exception:
        return 0


def get_metrics_snapshot(events: list[str]) -> Dict[str, Dict[str, int]]:
    _init_metrics()
    snapshot: Dict[str, Dict[str, int]] = {}
    for event in events:
        count = _counter_value(_EVENTS, event) if _EVENTS is not None else 0
        snapshot[event] = {"events": count}
    return snapshot
