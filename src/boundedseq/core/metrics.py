# src/boundedseq/core/metrics.py
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Tuple

LabelKey = Tuple[Tuple[str, str], ...]  # (k, v) pairs, sorted by key


def _labels_key(labels: Dict[str, Any] | None) -> LabelKey:
    return tuple(sorted((str(k), str(v)) for k, v in (labels or {}).items()))


class Metric:
    """A named float cell: counters add to it, gauges overwrite it."""
    __slots__ = ("name", "labels", "_value", "_lock")

    def __init__(self, name: str, labels: LabelKey):
        self.name = name
        self.labels = labels
        self._value = 0.0
        self._lock = threading.Lock()

    def inc(self, n: float = 1.0) -> None:
        with self._lock:
            self._value += n

    def set(self, v: float) -> None:
        with self._lock:
            self._value = float(v)

    def value(self) -> float:
        with self._lock:
            return self._value


# ---------------- Registry ----------------

class _Registry:
    """Process-wide store; sequences themselves stay lock-free."""
    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._counters: Dict[Tuple[str, LabelKey], Metric] = {}
        self._gauges: Dict[Tuple[str, LabelKey], Metric] = {}

    def _get(self, table: Dict, name: str, labels: Dict[str, Any] | None):
        key = (name, _labels_key(labels))
        with self._lock:
            m = table.get(key)
            if m is None:
                m = Metric(name, key[1])
                table[key] = m
            return m

    def counter(self, name: str, labels: Dict[str, Any] | None) -> Metric:
        return self._get(self._counters, name, labels)

    def gauge(self, name: str, labels: Dict[str, Any] | None) -> Metric:
        return self._get(self._gauges, name, labels)

    def items(self):
        with self._lock:
            return list(self._counters.items()), list(self._gauges.items())

    def clear(self) -> None:
        with self._lock:
            self._counters.clear()
            self._gauges.clear()


_REG = _Registry()

# ---------------- Public API ----------------

def inc(name: str, n: float = 1.0, **labels: Any) -> None:
    _REG.counter(name, labels).inc(n)


def gauge_set(name: str, v: float, **labels: Any) -> None:
    _REG.gauge(name, labels).set(v)


def counter_value(name: str, **labels: Any) -> float:
    return _REG.counter(name, labels).value()


def gauge_value(name: str, **labels: Any) -> float:
    return _REG.gauge(name, labels).value()


def reset() -> None:
    """Drop every registered metric (tests)."""
    _REG.clear()


def snapshot() -> dict:
    """Current metrics as plain dicts."""
    counters, gauges = _REG.items()
    return {
        "counters": [{"name": n, "labels": dict(lb), "value": m.value()} for (n, lb), m in counters],
        "gauges": [{"name": n, "labels": dict(lb), "value": m.value()} for (n, lb), m in gauges],
    }


def force_emit(logger: Optional[logging.Logger] = None, json_mode: bool = False) -> None:
    """Log the current snapshot, one line per metric."""
    lg = logger or logging.getLogger("boundedseq.metrics")
    counters, gauges = _REG.items()

    if json_mode:
        for (_, labels), m in counters:
            lg.info({"type": "counter", "name": m.name, "labels": dict(labels), "value": m.value()})
        for (_, labels), m in gauges:
            lg.info({"type": "gauge", "name": m.name, "labels": dict(labels), "value": m.value()})
        return

    for (_, labels), m in counters:
        lg.info(f"[ctr] {m.name} {dict(labels)} value={m.value():.0f}")
    for (_, labels), m in gauges:
        lg.info(f"[gauge] {m.name} {dict(labels)} value={m.value():.3f}")
