# src/boundedseq/adapters/arrays.py
from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np

from boundedseq.core.sequence import BoundedSequence


def to_array(seq: BoundedSequence[Any], dtype: Optional[Any] = None) -> np.ndarray:
    """Copy the window into a numpy array, oldest first."""
    if not seq:
        return np.empty((0,), dtype=dtype if dtype is not None else float)
    return np.asarray(seq.to_list(), dtype=dtype)


def window_stats(seq: BoundedSequence[Any]) -> Dict[str, float]:
    """count/min/max/mean over a numeric window (zeros when empty)."""
    if not seq:
        return {"count": 0, "min": 0.0, "max": 0.0, "mean": 0.0}
    arr = to_array(seq, dtype=float)
    return {
        "count": int(arr.size),
        "min": float(arr.min()),
        "max": float(arr.max()),
        "mean": float(arr.mean()),
    }
