# tests/test_arrays.py
import numpy as np

from boundedseq.adapters.arrays import to_array, window_stats
from boundedseq.core.sequence import BoundedSequence


def test_to_array_oldest_first():
    seq = BoundedSequence(3, [1, 2, 3, 4])
    arr = to_array(seq)
    assert isinstance(arr, np.ndarray)
    assert arr.tolist() == [2, 3, 4]
    assert to_array(seq, dtype=np.float32).dtype == np.float32


def test_to_array_empty():
    arr = to_array(BoundedSequence(3))
    assert arr.shape == (0,)


def test_window_stats():
    seq = BoundedSequence(4)
    assert window_stats(seq) == {"count": 0, "min": 0.0, "max": 0.0, "mean": 0.0}
    seq.extend([5, 1, 3, 7, 9])
    assert window_stats(seq) == {"count": 4, "min": 1.0, "max": 9.0, "mean": 5.0}
