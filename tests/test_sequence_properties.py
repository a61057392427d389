# tests/test_sequence_properties.py
"""
Randomized checks against a plain list model.
Each seed drives a different mix of append / erase / clear / set.
"""
import random

import pytest

from boundedseq.core.sequence import BoundedSequence

SEEDS = list(range(12))


def _model_append(model, cap, v):
    model.append(v)
    if len(model) > cap:
        del model[0]


@pytest.mark.parametrize("seed", SEEDS)
def test_random_ops_match_model(seed):
    rng = random.Random(seed)
    cap = rng.randint(1, 8)
    seq = BoundedSequence(cap)
    model = []

    for step in range(300):
        op = rng.random()
        pre = seq.size()
        if op < 0.65:
            v = (seed, step)
            evicted = seq.append(v)
            if pre < cap:
                assert seq.size() == pre + 1
                assert seq.at(pre) == v
                assert evicted is None
            else:
                assert seq.size() == cap
                assert seq.at(cap - 1) == v
                assert evicted == model[0]
                assert evicted not in seq.to_list()
            _model_append(model, cap, v)
        elif op < 0.85 and pre:
            k = rng.randrange(pre)
            before = seq.to_list()
            cur = seq.erase(k)
            assert seq.size() == pre - 1
            assert seq.to_list() == before[:k] + before[k + 1:]
            assert cur.index == k
            assert cur.at_end == (k == pre - 1)
            del model[k]
        elif op < 0.95 and pre:
            k = rng.randrange(pre)
            seq[k] = ("set", step)
            model[k] = ("set", step)
        else:
            seq.clear()
            model.clear()

        assert 0 <= seq.size() <= cap
        assert seq.capacity == cap
        assert seq.to_list() == model
        assert list(seq) == [seq.at(i) for i in range(seq.size())]


@pytest.mark.parametrize("seed", SEEDS)
def test_appends_keep_last_values_in_order(seed):
    rng = random.Random(1000 + seed)
    cap = rng.randint(1, 16)
    values = [rng.randint(-50, 50) for _ in range(rng.randint(0, 60))]
    seq = BoundedSequence(cap)
    for v in values:
        seq.append(v)
    tail = values[-cap:] if values else []
    assert [seq.at(i) for i in range(seq.size())] == tail
    assert list(reversed(seq)) == tail[::-1]


@pytest.mark.parametrize("seed", SEEDS[:4])
def test_clear_behaves_like_fresh(seed):
    rng = random.Random(2000 + seed)
    cap = rng.randint(1, 6)
    used = BoundedSequence(cap, range(rng.randint(0, 20)))
    used.clear()
    fresh = BoundedSequence(cap)
    assert used == fresh

    for _ in range(30):
        v = rng.random()
        assert used.append(v) == fresh.append(v)
        assert used == fresh
