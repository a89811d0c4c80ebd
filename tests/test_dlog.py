from __future__ import annotations

import threading

import pytest

from conftest import make_toy_params
from she.dlog import DLogTable, build_tables, get_table
from she.errors import PlaintextOutOfRange


@pytest.mark.parametrize("bound", [1, 2, 7, 8, 100, 1 << 12])
def test_table_solves_whole_range(bound):
    params = make_toy_params(bound=bound)
    ops = params.engine.g1
    table = DLogTable(ops, bound)

    step = max(1, bound // 50)
    for m in list(range(-bound, bound + 1, step)) + [-bound, bound, 0]:
        assert table.solve(ops.scalar_mul(m, ops.generator())) == m


def test_table_size_is_sqrt_of_range():
    params = make_toy_params(bound=1 << 20)
    table = DLogTable(params.engine.g1, params.bound)

    assert table.stride == 1449  # ceil(sqrt(2**21))
    assert len(table) == table.stride


@pytest.mark.parametrize("m", [1001, -1001, 5000, 2**40])
def test_out_of_range_raises(m):
    params = make_toy_params(bound=1000)
    ops = params.engine.gt
    table = DLogTable(ops, 1000)

    with pytest.raises(PlaintextOutOfRange):
        table.solve(ops.scalar_mul(m, ops.generator()))


def test_tables_are_cached_per_family_and_bound():
    params = make_toy_params(bound=4321)
    build_tables(params)

    assert get_table(params, "G1") is get_table(params, "G1")
    assert get_table(params, "G1") is not get_table(params, "G2")
    assert get_table(make_toy_params(bound=4322), "G1") is not get_table(params, "G1")
    with pytest.raises(ValueError):
        get_table(params, "G3")


def test_concurrent_first_use_shares_one_table():
    params = make_toy_params(bound=98765)
    barrier = threading.Barrier(8)
    seen = []

    def worker():
        barrier.wait()
        seen.append(get_table(params, "GT"))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 8
    assert all(t is seen[0] for t in seen)


class CountingOps:
    def __init__(self, inner):
        self.inner = inner
        self.encodes = 0

    def __getattr__(self, name):
        return getattr(self.inner, name)

    def encode(self, value):
        self.encodes += 1
        return self.inner.encode(value)


def test_first_giant_step_probes_once():
    params = make_toy_params(bound=1000)
    ops = CountingOps(params.engine.g1)
    table = DLogTable(ops, 1000)

    ops.encodes = 0
    assert table.solve(ops.scalar_mul(7, ops.generator())) == 7
    assert ops.encodes == 1

    ops.encodes = 0
    assert table.solve(ops.scalar_mul(-7, ops.generator())) == -7
    # i = 0 up, then i = 1 up and down
    assert ops.encodes == 3
