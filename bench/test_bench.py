from functools import partial

import pytest

from observed import observed


def noop(_):
    pass


N = 10000


class Plain:
    def __init__(self):
        self.value = 0


class Behavior:
    value = observed(0)


class Stateless:
    value = observed(0, kind="subject")


class Replay:
    value = observed(0, kind="replay", replay={"buffer_size": 10})


TYPES = {
    "plain": Plain,
    "behavior": Behavior,
    "subject": Stateless,
    "replay": Replay,
}


def bench_assign(cls, add_subscriber):
    for _ in range(N):
        obj = cls()
        if add_subscriber:
            obj.value_.subscribe(noop)
        for i in range(10):
            obj.value = i
        _ = obj.value  # read something


@pytest.mark.timeout(timeout=0)
@pytest.mark.benchmark(
    group="assign_plain_vs_observed",
)
@pytest.mark.parametrize("name", ["plain", "behavior", "subject", "replay"])
def test_assign_plain_vs_observed(benchmark, name):
    bench_fn = partial(bench_assign, TYPES[name], False)
    benchmark(bench_fn)


@pytest.mark.timeout(timeout=0)
@pytest.mark.benchmark(
    group="assign_with_subscriber",
)
@pytest.mark.parametrize("name", ["behavior", "subject", "replay"])
def test_assign_with_subscriber(benchmark, name):
    bench_fn = partial(bench_assign, TYPES[name], True)
    benchmark(bench_fn)


def bench_read(cls):
    obj = cls()
    obj.value = 1
    for _ in range(N):
        _ = obj.value


@pytest.mark.timeout(timeout=0)
@pytest.mark.benchmark(
    group="read_plain_vs_observed",
)
@pytest.mark.parametrize("name", ["plain", "behavior"])
def test_read_plain_vs_observed(benchmark, name):
    bench_fn = partial(bench_read, TYPES[name])
    benchmark(bench_fn)
