import random

import pytest

from ant_system import InvalidInput, PheromoneStore, edge_key
from ant_system.pheromone import TAU_FLOOR


def test_edge_key_is_canonical():
    for a in range(6):
        for b in range(6):
            assert edge_key(a, b) == edge_key(b, a)
            assert edge_key(a, b)[0] <= edge_key(a, b)[1]


@pytest.mark.parametrize("n", [0, 1, 2, 5, 12])
def test_initialize_creates_one_entry_per_pair(n):
    store = PheromoneStore(n)
    assert len(store) == n * (n - 1) // 2
    assert all(v == 1.0 for v in store.snapshot().values())


def test_initialize_rejects_negative_count():
    with pytest.raises(InvalidInput):
        PheromoneStore().initialize(-1)


def test_get_is_symmetric_and_floors_missing_edges():
    store = PheromoneStore(3)
    store.deposit([(2, 0)], 0.5)
    assert store.get(0, 2) == store.get(2, 0) == 1.5
    assert store.get(0, 7) == TAU_FLOOR
    store.evaporate(1.0)
    assert store.get(0, 1) == TAU_FLOOR


def test_evaporation_strictly_decreases_positive_levels():
    store = PheromoneStore(5)
    store.deposit([(0, 1), (1, 2)], 3.0)
    for rho in (0.1, 0.5, 1.0):
        before = store.snapshot()
        store.evaporate(rho)
        after = store.snapshot()
        for k, v in before.items():
            if v > 0:
                assert after[k] < v
        store.initialize(5)


def test_evaporation_with_zero_rho_is_noop():
    store = PheromoneStore(4)
    store.deposit([(0, 3)], 0.25)
    before = store.snapshot()
    store.evaporate(0.0)
    assert store.snapshot() == pytest.approx(before)


@pytest.mark.parametrize("rho", [-0.1, 1.5, float("nan")])
def test_evaporation_rejects_rho_outside_unit_interval(rho):
    store = PheromoneStore(3)
    with pytest.raises(InvalidInput):
        store.evaporate(rho)
    assert all(v == 1.0 for v in store.snapshot().values())


def test_deposit_accumulates_repeated_edges():
    store = PheromoneStore(3)
    store.deposit([(0, 1), (1, 0), (1, 2)], 0.5)
    assert store.get(0, 1) == pytest.approx(2.0)
    assert store.get(1, 2) == pytest.approx(1.5)
    assert store.get(0, 2) == pytest.approx(1.0)


@pytest.mark.parametrize("edges, amount", [
    ([(0, 0)], 1.0),
    ([(0, 5)], 1.0),
    ([(0, 1)], -1.0),
    ([(0, 1), (2, 2)], 1.0),
])
def test_deposit_rejects_bad_input_without_partial_mutation(edges, amount):
    store = PheromoneStore(3)
    with pytest.raises(InvalidInput):
        store.deposit(edges, amount)
    assert all(v == 1.0 for v in store.snapshot().values())


def test_levels_stay_non_negative():
    rng = random.Random(7)
    store = PheromoneStore(6)
    for _ in range(300):
        if rng.random() < 0.5:
            store.evaporate(rng.random())
        else:
            a, b = rng.sample(range(6), 2)
            store.deposit([(a, b)], rng.random() * 2)
        assert all(v >= 0 for v in store.snapshot().values())


def test_reset_clears_entries():
    store = PheromoneStore(4)
    store.reset()
    assert len(store) == 0
    assert (0, 1) not in store
    assert store.get(0, 1) == TAU_FLOOR


def test_contains_accepts_either_direction():
    store = PheromoneStore(3)
    assert (2, 1) in store
    assert (1, 1) not in store
    assert "x" not in store
