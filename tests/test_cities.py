import math

import pytest

from ant_system import City, CityFactory, CityMap, InvalidInput


def test_distance_and_tour_length():
    cities = CityMap([(0, 0), (0, 10), (10, 10), (10, 0)])
    assert cities.distance(0, 2) == pytest.approx(math.hypot(10, 10))
    assert cities.tour_length([0, 1, 2, 3, 0]) == pytest.approx(40.0)
    assert cities.tour_length([0]) == math.inf


def test_cities_get_stable_indices():
    cities = CityMap([(1, 2), (3, 4)])
    assert list(cities) == [City(0, 1.0, 2.0), City(1, 3.0, 4.0)]


def test_non_finite_coordinates_are_rejected():
    with pytest.raises(InvalidInput):
        CityMap([(0, 0), (float("nan"), 1)])


def test_editing_returns_new_map():
    cities = CityMap([(0, 0), (5, 5)])
    bigger = cities.with_city(1, 1)
    assert len(cities) == 2
    assert bigger.coords() == ((0.0, 0.0), (5.0, 5.0), (1.0, 1.0))
    smaller = bigger.without_city(0)
    assert smaller.coords() == ((5.0, 5.0), (1.0, 1.0))
    assert smaller[0].idx == 0
    with pytest.raises(InvalidInput):
        cities.without_city(2)


def test_equality_by_coordinates():
    assert CityMap([(0, 0), (1, 1)]) == CityMap([(0.0, 0.0), (1.0, 1.0)])
    assert CityMap([(0, 0), (1, 1)]) != CityMap([(1, 1), (0, 0)])


def test_csv_round_trip(tmp_path):
    path = tmp_path / "cities.csv"
    cities = CityMap([(0, 0), (2.5, 3), (7, 1)])
    cities.to_csv(str(path))
    assert CityMap.from_csv(str(path)) == cities


def test_csv_with_bad_row(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("0,0\n1,2,3\n", encoding="utf-8")
    with pytest.raises(InvalidInput):
        CityMap.from_csv(str(path))


def test_random_uniform_respects_padding_and_seed():
    a = CityFactory.random_uniform(20, width=200, height=100, pad=10, seed=3)
    b = CityFactory.random_uniform(20, width=200, height=100, pad=10, seed=3)
    assert a == b
    assert len(a) == 20
    for c in a:
        assert 10 <= c.x <= 190
        assert 10 <= c.y <= 90


def test_random_uniform_rejects_bad_field():
    with pytest.raises(InvalidInput):
        CityFactory.random_uniform(3, width=10, height=10, pad=20)


@pytest.mark.parametrize("coords", [[(0, 0), (1, 2, 3)], [(0, 0), (1,)], [(0, 0), 5], [("a", 1)]])
def test_malformed_coordinates_are_rejected(coords):
    with pytest.raises(InvalidInput):
        CityMap(coords)


def test_csv_missing_file(tmp_path):
    with pytest.raises(InvalidInput):
        CityMap.from_csv(str(tmp_path / "nope.csv"))


def test_csv_not_utf8(tmp_path):
    path = tmp_path / "latin.csv"
    path.write_bytes(b"0,0\n\xff\xfe,1\n")
    with pytest.raises(InvalidInput):
        CityMap.from_csv(str(path))
