
from __future__ import annotations

import csv
import math
import random
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from .errors import InvalidInput


@dataclass(slots=True, frozen=True)
class City:
    '''
    Город на плоскости

    Attributes:
        idx: Порядковый индекс города [0..n-1]
        x: Координата x
        y: Координата y
    '''
    idx: int
    x: float
    y: float

    def distance_to(self, other: City) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


class CityMap:
    '''
    Неизменяемый набор городов для евклидовой задачи коммивояжёра

    Хранит матрицу расстояний `d[i][j]`, посчитанную один раз при создании.
    Редактирование набора (добавить/убрать город) возвращает новый объект.
    '''

    def __init__(self, coords: Iterable[tuple[float, float]] = ()) -> None:
        cities = []
        for i, pair in enumerate(coords):
            try:
                x, y = pair
                x, y = float(x), float(y)
            except (TypeError, ValueError) as exc:
                raise InvalidInput(f"Город {i}: ожидается пара (x, y), получено {pair!r}") from exc
            if not (math.isfinite(x) and math.isfinite(y)):
                raise InvalidInput(f"Координаты города {i} должны быть конечными: ({x}, {y})")
            cities.append(City(i, x, y))
        self.cities: tuple[City, ...] = tuple(cities)
        self.n: int = len(cities)
        self.d: list[list[float]] = [[a.distance_to(b) for b in cities] for a in cities]

    # ---- Основные операции -------------------------------------------------
    def __len__(self) -> int:
        return self.n

    def __iter__(self) -> Iterator[City]:
        return iter(self.cities)

    def __getitem__(self, idx: int) -> City:
        return self.cities[idx]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CityMap):
            return NotImplemented
        return self.coords() == other.coords()

    def __hash__(self) -> int:
        return hash(self.coords())

    def __repr__(self) -> str:
        return f"CityMap(n={self.n})"

    def coords(self) -> tuple[tuple[float, float], ...]:
        return tuple((c.x, c.y) for c in self.cities)

    def distance(self, i: int, j: int) -> float:
        return self.d[i][j]

    def tour_length(self, tour: Sequence[int]) -> float:
        '''Длина маршрута (замкнутого): сумма расстояний между соседними городами'''
        if len(tour) < 2:
            return math.inf
        total = 0.0
        for a, b in zip(tour, tour[1:], strict=False):
            total += self.d[a][b]
        return total

    # ---- Редактирование между прогонами ------------------------------------
    def with_city(self, x: float, y: float) -> CityMap:
        return CityMap([*self.coords(), (x, y)])

    def without_city(self, idx: int) -> CityMap:
        if not 0 <= idx < self.n:
            raise InvalidInput(f"Нет города с индексом {idx}")
        return CityMap(c for i, c in enumerate(self.coords()) if i != idx)

    # ---- Загрузка / сохранение --------------------------------------------
    @staticmethod
    def from_csv(path: str) -> CityMap:
        '''Загружает города из CSV-файла, по одной паре `x,y` на строку'''
        try:
            with open(path, encoding="utf-8") as f:
                reader = csv.reader(f)
                rows = [row for row in reader if row]
        except (OSError, UnicodeDecodeError) as exc:
            raise InvalidInput(f"Не удалось прочитать {path}: {exc}") from exc
        coords = []
        for lineno, row in enumerate(rows, start=1):
            if len(row) != 2:
                raise InvalidInput(f"Строка {lineno}: ожидается 'x,y', получено {row!r}")
            try:
                coords.append((float(row[0]), float(row[1])))
            except ValueError as exc:
                raise InvalidInput(f"Строка {lineno}: {exc}") from exc
        return CityMap(coords)

    def to_csv(self, path: str) -> None:
        '''Сохраняет города в CSV-файл'''
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            for c in self.cities:
                writer.writerow([c.x, c.y])


class CityFactory:
    '''Фабрика для генерации наборов городов'''

    @staticmethod
    def random_uniform(n: int = 12, *, width: float = 800.0, height: float = 600.0, pad: float = 32.0,
                       seed: int | None = None) -> CityMap:
        '''Создаёт n городов, равномерно разбросанных в прямоугольнике width x height с отступом pad'''
        if n < 0:
            raise InvalidInput("n >= 0")
        w = width - 2 * pad
        h = height - 2 * pad
        if w < 0 or h < 0:
            raise InvalidInput("Отступ больше размеров поля")
        rng = random.Random(seed)
        return CityMap((pad + rng.random() * w, pad + rng.random() * h) for _ in range(n))
