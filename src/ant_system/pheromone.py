
from __future__ import annotations

from collections.abc import Iterable

from .errors import InvalidInput

TAU0 = 1.0
# Уровень для отсутствующего (или выгоревшего до нуля) ребра
TAU_FLOOR = 1e-4
TAU_MIN = 1e-6

EdgeKey = tuple[int, int]


def edge_key(a: int, b: int) -> EdgeKey:
    '''Канонический ключ неориентированного ребра: (min, max)'''
    return (a, b) if a < b else (b, a)


class PheromoneStore:
    '''
    Память феромонов на неориентированных рёбрах

    Одна запись на пару городов, всего n(n-1)/2. Уровни всегда неотрицательны:
    испарение только умножает, откладывание только прибавляет.
    '''

    def __init__(self, city_count: int = 0, tau0: float = TAU0) -> None:
        self.tau0 = tau0
        self.city_count = 0
        self._levels: dict[EdgeKey, float] = {}
        self.initialize(city_count)

    def initialize(self, city_count: int) -> None:
        '''Создаёт записи для всех пар городов с начальным уровнем tau0'''
        if city_count < 0:
            raise InvalidInput(f"Число городов не может быть отрицательным: {city_count}")
        self.city_count = city_count
        self._levels = {(i, j): self.tau0 for i in range(city_count) for j in range(i + 1, city_count)}

    def reset(self) -> None:
        self._levels.clear()
        self.city_count = 0

    def get(self, a: int, b: int) -> float:
        level = self._levels.get(edge_key(a, b))
        if not level:
            level = TAU_FLOOR
        return max(level, TAU_MIN)

    def evaporate(self, rho: float) -> None:
        '''Испарение: все уровни умножаются на (1 - rho)'''
        if not 0.0 <= rho <= 1.0:
            raise InvalidInput(f"rho должно быть в [0, 1]: {rho}")
        keep = 1.0 - rho
        for k in self._levels:
            self._levels[k] *= keep

    def deposit(self, edges: Iterable[tuple[int, int]], amount: float) -> None:
        '''
        Откладывание феромона на рёбра

        Attributes:
            edges: рёбра (a, b) в любом направлении; повторы накапливаются
            amount: добавка к уровню каждого ребра (>= 0)
        '''
        if not amount >= 0:
            raise InvalidInput(f"Количество феромона должно быть >= 0: {amount}")
        n = self.city_count
        keys = []
        for a, b in edges:
            if a == b or not (0 <= a < n and 0 <= b < n):
                raise InvalidInput(f"Некорректное ребро ({a}, {b}) для {n} городов")
            keys.append(edge_key(a, b))
        for k in keys:
            self._levels[k] = self._levels.get(k, 0.0) + amount

    def snapshot(self) -> dict[EdgeKey, float]:
        '''Копия текущих уровней (для отрисовки)'''
        return dict(self._levels)

    def __len__(self) -> int:
        return len(self._levels)

    def __contains__(self, edge: object) -> bool:
        if not (isinstance(edge, tuple) and len(edge) == 2):
            return False
        return edge_key(*edge) in self._levels
