from __future__ import annotations

import math
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .cities import City, CityMap
from .errors import InsufficientCities, InvalidInput
from .pheromone import TAU0, PheromoneStore

EPS = 1e-6

CitiesLike = CityMap | Iterable[City] | Iterable[tuple[float, float]]


@dataclass(slots=True)
class ACOParams:
    '''
    Параметры Ant System на одну итерацию

    Attributes:
        alpha: важность феромона (>= 0)
        beta: важность эвристики 1/d (>= 0)
        rho: коэффициент испарения феромона (0 <= rho <= 1)
        ants: количество муравьёв в поколении (>= 0, 0 - итерация ничего не делает)
    '''
    alpha: float = 1.0
    beta: float = 2.0
    rho: float = 0.5
    ants: int = 10

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for name in ("alpha", "beta"):
            v = getattr(self, name)
            if not (math.isfinite(v) and v >= 0):
                raise InvalidInput(f"{name} должно быть конечным и >= 0: {v}")
        if not 0.0 <= self.rho <= 1.0:
            raise InvalidInput(f"rho должно быть в [0, 1]: {self.rho}")
        if isinstance(self.ants, bool) or not isinstance(self.ants, int) or self.ants < 0:
            raise InvalidInput(f"ants должно быть целым >= 0: {self.ants!r}")


@dataclass(slots=True)
class BestTour:
    '''
    Лучший найденный тур за прогон

    Attributes:
        tour: замкнутый тур (None, пока тура нет)
        length: длина тура (+inf, пока тура нет)
    '''
    tour: list[int] | None = None
    length: float = math.inf

    def offer(self, tour: Sequence[int], length: float) -> bool:
        '''Заменяет рекорд только при строго меньшей длине'''
        if length < self.length:
            self.tour = list(tour)
            self.length = length
            return True
        return False

    def reset(self) -> None:
        self.tour = None
        self.length = math.inf


@dataclass(slots=True, frozen=True)
class IterationResult:
    '''
    Состояние после одной итерации (для отрисовки)

    Attributes:
        iteration: номер итерации (счётчик движка)
        best_tour: лучший тур за прогон или None
        best_length: его длина или +inf
        iteration_best_length: лучшая длина среди муравьёв этого поколения
        improved: обновился ли рекорд на этой итерации
    '''
    iteration: int
    best_tour: list[int] | None
    best_length: float
    iteration_best_length: float
    improved: bool


@dataclass(slots=True)
class RunResult:
    '''
    Результат пакетного прогона

    Attributes:
        best_tour: лучший найденный тур (пустой, если тура нет)
        best_length: длина лучшего тура
        iterations: количество выполненных итераций
        history: лучшая длина после каждой итерации
    '''
    best_tour: list[int]
    best_length: float
    iterations: int
    history: list[float] = field(default_factory=list)


def _as_city_map(cities: CitiesLike) -> CityMap:
    if isinstance(cities, CityMap):
        return cities
    return CityMap((c.x, c.y) if isinstance(c, City) else c for c in cities)


class AntSystem:
    '''
    Ant System для евклидовой задачи коммивояжёра

    Владеет памятью феромонов, рекордом лучшего тура и счётчиком итераций.
    Параметры передаются на каждую итерацию; темп вызовов задаёт внешний драйвер.

    Attributes:
        cities: текущий набор городов
        store: феромоны на рёбрах
        best: лучший тур за прогон
        iteration: счётчик итераций
        rng: источник случайности (random.Random), подменяется для воспроизводимости
    '''
    def __init__(self, cities: CitiesLike | None = None, *, seed: int | None = None,
                 rng: random.Random | None = None, tau0: float = TAU0) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.store = PheromoneStore(tau0=tau0)
        self.best = BestTour()
        self.iteration = 0
        self.cities = CityMap()
        self.on_city_set_changed(cities if cities is not None else CityMap())

    # ---- Жизненный цикл ----------------------------------------------------
    def on_city_set_changed(self, cities: CitiesLike) -> None:
        '''Новый набор городов: феромоны заново, рекорд и счётчик сбрасываются'''
        self.cities = _as_city_map(cities)
        self.store.initialize(self.cities.n)
        self.best.reset()
        self.iteration = 0

    def reset_model(self) -> None:
        '''Возврат к начальному состоянию для текущего набора городов'''
        self.store.initialize(self.cities.n)
        self.best.reset()
        self.iteration = 0

    # ---- Итерация ----------------------------------------------------------
    def run_iteration(self, params: ACOParams, cities: CitiesLike | None = None) -> IterationResult:
        '''
        Одно поколение: туры всех муравьёв, испарение, откладывание, обновление рекорда

        Attributes:
            params: параметры итерации
            cities: набор городов; если отличается от текущего, состояние сбрасывается
        Returns:
            IterationResult
        Raises:
            InvalidInput: некорректные параметры (состояние не меняется)
            InsufficientCities: меньше 2 городов (состояние не меняется)
        '''
        params.validate()
        if cities is not None:
            new_map = _as_city_map(cities)
            if new_map.n < 2:
                raise InsufficientCities(new_map.n)
            if new_map != self.cities:
                self.on_city_set_changed(new_map)
        if self.cities.n < 2:
            raise InsufficientCities(self.cities.n)

        if params.ants == 0:
            return self._result(math.inf, improved=False)

        tours = []
        lengths = []
        for _ in range(params.ants):
            tour = self.construct_tour(params)
            tours.append(tour)
            lengths.append(self.cities.tour_length(tour))

        # Испарение строго до откладывания
        self.store.evaporate(params.rho)
        for tour, length in zip(tours, lengths, strict=True):
            self.store.deposit(zip(tour, tour[1:], strict=False), 1.0 / (length + EPS))

        improved = False
        for tour, length in zip(tours, lengths, strict=True):
            if self.best.offer(tour, length):
                improved = True

        self.iteration += 1
        return self._result(min(lengths), improved=improved)

    def construct_tour(self, params: ACOParams, *, start: int | None = None) -> list[int]:
        '''
        Построение замкнутого тура одним муравьём

        Attributes:
            params: параметры (alpha, beta)
            start: стартовый город (None - случайный)
        Returns:
            тур длины n+1, начинается и заканчивается в start
        '''
        n = self.cities.n
        if n == 0:
            raise InsufficientCities(n)
        if start is None:
            start = self.rng.randrange(n)
        elif not 0 <= start < n:
            raise InvalidInput(f"Нет города с индексом {start}")
        tour = [start]
        unvisited = [j for j in range(n) if j != start]
        cur = start

        while unvisited:
            nxt = self._choose_next(cur, unvisited, params)
            tour.append(nxt)
            unvisited.remove(nxt)
            cur = nxt

        # Цикл замыкания
        tour.append(start)
        return tour

    def _choose_next(self, i: int, candidates: list[int], params: ACOParams) -> int:
        '''
        Рулеточный выбор следующего города пропорционально tau^alpha * eta^beta

        Веса считаются в логарифмах и нормируются на максимальный, поэтому
        большие alpha/beta и близкие города не переполняют float.
        Кандидаты перебираются в порядке списка; если из-за округления остаток
        так и не стал <= 0, берётся последний кандидат.
        '''
        alpha = params.alpha
        beta = params.beta
        dist = self.cities.d[i]

        log_weights = []
        for j in candidates:
            tau = self.store.get(i, j)
            eta = 1.0 / (dist[j] + EPS)
            log_weights.append(alpha * math.log(tau) + beta * math.log(eta))

        # Максимальный вес равен 1, так что сумма всегда >= 1
        top = max(log_weights)
        weights = [math.exp(lw - top) for lw in log_weights]
        total = sum(weights)

        r = self.rng.random() * total
        for j, w in zip(candidates, weights, strict=True):
            r -= w
            if r <= 0:
                return j
        return candidates[-1]

    def _result(self, iteration_best: float, *, improved: bool) -> IterationResult:
        return IterationResult(
            iteration=self.iteration,
            best_tour=list(self.best.tour) if self.best.tour is not None else None,
            best_length=self.best.length,
            iteration_best_length=iteration_best,
            improved=improved,
        )

    # ---- Пакетный прогон ---------------------------------------------------
    def run(self, params: ACOParams, n_iterations: int = 200, *, early_stop: int | None = None,
            verbose: bool = False) -> RunResult:
        '''
        Запуск n_iterations итераций подряд
        Возвращает объект RunResult с результатами

        Attributes:
            params: параметры итераций
            n_iterations: максимальное число итераций
            early_stop: остановка после N итераций без улучшения (None - не использовать)
            verbose: печать хода первых и последних итераций
        '''
        if n_iterations < 0:
            raise InvalidInput(f"n_iterations должно быть >= 0: {n_iterations}")
        params.validate()
        history = []
        n_no_improve = 0
        start_iteration = self.iteration

        if verbose:
            print("=== Параметры ===", params)
            print("Городов:", self.cities.n)
            print()

        for it in range(1, n_iterations + 1):
            res = self.run_iteration(params)
            history.append(res.best_length)
            n_no_improve = 0 if res.improved else n_no_improve + 1

            if verbose and (it <= 3 or it > n_iterations - 3):
                print(f"Итерация {res.iteration}: лучший в поколении={res.iteration_best_length:.2f}, "
                      f"лучший {res.best_tour}, длина={res.best_length:.2f}")

            if early_stop and n_no_improve >= early_stop:
                break

        return RunResult(best_tour=list(self.best.tour or []), best_length=self.best.length,
                         iterations=self.iteration - start_iteration, history=history)
