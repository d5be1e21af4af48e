"""Ant System для евклидовой задачи коммивояжёра.

Пакет предоставляет:
- ant_system.cities: классы City, CityMap, CityFactory
- ant_system.pheromone: PheromoneStore и канонические ключи рёбер
- ant_system.ants: ACOParams, AntSystem (одна итерация за вызов), результаты
- ant_system.errors: InvalidInput, InsufficientCities
- ant_system.cli: CLI для запуска из терминала
"""
from .ants import ACOParams, AntSystem, BestTour, IterationResult, RunResult
from .cities import City, CityFactory, CityMap
from .errors import ACOError, InsufficientCities, InvalidInput
from .pheromone import PheromoneStore, edge_key

__all__ = [
    "City", "CityMap", "CityFactory",
    "PheromoneStore", "edge_key",
    "AntSystem", "ACOParams", "BestTour", "IterationResult", "RunResult",
    "ACOError", "InvalidInput", "InsufficientCities",
]
