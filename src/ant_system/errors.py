
from __future__ import annotations


class ACOError(Exception):
    '''Базовая ошибка пакета ant_system'''


class InvalidInput(ACOError, ValueError):
    '''Некорректные параметры или данные (нарушение контракта вызывающей стороной)'''


class InsufficientCities(ACOError):
    '''
    Для итерации нужно хотя бы 2 города

    Ошибка восстановимая: состояние движка не меняется, достаточно добавить города.
    '''

    def __init__(self, count: int) -> None:
        super().__init__(f"Нужно хотя бы 2 города, сейчас {count}.")
        self.count = count
