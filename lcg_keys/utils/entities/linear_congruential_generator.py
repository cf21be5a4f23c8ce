"""
Смешанный линейный конгруэнтный генератор (алгоритм Лемера):
X(n+1) = (a * X(n) + c) mod m

где:
- a - множитель (multiplier)
- c - приращение (increment)
- m - модуль (modulus)
- X(0) - начальное значение (seed)

Генератор с параметрами, нарушающими условия полного периода, работает без
ошибок, но проходит не все значения. Это ловит верификатор периода, а здесь
лишь пишется предупреждение в лог.
"""

import logging
from typing import Iterator, List

from ...errors import InvalidModulusError

logger = logging.getLogger(__name__)


def lcg_step(x: int, a: int, c: int, m: int) -> int:
    """Один шаг рекуррентного соотношения"""
    return (a * x + c) % m


class LinearCongruentialGenerator:
    """
    Генератор целых чисел из Z_m на основе смешанного алгоритма Лемера
    """

    DEFAULT_SEED: int = 0

    def __init__(self, a: int, c: int, m: int, seed: int = DEFAULT_SEED):
        """
        Инициализация генератора

        Args:
            a: множитель
            c: приращение
            m: модуль
            seed: начальное значение из [0, m)
        """
        if m < 2:
            raise InvalidModulusError(m)
        self.a = a
        self.c = c
        self.m = m

        self._check_seed(seed)
        self.seed = seed
        self.current = seed
        self.initial_seed = seed

        self._validate_parameters()

    @classmethod
    def from_parameters(cls, params, seed: int = DEFAULT_SEED) -> "LinearCongruentialGenerator":
        """Создание генератора из LcgParameters"""
        return cls(params.a, params.c, params.m, seed=seed)

    def _check_seed(self, seed: int):
        if not 0 <= seed < self.m:
            raise ValueError(f"Начальное значение должно быть в диапазоне [0, {self.m}), получено: {seed}")

    def _validate_parameters(self):
        """Проверка корректности параметров для максимального периода"""
        # отложенный импорт: parameter_analysis -> reporting -> entities
        from ...parameter_analysis import check_hull_conditions

        conditions = check_hull_conditions(self.a, self.c, self.m)
        if not conditions['all_conditions_met']:
            logger.warning("Параметры %s не гарантируют полный период: %s", self, conditions)

    def advance(self) -> int:
        """
        Переход к следующему состоянию

        Returns:
            Новое состояние генератора
        """
        self.current = (self.a * self.current + self.c) % self.m
        return self.current

    def generate_sequence(self, count: int) -> List[int]:
        """
        Генерация последовательности целых чисел

        Args:
            count: количество чисел для генерации

        Returns:
            Список следующих count состояний
        """
        return [self.advance() for _ in range(count)]

    def reset(self):
        """Сброс генератора к начальному состоянию"""
        self.current = self.initial_seed

    def set_seed(self, seed: int):
        """Установка нового начального значения"""
        self._check_seed(seed)
        self.seed = seed
        self.initial_seed = seed
        self.current = seed

    def __iter__(self) -> Iterator[int]:
        """Итератор для генерации бесконечной последовательности"""
        while True:
            yield self.advance()

    def __str__(self) -> str:
        return f"LinearCongruentialGenerator(a={self.a}, c={self.c}, m={self.m}, seed={self.seed})"
