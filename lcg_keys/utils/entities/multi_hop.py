"""
Генерация по последовательному индексу с несколькими прыжками

Генератор с полным периодом - перестановка Z_m, поэтому его можно кормить не
предыдущим значением, а номером 0, 1, 2, ... Но при одном прыжке соседние
номера дают почти соседние значения, и ключи вида B37M..., B4CB... повторяются
с шагом в несколько номеров. Композиция перестановки с собой - тоже
перестановка, так что k прыжков на номер по-прежнему дают каждое значение
ровно один раз, а явная периодичность пропадает.
"""

from typing import Iterator

from ...errors import InvalidModulusError
from .keyspace import DEFAULT_KEYSPACE, Keyspace
from .linear_congruential_generator import lcg_step

DEFAULT_HOPS = 2


class MultiHopDriver:
    """Значение для номера n: k раз применить шаг генератора, начиная с n"""

    def __init__(self, a: int, c: int, m: int, hops: int = DEFAULT_HOPS):
        """
        Args:
            a, c, m: параметры генератора с полным периодом
            hops: число прыжков на один номер (k >= 2)
        """
        if m < 2:
            raise InvalidModulusError(m)
        if hops < 2:
            raise ValueError(f"Число прыжков должно быть >= 2, получено: {hops}")
        if hops % m == 0:
            raise ValueError(f"{hops} прыжков по кольцу из {m} значений - тождественное отображение")
        self.a = a
        self.c = c
        self.m = m
        self.hops = hops

    @classmethod
    def from_parameters(cls, params, hops: int = DEFAULT_HOPS) -> "MultiHopDriver":
        return cls(params.a, params.c, params.m, hops=hops)

    def value_for(self, index: int) -> int:
        """Значение генератора для номера index из [0, m)"""
        if not 0 <= index < self.m:
            raise ValueError(f"Номер должен быть в диапазоне [0, {self.m}), получено: {index}")
        x = index
        for _ in range(self.hops):
            x = lcg_step(x, self.a, self.c, self.m)
        return x

    def values(self, start: int = 0, count: int = None) -> Iterator[int]:
        """Значения для номеров start, start + 1, ... (по умолчанию до m - 1)"""
        stop = self.m if count is None else min(self.m, start + count)
        for index in range(start, stop):
            yield self.value_for(index)

    def key_for(self, index: int, keyspace: Keyspace = DEFAULT_KEYSPACE) -> str:
        return keyspace.encode(self.value_for(index))

    def __str__(self) -> str:
        return f"MultiHopDriver(a={self.a}, c={self.c}, m={self.m}, hops={self.hops})"
