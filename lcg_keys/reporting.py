"""Форматирование чисел, отчет о ходе проверки и графики последовательностей"""

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

import matplotlib.pyplot as plt

from .utils.entities import DEFAULT_KEYSPACE, Duration, Keyspace

logger = logging.getLogger(__name__)


def localize(number: int, separator: str = ",") -> str:
    """1234567 -> '1,234,567'"""
    return f"{number:,}".replace(",", separator)


class ProgressReporter:
    """
    Приемник снимков прогресса для верификатора периода

    Пишет в лог позицию, процент и прошедшее время, а также оба регистра
    вместе с их ключами и обратным преобразованием ключей в числа.
    """

    def __init__(self, m: int, keyspace: Keyspace = DEFAULT_KEYSPACE,
                 log: logging.Logger = logger, clock: Callable[[], float] = time.monotonic):
        self.m = m
        self.keyspace = keyspace
        self.log = log
        self.clock = clock
        self.start = clock()
        self.number_size = len(localize(m))
        self.reports = 0

    def elapsed(self) -> Duration:
        return Duration.from_float(self.clock() - self.start)

    def _describe_register(self, value: int) -> str:
        if value >= self.keyspace.modulus:
            return f"{value:>{self.number_size}}"
        key = self.keyspace.encode(value)
        back = self.keyspace.decode(key)
        return f"{value:>{self.number_size}} -> {key} -> {back:>{self.number_size}}"

    def __call__(self, snapshot) -> None:
        self.reports += 1
        percent = 100.0 * snapshot.counter / self.m
        self.log.info(
            "Passing %*s / %*s (%6.2f%%, elapsed time %s)",
            self.number_size, localize(snapshot.counter),
            self.number_size, localize(self.m),
            percent, self.elapsed(),
        )
        self.log.info("    Tortoise: %s", self._describe_register(snapshot.slow))
        self.log.info("        Hare: %s", self._describe_register(snapshot.fast))


def describe_result(result) -> List[str]:
    """Строки итогового отчета по результату проверки периода"""
    lines = [f"Elapsed time: {Duration.from_float(result.elapsed_seconds)}"]
    if result.is_full_period:
        lines.append("Полный период подтвержден. Параметры:")
        lines.append(f"    a: {result.a}")
        lines.append(f"    c: {result.c}")
        lines.append(f"    m: {result.m}")
    elif result.is_cancelled:
        percent = 100.0 * result.iterations / result.m
        lines.append(f"Проверка прервана после {localize(result.iterations)} итераций ({percent:.2f}%)")
    else:
        percent = 100.0 * result.iterations / result.m
        lines.append(
            f"Заяц догнал черепаху на итерации {result.position} "
            f"({percent:5.2f}% пройдено): период не полный"
        )
        lines.append(f"    Tortoise: {result.slow}")
        lines.append(f"    Hare:     {result.fast}")
    return lines


def plot_successive_pairs(series: Dict[str, Sequence[int]], path: str,
                          title: Optional[str] = None) -> str:
    """
    Диаграммы рассеяния пар (x[n], x[n+1]) для нескольких последовательностей

    На одной диаграмме удобно сравнить прогон номеров через один прыжок и
    через несколько: в первом случае точки ложатся на несколько прямых.

    Args:
        series: название -> последовательность значений
        path: куда сохранить изображение
        title: общий заголовок

    Returns:
        Путь к сохраненному файлу
    """
    fig = plt.figure(figsize=(6 * len(series), 6))
    for i, (name, values) in enumerate(series.items(), start=1):
        plt.subplot(1, len(series), i)
        plt.scatter(values[:-1], values[1:], s=4, alpha=0.6)
        plt.xlabel("x[n]")
        plt.ylabel("x[n+1]")
        plt.title(name)
        plt.grid(True, alpha=0.3)
    if title:
        fig.suptitle(title)

    plt.tight_layout()
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path
