"""
Анализ качества последовательностей ключей

Если генератор кормить номерами 0, 1, 2, ..., значения для соседних номеров
отличаются на a^k mod m (k - число прыжков), и при неудачных a почти
повторяются через небольшой шаг номеров. Для найденной пары с m = 29^7
5a ≡ 121 (mod m), поэтому при одном прыжке ключи номеров n и n + 5 почти
совпадают, при двух - n и n + 25, при трех - n и n + 125.
"""

import argparse
import logging
import math
import os
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats

from .errors import InvalidModulusError
from .parameter_analysis import LcgParameters, find_parameters
from .reporting import plot_successive_pairs
from .utils.entities import DEFAULT_KEYSPACE, Keyspace, MultiHopDriver, PresetGenerator, lcg_step

logger = logging.getLogger(__name__)


def index_driven_values(params: LcgParameters, count: int, hops: int = 1, start: int = 0) -> List[int]:
    """Значения для номеров start..start+count-1 при hops прыжках на номер"""
    if hops == 1:
        return [lcg_step(index, params.a, params.c, params.m)
                for index in range(start, min(params.m, start + count))]
    driver = MultiHopDriver.from_parameters(params, hops=hops)
    return list(driver.values(start, count))


def feedback_values(params: LcgParameters, count: int, seed: int = 0) -> List[int]:
    """Обычный прогон: каждое значение - начальное для следующего"""
    values = []
    x = seed
    for _ in range(count):
        x = lcg_step(x, params.a, params.c, params.m)
        values.append(x)
    return values


class SequenceQualityAnalyzer:
    """Статистические проверки последовательностей значений генератора"""

    def __init__(self, keyspace: Keyspace = DEFAULT_KEYSPACE):
        self.keyspace = keyspace

    def test_uniformity_chi2(self, values: Sequence[int], m: int, n_bins: Optional[int] = None,
                             alpha: float = 0.05) -> Dict[str, Any]:
        """Проверка гипотезы о равномерности на [0, m) критерием хи-квадрат"""
        if len(values) < 10:
            return {'is_uniform': False, 'p_value': 0.0, 'reason': 'Недостаточно данных'}

        # Не меньше 5 ожидаемых попаданий на интервал
        if n_bins is None:
            n_bins = max(2, min(50, len(values) // 5))
        n_bins = min(n_bins, m)

        hist, _ = np.histogram(np.asarray(values, dtype=np.float64), bins=n_bins, range=(0, m))
        chi2_stat, p_value = stats.chisquare(hist)
        return {
            'is_uniform': bool(p_value > alpha),
            'p_value': float(p_value),
            'chi2_statistic': float(chi2_stat),
            'degrees_of_freedom': n_bins - 1,
            'n_bins': n_bins,
        }

    def serial_correlation(self, values: Sequence[int], lag: int = 1) -> float:
        """Коэффициент корреляции Пирсона между x[n] и x[n+lag]"""
        data = np.asarray(values, dtype=np.float64)
        if lag < 1 or len(data) <= lag + 1:
            raise ValueError(f"Нужно больше {lag + 1} значений для лага {lag}")
        x, y = data[:-lag], data[lag:]
        if np.std(x) == 0 or np.std(y) == 0:
            return float('nan')
        return float(np.corrcoef(x, y)[0, 1])

    def shared_prefix_ratio(self, keys: Sequence[str], span: int = 1) -> float:
        """
        Средняя доля общего префикса у ключей с номерами n и n + span

        Символ раздела одинаков у всех ключей и не учитывается.
        """
        if len(keys) <= span:
            raise ValueError(f"Нужно больше {span} ключей")
        ratios = [
            len(os.path.commonprefix([first[1:], second[1:]])) / self.keyspace.width
            for first, second in zip(keys, keys[span:])
        ]
        return float(np.mean(ratios))

    def shortest_near_cycle(self, values: Sequence[int], m: int, max_span: int = 200,
                            tolerance: float = 0.001) -> Optional[int]:
        """
        Наименьший шаг s, при котором x[n + s] отличается от x[n] (по кольцу)
        меньше чем на tolerance * m для всех n

        Returns:
            Шаг или None, если до max_span такого нет
        """
        limit = tolerance * m
        for span in range(1, min(max_span, len(values) - 1) + 1):
            if all(min((second - first) % m, (first - second) % m) < limit
                   for first, second in zip(values, values[span:])):
                return span
        return None

    def key_table(self, params: LcgParameters, indices: Sequence[int], hops: int = 2) -> pd.DataFrame:
        """Таблица номер -> значение -> ключ"""
        rows = []
        for index in indices:
            value = index_driven_values(params, 1, hops=hops, start=index)[0]
            rows.append({'index': index, 'value': value, 'key': self.keyspace.encode(value)})
        return pd.DataFrame(rows, columns=['index', 'value', 'key'])

    def compare_drivers(self, params: LcgParameters, count: int = 500,
                        hops: Sequence[int] = (1, 2, 3), prefix_span: int = 5) -> pd.DataFrame:
        """
        Сравнение прогона по номерам с разным числом прыжков и обычного прогона

        Returns:
            DataFrame, строка на способ прогона
        """
        logger.debug("Сравнение способов прогона для %s на %d номерах", params, count)
        # k прыжков, кратное m, - тождественное отображение
        series = {f"index x{k}": index_driven_values(params, count, hops=k)
                  for k in hops if k == 1 or k % params.m != 0}
        series["feedback"] = feedback_values(params, count)

        rows = []
        for name, values in series.items():
            row = {'driver': name}
            encodable = all(v < self.keyspace.modulus for v in values)
            row['serial_correlation'] = (
                self.serial_correlation(values) if len(values) > 2 else math.nan
            )
            row['p_value_uniform'] = self.test_uniformity_chi2(values, params.m)['p_value']
            row['near_cycle'] = self.shortest_near_cycle(values, params.m)
            row['shared_prefix'] = (
                self.shared_prefix_ratio([self.keyspace.encode(v) for v in values], span=prefix_span)
                if encodable and len(values) > prefix_span else math.nan
            )
            rows.append(row)
        return pd.DataFrame(rows).set_index('driver')


def main(argv: Optional[List[str]] = None) -> int:
    """Первые ключи при прогоне генератора по номерам"""
    parser = argparse.ArgumentParser(
        description="Ключи запросов для номеров 0, 1, 2, ... и сравнение способов прогона."
    )
    parser.add_argument("--preset", default="request_keys", choices=sorted(PresetGenerator.PRESETS))
    parser.add_argument("--modulus", type=int, default=None,
                        help="Подобрать параметры для этого модуля вместо готового набора")
    parser.add_argument("--count", type=int, default=53, help="Сколько номеров показать")
    parser.add_argument("--hops", type=int, default=2, help="Прыжков на номер")
    parser.add_argument("--plot", default=None, help="Сохранить диаграмму пар x[n], x[n+1]")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if args.modulus is not None:
        try:
            params = find_parameters(args.modulus)
        except InvalidModulusError as e:
            parser.error(str(e))
    else:
        preset = PresetGenerator.PRESETS[args.preset]
        params = LcgParameters(a=preset["a"], c=preset["c"], m=preset["m"])

    if params.m > DEFAULT_KEYSPACE.modulus:
        parser.error(f"m = {params.m} не помещается в ключ из {DEFAULT_KEYSPACE.width} символов")
    if args.hops < 1 or (args.hops > 1 and args.hops % params.m == 0):
        parser.error(f"--hops {args.hops} не подходит для m = {params.m}: нужно k >= 1, не кратное m")
    analyzer = SequenceQualityAnalyzer()

    print(params)
    table = analyzer.key_table(params, range(min(args.count, params.m)), hops=args.hops)
    print(table.to_string(index=False))
    print()
    print("Сравнение способов прогона:")
    print(analyzer.compare_drivers(params, count=min(500, params.m)).to_string())

    if args.plot:
        count = min(1000, params.m)
        path = plot_successive_pairs(
            {
                "1 прыжок": index_driven_values(params, count, hops=1),
                f"{args.hops} прыжка": index_driven_values(params, count, hops=args.hops),
            },
            args.plot,
            title=str(params),
        )
        print(f"\nДиаграмма сохранена: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
