"""
Подбор параметров генератора с полным периодом для заданного модуля

Смешанный генератор X(n+1) = (a * X(n) + c) mod m проходит все m значений
тогда и только тогда, когда выполнены условия Халла-Добелла:
1. gcd(c, m) = 1
2. a - 1 кратно всем простым делителям m
3. Если m кратно 4, то a - 1 должно быть кратно 4

Поиск ниже - конструктивный: он дает одну подходящую пару (a, c), а не
лучшую. Качество последовательности для малых m не гарантируется.
"""

import argparse
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidModulusError, ParameterSearchError
from .primes import is_prime, prime_factors
from .reporting import localize

logger = logging.getLogger(__name__)

# Приращение ищется начиная примерно с m/7, множитель - с 2m/10
INCREMENT_FRACTION = 7
MULTIPLIER_NUMERATOR = 2
MULTIPLIER_DENOMINATOR = 10
# 2 простое, но четное приращение ломает малые четные модули
MIN_INCREMENT = 3


@dataclass(frozen=True)
class LcgParameters:
    """Параметры генератора вместе с разложением модуля"""
    a: int
    c: int
    m: int
    prime_factors: Tuple[int, ...] = ()

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.a, self.c, self.m

    def __str__(self) -> str:
        return f"x[n+1] = ({self.a} * x[n] + {self.c}) % {self.m}"


def _require_modulus(m: int):
    if m <= 1:
        raise InvalidModulusError(m)


def check_hull_conditions(a: int, c: int, m: int,
                          factors: Optional[List[int]] = None) -> Dict[str, Any]:
    """
    Проверка условий Халла для максимального периода

    Args:
        a: множитель
        c: приращение
        m: модуль
        factors: готовое разложение m (чтобы не раскладывать повторно)

    Returns:
        Словарь с результатами проверки каждого условия
    """
    _require_modulus(m)
    if factors is None:
        factors = prime_factors(m)

    results: Dict[str, Any] = {'prime_factors': list(factors)}

    # Условие 1: gcd(c, m) = 1
    results['gcd_c_m'] = math.gcd(c, m) == 1

    # Условие 2: a ≡ 1 (mod p) для всех простых делителей p числа m
    results['prime_factors_condition'] = all((a - 1) % p == 0 for p in factors)

    # Условие 3: a ≡ 1 (mod 4) если m ≡ 0 (mod 4)
    if m % 4 == 0:
        results['mod4_condition'] = (a - 1) % 4 == 0
    else:
        results['mod4_condition'] = True  # Условие не применимо

    results['all_conditions_met'] = (
        results['gcd_c_m'] and
        results['prime_factors_condition'] and
        results['mod4_condition']
    )
    return results


def find_increment(m: int) -> int:
    """
    Приращение c: первое простое число от m/7, не делящее m

    Простое число взаимно просто с любым модулем, который на него не делится,
    поэтому первое условие выполняется автоматически.
    """
    _require_modulus(m)
    c = max(m // INCREMENT_FRACTION, MIN_INCREMENT)
    while not is_prime(c) or m % c == 0:
        c += 1
    logger.debug("Приращение для m=%d: %d", m, c)
    return c


def find_multiplier(m: int, factors: Optional[List[int]] = None) -> int:
    """
    Множитель a = b + 1, где b кратно всем простым делителям m (и 4, если 4 | m)

    Args:
        m: модуль
        factors: готовое разложение m

    Returns:
        Множитель a
    """
    _require_modulus(m)
    if factors is None:
        factors = prime_factors(m)

    b = MULTIPLIER_NUMERATOR * m // MULTIPLIER_DENOMINATOR
    step = math.prod(factors)
    if m % 4 == 0:
        step = math.lcm(step, 4)
    logger.debug("m=%d: базовое b=%d, шаг=%d", m, b, step)

    if step > b:
        b = step
    else:
        # Первое кратное шагу, не меньшее базового значения
        b = -(-b // step) * step
    return b + 1


def find_parameters(m: int) -> LcgParameters:
    """
    Поиск пары (a, c), гарантирующей полный период для модуля m

    Raises:
        InvalidModulusError: если m <= 1
        ParameterSearchError: если найденная пара не проходит проверку
    """
    _require_modulus(m)
    factors = prime_factors(m)
    c = find_increment(m)
    a = find_multiplier(m, factors)
    params = LcgParameters(a=a, c=c, m=m, prime_factors=tuple(factors))

    conditions = check_hull_conditions(a, c, m, factors)
    if not conditions['all_conditions_met']:
        raise ParameterSearchError(m, conditions)
    return params


def main(argv: Optional[List[str]] = None) -> int:
    """Подбор параметров и печать отчета"""
    parser = argparse.ArgumentParser(
        description="Подбор параметров LCG, гарантированно проходящего все m значений."
    )
    parser.add_argument("modulus", type=int, help="Размер пространства ключей m")
    parser.add_argument("--verbose", action="store_true", help="Печатать ход поиска")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = find_parameters(args.modulus)
    except InvalidModulusError as e:
        parser.error(str(e))

    print(f"Простые делители {localize(params.m)}:")
    print(", ".join(str(p) for p in params.prime_factors))
    print("-" * 80)
    print(f"Этот генератор гарантированно проходит полный период m = {localize(params.m)}:")
    print(params)
    width = len(localize(params.m, "_"))
    for name, value in (("a", params.a), ("c", params.c), ("m", params.m)):
        print(f"{name} = {localize(value, '_'):>{width}}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
