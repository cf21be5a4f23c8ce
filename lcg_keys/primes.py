"""
Разложение модуля на простые множители

Для условий полного периода нужны только различные простые делители m,
кратность роли не играет. Разложение выполняется пробным делением на простые
числа; каждый найденный делитель выносится из остатка целиком, так что
граница sqrt(остатка) сжимается, а решето растет отрезками только до нее.
"""

import math
from typing import List

import numpy as np

from .errors import FactorizationInputError

# Малые простые для быстрого отсева перед тестом Миллера-Рабина
SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)

# Базы, при которых тест детерминирован для n < 2^64
MR_BASES = (2, 325, 9375, 28178, 450775, 9780504, 1795265022)

# Начальная граница решета; удваивается, пока остаток не разложен
SIEVE_SEGMENT = 1 << 10


def primes_up_to(limit: int) -> np.ndarray:
    """
    Решето Эратосфена

    Args:
        limit: верхняя граница (включительно)

    Returns:
        Массив простых чисел <= limit в порядке возрастания
    """
    if limit < 2:
        return np.array([], dtype=np.int64)
    sieve = np.ones(limit + 1, dtype=bool)
    sieve[:2] = False
    for p in range(2, math.isqrt(limit) + 1):
        if sieve[p]:
            sieve[p * p::p] = False
    return np.flatnonzero(sieve)


def _decompose(n: int):
    """n - 1 = d * 2^s, d нечетное"""
    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1
    return d, s


def is_prime(n: int) -> bool:
    """Тест Миллера-Рабина, детерминированный для n < 2^64"""
    if n < 2:
        return False
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    d, s = _decompose(n)
    for base in MR_BASES:
        base %= n
        if base == 0:
            continue
        x = pow(base, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


def next_prime(n: int) -> int:
    """Наименьшее простое число, не меньшее n"""
    candidate = max(n, 2)
    while not is_prime(candidate):
        candidate += 1
    return candidate


def prime_factors(n: int) -> List[int]:
    """
    Получение списка различных простых делителей числа

    Args:
        n: число >= 2

    Returns:
        Простые делители n по возрастанию, каждый ровно один раз

    Raises:
        FactorizationInputError: если n < 2
    """
    if n < 2:
        raise FactorizationInputError(n)

    factors = []
    cofactor = n
    checked = 1
    bound = SIEVE_SEGMENT
    # Найденный делитель выносится целиком, и граница sqrt(cofactor) сжимается
    while cofactor > 1 and not is_prime(cofactor):
        limit = min(bound, math.isqrt(cofactor))
        for p in primes_up_to(limit).tolist():
            if p <= checked:
                continue
            if p * p > cofactor:
                break
            if cofactor % p == 0:
                factors.append(p)
                while cofactor % p == 0:
                    cofactor //= p
        checked = limit
        bound *= 2
    if cofactor > 1:
        factors.append(cofactor)
    return factors


def radical(n: int) -> int:
    """Произведение различных простых делителей n (НОК делителей без кратностей)"""
    return math.prod(prime_factors(n))
