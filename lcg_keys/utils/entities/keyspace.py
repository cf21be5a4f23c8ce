"""
Пространство ключей запросов

Ключ - это символ раздела (partition) и width цифр в системе счисления с
основанием BASE, старшая цифра первой. Цифры берутся из алфавита без символов,
которые легко спутать при чтении (0/O, 1/I, 5/S, Z/2).

Пример для алфавита по умолчанию (BASE = 29):
    828       -> B22222YK
    689996466 -> B37MKBML
"""

import string
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping

from ...errors import IllegalCharactersError, KeyOverflowError

# 0-9 и A-Y
ALPHANUMERIC = string.digits + string.ascii_uppercase[:25]
DEFAULT_EXCLUDED = "015OISZ"
# Вариант с цифрой 9, зарезервированной под цензуру
CENSORED_EXCLUDED = "0159OISZ"
DEFAULT_WIDTH = 7
DEFAULT_PARTITION = "B"


@dataclass(frozen=True)
class Keyspace:
    """Алфавит, ширина и символ раздела ключей. Не изменяется после создания"""
    symbols: str
    width: int = DEFAULT_WIDTH
    partition: str = DEFAULT_PARTITION
    _positions: Mapping[str, int] = field(init=False, repr=False, compare=False)
    _members: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if len(self.symbols) < 2:
            raise ValueError("Алфавит должен содержать хотя бы 2 символа")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError(f"Символы алфавита повторяются: {self.symbols!r}")
        if self.width < 1:
            raise ValueError(f"Ширина ключа должна быть положительной: {self.width}")
        if len(self.partition) != 1 or self.partition not in self.symbols:
            raise ValueError(f"Символ раздела {self.partition!r} должен быть одним символом алфавита")

        object.__setattr__(self, "_positions", {ch: i for i, ch in enumerate(self.symbols)})
        object.__setattr__(self, "_members", frozenset(self.symbols))

    @classmethod
    def excluding(cls, excluded: str, width: int = DEFAULT_WIDTH,
                  partition: str = DEFAULT_PARTITION) -> "Keyspace":
        """Алфавит 0-9A-Y без перечисленных символов"""
        symbols = "".join(ch for ch in ALPHANUMERIC if ch not in excluded)
        return cls(symbols, width=width, partition=partition)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Keyspace":
        """
        Создание из словаря конфигурации

        Распознаваемые ключи: 'symbols' (явный алфавит) или 'excluded',
        'width', 'partition'.
        """
        width = config.get('width', DEFAULT_WIDTH)
        partition = config.get('partition', DEFAULT_PARTITION)
        if 'symbols' in config:
            return cls(config['symbols'], width=width, partition=partition)
        return cls.excluding(config.get('excluded', DEFAULT_EXCLUDED), width=width, partition=partition)

    @property
    def base(self) -> int:
        return len(self.symbols)

    @property
    def modulus(self) -> int:
        """Количество различных ключей: BASE ** width"""
        return self.base ** self.width

    @property
    def zero_symbol(self) -> str:
        return self.symbols[0]

    def encode(self, n: int) -> str:
        """
        Число -> ключ запроса

        Raises:
            KeyOverflowError: если n не помещается в width цифр
        """
        if not 0 <= n < self.modulus:
            raise KeyOverflowError(n, self.modulus)

        # Цифры набираются от младшей к старшей, затем строка разворачивается
        digits = []
        while n > 0:
            n, digit = divmod(n, self.base)
            digits.append(self.symbols[digit])
        digits.extend(self.zero_symbol * (self.width - len(digits)))
        digits.append(self.partition)
        return "".join(reversed(digits))

    def decode(self, text: str) -> int:
        """
        Ключ запроса -> число

        Raises:
            IllegalCharactersError: если в строке есть символы вне алфавита
        """
        illegal = "".join(sorted(set(text) - self._members))
        if illegal or not text:
            raise IllegalCharactersError(text, illegal)

        num = 0
        # первый символ - раздел, в число не входит
        for ch in text[1:]:
            num = num * self.base + self._positions[ch]
        return num

    def is_valid(self, text: str) -> bool:
        return bool(text) and set(text) <= self._members


DEFAULT_KEYSPACE = Keyspace.excluding(DEFAULT_EXCLUDED)
CENSORED_KEYSPACE = Keyspace.excluding(CENSORED_EXCLUDED)


@dataclass(frozen=True)
class RequestKey:
    """Ключ запроса: строка вместе с пространством, в котором она закодирована"""
    text: str
    keyspace: Keyspace = field(default=DEFAULT_KEYSPACE, repr=False)

    @classmethod
    def from_int(cls, n: int, keyspace: Keyspace = DEFAULT_KEYSPACE) -> "RequestKey":
        return cls(keyspace.encode(n), keyspace)

    @classmethod
    def parse(cls, text: str, keyspace: Keyspace = DEFAULT_KEYSPACE) -> "RequestKey":
        """Проверка строки и создание ключа"""
        keyspace.decode(text)
        return cls(text, keyspace)

    def to_int(self) -> int:
        return self.keyspace.decode(self.text)

    def __str__(self) -> str:
        return self.text


def to_request_key(n: int, keyspace: Keyspace = DEFAULT_KEYSPACE) -> str:
    return keyspace.encode(n)


def to_request_id(text: str, keyspace: Keyspace = DEFAULT_KEYSPACE) -> int:
    return keyspace.decode(text)
