"""Ошибки входных данных генератора, верификатора и кодека ключей"""


class InvalidModulusError(ValueError):
    """Модуль m должен быть не меньше 2"""

    def __init__(self, m: int):
        super().__init__(f"Модуль должен быть >= 2, получено: {m}")
        self.m = m


class FactorizationInputError(ValueError):
    """Разложить на простые множители можно только число n >= 2"""

    def __init__(self, n: int):
        super().__init__(f"Разложение определено только для n >= 2, получено: {n}")
        self.n = n


class IllegalCharactersError(ValueError):
    """Строка ключа содержит символы вне алфавита"""

    def __init__(self, text: str, illegal: str):
        super().__init__(f"Illegal chars: недопустимые символы {illegal!r} в ключе {text!r}")
        self.text = text
        self.illegal = illegal


class KeyOverflowError(ValueError):
    """Число не помещается в фиксированную ширину ключа"""

    def __init__(self, n: int, limit: int):
        super().__init__(f"Число {n} вне диапазона [0, {limit})")
        self.n = n
        self.limit = limit


class ParameterSearchError(ValueError):
    """Найденная пара (a, c) не проходит условия Халла-Добелла"""

    def __init__(self, m: int, conditions: dict):
        super().__init__(f"Найденные для m = {m} параметры не проходят условия Халла: {conditions}")
        self.m = m
        self.conditions = conditions
