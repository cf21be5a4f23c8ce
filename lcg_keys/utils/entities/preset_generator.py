from .linear_congruential_generator import LinearCongruentialGenerator


class PresetGenerator(LinearCongruentialGenerator):
    """
    Генератор с заранее проверенными параметрами полного периода
    """

    # m = BASE ** 7 для алфавитов ключей из 29 и 28 символов
    PRESETS = {
        "demo_100": {
            "a": 81,
            "c": 37,
            "m": 100,
            "progress_interval": 10,
        },
        "demo_100k": {
            "a": 66_681,
            "c": 33_343,
            "m": 100_000,
            "progress_interval": 10_000,
        },
        "demo_10m": {
            "a": 6_666_681,
            "c": 3_333_373,
            "m": 10_000_000,
            "progress_interval": 100_000,
        },
        "request_keys": {
            "a": 3_449_975_286,     # найдено поиском для m = 29^7
            "c": 2_464_268_077,
            "m": 17_249_876_309,
            "progress_interval": 100_000_000,
        },
        "request_keys_tortoise": {
            "a": 11_499_917_550,    # пара, прогнанная через полную проверку
            "c": 5_749_958_779,
            "m": 17_249_876_309,
            "progress_interval": 100_000_000,
        },
        "request_keys_censored": {
            "a": 2_698_585_709,     # m = 28^7, алфавит без цифры 9
            "c": 1_927_561_217,
            "m": 13_492_928_512,
            "progress_interval": 100_000_000,
        },
    }

    def __init__(self, seed: int = 0, preset: str = "request_keys"):
        """
        Args:
            seed: начальное значение
            preset: имя набора параметров из PRESETS
        """
        if preset not in self.PRESETS:
            available = ", ".join(self.PRESETS.keys())
            raise ValueError(f"preset должен быть одним из: {available}")

        params = self.PRESETS[preset]
        super().__init__(
            a=params["a"],
            c=params["c"],
            m=params["m"],
            seed=seed,
        )

        self.preset = preset
        self.progress_interval = params["progress_interval"]
