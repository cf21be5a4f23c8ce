from dataclasses import dataclass

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = SECONDS_PER_MINUTE * 60
SECONDS_PER_DAY = SECONDS_PER_HOUR * 24


@dataclass(frozen=True)
class Duration:
    """Продолжительность в целых секундах, печатается как '[Nd ]H:MM:SS'"""
    seconds: int

    def __post_init__(self):
        if self.seconds < 0:
            raise ValueError(f"Продолжительность не может быть отрицательной: {self.seconds}")

    @classmethod
    def from_float(cls, seconds: float) -> "Duration":
        return cls(int(seconds))

    @property
    def parts(self):
        """(дни, часы, минуты, секунды)"""
        days, rest = divmod(self.seconds, SECONDS_PER_DAY)
        hours, rest = divmod(rest, SECONDS_PER_HOUR)
        minutes, seconds = divmod(rest, SECONDS_PER_MINUTE)
        return days, hours, minutes, seconds

    def __str__(self) -> str:
        days, hours, minutes, seconds = self.parts
        text = f"{hours}:{minutes:02d}:{seconds:02d}"
        if days:
            text = f"{days}d {text}"
        return text
