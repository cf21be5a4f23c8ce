"""
Проверка полного периода алгоритмом Флойда ("черепаха и заяц")

Черепаха делает один шаг генератора за итерацию, заяц - два. Если период
полный, за m - 1 итераций они не встретятся; встреча раньше означает, что
генератор зациклился, не пройдя все значения. Память постоянна: два регистра и
счетчик, что и позволяет проверять кольца из миллиардов значений (часами).
"""

import argparse
import enum
import logging
import signal
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .errors import InvalidModulusError
from .reporting import ProgressReporter, describe_result, localize
from .utils.entities import CENSORED_KEYSPACE, DEFAULT_KEYSPACE, Keyspace, PresetGenerator

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_INTERVAL = 100_000_000
DEFAULT_STOP_CHECK_INTERVAL = 1_000_000


class VerificationStatus(enum.Enum):
    FULL_PERIOD = "full_period"
    PREMATURE_CYCLE = "premature_cycle"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ProgressSnapshot:
    """Состояние проверки на границе итерации (копия, а не ссылка на регистры)"""
    counter: int
    m: int
    slow: int
    fast: int


@dataclass(frozen=True)
class VerificationResult:
    a: int
    c: int
    m: int
    status: VerificationStatus
    iterations: int
    slow: int
    fast: int
    position: Optional[int] = None
    elapsed_seconds: float = 0.0

    @property
    def is_full_period(self) -> bool:
        return self.status is VerificationStatus.FULL_PERIOD

    @property
    def is_cancelled(self) -> bool:
        return self.status is VerificationStatus.CANCELLED

    @property
    def cycle_length(self) -> Optional[int]:
        """Найденная длина цикла (для генератора-перестановки она точна)"""
        if self.status is VerificationStatus.PREMATURE_CYCLE:
            return self.iterations
        return None


def verify_full_period(a: int, c: int, m: int,
                       progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
                       progress: Optional[Callable[[ProgressSnapshot], None]] = None,
                       should_stop: Optional[Callable[[], bool]] = None,
                       stop_check_interval: int = DEFAULT_STOP_CHECK_INTERVAL) -> VerificationResult:
    """
    Проверка, что генератор (a, c, m) проходит все m значений до повторения

    Args:
        a: множитель
        c: приращение
        m: модуль
        progress_interval: через сколько итераций вызывать progress
        progress: приемник ProgressSnapshot
        should_stop: вызывается каждые stop_check_interval итераций; True прерывает проверку
        stop_check_interval: частота опроса should_stop

    Returns:
        VerificationResult со статусом FULL_PERIOD, PREMATURE_CYCLE или CANCELLED

    Raises:
        InvalidModulusError: если m <= 1
    """
    if m <= 1:
        raise InvalidModulusError(m)
    if progress_interval < 1 or stop_check_interval < 1:
        raise ValueError("Интервалы отчета и опроса должны быть положительными")

    started = time.monotonic()
    tortoise = hare = 0
    counter = 0
    limit = m - 1

    def finish(status: VerificationStatus, position: Optional[int] = None) -> VerificationResult:
        return VerificationResult(
            a=a, c=c, m=m, status=status, iterations=counter,
            slow=tortoise, fast=hare, position=position,
            elapsed_seconds=time.monotonic() - started,
        )

    while counter < limit:
        # Наблюдатели видят только границу итерации: черепаха и заяц согласованы
        if progress is not None and counter % progress_interval == 0:
            progress(ProgressSnapshot(counter, m, tortoise, hare))
        if should_stop is not None and counter % stop_check_interval == 0 and should_stop():
            logger.info("Проверка (%d, %d, %d) прервана на итерации %d", a, c, m, counter)
            return finish(VerificationStatus.CANCELLED)

        counter += 1
        # lcg_step, развернутый вручную
        tortoise = (a * tortoise + c) % m
        hare = (a * hare + c) % m
        hare = (a * hare + c) % m

        if tortoise == hare:
            logger.info("Преждевременный цикл для (%d, %d, %d) на итерации %d", a, c, m, counter - 1)
            return finish(VerificationStatus.PREMATURE_CYCLE, position=counter - 1)

    return finish(VerificationStatus.FULL_PERIOD)


class PeriodVerifier:
    """Верификатор с сохраненной конфигурацией отчета и прерывания"""

    def __init__(self, progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
                 progress: Optional[Callable[[ProgressSnapshot], None]] = None,
                 should_stop: Optional[Callable[[], bool]] = None,
                 stop_check_interval: int = DEFAULT_STOP_CHECK_INTERVAL):
        self.progress_interval = progress_interval
        self.progress = progress
        self.should_stop = should_stop
        self.stop_check_interval = stop_check_interval

    @classmethod
    def from_config(cls, config: Dict[str, Any], **callbacks) -> "PeriodVerifier":
        return cls(
            progress_interval=config.get('progress_interval', DEFAULT_PROGRESS_INTERVAL),
            stop_check_interval=config.get('stop_check_interval', DEFAULT_STOP_CHECK_INTERVAL),
            **callbacks,
        )

    def verify(self, a: int, c: int, m: int) -> VerificationResult:
        return verify_full_period(
            a, c, m,
            progress_interval=self.progress_interval,
            progress=self.progress,
            should_stop=self.should_stop,
            stop_check_interval=self.stop_check_interval,
        )

    def verify_parameters(self, params) -> VerificationResult:
        return self.verify(params.a, params.c, params.m)


def keyspace_for(m: int, excluded: Optional[str] = None) -> Keyspace:
    """Алфавит ключей для отчета о ходе: явный excluded или тот, чей модуль равен m"""
    if excluded is not None:
        return Keyspace.from_config({'excluded': excluded})
    if m == CENSORED_KEYSPACE.modulus:
        return CENSORED_KEYSPACE
    return DEFAULT_KEYSPACE


def main(argv: Optional[List[str]] = None) -> int:
    """Полная проверка периода с отчетом о ходе; Ctrl+C прерывает на границе итерации"""
    parser = argparse.ArgumentParser(
        description="Проверка полного периода LCG алгоритмом Флойда."
    )
    parser.add_argument("params", type=int, nargs="*", metavar="PARAM",
                        help="Множитель a, приращение c и модуль m")
    parser.add_argument("--preset", choices=sorted(PresetGenerator.PRESETS),
                        help="Готовый набор параметров вместо a c m")
    parser.add_argument("--interval", type=int, default=None,
                        help="Через сколько итераций печатать прогресс")
    parser.add_argument("--excluded", default=None,
                        help="Символы, исключенные из алфавита ключей")
    args = parser.parse_args(argv)

    if args.preset:
        preset = PresetGenerator.PRESETS[args.preset]
        a, c, m = preset["a"], preset["c"], preset["m"]
        interval = args.interval or preset["progress_interval"]
    elif len(args.params) == 3:
        a, c, m = args.params
        interval = args.interval or DEFAULT_PROGRESS_INTERVAL
    else:
        parser.error("нужно указать a c m или --preset")

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    reporter = ProgressReporter(m, keyspace=keyspace_for(m, args.excluded))

    interrupted = []
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: interrupted.append(signum))

    verifier = PeriodVerifier(progress_interval=interval, progress=reporter,
                              should_stop=lambda: bool(interrupted))
    print(f"Starting at {datetime.now():%Y-%m-%d %H:%M:%S}: a={localize(a)}, c={localize(c)}, m={localize(m)}")
    try:
        result = verifier.verify(a, c, m)
    except InvalidModulusError as e:
        parser.error(str(e))
    finally:
        signal.signal(signal.SIGINT, previous_handler)
    print(f"Finished at {datetime.now():%Y-%m-%d %H:%M:%S}")
    for line in describe_result(result):
        print(line)
    return 0 if result.is_full_period else 1


if __name__ == "__main__":
    raise SystemExit(main())
