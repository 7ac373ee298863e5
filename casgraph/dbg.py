"""Global debug switch and evaluation timing for graph nodes."""

import logging
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)

IS_DEBUGGING = False


def get_debug_state():
    return IS_DEBUGGING


def set_debug_state(state: bool):
    global IS_DEBUGGING
    IS_DEBUGGING = bool(state)


@dataclass
class EvalStats:
    execution_time: float = 0.0
    call_count: int = 0

    @property
    def avg_time(self) -> float:
        return self.execution_time / max(1, self.call_count)

    def as_dict(self):
        return {
            "execution_time": self.execution_time,
            "call_count": self.call_count,
            "avg_time": self.avg_time,
        }


class Debug:
    """Mixin recording how long ``_timed`` calls take while debugging is on."""

    def __init__(self):
        self.stats = EvalStats()

    def _timed(self, func, *args):
        if not get_debug_state():
            return func(*args)
        started = time.perf_counter()
        try:
            return func(*args)
        finally:
            elapsed = time.perf_counter() - started
            self.stats.execution_time += elapsed
            self.stats.call_count += 1
            logger.debug("%s evaluated in %.6fs", type(self).__name__, elapsed)

    def get_stats(self):
        return self.stats.as_dict()

    def reset_stats(self):
        self.stats = EvalStats()


class DebuggingContext:
    """Switch timing collection on or off for the duration of a block."""

    def __init__(self, enable: bool):
        self.enable = enable
        self.previous_state = None

    def __enter__(self):
        self.previous_state = get_debug_state()
        set_debug_state(self.enable)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        set_debug_state(self.previous_state)
