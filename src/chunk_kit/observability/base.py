import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class MetricsHook(Protocol):
    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def record_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        pass


class LoggingMetricsHook:
    """
    Metrics hook that writes every observation to a logger.

    Useful when no metrics backend is wired up but chunking runs should
    still be traceable. Counters are also accumulated in-process so callers
    can read totals back with `counter()`.
    """

    def __init__(
        self,
        target: logging.Logger | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = target or logger
        self._level = level
        self._counters: dict[str, int] = {}

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        self._logger.log(
            self._level, "metric latency %s=%.3fms labels=%s", name, value_ms, labels
        )

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        self._counters[name] = self._counters.get(name, 0) + value
        self._logger.log(
            self._level, "metric counter %s+=%d labels=%s", name, value, labels
        )

    def record_gauge(
        self, name: str, value: float, labels: dict[str, str] | None = None
    ) -> None:
        self._logger.log(
            self._level, "metric gauge %s=%s labels=%s", name, value, labels
        )

    def counter(self, name: str) -> int:
        return self._counters.get(name, 0)
