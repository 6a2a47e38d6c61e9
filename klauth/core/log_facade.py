"""Logger facade mapping RFC5424 and NPM style loggers onto two channels."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

LogFn = Callable[[str], None]


class RFC5424Logger(Protocol):
    """Logger exposing RFC5424 severities (stdlib ``logging.Logger`` fits)."""

    def debug(self, msg: str, /) -> object: ...

    def warning(self, msg: str, /) -> object: ...


class NPMLogger(Protocol):
    """Logger exposing NPM severities, as winston-style loggers do."""

    def silly(self, msg: str, /) -> object: ...

    def warn(self, msg: str, /) -> object: ...


@runtime_checkable
class _HasWarning(Protocol):
    def warning(self, msg: str, /) -> object: ...


def _noop(_message: str) -> None:
    return None


@dataclass(frozen=True, slots=True)
class LogChannels:
    """Resolved warn/trace handles for one middleware instance."""

    warn: LogFn = _noop
    trace: LogFn = _noop

    @classmethod
    def resolve(cls, logger: RFC5424Logger | NPMLogger | None) -> "LogChannels":
        """Pick the logger protocol once; ``warning`` marks the RFC5424 shape."""
        if logger is None:
            return cls()
        if isinstance(logger, _HasWarning):
            return cls(
                warn=getattr(logger, "warning", None) or _noop,
                trace=getattr(logger, "debug", None) or _noop,
            )
        return cls(
            warn=getattr(logger, "warn", None) or _noop,
            trace=getattr(logger, "silly", None) or _noop,
        )
