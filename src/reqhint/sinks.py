from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Tuple

LogLevel = str  # "debug" | "info" | "warning" | "error"


class LogSink(Protocol):
    def emit(self, level: LogLevel, message: str) -> None: ...


class LoggingSink:
    """Forward diagnostics to a stdlib logger (default: "reqhint")."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("reqhint")

    def emit(self, level: LogLevel, message: str) -> None:
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            numeric = logging.WARNING
        self.logger.log(numeric, message)


class CollectingSink:
    """Keeps every emitted (level, message) pair; handy for tests and CLI capture."""

    def __init__(self) -> None:
        self.records: List[Tuple[LogLevel, str]] = []

    def emit(self, level: LogLevel, message: str) -> None:
        self.records.append((level, message))

    def messages(self, level: Optional[LogLevel] = None) -> List[str]:
        return [m for lvl, m in self.records if level is None or lvl == level]
