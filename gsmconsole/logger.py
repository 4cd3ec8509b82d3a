"""Process-wide structured logging to standard streams and files."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, NoReturn

_LOGGER_NAME = "gsmconsole"
_logger: logging.Logger | None = None

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "panic",
}


class LogPanic(Exception):
    """Raised by :func:`panic` after the message has been logged."""


@dataclass
class LogConfig:
    """Logging options: debug mode and the outputs (``stdout``, ``stderr`` or file paths)."""

    debug: bool = False
    output_path: list[str] = field(default_factory=lambda: ["stdout"])


def _caller(record: logging.LogRecord) -> str:
    return f"{os.path.basename(record.pathname)}:{record.lineno}"


def _level(record: logging.LogRecord) -> str:
    return _LEVEL_NAMES.get(record.levelno, record.levelname.lower())


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": _level(record),
            "ts": record.created,
            "caller": _caller(record),
            "msg": record.getMessage(),
        }
        return json.dumps(payload, ensure_ascii=False)


class _ConsoleFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).astimezone().isoformat(timespec="milliseconds")
        return f"{stamp}\t{_level(record).upper()}\t{_caller(record)}\t{record.getMessage()}"


def _handler_for(target: str) -> logging.Handler:
    if target == "stdout":
        return logging.StreamHandler(sys.stdout)
    if target == "stderr":
        return logging.StreamHandler(sys.stderr)
    return logging.FileHandler(target, mode="a", encoding="utf-8")


def init(conf: LogConfig | None = None) -> None:
    """Configure the logger; a file that cannot be opened raises :class:`OSError`."""
    global _logger
    conf = conf or LogConfig()
    handlers = [_handler_for(target) for target in conf.output_path]
    formatter: logging.Formatter = _ConsoleFormatter() if conf.debug else _JsonFormatter()
    log = logging.getLogger(_LOGGER_NAME)
    for old in list(log.handlers):
        log.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        log.addHandler(handler)
    log.setLevel(logging.DEBUG if conf.debug else logging.INFO)
    log.propagate = False
    _logger = log


def get_logger() -> logging.Logger:
    """Return the configured logger, setting up the default one if needed."""
    if _logger is None:
        init(None)
    assert _logger is not None
    return _logger


def close() -> None:
    """Flush every output."""
    for handler in get_logger().handlers:
        try:
            handler.flush()
        except (OSError, ValueError) as err:
            print("zap error:", err)


def _message(args: tuple[Any, ...]) -> str:
    return " ".join(str(arg) for arg in args)


def _emit(level: int, args: tuple[Any, ...]) -> str:
    message = _message(args)
    get_logger().log(level, message, stacklevel=3)
    return message


def info(*args: Any) -> None:
    """Log at info level."""
    _emit(logging.INFO, args)


def error(*args: Any) -> None:
    """Log at error level."""
    _emit(logging.ERROR, args)


def warn(*args: Any) -> None:
    """Log at warning level."""
    _emit(logging.WARNING, args)


def debug(*args: Any) -> None:
    """Log at debug level; shown only in debug mode."""
    _emit(logging.DEBUG, args)


def panic(*args: Any) -> NoReturn:
    """Log at panic level, then raise :class:`LogPanic` with the message."""
    raise LogPanic(_emit(logging.CRITICAL, args))


def check_err(err: BaseException | None) -> None:
    """Log ``err`` at info level when it is not ``None``."""
    if err is not None:
        _emit(logging.INFO, (err,))