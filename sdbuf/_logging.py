"""
Structured logging (OpenTelemetry-compliant).

Every sdbuf record goes through the ``sdbuf`` logger and is rendered either as
one JSON object per line (OpenTelemetry Logging Data Model) or as a short
human-readable line.

Usage::

    from ._logging import scoped_logger

    log = scoped_logger("buffer")

    # Relocation trace (includes code location)
    log.debug("Relocating buffer", extra={"old_block": 22, "new_block": 35})

    # Allocation refused
    log.warning("Allocator refused block", extra={"requested": 4113})

Environment::

    SDBUF_LOG_LEVEL=trace|debug|info|warn|error|fatal|off (default: warn)
    SDBUF_LOG_FORMAT=json|human (default: human if tty, json if piped)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import MutableMapping
from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version
from typing import Any

__all__ = ["logger", "setup_logging", "scoped_logger"]

SERVICE_NAME = "sdbuf"

_SEVERITY = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}

_OFF = logging.CRITICAL + 10

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "err": logging.ERROR,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
    "off": _OFF,
    "none": _OFF,
}

# Records at these levels carry code.filepath / code.lineno
_LOCATED = frozenset({logging.DEBUG, logging.ERROR, logging.CRITICAL})

# Attributes every LogRecord has; anything else came in through ``extra``
_RESERVED = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "scope", "taskName"}

# Logger-name fragment -> scope, first match wins
_SCOPES = (("alloc", "alloc"), ("buffer", "buffer"), ("config", "config"))


def _service_version() -> str:
    try:
        return version(SERVICE_NAME)
    except PackageNotFoundError:
        return "0.0.0"


def _scope_of(record: logging.LogRecord) -> str:
    scope = getattr(record, "scope", None)
    if scope:
        return scope
    for fragment, name in _SCOPES:
        if fragment in record.name:
            return name
    return record.name.rsplit(".", 1)[-1] or SERVICE_NAME


def _short_path(pathname: str) -> str:
    """Path relative to the package (or src/) directory."""
    for marker in ("sdbuf/", "src/"):
        idx = pathname.find(marker)
        if idx >= 0:
            return pathname[idx + len(marker) :]
    return pathname


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One OpenTelemetry log record per line."""

    def __init__(self) -> None:
        super().__init__()
        self._resource = {"service.name": SERVICE_NAME, "service.version": _service_version()}

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        # RFC3339 with nanosecond precision
        timestamp = f"{created:%Y-%m-%dT%H:%M:%S}.{created.microsecond * 1000:09d}Z"

        attributes: dict[str, Any] = {"scope": _scope_of(record)}
        attributes.update(_extras(record))
        if record.levelno in _LOCATED:
            attributes["code.filepath"] = _short_path(record.pathname)
            attributes["code.lineno"] = record.lineno

        payload = {
            "timestamp": timestamp,
            "severityText": _SEVERITY.get(record.levelno, "INFO"),
            "body": record.getMessage(),
            "attributes": attributes,
            "resource": self._resource,
        }
        return json.dumps(payload, separators=(",", ":"), default=str)


class HumanFormatter(logging.Formatter):
    """``HH:MM:SS LEVEL [scope] message`` lines for terminals."""

    _RESET = "\x1b[0m"
    _DIM = "\x1b[2m"
    _CYAN = "\x1b[36m"
    _LEVEL_COLORS = {
        logging.DEBUG: "\x1b[2m",
        logging.WARNING: "\x1b[33m",
        logging.ERROR: "\x1b[31m",
        logging.CRITICAL: "\x1b[31m",
    }

    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self._use_colors = use_colors

    def _paint(self, text: str, color: str | None) -> str:
        if self._use_colors and color:
            return f"{color}{text}{self._RESET}"
        return text

    def format(self, record: logging.LogRecord) -> str:
        clock = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%H:%M:%S")
        severity = _SEVERITY.get(record.levelno, "INFO")

        line = (
            f"{clock} "
            f"{self._paint(f'{severity:<5} ', self._LEVEL_COLORS.get(record.levelno))}"
            f"{self._paint(f'[{_scope_of(record)}] ', self._CYAN)}"
            f"{record.getMessage()}"
        )

        requested = getattr(record, "requested", None)
        if requested is not None:
            line += f" ({requested} bytes)"

        if record.levelno in _LOCATED:
            line += self._paint(f" [{_short_path(record.pathname)}:{record.lineno}]", self._DIM)

        return line


# =============================================================================
# Logger Setup
# =============================================================================

logger = logging.getLogger(SERVICE_NAME)


def _get_log_level() -> int:
    name = os.environ.get("SDBUF_LOG_LEVEL") or os.environ.get("SDBUF_LOG", "warn")
    return _LEVELS.get(name.lower(), logging.WARNING)


def _get_log_format() -> str:
    fmt = os.environ.get("SDBUF_LOG_FORMAT")
    if fmt:
        return fmt.lower()
    return "human" if sys.stderr.isatty() else "json"


def _create_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if _get_log_format() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(HumanFormatter(use_colors=sys.stderr.isatty()))
    return handler


def _install(level: int) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.addHandler(_create_handler())
    logger.setLevel(level)


def _setup_default_handler() -> None:
    """Install the environment-driven handler unless one is already set."""
    if not logger.handlers:
        _install(_get_log_level())


def setup_logging(
    level: str | int = "WARNING",
    format: str | None = None,
) -> None:
    """
    Configure sdbuf logging.

    Parameters
    ----------
    level : str or int, default "WARNING"
        Log level name ("DEBUG", "INFO", "WARNING", "ERROR", "FATAL", "OFF")
        or a logging constant like ``logging.DEBUG``. At DEBUG every
        relocation and release is traced.

    format : str, optional
        "json" or "human". If not specified, uses SDBUF_LOG_FORMAT or
        auto-detects based on TTY.

    Examples
    --------
    Trace relocations as JSON::

        >>> import sdbuf
        >>> sdbuf.setup_logging("DEBUG", format="json")
    """
    if isinstance(level, str):
        level = _LEVELS.get(level.lower(), logging.WARNING)

    if format:
        # Inherited by child processes
        os.environ["SDBUF_LOG_FORMAT"] = format

    _install(level)


class _ScopedLoggerAdapter(logging.LoggerAdapter):
    """Adapter whose fixed extras can be overridden per call."""

    def process(
        self, msg: str, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def scoped_logger(scope: str) -> logging.LoggerAdapter:
    """
    Return an adapter over the sdbuf logger that tags records with ``scope``.

    Example::

        log = scoped_logger("alloc")
        log.warning("Allocator refused block", extra={"requested": 4113})
    """
    return _ScopedLoggerAdapter(logger, {"scope": scope})


_setup_default_handler()
