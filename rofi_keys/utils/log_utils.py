"""Timestamped logging helpers."""

from __future__ import annotations

import logging
import sys
import time

_LEVELS = {
    "DEEP": logging.DEBUG,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

_SYSTEMS = {
    "rofi_keys.config_store": "CONFIG",
    "rofi_keys.menus.rofi_menu": "MENU",
    "rofi_keys.resolver": "RESOLVE",
    "rofi_keys.substitution": "SUBST",
    "rofi_keys.executors.shell_executor": "EXEC",
    "rofi_keys.executors.base": "EXEC",
    "rofi_keys.launcher": "LAUNCHER",
    "rofi_keys.utils.notify": "NOTIFY",
}

_HANDLER_NAME = "rofi_keys.stderr"


def parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Map a level name (including the DEEP alias) to a logging level."""
    if not value:
        return default
    return _LEVELS.get(str(value).strip().upper(), default)


def _system_for(name: str) -> str:
    if name in _SYSTEMS:
        return _SYSTEMS[name]
    return name.rsplit(".", 1)[-1].upper()


class TaggedFormatter(logging.Formatter):
    """Render records as ``[timestamp][SYSTEM][LEVEL] message``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(record.created))
        level = "WARN" if record.levelname == "WARNING" else record.levelname
        message = record.getMessage()
        line = f"[{timestamp}][{_system_for(record.name)}][{level}] {message}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def configure_logging(level: int, stream=None) -> logging.Logger:
    """Install (or replace) the package stderr handler and set its level."""
    root = logging.getLogger("rofi_keys")
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(TaggedFormatter())
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
    return root
