"""Load, validate and scaffold the key -> command mapping."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ValidationError

from rofi_keys.utils.file_utils import dump_json, load_json, save_json_new

logger = logging.getLogger(__name__)

DEFAULT_MENU_TITLE = "Shortcuts"


class ConfigError(RuntimeError):
    """Base for every config load/write failure."""

    code = "config_error"

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ConfigNotFoundError(ConfigError):
    code = "not_found"


class MalformedConfigError(ConfigError):
    code = "malformed_syntax"


class InvalidEntryError(ConfigError):
    code = "invalid_entry"

    def __init__(self, message: str, path: str | Path | None = None, index: int | None = None) -> None:
        super().__init__(message, path)
        self.index = index


class ConfigExistsError(ConfigError):
    code = "already_exists"


class ConfigWriteError(ConfigError):
    code = "write_failed"


class EntryModel(BaseModel):
    key: str
    label: str
    command: str


class ConfigModel(BaseModel):
    theme: Optional[str] = None
    menu_title: Optional[str] = None
    entries: list[EntryModel]


@dataclass(frozen=True)
class Entry:
    key: str
    label: str
    command: str

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "label": self.label, "command": self.command}


@dataclass(frozen=True)
class Config:
    menu_title: str = DEFAULT_MENU_TITLE
    entries: tuple[Entry, ...] = ()
    theme: str | None = None

    def find(self, key: str) -> Entry | None:
        """Exact, case-sensitive lookup."""
        for entry in self.entries:
            if entry.key == key:
                return entry
        return None

    @property
    def keys(self) -> list[str]:
        return [entry.key for entry in self.entries]

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme,
            "menu_title": self.menu_title,
            "entries": [entry.to_dict() for entry in self.entries],
        }


DEFAULT_CONFIG = Config(
    menu_title="Applications",
    theme=None,
    entries=(
        Entry("f", "Firefox", "firefox"),
        Entry("p", "Firefox Private", "firefox --private-window"),
        Entry("m", "MPV", "mpv"),
        Entry("v", "MPV (clipboard)", 'mpv "$(xclip -o)"'),
        Entry("t", "Terminal", "x-terminal-emulator"),
    ),
)


def validate_entries(entries: Iterable[Entry], path: str | Path | None = None) -> tuple[Entry, ...]:
    """Check key shape, command presence and key uniqueness."""
    seen: dict[str, int] = {}
    checked: list[Entry] = []
    for index, entry in enumerate(entries):
        if not entry.key:
            raise InvalidEntryError(f"entry {index}: key is empty", path, index)
        if len(entry.key) > 1:
            raise InvalidEntryError(
                f"entry {index}: key {entry.key!r} must be a single character", path, index
            )
        if not entry.key.isprintable():
            raise InvalidEntryError(
                f"entry {index}: key {entry.key!r} is not a printable character", path, index
            )
        if not entry.command.strip():
            raise InvalidEntryError(f"entry {index} ({entry.key!r}): command is empty", path, index)
        if entry.key in seen:
            raise InvalidEntryError(
                f"entry {index}: key {entry.key!r} already used by entry {seen[entry.key]}",
                path,
                index,
            )
        seen[entry.key] = index
        checked.append(entry)
    return tuple(checked)


def parse_config(data: Any, path: str | Path | None = None) -> Config:
    """Build a Config from already-decoded JSON."""
    if not isinstance(data, dict):
        raise MalformedConfigError("top-level value must be an object", path)
    try:
        model = ConfigModel.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise MalformedConfigError(f"schema mismatch: {problems}", path) from exc

    entries = validate_entries(
        (Entry(key=e.key, label=e.label, command=e.command) for e in model.entries),
        path,
    )
    return Config(
        menu_title=model.menu_title if model.menu_title is not None else DEFAULT_MENU_TITLE,
        entries=entries,
        theme=model.theme or None,
    )


def load_config(path: str | Path) -> Config:
    """Read and validate the config at ``path``.

    A missing file is an error; defaults are only written by
    :func:`initialize_default`.
    """
    p = Path(path)
    if not p.is_file():
        raise ConfigNotFoundError(f"config file not found: {p}", p)
    try:
        data = load_json(p)
    except json.JSONDecodeError as exc:
        raise MalformedConfigError(f"invalid JSON at line {exc.lineno} column {exc.colno}: {exc.msg}", p) from exc
    except UnicodeDecodeError as exc:
        raise MalformedConfigError(f"file is not UTF-8 text: {exc}", p) from exc
    except OSError as exc:
        raise ConfigNotFoundError(f"cannot read {p}: {exc}", p) from exc

    config = parse_config(data, p)
    logger.debug("loaded %d entries from %s", len(config.entries), p)
    return config


def dump_config(config: Config) -> str:
    return dump_json(config.to_dict())


def initialize_default(path: str | Path, config: Config = DEFAULT_CONFIG) -> Config:
    """Write the default mapping to ``path`` unless a file is already there."""
    p = Path(path)
    if p.exists():
        raise ConfigExistsError(f"config already exists: {p}", p)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigWriteError(f"cannot create directory {p.parent}: {exc}", p) from exc
    try:
        save_json_new(p, config.to_dict())
    except FileExistsError as exc:
        raise ConfigExistsError(f"config already exists: {p}", p) from exc
    except OSError as exc:
        raise ConfigWriteError(f"cannot write {p}: {exc}", p) from exc
    logger.info("wrote default config to %s", p)
    return config
