"""Runtime settings assembled once at startup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

from rofi_keys.utils.log_utils import parse_level
from rofi_keys.utils.system_utils import is_enabled

APP_DIR_NAME = "rofi-keys"
CONFIG_FILE_NAME = "config.json"


def default_config_dir(env: Mapping[str, str] | None = None) -> Path:
    """XDG config directory for the launcher (``~/.config/rofi-keys``)."""
    env = os.environ if env is None else env
    base = env.get("XDG_CONFIG_HOME", "").strip()
    if base:
        return Path(base).expanduser() / APP_DIR_NAME
    home = env.get("HOME", "").strip()
    root = Path(home) if home else Path.home()
    return root / ".config" / APP_DIR_NAME


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    return default_config_dir(env) / CONFIG_FILE_NAME


def load_env_files(env: Mapping[str, str] | None = None) -> list[Path]:
    """Load .env files from the working directory and the config directory.

    Variables already present in the environment are never overridden.
    """
    candidates = [Path.cwd() / ".env", default_config_dir(env) / ".env"]
    loaded: list[Path] = []
    for path in candidates:
        if path.is_file():
            load_dotenv(dotenv_path=str(path), override=False)
            loaded.append(path)
    return loaded


@dataclass(frozen=True)
class LauncherSettings:
    config_path: Path
    menu_backend: str = "rofi"
    menu_program: str = "rofi"
    shell: str = "sh"
    notify: bool = True
    log_level: int = logging.WARNING
    deep_logging: bool = False

    @classmethod
    def from_env(
        cls,
        config_override: str | Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> "LauncherSettings":
        """Build settings from the environment.

        Precedence for the config path: explicit override, then
        ``ROFI_KEYS_CONFIG``, then the XDG default.
        """
        env = os.environ if env is None else env
        if config_override:
            config_path = Path(config_override).expanduser()
        elif env.get("ROFI_KEYS_CONFIG", "").strip():
            config_path = Path(env["ROFI_KEYS_CONFIG"].strip()).expanduser()
        else:
            config_path = default_config_path(env)

        raw_level = env.get("ROFI_KEYS_LOG_LEVEL", "")
        return cls(
            config_path=config_path,
            menu_backend=env.get("ROFI_KEYS_MENU", "").strip() or "rofi",
            menu_program=env.get("ROFI_KEYS_MENU_PROGRAM", "").strip() or "rofi",
            shell=env.get("ROFI_KEYS_SHELL", "").strip() or "sh",
            notify=is_enabled(env.get("ROFI_KEYS_NOTIFY"), True),
            log_level=parse_level(raw_level),
            deep_logging=raw_level.strip().upper() == "DEEP",
        )
