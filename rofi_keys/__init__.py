"""Keyboard-driven application launcher built on rofi."""

from rofi_keys.config_store import Config, Entry, initialize_default, load_config
from rofi_keys.launcher import Launcher, RunResult

__version__ = "0.1.0"

__all__ = [
    "Config",
    "Entry",
    "Launcher",
    "RunResult",
    "initialize_default",
    "load_config",
    "__version__",
]
