"""System helpers for environment checks."""

import os
import shutil


def find_program(name: str) -> str | None:
    """Return the absolute path of ``name`` if it is executable, else None."""
    if os.sep in name:
        return name if os.access(name, os.X_OK) else None
    return shutil.which(name)


def is_enabled(raw: str | None, default: bool = True) -> bool:
    """Read a boolean-like value (1/0/true/false)."""
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}
