"""Menu backend interface and selection events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from rofi_keys.config_store import Config

PROGRAM_NOT_FOUND = "program_not_found"
NON_ZERO_EXIT = "non_zero_exit"
UNREADABLE_OUTPUT = "unreadable_output"
LAUNCH_FAILED = "launch_failed"


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class Cancelled:
    pass


@dataclass(frozen=True)
class AdapterFailure:
    code: str
    reason: str
    exit_code: int | None = None


SelectionEvent = Union[KeyPressed, Cancelled, AdapterFailure]


class MenuBackend:
    """Presents a Config and reports what the user picked.

    Backends must bind every entry key as a direct accelerator: one
    keystroke selects the entry without typing a filter query.
    """

    name = "base"

    def present(self, config: Config) -> SelectionEvent:
        raise NotImplementedError
