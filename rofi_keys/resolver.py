"""Map a menu selection back to the configured command."""

from __future__ import annotations

from dataclasses import dataclass

from rofi_keys.config_store import Config
from rofi_keys.menus.base import AdapterFailure, Cancelled, KeyPressed, SelectionEvent


class ResolveError(RuntimeError):
    """Raised when a selection cannot be turned into a command."""


class UnknownKeyError(ResolveError):
    def __init__(self, key: str, known: list[str]) -> None:
        super().__init__(f"no entry bound to key {key!r}")
        self.key = key
        self.known = known


class MenuFailureError(ResolveError):
    def __init__(self, failure: AdapterFailure) -> None:
        super().__init__(failure.reason)
        self.failure = failure

    @property
    def code(self) -> str:
        return self.failure.code


@dataclass(frozen=True)
class ResolvedCommand:
    command: str
    key: str


@dataclass(frozen=True)
class NoAction:
    """Nothing to run; the user closed the menu."""


NO_ACTION = NoAction()


def resolve(config: Config, event: SelectionEvent) -> ResolvedCommand | NoAction:
    if isinstance(event, Cancelled):
        return NO_ACTION
    if isinstance(event, KeyPressed):
        entry = config.find(event.key)
        if entry is None:
            raise UnknownKeyError(event.key, config.keys)
        return ResolvedCommand(command=entry.command, key=entry.key)
    if isinstance(event, AdapterFailure):
        raise MenuFailureError(event)
    raise TypeError(f"Unsupported selection event {event!r}")
