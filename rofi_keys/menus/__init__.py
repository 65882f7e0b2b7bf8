"""Menu backends."""

from __future__ import annotations

from rofi_keys.menus.base import (
    AdapterFailure,
    Cancelled,
    KeyPressed,
    MenuBackend,
    SelectionEvent,
)
from rofi_keys.menus.rofi_menu import RofiMenu
from rofi_keys.settings import LauncherSettings

_BACKENDS = {
    RofiMenu.name: RofiMenu,
}


def get_menu_backend(settings: LauncherSettings) -> MenuBackend:
    """Instantiate the backend named in settings."""
    backend_cls = _BACKENDS.get(settings.menu_backend)
    if backend_cls is None:
        known = ", ".join(sorted(_BACKENDS))
        raise ValueError(f"Unknown menu backend {settings.menu_backend!r} (known: {known})")
    return backend_cls(settings.menu_program, log_argv=settings.deep_logging)


__all__ = [
    "AdapterFailure",
    "Cancelled",
    "KeyPressed",
    "MenuBackend",
    "SelectionEvent",
    "RofiMenu",
    "get_menu_backend",
]
