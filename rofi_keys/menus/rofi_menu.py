"""rofi backend running in dmenu mode with per-key custom bindings."""

from __future__ import annotations

import logging
import os
import subprocess

from rofi_keys.config_store import Config, Entry
from rofi_keys.menus.base import (
    LAUNCH_FAILED,
    NON_ZERO_EXIT,
    PROGRAM_NOT_FOUND,
    UNREADABLE_OUTPUT,
    AdapterFailure,
    Cancelled,
    KeyPressed,
    MenuBackend,
    SelectionEvent,
)

logger = logging.getLogger(__name__)

# rofi exposes kb-custom-1..19, reported as exit codes 10..28.
MAX_CUSTOM_BINDINGS = 19
CUSTOM_EXIT_BASE = 9
EXIT_CANCELLED = 1

# Hide the filter box so keystrokes act as accelerators rather than a query.
NO_FILTER_THEME = "entry { enabled: false; } inputbar { children: [ prompt ]; }"

# rofi parses bindings as xkb keysym names; printable ASCII punctuation has
# named keysyms, everything else outside [A-Za-z0-9] uses the Uxxxx form.
KEYSYM_NAMES = {
    " ": "space",
    "!": "exclam",
    '"': "quotedbl",
    "#": "numbersign",
    "$": "dollar",
    "%": "percent",
    "&": "ampersand",
    "'": "apostrophe",
    "(": "parenleft",
    ")": "parenright",
    "*": "asterisk",
    "+": "plus",
    ",": "comma",
    "-": "minus",
    ".": "period",
    "/": "slash",
    ":": "colon",
    ";": "semicolon",
    "<": "less",
    "=": "equal",
    ">": "greater",
    "?": "question",
    "@": "at",
    "[": "bracketleft",
    "\\": "backslash",
    "]": "bracketright",
    "^": "asciicircum",
    "_": "underscore",
    "`": "grave",
    "{": "braceleft",
    "|": "bar",
    "}": "braceright",
    "~": "asciitilde",
}


def keysym_name(key: str) -> str:
    """xkb keysym name rofi accepts as a binding for ``key``."""
    if key in KEYSYM_NAMES:
        return KEYSYM_NAMES[key]
    if key.isascii() and key.isalnum():
        return key
    return f"U{ord(key):04X}"


def format_row(entry: Entry) -> str:
    """Visible row for an entry, shown as plain text."""
    return f"[{entry.key}] {entry.label}"


class RofiMenu(MenuBackend):
    name = "rofi"

    def __init__(self, program: str = "rofi", *, log_argv: bool = False) -> None:
        self.program = program
        self.log_argv = log_argv

    def build_args(self, config: Config) -> list[str]:
        args = [
            self.program,
            "-dmenu",
            "-p",
            config.menu_title,
            "-no-custom",
            "-format",
            "i",
            "-theme-str",
            NO_FILTER_THEME,
        ]
        if config.theme:
            args += ["-theme", os.path.expanduser(config.theme)]
        bound = config.entries[:MAX_CUSTOM_BINDINGS]
        for index, entry in enumerate(bound, start=1):
            args += [f"-kb-custom-{index}", keysym_name(entry.key)]
        # Clear rofi's default Alt+N bindings for slots without an entry.
        for index in range(len(bound) + 1, MAX_CUSTOM_BINDINGS + 1):
            args += [f"-kb-custom-{index}", ""]
        return args

    def build_input(self, config: Config) -> str:
        return "\n".join(format_row(entry) for entry in config.entries)

    def present(self, config: Config) -> SelectionEvent:
        if len(config.entries) > MAX_CUSTOM_BINDINGS:
            unbound = [entry.key for entry in config.entries[MAX_CUSTOM_BINDINGS:]]
            logger.warning(
                "rofi supports %d key bindings; %s selectable with Enter only",
                MAX_CUSTOM_BINDINGS,
                ", ".join(repr(k) for k in unbound),
            )

        args = self.build_args(config)
        if self.log_argv:
            logger.debug("rofi argv=%s", args)
        try:
            proc = subprocess.run(
                args,
                input=self.build_input(config).encode("utf-8"),
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except FileNotFoundError:
            return AdapterFailure(PROGRAM_NOT_FOUND, f"{self.program!r} not found on PATH")
        except OSError as exc:
            return AdapterFailure(LAUNCH_FAILED, f"cannot start {self.program!r}: {exc}")

        return self.parse_result(config, proc.returncode, proc.stdout, proc.stderr)

    def parse_result(
        self,
        config: Config,
        returncode: int,
        stdout: bytes,
        stderr: bytes = b"",
    ) -> SelectionEvent:
        """Translate rofi's exit status and output into a SelectionEvent."""
        logger.debug("rofi exited with %s", returncode)

        custom = returncode - CUSTOM_EXIT_BASE
        if 1 <= custom <= MAX_CUSTOM_BINDINGS:
            if custom > len(config.entries):
                # No entry owns this slot; the resolver reports it as an unknown key.
                logger.warning(
                    "rofi reported kb-custom-%d but only %d entries exist",
                    custom,
                    len(config.entries),
                )
                return KeyPressed(f"kb-custom-{custom}")
            return KeyPressed(config.entries[custom - 1].key)

        if returncode == EXIT_CANCELLED:
            return Cancelled()

        if returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            reason = f"rofi exited with status {returncode}"
            if detail:
                reason = f"{reason}: {detail}"
            return AdapterFailure(NON_ZERO_EXIT, reason, returncode)

        try:
            text = stdout.decode("utf-8").strip()
        except UnicodeDecodeError:
            return AdapterFailure(UNREADABLE_OUTPUT, "rofi output is not valid UTF-8", returncode)
        if not text:
            return Cancelled()
        try:
            index = int(text)
        except ValueError:
            return AdapterFailure(UNREADABLE_OUTPUT, f"unexpected rofi output {text!r}", returncode)
        if not 0 <= index < len(config.entries):
            return AdapterFailure(UNREADABLE_OUTPUT, f"rofi selected row {index} out of range", returncode)
        return KeyPressed(config.entries[index].key)
