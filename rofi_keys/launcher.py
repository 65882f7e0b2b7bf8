"""Dispatch pipeline: config -> menu -> resolve -> substitute -> execute."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from rofi_keys.config_store import ConfigError, load_config
from rofi_keys.executors.base import BaseExecutor, ExecutionOutcome
from rofi_keys.executors.shell_executor import ShellExecutor
from rofi_keys.menus import MenuBackend, get_menu_backend
from rofi_keys.resolver import NoAction, MenuFailureError, UnknownKeyError, resolve
from rofi_keys.settings import LauncherSettings
from rofi_keys.substitution import expand
from rofi_keys.utils.notify import Notifier

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2
EXIT_MENU_ERROR = 3


@dataclass
class RunResult:
    status: str
    exit_code: int
    key: str | None = None
    command: str | None = None
    outcome: ExecutionOutcome | None = None
    reason: str | None = None


class Launcher:
    def __init__(
        self,
        settings: LauncherSettings,
        *,
        menu: MenuBackend | None = None,
        executor: BaseExecutor | None = None,
        notifier: Notifier | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.settings = settings
        self.menu = menu or get_menu_backend(settings)
        self.executor = executor or ShellExecutor(settings.shell)
        self.notifier = notifier or Notifier(enabled=settings.notify)
        self._stderr = stderr
        self._last_result: RunResult | None = None

    @property
    def last_result(self) -> RunResult | None:
        return self._last_result

    def run(self) -> RunResult:
        try:
            config = load_config(self.settings.config_path)
        except ConfigError as exc:
            hint = " (run with --init to create one)" if exc.code == "not_found" else ""
            self._error(f"{exc}{hint}")
            return self._store_result(
                RunResult(status="config_error", exit_code=EXIT_CONFIG_ERROR, reason=exc.code)
            )

        event = self.menu.present(config)
        logger.debug("selection event=%r", event)

        try:
            resolved = resolve(config, event)
        except MenuFailureError as exc:
            self._error(f"menu failed ({exc.code}): {exc}")
            return self._store_result(
                RunResult(status="menu_error", exit_code=EXIT_MENU_ERROR, reason=exc.code)
            )
        except UnknownKeyError as exc:
            logger.warning("menu returned key %r not in config (known: %s)", exc.key, exc.known)
            self._report(f"{exc}", notify_summary="No command for key")
            return self._store_result(
                RunResult(status="unknown_key", exit_code=EXIT_OK, key=exc.key, reason="unknown_key")
            )

        if isinstance(resolved, NoAction):
            logger.info("menu closed without a selection")
            return self._store_result(RunResult(status="cancelled", exit_code=EXIT_OK))

        command = expand(resolved.command)
        outcome = self.executor.execute(command, key=resolved.key)
        if outcome.error:
            self._report(
                f"failed to launch {command!r}: {outcome.error}",
                notify_summary="Launch failed",
            )
            status = "spawn_failed"
        else:
            status = "spawned" if outcome.spawned else "dry_run"
        return self._store_result(
            RunResult(
                status=status,
                exit_code=EXIT_OK,
                key=resolved.key,
                command=command,
                outcome=outcome,
                reason=outcome.error,
            )
        )

    def _error(self, message: str) -> None:
        print(f"Error: {message}", file=self._stderr or sys.stderr)

    def _report(self, message: str, *, notify_summary: str) -> None:
        self._error(message)
        self.notifier.send(notify_summary, message)

    def _store_result(self, result: RunResult) -> RunResult:
        self._last_result = result
        return result
