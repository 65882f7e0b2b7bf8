"""Spawn commands through a shell as detached processes."""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import TextIO

from rofi_keys.executors.base import BaseExecutor, ExecutionOutcome

logger = logging.getLogger(__name__)


class ShellExecutor(BaseExecutor):
    """Fire-and-forget ``<shell> -c <command>``.

    The child gets its own session and /dev/null for stdio, so it outlives
    the launcher and never writes into the terminal that started it.
    """

    def __init__(self, shell: str = "sh") -> None:
        self.shell = shell

    def execute(self, command: str, *, key: str | None = None) -> ExecutionOutcome:
        try:
            proc = subprocess.Popen(
                [self.shell, "-c", command],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                close_fds=True,
                start_new_session=True,
            )
        except FileNotFoundError:
            return self._failed(command, key, f"shell {self.shell!r} not found")
        except PermissionError:
            return self._failed(command, key, f"permission denied running {self.shell!r}")
        except OSError as exc:
            return self._failed(command, key, f"cannot spawn {self.shell!r}: {exc}")

        # Never waited on; mark it reaped so Popen.__del__ does not warn.
        proc.returncode = 0
        logger.info("spawned pid=%s key=%r command=%s", proc.pid, key, command)
        return ExecutionOutcome(spawned=True, command=command, key=key, pid=proc.pid)

    def _failed(self, command: str, key: str | None, error: str) -> ExecutionOutcome:
        logger.error("spawn failed for key=%r: %s", key, error)
        return ExecutionOutcome(spawned=False, command=command, key=key, error=error)


class DryRunExecutor(BaseExecutor):
    """Print the command instead of running it."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream

    def execute(self, command: str, *, key: str | None = None) -> ExecutionOutcome:
        print(command, file=self.stream or sys.stdout)
        return ExecutionOutcome(spawned=False, command=command, key=key)
