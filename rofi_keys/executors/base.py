"""Executor interfaces and result payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ExecutionOutcome:
    spawned: bool
    command: str
    key: str | None = None
    error: str | None = None
    pid: int | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "spawned": self.spawned,
            "command": self.command,
        }
        if self.key is not None:
            payload["key"] = self.key
        if self.error is not None:
            payload["error"] = self.error
        if self.pid is not None:
            payload["pid"] = self.pid
        return payload


class BaseExecutor:
    def execute(self, command: str, *, key: str | None = None) -> ExecutionOutcome:
        raise NotImplementedError
