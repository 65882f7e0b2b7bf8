"""Command executors."""

from rofi_keys.executors.base import BaseExecutor, ExecutionOutcome
from rofi_keys.executors.shell_executor import DryRunExecutor, ShellExecutor

__all__ = ["BaseExecutor", "DryRunExecutor", "ExecutionOutcome", "ShellExecutor"]
