"""Tests for the end-to-end dispatch pipeline with fake collaborators."""

import io
import json
import subprocess
from unittest.mock import Mock

import pytest

from rofi_keys.executors.base import BaseExecutor, ExecutionOutcome
from rofi_keys.launcher import EXIT_CONFIG_ERROR, EXIT_MENU_ERROR, EXIT_OK, Launcher
from rofi_keys.menus.base import (
    NON_ZERO_EXIT,
    PROGRAM_NOT_FOUND,
    AdapterFailure,
    Cancelled,
    KeyPressed,
    MenuBackend,
)
from rofi_keys.menus.rofi_menu import RofiMenu
from rofi_keys.settings import LauncherSettings


class FakeMenu(MenuBackend):
    name = "fake"

    def __init__(self, event):
        self.event = event
        self.presented = []

    def present(self, config):
        self.presented.append(config)
        return self.event


class RecordingExecutor(BaseExecutor):
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def execute(self, command, *, key=None):
        self.calls.append((command, key))
        if self.error:
            return ExecutionOutcome(spawned=False, command=command, key=key, error=self.error)
        return ExecutionOutcome(spawned=True, command=command, key=key, pid=99)


@pytest.fixture
def firefox_settings(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"entries": [{"key": "f", "label": "Firefox", "command": "firefox"}]}),
        encoding="utf-8",
    )
    return LauncherSettings(config_path=path, notify=False)


def _launcher(settings, menu, executor, notifier=None):
    return Launcher(
        settings,
        menu=menu,
        executor=executor,
        notifier=notifier or Mock(),
        stderr=io.StringIO(),
    )


class TestLauncherRun:
    """Test suite for Launcher.run()."""

    def test_key_press_spawns_command(self, firefox_settings):
        """Test the firefox scenario: 'f' resolves and spawns 'firefox'."""
        executor = RecordingExecutor()
        launcher = _launcher(firefox_settings, FakeMenu(KeyPressed("f")), executor)

        result = launcher.run()

        assert result.status == "spawned"
        assert result.exit_code == EXIT_OK
        assert result.command == "firefox"
        assert result.outcome.spawned is True
        assert executor.calls == [("firefox", "f")]
        assert launcher.last_result is result

    def test_unknown_key_spawns_nothing(self, firefox_settings):
        """Test the 'z' scenario: unknown key is reported, exit 0, nothing run."""
        executor = RecordingExecutor()
        notifier = Mock()
        launcher = _launcher(firefox_settings, FakeMenu(KeyPressed("z")), executor, notifier)

        result = launcher.run()

        assert result.status == "unknown_key"
        assert result.exit_code == EXIT_OK
        assert result.key == "z"
        assert executor.calls == []
        notifier.send.assert_called_once()
        assert "'z'" in launcher._stderr.getvalue()

    def test_cancel_is_silent_success(self, firefox_settings):
        """Test that cancelling runs nothing and reports no error."""
        executor = RecordingExecutor()
        notifier = Mock()
        launcher = _launcher(firefox_settings, FakeMenu(Cancelled()), executor, notifier)

        result = launcher.run()

        assert result.status == "cancelled"
        assert result.exit_code == EXIT_OK
        assert executor.calls == []
        notifier.send.assert_not_called()
        assert launcher._stderr.getvalue() == ""

    def test_missing_menu_program(self, firefox_settings):
        """Test that an absent rofi binary exits with the menu error code."""
        executor = RecordingExecutor()
        menu = RofiMenu("definitely-not-a-menu-program-xyz")
        launcher = _launcher(firefox_settings, menu, executor)

        result = launcher.run()

        assert result.status == "menu_error"
        assert result.exit_code == EXIT_MENU_ERROR
        assert result.reason == PROGRAM_NOT_FOUND
        assert executor.calls == []
        assert "not found" in launcher._stderr.getvalue()

    def test_menu_non_zero_exit(self, firefox_settings):
        """Test that other adapter failures are fatal for the run."""
        menu = FakeMenu(AdapterFailure(NON_ZERO_EXIT, "rofi exited with status 2", 2))
        result = _launcher(firefox_settings, menu, RecordingExecutor()).run()

        assert result.exit_code == EXIT_MENU_ERROR
        assert result.reason == NON_ZERO_EXIT

    def test_spawn_failure_is_not_fatal(self, firefox_settings):
        """Test that a child that fails to start still exits 0."""
        notifier = Mock()
        executor = RecordingExecutor(error="shell 'sh' not found")
        launcher = _launcher(firefox_settings, FakeMenu(KeyPressed("f")), executor, notifier)

        result = launcher.run()

        assert result.status == "spawn_failed"
        assert result.exit_code == EXIT_OK
        assert result.outcome.spawned is False
        notifier.send.assert_called_once()
        assert "failed to launch" in launcher._stderr.getvalue()

    def test_missing_config(self, tmp_path):
        """Test that a missing config stops before the menu is shown."""
        settings = LauncherSettings(config_path=tmp_path / "missing.json", notify=False)
        menu = FakeMenu(KeyPressed("f"))
        launcher = _launcher(settings, menu, RecordingExecutor())

        result = launcher.run()

        assert result.status == "config_error"
        assert result.exit_code == EXIT_CONFIG_ERROR
        assert result.reason == "not_found"
        assert menu.presented == []
        assert "--init" in launcher._stderr.getvalue()

    def test_duplicate_keys_stop_run(self, tmp_path):
        """Test that an invalid config never reaches the menu."""
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "entries": [
                        {"key": "f", "label": "a", "command": "a"},
                        {"key": "f", "label": "b", "command": "b"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        menu = FakeMenu(KeyPressed("f"))
        result = _launcher(LauncherSettings(config_path=path), menu, RecordingExecutor()).run()

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert result.reason == "invalid_entry"
        assert menu.presented == []

    def test_command_reaches_shell_unexpanded(self, tmp_path):
        """Test that clipboard substitution is left for the shell."""
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps({"entries": [{"key": "v", "label": "MPV", "command": 'mpv "$(xclip -o)"'}]}),
            encoding="utf-8",
        )
        executor = RecordingExecutor()
        _launcher(LauncherSettings(config_path=path), FakeMenu(KeyPressed("v")), executor).run()

        assert executor.calls == [('mpv "$(xclip -o)"', "v")]

    def test_unbound_rofi_slot_is_not_fatal(self, tmp_path, monkeypatch):
        """Test that rofi reporting an unused kb-custom slot ends as an unknown key."""
        path = tmp_path / "config.json"
        path.write_text(
            json.dumps(
                {
                    "entries": [
                        {"key": "f", "label": "Firefox", "command": "firefox"},
                        {"key": ",", "label": "Comma", "command": "true"},
                    ]
                }
            ),
            encoding="utf-8",
        )
        run = Mock(
            return_value=subprocess.CompletedProcess(args=["rofi"], returncode=14, stdout=b"", stderr=b"")
        )
        monkeypatch.setattr(subprocess, "run", run)
        executor = RecordingExecutor()
        notifier = Mock()
        launcher = _launcher(LauncherSettings(config_path=path), RofiMenu(), executor, notifier)

        result = launcher.run()

        argv = run.call_args[0][0]
        assert argv[argv.index("-kb-custom-2") + 1] == "comma"
        assert argv[argv.index("-kb-custom-5") + 1] == ""
        assert result.status == "unknown_key"
        assert result.exit_code == EXIT_OK
        assert executor.calls == []
        assert "menu failed" not in launcher._stderr.getvalue()
        notifier.send.assert_called_once()
