"""Desktop notifications for failures the user would otherwise never see."""

from __future__ import annotations

import logging
import subprocess

from rofi_keys.utils.system_utils import find_program

logger = logging.getLogger(__name__)

APP_NAME = "rofi-keys"


class Notifier:
    def __init__(self, *, enabled: bool = True, program: str = "notify-send") -> None:
        self.enabled = enabled
        self.program = program

    def send(self, summary: str, body: str = "") -> bool:
        """Fire a notification; returns False when nothing was sent."""
        if not self.enabled:
            return False
        path = find_program(self.program)
        if not path:
            logger.debug("%s not found; skipping notification", self.program)
            return False
        args = [path, "--app-name", APP_NAME, "--urgency", "critical", summary]
        if body:
            args.append(body)
        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            logger.debug("notification failed: %s", exc)
            return False
        return True
