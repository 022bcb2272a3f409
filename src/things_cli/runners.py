"""Execution of AppleScript against the host through ``osascript``.

The runner is the only piece that touches the operating system. Everything
else works with any object that offers ``app_name`` and ``execute(script)``,
which is how the tests substitute a recording fake.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Any

from things_cli.config import ThingsConfig
from things_cli.constants import (
    APP_DISPLAY_NAME,
    APP_NAME,
    DEFAULT_OSASCRIPT_BIN,
    DEFAULT_SCRIPT_TIMEOUT_SECONDS,
)
from things_cli.escaping import quote
from things_cli.models import (
    AppError,
    AppNotRunningError,
    NotFoundError,
    ScriptExecutionError,
)
from things_cli.osascript_output import OsascriptOutputError, parse_osascript_output

logger = logging.getLogger(__name__)

_NOT_RUNNING_MARKERS = (
    "Application isn't running",
    "Application isn’t running",
    "not running",
    "(-600)",
)


def classify_script_error(message: str, app_name: str = APP_NAME) -> ScriptExecutionError:
    """Map a raw osascript failure to the matching error class."""
    if "not found" in message:
        return NotFoundError("Item not found. Please check the name and try again.", raw_message=message)
    if any(marker in message for marker in _NOT_RUNNING_MARKERS):
        return AppNotRunningError(
            f"{APP_DISPLAY_NAME} is not running. Please open {APP_DISPLAY_NAME} and try again.",
            raw_message=message,
        )
    if app_name in message:
        return AppError(
            f"{APP_DISPLAY_NAME} error. Make sure the app is running and accessible.",
            raw_message=message,
        )
    return ScriptExecutionError(message)


class OsascriptRunner:
    def __init__(
        self,
        app_name: str = APP_NAME,
        *,
        timeout_seconds: float = DEFAULT_SCRIPT_TIMEOUT_SECONDS,
        osascript_bin: str = DEFAULT_OSASCRIPT_BIN,
    ) -> None:
        self.app_name = app_name
        self.timeout_seconds = timeout_seconds
        self.osascript_bin = osascript_bin

    @classmethod
    def from_config(cls, config: ThingsConfig) -> "OsascriptRunner":
        return cls(config.app_name, timeout_seconds=config.timeout_seconds)

    def _run(self, script: str) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                [self.osascript_bin, "-ss", "-"],
                input=script,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ScriptExecutionError(
                f"{self.osascript_bin} not found; AppleScript automation requires macOS"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ScriptExecutionError(
                f"script timed out after {self.timeout_seconds:g} seconds"
            ) from exc

    def execute(self, script: str) -> Any:
        """Run ``script`` once and return its parsed result."""
        logger.debug("executing script:\n%s", script)
        proc = self._run(script)
        if proc.returncode != 0:
            message = (proc.stderr or "").strip() or f"osascript exited with code {proc.returncode}"
            logger.debug("script failed: %s", message)
            raise classify_script_error(message, self.app_name)
        try:
            return parse_osascript_output(proc.stdout)
        except OsascriptOutputError as exc:
            raise ScriptExecutionError(f"could not parse osascript output: {exc}") from exc

    def is_running(self) -> bool:
        script = "\n".join(
            [
                'tell application "System Events"',
                f"  return (name of processes) contains {quote(self.app_name)}",
                "end tell",
            ]
        )
        try:
            return self.execute(script) is True
        except ScriptExecutionError as exc:
            logger.debug("running check failed: %s", exc)
            return False

    def launch(self) -> Any:
        return self.execute(f"tell application {quote(self.app_name)} to activate")

    def open_url(self, url: str) -> Any:
        return self.execute(f"open location {quote(url)}")
