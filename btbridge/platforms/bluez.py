"""BlueZ backend driven through ``bluetoothctl`` and ``rfkill``."""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Sequence

from btbridge.core.errors import PlatformError, PlatformUnavailableError, SettingsLaunchError
from btbridge.core.model import PlatformTier

_CONTROLLER_RE = re.compile(r"^Controller\s+([0-9A-F]{2}(?::[0-9A-F]{2}){5})", re.IGNORECASE | re.MULTILINE)
_POWERED_RE = re.compile(r"^\s*Powered:\s*(yes|no)\s*$", re.IGNORECASE | re.MULTILINE)
_HARD_BLOCKED_RE = re.compile(r"^\s*Hard blocked:\s*yes\s*$", re.IGNORECASE | re.MULTILINE)
LOGGER = logging.getLogger(__name__)


class BlueZPlatform:
    def __init__(
        self,
        *,
        settings_command: Sequence[str] = ("blueman-manager",),
        timeout_s: float = 5.0,
    ) -> None:
        self.settings_command = tuple(settings_command)
        self.timeout_s = timeout_s
        self._launched: list[subprocess.Popen[bytes]] = []

    def adapter_present(self) -> bool:
        return _CONTROLLER_RE.search(self._show()) is not None

    def is_enabled(self) -> bool:
        match = _POWERED_RE.search(self._show())
        return bool(match) and match.group(1).lower() == "yes"

    def enable(self) -> bool:
        result = self._run(["bluetoothctl", "power", "on"])
        if result.returncode != 0:
            LOGGER.warning("bluetoothctl power on exited with %s: %s", result.returncode, result.stderr.strip())
            return False
        return "succeeded" in result.stdout

    def open_settings(self) -> None:
        # Settings windows outlive the call; finished ones are reaped on the next launch.
        self._launched = [proc for proc in self._launched if proc.poll() is None]
        try:
            proc = subprocess.Popen(
                list(self.settings_command),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise SettingsLaunchError(
                f"Could not launch {' '.join(self.settings_command)}: {exc}"
            ) from exc
        self._launched.append(proc)

    def tier(self) -> PlatformTier:
        try:
            result = subprocess.run(
                ["rfkill", "list", "bluetooth"],
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            LOGGER.warning("rfkill probe unavailable (%s); assuming programmatic control", exc)
            return PlatformTier.PROGRAMMATIC
        if result.returncode == 0 and _HARD_BLOCKED_RE.search(result.stdout):
            return PlatformTier.SETTINGS
        return PlatformTier.PROGRAMMATIC

    def _show(self) -> str:
        result = self._run(["bluetoothctl", "show"])
        # bluetoothctl exits non-zero with "No default controller available".
        if result.returncode != 0:
            return ""
        return result.stdout

    def _run(self, cmd: list[str]) -> subprocess.CompletedProcess[str]:
        try:
            return subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout_s,
            )
        except FileNotFoundError as exc:
            raise PlatformUnavailableError(
                "bluetoothctl not found. Install BlueZ utilities and retry."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise PlatformError(f"{' '.join(cmd)} timed out after {self.timeout_s}s") from exc
        except OSError as exc:
            raise PlatformError(f"{' '.join(cmd)} failed: {exc}") from exc
