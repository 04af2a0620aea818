"""Platform adapter interfaces."""

from __future__ import annotations

from typing import Protocol

from btbridge.core.model import PlatformTier


class BluetoothPlatform(Protocol):
    def adapter_present(self) -> bool:
        """Return True when the device has a Bluetooth adapter."""

    def is_enabled(self) -> bool:
        """Return True when the adapter radio is currently on."""

    def enable(self) -> bool:
        """Turn the radio on and report whether the platform accepted it."""

    def open_settings(self) -> None:
        """Launch the system Bluetooth settings screen.

        Raises SettingsLaunchError when the screen cannot be opened.
        """

    def tier(self) -> PlatformTier:
        """Return whether the radio may be toggled programmatically."""
