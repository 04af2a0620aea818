"""Stable public API for embedding the Bluetooth bridge.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from typing import Any

from btbridge.core.errors import (
    BtbridgeError,
    ChannelError,
    ConfigError,
    ConfigValidationError,
    PlatformError,
    PlatformUnavailableError,
    SettingsLaunchError,
)
from btbridge.core.model import (
    ChannelConfig,
    Failure,
    MethodCall,
    NotImplementedReply,
    PlatformTier,
    RadioCapability,
    RadioStatus,
    Reply,
    Success,
)
from btbridge.core.service import BridgeService
from btbridge.platforms.base import BluetoothPlatform

__all__ = [
    "BtbridgeError",
    "ChannelError",
    "ConfigError",
    "ConfigValidationError",
    "PlatformError",
    "PlatformUnavailableError",
    "SettingsLaunchError",
    "BluetoothPlatform",
    "ChannelConfig",
    "Failure",
    "MethodCall",
    "NotImplementedReply",
    "PlatformTier",
    "RadioCapability",
    "RadioStatus",
    "Reply",
    "Success",
    "Client",
]


class Client:
    """Public client for the Bluetooth enable bridge.

    A `Client` wraps config loading, platform selection, and channel dispatch
    behind a stable API intended for embedding applications.
    """

    def __init__(
        self,
        *,
        config: ChannelConfig | None = None,
        platform: BluetoothPlatform | None = None,
    ) -> None:
        self._service = BridgeService(config=config, platform=platform)

    @property
    def channel_name(self) -> str:
        return self._service.channel.name

    def enable_bluetooth(self) -> Reply:
        return self._service.enable_bluetooth()

    def status(self) -> RadioStatus:
        return self._service.status()

    def invoke(self, method: str, arguments: Any = None) -> Reply:
        return self._service.invoke(MethodCall(method=method, arguments=arguments))
