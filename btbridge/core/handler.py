"""Decision logic behind the ``enableBluetooth`` channel method."""

from __future__ import annotations

import logging

from btbridge.core.model import (
    CODE_ERROR,
    CODE_UNAVAILABLE,
    METHOD_ENABLE_BLUETOOTH,
    MSG_ALREADY_ENABLED,
    MSG_ENABLE_FAILED,
    MSG_ENABLE_MANUALLY,
    MSG_ENABLED,
    MSG_SETTINGS_FAILED,
    MSG_UNAVAILABLE,
    Failure,
    MethodCall,
    NotImplementedReply,
    PlatformTier,
    RadioCapability,
    Reply,
    Success,
)
from btbridge.platforms.base import BluetoothPlatform

LOGGER = logging.getLogger(__name__)


def read_capability(platform: BluetoothPlatform) -> RadioCapability:
    if not platform.adapter_present():
        return RadioCapability.ABSENT
    if platform.is_enabled():
        return RadioCapability.ENABLED
    return RadioCapability.DISABLED


class BluetoothEnableHandler:
    """Enables the Bluetooth radio, or sends the user to system settings.

    The platform tier is resolved once, when the handler is built. The radio
    capability is read again on every call.
    """

    def __init__(self, platform: BluetoothPlatform, *, tier: PlatformTier | None = None) -> None:
        self._platform = platform
        self._tier = tier if tier is not None else platform.tier()

    @property
    def tier(self) -> PlatformTier:
        return self._tier

    def __call__(self, call: MethodCall) -> Reply:
        return self.handle(call.method)

    def handle(self, method: str) -> Reply:
        if method != METHOD_ENABLE_BLUETOOTH:
            LOGGER.debug("Method '%s' not implemented by this handler", method)
            return NotImplementedReply()
        return self.enable_bluetooth()

    def enable_bluetooth(self) -> Reply:
        try:
            capability = read_capability(self._platform)
        except Exception as exc:
            LOGGER.warning("Bluetooth adapter query failed: %s", exc)
            return Failure(CODE_ERROR, MSG_ENABLE_FAILED, None)

        LOGGER.debug("Radio capability=%s tier=%s", capability.value, self._tier.value)
        if capability is RadioCapability.ABSENT:
            return Failure(CODE_UNAVAILABLE, MSG_UNAVAILABLE, None)
        if capability is RadioCapability.ENABLED:
            return Success(MSG_ALREADY_ENABLED)
        if self._tier is PlatformTier.SETTINGS:
            return self._open_settings_reply()
        return self._enable_reply()

    def _open_settings_reply(self) -> Reply:
        # Reported as soon as the settings screen is launched, not once the
        # user has actually turned the radio on.
        try:
            self._platform.open_settings()
        except Exception as exc:
            LOGGER.warning("Could not open Bluetooth settings: %s", exc)
            return Failure(CODE_ERROR, MSG_SETTINGS_FAILED, None)
        return Success(MSG_ENABLE_MANUALLY)

    def _enable_reply(self) -> Reply:
        try:
            enabled = self._platform.enable()
        except Exception as exc:
            LOGGER.warning("Bluetooth enable call failed: %s", exc)
            enabled = False
        if enabled:
            return Success(MSG_ENABLED)
        return Failure(CODE_ERROR, MSG_ENABLE_FAILED, None)
