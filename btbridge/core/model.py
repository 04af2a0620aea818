"""Core data models used across handler, channel, service, and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

METHOD_ENABLE_BLUETOOTH = "enableBluetooth"

CODE_UNAVAILABLE = "UNAVAILABLE"
CODE_ERROR = "ERROR"

MSG_UNAVAILABLE = "Bluetooth is not available on this device."
MSG_ALREADY_ENABLED = "Bluetooth is already enabled."
MSG_ENABLE_MANUALLY = "Please enable Bluetooth manually."
MSG_SETTINGS_FAILED = "Could not open Bluetooth settings."
MSG_ENABLED = "Bluetooth enabled successfully."
MSG_ENABLE_FAILED = "Could not enable Bluetooth automatically."


class RadioCapability(str, Enum):
    ABSENT = "absent"
    DISABLED = "disabled"
    ENABLED = "enabled"


class PlatformTier(str, Enum):
    PROGRAMMATIC = "programmatic"
    SETTINGS = "settings"


@dataclass(frozen=True)
class MethodCall:
    method: str
    arguments: Any = None


@dataclass(frozen=True)
class Success:
    value: str


@dataclass(frozen=True)
class Failure:
    code: str
    message: str
    details: Any = None


@dataclass(frozen=True)
class NotImplementedReply:
    """Signals that no handler on the channel owns the requested method."""


Reply = Union[Success, Failure, NotImplementedReply]


@dataclass(frozen=True)
class RadioStatus:
    capability: RadioCapability
    tier: PlatformTier


@dataclass(frozen=True)
class ChannelConfig:
    channel: str = "com.example.bluetooth"
    backend: str = "bluez"
    tier: PlatformTier | None = None
    settings_command: tuple[str, ...] = field(default=("blueman-manager",))
    timeout_s: float = 5.0
