"""Service layer used by the CLI, the public API, and the stdio bridge."""

from __future__ import annotations

import json
import logging
from typing import TextIO

from btbridge.core.channel import MethodChannel, decode_call, encode_reply
from btbridge.core.config import load_config
from btbridge.core.errors import ChannelError, ConfigValidationError
from btbridge.core.handler import BluetoothEnableHandler, read_capability
from btbridge.core.model import (
    CODE_ERROR,
    METHOD_ENABLE_BLUETOOTH,
    ChannelConfig,
    MethodCall,
    RadioStatus,
    Reply,
)
from btbridge.platforms.android import AndroidPlatform
from btbridge.platforms.base import BluetoothPlatform
from btbridge.platforms.bluez import BlueZPlatform

LOGGER = logging.getLogger(__name__)


def build_platform(config: ChannelConfig) -> BluetoothPlatform:
    if config.backend == "bluez":
        return BlueZPlatform(settings_command=config.settings_command, timeout_s=config.timeout_s)
    if config.backend == "android":
        return AndroidPlatform()
    raise ConfigValidationError(f"Unsupported backend '{config.backend}'")


class BridgeService:
    def __init__(
        self,
        *,
        config: ChannelConfig | None = None,
        platform: BluetoothPlatform | None = None,
    ) -> None:
        self.config = config or load_config()
        self.platform = platform or build_platform(self.config)
        self.handler = BluetoothEnableHandler(self.platform, tier=self.config.tier)
        self.channel = MethodChannel(self.config.channel)
        self.channel.register(METHOD_ENABLE_BLUETOOTH, self.handler)

    def invoke(self, call: MethodCall) -> Reply:
        return self.channel.invoke(call)

    def enable_bluetooth(self) -> Reply:
        return self.invoke(MethodCall(METHOD_ENABLE_BLUETOOTH))

    def status(self) -> RadioStatus:
        return RadioStatus(capability=read_capability(self.platform), tier=self.handler.tier)

    def serve(self, stdin: TextIO, stdout: TextIO) -> int:
        """Answer JSON-lines requests until EOF; returns the number served."""
        served = 0
        for line in stdin:
            line = line.strip()
            if not line:
                continue
            response = self._respond(line)
            stdout.write(json.dumps(response) + "\n")
            stdout.flush()
            served += 1
        return served

    def _respond(self, line: str) -> dict:
        request_id = None
        try:
            envelope = json.loads(line)
            if isinstance(envelope, dict):
                request_id = envelope.get("id")
            call = decode_call(envelope)
        except (json.JSONDecodeError, ChannelError) as exc:
            LOGGER.warning("Rejected request on channel '%s': %s", self.channel.name, exc)
            response = {"error": CODE_ERROR, "message": f"Malformed request: {exc}", "details": None}
        else:
            response = encode_reply(self.invoke(call))
        if request_id is not None:
            response["id"] = request_id
        return response
