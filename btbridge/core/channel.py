"""Method channel: name-based dispatch plus the JSON envelope used on the wire."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from btbridge.core.errors import ChannelError
from btbridge.core.model import Failure, MethodCall, NotImplementedReply, Reply, Success

LOGGER = logging.getLogger(__name__)

MethodHandler = Callable[[MethodCall], Reply]


class MethodChannel:
    def __init__(self, name: str) -> None:
        if not name:
            raise ChannelError("Channel name must not be empty")
        self.name = name
        self._handlers: dict[str, MethodHandler] = {}
        self._fallback: MethodHandler | None = None

    @property
    def methods(self) -> tuple[str, ...]:
        return tuple(sorted(self._handlers))

    def register(self, method: str, handler: MethodHandler) -> None:
        if method in self._handlers:
            raise ChannelError(f"Method '{method}' is already registered on channel '{self.name}'")
        self._handlers[method] = handler

    def set_method_call_handler(self, handler: MethodHandler | None) -> None:
        """Install a handler that receives every call without a registered entry."""
        self._fallback = handler

    def invoke(self, call: MethodCall) -> Reply:
        handler = self._handlers.get(call.method, self._fallback)
        if handler is None:
            LOGGER.debug("No handler for '%s' on channel '%s'", call.method, self.name)
            return NotImplementedReply()
        return handler(call)


def decode_call(envelope: Any) -> MethodCall:
    if not isinstance(envelope, dict):
        raise ChannelError("Request envelope must be a JSON object")
    method = envelope.get("method")
    if not isinstance(method, str) or not method:
        raise ChannelError("Request envelope requires a non-empty string 'method'")
    return MethodCall(method=method, arguments=envelope.get("arguments"))


def encode_reply(reply: Reply) -> dict[str, Any]:
    if isinstance(reply, Success):
        return {"success": reply.value}
    if isinstance(reply, Failure):
        return {"error": reply.code, "message": reply.message, "details": reply.details}
    if isinstance(reply, NotImplementedReply):
        return {"notImplemented": True}
    raise ChannelError(f"Unsupported reply type {type(reply).__name__}")
