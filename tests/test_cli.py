from __future__ import annotations

import json

from typer.testing import CliRunner

from btbridge import cli
from btbridge.core.model import (
    ChannelConfig,
    Failure,
    MethodCall,
    PlatformTier,
    RadioCapability,
    RadioStatus,
    Success,
)


class FakeService:
    reply = Success("Bluetooth enabled successfully.")
    built_with: list[ChannelConfig] = []

    def __init__(self, *, config=None, platform=None) -> None:
        FakeService.built_with.append(config)
        self.channel = type("Channel", (), {"name": config.channel})()

    def enable_bluetooth(self):
        return self.reply

    def status(self):
        return RadioStatus(capability=RadioCapability.DISABLED, tier=PlatformTier.PROGRAMMATIC)

    def serve(self, stdin, stdout):
        for line in stdin:
            call = MethodCall(**json.loads(line))
            stdout.write(json.dumps({"success": call.method}) + "\n")


runner = CliRunner()


def _patch(monkeypatch, service_cls=FakeService) -> None:
    monkeypatch.setattr(cli, "BridgeService", service_cls)
    monkeypatch.setattr(cli, "load_config", lambda: ChannelConfig())


def test_enable_command_success(monkeypatch):
    _patch(monkeypatch)
    result = runner.invoke(cli.app, ["enable"])
    assert result.exit_code == 0
    assert "Bluetooth enabled successfully." in result.stdout


def test_enable_command_failure_is_clean(monkeypatch):
    class FailingService(FakeService):
        reply = Failure("UNAVAILABLE", "Bluetooth is not available on this device.")

    _patch(monkeypatch, FailingService)
    result = runner.invoke(cli.app, ["enable"])
    assert result.exit_code == 1
    assert "Error [UNAVAILABLE]: Bluetooth is not available on this device." in result.stderr
    assert "Traceback" not in result.stderr


def test_backend_option_overrides_config(monkeypatch):
    _patch(monkeypatch)
    FakeService.built_with.clear()
    result = runner.invoke(cli.app, ["--backend", "android", "enable"])
    assert result.exit_code == 0
    assert FakeService.built_with[-1].backend == "android"


def test_status_command(monkeypatch):
    _patch(monkeypatch)
    result = runner.invoke(cli.app, ["status"])
    assert result.exit_code == 0
    assert "Channel: com.example.bluetooth" in result.stdout
    assert "Bluetooth: disabled" in result.stdout
    assert "Tier: programmatic" in result.stdout


def test_serve_command(monkeypatch):
    _patch(monkeypatch)
    result = runner.invoke(cli.app, ["serve"], input='{"method": "enableBluetooth"}\n')
    assert result.exit_code == 0
    assert json.loads(result.stdout.strip()) == {"success": "enableBluetooth"}


def test_config_error_is_clean(monkeypatch):
    from btbridge.core.errors import ConfigValidationError

    def broken_config():
        raise ConfigValidationError("Schema validation failed for config.yaml (backend)")

    monkeypatch.setattr(cli, "load_config", broken_config)
    result = runner.invoke(cli.app, ["status"])
    assert result.exit_code == 1
    assert "Error: Schema validation failed" in result.stderr


def test_backend_option_does_not_leak_between_invocations(monkeypatch):
    _patch(monkeypatch)
    FakeService.built_with.clear()
    runner.invoke(cli.app, ["--backend", "android", "status"])
    result = runner.invoke(cli.app, ["status"])
    assert result.exit_code == 0
    assert [config.backend for config in FakeService.built_with] == ["android", "bluez"]
