"""Android backend reaching ``android.bluetooth.BluetoothAdapter`` through pyjnius."""

from __future__ import annotations

from typing import Any

from btbridge.core.errors import PlatformError, PlatformUnavailableError, SettingsLaunchError
from btbridge.core.model import PlatformTier

TIRAMISU = 33


def _autoclass(name: str) -> Any:
    try:
        from jnius import autoclass  # type: ignore
    except Exception as exc:  # pragma: no cover - import failure path
        raise PlatformUnavailableError(
            "Android backend requires 'pyjnius'. Install dependency and retry."
        ) from exc
    return autoclass(name)


class AndroidPlatform:
    def __init__(self, *, autoclass: Any = None) -> None:
        self._autoclass = autoclass or _autoclass

    def _adapter(self) -> Any:
        adapter_cls = self._autoclass("android.bluetooth.BluetoothAdapter")
        try:
            return adapter_cls.getDefaultAdapter()
        except Exception as exc:
            raise PlatformError(f"BluetoothAdapter.getDefaultAdapter() failed: {exc}") from exc

    def adapter_present(self) -> bool:
        return self._adapter() is not None

    def is_enabled(self) -> bool:
        adapter = self._adapter()
        if adapter is None:
            return False
        try:
            return bool(adapter.isEnabled())
        except Exception as exc:
            raise PlatformError(f"BluetoothAdapter.isEnabled() failed: {exc}") from exc

    def enable(self) -> bool:
        adapter = self._adapter()
        if adapter is None:
            return False
        try:
            return bool(adapter.enable())
        except Exception as exc:
            raise PlatformError(f"BluetoothAdapter.enable() failed: {exc}") from exc

    def open_settings(self) -> None:
        try:
            intent_cls = self._autoclass("android.content.Intent")
            settings_cls = self._autoclass("android.provider.Settings")
            activity = self._autoclass("org.kivy.android.PythonActivity").mActivity
            activity.startActivity(intent_cls(settings_cls.ACTION_BLUETOOTH_SETTINGS))
        except PlatformUnavailableError:
            raise
        except Exception as exc:
            raise SettingsLaunchError(f"Could not start Bluetooth settings activity: {exc}") from exc

    def tier(self) -> PlatformTier:
        version_cls = self._autoclass("android.os.Build$VERSION")
        try:
            sdk_int = int(version_cls.SDK_INT)
        except Exception as exc:
            raise PlatformError(f"Could not read Build.VERSION.SDK_INT: {exc}") from exc
        if sdk_int >= TIRAMISU:
            return PlatformTier.SETTINGS
        return PlatformTier.PROGRAMMATIC
