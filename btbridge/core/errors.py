"""Domain-specific errors for btbridge."""


class BtbridgeError(Exception):
    """Base error for btbridge."""


class ConfigError(BtbridgeError):
    """Raised when the bridge configuration cannot be read."""


class ConfigValidationError(ConfigError):
    """Raised when a config file does not conform to schema or semantics."""


class ChannelError(BtbridgeError):
    """Raised on malformed channel envelopes or conflicting registrations."""


class PlatformError(BtbridgeError):
    """Base platform adapter error."""


class PlatformUnavailableError(PlatformError):
    """Raised when a platform backend cannot run in this environment."""


class SettingsLaunchError(PlatformError):
    """Raised when the system Bluetooth settings screen cannot be opened."""
