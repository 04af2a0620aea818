"""Loading and validation of the YAML bridge configuration."""

from __future__ import annotations

import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from btbridge.core.errors import ConfigError, ConfigValidationError
from btbridge.core.model import ChannelConfig, PlatformTier

BACKEND_ENV = "BTBRIDGE_BACKEND"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def _load_schema_validator() -> Any:
    schema_text = resources.files("btbridge.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "btbridge/config.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def build_config(doc: dict[str, Any], source: Path | str = "<config>") -> ChannelConfig:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    defaults = ChannelConfig()
    tier = doc.get("tier")
    return ChannelConfig(
        channel=doc.get("channel", defaults.channel),
        backend=doc.get("backend", defaults.backend),
        tier=PlatformTier(tier) if tier is not None else None,
        settings_command=tuple(doc.get("settings_command", defaults.settings_command)),
        timeout_s=float(doc.get("timeout_s", defaults.timeout_s)),
    )


def load_config(path: Path | None = None) -> ChannelConfig:
    source = path or config_path()
    doc: dict[str, Any] = {}
    if source.exists():
        doc = _read_yaml(source)
    else:
        LOGGER.debug("No config file at %s, using defaults", source)

    backend_override = os.environ.get(BACKEND_ENV)
    if backend_override:
        if "backend" in doc and doc["backend"] != backend_override:
            LOGGER.warning(
                "%s=%s overrides configured backend '%s'", BACKEND_ENV, backend_override, doc["backend"]
            )
        doc = {**doc, "backend": backend_override}

    return build_config(doc, source)
