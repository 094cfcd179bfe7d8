"""Loading of the service start configuration."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import yaml

__all__ = ["StartConfig", "ConfigError", "load_start_config"]

DEFAULT_CONFIG_FILE = "start-config.yml"


class ConfigError(Exception):
    """Raised when the start configuration cannot be read or is malformed."""


@dataclass
class StartConfig:
    """Service binaries with instance counts, tool binaries and the descriptor limit."""

    service_binaries: dict[str, int] = field(default_factory=dict)
    tool_binaries: list[str] = field(default_factory=list)
    max_file_descriptors: int = 0


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_start_config(path: str | Path = DEFAULT_CONFIG_FILE) -> StartConfig:
    """Read the YAML start configuration; on Windows service names gain ".exe"."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"error reading YAML file: {exc}") from exc
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"error unmarshalling YAML: {exc}") from exc
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise ConfigError("error unmarshalling YAML: top level must be a mapping")

    services = document.get("serviceBinaries") or {}
    if not isinstance(services, dict) or not all(_is_int(count) for count in services.values()):
        raise ConfigError("error unmarshalling YAML: serviceBinaries must map names to counts")
    tools = document.get("toolBinaries") or []
    if not isinstance(tools, list):
        raise ConfigError("error unmarshalling YAML: toolBinaries must be a list")
    limit = document.get("maxFileDescriptors") or 0
    if not _is_int(limit):
        raise ConfigError("error unmarshalling YAML: maxFileDescriptors must be an integer")

    suffix = ".exe" if sys.platform == "win32" else ""
    return StartConfig(
        service_binaries={f"{name}{suffix}": count for name, count in services.items()},
        tool_binaries=[str(tool) for tool in tools],
        max_file_descriptors=limit,
    )