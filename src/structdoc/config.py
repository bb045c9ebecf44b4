"""Configuration for the structured function doc rule.

Configuration is an immutable ``RuleConfiguration``. It can be built from a
mapping (``apply``), loaded from a YAML or JSON file and overridden through
``STRUCTDOC_``-prefixed environment variables.

Example ``.structdoc.yml``::

    structured_function_doc:
      severity: error
      max_summary_line_count: 2
      minimal_number_of_parameters: 3

Usage:
    >>> from structdoc.config import load_config
    >>> config = load_config(".structdoc.yml")
    >>> config.max_summary_line_count
    2
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml

from structdoc.types import Severity

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILES = (".structdoc.yml", ".structdoc.yaml", ".structdoc.json")
DEFAULT_SECTION = "structured_function_doc"
ENV_PREFIX = "STRUCTDOC_"


class ConfigurationError(ValueError):
    """Raised when configuration keys or values are invalid."""


class ConfigurationKey(str, Enum):
    """Recognized configuration keys."""

    SEVERITY = "severity"
    MAX_SUMMARY_LINE_COUNT = "max_summary_line_count"
    MINIMAL_NUMBER_OF_PARAMETERS = "minimal_number_of_parameters"


def _require_count(key: ConfigurationKey, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{key.value} must be an integer, got {value!r}")
    if value < 0:
        raise ConfigurationError(f"{key.value} must be >= 0, got {value}")
    return value


def _require_severity(value: Any) -> Severity:
    if isinstance(value, Severity):
        return value
    try:
        return Severity(str(value).lower())
    except ValueError:
        choices = ", ".join(s.value for s in Severity)
        raise ConfigurationError(f"severity must be one of: {choices}, got {value!r}") from None


@dataclass(frozen=True)
class RuleConfiguration:
    """Immutable configuration for the structured function doc rule.

    Attributes:
        severity: Severity of reported violations
        max_summary_line_count: Maximum summary lines, 0 disables the check
        minimal_number_of_parameters: Functions with fewer parameters are exempt
    """

    severity: Severity = Severity.WARNING
    max_summary_line_count: int = 1
    minimal_number_of_parameters: int = 3

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        object.__setattr__(self, "severity", _require_severity(self.severity))
        _require_count(ConfigurationKey.MAX_SUMMARY_LINE_COUNT, self.max_summary_line_count)
        _require_count(
            ConfigurationKey.MINIMAL_NUMBER_OF_PARAMETERS, self.minimal_number_of_parameters
        )

    def apply(self, configuration: Mapping[str, Any]) -> "RuleConfiguration":
        """Create a new configuration with values from a mapping.

        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        if not isinstance(configuration, Mapping):
            raise ConfigurationError(
                f"Rule configuration must be a mapping, got {type(configuration).__name__}"
            )

        changes: dict[str, Any] = {}
        for name, value in configuration.items():
            try:
                key = ConfigurationKey(name)
            except ValueError:
                raise ConfigurationError(f"Unknown configuration: {name}") from None

            if key is ConfigurationKey.SEVERITY:
                changes["severity"] = _require_severity(value)
            else:
                changes[key.value] = _require_count(key, value)

        return replace(self, **changes)

    @property
    def console_description(self) -> str:
        return (
            f"severity: {self.severity.value}"
            f", {ConfigurationKey.MAX_SUMMARY_LINE_COUNT.value}: {self.max_summary_line_count}"
            f", {ConfigurationKey.MINIMAL_NUMBER_OF_PARAMETERS.value}: "
            f"{self.minimal_number_of_parameters}"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result = asdict(self)
        result["severity"] = self.severity.value
        return result


def _read_file(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e

    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ConfigurationError(f"Unsupported configuration format: {suffix}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Invalid configuration file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    return data


def _parse_env_value(value: str) -> Any:
    """Parse an environment string, integers become ``int``."""
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        return value


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``STRUCTDOC_*`` overrides, e.g. ``STRUCTDOC_SEVERITY=error``."""
    result: dict[str, Any] = {}
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        key = name[len(ENV_PREFIX) :].lower()
        if key not in {k.value for k in ConfigurationKey}:
            continue
        result[key] = _parse_env_value(value)
    return result


def find_config_file(directory: Path | None = None) -> Path | None:
    """Find a default configuration file in a directory."""
    directory = directory or Path.cwd()
    for name in DEFAULT_CONFIG_FILES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_config(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    base: RuleConfiguration | None = None,
) -> RuleConfiguration:
    """Load the rule configuration.

    Args:
        path: Configuration file (YAML or JSON); None looks for a default file
        environ: Environment mapping for overrides (defaults to os.environ)
        base: Configuration the loaded values are applied to

    Returns:
        The effective RuleConfiguration

    Raises:
        ConfigurationError: If the file or any value is invalid
    """
    config = base or RuleConfiguration()

    file_path = Path(path) if path is not None else find_config_file()
    if path is not None and not file_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {file_path}")

    if file_path is not None:
        data = _read_file(file_path)
        section = data.get(DEFAULT_SECTION, data) or {}
        logger.debug("Loaded configuration from %s", file_path)
        config = config.apply(section)

    overrides = _env_overrides(os.environ if environ is None else environ)
    if overrides:
        logger.debug("Applying environment overrides: %s", sorted(overrides))
        config = config.apply(overrides)

    return config
