"""
Configuration for optional interop capabilities.

The core types need no configuration. The only runtime choices are which
external-library conversions to register and how to react when a requested
library is missing. Configuration comes from a YAML file, a dict, or the
environment:

    # stellare.yaml
    stellare_types:
      capabilities: [numpy, mathutils]
      strict: false

    STELLARE_TYPES_CAPABILITIES=numpy,mathutils
    STELLARE_TYPES_STRICT=1
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import logging
import os

import yaml

from stellare_types.errors import CapabilityUnavailableError
from stellare_types.interop import registry
from stellare_types.interop.registry import Capability

logger = logging.getLogger(__name__)

CONFIG_SECTION = 'stellare_types'
ENV_CAPABILITIES = 'STELLARE_TYPES_CAPABILITIES'
ENV_STRICT = 'STELLARE_TYPES_STRICT'

_TRUE_STRINGS = {'1', 'true', 'yes', 'on'}
_FALSE_STRINGS = {'0', 'false', 'no', 'off', ''}


@dataclass
class StellareConfig:
    """Interop configuration.

    Attributes:
        capabilities: Capabilities to enable, in order.
        strict: When True, apply() raises if a capability's library is
            missing; when False it logs a warning and skips it.
    """
    capabilities: List[Capability] = field(default_factory=list)
    strict: bool = False

    @classmethod
    def from_yaml(cls, path: str) -> 'StellareConfig':
        """Load configuration from the ``stellare_types`` section of a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            StellareConfig loaded from file

        Raises:
            FileNotFoundError: If configuration file does not exist
            ValueError: If the file is malformed or contains invalid values
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {path}\n"
                f"Please create a configuration file or use get_default_config()"
            )

        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML configuration file: {e}") from e

        if not data:
            raise ValueError(
                f"Configuration file is empty: {path}\n"
                f"Expected a '{CONFIG_SECTION}' section"
            )

        if not isinstance(data, dict) or CONFIG_SECTION not in data:
            raise ValueError(
                f"Configuration file missing '{CONFIG_SECTION}' section: {path}\n"
                f"Expected structure: {CONFIG_SECTION}:\n  capabilities: [numpy]\n  strict: false"
            )

        return cls.from_dict(data[CONFIG_SECTION] or {})

    @staticmethod
    def _parse_capability(name: Any) -> Capability:
        try:
            return Capability(str(name).strip().lower())
        except ValueError:
            valid = [c.value for c in Capability]
            raise ValueError(
                f"Invalid capability '{name}'. Must be one of: {', '.join(valid)}"
            ) from None

    @staticmethod
    def _parse_bool(value: Any, key: str) -> bool:
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"Invalid boolean for '{key}': {value!r}")

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> 'StellareConfig':
        """Create configuration from a dictionary.

        Args:
            config: Mapping with optional 'capabilities' (list of names or a
                comma-separated string) and 'strict' keys

        Raises:
            ValueError: If the mapping contains unknown keys or invalid values
        """
        if not isinstance(config, Mapping):
            raise ValueError(f"Configuration must be a dictionary, got {type(config)}")

        unknown = set(config) - {'capabilities', 'strict'}
        if unknown:
            raise ValueError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}. "
                f"Valid keys: capabilities, strict"
            )

        raw = config.get('capabilities') or []
        if isinstance(raw, str):
            raw = [part for part in raw.split(',') if part.strip()]
        if not isinstance(raw, (list, tuple)):
            raise ValueError(f"'capabilities' must be a list, got {type(raw).__name__}")

        capabilities: List[Capability] = []
        for name in raw:
            capability = cls._parse_capability(name)
            if capability not in capabilities:
                capabilities.append(capability)

        strict = cls._parse_bool(config.get('strict', False), 'strict')
        return cls(capabilities=capabilities, strict=strict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'StellareConfig':
        """Create configuration from STELLARE_TYPES_* environment variables."""
        env = os.environ if environ is None else environ
        return cls.from_dict(
            {
                'capabilities': env.get(ENV_CAPABILITIES, ''),
                'strict': env.get(ENV_STRICT, ''),
            }
        )

    def to_dict(self) -> Dict[str, Any]:
        """Dictionary representation suitable for YAML serialization."""
        return {
            'capabilities': [c.value for c in self.capabilities],
            'strict': self.strict,
        }

    def save_to_yaml(self, path: str) -> None:
        """Save configuration to YAML file under the ``stellare_types`` section.

        Raises:
            IOError: If file cannot be written
        """
        config_path = Path(path)
        config_path.parent.mkdir(parents=True, exist_ok=True)
        output = {CONFIG_SECTION: self.to_dict()}

        try:
            with open(config_path, 'w') as f:
                yaml.safe_dump(output, f, default_flow_style=False, sort_keys=False)
        except IOError as e:
            raise IOError(f"Failed to write configuration file: {e}") from e

    def apply(self) -> List[Capability]:
        """Enable the configured capabilities.

        Returns:
            Capabilities that are enabled after applying.

        Raises:
            CapabilityUnavailableError: In strict mode, if a library is missing
        """
        enabled = []
        for capability in self.capabilities:
            try:
                registry.enable(capability)
            except CapabilityUnavailableError as e:
                if self.strict:
                    raise
                logger.warning(f"Skipping capability '{capability.value}': {e}")
                continue
            enabled.append(capability)
        return enabled


def get_default_config() -> StellareConfig:
    """Default configuration: no capabilities, lenient.

    The core types are fully usable without any external library.
    """
    return StellareConfig()


__all__ = [
    'CONFIG_SECTION',
    'ENV_CAPABILITIES',
    'ENV_STRICT',
    'StellareConfig',
    'get_default_config',
]
