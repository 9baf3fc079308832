"""Output formats shared by the CLI commands."""

import json
from enum import Enum
from typing import Any

import yaml


class OutputFormat(str, Enum):
    """Output format options."""

    HUMAN = "human"
    JSON = "json"
    YAML = "yaml"


def dump(data: Any, output_format: OutputFormat) -> str:
    """Serialize data for the machine-readable formats."""
    if output_format == OutputFormat.JSON:
        return json.dumps(data, indent=2)
    return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip()
