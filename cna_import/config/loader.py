from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import HeaderMappingConfig, ImportConfig
from ..models.enums import AgencyType

"""Config loader.

Responsibilities:
- Load the header mapping tables (packaged default or a user supplied YAML)
- Load the batch run configuration (config/import.yml)
- Validate both against their JSON schemas (shipped next to this module)
- Apply defaults (output_directory=./output, packaged header mappings)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_HEADER_MAPPINGS_PATH",
    "default_header_mappings",
    "load_config",
    "load_header_mappings",
]

_CONFIG_DIR = Path(__file__).parent
DEFAULT_HEADER_MAPPINGS_PATH = _CONFIG_DIR / "header_mappings.yml"
HEADER_MAPPINGS_SCHEMA_PATH = _CONFIG_DIR / "header_mappings_schema.json"
IMPORT_SCHEMA_PATH = _CONFIG_DIR / "import_schema.json"

DEFAULT_OUTPUT_DIRECTORY = "./output"


class ConfigError(Exception):
    pass


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")
    return data


def _validate(data: dict[str, Any], schema_path: Path) -> None:
    """Validate config data against a JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            data fails validation (missing required keys, wrong types,
            unknown keys, ...).
    """
    if not schema_path.exists():
        raise ConfigError(f"config schema not found: {schema_path}")
    try:
        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_header_mappings(path: Path | None = None) -> HeaderMappingConfig:
    """Load header matching tables from YAML.

    Args:
        path: YAML file to load. None loads the packaged default tables.

    Returns:
        HeaderMappingConfig with synonyms in file order
    """
    data = _read_yaml(path or DEFAULT_HEADER_MAPPINGS_PATH)
    _validate(data, HEADER_MAPPINGS_SCHEMA_PATH)

    pattern = data["rating_code_pattern"]
    try:
        re.compile(pattern)
    except re.error as e:
        raise ConfigError(f"invalid rating_code_pattern {pattern!r}: {e}") from e

    return HeaderMappingConfig(
        officer_fields={k: list(v) for k, v in data["officer_fields"].items()},
        establishment_fields={k: list(v) for k, v in data["establishment_fields"].items()},
        rating_code_pattern=pattern,
    )


@lru_cache(maxsize=1)
def default_header_mappings() -> HeaderMappingConfig:
    """Packaged header mappings, loaded once per process."""
    return load_header_mappings(None)


def load_config(path: Path) -> ImportConfig:
    data = _read_yaml(path)
    _validate(data, IMPORT_SCHEMA_PATH)

    mappings_path = data.get("header_mappings")
    if mappings_path:
        header_mappings = load_header_mappings(Path(mappings_path))
    else:
        header_mappings = default_header_mappings()

    return ImportConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY),
        agency_type=AgencyType(data["agency_type"]),  # enum enforced by schema
        header_mappings=header_mappings,
        establishment_directory=data.get("establishment_directory"),
    )
