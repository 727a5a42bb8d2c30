"""Request definition loading from JSON or YAML files."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from httpchain_pool.exceptions import LoaderError
from httpchain_pool.models import RequestDefinition, validate_definitions

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_definitions(path: Path | str) -> dict[str, RequestDefinition]:
    """Load request definitions from a configuration file.

    Files ending in ``.yaml``/``.yml`` are read as YAML, anything else as JSON.

    Args:
        path: Path to the configuration file

    Returns:
        Mapping of request name to validated definition

    Raises:
        LoaderError: If the file cannot be read or parsed
        DefinitionError: If the content is not a valid set of definitions
    """
    path = Path(path)
    data = _read_document(path)

    if not isinstance(data, dict):
        raise LoaderError(f"Expected a mapping of request names in {path}, got {type(data).__name__}")

    definitions = validate_definitions(data)
    logger.info(f"Loaded {len(definitions)} request definitions from {path}")
    return definitions


def _read_document(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise LoaderError(f"Failed to load request definitions from {path}: {e}") from e
