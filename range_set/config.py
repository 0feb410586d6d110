"""
YAML configuration for range-set.

Loads a YAML file with environment variable substitution and an optional
'include' directive, merges it over DEFAULT_CONFIG, and builds
RangeCollection / RangeSampler objects from the result.

Example config:

    include: base.yaml
    collection:
      prepend_mode: symmetric
      intervals:
        - [0, 9, "a"]
        - {min: 10, max: 19, value: "b"}
    sampler:
      seed: ${SAMPLER_SEED}
    logging:
      level: DEBUG
"""

import copy
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from .logging_config import get_logger
from .range_collection import PREPEND_LEGACY, RangeCollection
from .sampler import RangeSampler

logger = get_logger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "collection": {
        "prepend_mode": PREPEND_LEGACY,
        "intervals": [],
    },
    "sampler": {
        "seed": None,
    },
    "logging": {
        "level": "INFO",
    },
}


def substitute_env_vars(content: str) -> str:
    """Substitute ${VAR} and $VAR patterns with environment variables."""
    def replace_var(match):
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            logger.warning(f"Environment variable '{var_name}' not found, keeping placeholder")
            return match.group(0)
        return env_value

    content = re.sub(r'\$\{([^}]+)\}', replace_var, content)
    content = re.sub(r'\$(\w+)(?=\W|$)', replace_var, content)
    return content


def deep_merge_configs(base_config: Dict[Any, Any], override_config: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Deep merge two configuration dictionaries.
    - Override config takes precedence over base config
    - Lists are concatenated (base + override)
    - Nested dictionaries are recursively merged
    """
    result = copy.deepcopy(base_config)
    for key, value in override_config.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_configs(result[key], value)
        elif key in result and isinstance(result[key], list) and isinstance(value, list):
            result[key] = result[key] + value
        else:
            result[key] = value
    return result


def load_yaml_with_includes(file_path: Union[str, Path], visited_files: Optional[set] = None) -> Dict[Any, Any]:
    """
    Load a YAML file and handle 'include' directives.

    Args:
        file_path: Path to the YAML file to load
        visited_files: Set of already visited files to prevent circular includes

    Returns:
        Merged configuration dictionary

    Raises:
        FileNotFoundError: If the file or an included file doesn't exist
        ValueError: If a circular include is detected or the YAML is malformed
    """
    if visited_files is None:
        visited_files = set()

    file_path = Path(file_path).resolve()
    if str(file_path) in visited_files:
        raise ValueError(f"Circular include detected: {file_path}")
    visited_files.add(str(file_path))

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Could not find file: {file_path}")

    try:
        config = yaml.safe_load(substitute_env_vars(content)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file {file_path}: {e}")

    if not isinstance(config, dict):
        raise ValueError(f"Top level of {file_path} must be a mapping, got {type(config).__name__}")

    if 'include' in config:
        include_file = Path(config.pop('include'))
        if not include_file.is_absolute():
            include_file = file_path.parent / include_file
        base_config = load_yaml_with_includes(include_file, visited_files.copy())
        config = deep_merge_configs(base_config, config)

    return config


def load_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML config file and merge it over DEFAULT_CONFIG.

    A section left empty in YAML (e.g. a bare 'sampler:') loads as None
    and falls back to its defaults.
    """
    config = load_yaml_with_includes(config_path)
    config = {key: value for key, value in config.items() if not (value is None and key in DEFAULT_CONFIG)}
    return deep_merge_configs(DEFAULT_CONFIG, config)


def get_config_value(config: Dict[str, Any], key_path: str, default: Any = None) -> Any:
    """
    Look up a value with dot notation, e.g. get_config_value(config, "sampler.seed").

    Numeric path components index into lists.
    """
    current: Any = config
    for key in key_path.split('.'):
        if isinstance(current, list) and key.isdigit() and int(key) < len(current):
            current = current[int(key)]
        elif isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return default
    return current


def parse_interval_row(row: Any) -> Tuple[int, int, Any]:
    """
    Parse one configured interval.

    Accepts either a [min, max, value] list or a {min, max, value} mapping.
    The value is optional in both forms and defaults to None.

    Raises:
        ValueError: If the row has neither form
    """
    if isinstance(row, dict):
        if "min" not in row or "max" not in row:
            raise ValueError(f"Interval mapping needs 'min' and 'max' keys: {row!r}")
        return row["min"], row["max"], row.get("value")
    if isinstance(row, (list, tuple)) and len(row) in (2, 3):
        value = row[2] if len(row) == 3 else None
        return row[0], row[1], value
    raise ValueError(f"Cannot parse interval {row!r}, expected [min, max, value] or a mapping")


def build_collection(config: Dict[str, Any]) -> RangeCollection:
    """Build a RangeCollection from the 'collection' section of a config."""
    prepend_mode = get_config_value(config, "collection.prepend_mode", PREPEND_LEGACY)
    rows = [parse_interval_row(row) for row in get_config_value(config, "collection.intervals", []) or []]
    collection = RangeCollection.from_tuples(rows, prepend_mode=prepend_mode)
    logger.debug(f"Built collection with {len(collection)} of {len(rows)} configured intervals")
    return collection


def build_sampler(config: Dict[str, Any], collection: Optional[RangeCollection] = None) -> RangeSampler:
    """Build a RangeSampler seeded from 'sampler.seed', over collection or one built from config."""
    if collection is None:
        collection = build_collection(config)
    seed = get_config_value(config, "sampler.seed")
    if seed is not None:
        seed = int(seed)
    return RangeSampler(collection, seed=seed)
