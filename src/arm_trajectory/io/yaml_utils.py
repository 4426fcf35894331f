"""Define utility functions for reading and writing goal, config, and result YAML files."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from pathlib import Path


def load_yaml_data(yaml_path: Path, required_keys: set[str] | None = None) -> dict[str, Any]:
    """Load a YAML mapping from file into Python data structures.

    :param yaml_path: Path to the YAML file to be imported
    :param required_keys: Set of keys required to exist in the loaded data (if None, ignored)
    :return: Dictionary mapping strings to the loaded values
    :raises FileNotFoundError: If the YAML file doesn't exist
    :raises RuntimeError: If the file isn't valid YAML or doesn't contain a mapping
    :raises KeyError: If a required key is missing in the loaded data
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Cannot load data from nonexistent YAML file: {yaml_path}")

    try:
        with yaml_path.open() as yaml_file:
            yaml_data = yaml.safe_load(yaml_file)
    except yaml.YAMLError as error:
        raise RuntimeError(f"Failed to load from YAML file: {yaml_path}") from error

    if yaml_data is None:
        yaml_data = {}
    if not isinstance(yaml_data, dict):
        raise RuntimeError(f"Expected a mapping at the top level of {yaml_path}")

    for key in required_keys or set():
        if key not in yaml_data:
            raise KeyError(f"Required key '{key}' was missing in data loaded from {yaml_path}")

    return yaml_data


def export_yaml_data(data: dict[str, Any], filepath: Path) -> None:
    """Write the given data to a YAML file, creating parent directories as needed."""
    filepath.parent.mkdir(parents=True, exist_ok=True)
    with filepath.open("w") as file:
        yaml.safe_dump(data, file, sort_keys=False)
