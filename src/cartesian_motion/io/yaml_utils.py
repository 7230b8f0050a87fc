"""Define functions reading and writing the YAML files that configure Cartesian motion."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


def export_yaml_data(data: dict[str, Any], yaml_path: Path) -> None:
    """Write a mapping to a YAML file, keeping the mapping's key order."""
    with yaml_path.open("w") as yaml_file:
        yaml.safe_dump(data, yaml_file, sort_keys=False, default_flow_style=False)


def load_yaml_data(yaml_path: Path, required_keys: Iterable[str] = ()) -> dict[str, Any]:
    """Load the top-level mapping of a YAML file.

    :param yaml_path: Path to the YAML file
    :param required_keys: Keys that must be present at the top level of the file
    :return: Mapping loaded from the file
    :raises KeyError: If any required key is missing from the file
    """
    if not yaml_path.exists():
        raise FileNotFoundError(f"Cannot load data from nonexistent YAML file: {yaml_path}")

    try:
        with yaml_path.open() as yaml_file:
            yaml_data = yaml.safe_load(yaml_file)
    except yaml.YAMLError as error:
        raise RuntimeError(f"Failed to parse YAML file: {yaml_path}") from error

    if not isinstance(yaml_data, dict):
        raise TypeError(f"Expected a mapping at the top level of {yaml_path}")

    missing_keys = sorted(set(required_keys) - set(yaml_data))
    if missing_keys:
        raise KeyError(f"Required keys {missing_keys} were missing in data loaded from {yaml_path}")

    return yaml_data
