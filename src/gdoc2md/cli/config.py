#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the gdoc2md CLI.

A configuration file supplies default option values. It is either named with
``--config`` or discovered in the working directory, checking in order:

1. ``.gdoc2md.toml``
2. ``.gdoc2md.yaml`` / ``.gdoc2md.yml``
3. ``.gdoc2md.json``
4. ``pyproject.toml`` with a ``[tool.gdoc2md]`` table

Keys are option field names; dashes are accepted in place of underscores.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = [".gdoc2md.toml", ".gdoc2md.yaml", ".gdoc2md.yml", ".gdoc2md.json"]
PYPROJECT_FILENAME = "pyproject.toml"


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the ``[tool.gdoc2md]`` table from a pyproject.toml file.

    Returns
    -------
    dict
        The table, or an empty dict if the file has none

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is not valid TOML or the section is not a table

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get("gdoc2md", {})
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.gdoc2md] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file in ``start_dir`` (default: the working directory).

    A pyproject.toml only counts when it has a ``[tool.gdoc2md]`` table; an
    unreadable one is skipped with a warning.

    Returns
    -------
    Path or None
        The first configuration file found

    """
    directory = start_dir or Path.cwd()

    for filename in CONFIG_FILENAMES:
        config_path = directory / filename
        if config_path.is_file():
            return config_path

    pyproject_path = directory / PYPROJECT_FILENAME
    if pyproject_path.is_file():
        try:
            if _load_pyproject_section(pyproject_path):
                return pyproject_path
        except argparse.ArgumentTypeError as e:
            logger.warning(f"Ignoring {pyproject_path}: {e}")

    return None


def _read_mapping(config_path: Path) -> Any:
    ext = config_path.suffix.lower()
    if ext == ".toml":
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    if ext in (".yaml", ".yml"):
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    if ext == ".json":
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .toml, .yaml or .json")


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Option values keyed by field name

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, malformed, or not a mapping

    Examples
    --------
    >>> load_config_file(".gdoc2md.toml")
    {'code_blocks': 'fenced', 'suggestions': 'accept'}

    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if config_path.name.lower() == PYPROJECT_FILENAME:
        config = _load_pyproject_section(config_path)
    else:
        try:
            config = _read_mapping(config_path)
        except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise argparse.ArgumentTypeError(f"Invalid config file {config_path}: {e}") from e
        except OSError as e:
            raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}"
        )

    logger.debug(f"Loaded configuration from {config_path}")
    return {str(key).replace("-", "_"): value for key, value in config.items()}


def load_config_with_priority(explicit_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the explicitly named configuration file, or a discovered one.

    Returns
    -------
    dict
        Loaded configuration (empty if no file was named or found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a configuration file cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    discovered_path = discover_config_file()
    if discovered_path:
        return load_config_file(discovered_path)

    return {}
