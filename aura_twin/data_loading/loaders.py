"""
Data loading functions for twin profile pools.

This module loads raw profile records from JSON or YAML files and migrates
each one to a TwinProfile. Scoring is handled elsewhere.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Any

import yaml

from ..profiles.migration import migrate_profile
from ..profiles.schema import TwinProfile

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def _read_records(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)


def load_profile_records(filepath: str) -> List[Dict[str, Any]]:
    """
    Load raw profile records from a JSON or YAML file.

    The file holds either a list of records or a mapping with a
    ``profiles`` list. Records may use the current nested schema or the
    legacy flat one.

    Args:
        filepath: Path to the profiles file (.json, .yaml or .yml)

    Returns:
        List of raw profile dictionaries

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a list of records
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profiles file not found: {filepath}")

    logger.info(f"Loading profiles from {filepath}")
    data = _read_records(path)

    if isinstance(data, dict):
        data = data.get("profiles")
    if not data:
        raise ValueError(f"Profiles file is empty: {filepath}")
    if not isinstance(data, list):
        raise ValueError(f"Profiles file must hold a list of records: {filepath}")

    bad = [i for i, record in enumerate(data) if not isinstance(record, dict)]
    if bad:
        raise ValueError(f"Records at positions {bad} are not mappings: {filepath}")

    return data


def load_profiles(filepath: str) -> List[TwinProfile]:
    """
    Load and migrate every profile in a file.

    Args:
        filepath: Path to the profiles file

    Returns:
        List of TwinProfile instances, in file order
    """
    records = load_profile_records(filepath)
    profiles = [migrate_profile(record) for record in records]
    logger.info(f"Loaded {len(profiles)} profiles")
    return profiles
