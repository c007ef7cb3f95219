"""
Configuration loading and validation.

This module handles loading of YAML configuration files and
validates that all required fields are present.
"""

import logging
from pathlib import Path
from typing import Dict, Any, List

import yaml

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ["global", "data", "scoring", "pair_generation", "evaluation"]

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def load_config(filepath: str) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        filepath: Path to the YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty or not a mapping
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    logger.info(f"Loading configuration from {filepath}")
    with open(filepath, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        raise ValueError(f"Configuration file is empty: {filepath}")
    if not isinstance(config, dict):
        raise ValueError(f"Configuration must be a mapping: {filepath}")

    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration dictionary

    Returns:
        List of warning/error messages (empty if valid)
    """
    issues = []

    for section in REQUIRED_SECTIONS:
        if section not in config:
            issues.append(f"Missing required section: {section}")

    log_level = get_config_value(config, "global.log_level")
    if log_level is not None and str(log_level).upper() not in VALID_LOG_LEVELS:
        issues.append(f"Unknown global.log_level: {log_level}")

    if "data" in config and get_config_value(config, "data.profiles.path") is None:
        issues.append("Missing data.profiles.path")

    # Scoring weights must be non-negative and thresholds ordered
    scoring = config.get("scoring") or {}
    for name, value in scoring.items():
        if name in ("baseline", "high_threshold", "medium_threshold"):
            continue
        if not isinstance(value, (int, float)) or value < 0:
            issues.append(f"Scoring weight {name} must be a non-negative number, got {value}")
    medium = scoring.get("medium_threshold", 40)
    high = scoring.get("high_threshold", 70)
    numeric = all(isinstance(v, (int, float)) for v in (medium, high))
    if not numeric or not 0 <= medium <= high <= 100:
        issues.append(f"Thresholds must satisfy 0 <= medium <= high <= 100, got {medium}, {high}")

    max_pairs = get_config_value(config, "pair_generation.max_pairs")
    if max_pairs is not None and (not isinstance(max_pairs, int) or max_pairs < 0):
        issues.append(f"pair_generation.max_pairs must be a non-negative integer, got {max_pairs}")

    max_turns = get_config_value(config, "transcript.max_turns")
    if max_turns is not None and (not isinstance(max_turns, int) or max_turns < 0):
        issues.append(f"transcript.max_turns must be a non-negative integer, got {max_turns}")

    threshold = get_config_value(config, "evaluation.monotonicity_threshold")
    if threshold is not None and (not isinstance(threshold, (int, float)) or not -1 <= threshold <= 1):
        issues.append(f"evaluation.monotonicity_threshold must be in [-1, 1], got {threshold}")

    return issues


def get_config_value(config: Dict[str, Any], path: str, default: Any = None) -> Any:
    """
    Get a nested configuration value using dot notation.

    Args:
        config: Configuration dictionary
        path: Dot-separated path (e.g., "scoring.goal")
        default: Default value if path doesn't exist

    Returns:
        Configuration value or default
    """
    keys = path.split(".")
    value = config
    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value
