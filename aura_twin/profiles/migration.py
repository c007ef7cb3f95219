"""
Profile schema migration.

Older app versions stored the twin personality as flat fields at the root
of the profile record. The current schema (v2) nests it under ``aura``,
with dating details under ``dating`` and filters under ``preferences``.

Migration reads the nested v2 location first and falls back to the
legacy root-level mirror, so both shapes yield the same TwinProfile.
Stored records are only ever written back in the v2 shape.
"""

import logging
from typing import Dict, Any, Optional

from .schema import TwinProfile, DEFAULT_INTROVERSION_LEVEL

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2

INTROVERSION_RANGE = (1, 10)

# v2 personality key -> default when neither location has it
_AURA_FIELDS = {
    "introversionLevel": DEFAULT_INTROVERSION_LEVEL,
    "goals": [],
    "vibeWords": [],
    "topicsLike": [],
    "topicsAvoid": [],
    "socialSpeed": "slow",
    "hardBoundaries": [],
    "greenFlags": [],
    "redFlags": [],
    "summary": "",
}


def is_current_schema(raw: Optional[Dict[str, Any]]) -> bool:
    """Return True if the record already has the nested v2 shape."""
    if not isinstance(raw, dict):
        return False
    return all(isinstance(raw.get(k), dict) for k in ("aura", "dating", "preferences"))


def _lookup(raw: Dict[str, Any], section: str, key: str, default: Any = None) -> Any:
    """Read ``raw[section][key]``, falling back to ``raw[key]`` then default."""
    nested = raw.get(section)
    if isinstance(nested, dict) and nested.get(key) is not None:
        return nested[key]
    if raw.get(key) is not None:
        return raw[key]
    return default


def migrate_profile(raw: Optional[Dict[str, Any]]) -> TwinProfile:
    """
    Build a TwinProfile from a stored profile record of any schema version.

    Args:
        raw: Profile record, either v2 (nested ``aura``/``dating``) or a
            legacy flat record. ``None`` yields an all-default profile.

    Returns:
        TwinProfile snapshot

    Note:
        Out-of-range introversion levels are logged and passed through
        unchanged; scoring treats them arithmetically.
    """
    raw = raw or {}
    if not is_current_schema(raw):
        logger.debug(f"Migrating legacy profile record {raw.get('id', '<no id>')}")

    values = {key: _lookup(raw, "aura", key, default) for key, default in _AURA_FIELDS.items()}

    display_name = _lookup(raw, "dating", "displayName", "User")

    level = values["introversionLevel"]
    low, high = INTROVERSION_RANGE
    if isinstance(level, (int, float)) and not low <= level <= high:
        logger.warning(
            f"introversionLevel {level} for {display_name!r} is outside "
            f"[{low}, {high}]; scoring will use it as-is"
        )

    return TwinProfile(
        display_name=display_name,
        goals=values["goals"],
        vibe_words=values["vibeWords"],
        topics_like=values["topicsLike"],
        topics_avoid=values["topicsAvoid"],
        social_speed=values["socialSpeed"],
        introversion_level=level,
        green_flags=values["greenFlags"],
        red_flags=values["redFlags"],
        hard_boundaries=values["hardBoundaries"],
        summary=values["summary"],
        user_id=raw.get("userId") or raw.get("id"),
    )


def to_storage_record(profile: TwinProfile) -> Dict[str, Any]:
    """
    Convert a TwinProfile to a v2 storage record.

    Only the nested shape is written; legacy root-level mirrors are dropped.
    """
    flat = profile.to_dict()
    aura = {key: flat[key] for key in _AURA_FIELDS}
    return {
        "schemaVersion": SCHEMA_VERSION,
        "userId": profile.user_id,
        "displayName": profile.display_name,
        "aura": aura,
        "dating": {"displayName": profile.display_name},
        "preferences": {},
    }
