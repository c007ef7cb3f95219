"""
Profile module for twin personas.

This module provides the profile snapshot consumed by the matching core,
the value objects it returns, and migration of stored profile records.
"""

from .schema import (
    TwinProfile,
    SocialSpeed,
    CompatibilityLabel,
    Speaker,
    MatchResult,
    Narrative,
    AuraMatchResult,
    TwinIntroResult,
    TwinChatMessage,
    TranscriptResult,
)
from .migration import migrate_profile, is_current_schema, to_storage_record, SCHEMA_VERSION

__all__ = [
    "TwinProfile",
    "SocialSpeed",
    "CompatibilityLabel",
    "Speaker",
    "MatchResult",
    "Narrative",
    "AuraMatchResult",
    "TwinIntroResult",
    "TwinChatMessage",
    "TranscriptResult",
    "migrate_profile",
    "is_current_schema",
    "to_storage_record",
    "SCHEMA_VERSION",
]
