"""Narrative module for match reasons, openers and twin intros."""

from .builder import (
    compose_narrative,
    build_narrative,
    build_aura_match_result,
    build_twin_intro,
    first_or,
)

__all__ = [
    "compose_narrative",
    "build_narrative",
    "build_aura_match_result",
    "build_twin_intro",
    "first_or",
]
