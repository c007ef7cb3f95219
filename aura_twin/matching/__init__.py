"""Matching module for likes, matches and match messages."""

from .repository import (
    MatchRepository,
    KeyValueStore,
    InMemoryStore,
    MatchLike,
    MatchPair,
    MatchWithProfile,
    MatchMessage,
    LikeOutcome,
    MatchingError,
    UnknownProfileError,
    UnknownMatchError,
    ordered_pair,
)

__all__ = [
    "MatchRepository",
    "KeyValueStore",
    "InMemoryStore",
    "MatchLike",
    "MatchPair",
    "MatchWithProfile",
    "MatchMessage",
    "LikeOutcome",
    "MatchingError",
    "UnknownProfileError",
    "UnknownMatchError",
    "ordered_pair",
]
