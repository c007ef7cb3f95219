"""
Likes, matches and match messages.

The repository keeps all state in an injected key-value store rather than
in module-level collections, so each caller (app session, test, batch job)
owns its own data.

Key Design Decisions:
- A like is stored once per (from, to) pair; liking again is a no-op
- A match is keyed by the ordered uid pair, so it is created at most once
- Match scores come from the deterministic scorer
- Time is read from an injectable clock
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional, Callable, Tuple, Mapping

from ..profiles.schema import TwinProfile
from ..scoring.scorer import ScoringWeights, evaluate_pair

logger = logging.getLogger(__name__)

LIKES = "likes"
MATCHES = "matches"
MESSAGES = "messages"


class MatchingError(Exception):
    """Base class for matching repository errors."""


class UnknownProfileError(MatchingError, KeyError):
    """Raised when a uid has no known profile."""


class UnknownMatchError(MatchingError, KeyError):
    """Raised when a match id does not exist."""


class KeyValueStore(ABC):
    """Minimal namespaced key-value store used by the repository."""

    @abstractmethod
    def get(self, namespace: str, key: str) -> Optional[Any]:
        """Return the stored value, or None."""

    @abstractmethod
    def put(self, namespace: str, key: str, value: Any) -> None:
        """Insert or replace a value."""

    @abstractmethod
    def list(self, namespace: str) -> List[Any]:
        """All values in a namespace, in insertion order."""


class InMemoryStore(KeyValueStore):
    """Dictionary-backed store for demos and tests."""

    def __init__(self):
        self._data: Dict[str, Dict[str, Any]] = {}

    def get(self, namespace: str, key: str) -> Optional[Any]:
        return self._data.get(namespace, {}).get(key)

    def put(self, namespace: str, key: str, value: Any) -> None:
        self._data.setdefault(namespace, {})[key] = value

    def list(self, namespace: str) -> List[Any]:
        return list(self._data.get(namespace, {}).values())


@dataclass(frozen=True)
class MatchLike:
    from_uid: str
    to_uid: str
    created_at: float


@dataclass(frozen=True)
class MatchPair:
    """A mutual like between two users; user_a < user_b."""
    id: str
    user_a: str
    user_b: str
    created_at: float
    compatibility_score: Optional[int] = None

    def involves(self, uid: str) -> bool:
        return uid in (self.user_a, self.user_b)

    def other(self, uid: str) -> str:
        return self.user_b if uid == self.user_a else self.user_a

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MatchWithProfile:
    """One match plus the other user's profile, as the matches screen shows it."""
    match: MatchPair
    other_uid: str
    other: TwinProfile


@dataclass(frozen=True)
class MatchMessage:
    id: str
    match_id: str
    from_uid: str
    text: str
    created_at: float


@dataclass(frozen=True)
class LikeOutcome:
    """Result of a like: whether it created a match, and the match if any."""
    is_new_match: bool
    match: Optional[MatchPair] = None


def ordered_pair(uid_a: str, uid_b: str) -> Tuple[str, str]:
    """Return the two uids in lexicographic order."""
    return (uid_a, uid_b) if uid_a < uid_b else (uid_b, uid_a)


class MatchRepository:
    """
    Repository for discovery, likes, matches and match messages.

    Attributes:
        profiles: Known profiles keyed by uid
        store: Backing key-value store
        clock: Callable returning the current time in seconds
        weights: Scoring weights used for match scores and ranking
    """

    def __init__(
        self,
        profiles: Mapping[str, TwinProfile],
        store: Optional[KeyValueStore] = None,
        clock: Callable[[], float] = time.time,
        weights: Optional[ScoringWeights] = None
    ):
        self.profiles = dict(profiles)
        self.store = store if store is not None else InMemoryStore()
        self.clock = clock
        self.weights = weights
        logger.info(f"Initialized MatchRepository with {len(self.profiles)} profiles")

    def _profile(self, uid: str) -> TwinProfile:
        try:
            return self.profiles[uid]
        except KeyError:
            raise UnknownProfileError(f"No profile for uid {uid!r}") from None

    def _match(self, match_id: str) -> MatchPair:
        match = self.store.get(MATCHES, match_id)
        if match is None:
            raise UnknownMatchError(f"No match with id {match_id!r}")
        return match

    def discover(self, current_uid: str) -> List[Tuple[str, TwinProfile]]:
        """Every known profile except the caller's own."""
        return [(uid, p) for uid, p in self.profiles.items() if uid != current_uid]

    def rank_candidates(self, current_uid: str) -> List[Tuple[str, TwinProfile, int]]:
        """
        Discoverable profiles ordered by compatibility with the caller.

        Returns:
            (uid, profile, score) tuples, best first; ties ordered by uid
        """
        me = self._profile(current_uid)
        scored = [
            (uid, other, evaluate_pair(me, other, self.weights).score)
            for uid, other in self.discover(current_uid)
        ]
        scored.sort(key=lambda item: (-item[2], item[0]))
        return scored

    def like(self, from_uid: str, to_uid: str) -> LikeOutcome:
        """
        Record that ``from_uid`` likes ``to_uid``.

        Args:
            from_uid: User giving the like
            to_uid: User receiving the like

        Returns:
            LikeOutcome; ``is_new_match`` is True only for the like that
            completes a mutual pair

        Raises:
            ValueError: If a user likes themselves
            UnknownProfileError: If either uid is unknown
        """
        if from_uid == to_uid:
            raise ValueError("A user cannot like their own profile")
        profile_from = self._profile(from_uid)
        profile_to = self._profile(to_uid)

        like_key = f"{from_uid}->{to_uid}"
        if self.store.get(LIKES, like_key) is None:
            self.store.put(LIKES, like_key, MatchLike(from_uid, to_uid, self.clock()))

        if self.store.get(LIKES, f"{to_uid}->{from_uid}") is None:
            return LikeOutcome(is_new_match=False)

        user_a, user_b = ordered_pair(from_uid, to_uid)
        match_id = f"match_{user_a}_{user_b}"
        existing = self.store.get(MATCHES, match_id)
        if existing is not None:
            return LikeOutcome(is_new_match=False, match=existing)

        if user_a == from_uid:
            pair = evaluate_pair(profile_from, profile_to, self.weights)
        else:
            pair = evaluate_pair(profile_to, profile_from, self.weights)
        match = MatchPair(
            id=match_id,
            user_a=user_a,
            user_b=user_b,
            created_at=self.clock(),
            compatibility_score=pair.score,
        )
        self.store.put(MATCHES, match_id, match)
        logger.info(f"New match {match_id} (score={pair.score})")
        return LikeOutcome(is_new_match=True, match=match)

    def matches_for(self, uid: str) -> List[MatchWithProfile]:
        """All matches involving ``uid``, each with the other user's profile."""
        result = []
        for match in self.store.list(MATCHES):
            if not match.involves(uid):
                continue
            other_uid = match.other(uid)
            other = self.profiles.get(other_uid)
            if other is None:
                logger.warning(f"Match {match.id} refers to unknown profile {other_uid!r}")
                continue
            result.append(MatchWithProfile(match=match, other_uid=other_uid, other=other))
        return result

    def send_message(self, match_id: str, from_uid: str, text: str) -> MatchMessage:
        """
        Append a chat message to a match.

        Raises:
            UnknownMatchError: If the match does not exist
            ValueError: If the sender is not part of the match
        """
        match = self._match(match_id)
        if not match.involves(from_uid):
            raise ValueError(f"{from_uid!r} is not part of match {match_id!r}")

        history = list(self.store.get(MESSAGES, match_id) or [])
        message = MatchMessage(
            id=f"msg_{match_id}_{len(history) + 1}",
            match_id=match_id,
            from_uid=from_uid,
            text=text,
            created_at=self.clock(),
        )
        history.append(message)
        self.store.put(MESSAGES, match_id, history)
        return message

    def messages(self, match_id: str) -> List[MatchMessage]:
        """Messages of a match, oldest first. Unknown matches have none."""
        return list(self.store.get(MESSAGES, match_id) or [])
