"""
Pairwise feature engineering for twin compatibility.

This module computes features that describe the relationship between
two twins (Twin A and Twin B), rather than either twin alone.

Pairwise Feature Types:
- Overlap counts: |A ∩ B| over normalized sets (shared goals, vibes, topics)
- Conflicts: A likes what B avoids, and the reverse direction
- Flag resonance: one twin's green/red flags found in the other's vibe words
- Energy gaps: introversion difference and social-speed pairing

Overlaps are computed on lower-cased sets built once per list, so every
count is order-independent and symmetric in A and B. Goals are the one
exception to case folding: they are short identifiers matched exactly.
"""

from dataclasses import dataclass, asdict
from typing import Iterable, FrozenSet, Tuple, Dict, Any

from ..profiles.schema import TwinProfile


def normalized_set(items: Iterable[str]) -> FrozenSet[str]:
    """Lower-cased set of the given strings."""
    return frozenset(str(item).lower() for item in items or ())


def overlap_count(a: Iterable[str], b: Iterable[str], case_sensitive: bool = False) -> int:
    """Number of distinct values present in both lists."""
    if case_sensitive:
        return len(frozenset(a or ()) & frozenset(b or ()))
    return len(normalized_set(a) & normalized_set(b))


def has_intersection(a: Iterable[str], b: Iterable[str]) -> bool:
    """True if the lists share at least one value, ignoring case."""
    return not normalized_set(a).isdisjoint(normalized_set(b))


def shared_items(a: Iterable[str], b: Iterable[str]) -> Tuple[str, ...]:
    """
    Items of ``a`` that also appear in ``b``, ignoring case.

    Keeps A's order and original casing, each value once.
    """
    lookup = normalized_set(b)
    seen = set()
    result = []
    for item in a or ():
        key = str(item).lower()
        if key in lookup and key not in seen:
            seen.add(key)
            result.append(item)
    return tuple(result)


@dataclass(frozen=True)
class PairwiseFeatures:
    """
    Every overlap and gap between two twins that scoring and narrative use.

    Attributes:
        goal_overlap: Shared goals (exact match)
        vibe_overlap: Shared vibe words
        like_overlap: Shared liked topics
        shared_topics: The shared liked topics, in A's order
        a_likes_b_avoids: A enjoys a topic B avoids
        b_likes_a_avoids: B enjoys a topic A avoids
        intro_diff: |introversion A - introversion B|
        speed_a: A's social speed
        speed_b: B's social speed
        green_resonance: A's green flags in B's vibes plus B's in A's
        red_resonance: A's red flags in B's vibes plus B's in A's
    """
    goal_overlap: int
    vibe_overlap: int
    like_overlap: int
    shared_topics: Tuple[str, ...]
    a_likes_b_avoids: bool
    b_likes_a_avoids: bool
    intro_diff: float
    speed_a: str
    speed_b: str
    green_resonance: int
    red_resonance: int

    @property
    def topic_conflict(self) -> bool:
        """Either twin likes a topic the other avoids."""
        return self.a_likes_b_avoids or self.b_likes_a_avoids

    @property
    def speed_mismatch(self) -> bool:
        return self.speed_a != self.speed_b

    @property
    def slow_fast_clash(self) -> bool:
        """The pair is exactly {slow, fast}."""
        return {self.speed_a, self.speed_b} == {"slow", "fast"}

    @property
    def shared_trait_count(self) -> int:
        """Sum of positive overlaps; a rough similarity measure."""
        return self.goal_overlap + self.vibe_overlap + self.like_overlap + self.green_resonance

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["shared_topics"] = list(self.shared_topics)
        return result


def compute_pairwise_features(twin_a: TwinProfile, twin_b: TwinProfile) -> PairwiseFeatures:
    """
    Compute pairwise features for two twins.

    Args:
        twin_a: First twin
        twin_b: Second twin

    Returns:
        PairwiseFeatures instance
    """
    vibes_a = normalized_set(twin_a.vibe_words)
    vibes_b = normalized_set(twin_b.vibe_words)

    return PairwiseFeatures(
        goal_overlap=overlap_count(twin_a.goals, twin_b.goals, case_sensitive=True),
        vibe_overlap=len(vibes_a & vibes_b),
        like_overlap=overlap_count(twin_a.topics_like, twin_b.topics_like),
        shared_topics=shared_items(twin_a.topics_like, twin_b.topics_like),
        a_likes_b_avoids=has_intersection(twin_a.topics_like, twin_b.topics_avoid),
        b_likes_a_avoids=has_intersection(twin_b.topics_like, twin_a.topics_avoid),
        intro_diff=abs(twin_a.introversion_level - twin_b.introversion_level),
        speed_a=twin_a.speed,
        speed_b=twin_b.speed,
        green_resonance=(
            len(normalized_set(twin_a.green_flags) & vibes_b)
            + len(normalized_set(twin_b.green_flags) & vibes_a)
        ),
        red_resonance=(
            len(normalized_set(twin_a.red_flags) & vibes_b)
            + len(normalized_set(twin_b.red_flags) & vibes_a)
        ),
    )
