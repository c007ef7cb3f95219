"""
Compatibility scoring for twin pairs.

This module implements the deterministic (non-AI) compatibility heuristic.
Scoring is additive, starting from a neutral baseline:

Scoring Formula:
    score = baseline
          + w_goal  * goal_overlap
          + w_vibe  * vibe_overlap
          + w_like  * like_overlap
          - w_conflict * [A likes what B avoids]
          - w_conflict * [B likes what A avoids]
          - w_intro * |introversion_A - introversion_B|
          - speed penalty ({slow, fast}: w_speed_clash, other mismatch: w_speed_mismatch)
          + w_green * green_resonance
          - w_red   * red_resonance
    final = clamp(round(score), 0, 100)

Label thresholds:
    score >= high_threshold   -> "high"
    score >= medium_threshold -> "medium"
    otherwise                 -> "low"

Topic conflicts are penalized once per direction, while flag resonance sums
both directions into a single term before weighting.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Any, Optional, Union

from ..feature_engineering.pairwise_features import PairwiseFeatures, compute_pairwise_features
from ..profiles.schema import TwinProfile, MatchResult, CompatibilityLabel

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass
class ScoringWeights:
    """
    Configuration for compatibility scoring.

    Defaults reproduce the production heuristic exactly; override them
    through the ``scoring`` section of the config for experiments.
    """
    baseline: float = 50
    goal: float = 8
    vibe: float = 6
    like: float = 4
    topic_conflict: float = 10
    introversion: float = 2
    speed_clash: float = 8
    speed_mismatch: float = 2
    green_flag: float = 3
    red_flag: float = 5

    high_threshold: int = 70
    medium_threshold: int = 40

    def validate(self) -> None:
        """Validate configuration values."""
        for name, value in self.to_dict().items():
            if name in ("baseline", "high_threshold", "medium_threshold"):
                continue
            if value < 0:
                raise ValueError(f"{name} weight must be non-negative, got {value}")
        if not MIN_SCORE <= self.medium_threshold <= self.high_threshold <= MAX_SCORE:
            raise ValueError(
                f"Thresholds must satisfy {MIN_SCORE} <= medium <= high <= {MAX_SCORE}, "
                f"got medium={self.medium_threshold}, high={self.high_threshold}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ScoringWeights":
        """Create from dictionary."""
        return cls(**d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ScoringWeights":
        """Create from main config dictionary, ignoring unknown keys."""
        scoring_config = config.get("scoring", {}) or {}
        known = set(cls.__dataclass_fields__)
        unknown = set(scoring_config) - known
        if unknown:
            logger.warning(f"Ignoring unknown scoring keys: {sorted(unknown)}")
        weights = cls(**{k: v for k, v in scoring_config.items() if k in known})
        weights.validate()
        return weights


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class PairScore:
    """Numeric scoring outcome for one ordered pair."""
    features: PairwiseFeatures
    score: int
    label: CompatibilityLabel


def _round_half_up(value: Union[int, float]) -> int:
    if isinstance(value, int):
        return value
    return int(math.floor(value + 0.5))


def normalize_score(raw_score: Union[int, float]) -> int:
    """
    Clamp to [0, 100] and round to the nearest integer (halves up).

    Infinite raw scores clamp like any other out-of-range value; NaN maps
    to the minimum score.
    """
    if isinstance(raw_score, float) and math.isnan(raw_score):
        return MIN_SCORE
    return _round_half_up(min(MAX_SCORE, max(MIN_SCORE, raw_score)))


def label_for_score(score: int, weights: Optional[ScoringWeights] = None) -> CompatibilityLabel:
    """Map a normalized score to its compatibility label."""
    weights = weights or DEFAULT_WEIGHTS
    if score >= weights.high_threshold:
        return CompatibilityLabel.HIGH
    if score >= weights.medium_threshold:
        return CompatibilityLabel.MEDIUM
    return CompatibilityLabel.LOW


def compute_raw_score(features: PairwiseFeatures, weights: Optional[ScoringWeights] = None) -> float:
    """
    Apply the additive heuristic to pairwise features.

    Args:
        features: Pairwise features of the two twins
        weights: Scoring weights (default: production weights)

    Returns:
        Unrounded, unclamped score
    """
    w = weights or DEFAULT_WEIGHTS
    score = w.baseline

    score += w.goal * features.goal_overlap
    score += w.vibe * features.vibe_overlap
    score += w.like * features.like_overlap

    if features.a_likes_b_avoids:
        score -= w.topic_conflict
    if features.b_likes_a_avoids:
        score -= w.topic_conflict

    score -= w.introversion * features.intro_diff

    if features.speed_mismatch:
        score -= w.speed_clash if features.slow_fast_clash else w.speed_mismatch

    score += w.green_flag * features.green_resonance
    score -= w.red_flag * features.red_resonance

    return score


def evaluate_pair(
    twin_a: TwinProfile,
    twin_b: TwinProfile,
    weights: Optional[ScoringWeights] = None
) -> PairScore:
    """
    Compute features, normalized score and label for two twins.

    This is the numeric core shared by the scorer, the narrative builder
    and the transcript simulator.
    """
    features = compute_pairwise_features(twin_a, twin_b)
    value = normalize_score(compute_raw_score(features, weights))
    return PairScore(features=features, score=value, label=label_for_score(value, weights))


def score(
    twin_a: TwinProfile,
    twin_b: TwinProfile,
    weights: Optional[ScoringWeights] = None
) -> MatchResult:
    """
    Compute the full compatibility result between two twins.

    Pure and deterministic: no I/O, no randomness, inputs are not mutated.
    Missing list fields count as empty and only reduce contributions.

    Args:
        twin_a: Twin for user A
        twin_b: Twin for user B
        weights: Scoring weights (default: production weights)

    Returns:
        MatchResult with score, label, reasons, risks, openers and summaries
    """
    # Import here to avoid circular imports
    from ..narrative.builder import compose_narrative

    pair = evaluate_pair(twin_a, twin_b, weights)
    narrative = compose_narrative(twin_a, twin_b, pair)

    return MatchResult(
        compatibility_score=pair.score,
        compatibility_label=pair.label,
        match_reasons=narrative.reasons,
        risk_flags=narrative.risks,
        suggested_opening_for_user_a=narrative.opener_a,
        suggested_opening_for_user_b=narrative.opener_b,
        aura_to_user_summary_a=narrative.summary_a,
        aura_to_user_summary_b=narrative.summary_b,
    )


compute_match_result = score
