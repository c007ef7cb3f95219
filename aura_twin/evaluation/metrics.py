"""
Evaluation metrics for the compatibility scorer.

There are no ground-truth compatibility labels, so evaluation checks that
the heuristic behaves as designed over a pool of twins:
1. Score distribution analysis
2. Label distribution and label/threshold consistency
3. Symmetry: score(A, B) == score(B, A)
4. Monotonicity: pairs with more shared traits should score higher

This module DOES NOT claim real-world predictive accuracy.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional, Sequence
import json

import numpy as np
from scipy.stats import spearmanr

from ..profiles.schema import TwinProfile, CompatibilityLabel
from ..scoring.scorer import ScoringWeights, evaluate_pair, label_for_score

logger = logging.getLogger(__name__)

DEFAULT_QUANTILES = (0.1, 0.25, 0.5, 0.75, 0.9)
MAX_PAIRWISE_COMPARISONS = 1000


def _finite_or_none(value: float) -> Optional[float]:
    return None if value is None or math.isnan(value) else float(value)


@dataclass
class ScoreDistributionStats:
    """Statistics about score distribution."""
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: Dict[str, float]  # e.g., {"p10": 40.0, "p50": 55.0, "p90": 72.0}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "std": float(self.std),
            "min": float(self.min),
            "max": float(self.max),
            "quantiles": {k: float(v) for k, v in self.quantiles.items()}
        }


@dataclass
class SymmetryCheck:
    """Results of the symmetry check."""
    n_pairs: int
    n_asymmetric: int
    max_abs_difference: int

    @property
    def is_symmetric(self) -> bool:
        return self.n_asymmetric == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_pairs": int(self.n_pairs),
            "n_asymmetric": int(self.n_asymmetric),
            "max_abs_difference": int(self.max_abs_difference),
            "is_symmetric": self.is_symmetric
        }


@dataclass
class LabelConsistencyCheck:
    """Results of checking labels against the score thresholds."""
    n_checked: int
    n_violations: int

    @property
    def is_consistent(self) -> bool:
        return self.n_violations == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_checked": int(self.n_checked),
            "n_violations": int(self.n_violations),
            "is_consistent": self.is_consistent
        }


@dataclass
class MonotonicityCheck:
    """Results of monotonicity sanity check."""
    correlation_with_similarity: Optional[float]
    is_monotonic: bool
    n_violations: int
    violation_rate: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "correlation_with_similarity": _finite_or_none(self.correlation_with_similarity),
            "is_monotonic": bool(self.is_monotonic),
            "n_violations": int(self.n_violations),
            "violation_rate": float(self.violation_rate)
        }


@dataclass
class EvaluationReport:
    """
    Complete evaluation report for a scorer run.

    Contains distribution statistics and sanity checks. This report
    documents scorer behavior WITHOUT claiming predictive validity.
    """
    scorer_name: str
    distribution_stats: ScoreDistributionStats
    label_distribution: Dict[str, int] = field(default_factory=dict)
    symmetry_check: Optional[SymmetryCheck] = None
    label_consistency: Optional[LabelConsistencyCheck] = None
    monotonicity_check: Optional[MonotonicityCheck] = None
    additional_metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "scorer_name": self.scorer_name,
            "distribution_stats": self.distribution_stats.to_dict(),
            "label_distribution": dict(self.label_distribution),
            "additional_metrics": self.additional_metrics
        }
        if self.symmetry_check:
            result["symmetry_check"] = self.symmetry_check.to_dict()
        if self.label_consistency:
            result["label_consistency"] = self.label_consistency.to_dict()
        if self.monotonicity_check:
            result["monotonicity_check"] = self.monotonicity_check.to_dict()
        return result

    def save(self, filepath: str) -> None:
        """Save report to JSON file."""
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved evaluation report to {filepath}")

    def summary(self) -> str:
        """Generate text summary of the report."""
        stats = self.distribution_stats
        lines = [
            f"Evaluation Report: {self.scorer_name}",
            "=" * 50,
            "",
            f"Score Distribution ({stats.count} pairs):",
            f"  Mean: {stats.mean:.2f}",
            f"  Std:  {stats.std:.2f}",
            f"  Min:  {stats.min:.0f}",
            f"  Max:  {stats.max:.0f}",
        ]

        for q_name, q_value in stats.quantiles.items():
            lines.append(f"  {q_name}: {q_value:.2f}")

        if self.label_distribution:
            lines.extend(["", "Labels:"])
            for label, count in self.label_distribution.items():
                lines.append(f"  {label}: {count}")

        if self.symmetry_check:
            lines.extend([
                "",
                "Symmetry Check:",
                f"  Is symmetric: {self.symmetry_check.is_symmetric}",
                f"  Asymmetric pairs: {self.symmetry_check.n_asymmetric}/{self.symmetry_check.n_pairs}",
            ])

        if self.label_consistency:
            lines.extend([
                "",
                "Label Consistency:",
                f"  Is consistent: {self.label_consistency.is_consistent}",
                f"  Violations: {self.label_consistency.n_violations}",
            ])

        if self.monotonicity_check:
            corr = self.monotonicity_check.correlation_with_similarity
            corr_text = "n/a" if _finite_or_none(corr) is None else f"{corr:.4f}"
            lines.extend([
                "",
                "Monotonicity Check:",
                f"  Correlation with shared traits: {corr_text}",
                f"  Is monotonic: {self.monotonicity_check.is_monotonic}",
                f"  Violation rate: {self.monotonicity_check.violation_rate:.2%}",
            ])

        return "\n".join(lines)


def compute_score_distribution_stats(
    scores: np.ndarray,
    quantiles: Sequence[float] = DEFAULT_QUANTILES
) -> ScoreDistributionStats:
    """
    Compute distribution statistics for scores.

    Args:
        scores: Array of compatibility scores
        quantiles: Quantile values to compute (default: p10, p25, p50, p75, p90)

    Returns:
        ScoreDistributionStats instance

    Raises:
        ValueError: If there are no scores
    """
    scores = np.asarray(scores, dtype=float)
    if scores.size == 0:
        raise ValueError("Cannot compute distribution statistics of zero scores")

    quantile_dict = {
        f"p{int(round(q * 100))}": float(np.percentile(scores, q * 100))
        for q in quantiles
    }

    return ScoreDistributionStats(
        count=int(scores.size),
        mean=float(np.mean(scores)),
        std=float(np.std(scores)),
        min=float(np.min(scores)),
        max=float(np.max(scores)),
        quantiles=quantile_dict
    )


def compute_label_distribution(labels: Sequence[Any]) -> Dict[str, int]:
    """Count labels, always reporting all three tiers (low, medium, high)."""
    counts = {label.value: 0 for label in (
        CompatibilityLabel.LOW, CompatibilityLabel.MEDIUM, CompatibilityLabel.HIGH
    )}
    for label in labels:
        key = label.value if isinstance(label, CompatibilityLabel) else str(label)
        counts[key] = counts.get(key, 0) + 1
    return counts


def check_symmetry(
    profiles: Sequence[TwinProfile],
    indices_a: np.ndarray,
    indices_b: np.ndarray,
    weights: Optional[ScoringWeights] = None
) -> SymmetryCheck:
    """
    Check that score(A, B) == score(B, A) for every given pair.

    Args:
        profiles: Profile pool
        indices_a: First twin index per pair
        indices_b: Second twin index per pair
        weights: Scoring weights

    Returns:
        SymmetryCheck instance
    """
    n_asymmetric = 0
    max_diff = 0
    for i, j in zip(indices_a, indices_b):
        forward = evaluate_pair(profiles[i], profiles[j], weights).score
        backward = evaluate_pair(profiles[j], profiles[i], weights).score
        diff = abs(forward - backward)
        if diff:
            n_asymmetric += 1
            max_diff = max(max_diff, diff)

    if n_asymmetric:
        logger.warning(f"{n_asymmetric} of {len(indices_a)} pairs scored asymmetrically")
    return SymmetryCheck(n_pairs=len(indices_a), n_asymmetric=n_asymmetric, max_abs_difference=max_diff)


def check_label_consistency(
    scores: Sequence[int],
    labels: Sequence[Any],
    weights: Optional[ScoringWeights] = None
) -> LabelConsistencyCheck:
    """Check every label against the thresholds applied to its score."""
    if len(scores) != len(labels):
        raise ValueError(f"Got {len(scores)} scores but {len(labels)} labels")

    violations = 0
    for value, label in zip(scores, labels):
        expected = label_for_score(int(value), weights)
        if CompatibilityLabel(label) != expected:
            violations += 1
    return LabelConsistencyCheck(n_checked=len(scores), n_violations=violations)


def sanity_check_monotonicity(
    predicted_scores: np.ndarray,
    similarity_scores: np.ndarray,
    threshold: float = 0.5
) -> MonotonicityCheck:
    """
    Check if scores are monotonic with the number of shared traits.

    More shared goals, vibes and topics should generally mean a higher
    score. Penalty terms make this a tendency, not a guarantee.

    Args:
        predicted_scores: Compatibility scores
        similarity_scores: Shared-trait counts per pair
        threshold: Correlation threshold for "is_monotonic" flag

    Returns:
        MonotonicityCheck instance
    """
    predicted_scores = np.asarray(predicted_scores, dtype=float)
    similarity_scores = np.asarray(similarity_scores, dtype=float)

    # Rank correlation is undefined for constant input
    if (len(predicted_scores) < 2 or np.ptp(predicted_scores) == 0
            or np.ptp(similarity_scores) == 0):
        correlation = float("nan")
    else:
        correlation, _ = spearmanr(similarity_scores, predicted_scores)
        correlation = float(correlation)

    # Count discordant pairs over a bounded prefix
    pred = predicted_scores[:MAX_PAIRWISE_COMPARISONS]
    sim = similarity_scores[:MAX_PAIRWISE_COMPARISONS]
    upper = np.triu(np.ones((len(pred), len(pred)), dtype=bool), k=1)
    discordant = (np.subtract.outer(sim, sim) * np.subtract.outer(pred, pred)) < 0
    n_violations = int(np.sum(discordant & upper))
    n_comparisons = int(np.sum(upper))
    violation_rate = n_violations / n_comparisons if n_comparisons > 0 else 0.0

    return MonotonicityCheck(
        correlation_with_similarity=correlation,
        is_monotonic=not math.isnan(correlation) and correlation >= threshold,
        n_violations=n_violations,
        violation_rate=violation_rate
    )


def create_evaluation_report(
    scorer_name: str,
    scores: np.ndarray,
    labels: Optional[Sequence[Any]] = None,
    similarity_scores: Optional[np.ndarray] = None,
    symmetry_check: Optional[SymmetryCheck] = None,
    weights: Optional[ScoringWeights] = None,
    quantiles: Sequence[float] = DEFAULT_QUANTILES,
    monotonicity_threshold: float = 0.5
) -> EvaluationReport:
    """
    Create a complete evaluation report.

    Args:
        scorer_name: Name of the scorer configuration
        scores: Compatibility scores
        labels: Labels for each score (for label distribution and consistency)
        similarity_scores: Shared-trait counts (for monotonicity check)
        symmetry_check: Precomputed symmetry check, if any
        weights: Scoring weights the labels were derived with
        quantiles: Quantiles to compute
        monotonicity_threshold: Correlation needed to call scores monotonic

    Returns:
        EvaluationReport instance
    """
    dist_stats = compute_score_distribution_stats(scores, quantiles)

    label_distribution = {}
    consistency = None
    if labels is not None:
        label_distribution = compute_label_distribution(labels)
        consistency = check_label_consistency(list(scores), list(labels), weights)

    monotonicity = None
    if similarity_scores is not None:
        monotonicity = sanity_check_monotonicity(scores, similarity_scores, monotonicity_threshold)

    return EvaluationReport(
        scorer_name=scorer_name,
        distribution_stats=dist_stats,
        label_distribution=label_distribution,
        symmetry_check=symmetry_check,
        label_consistency=consistency,
        monotonicity_check=monotonicity
    )
