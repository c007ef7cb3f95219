"""Evaluation module for compatibility scorer analysis."""

from .metrics import (
    compute_score_distribution_stats,
    compute_label_distribution,
    check_symmetry,
    check_label_consistency,
    sanity_check_monotonicity,
    EvaluationReport,
    create_evaluation_report
)

__all__ = [
    "compute_score_distribution_stats",
    "compute_label_distribution",
    "check_symmetry",
    "check_label_consistency",
    "sanity_check_monotonicity",
    "EvaluationReport",
    "create_evaluation_report"
]
