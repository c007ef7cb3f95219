"""
Batch runner for the twin compatibility scorer.

This is the single entrypoint for scoring a pool of twin profiles offline.

Usage:
    python -m aura_twin.run --config configs/config.yaml

The runner performs the following steps:
1. Load and validate configuration
2. Load the profile pool (demo twins if the file is missing)
3. Generate twin pairs
4. Score every pair and build match narratives
5. Simulate scripted twin transcripts (optional)
6. Evaluate the score distribution and sanity checks
7. Save all artifacts
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Any, List, Optional

import pandas as pd
import yaml

from . import __version__
from .profiles import TwinProfile

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, str(log_level).upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run_pipeline(
    config_path: str,
    output_dir: Optional[str] = None,
    include_transcripts: Optional[bool] = None,
    max_turns: Optional[int] = None
) -> Dict[str, Any]:
    """
    Score every pair in a profile pool and save the results.

    Args:
        config_path: Path to the configuration YAML file
        output_dir: If provided, write artifacts here instead of config default
        include_transcripts: Override ``transcript.enabled`` from the config
        max_turns: Override ``transcript.max_turns`` from the config

    Returns:
        Dictionary with run results and paths to artifacts
    """
    from .configs import load_config, validate_config, get_config_value
    from .data_loading import load_profiles
    from .pair_generation import generate_pairs_for_pool
    from .scoring import ScoringWeights, evaluate_pair
    from .narrative import compose_narrative
    from .transcript import simulate_transcript
    from .evaluation import check_symmetry, create_evaluation_report

    # =========================================================================
    # 1. Load and validate configuration
    # =========================================================================
    logger.info("=" * 60)
    logger.info("AURA TWIN COMPATIBILITY RUN")
    logger.info("=" * 60)

    config = load_config(config_path)
    for issue in validate_config(config):
        logger.warning(f"Config issue: {issue}")

    setup_logging(get_config_value(config, "global.log_level", "INFO"))
    weights = ScoringWeights.from_config(config)

    if include_transcripts is None:
        include_transcripts = bool(get_config_value(config, "transcript.enabled", True))
    if max_turns is None:
        max_turns = get_config_value(config, "transcript.max_turns", 6)

    out = Path(output_dir or get_config_value(config, "global.output_dir", "artifacts"))
    out.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # 2. Load profiles
    # =========================================================================
    logger.info("STEP 1: Loading Profiles")

    profiles_path = get_config_value(config, "data.profiles.path", "data/demo_profiles.yaml")
    try:
        profiles = load_profiles(profiles_path)
        profile_source = str(profiles_path)
    except FileNotFoundError as e:
        logger.error(f"Profiles not found: {e}")
        logger.info("Using built-in demo twins instead...")
        profiles = _create_demo_profiles()
        profile_source = "builtin_demo"

    # =========================================================================
    # 3. Generate pairs
    # =========================================================================
    logger.info("STEP 2: Generating Pairs")
    indices_a, indices_b = generate_pairs_for_pool(len(profiles), config)

    # =========================================================================
    # 4. Score pairs
    # =========================================================================
    logger.info("STEP 3: Scoring Pairs")

    rows = []
    transcripts = []
    for i, j in zip(indices_a, indices_b):
        twin_a, twin_b = profiles[i], profiles[j]
        pair = evaluate_pair(twin_a, twin_b, weights)
        narrative = compose_narrative(twin_a, twin_b, pair)
        rows.append({
            "twin_a": twin_a.display_name,
            "twin_b": twin_b.display_name,
            "score": pair.score,
            "label": pair.label.value,
            "shared_traits": pair.features.shared_trait_count,
            "reasons": " | ".join(narrative.reasons),
            "risks": " | ".join(narrative.risks),
        })
        if include_transcripts:
            chat = simulate_transcript(twin_a, twin_b, max_turns=max_turns, weights=weights)
            transcripts.append({
                "twin_a": twin_a.display_name,
                "twin_b": twin_b.display_name,
                **chat.to_dict(),
            })

    df_scores = pd.DataFrame(
        rows,
        columns=["twin_a", "twin_b", "score", "label", "shared_traits", "reasons", "risks"]
    )
    logger.info(f"Scored {len(df_scores)} pairs")

    # =========================================================================
    # 5. Evaluate
    # =========================================================================
    logger.info("STEP 4: Evaluation")

    artifacts = {}
    scores_path = out / "pair_scores.csv"
    df_scores.to_csv(scores_path, index=False)
    artifacts["pair_scores"] = str(scores_path)

    if len(df_scores) > 0:
        symmetry = check_symmetry(profiles, indices_a, indices_b, weights)
        report = create_evaluation_report(
            scorer_name="additive_heuristic",
            scores=df_scores["score"].to_numpy(),
            labels=df_scores["label"].tolist(),
            similarity_scores=df_scores["shared_traits"].to_numpy(),
            symmetry_check=symmetry,
            weights=weights,
            quantiles=get_config_value(config, "evaluation.quantiles", [0.1, 0.25, 0.5, 0.75, 0.9]),
            monotonicity_threshold=get_config_value(config, "evaluation.monotonicity_threshold", 0.5),
        )
        top = df_scores.sort_values("score", ascending=False, kind="stable").head(5)
        report.additional_metrics["top_pairs"] = [
            {"twin_a": row.twin_a, "twin_b": row.twin_b, "score": int(row.score)}
            for row in top.itertuples(index=False)
        ]
        report_path = out / "evaluation_report.json"
        report.save(str(report_path))
        artifacts["evaluation_report"] = str(report_path)
        logger.info("\n" + report.summary())
    else:
        logger.warning("Fewer than two profiles; skipping evaluation")

    if include_transcripts:
        transcripts_path = out / "transcripts.json"
        with open(transcripts_path, "w", encoding="utf-8") as f:
            json.dump(transcripts, f, indent=2, ensure_ascii=False)
        artifacts["transcripts"] = str(transcripts_path)

    # =========================================================================
    # 6. Save metadata
    # =========================================================================
    metadata = {
        "version": __version__,
        "run_timestamp": datetime.now().isoformat(),
        "config_path": str(config_path),
        "profile_source": profile_source,
        "n_profiles": len(profiles),
        "n_pairs": len(df_scores),
        "weights": weights.to_dict(),
    }
    metadata_path = out / "metadata.json"
    with open(metadata_path, "w") as f:
        json.dump(metadata, f, indent=2)
    artifacts["metadata"] = str(metadata_path)

    config_used_path = out / "config_used.yaml"
    with open(config_used_path, "w") as f:
        yaml.safe_dump(config, f, sort_keys=False)
    artifacts["config_used"] = str(config_used_path)

    logger.info("RUN COMPLETE")
    for name, path in artifacts.items():
        logger.info(f"  {name}: {path}")

    return {
        "success": True,
        "output_dir": str(out),
        "artifacts": artifacts,
        "metadata": metadata
    }


def _create_demo_profiles() -> List[TwinProfile]:
    """Built-in demo twins for when the profiles file is unavailable."""
    profiles = [
        TwinProfile(
            display_name="Lina",
            introversion_level=6,
            goals=["friends", "practice_talking"],
            vibe_words=["thoughtful", "kind", "curious"],
            topics_like=["art", "music", "late-night walks"],
            topics_avoid=["politics"],
            social_speed="slow",
            green_flags=["honesty", "emotional maturity"],
            red_flags=["ghosting", "mocking others"],
            user_id="demo_lina",
        ),
        TwinProfile(
            display_name="Samir",
            introversion_level=4,
            goals=["friends", "serious_relationship"],
            vibe_words=["warm", "protective", "sarcastic"],
            topics_like=["football", "anime", "coffee shops"],
            topics_avoid=["unnecessary drama"],
            social_speed="normal",
            green_flags=["clear communication", "effort"],
            red_flags=["games", "ego fights"],
            user_id="demo_samir",
        ),
        TwinProfile(
            display_name="Aya",
            introversion_level=8,
            goals=["practice_talking"],
            vibe_words=["shy", "observant", "sweet"],
            topics_like=["books", "cozy games", "cats"],
            topics_avoid=["loud parties"],
            social_speed="slow",
            green_flags=["patience", "gentle teasing"],
            red_flags=["pushiness"],
            user_id="demo_aya",
        ),
    ]
    logger.info(f"Created {len(profiles)} demo profiles")
    return profiles


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the batch runner."""
    parser = argparse.ArgumentParser(
        description="Score every pair in a pool of twin profiles"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/config.yaml",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Output directory for artifacts (overrides config)"
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=None,
        help="Transcript turns per pair (overrides config)"
    )
    parser.add_argument(
        "--no-transcripts",
        action="store_true",
        help="Skip transcript simulation"
    )

    args = parser.parse_args(argv)

    try:
        result = run_pipeline(
            args.config,
            output_dir=args.output_dir,
            include_transcripts=False if args.no_transcripts else None,
            max_turns=args.max_turns,
        )
        if result["success"]:
            logger.info("Run completed successfully!")
            return 0
        logger.error("Run failed!")
        return 1
    except Exception as e:
        logger.exception(f"Run failed with error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
