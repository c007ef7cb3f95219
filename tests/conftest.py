"""Shared fixtures for the aura_twin test suite."""

from pathlib import Path

import pytest

from aura_twin.profiles import TwinProfile

PROJECT_ROOT = Path(__file__).parent.parent


@pytest.fixture
def calm_twin() -> TwinProfile:
    """Small slow-paced twin used by most scenarios."""
    return TwinProfile(
        display_name="Lina",
        goals=["friends"],
        vibe_words=["calm"],
        topics_like=["music"],
        topics_avoid=[],
        social_speed="slow",
        introversion_level=5,
        user_id="lina",
    )


@pytest.fixture
def calm_twin_copy(calm_twin) -> TwinProfile:
    """Twin identical to ``calm_twin`` apart from name and uid."""
    return TwinProfile(
        display_name="Maya",
        goals=calm_twin.goals,
        vibe_words=calm_twin.vibe_words,
        topics_like=calm_twin.topics_like,
        topics_avoid=calm_twin.topics_avoid,
        social_speed=calm_twin.social_speed,
        introversion_level=calm_twin.introversion_level,
        user_id="maya",
    )


@pytest.fixture
def empty_twin() -> TwinProfile:
    """Twin with every list field empty."""
    return TwinProfile(display_name="Empty", user_id="empty")


@pytest.fixture
def demo_profiles_path() -> Path:
    return PROJECT_ROOT / "data" / "demo_profiles.yaml"


@pytest.fixture
def config_path() -> Path:
    return PROJECT_ROOT / "configs" / "config.yaml"
