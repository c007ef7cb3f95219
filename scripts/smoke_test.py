"""
Smoke test for the twin compatibility core.

Tests:
1. Basic scoring with mock twins
2. Scores are integers within [0, 100] with matching labels
3. Symmetry: score(A, B) == score(B, A)
4. Determinism: repeated calls give identical results
5. Transcript alternates speakers and respects max_turns
6. Empty profiles score without errors

Usage:
    python scripts/smoke_test.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from aura_twin.profiles import TwinProfile, Speaker, CompatibilityLabel
from aura_twin.scoring import score, label_for_score
from aura_twin.narrative import build_aura_match_result, build_twin_intro
from aura_twin.transcript import simulate_transcript


def create_mock_twin_a() -> TwinProfile:
    """Calm, slow-paced twin."""
    return TwinProfile(
        display_name="Lina",
        goals=["friends", "practice_talking"],
        vibe_words=["thoughtful", "kind", "curious"],
        topics_like=["art", "music", "late-night walks"],
        topics_avoid=["politics"],
        social_speed="slow",
        introversion_level=6,
        green_flags=["honesty", "emotional maturity"],
        red_flags=["ghosting"],
        user_id="lina",
    )


def create_mock_twin_b_similar() -> TwinProfile:
    """Twin that shares most of A's goals and topics."""
    return TwinProfile(
        display_name="Maya",
        goals=["friends"],
        vibe_words=["Kind", "curious"],
        topics_like=["Music", "art", "cats"],
        topics_avoid=["loud parties"],
        social_speed="slow",
        introversion_level=7,
        green_flags=["honesty"],
        red_flags=["pushiness"],
        user_id="maya",
    )


def create_mock_twin_c_different() -> TwinProfile:
    """Fast, extroverted twin who likes what A avoids."""
    return TwinProfile(
        display_name="Rami",
        goals=["serious_relationship"],
        vibe_words=["loud", "bold"],
        topics_like=["politics", "football"],
        topics_avoid=["art"],
        social_speed="fast",
        introversion_level=1,
        green_flags=["effort"],
        red_flags=["ghosting"],
        user_id="rami",
    )


def test_basic_scoring() -> bool:
    """Score a similar pair and print the narrative."""
    print("\n" + "=" * 60)
    print("TEST 1: Basic Scoring")
    print("=" * 60)

    twin_a = create_mock_twin_a()
    twin_b = create_mock_twin_b_similar()
    result = score(twin_a, twin_b)

    print(f"Twin A: {twin_a.display_name}")
    print(f"Twin B: {twin_b.display_name}")
    print(f"\nResults:")
    print(f"  Score: {result.compatibility_score}")
    print(f"  Label: {result.compatibility_label.value}")
    for reason in result.match_reasons:
        print(f"  + {reason}")
    for risk in result.risk_flags:
        print(f"  - {risk}")

    card = build_aura_match_result(twin_a, twin_b)
    intro = build_twin_intro(twin_a, twin_b)
    print(f"\n  Card: {card.match_label} / {card.atmosphere}")
    print(f"  Intro: {intro.title}")

    return True


def test_score_ranges() -> bool:
    """Test that all scores are integers in [0, 100] with consistent labels."""
    print("\n" + "=" * 60)
    print("TEST 2: Score Ranges")
    print("=" * 60)

    test_cases = [
        (create_mock_twin_a(), create_mock_twin_b_similar(), "A vs B (similar)"),
        (create_mock_twin_a(), create_mock_twin_c_different(), "A vs C (different)"),
        (create_mock_twin_b_similar(), create_mock_twin_c_different(), "B vs C"),
    ]

    all_passed = True
    for twin1, twin2, label in test_cases:
        result = score(twin1, twin2)
        value = result.compatibility_score
        in_range = isinstance(value, int) and 0 <= value <= 100
        label_ok = result.compatibility_label == label_for_score(value)

        status = "PASS" if in_range and label_ok else "FAIL"
        print(f"  {label}: score={value}, label={result.compatibility_label.value} [{status}]")

        if status == "FAIL":
            all_passed = False

    print(f"\nScore ranges test: {'PASSED' if all_passed else 'FAILED'}")
    return all_passed


def test_symmetry() -> bool:
    """Test that score(A, B) == score(B, A)."""
    print("\n" + "=" * 60)
    print("TEST 3: Symmetry (A,B == B,A)")
    print("=" * 60)

    twins = [create_mock_twin_a(), create_mock_twin_b_similar(), create_mock_twin_c_different()]

    all_passed = True
    for i, first in enumerate(twins):
        for second in twins[i + 1:]:
            forward = score(first, second)
            backward = score(second, first)
            same = (
                forward.compatibility_score == backward.compatibility_score
                and forward.compatibility_label == backward.compatibility_label
            )
            status = "PASS" if same else "FAIL"
            print(f"  {first.display_name} <-> {second.display_name}: "
                  f"{forward.compatibility_score} vs {backward.compatibility_score} [{status}]")
            if not same:
                all_passed = False

    print(f"\nSymmetry test: {'PASSED' if all_passed else 'FAILED'}")
    return all_passed


def test_determinism() -> bool:
    """Test that repeated calls return identical results."""
    print("\n" + "=" * 60)
    print("TEST 4: Determinism")
    print("=" * 60)

    twin_a = create_mock_twin_a()
    twin_c = create_mock_twin_c_different()

    first = score(twin_a, twin_c)
    second = score(twin_a, twin_c)
    chat_first = simulate_transcript(twin_a, twin_c)
    chat_second = simulate_transcript(twin_a, twin_c)

    is_deterministic = first == second and chat_first == chat_second
    print(f"  Score: {first.compatibility_score} / {second.compatibility_score}")

    print(f"\nDeterminism test: {'PASSED' if is_deterministic else 'FAILED'}")
    return is_deterministic


def test_transcript() -> bool:
    """Test speaker alternation and turn limits."""
    print("\n" + "=" * 60)
    print("TEST 5: Transcript")
    print("=" * 60)

    twin_a = create_mock_twin_a()
    twin_b = create_mock_twin_b_similar()

    all_passed = True
    for max_turns in (0, 3, 6, 10):
        chat = simulate_transcript(twin_a, twin_b, max_turns=max_turns)
        expected = min(max_turns, 6)
        speakers = [message.speaker for message in chat.transcript]
        alternates = all(
            speaker == (Speaker.AURA_A if i % 2 == 0 else Speaker.AURA_B)
            for i, speaker in enumerate(speakers)
        )
        ok = len(chat.transcript) == expected and alternates
        print(f"  max_turns={max_turns}: {len(chat.transcript)} turns [{'PASS' if ok else 'FAIL'}]")
        if not ok:
            all_passed = False

    chat = simulate_transcript(twin_a, twin_b)
    print(f"\n  Summary: {chat.summary}")

    print(f"\nTranscript test: {'PASSED' if all_passed else 'FAILED'}")
    return all_passed


def test_empty_profiles() -> bool:
    """Test that two empty profiles score and narrate without errors."""
    print("\n" + "=" * 60)
    print("TEST 6: Empty Profiles")
    print("=" * 60)

    empty_a = TwinProfile()
    empty_b = TwinProfile()

    result = score(empty_a, empty_b)
    card = build_aura_match_result(empty_a, empty_b)
    chat = simulate_transcript(empty_a, empty_b)

    ok = (
        result.compatibility_score == 50
        and result.compatibility_label == CompatibilityLabel.MEDIUM
        and "subtle" in card.vibe_description
        and len(chat.transcript) == 6
    )
    print(f"  Score: {result.compatibility_score} ({result.compatibility_label.value})")

    print(f"\nEmpty profiles test: {'PASSED' if ok else 'FAILED'}")
    return ok


def main():
    """Run all smoke tests."""
    print("=" * 60)
    print("AURA TWIN SMOKE TEST")
    print("=" * 60)

    results = []
    results.append(("Basic Scoring", test_basic_scoring()))
    results.append(("Score Ranges", test_score_ranges()))
    results.append(("Symmetry", test_symmetry()))
    results.append(("Determinism", test_determinism()))
    results.append(("Transcript", test_transcript()))
    results.append(("Empty Profiles", test_empty_profiles()))

    # Summary
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "PASSED" if passed else "FAILED"
        print(f"  {name}: {status}")
        if not passed:
            all_passed = False

    print("\n" + "=" * 60)
    if all_passed:
        print("ALL TESTS PASSED")
        return 0
    else:
        print("SOME TESTS FAILED")
        return 1


if __name__ == "__main__":
    sys.exit(main())
