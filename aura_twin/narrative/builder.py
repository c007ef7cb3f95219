"""
Narrative building for twin matches.

Turns a numeric compatibility result into the text the app shows: match
reasons, risk flags, suggested openers, each twin's summary for its user,
the match card and the short twin intro script.

Every string is assembled from fixed templates that interpolate profile
fields. Empty lists fall back to literal words baked into the templates,
so building never fails on a partially filled profile.
"""

from typing import Optional, Sequence, Dict

from ..profiles.schema import (
    TwinProfile,
    CompatibilityLabel,
    Narrative,
    AuraMatchResult,
    TwinIntroResult,
)
from ..scoring.scorer import PairScore, ScoringWeights, evaluate_pair

HIGH = CompatibilityLabel.HIGH
MEDIUM = CompatibilityLabel.MEDIUM
LOW = CompatibilityLabel.LOW

SUMMARY_A_TEMPLATES: Dict[CompatibilityLabel, str] = {
    HIGH: "{name}, this connection feels strong and emotionally promising.",
    MEDIUM: "{name}, this connection feels potentially good if you go slowly.",
    LOW: "{name}, this connection feels delicate and needs extra care.",
}

SUMMARY_B_TEMPLATES: Dict[CompatibilityLabel, str] = {
    HIGH: "{name}, this twin connection is a great fit for your current goals.",
    MEDIUM: "{name}, this twin connection is worth exploring gently.",
    LOW: "{name}, this twin connection is possible, but only if both of you are patient.",
}

CARD_SUMMARY_TEMPLATES: Dict[CompatibilityLabel, str] = {
    HIGH: "{a} and {b} are strongly aligned and likely to feel safe together.",
    MEDIUM: "There is potential between {a} and {b}, especially if they respect each other’s pacing.",
    LOW: "This connection is more experimental; it could work with careful boundaries.",
}

ATMOSPHERE: Dict[CompatibilityLabel, str] = {
    HIGH: "supportive and grounding",
    MEDIUM: "interesting and balanced",
    LOW: "intense and unpredictable",
}

FIRST_MESSAGES: Dict[CompatibilityLabel, str] = {
    HIGH: "“Hey, I think our vibes match in a nice way. Want to share something small about your day that felt good?”",
    MEDIUM: "“You seem interesting but also gentle. How do you usually like to get to know someone new?”",
    LOW: "“I like that you’re different from me. What should I know so I don’t accidentally drain you?”",
}

INTRO_OPENERS = [
    "“What kind of connection are you secretly hoping for right now?”",
    "“If tonight could feel emotionally safe for both of us, what would that look like?”",
]

BALANCED_ENERGY_REASON = "Your social energy feels naturally balanced."
TOPIC_CONFLICT_RISK = "Some conversation topics might feel draining or annoying."
RECHARGE_RISK = "You recharge in very different ways; pacing will matter."

BALANCED_INTRO_DIFF = 2
RECHARGE_INTRO_DIFF = 5


def first_or(items: Sequence[str], fallback: str) -> str:
    """First element of a list, or the fallback when it is empty."""
    return items[0] if items else fallback


def _joined(items: Sequence[str]) -> str:
    return ", ".join(items)


def build_reasons(twin_a: TwinProfile, twin_b: TwinProfile, pair: PairScore) -> list:
    """Match reasons, in fixed order: goals, vibes, topics, energy."""
    f = pair.features
    reasons = []
    if f.goal_overlap > 0:
        reasons.append(
            f"You want similar things ({_joined(twin_a.goals)} / {_joined(twin_b.goals)})."
        )
    if f.vibe_overlap > 0:
        reasons.append(
            f"You share similar vibe keywords ({_joined(twin_a.vibe_words)} / "
            f"{_joined(twin_b.vibe_words)})."
        )
    if f.like_overlap > 0:
        reasons.append(f"You both enjoy talking about: {_joined(f.shared_topics)}.")
    if f.intro_diff <= BALANCED_INTRO_DIFF:
        reasons.append(BALANCED_ENERGY_REASON)
    return reasons


def build_risks(twin_a: TwinProfile, twin_b: TwinProfile, pair: PairScore) -> list:
    """Risk flags, in fixed order: topics, recharge, pace."""
    f = pair.features
    risks = []
    if f.topic_conflict:
        risks.append(TOPIC_CONFLICT_RISK)
    if f.intro_diff >= RECHARGE_INTRO_DIFF:
        risks.append(RECHARGE_RISK)

    if f.speed_a == "fast" and f.speed_b == "slow":
        faster, slower = twin_a, twin_b
    elif f.speed_b == "fast" and f.speed_a == "slow":
        faster, slower = twin_b, twin_a
    else:
        faster = slower = None
    if faster is not None:
        risks.append(
            f"{faster.display_name} moves faster while {slower.display_name} prefers a gentle pace."
        )
    return risks


def compose_narrative(twin_a: TwinProfile, twin_b: TwinProfile, pair: PairScore) -> Narrative:
    """
    Build the narrative for an already scored pair.

    Args:
        twin_a: Twin for user A
        twin_b: Twin for user B
        pair: Numeric result from ``evaluate_pair(twin_a, twin_b)``

    Returns:
        Narrative with reasons, risks, openers and summaries
    """
    opener_a = (
        f'Try something simple and grounded, like: "Hey {twin_b.display_name}, '
        f"I liked that you described yourself as {first_or(twin_b.vibe_words, 'thoughtful')} – "
        f'how was your day really?"'
    )
    opener_b = (
        f'You can start with: "Hi {twin_a.display_name}, I relate to the '
        f"{first_or(twin_a.vibe_words, 'quiet')} vibe you mentioned. "
        f'What kind of evenings recharge you the most?"'
    )

    return Narrative(
        reasons=build_reasons(twin_a, twin_b, pair),
        risks=build_risks(twin_a, twin_b, pair),
        opener_a=opener_a,
        opener_b=opener_b,
        summary_a=SUMMARY_A_TEMPLATES[pair.label].format(name=twin_a.display_name),
        summary_b=SUMMARY_B_TEMPLATES[pair.label].format(name=twin_b.display_name),
    )


def build_narrative(
    twin_a: TwinProfile,
    twin_b: TwinProfile,
    weights: Optional[ScoringWeights] = None
) -> Narrative:
    """Score two twins and build their narrative."""
    return compose_narrative(twin_a, twin_b, evaluate_pair(twin_a, twin_b, weights))


def build_aura_match_result(
    twin_a: TwinProfile,
    twin_b: TwinProfile,
    weights: Optional[ScoringWeights] = None
) -> AuraMatchResult:
    """
    Build the match card shown when two twins meet.

    Args:
        twin_a: Twin for user A
        twin_b: Twin for user B
        weights: Scoring weights (default: production weights)

    Returns:
        AuraMatchResult with capitalized label, summary and vibe description
    """
    pair = evaluate_pair(twin_a, twin_b, weights)
    narrative = compose_narrative(twin_a, twin_b, pair)
    name_a, name_b = twin_a.display_name, twin_b.display_name

    vibe_description = (
        f"{name_a} feels {_joined(twin_a.vibe_words) or 'subtle'}, "
        f"while {name_b} brings {_joined(twin_b.vibe_words) or 'their own unique energy'}. "
        f"Together, the atmosphere can become {ATMOSPHERE[pair.label]}"
    )

    return AuraMatchResult(
        compatibility_score=pair.score,
        match_label=pair.label.value.capitalize(),
        summary=CARD_SUMMARY_TEMPLATES[pair.label].format(a=name_a, b=name_b),
        vibe_description=vibe_description,
        why_it_works=narrative.reasons,
        watch_out=narrative.risks,
        suggested_first_message=FIRST_MESSAGES[pair.label],
    )


def build_twin_intro(
    twin_a: TwinProfile,
    twin_b: TwinProfile,
    weights: Optional[ScoringWeights] = None
) -> TwinIntroResult:
    """Build the three-line twin introduction and its safety notes."""
    card = build_aura_match_result(twin_a, twin_b, weights)
    name_a, name_b = twin_a.display_name, twin_b.display_name

    script = [
        f"{name_a}'s Aura: “Hey, I’ve been carrying {name_a}'s inner world. "
        f"They’re feeling {first_or(twin_a.vibe_words, 'quiet')} today but they’re genuinely open to you.”",
        f"{name_b}'s Aura: “Nice to meet you. {name_b} gets overstimulated easily "
        f"but they love when someone is {first_or(twin_b.green_flags, 'patient and honest')}.”",
        f"{name_a}'s Aura: “Let’s keep the tone {first_or(twin_a.vibe_words, 'soft')} "
        f"and {first_or(twin_b.vibe_words, 'kind')}. No pressure, just small steps.”",
    ]

    intro_summary = (
        f"This link feels like a {card.match_label.lower()}-intensity connection. "
        "The Auras agree to protect both social batteries and avoid topics that feel too heavy too fast."
    )

    safety_notes = []
    if card.watch_out:
        safety_notes.append(
            f"Auras will gently slow the pace if conversations step into: {'; '.join(card.watch_out)}."
        )

    return TwinIntroResult(
        title=f"{name_a} × {name_b}",
        aura_to_aura_script=script,
        intro_summary=intro_summary,
        suggested_openers=list(INTRO_OPENERS),
        safety_notes=safety_notes,
    )
