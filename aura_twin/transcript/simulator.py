"""
Scripted twin-to-twin conversation.

A deterministic stand-in for the LLM-backed twin chat: six fixed turns,
alternating twin A and twin B, filled in from both profiles. The result has
the same {transcript, summary} shape as the LLM path, so the front end can
show either.

Script outline:
    turns 1-2: each twin introduces its user's mood and goal
    turns 3-4: agree on the first shared liked topic
    turns 5-6: boundaries and pacing
"""

from typing import Optional

from ..profiles.schema import TwinProfile, TwinChatMessage, TranscriptResult, Speaker
from ..scoring.scorer import ScoringWeights, evaluate_pair
from ..narrative.builder import first_or

SCRIPT_LENGTH = 6

FALLBACK_TOPIC = "slow evenings and small comforts"
SLOW_PACE = "moving at a slow, breathable pace"
ADAPTIVE_PACE = "adjusting the pace as you go"


def _speaker_for_turn(index: int) -> Speaker:
    return Speaker.AURA_A if index % 2 == 0 else Speaker.AURA_B


def simulate_transcript(
    twin_a: TwinProfile,
    twin_b: TwinProfile,
    max_turns: Optional[int] = SCRIPT_LENGTH,
    weights: Optional[ScoringWeights] = None
) -> TranscriptResult:
    """
    Produce the scripted conversation between two twins.

    Args:
        twin_a: Twin that speaks first
        twin_b: Twin that answers
        max_turns: Cap on returned turns; values above six return the full
            script, fractional values truncate, negative values return no turns
        weights: Scoring weights used for the summary's label and score

    Returns:
        TranscriptResult with alternating turns and a summary
    """
    if max_turns is None:
        max_turns = SCRIPT_LENGTH

    pair = evaluate_pair(twin_a, twin_b, weights)
    name_a, name_b = twin_a.display_name, twin_b.display_name

    shared_topic = first_or(pair.features.shared_topics, FALLBACK_TOPIC)
    pace_phrase = SLOW_PACE if "slow" in (pair.features.speed_a, pair.features.speed_b) else ADAPTIVE_PACE

    lines = [
        f"Hey, I'm {name_a}'s Aura. They’re feeling {first_or(twin_a.vibe_words, 'soft')} today "
        f"and hoping for something {first_or(twin_a.goals, 'gentle')}.",
        f"Nice to meet you. I'm {name_b}'s Aura. They’re in a {first_or(twin_b.vibe_words, 'quiet')} "
        f"headspace and would enjoy {first_or(twin_b.goals, 'a low-pressure chat')}.",
        f"They both light up when talking about {shared_topic}. Maybe we keep the focus there for now.",
        "Agreed. Heavy topics and sharp conflicts are off-limits tonight. "
        "Let’s keep it human, honest and simple.",
        f"My priority is {name_a}'s nervous system. If they start to shut down, "
        "I’ll quietly nudge them to take a break.",
        f"Same here for {name_b}. We’ll handle the emotional calibration while they just answer honestly.",
    ]

    transcript = [
        TwinChatMessage(speaker=_speaker_for_turn(i), text=text)
        for i, text in enumerate(lines[:max(0, int(max_turns))])
    ]

    summary = (
        f"The twin chat sets a tone of safety and {pace_phrase}. "
        f"Match level: {pair.label.value} ({pair.score}/100). "
        f"They’re encouraged to talk about {shared_topic} and avoid known draining topics."
    )

    return TranscriptResult(
        transcript=transcript,
        summary=summary,
        compatibility_score=pair.score,
        compatibility_label=pair.label,
    )


simulate_twin_chat = simulate_transcript
