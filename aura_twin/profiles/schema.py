"""
Data structures for twin profiles and match results.

Defines the read-only profile snapshot the matching core consumes and the
value objects it returns. Result objects serialize to the camelCase keys
the app front end renders directly.

Profile fields that matter for scoring:
- goals, vibe_words, topics_like, topics_avoid
- social_speed, introversion_level
- green_flags, red_flags
"""

import math
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple, Union
from enum import Enum


class SocialSpeed(str, Enum):
    """How quickly a user wants a new connection to develop."""
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"


class CompatibilityLabel(str, Enum):
    """Three-tier qualitative bucket derived from the numeric score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Speaker(str, Enum):
    """Which twin speaks a transcript turn."""
    AURA_A = "auraA"
    AURA_B = "auraB"


# camelCase key used by stored records -> dataclass attribute
_PROFILE_KEYS = {
    "displayName": "display_name",
    "goals": "goals",
    "vibeWords": "vibe_words",
    "topicsLike": "topics_like",
    "topicsAvoid": "topics_avoid",
    "socialSpeed": "social_speed",
    "introversionLevel": "introversion_level",
    "greenFlags": "green_flags",
    "redFlags": "red_flags",
    "hardBoundaries": "hard_boundaries",
    "summary": "summary",
    "userId": "user_id",
}

DEFAULT_INTROVERSION_LEVEL = 5

_LIST_FIELDS = (
    "goals", "vibe_words", "topics_like", "topics_avoid",
    "green_flags", "red_flags", "hard_boundaries",
)


def _coerce_speed(value: Any) -> Union[SocialSpeed, str]:
    """Map a raw social speed to the enum, keeping unknown values verbatim."""
    if isinstance(value, SocialSpeed):
        return value
    if value is None:
        return SocialSpeed.SLOW
    try:
        return SocialSpeed(value)
    except ValueError:
        return value


def _coerce_level(value: Any) -> Union[int, float]:
    """Coerce introversion level to a finite number; anything else becomes 5."""
    if isinstance(value, bool) or value is None:
        return DEFAULT_INTROVERSION_LEVEL
    if not isinstance(value, (int, float)):
        try:
            value = float(value)
        except (TypeError, ValueError):
            return DEFAULT_INTROVERSION_LEVEL
    if isinstance(value, float) and not math.isfinite(value):
        return DEFAULT_INTROVERSION_LEVEL
    return value


@dataclass(frozen=True)
class TwinProfile:
    """
    Read-only snapshot of one user's AI-twin personality.

    List fields are stored as tuples so a profile can be shared between
    callers without anyone mutating it. Missing lists become empty tuples.

    Attributes:
        display_name: Name shown in generated text
        goals: Short goal strings ("friends", "serious_relationship")
        vibe_words: Descriptive words; the first one is the "primary vibe"
        topics_like: Topics the user enjoys talking about
        topics_avoid: Topics the user finds draining
        social_speed: slow / normal / fast (unknown strings kept as-is)
        introversion_level: 1 (outgoing) to 10 (very introverted), unchecked
        green_flags: Traits to seek in the other twin's vibe words
        red_flags: Traits to avoid in the other twin's vibe words
        hard_boundaries: Non-negotiables, carried for display only
        summary: The twin's synthesized description of its user
        user_id: Optional owner identifier
    """
    display_name: str = "User"
    goals: Tuple[str, ...] = ()
    vibe_words: Tuple[str, ...] = ()
    topics_like: Tuple[str, ...] = ()
    topics_avoid: Tuple[str, ...] = ()
    social_speed: Union[SocialSpeed, str] = SocialSpeed.SLOW
    introversion_level: int = DEFAULT_INTROVERSION_LEVEL
    green_flags: Tuple[str, ...] = ()
    red_flags: Tuple[str, ...] = ()
    hard_boundaries: Tuple[str, ...] = ()
    summary: str = ""
    user_id: Optional[str] = None

    def __post_init__(self):
        """Normalize list fields and social speed."""
        for name in _LIST_FIELDS:
            value = getattr(self, name)
            object.__setattr__(self, name, tuple(value) if value else ())
        object.__setattr__(self, "social_speed", _coerce_speed(self.social_speed))
        object.__setattr__(self, "introversion_level", _coerce_level(self.introversion_level))
        if self.display_name is None:
            object.__setattr__(self, "display_name", "User")

    @property
    def speed(self) -> str:
        """Social speed as a plain string."""
        if isinstance(self.social_speed, SocialSpeed):
            return self.social_speed.value
        return str(self.social_speed)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the flat camelCase record used by the app."""
        result = {}
        for key, attr in _PROFILE_KEYS.items():
            value = getattr(self, attr)
            if attr in _LIST_FIELDS:
                value = list(value)
            elif attr == "social_speed":
                value = self.speed
            result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TwinProfile":
        """
        Create from a flat dictionary.

        Accepts camelCase keys (as stored by the app) or snake_case keys.
        Unknown keys are ignored.
        """
        kwargs = {}
        for key, attr in _PROFILE_KEYS.items():
            if key in data:
                kwargs[attr] = data[key]
            elif attr in data:
                kwargs[attr] = data[attr]
        return cls(**kwargs)


@dataclass
class MatchResult:
    """
    Result of compatibility scoring between twin A and twin B.

    Attributes:
        compatibility_score: Integer score clamped to [0, 100]
        compatibility_label: low / medium / high
        match_reasons: Human-readable reasons the pair fits
        risk_flags: Human-readable things to watch out for
        suggested_opening_for_user_a: Opener user A can send to B
        suggested_opening_for_user_b: Opener user B can send to A
        aura_to_user_summary_a: What A's twin tells A about the match
        aura_to_user_summary_b: What B's twin tells B about the match
    """
    compatibility_score: int
    compatibility_label: CompatibilityLabel
    match_reasons: List[str] = field(default_factory=list)
    risk_flags: List[str] = field(default_factory=list)
    suggested_opening_for_user_a: str = ""
    suggested_opening_for_user_b: str = ""
    aura_to_user_summary_a: str = ""
    aura_to_user_summary_b: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "compatibilityScore": self.compatibility_score,
            "compatibilityLabel": self.compatibility_label.value,
            "matchReasons": list(self.match_reasons),
            "riskFlags": list(self.risk_flags),
            "suggestedOpeningForUserA": self.suggested_opening_for_user_a,
            "suggestedOpeningForUserB": self.suggested_opening_for_user_b,
            "auraToUserSummaryA": self.aura_to_user_summary_a,
            "auraToUserSummaryB": self.aura_to_user_summary_b,
        }


@dataclass
class Narrative:
    """Template-built presentation text for one pair of twins."""
    reasons: List[str]
    risks: List[str]
    opener_a: str
    opener_b: str
    summary_a: str
    summary_b: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reasons": list(self.reasons),
            "risks": list(self.risks),
            "openerA": self.opener_a,
            "openerB": self.opener_b,
            "summaryA": self.summary_a,
            "summaryB": self.summary_b,
        }


@dataclass
class AuraMatchResult:
    """
    Match card shown when two twins meet.

    Attributes:
        compatibility_score: Same score as the underlying MatchResult
        match_label: Capitalized label ("High", "Medium", "Low")
        summary: One-sentence read of the pair
        vibe_description: Both twins' vibes and the combined atmosphere
        why_it_works: Match reasons
        watch_out: Risk flags
        suggested_first_message: Label-dependent first message
    """
    compatibility_score: int
    match_label: str
    summary: str
    vibe_description: str
    why_it_works: List[str]
    watch_out: List[str]
    suggested_first_message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compatibilityScore": self.compatibility_score,
            "matchLabel": self.match_label,
            "summary": self.summary,
            "vibeDescription": self.vibe_description,
            "whyItWorks": list(self.why_it_works),
            "watchOut": list(self.watch_out),
            "suggestedFirstMessage": self.suggested_first_message,
        }


@dataclass
class TwinIntroResult:
    """Short scripted introduction between two twins."""
    title: str
    aura_to_aura_script: List[str]
    intro_summary: str
    suggested_openers: List[str]
    safety_notes: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "auraToAuraScript": list(self.aura_to_aura_script),
            "introSummary": self.intro_summary,
            "suggestedOpeners": list(self.suggested_openers),
            "safetyNotes": list(self.safety_notes),
        }


@dataclass
class TwinChatMessage:
    """One transcript turn."""
    speaker: Speaker
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.speaker.value, "text": self.text}


@dataclass
class TranscriptResult:
    """
    Scripted twin-to-twin conversation.

    Has the same {transcript, summary} shape as the LLM-backed twin chat,
    so the front end can render either one.

    Attributes:
        transcript: Alternating turns, auraA first
        summary: One-paragraph wrap-up naming label and score
        compatibility_score: Score that seeded the summary
        compatibility_label: Label that seeded the summary
    """
    transcript: List[TwinChatMessage]
    summary: str
    compatibility_score: Optional[int] = None
    compatibility_label: Optional[CompatibilityLabel] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transcript": [msg.to_dict() for msg in self.transcript],
            "summary": self.summary,
        }
