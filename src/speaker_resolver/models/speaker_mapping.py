"""Speaker mapping entity - connects anonymous speaker tags to meeting participants."""

from enum import Enum
from typing import Optional

from pydantic import Field, model_validator

from speaker_resolver.models.base import ResolverModel


class Confidence(str, Enum):
    """How much the evidence behind a mapping can be trusted.

    Ordered: none < low < medium < high.
    """
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self.value]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Confidence):
            return NotImplemented
        return self.rank >= other.rank


_CONFIDENCE_RANK = {"none": 0, "low": 1, "medium": 2, "high": 3}


class ResolutionMethod(str, Enum):
    """How the speaker was identified."""
    SPEECH_TIMELINE = "speech-timeline"
    COUNT_MATCH = "count-match"
    FIRST_SPEAKER = "first-speaker"
    MOST_TALKATIVE = "most-talkative"
    SEQUENTIAL = "sequential"
    UNMATCHED = "unmatched"


# Confidence levels each method may produce
ALLOWED_CONFIDENCE: dict[ResolutionMethod, frozenset[Confidence]] = {
    ResolutionMethod.SPEECH_TIMELINE: frozenset({Confidence.MEDIUM, Confidence.HIGH}),
    ResolutionMethod.COUNT_MATCH: frozenset({Confidence.MEDIUM}),
    ResolutionMethod.FIRST_SPEAKER: frozenset({Confidence.LOW}),
    ResolutionMethod.MOST_TALKATIVE: frozenset({Confidence.LOW}),
    ResolutionMethod.SEQUENTIAL: frozenset({Confidence.LOW}),
    ResolutionMethod.UNMATCHED: frozenset({Confidence.NONE}),
}


class SpeakerMappingEntry(ResolverModel):
    """Maps one speaker tag from the transcript to a participant identity.

    Unresolvable tags are kept as explicit ``unmatched`` entries so callers
    can tell "no data" apart from "resolved to nobody".
    """

    speaker_tag: str = Field(..., description="Tag as assigned by the diarization service")
    email: Optional[str] = Field(None, description="Participant email, None if unknown")
    name: str = Field(..., description="Resolved display name")
    confidence: Confidence
    method: ResolutionMethod
    match_count: Optional[int] = Field(
        None, ge=0, description="Timeline votes backing a speech-timeline match"
    )

    @model_validator(mode="after")
    def validate_method_confidence(self) -> "SpeakerMappingEntry":
        """Reject method/confidence combinations no stage can produce."""
        if self.confidence not in ALLOWED_CONFIDENCE[self.method]:
            raise ValueError(
                f"confidence {self.confidence.value!r} is not valid for method {self.method.value!r}"
            )
        if self.method == ResolutionMethod.UNMATCHED and self.email is not None:
            raise ValueError("unmatched entries cannot carry an email")
        if self.method == ResolutionMethod.SPEECH_TIMELINE and not self.match_count:
            raise ValueError("speech-timeline entries need a positive match_count")
        return self

    @classmethod
    def unmatched(cls, speaker_tag: str) -> "SpeakerMappingEntry":
        """Create the placeholder entry for a tag no stage could resolve."""
        return cls(
            speaker_tag=speaker_tag,
            email=None,
            name=f"Unknown Speaker ({speaker_tag})",
            confidence=Confidence.NONE,
            method=ResolutionMethod.UNMATCHED,
        )

    @property
    def is_resolved(self) -> bool:
        """Whether this speaker has been identified."""
        return self.method != ResolutionMethod.UNMATCHED

    @property
    def identity_key(self) -> Optional[str]:
        """Key of the participant this entry consumes (email, else name)."""
        if not self.is_resolved:
            return None
        return self.email or self.name


# Speaker tag -> entry, in resolution order
SpeakerMapping = dict[str, SpeakerMappingEntry]
