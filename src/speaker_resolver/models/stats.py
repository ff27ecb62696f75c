"""Per-speaker statistics derived from a transcript."""

from pydantic import Field

from speaker_resolver.models.base import ResolverModel


class SpeakerStats(ResolverModel):
    """Aggregates for one speaker tag, recomputed on every resolution run."""

    tag: str
    word_count: int = 0
    utterance_count: int = 0
    first_appearance_ms: float = 0
    last_appearance_ms: float = 0
    duration_ms: float = 0


class SpeakerSummary(ResolverModel):
    """Condensed statistics for display."""

    tag: str
    word_count: int
    utterance_count: int
    duration_ms: float = Field(..., description="Span between first and last appearance")
