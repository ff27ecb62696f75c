"""Transcript entities - diarized utterances as produced by the transcription service."""

from typing import Optional

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from speaker_resolver.models.base import ResolverModel
from speaker_resolver.models.speaker_mapping import Confidence


class WordTiming(ResolverModel):
    """Word-level timing information."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    start_ms: float = Field(
        0, validation_alias=AliasChoices("start_ms", "startMs", "start")
    )
    end_ms: float = Field(
        0, validation_alias=AliasChoices("end_ms", "endMs", "end")
    )

    @field_validator("start_ms", "end_ms", mode="before")
    @classmethod
    def missing_time_is_zero(cls, v):
        return 0 if v is None else v


class Utterance(ResolverModel):
    """A stretch of speech attributed to one anonymous speaker tag.

    Utterances are immutable. Resolution never edits an utterance in place;
    the mapping applier returns decorated copies carrying the resolved
    speaker name, email and confidence next to the original tag.
    """

    model_config = ConfigDict(frozen=True)

    speaker_tag: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("speaker_tag", "speakerTag", "speaker"),
        description="Diarization label such as 'Speaker 1'",
    )
    text: str = ""
    start_ms: float = Field(
        0,
        validation_alias=AliasChoices("start_ms", "startMs", "timestamp", "start"),
        description="Start time in milliseconds from the recording start",
    )
    end_ms: Optional[float] = Field(
        None, validation_alias=AliasChoices("end_ms", "endMs", "end")
    )
    words: Optional[list[WordTiming]] = None

    # Filled in by the mapping applier
    speaker_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("speaker_name", "speakerName")
    )
    speaker_email: Optional[str] = Field(
        None, validation_alias=AliasChoices("speaker_email", "speakerEmail")
    )
    speaker_confidence: Optional[Confidence] = Field(
        None, validation_alias=AliasChoices("speaker_confidence", "speakerConfidence")
    )

    @field_validator("start_ms", mode="before")
    @classmethod
    def missing_start_is_zero(cls, v):
        return 0 if v is None else v

    @property
    def timeline_end_ms(self) -> float:
        """End time used for timeline correlation.

        The last word's end when word timings exist, otherwise the start.
        """
        if self.words:
            return self.words[-1].end_ms or self.start_ms
        return self.start_ms

    @property
    def effective_end_ms(self) -> float:
        """Reported end time, derived from the words when none was supplied."""
        if self.end_ms is not None:
            return self.end_ms
        return self.timeline_end_ms

    @property
    def word_count(self) -> int:
        """Number of whitespace separated words in the text."""
        return len(self.text.split())

    @property
    def is_decorated(self) -> bool:
        """Whether a resolved identity has been attached."""
        return self.speaker_name is not None


def speaker_count(transcript: list[Utterance]) -> int:
    """Count distinct non-empty speaker tags in a transcript."""
    return len({u.speaker_tag for u in transcript if u.speaker_tag})
