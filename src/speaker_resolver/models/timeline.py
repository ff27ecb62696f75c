"""Speech timeline entities - device-level voice activity per meeting participant."""

from pydantic import AliasChoices, Field, model_validator

from speaker_resolver.models.base import ResolverModel


class SpeechSegment(ResolverModel):
    """An interval during which a participant was detected speaking."""

    start_ms: float = Field(..., validation_alias=AliasChoices("start_ms", "startMs", "start"))
    end_ms: float = Field(..., validation_alias=AliasChoices("end_ms", "endMs", "end"))

    @model_validator(mode="after")
    def validate_time_range(self) -> "SpeechSegment":
        """Ensure start_ms <= end_ms."""
        if self.start_ms > self.end_ms:
            raise ValueError("start_ms must be <= end_ms")
        return self

    def contains(self, time_ms: float, tolerance_ms: float = 0) -> bool:
        """Whether a point in time falls inside the segment widened by a tolerance."""
        return self.start_ms - tolerance_ms <= time_ms <= self.end_ms + tolerance_ms


class SpeechTimelineParticipant(ResolverModel):
    """A device-identified person and the segments they spoke in.

    Segments come from the recording subsystem and are assumed not to
    overlap within one participant.
    """

    name: str
    segments: list[SpeechSegment] = Field(default_factory=list)


class SpeechTimeline(ResolverModel):
    """Voice activity for every participant the recording device identified."""

    participants: list[SpeechTimelineParticipant] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.participants

    @property
    def participant_names(self) -> list[str]:
        return [p.name for p in self.participants]
