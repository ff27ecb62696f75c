"""Per-call options and the combined result of a resolution run."""

from typing import Optional

from pydantic import AliasChoices, Field

from speaker_resolver.models.base import ResolverModel
from speaker_resolver.models.participant import ParticipantRecord
from speaker_resolver.models.speaker_mapping import SpeakerMappingEntry
from speaker_resolver.models.stats import SpeakerStats
from speaker_resolver.models.timeline import SpeechTimeline
from speaker_resolver.models.transcript import Utterance


class ResolutionOptions(ResolverModel):
    """Options controlling one resolution run."""

    include_organizer: bool = Field(
        True,
        validation_alias=AliasChoices("include_organizer", "includeOrganizer"),
        description="Map the most talkative speaker to the first participant",
    )
    speech_timeline: Optional[SpeechTimeline] = Field(
        None, validation_alias=AliasChoices("speech_timeline", "speechTimeline")
    )
    participant_data: Optional[list[ParticipantRecord]] = Field(
        None,
        validation_alias=AliasChoices("participant_data", "participantData"),
        description="Full participant records, preferred over bare identifiers",
    )


class ResolutionResult(ResolverModel):
    """Everything produced by one resolution run."""

    mapping: dict[str, SpeakerMappingEntry] = Field(default_factory=dict)
    transcript: list[Utterance] = Field(default_factory=list)
    stats: dict[str, SpeakerStats] = Field(default_factory=dict)

    @property
    def resolved_count(self) -> int:
        return sum(1 for entry in self.mapping.values() if entry.is_resolved)

    @property
    def unmatched_tags(self) -> list[str]:
        return [tag for tag, entry in self.mapping.items() if not entry.is_resolved]
