"""Data models for the Speaker Identity Resolution Engine.

All entities use Pydantic for validation and serialization. Input models
accept both snake_case field names and the camelCase names used by the
desktop application's transcript, timeline and contact payloads.
"""

from speaker_resolver.models.base import ResolverModel
from speaker_resolver.models.speaker_mapping import (
    ALLOWED_CONFIDENCE,
    Confidence,
    ResolutionMethod,
    SpeakerMapping,
    SpeakerMappingEntry,
)
from speaker_resolver.models.transcript import Utterance, WordTiming, speaker_count
from speaker_resolver.models.timeline import (
    SpeechSegment,
    SpeechTimeline,
    SpeechTimelineParticipant,
)
from speaker_resolver.models.participant import (
    ContactDirectory,
    ContactRecord,
    ParticipantRecord,
    build_contact_directory,
    normalize_email,
)
from speaker_resolver.models.stats import SpeakerStats, SpeakerSummary
from speaker_resolver.models.resolution import ResolutionOptions, ResolutionResult

__all__ = [
    # Base
    "ResolverModel",
    # Speaker Mapping
    "ALLOWED_CONFIDENCE",
    "Confidence",
    "ResolutionMethod",
    "SpeakerMapping",
    "SpeakerMappingEntry",
    # Transcript
    "Utterance",
    "WordTiming",
    "speaker_count",
    # Timeline
    "SpeechSegment",
    "SpeechTimeline",
    "SpeechTimelineParticipant",
    # Participants
    "ContactDirectory",
    "ContactRecord",
    "ParticipantRecord",
    "build_contact_directory",
    "normalize_email",
    # Stats
    "SpeakerStats",
    "SpeakerSummary",
    # Resolution
    "ResolutionOptions",
    "ResolutionResult",
]
