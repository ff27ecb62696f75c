"""Services for the Speaker Identity Resolution Engine.

Components:
- SpeakerStatsAnalyzer: Per-speaker word counts and temporal spans
- TimelineCorrelator: Overlap voting against the device speech timeline
- HeuristicAssigner: Layered fallback strategies for unresolved speakers
- IdentityLookup: Name/email resolution via contacts and email local parts
- TranscriptFormatter: Apply mappings and render transcripts
- SpeakerResolutionService: Coordinates a full resolution run
"""

from speaker_resolver.services.speaker_stats import SpeakerStatsAnalyzer
from speaker_resolver.services.identity_lookup import IdentityLookup, extract_name_from_email
from speaker_resolver.services.timeline_correlator import TimelineCorrelator
from speaker_resolver.services.heuristic_assigner import HeuristicAssigner
from speaker_resolver.services.transcript_formatter import TranscriptFormatter
from speaker_resolver.services.speaker_resolution import ContactsProvider, SpeakerResolutionService
from speaker_resolver.services.input_loader import (
    InputFileError,
    load_contacts,
    load_participants,
    load_timeline,
    load_transcript,
)

__all__ = [
    "SpeakerStatsAnalyzer",
    "IdentityLookup",
    "extract_name_from_email",
    "TimelineCorrelator",
    "HeuristicAssigner",
    "TranscriptFormatter",
    "ContactsProvider",
    "SpeakerResolutionService",
    "InputFileError",
    "load_contacts",
    "load_participants",
    "load_timeline",
    "load_transcript",
]
