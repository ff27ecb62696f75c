"""Speaker Resolution Service - maps anonymous speaker tags to meeting participants.

Responsible for:
- Collecting per-speaker statistics from the transcript
- Matching speakers to participants through the device speech timeline
- Falling back to heuristics for speakers the timeline left open
- Applying the merged mapping to the transcript

Each call builds its mapping from scratch. Nothing is cached between
meetings, so one service instance can serve concurrent calls.
"""

import logging
from typing import Optional, Protocol

from speaker_resolver.config import Settings, get_settings
from speaker_resolver.models import (
    ContactDirectory,
    ResolutionOptions,
    ResolutionResult,
    SpeakerMapping,
    SpeakerStats,
    Utterance,
    speaker_count,
)
from speaker_resolver.services.heuristic_assigner import HeuristicAssigner
from speaker_resolver.services.identity_lookup import IdentityLookup
from speaker_resolver.services.speaker_stats import SpeakerStatsAnalyzer
from speaker_resolver.services.timeline_correlator import TimelineCorrelator
from speaker_resolver.services.transcript_formatter import TranscriptFormatter

logger = logging.getLogger(__name__)


class ContactsProvider(Protocol):
    """Protocol for the contacts directory collaborator."""

    def find_contacts_by_emails(self, emails: list[str]) -> ContactDirectory:
        """Return contacts for the given emails, keyed by email."""
        ...


class SpeakerResolutionService:
    """Resolves speaker tags from a diarized transcript to real identities."""

    def __init__(
        self,
        contacts_provider: Optional[ContactsProvider] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the service.

        Args:
            contacts_provider: Optional collaborator used when a call brings no contacts
            settings: Thresholds and defaults (global settings if not provided)
        """
        self.settings = settings or get_settings()
        self.contacts_provider = contacts_provider
        self.analyzer = SpeakerStatsAnalyzer()
        self.correlator = TimelineCorrelator(
            tolerance_ms=self.settings.timeline_tolerance_ms,
            min_votes=self.settings.min_timeline_votes,
            high_confidence_votes=self.settings.high_confidence_votes,
        )
        self.assigner = HeuristicAssigner()
        self.formatter = TranscriptFormatter()

    def resolve(
        self,
        transcript: Optional[list[Utterance]],
        participants: Optional[list[str]],
        options: Optional[ResolutionOptions] = None,
        contacts: Optional[ContactDirectory] = None,
    ) -> ResolutionResult:
        """Resolve every speaker tag and decorate the transcript.

        Args:
            transcript: Utterances with speaker tags
            participants: Participant emails or names from the calendar event
            options: Organizer heuristic, speech timeline, full participant records
            contacts: Contacts keyed by email (fetched from the provider if not given)

        Returns:
            ResolutionResult with the mapping, the decorated transcript and statistics
        """
        transcript = list(transcript or [])
        stats = self.analyzer.analyze(transcript)
        mapping = self.match_speakers(transcript, participants, options, contacts, stats)
        return ResolutionResult(
            mapping=mapping,
            transcript=self.formatter.apply_mapping(transcript, mapping),
            stats=stats,
        )

    def match_speakers(
        self,
        transcript: Optional[list[Utterance]],
        participants: Optional[list[str]],
        options: Optional[ResolutionOptions] = None,
        contacts: Optional[ContactDirectory] = None,
        stats: Optional[dict[str, SpeakerStats]] = None,
    ) -> SpeakerMapping:
        """Build the speaker mapping for one meeting.

        Returns an empty mapping when the transcript or the participant list
        is empty. Otherwise every speaker tag in the transcript gets exactly
        one entry, ordered by first appearance. Statistics already computed
        for this transcript can be passed in to skip a second scan.
        """
        if options is None:
            options = ResolutionOptions(include_organizer=self.settings.include_organizer)
        participants = list(participants or [])

        if not transcript:
            logger.info("Empty transcript - no speakers to match")
            return {}
        if not participants and not options.participant_data:
            logger.info("No participants - cannot match speakers")
            return {}

        logger.info(
            "Matching %d speakers to %d participants",
            speaker_count(transcript),
            len(participants) or len(options.participant_data or []),
        )

        # Emails from full participant records count as identifiers too
        identifiers = participants + [
            p.email
            for p in options.participant_data or []
            if p.email and p.email not in participants
        ]
        lookup = IdentityLookup(
            contacts if contacts is not None else self._fetch_contacts(identifiers)
        )
        if stats is None:
            stats = self.analyzer.analyze(transcript)

        timeline_mapping = self.correlator.correlate(
            transcript, options.speech_timeline, identifiers, lookup
        )
        if timeline_mapping:
            logger.info("Speech timeline resolved %d speakers", len(timeline_mapping))

        open_stats = {tag: s for tag, s in stats.items() if tag not in timeline_mapping}
        heuristic_mapping: SpeakerMapping = {}
        if open_stats:
            logger.info("Using heuristics for %d unmatched speakers", len(open_stats))
            heuristic_mapping = self.assigner.assign(
                open_stats, participants, lookup, options, timeline_mapping
            )

        merged = {**timeline_mapping, **heuristic_mapping}
        return {tag: merged[tag] for tag in stats if tag in merged}

    def _fetch_contacts(self, identifiers: list[str]) -> ContactDirectory:
        """Ask the contacts collaborator for the participants' records.

        A failing collaborator is treated as an empty directory.
        """
        if self.contacts_provider is None:
            return {}

        emails = [i for i in identifiers if "@" in i]
        try:
            contacts = self.contacts_provider.find_contacts_by_emails(emails)
        except Exception as e:
            logger.warning("Contact lookup failed, continuing without contacts: %s", e)
            return {}

        logger.info("Found %d contacts out of %d participant emails", len(contacts), len(emails))
        return contacts
