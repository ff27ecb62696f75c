"""Timeline Correlator - matches speaker tags against device-level speech activity.

The recording device reports when each identified participant was speaking.
Every tagged utterance whose start or end falls inside one of a participant's
speech segments (widened by a tolerance for clock skew between the two
sources) counts as one vote for that tag/participant pair. Tags with enough
votes are assigned to their best unclaimed participant.
"""

import logging
from typing import Iterable, Optional

from speaker_resolver.config import get_settings
from speaker_resolver.models import (
    Confidence,
    ResolutionMethod,
    SpeakerMapping,
    SpeakerMappingEntry,
    SpeechTimeline,
    Utterance,
    normalize_email,
)
from speaker_resolver.services.identity_lookup import IdentityLookup

logger = logging.getLogger(__name__)

# speaker tag -> participant name -> votes, both in first-seen order
VoteCounts = dict[str, dict[str, int]]


class TimelineCorrelator:
    """Resolves speaker tags from overlap with a speech timeline."""

    def __init__(
        self,
        tolerance_ms: Optional[int] = None,
        min_votes: Optional[int] = None,
        high_confidence_votes: Optional[int] = None,
    ):
        """Initialize the correlator.

        Args:
            tolerance_ms: Widening applied to both ends of each speech segment
            min_votes: Votes needed before a tag is assigned
            high_confidence_votes: Votes at which an assignment is high confidence
        """
        settings = get_settings()
        self.tolerance_ms = settings.timeline_tolerance_ms if tolerance_ms is None else tolerance_ms
        self.min_votes = settings.min_timeline_votes if min_votes is None else min_votes
        self.high_confidence_votes = (
            settings.high_confidence_votes
            if high_confidence_votes is None
            else high_confidence_votes
        )

    def count_votes(
        self,
        transcript: list[Utterance],
        timeline: SpeechTimeline,
    ) -> VoteCounts:
        """Count overlap votes between speaker tags and timeline participants.

        Each utterance votes at most once per participant, for the first
        segment of that participant it overlaps.
        """
        votes: VoteCounts = {}

        for utterance in transcript:
            tag = utterance.speaker_tag
            if not tag:
                continue

            start_ms = utterance.start_ms
            end_ms = utterance.timeline_end_ms

            for participant in timeline.participants:
                for segment in participant.segments:
                    if segment.contains(start_ms, self.tolerance_ms) or segment.contains(
                        end_ms, self.tolerance_ms
                    ):
                        tag_votes = votes.setdefault(tag, {})
                        tag_votes[participant.name] = tag_votes.get(participant.name, 0) + 1
                        break

        return votes

    def correlate(
        self,
        transcript: list[Utterance],
        timeline: Optional[SpeechTimeline],
        participant_identifiers: Iterable[str],
        lookup: IdentityLookup,
    ) -> SpeakerMapping:
        """Assign speaker tags backed by sustained timeline overlap.

        Tags are visited in order of their first vote. Each takes the
        participant with the most votes that no earlier tag has claimed;
        ties go to the participant seen first. Tags whose best count is below
        the vote threshold are left for the heuristics. When two timeline names
        resolve to the same email, only the first tag gets it; the later one
        keeps the name alone.

        Args:
            transcript: Utterances with speaker tags and timings
            timeline: Device speech timeline, or None
            participant_identifiers: The meeting's participant emails or names
            lookup: Identity lookup used to find each participant's email

        Returns:
            Mapping for the tags resolved from the timeline (possibly empty)
        """
        mapping: SpeakerMapping = {}
        if timeline is None or timeline.is_empty:
            return mapping

        candidates = list(participant_identifiers)
        votes = self.count_votes(transcript, timeline)
        claimed: set[str] = set()
        claimed_emails: set[str] = set()

        logger.debug(
            "Timeline has %d participants, votes recorded for %d speakers",
            len(timeline.participants),
            len(votes),
        )

        for tag, participant_votes in votes.items():
            best_name: Optional[str] = None
            best_count = 0
            for name, count in participant_votes.items():
                if count > best_count and name not in claimed:
                    best_name = name
                    best_count = count

            if best_name is None or best_count < self.min_votes:
                logger.debug("%s: best timeline match has %d votes, skipping", tag, best_count)
                continue

            confidence = (
                Confidence.HIGH if best_count >= self.high_confidence_votes else Confidence.MEDIUM
            )
            email = lookup.resolve_email(best_name, candidates)
            if email and normalize_email(email) in claimed_emails:
                logger.debug("%s: %s already belongs to an earlier speaker, keeping name only", tag, email)
                email = None

            mapping[tag] = SpeakerMappingEntry(
                speaker_tag=tag,
                email=email,
                name=best_name,
                confidence=confidence,
                method=ResolutionMethod.SPEECH_TIMELINE,
                match_count=best_count,
            )
            claimed.add(best_name)
            if email:
                claimed_emails.add(normalize_email(email))
            logger.debug(
                "%s -> %s (%d votes, %s confidence)", tag, best_name, best_count, confidence.value
            )

        return mapping
