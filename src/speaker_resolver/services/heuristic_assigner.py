"""Heuristic Assigner - best-effort mapping when the timeline gives no answer.

Speakers are ordered by word count (most talkative first) and paired with
the meeting's remaining participants by a fixed sequence of strategies:

1. count-match: as many speakers as participants, pair them 1:1
2. first-speaker: the most talkative speaker is taken to be the organizer
3. most-talkative: same assumption when the organizer option is off
4. sequential: pair what is left in list order
5. unmatched: anything still unpaired is an explicit unknown

None of these reach high confidence; that needs timeline evidence.
"""

import logging
from typing import Callable, Iterable, Optional

from speaker_resolver.models import (
    Confidence,
    ParticipantRecord,
    ResolutionMethod,
    ResolutionOptions,
    SpeakerMapping,
    SpeakerMappingEntry,
    SpeakerStats,
    normalize_email,
)
from speaker_resolver.services.identity_lookup import IdentityLookup

logger = logging.getLogger(__name__)

# (speakers by talkativeness, candidates, mapping so far) -> new entries
Strategy = Callable[[list[SpeakerStats], list[ParticipantRecord], SpeakerMapping], SpeakerMapping]


def _entry(
    speaker: SpeakerStats,
    participant: ParticipantRecord,
    confidence: Confidence,
    method: ResolutionMethod,
) -> SpeakerMappingEntry:
    return SpeakerMappingEntry(
        speaker_tag=speaker.tag,
        email=participant.email,
        name=participant.name,
        confidence=confidence,
        method=method,
    )


def _unclaimed(
    participants: list[ParticipantRecord],
    mapping: SpeakerMapping,
) -> list[ParticipantRecord]:
    taken = {entry.identity_key for entry in mapping.values()}
    return [p for p in participants if p.identity_key not in taken]


def _unmapped(speakers: list[SpeakerStats], mapping: SpeakerMapping) -> list[SpeakerStats]:
    return [s for s in speakers if s.tag not in mapping]


def count_match(
    speakers: list[SpeakerStats],
    participants: list[ParticipantRecord],
    mapping: SpeakerMapping,
) -> SpeakerMapping:
    """Pair speakers and participants 1:1 when their numbers agree."""
    if mapping or len(speakers) != len(participants):
        return {}
    return {
        speaker.tag: _entry(speaker, participant, Confidence.MEDIUM, ResolutionMethod.COUNT_MATCH)
        for speaker, participant in zip(speakers, participants)
    }


def first_speaker(
    speakers: list[SpeakerStats],
    participants: list[ParticipantRecord],
    mapping: SpeakerMapping,
) -> SpeakerMapping:
    """Map the most talkative speaker to the first participant (the organizer)."""
    if not speakers or speakers[0].tag in mapping:
        return {}
    remaining = _unclaimed(participants, mapping)
    if not remaining:
        return {}
    speaker = speakers[0]
    return {
        speaker.tag: _entry(speaker, remaining[0], Confidence.LOW, ResolutionMethod.FIRST_SPEAKER)
    }


def most_talkative(
    speakers: list[SpeakerStats],
    participants: list[ParticipantRecord],
    mapping: SpeakerMapping,
) -> SpeakerMapping:
    """Map the most talkative speaker to the first participant when several remain."""
    remaining_speakers = _unmapped(speakers, mapping)
    remaining = _unclaimed(participants, mapping)
    if len(remaining_speakers) <= 1 or len(remaining) <= 1:
        return {}
    speaker = speakers[0]
    if speaker.tag in mapping:
        return {}
    return {
        speaker.tag: _entry(speaker, remaining[0], Confidence.LOW, ResolutionMethod.MOST_TALKATIVE)
    }


def sequential(
    speakers: list[SpeakerStats],
    participants: list[ParticipantRecord],
    mapping: SpeakerMapping,
) -> SpeakerMapping:
    """Pair remaining speakers with remaining participants in list order."""
    return {
        speaker.tag: _entry(speaker, participant, Confidence.LOW, ResolutionMethod.SEQUENTIAL)
        for speaker, participant in zip(
            _unmapped(speakers, mapping), _unclaimed(participants, mapping)
        )
    }


def unmatched(
    speakers: list[SpeakerStats],
    participants: list[ParticipantRecord],
    mapping: SpeakerMapping,
) -> SpeakerMapping:
    """Mark every speaker still without a participant as unknown."""
    return {s.tag: SpeakerMappingEntry.unmatched(s.tag) for s in _unmapped(speakers, mapping)}


class HeuristicAssigner:
    """Applies the heuristic strategies to speakers the timeline left open."""

    def strategies(self, include_organizer: bool = True) -> list[tuple[str, Strategy]]:
        """The ordered strategy list for one run."""
        steps: list[tuple[str, Strategy]] = [(ResolutionMethod.COUNT_MATCH.value, count_match)]
        if include_organizer:
            steps.append((ResolutionMethod.FIRST_SPEAKER.value, first_speaker))
        steps.extend([
            (ResolutionMethod.MOST_TALKATIVE.value, most_talkative),
            (ResolutionMethod.SEQUENTIAL.value, sequential),
            (ResolutionMethod.UNMATCHED.value, unmatched),
        ])
        return steps

    def build_participants(
        self,
        participant_identifiers: Iterable[str],
        lookup: IdentityLookup,
        participant_data: Optional[list[ParticipantRecord]] = None,
        already_assigned: Optional[SpeakerMapping] = None,
    ) -> list[ParticipantRecord]:
        """Build the candidate list, minus identities the timeline already claimed.

        Full participant records are used as given when supplied. Otherwise
        each identifier becomes a record: identifiers containing ``@`` are
        emails named through the directory (or the address itself), anything
        else is a bare name. Records repeating an earlier email or display name
        are dropped so no identity can be handed out twice.
        """
        claimed_emails: set[str] = set()
        claimed_names: set[str] = set()
        for entry in (already_assigned or {}).values():
            if entry.email:
                claimed_emails.add(normalize_email(entry.email))
            if entry.is_resolved:
                claimed_names.add(entry.name.lower())

        if participant_data:
            records = list(participant_data)
        else:
            records = [self._record_from_identifier(i, lookup) for i in participant_identifiers]

        candidates: list[ParticipantRecord] = []
        seen: set[str] = set()
        for record in records:
            email = normalize_email(record.email) if record.email else None
            name = record.name.lower()
            if (email and email in claimed_emails) or name in claimed_names:
                continue
            if name in seen or (email and email in seen):
                continue
            seen.update(k for k in (email, name) if k)
            candidates.append(record)

        return candidates

    def _record_from_identifier(self, identifier: str, lookup: IdentityLookup) -> ParticipantRecord:
        if "@" in identifier:
            contact = lookup.get_contact(identifier)
            return ParticipantRecord(
                email=identifier,
                name=lookup.display_name(identifier),
                given_name=contact.given_name if contact else "",
                family_name=contact.family_name if contact else "",
            )

        first, _, rest = identifier.partition(" ")
        return ParticipantRecord(email=None, name=identifier, given_name=first, family_name=rest)

    def assign(
        self,
        speaker_stats: dict[str, SpeakerStats],
        participant_identifiers: Iterable[str],
        lookup: IdentityLookup,
        options: Optional[ResolutionOptions] = None,
        already_assigned: Optional[SpeakerMapping] = None,
    ) -> SpeakerMapping:
        """Map unresolved speaker tags to unclaimed participants.

        Args:
            speaker_stats: Statistics for the tags still unresolved
            participant_identifiers: The meeting's participant emails or names
            lookup: Identity lookup for display names
            options: Per-call options (organizer heuristic, participant records)
            already_assigned: Timeline mapping whose identities must not be reused

        Returns:
            An entry for every tag in speaker_stats
        """
        options = options or ResolutionOptions()
        # Stable sort keeps first-appearance order among equal word counts
        speakers = sorted(speaker_stats.values(), key=lambda s: s.word_count, reverse=True)
        participants = self.build_participants(
            participant_identifiers,
            lookup,
            options.participant_data,
            already_assigned,
        )

        if not participants:
            logger.debug("No unclaimed participants left, %d speakers unmatched", len(speakers))
            return unmatched(speakers, participants, {})

        logger.debug(
            "Assigning %d speakers to %d participants heuristically",
            len(speakers),
            len(participants),
        )

        mapping: SpeakerMapping = {}
        for name, strategy in self.strategies(options.include_organizer):
            assigned = strategy(speakers, participants, mapping)
            if assigned:
                logger.debug("%s assigned %s", name, ", ".join(assigned))
            mapping.update(assigned)

        return mapping
