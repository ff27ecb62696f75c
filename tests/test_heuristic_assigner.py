"""Tests for the HeuristicAssigner and its strategies."""

import pytest

from speaker_resolver.models import (
    Confidence,
    ParticipantRecord,
    ResolutionMethod,
    ResolutionOptions,
    SpeakerMappingEntry,
    SpeakerStats,
)
from speaker_resolver.services.heuristic_assigner import (
    HeuristicAssigner,
    count_match,
    first_speaker,
    most_talkative,
    sequential,
    unmatched,
)
from speaker_resolver.services.identity_lookup import IdentityLookup


def stats_for(**word_counts: int) -> dict[str, SpeakerStats]:
    """Speaker stats keyed in keyword order, e.g. stats_for(A=10, B=5)."""
    return {tag: SpeakerStats(tag=tag, word_count=count) for tag, count in word_counts.items()}


@pytest.fixture
def assigner():
    return HeuristicAssigner()


@pytest.fixture
def lookup():
    return IdentityLookup()


def timeline_entry(tag: str, name: str, email=None) -> SpeakerMappingEntry:
    return SpeakerMappingEntry(
        speaker_tag=tag,
        email=email,
        name=name,
        confidence=Confidence.HIGH,
        method=ResolutionMethod.SPEECH_TIMELINE,
        match_count=7,
    )


class TestStrategies:
    """Each strategy in isolation."""

    def test_count_match_pairs_in_order(self):
        speakers = list(stats_for(A=10, B=5).values())
        participants = [ParticipantRecord(name="P1"), ParticipantRecord(name="P2")]

        mapping = count_match(speakers, participants, {})

        assert {t: e.name for t, e in mapping.items()} == {"A": "P1", "B": "P2"}
        assert all(e.method == ResolutionMethod.COUNT_MATCH for e in mapping.values())

    def test_count_match_needs_equal_sizes(self):
        speakers = list(stats_for(A=10, B=5).values())
        assert count_match(speakers, [ParticipantRecord(name="P1")], {}) == {}

    def test_first_speaker_skips_mapped(self):
        speakers = list(stats_for(A=10).values())
        participants = [ParticipantRecord(name="P1")]
        already = first_speaker(speakers, participants, {})

        assert first_speaker(speakers, participants, already) == {}

    def test_most_talkative_needs_several_on_both_sides(self):
        speakers = list(stats_for(A=10, B=5).values())

        assert most_talkative(speakers, [ParticipantRecord(name="P1")], {}) == {}
        mapping = most_talkative(
            speakers, [ParticipantRecord(name="P1"), ParticipantRecord(name="P2")], {}
        )
        assert mapping["A"].method == ResolutionMethod.MOST_TALKATIVE

    def test_sequential_skips_claimed_participants(self):
        speakers = list(stats_for(A=10, B=5, C=1).values())
        participants = [ParticipantRecord(name="P1"), ParticipantRecord(name="P2")]
        mapping = first_speaker(speakers, participants, {})

        assigned = sequential(speakers, participants, mapping)

        assert {t: e.name for t, e in assigned.items()} == {"B": "P2"}

    def test_unmatched_covers_the_rest(self):
        speakers = list(stats_for(A=10, B=5).values())
        mapping = first_speaker(speakers, [ParticipantRecord(name="P1")], {})

        rest = unmatched(speakers, [], mapping)

        assert list(rest) == ["B"]
        assert rest["B"].name == "Unknown Speaker (B)"

    def test_strategy_order(self, assigner):
        names = [name for name, _ in assigner.strategies(include_organizer=True)]
        assert names == ["count-match", "first-speaker", "most-talkative", "sequential", "unmatched"]

        names = [name for name, _ in assigner.strategies(include_organizer=False)]
        assert "first-speaker" not in names


class TestAssign:
    """Tests for the full heuristic policy."""

    def test_count_match(self, assigner, lookup):
        """Test equal speaker and participant counts pair 1:1 by talkativeness."""
        mapping = assigner.assign(
            stats_for(**{"Speaker 1": 3, "Speaker 2": 20}),
            ["alice@example.com", "bob@example.com"],
            lookup,
        )

        assert mapping["Speaker 2"].email == "alice@example.com"
        assert mapping["Speaker 2"].name == "Alice"
        assert mapping["Speaker 1"].email == "bob@example.com"
        for entry in mapping.values():
            assert entry.confidence == Confidence.MEDIUM
            assert entry.method == ResolutionMethod.COUNT_MATCH

    def test_more_speakers_than_participants(self, assigner, lookup):
        """Test three speakers and one participant: one assigned, two unmatched."""
        mapping = assigner.assign(
            stats_for(A=5, B=50, C=10),
            ["alice@example.com"],
            lookup,
        )

        assert mapping["B"].method == ResolutionMethod.FIRST_SPEAKER
        assert mapping["B"].confidence == Confidence.LOW
        assert mapping["B"].email == "alice@example.com"
        for tag in ("A", "C"):
            assert mapping[tag].method == ResolutionMethod.UNMATCHED
            assert mapping[tag].confidence == Confidence.NONE
            assert mapping[tag].email is None

    def test_without_organizer_single_participant_goes_sequential(self, assigner, lookup):
        mapping = assigner.assign(
            stats_for(A=5, B=50, C=10),
            ["alice@example.com"],
            lookup,
            ResolutionOptions(include_organizer=False),
        )

        assert mapping["B"].method == ResolutionMethod.SEQUENTIAL
        assert mapping["A"].method == ResolutionMethod.UNMATCHED
        assert mapping["C"].method == ResolutionMethod.UNMATCHED

    def test_without_organizer_most_talkative_fires(self, assigner, lookup):
        mapping = assigner.assign(
            stats_for(A=5, B=50, C=10),
            ["alice@example.com", "bob@example.com"],
            lookup,
            ResolutionOptions(include_organizer=False),
        )

        assert mapping["B"].method == ResolutionMethod.MOST_TALKATIVE
        assert mapping["B"].email == "alice@example.com"
        assert mapping["C"].method == ResolutionMethod.SEQUENTIAL
        assert mapping["C"].email == "bob@example.com"
        assert mapping["A"].method == ResolutionMethod.UNMATCHED

    def test_organizer_then_sequential(self, assigner, lookup):
        mapping = assigner.assign(
            stats_for(A=5, B=50, C=10),
            ["alice@example.com", "bob@example.com"],
            lookup,
        )

        assert mapping["B"].method == ResolutionMethod.FIRST_SPEAKER
        assert mapping["C"].method == ResolutionMethod.SEQUENTIAL
        assert mapping["C"].email == "bob@example.com"
        assert mapping["A"].method == ResolutionMethod.UNMATCHED

    def test_fewer_speakers_than_participants(self, assigner, lookup):
        mapping = assigner.assign(
            stats_for(A=5, B=50),
            ["alice@example.com", "bob@example.com", "carol@example.com"],
            lookup,
        )

        assert mapping["B"].email == "alice@example.com"
        assert mapping["A"].email == "bob@example.com"
        assert mapping["A"].method == ResolutionMethod.SEQUENTIAL

    def test_name_only_participants(self, assigner, lookup):
        """Test participants without emails are still consumed one at a time."""
        mapping = assigner.assign(
            stats_for(A=50, B=10, C=5),
            ["Alice Smith", "Bob"],
            lookup,
        )

        assert mapping["A"].name == "Alice Smith"
        assert mapping["A"].email is None
        assert mapping["B"].name == "Bob"
        assert mapping["B"].method == ResolutionMethod.SEQUENTIAL
        assert mapping["C"].method == ResolutionMethod.UNMATCHED

    def test_ties_keep_tag_order(self, assigner, lookup):
        mapping = assigner.assign(
            stats_for(**{"Speaker 2": 10, "Speaker 1": 10}),
            ["alice@example.com", "bob@example.com"],
            lookup,
        )

        assert mapping["Speaker 2"].email == "alice@example.com"
        assert mapping["Speaker 1"].email == "bob@example.com"

    def test_contact_names_are_used(self, assigner, contacts):
        mapping = assigner.assign(
            stats_for(A=10),
            ["bob@example.com"],
            IdentityLookup(contacts),
        )
        assert mapping["A"].name == "Robert Jones"

    def test_participant_data_preferred(self, assigner, lookup):
        options = ResolutionOptions(
            participant_data=[
                ParticipantRecord(email="carol@example.com", name="Carol King"),
                ParticipantRecord(email="dan@example.com", name="Dan Brown"),
            ]
        )

        mapping = assigner.assign(
            stats_for(A=10, B=5),
            ["alice@example.com", "bob@example.com"],
            lookup,
            options,
        )

        assert mapping["A"].name == "Carol King"
        assert mapping["B"].name == "Dan Brown"

    def test_claimed_participants_are_removed(self, assigner, lookup):
        already = {"T": timeline_entry("T", "Alice", "alice@example.com")}

        mapping = assigner.assign(
            stats_for(A=10),
            ["alice@example.com", "bob@example.com"],
            lookup,
            already_assigned=already,
        )

        assert mapping["A"].email == "bob@example.com"
        assert mapping["A"].method == ResolutionMethod.COUNT_MATCH

    def test_claimed_names_are_removed(self, assigner, lookup):
        already = {"T": timeline_entry("T", "Bob")}

        mapping = assigner.assign(stats_for(A=10), ["Bob", "Carol"], lookup, already_assigned=already)

        assert mapping["A"].name == "Carol"

    def test_all_participants_claimed(self, assigner, lookup):
        already = {"T": timeline_entry("T", "Alice", "alice@example.com")}

        mapping = assigner.assign(
            stats_for(A=10, B=5),
            ["alice@example.com"],
            lookup,
            already_assigned=already,
        )

        assert list(mapping) == ["A", "B"]
        for tag, entry in mapping.items():
            assert entry.method == ResolutionMethod.UNMATCHED
            assert entry.name == f"Unknown Speaker ({tag})"

    def test_duplicate_participants_are_collapsed(self, assigner, lookup):
        mapping = assigner.assign(
            stats_for(A=10, B=5),
            ["alice@example.com", "Alice@Example.com"],
            lookup,
        )

        assert mapping["A"].email == "alice@example.com"
        assert mapping["B"].method == ResolutionMethod.UNMATCHED

    def test_no_speakers(self, assigner, lookup):
        assert assigner.assign({}, ["alice@example.com"], lookup) == {}

    def test_never_above_medium(self, assigner, lookup):
        for counts, participants in [
            ({"A": 1, "B": 2}, ["a@x.com", "b@x.com"]),
            ({"A": 1, "B": 2, "C": 3}, ["a@x.com"]),
            ({"A": 1}, ["a@x.com", "b@x.com", "c@x.com"]),
        ]:
            mapping = assigner.assign(stats_for(**counts), participants, lookup)
            assert all(e.confidence <= Confidence.MEDIUM for e in mapping.values())
