"""Shared fixtures for the speaker resolver tests."""

import sys
from pathlib import Path
from typing import Optional

import pytest

# Add src to path to enable direct module imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from speaker_resolver.config import Settings
from speaker_resolver.models import (
    ContactRecord,
    SpeechSegment,
    SpeechTimeline,
    SpeechTimelineParticipant,
    Utterance,
    WordTiming,
)


def make_utterance(
    tag: Optional[str],
    start_ms: float,
    end_ms: Optional[float] = None,
    text: str = "hello there",
    with_words: bool = True,
) -> Utterance:
    """Build an utterance whose last word ends at end_ms."""
    words = None
    if with_words and end_ms is not None:
        words = [WordTiming(text=text.split()[-1] if text else "", start_ms=start_ms, end_ms=end_ms)]
    return Utterance(speaker_tag=tag, text=text, start_ms=start_ms, words=words)


def make_timeline(**segments_by_name: list[tuple[int, int]]) -> SpeechTimeline:
    """Build a timeline from name=[(start_ms, end_ms), ...] keyword arguments."""
    return SpeechTimeline(
        participants=[
            SpeechTimelineParticipant(
                name=name,
                segments=[SpeechSegment(start_ms=s, end_ms=e) for s, e in segments],
            )
            for name, segments in segments_by_name.items()
        ]
    )


@pytest.fixture
def settings():
    """Default settings, independent of the environment."""
    return Settings(
        timeline_tolerance_ms=2000,
        min_timeline_votes=2,
        high_confidence_votes=5,
        include_organizer=True,
        log_level="WARNING",
    )


@pytest.fixture
def two_speaker_transcript():
    """Speaker 1 talks more than Speaker 2."""
    return [
        make_utterance("Speaker 1", 0, 4000, "Welcome everyone to the weekly planning sync"),
        make_utterance("Speaker 2", 5000, 7000, "Thanks for having me"),
        make_utterance("Speaker 1", 8000, 12000, "Let us start with the roadmap review today"),
    ]


@pytest.fixture
def contacts():
    """Contacts directory keyed by normalized email."""
    return {
        "alice@example.com": ContactRecord(
            name="Alice Smith",
            given_name="Alice",
            family_name="Smith",
            emails={"alice@example.com"},
        ),
        "bob@example.com": ContactRecord(
            name="Robert Jones",
            given_name="Robert",
            family_name="Jones",
            emails={"bob@example.com"},
        ),
    }
