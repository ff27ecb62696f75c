"""Speaker Statistics Analyzer - per-tag aggregates over a transcript."""

from speaker_resolver.models import SpeakerStats, SpeakerSummary, Utterance


class SpeakerStatsAnalyzer:
    """Computes word counts and temporal spans for every speaker tag."""

    def analyze(self, transcript: list[Utterance]) -> dict[str, SpeakerStats]:
        """Scan a transcript once and aggregate per speaker tag.

        Utterances without a speaker tag are skipped. Entries are keyed in
        order of first appearance.

        Args:
            transcript: Utterances in transcript order

        Returns:
            Mapping of speaker tag to its statistics
        """
        stats: dict[str, SpeakerStats] = {}

        for utterance in transcript:
            tag = utterance.speaker_tag
            if not tag:
                continue

            start_ms = utterance.start_ms
            end_ms = utterance.effective_end_ms

            if tag not in stats:
                stats[tag] = SpeakerStats(
                    tag=tag,
                    first_appearance_ms=start_ms,
                    last_appearance_ms=end_ms,
                )

            speaker = stats[tag]
            speaker.utterance_count += 1
            speaker.word_count += utterance.word_count
            if start_ms < speaker.first_appearance_ms:
                speaker.first_appearance_ms = start_ms
            if end_ms > speaker.last_appearance_ms:
                speaker.last_appearance_ms = end_ms
            speaker.duration_ms = speaker.last_appearance_ms - speaker.first_appearance_ms

        return stats

    def summarize(self, stats: dict[str, SpeakerStats]) -> list[SpeakerSummary]:
        """Summaries sorted by word count, most talkative first."""
        summaries = [
            SpeakerSummary(
                tag=s.tag,
                word_count=s.word_count,
                utterance_count=s.utterance_count,
                duration_ms=s.duration_ms,
            )
            for s in stats.values()
        ]
        return sorted(summaries, key=lambda s: s.word_count, reverse=True)
