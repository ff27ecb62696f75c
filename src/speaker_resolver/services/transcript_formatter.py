"""Mapping Applier / Formatter - decorates and renders resolved transcripts."""

from speaker_resolver.models import SpeakerMapping, Utterance
from speaker_resolver.utils.time_utils import format_timestamp


class TranscriptFormatter:
    """Applies a speaker mapping to a transcript and renders it as text."""

    def apply_mapping(
        self,
        transcript: list[Utterance],
        mapping: SpeakerMapping,
    ) -> list[Utterance]:
        """Attach resolved identities to every mapped utterance.

        The original speaker tag is kept. Utterances whose tag has no entry
        are passed through unchanged. The input transcript is not modified.

        Args:
            transcript: Utterances to decorate
            mapping: Speaker tag to mapping entry

        Returns:
            A new list of utterances
        """
        decorated = []
        for utterance in transcript:
            entry = mapping.get(utterance.speaker_tag) if utterance.speaker_tag else None
            if entry is None:
                decorated.append(utterance)
                continue
            decorated.append(
                utterance.model_copy(
                    update={
                        "speaker_name": entry.name,
                        "speaker_email": entry.email,
                        "speaker_confidence": entry.confidence,
                    }
                )
            )
        return decorated

    def format_transcript(self, transcript: list[Utterance], use_names: bool = True) -> str:
        """Render utterances as "[MM:SS] Speaker: text" blocks.

        Args:
            transcript: Utterances, usually decorated by apply_mapping
            use_names: Prefer the resolved name over the raw tag

        Returns:
            Lines separated by a blank line, empty string for no utterances
        """
        lines = []
        for utterance in transcript:
            if use_names and utterance.speaker_name:
                speaker = utterance.speaker_name
            else:
                speaker = utterance.speaker_tag or "Unknown"
            lines.append(f"[{format_timestamp(utterance.start_ms)}] {speaker}: {utterance.text}")
        return "\n\n".join(lines)
