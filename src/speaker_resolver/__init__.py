"""Speaker Identity Resolution Engine.

Assigns the anonymous speaker tags of a diarized meeting transcript to real
meeting participants with:
- Per-speaker statistics over the transcript
- Correlation against a device-level speech timeline
- Layered heuristics when no timeline evidence is available
- Contact directory and email based identity lookup
- Decorated and rendered transcripts
"""

__version__ = "0.1.0"
