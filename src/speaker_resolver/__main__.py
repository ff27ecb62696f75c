"""CLI Runner for the Speaker Identity Resolution Engine.

Usage:
    speaker-resolver resolve transcript.json -p alice@example.com -p bob@example.com
    speaker-resolver resolve transcript.json --participants-file attendees.json \
        --contacts contacts.json --timeline timeline.json --format text
    speaker-resolver stats transcript.json
    speaker-resolver extract-name mary.anne-smith@example.com
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from speaker_resolver import __version__
from speaker_resolver.config import get_settings

console = Console()

_CONFIDENCE_STYLES = {
    "high": "green",
    "medium": "yellow",
    "low": "magenta",
    "none": "red",
}


def configure_logging(verbose: bool) -> None:
    """Route log records through rich."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log every resolution decision")
def cli(verbose: bool):
    """Speaker Identity Resolution Engine.

    Map anonymous diarization speaker tags to meeting participants.
    """
    configure_logging(verbose)


@cli.command("resolve")
@click.argument("transcript_path", type=click.Path(dir_okay=False))
@click.option("--participant", "-p", "participants", multiple=True,
              help="Participant email or name (repeatable)")
@click.option("--participants-file", default=None, type=click.Path(dir_okay=False),
              help="JSON list of participant identifiers or records")
@click.option("--contacts", "contacts_path", default=None, type=click.Path(dir_okay=False),
              help="JSON contacts directory")
@click.option("--timeline", "timeline_path", default=None, type=click.Path(dir_okay=False),
              help="JSON speech timeline from the recording device")
@click.option("--organizer/--no-organizer", default=None,
              help="Assume the most talkative speaker is the organizer")
@click.option("--format", "-f", "output_format", default="table",
              type=click.Choice(["table", "json", "text"]))
@click.option("--labels", is_flag=True, help="Show raw speaker tags in text output")
def resolve_speakers(
    transcript_path: str,
    participants: tuple,
    participants_file: Optional[str],
    contacts_path: Optional[str],
    timeline_path: Optional[str],
    organizer: Optional[bool],
    output_format: str,
    labels: bool,
):
    """Resolve the speakers of a transcript to participants."""
    from speaker_resolver.models import ResolutionOptions
    from speaker_resolver.services import (
        InputFileError,
        SpeakerResolutionService,
        load_contacts,
        load_participants,
        load_timeline,
        load_transcript,
    )

    settings = get_settings()

    try:
        transcript = load_transcript(transcript_path)
        identifiers = list(participants)
        records = []
        if participants_file:
            file_identifiers, records = load_participants(participants_file)
            for identifier in file_identifiers:
                if identifier not in identifiers:
                    identifiers.append(identifier)
        contacts = load_contacts(contacts_path) if contacts_path else None
        timeline = load_timeline(timeline_path) if timeline_path else None
    except InputFileError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    options = ResolutionOptions(
        include_organizer=settings.include_organizer if organizer is None else organizer,
        speech_timeline=timeline,
        participant_data=records or None,
    )

    service = SpeakerResolutionService(settings=settings)
    result = service.resolve(transcript, identifiers, options, contacts)

    if output_format == "json":
        payload = {tag: entry.to_dict() for tag, entry in result.mapping.items()}
        click.echo(json.dumps(payload, indent=2))
        return

    if output_format == "text":
        click.echo(service.formatter.format_transcript(result.transcript, use_names=not labels))
        return

    if not result.mapping:
        console.print("No speakers resolved.")
        return

    table = Table(title="Speaker Mapping")
    table.add_column("Speaker", style="cyan")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Confidence")
    table.add_column("Method")
    table.add_column("Matches", justify="right")

    for tag, entry in result.mapping.items():
        style = _CONFIDENCE_STYLES[entry.confidence.value]
        table.add_row(
            tag,
            entry.name,
            entry.email or "-",
            f"[{style}]{entry.confidence.value}[/{style}]",
            entry.method.value,
            str(entry.match_count) if entry.match_count is not None else "-",
        )

    console.print(table)
    console.print(f"Resolved {result.resolved_count} of {len(result.mapping)} speakers")


@cli.command("stats")
@click.argument("transcript_path", type=click.Path(dir_okay=False))
def show_stats(transcript_path: str):
    """Show per-speaker statistics for a transcript."""
    from speaker_resolver.services import InputFileError, SpeakerStatsAnalyzer, load_transcript
    from speaker_resolver.utils import format_duration

    try:
        transcript = load_transcript(transcript_path)
    except InputFileError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    analyzer = SpeakerStatsAnalyzer()
    summaries = analyzer.summarize(analyzer.analyze(transcript))

    if not summaries:
        console.print("No speakers found.")
        return

    table = Table(title="Speakers")
    table.add_column("Speaker", style="cyan")
    table.add_column("Words", justify="right")
    table.add_column("Utterances", justify="right")
    table.add_column("Span", justify="right")

    for s in summaries:
        table.add_row(s.tag, str(s.word_count), str(s.utterance_count), format_duration(s.duration_ms))

    console.print(table)


@cli.command("extract-name")
@click.argument("email")
def extract_name(email: str):
    """Derive a display name from an email address."""
    from speaker_resolver.services import extract_name_from_email

    click.echo(extract_name_from_email(email))


if __name__ == "__main__":
    cli()
