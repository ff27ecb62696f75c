"""Input loading - reads transcripts, timelines, contacts and participants from JSON files.

Files may use the field names of this package or the camelCase payloads of
the desktop application; both are accepted by the models.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from speaker_resolver.models import (
    ContactDirectory,
    ContactRecord,
    ParticipantRecord,
    SpeechTimeline,
    Utterance,
    build_contact_directory,
    normalize_email,
)


class InputFileError(Exception):
    """Raised when an input file is missing or cannot be parsed."""
    pass


_UTTERANCES = TypeAdapter(list[Utterance])
_CONTACTS = TypeAdapter(list[ContactRecord])
_PARTICIPANTS = TypeAdapter(list[ParticipantRecord])


def _read_json(path: str | Path) -> Any:
    file_path = Path(path)
    if not file_path.is_file():
        raise InputFileError(f"File not found: {file_path}")
    try:
        return json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InputFileError(f"Invalid JSON in {file_path}: {e}") from e


def _unwrap(data: Any, *keys: str) -> Any:
    """Return the list stored under the first matching key of a wrapper object."""
    if isinstance(data, dict):
        for key in keys:
            if key in data:
                return data[key]
    return data


def load_transcript(path: str | Path) -> list[Utterance]:
    """Load a transcript: a list of utterances, or an object with an "utterances" list."""
    data = _unwrap(_read_json(path), "utterances", "transcript", "entries")
    try:
        return _UTTERANCES.validate_python(data)
    except ValidationError as e:
        raise InputFileError(f"Invalid transcript in {path}: {e}") from e


def load_timeline(path: str | Path) -> SpeechTimeline:
    """Load a speech timeline object with a "participants" list."""
    data = _read_json(path)
    if isinstance(data, list):
        data = {"participants": data}
    try:
        return SpeechTimeline.model_validate(data)
    except ValidationError as e:
        raise InputFileError(f"Invalid speech timeline in {path}: {e}") from e


def load_contacts(path: str | Path) -> ContactDirectory:
    """Load a contacts directory.

    Accepts either an object keyed by email or a list of contact records,
    which is indexed by each record's emails.
    """
    data = _read_json(path)
    try:
        if isinstance(data, dict):
            directory: ContactDirectory = {}
            for email, record in data.items():
                contact = ContactRecord.model_validate(record)
                if not contact.emails:
                    contact = contact.model_copy(update={"emails": {email}})
                directory[normalize_email(email)] = contact
            return directory

        return build_contact_directory(_CONTACTS.validate_python(data))
    except ValidationError as e:
        raise InputFileError(f"Invalid contacts in {path}: {e}") from e


def load_participants(path: str | Path) -> tuple[list[str], list[ParticipantRecord]]:
    """Load calendar participants.

    A list of strings yields bare identifiers. A list of objects yields full
    participant records, with their emails (or names) as identifiers.

    Returns:
        (identifiers, participant records)
    """
    data = _unwrap(_read_json(path), "participants", "attendees")
    if not isinstance(data, list):
        raise InputFileError(f"Expected a list of participants in {path}")

    if all(isinstance(item, str) for item in data):
        return list(data), []

    try:
        records = _PARTICIPANTS.validate_python(data)
    except ValidationError as e:
        raise InputFileError(f"Invalid participants in {path}: {e}") from e
    return [r.identity_key for r in records], records
