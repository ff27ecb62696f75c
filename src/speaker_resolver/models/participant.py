"""Participant and contact entities - the real people a speaker may resolve to."""

from typing import Optional

from pydantic import AliasChoices, Field

from speaker_resolver.models.base import ResolverModel


class ContactRecord(ResolverModel):
    """An entry from the contacts directory."""

    name: str = ""
    given_name: str = Field("", validation_alias=AliasChoices("given_name", "givenName"))
    family_name: str = Field("", validation_alias=AliasChoices("family_name", "familyName"))
    emails: set[str] = Field(default_factory=set)


# Normalized (lower-cased, trimmed) email -> contact
ContactDirectory = dict[str, ContactRecord]


def normalize_email(email: str) -> str:
    """Normalize an email for directory lookups."""
    return email.strip().lower()


def build_contact_directory(records: list[ContactRecord]) -> ContactDirectory:
    """Index contacts by every email they carry.

    When two contacts share an email the first one wins.
    """
    directory: ContactDirectory = {}
    for record in records:
        for email in sorted(record.emails):
            directory.setdefault(normalize_email(email), record)
    return directory


class ParticipantRecord(ResolverModel):
    """A calendar attendee as a candidate identity for a speaker."""

    email: Optional[str] = None
    name: str = "Unknown"
    given_name: str = Field("", validation_alias=AliasChoices("given_name", "givenName"))
    family_name: str = Field("", validation_alias=AliasChoices("family_name", "familyName"))

    @property
    def identity_key(self) -> str:
        """Email when known, otherwise the display name."""
        return self.email or self.name
