"""Identity Lookup - resolves participant names to and from email addresses.

Lookups go through the contacts directory first and fall back to names
derived from the local part of an email address. A failed lookup is not
an error: callers receive None and keep the name without an address.
"""

import logging
import re
from typing import Iterable, Optional

from speaker_resolver.models import ContactDirectory, ContactRecord, normalize_email

logger = logging.getLogger(__name__)

UNKNOWN_NAME = "Unknown"

_LOCAL_PART_SEPARATORS = re.compile(r"[._-]")


def extract_name_from_email(email: Optional[str]) -> str:
    """Derive a display name from an email address.

    "mary.anne-smith@x.com" becomes "Mary Anne Smith". Input without an
    ``@`` or with an empty local part yields "Unknown".
    """
    if not email or "@" not in email:
        return UNKNOWN_NAME

    local_part = email.split("@", 1)[0]
    words = _LOCAL_PART_SEPARATORS.sub(" ", local_part).split()
    if not words:
        return UNKNOWN_NAME
    return " ".join(word[:1].upper() + word[1:].lower() for word in words)


class IdentityLookup:
    """Name/email resolution against one meeting's contacts directory."""

    def __init__(self, contacts: Optional[ContactDirectory] = None):
        """Initialize the lookup.

        Args:
            contacts: Contacts keyed by email; keys are normalized on the way in
        """
        self.contacts: ContactDirectory = {
            normalize_email(email): contact for email, contact in (contacts or {}).items()
        }

    def get_contact(self, email: str) -> Optional[ContactRecord]:
        """Get the directory entry for an email, if any."""
        return self.contacts.get(normalize_email(email))

    def display_name(self, email: str) -> str:
        """Best display name for an email: directory name, else derived from the address."""
        contact = self.get_contact(email)
        if contact is not None and contact.name:
            return contact.name
        return extract_name_from_email(email)

    def resolve_email(
        self,
        participant_name: Optional[str],
        candidate_identifiers: Iterable[str] = (),
    ) -> Optional[str]:
        """Find the email address belonging to a participant name.

        Tries, in order:
        1. A contact whose full name matches (case-insensitive)
        2. A contact whose given name matches the first word of the name
        3. A candidate email whose derived name matches

        Args:
            participant_name: Name as reported by the speech timeline
            candidate_identifiers: The meeting's participant emails or names

        Returns:
            The email address, or None if nothing matched
        """
        if not participant_name:
            return None

        name_lower = participant_name.strip().lower()
        first_name = name_lower.split(" ")[0]

        for email, contact in self.contacts.items():
            if contact.name and contact.name.lower() == name_lower:
                return email

        for email, contact in self.contacts.items():
            if contact.given_name and contact.given_name.lower() == first_name:
                return email

        for identifier in candidate_identifiers:
            if "@" not in identifier:
                continue
            if extract_name_from_email(identifier).lower() == name_lower:
                return identifier

        logger.debug("No email found for participant %r", participant_name)
        return None
