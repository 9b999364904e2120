# lead_scout/contacts.py
import re
from dataclasses import dataclass, field
from typing import List, Optional

from email_validator import validate_email, EmailNotValidError

# Kenyan mobile numbers: 07xx/01xx trunk form or 254/+254 international form
PHONE_PATTERN = re.compile(r"(?<!\d)(?:\+?254|0)(?:7\d{8}|1\d{8})(?!\d)")
EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# Things that look like addresses but are asset names scraped from markup
_EMAIL_FALSE_POSITIVES = ('.png', '.jpg', '.jpeg', '.svg', '.gif', '.webp', 'w3.org')


@dataclass
class Contacts:
    phones: List[str] = field(default_factory=list)
    emails: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.phones and not self.emails


def extract_phone_numbers(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return list(dict.fromkeys(PHONE_PATTERN.findall(text)))  # de-dupe, keep order


def extract_emails(text: Optional[str]) -> List[str]:
    if not text:
        return []
    emails: List[str] = []
    seen = set()
    for m in EMAIL_PATTERN.finditer(text):
        candidate = m.group(0)
        if any(x in candidate.lower() for x in _EMAIL_FALSE_POSITIVES):
            continue
        try:
            email = validate_email(candidate, check_deliverability=False).normalized
        except EmailNotValidError:
            continue
        key = email.lower()
        if key not in seen:
            seen.add(key)
            emails.append(email)
    return emails


def extract_contacts(text: Optional[str]) -> Contacts:
    """Pull phone numbers and email addresses out of free text. Never raises on odd input."""
    return Contacts(phones=extract_phone_numbers(text), emails=extract_emails(text))
