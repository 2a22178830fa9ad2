"""
EmailSet — ordered, normalized set of contact emails.
"""
import re
from typing import Iterable, Iterator, List, Optional

# RFC-5322-lite: local@domain.tld, tld ≥ 2 letters
EMAIL_RE = re.compile(r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}')


def normalize_email(raw: str) -> Optional[str]:
    """
    Clean a candidate address.

    Strips whitespace, a leading ``mailto:`` and any ``?subject=...`` suffix,
    lower-cases the domain. Returns None unless the result is exactly one
    address with exactly one '@'.
    """
    if not raw:
        return None
    value = raw.strip()
    if value.lower().startswith('mailto:'):
        value = value[len('mailto:'):]
    value = value.split('?')[0].strip()
    if value.count('@') != 1:
        return None
    local, domain = value.split('@')
    value = f"{local}@{domain.lower()}"
    if not EMAIL_RE.fullmatch(value):
        return None
    return value


class EmailSet:
    """Insertion-ordered set of normalized emails."""

    def __init__(self, emails: Iterable[str] = ()):
        self._items = {}
        self.update(emails)

    def add(self, raw: str) -> Optional[str]:
        """Normalize and add. Returns the stored address, or None if rejected."""
        email = normalize_email(raw)
        if email:
            self._items.setdefault(email, None)
        return email

    def update(self, emails: Iterable[str]):
        for email in emails:
            self.add(email)

    def first(self) -> Optional[str]:
        return next(iter(self._items), None)

    def to_list(self) -> List[str]:
        return list(self._items)

    def __contains__(self, email) -> bool:
        return email in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other) -> bool:
        if isinstance(other, EmailSet):
            return set(self._items) == set(other._items)
        if isinstance(other, (set, frozenset)):
            return set(self._items) == other
        return NotImplemented

    def __repr__(self):
        return f"EmailSet({self.to_list()!r})"
