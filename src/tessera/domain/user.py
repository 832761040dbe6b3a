"""User entity managed by the user service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


def is_valid_email(email: str) -> bool:
    """Loose email shape check: must contain both '@' and '.'."""
    return "@" in email and "." in email


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """A user record.

    `id` and `created_at` are fixed once the service has stored the user; only
    `name` and `email` are changed by updates.
    """

    id: int
    name: str = ""
    email: str = ""
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        # None is stored as "" so that is_valid(), not construction, rejects it
        if self.name is None:
            self.name = ""
        if self.email is None:
            self.email = ""

    def is_valid(self) -> bool:
        """Return True when name and email are present and the email looks valid."""
        return bool(self.name) and bool(self.email) and is_valid_email(self.email)

    def __str__(self) -> str:
        return (
            f"User {{ Id: {self.id}, Name: {self.name}, Email: {self.email}, "
            f"CreatedAt: {self.created_at:%Y-%m-%d %H:%M:%S} }}"
        )
