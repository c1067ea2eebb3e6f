"""
User records and their store.

Users carry a name, a unique email and an optional role. Emails are
stored trimmed and lowercased so that uniqueness and lookups are
case-insensitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .tabular import TabularStore


class Role(str, Enum):
    """Dashboard roles. Stored only; enforcement belongs to callers."""

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


@dataclass(frozen=True)
class User:
    """A dashboard user.

    Attributes:
        id: Store-assigned identifier
        name: Display name
        email: Normalized (trimmed, lowercased) email
        role: Optional role
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 last modification timestamp
    """

    id: str
    name: str
    email: str
    role: Role | None
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value if self.role else None,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore(TabularStore[User]):
    """Store for User records, searchable by name and email."""

    kind = "User"
    record_type = User
    mutable_fields = ("name", "email", "role")
    required_fields = ("name", "email")
    searchable_fields = ("name", "email")

    def normalize(self, field_name: str, value: Any) -> Any:
        if field_name == "name":
            return value.strip()
        if field_name == "email":
            return normalize_email(value)
        if field_name == "role":
            return Role(value) if value else None
        return value

    def get_by_email(self, email: str) -> User | None:
        """Exact, case-insensitive lookup by email."""
        return self.find_one("email", email)


SEED_USERS: list[dict[str, Any]] = [
    {"name": "Admin User", "email": "admin@example.com", "role": Role.ADMIN},
    {"name": "Editor User", "email": "editor@example.com", "role": Role.EDITOR},
    {"name": "Viewer User", "email": "viewer@example.com", "role": Role.VIEWER},
]
