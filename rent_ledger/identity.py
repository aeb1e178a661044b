"""Static credential lookup for collector and manager logins.

This is a convenience gate for the presentation layer, not a security
boundary: passwords are compared in plain text.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path

from rent_ledger.exceptions import ConfigurationError
from rent_ledger.models import UserRole


@dataclass(frozen=True)
class Credential:
    """One login entry."""

    email: str
    password: str
    role: UserRole
    display_name: str = ""


DEFAULT_CREDENTIALS: tuple[Credential, ...] = (
    Credential("collector@example.com", "collector@1234", UserRole.COLLECTOR, "Collector Sameer"),
    Credential("collector2@example.com", "collector2@1234", UserRole.COLLECTOR, "Collector 2"),
    Credential("manager@example.com", "manager@1234", UserRole.MANAGER, "Manager Omar"),
)


@dataclass
class CredentialTable:
    """Credential table injected into the ledger service."""

    credentials: list[Credential] = field(default_factory=lambda: list(DEFAULT_CREDENTIALS))

    def find(self, email: str, password: str) -> Credential | None:
        """Match email case-insensitively and password exactly, both trimmed."""
        clean_email = email.strip().lower()
        clean_password = password.strip()
        for credential in self.credentials:
            if credential.email.lower() == clean_email and credential.password == clean_password:
                return credential
        return None

    def authenticate(self, email: str, password: str) -> UserRole | None:
        """Return the role for a valid login, or None."""
        credential = self.find(email, password)
        return credential.role if credential else None

    @classmethod
    def from_file(cls, path: str | Path) -> "CredentialTable":
        """Load credentials from a JSON list of objects.

        Each object needs ``email``, ``password`` and ``role``
        (``collector`` or ``manager``); ``display_name`` is optional.
        """
        try:
            with open(path, encoding="utf-8") as f:
                entries = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot read credentials file {path}: {exc}") from exc

        if not isinstance(entries, list):
            raise ConfigurationError(f"Credentials file {path} must contain a JSON list")

        try:
            credentials = [
                Credential(
                    email=entry["email"],
                    password=entry["password"],
                    role=UserRole(entry["role"]),
                    display_name=entry.get("display_name", ""),
                )
                for entry in entries
            ]
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise ConfigurationError(f"Invalid credential entry in {path}: {exc}") from exc
        return cls(credentials=credentials)
