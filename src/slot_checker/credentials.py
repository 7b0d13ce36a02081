"""
Operator credentials — prompted once per run, held in memory only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass(frozen=True)
class Credential:
    email: str
    password: str = field(repr=False)

    @property
    def masked_email(self) -> str:
        """e.g. j***@example.com, safe to log."""
        user, sep, domain = self.email.partition("@")
        if not sep:
            return "***"
        return f"{user[:1]}***@{domain}"


def prompt_credential(ask: Callable[[str], str] = input) -> Credential:
    email = ask("Login email: ")
    password = ask("Login password: ")
    return Credential(email=email, password=password)
