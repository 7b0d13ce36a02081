"""
Poll state — owned by the poll loop for the lifetime of one run.

Nothing is persisted: a new run starts from a fresh state.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


@dataclass
class PollState:
    attempt_count: int = 0
    last_checked_at: Optional[datetime] = None
    found: bool = False

    def record_check(self) -> datetime:
        """Stamp the start of a check. Returns the timestamp."""
        self.last_checked_at = datetime.now(timezone.utc)
        return self.last_checked_at

    def record_miss(self) -> int:
        """Record a check that found nothing. Returns the new attempt count."""
        self.attempt_count += 1
        return self.attempt_count

    def record_found(self):
        self.found = True
