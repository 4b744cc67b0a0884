"""Data models for the shortcode registry."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class Click:
    """A single recorded redirect."""

    timestamp: Optional[datetime] = None
    referrer: Optional[str] = None
    location: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "referrer": self.referrer,
            "location": self.location,
        }


@dataclass(frozen=True)
class Entry:
    """Represents one shortcode mapping in the registry.

    ``clicks`` is a snapshot taken when the entry was read; the registry
    owns the live click history.
    """

    code: str
    target_url: str
    created_at: datetime
    expires_at: datetime
    clicks: Tuple[Click, ...] = ()

    @property
    def total_clicks(self) -> int:
        return len(self.clicks)

    def is_expired(self, now: datetime) -> bool:
        """Check expiry against ``now``. Never cached."""
        return now > self.expires_at

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "code": self.code,
            "target_url": self.target_url,
            "created_at": self.created_at.isoformat(),
            "expires_at": self.expires_at.isoformat(),
            "clicks": [click.to_dict() for click in self.clicks],
        }


def is_expired(entry: Entry, now: datetime) -> bool:
    """Return True when ``now`` is past the entry's expiry timestamp."""
    return entry.is_expired(now)
