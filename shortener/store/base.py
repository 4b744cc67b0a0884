"""Abstract base class for shortcode registry implementations."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Dict, Any

from .models import Entry, Click


class ShortcodeRegistryBase(ABC):
    """Abstract base class for shortcode registry operations."""

    @abstractmethod
    def create(
        self,
        target_url: str,
        validity_minutes: int,
        requested_code: Optional[str] = None,
    ) -> Entry:
        """Create a new shortcode mapping.

        Args:
            target_url: The original long URL
            validity_minutes: Minutes from now until the entry expires
            requested_code: Optional explicit shortcode

        Returns:
            The stored entry (with no clicks)

        Raises:
            ShortcodeConflictError: If requested_code is already taken
            ShortcodeExhaustedError: If no free random code could be found
        """
        pass

    @abstractmethod
    def lookup(self, code: str, include_clicks: bool = True) -> Entry:
        """Get the entry for a shortcode, expired or not.

        Args:
            code: The shortcode to lookup
            include_clicks: Whether to snapshot the click history

        Returns:
            The entry, with all clicks recorded so far or with none

        Raises:
            ShortcodeNotFoundError: If the code was never created
        """
        pass

    @abstractmethod
    def record_click(self, code: str, click: Click) -> bool:
        """Append a click to a shortcode's history.

        Args:
            code: The shortcode that was visited
            click: The click to record

        Returns:
            True if recorded, False if the code does not exist
        """
        pass

    @abstractmethod
    def now(self) -> datetime:
        """Current time as seen by the registry, used for expiry checks."""
        pass

    @abstractmethod
    def statistics(self) -> Dict[str, Any]:
        """Get registry statistics.

        Returns:
            Dictionary with total_codes, active_codes, expired_codes, total_clicks
        """
        pass

    @abstractmethod
    def __contains__(self, code: str) -> bool:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
