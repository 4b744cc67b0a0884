"""In-memory implementation of the shortcode registry."""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Dict, List, Any

from ..exceptions import (
    InvalidInputError,
    ShortcodeConflictError,
    ShortcodeExhaustedError,
    ShortcodeNotFoundError,
)
from ..shortcode import ShortCodeGenerator
from .base import ShortcodeRegistryBase
from .models import Entry, Click


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class InMemoryShortcodeRegistry(ShortcodeRegistryBase):
    """Process-local shortcode registry.

    All state lives in two dictionaries guarded by a single lock:
    ``_entries`` maps codes to their immutable entries and ``_clicks``
    holds each code's append-only click list. Entries are never removed;
    expiry is evaluated at read time by callers.
    """

    DEFAULT_MAX_GENERATION_ATTEMPTS = 256

    def __init__(
        self,
        short_code_generator: Optional[ShortCodeGenerator] = None,
        max_generation_attempts: int = DEFAULT_MAX_GENERATION_ATTEMPTS,
        clock: Optional[Callable[[], datetime]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the registry.

        Args:
            short_code_generator: Generator for random codes
            max_generation_attempts: Random draws allowed per create before giving up
            clock: Returns the current time (defaults to aware UTC now)
            logger: Optional logger instance
        """
        if max_generation_attempts < 1:
            raise ValueError("max_generation_attempts must be at least 1")

        self.generator = short_code_generator or ShortCodeGenerator()
        self.max_generation_attempts = max_generation_attempts
        self.clock = clock or utc_now
        self.logger = logger or logging.getLogger(__name__)

        self._lock = threading.Lock()
        self._entries: Dict[str, Entry] = {}
        self._clicks: Dict[str, List[Click]] = {}

    def create(
        self,
        target_url: str,
        validity_minutes: int,
        requested_code: Optional[str] = None,
    ) -> Entry:
        created_at = self.clock()
        try:
            expires_at = created_at + timedelta(minutes=validity_minutes)
        except OverflowError:
            raise InvalidInputError(f"Validity of {validity_minutes} minutes is out of range")

        with self._lock:
            if requested_code is not None:
                if requested_code in self._entries:
                    self.logger.warning(f"Shortcode conflict: {requested_code}")
                    raise ShortcodeConflictError(f"Shortcode '{requested_code}' already in use")
                code = requested_code
            else:
                code = self._generate_free_code()

            entry = Entry(
                code=code,
                target_url=target_url,
                created_at=created_at,
                expires_at=expires_at,
            )
            self._clicks[code] = []
            self._entries[code] = entry

        self.logger.info(f"Created shortcode: {code} -> {target_url} (expires {entry.expires_at.isoformat()})")
        return entry

    def lookup(self, code: str, include_clicks: bool = True) -> Entry:
        with self._lock:
            entry = self._entries.get(code)
            if entry is None:
                raise ShortcodeNotFoundError(f"Shortcode '{code}' not found")
            # Stored entries never carry clicks
            if not include_clicks:
                return entry
            return replace(entry, clicks=tuple(self._clicks[code]))

    def record_click(self, code: str, click: Click) -> bool:
        if click.timestamp is None:
            click = replace(click, timestamp=self.clock())

        with self._lock:
            clicks = self._clicks.get(code)
            if clicks is None:
                self.logger.error(f"Cannot record click for unknown shortcode: {code}")
                return False
            clicks.append(click)

        self.logger.debug(f"Recorded click for {code} (referrer={click.referrer}, location={click.location})")
        return True

    def now(self) -> datetime:
        return self.clock()

    def statistics(self) -> Dict[str, Any]:
        now = self.now()
        with self._lock:
            total_codes = len(self._entries)
            expired_codes = sum(1 for entry in self._entries.values() if entry.is_expired(now))
            total_clicks = sum(len(clicks) for clicks in self._clicks.values())

        return {
            "total_codes": total_codes,
            "active_codes": total_codes - expired_codes,
            "expired_codes": expired_codes,
            "total_clicks": total_clicks,
        }

    def __contains__(self, code: str) -> bool:
        with self._lock:
            return code in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _generate_free_code(self) -> str:
        """Draw random codes until one is not taken. Caller must hold the lock.

        Raises:
            ShortcodeExhaustedError: If every attempt collided
        """
        for attempt in range(self.max_generation_attempts):
            code = self.generator.generate_random()
            if code not in self._entries:
                if attempt:
                    self.logger.debug(f"Generated code after {attempt + 1} attempts: {code}")
                return code
            self.logger.debug(f"Collision on generated code {code} (attempt {attempt + 1})")

        self.logger.error(
            f"Unable to generate a free shortcode after {self.max_generation_attempts} attempts "
            f"({len(self._entries)} codes registered)"
        )
        raise ShortcodeExhaustedError(
            f"Unable to generate unique shortcode after {self.max_generation_attempts} attempts"
        )
