"""Short code generation utilities."""

import random
import re
import string
from typing import Optional


class ShortCodeGenerator:
    """Generate short codes for URLs."""

    # Base62 characters (alphanumeric, case-sensitive)
    BASE62_CHARS = string.ascii_letters + string.digits  # a-zA-Z0-9

    # Explicitly requested codes: 1-6 alphanumeric characters
    CODE_PATTERN = re.compile(r"[A-Za-z0-9]{1,6}")

    def __init__(self, default_length: int = 6, rng: Optional[random.Random] = None):
        """Initialize short code generator.

        Args:
            default_length: Default length for generated codes
            rng: Optional random source (defaults to the system CSPRNG)
        """
        if default_length < 1:
            raise ValueError("default_length must be at least 1")
        self.default_length = default_length
        self._rng = rng or random.SystemRandom()

    @property
    def keyspace_size(self) -> int:
        """Number of distinct codes of the default length."""
        return len(self.BASE62_CHARS) ** self.default_length

    def generate_random(self, length: Optional[int] = None) -> str:
        """Generate a random short code.

        Every character is drawn independently and uniformly from the
        62-symbol alphabet.

        Args:
            length: Length of the code (uses default if not specified)

        Returns:
            Random short code
        """
        length = length or self.default_length
        return ''.join(self._rng.choices(self.BASE62_CHARS, k=length))

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check if code has valid format (1-6 alphanumeric characters).

        Args:
            code: Code to validate

        Returns:
            True if valid format
        """
        return isinstance(code, str) and cls.CODE_PATTERN.fullmatch(code) is not None
