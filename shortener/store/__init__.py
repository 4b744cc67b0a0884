"""Shortcode registry storage layer."""

from .base import ShortcodeRegistryBase
from .memory import InMemoryShortcodeRegistry
from .models import Entry, Click, is_expired

__all__ = ["ShortcodeRegistryBase", "InMemoryShortcodeRegistry", "Entry", "Click", "is_expired"]
