"""Terminal key decoding and key dispatch tables."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

ENTER_KEYS = frozenset({"ENTER_CR", "ENTER_LF"})

__all__ = [
    "ENTER_KEYS",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "read_key",
]
