"""Paste identifier generation and shape checks

Identifiers are 8 lowercase hexadecimal characters drawn from the operating
system's CSPRNG (32 bits of entropy). They are unique while a paste is live
with high probability, not by construction.

Functions:
    generate_paste_id() -> str
        Generate a fresh random paste identifier.

    is_valid_paste_id(value) -> bool
        Check that a value has the exact identifier shape.

    normalize_paste_id(value) -> str | None
        Return the canonical (lowercase) identifier, or None if malformed.

Example:
    >>> from ephemeralpaste.utils import generate_paste_id, is_valid_paste_id
    >>> paste_id = generate_paste_id()
    >>> len(paste_id)
    8
    >>> is_valid_paste_id(paste_id)
    True
    >>> is_valid_paste_id('../etc/passwd')
    False
"""

import re
import secrets
from typing import Any

from ephemeralpaste.constants import PasteId


PASTE_ID_PATTERN = re.compile(rf'[0-9a-fA-F]{{{PasteId.LENGTH}}}')


def generate_paste_id() -> str:
    """Generate a random 8-character hexadecimal paste identifier.

    NOTE:
        - 32 bits of entropy: collisions between live pastes are unlikely but
          possible. Pastes are short-lived, which keeps the live set small.
    """
    return secrets.token_hex(PasteId.NUM_BYTES)


def is_valid_paste_id(value: Any) -> bool:
    return isinstance(value, str) and PASTE_ID_PATTERN.fullmatch(value) is not None


def normalize_paste_id(value: Any) -> str | None:
    """Return the lowercase form of a well-formed identifier, None otherwise.

    Generated identifiers are lowercase, so uppercase input addresses the same paste.
    """
    if not is_valid_paste_id(value):
        return None
    return value.lower()
