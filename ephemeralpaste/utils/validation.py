"""Input validation for paste creation

Functions:
    validate_paste_input(content, ttl_seconds=None, max_views=None) -> None
        Collect every problem with the given input and raise a single
        ValidationError listing all of them.
    as_integer(value) -> int | None
        Convert a validated count to int (integral JSON floats such as 60.0).

Example:
    >>> validate_paste_input('hello', ttl_seconds=60, max_views=2)
    >>> validate_paste_input('', ttl_seconds=0)
    Traceback (most recent call last):
        ...
    ephemeralpaste.exceptions.ValidationError: content is required and must be a non-empty string; ttl_seconds must be an integer >= 1
"""

from typing import Any

from ephemeralpaste.constants import TTL, Limits
from ephemeralpaste.exceptions import ValidationError


def _is_integer(value: Any) -> bool:
    # bool is a subclass of int, but True/False are not valid counts.
    # JSON numbers like 60.0 count as integers.
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def as_integer(value: Any) -> int | None:
    """Return a validated count as int (60.0 -> 60), None stays None."""
    return None if value is None else int(value)


def validate_paste_input(content: Any, ttl_seconds: Any = None, max_views: Any = None) -> None:
    """Validate paste creation input

    Args:
        content (Any):
            Paste content. Must be a string with at least one non-whitespace
            character and at most 1,000,000 characters.
        ttl_seconds (Any):
            Optional lifetime. Must be an integer in [1, 31536000].
        max_views (Any):
            Optional view limit. Must be an integer in [1, 1000000].

    Raises:
        ValidationError:
            If any of the inputs is invalid. `errors` lists every problem found.
    """
    errors = []

    if not isinstance(content, str) or not content.strip():
        errors.append('content is required and must be a non-empty string')
    elif len(content) > Limits.MAX_CONTENT_LENGTH:
        errors.append(f'content must be <= {Limits.MAX_CONTENT_LENGTH} characters')

    if ttl_seconds is not None:
        if not _is_integer(ttl_seconds) or ttl_seconds < 1:
            errors.append('ttl_seconds must be an integer >= 1')
        elif ttl_seconds > TTL.MAX:
            errors.append(f'ttl_seconds must be <= {TTL.MAX} (1 year)')

    if max_views is not None:
        if not _is_integer(max_views) or max_views < 1:
            errors.append('max_views must be an integer >= 1')
        elif max_views > Limits.MAX_VIEWS:
            errors.append(f'max_views must be <= {Limits.MAX_VIEWS}')

    if errors:
        raise ValidationError(errors)
