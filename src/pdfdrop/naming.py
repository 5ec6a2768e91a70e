from __future__ import annotations

import re
import time

# Управляющие коды; остальные символы клиентского имени сохраняются как есть
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f\x7f]")
PATH_SEPARATORS = re.compile(r"[/\\]")


def current_millis() -> int:
    """Return the current Unix time in milliseconds."""
    return time.time_ns() // 1_000_000


def clean_filename(name: str, replacement: str = "_") -> str:
    """Reduce a client-supplied filename to a single path component.

    Directory parts are dropped for both ``/`` and ``\\`` separators and
    control characters (NUL included) are replaced. Anything else is kept,
    so the stored name still ends with what the client sent.

    :param name: original filename as sent by the client.
    :param replacement: character to substitute.
    :return: cleaned filename; empty when ``name`` ends with a separator.
    """
    base = PATH_SEPARATORS.split(name)[-1]
    return CONTROL_CHARS_PATTERN.sub(replacement, base)


def storage_name(timestamp: int, original_name: str, attempt: int = 0) -> str:
    """Build the on-disk name ``{timestamp}-{original_name}``.

    ``attempt`` greater than zero inserts a counter after the timestamp
    (``{timestamp}-{attempt}-{original_name}``) so that uploads of the same
    file within one millisecond never share a name.
    """
    cleaned = clean_filename(original_name)
    if attempt:
        return f"{timestamp}-{attempt}-{cleaned}"
    return f"{timestamp}-{cleaned}"


__all__ = ["CONTROL_CHARS_PATTERN", "clean_filename", "current_millis", "storage_name"]
