"""Output filename helpers."""

import re
from typing import Iterable, Optional

MAX_FILENAME_LENGTH = 100

# Anything outside this set is replaced one-for-one with an underscore
UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def sanitize_filename(title: str, slo_id: Optional[str] = None) -> str:
    """Build a safe, length-bounded filename base (no extension).

    Args:
        title: Lesson title
        slo_id: Optional curriculum identifier, prefixed as ``{id}_``

    Returns:
        The sanitized name, at most 100 characters long
    """
    base = f"{slo_id}_{title}" if slo_id else title
    return UNSAFE_CHARS.sub("_", base)[:MAX_FILENAME_LENGTH]


def unique_filenames(names: Iterable[str]) -> list[str]:
    """Disambiguate repeated names by appending ``_2``, ``_3``, ...

    The first occurrence of a name is left unchanged. Suffixed names are
    shortened first so they never exceed MAX_FILENAME_LENGTH.
    """
    seen: dict[str, int] = {}
    taken = set()
    result: list[str] = []

    for name in names:
        candidate = name
        count = seen.get(name, 1)
        while candidate in taken:
            count += 1
            suffix = f"_{count}"
            candidate = name[: MAX_FILENAME_LENGTH - len(suffix)] + suffix
        seen[name] = count
        taken.add(candidate)
        result.append(candidate)

    return result
