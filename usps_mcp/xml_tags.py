"""Regex-based tag extraction for USPS response bodies.

USPS Web Tools responses are small and shallow, so fields are pulled out
with a non-greedy pattern instead of a full XML parse. Only bare
``<Tag>...</Tag>`` pairs match; an opening tag carrying attributes is
skipped.
"""

import re
from functools import lru_cache


@lru_cache(maxsize=64)
def _tag_pattern(tag: str) -> re.Pattern:
    name = re.escape(tag)
    return re.compile(rf"<{name}>([\s\S]*?)</{name}>", re.IGNORECASE)


def extract_first(text: str, tag: str) -> str:
    """Return the first inner text of ``<tag>``, trimmed, or "" if absent.

    Args:
        text: XML text to search.
        tag: Element name, matched case-insensitively.

    Returns:
        Inner text of the first match with surrounding whitespace removed.

    Example:
        >>> extract_first("<City> LOS ANGELES </City>", "city")
        'LOS ANGELES'
    """
    match = _tag_pattern(tag).search(text)
    return match.group(1).strip() if match else ""


def extract_all(text: str, tag: str) -> list[str]:
    """Return every inner text of ``<tag>`` in document order, untrimmed."""
    return _tag_pattern(tag).findall(text)
