"""
Version trailer codec.

The last fragment of an envelope body records which tool version wrote the
commit, e.g. ``X-VP-Version: 4.2.0``.
"""

from __future__ import annotations

VP_VERSION_TAG = "X-VP-Version"
SEPARATOR = ": "

_PREFIX = VP_VERSION_TAG + SEPARATOR


def format_version(version: str) -> str:
    """Render the trailer fragment for `version`."""
    return f"{_PREFIX}{version}"


def matches(fragment: str) -> bool:
    """True iff the fragment starts with the exact ``X-VP-Version: `` prefix."""
    return fragment.startswith(_PREFIX)


def looks_like_marker(fragment: str) -> bool:
    """True if the fragment starts with the tag name at all, well-formed or not."""
    return fragment.startswith(VP_VERSION_TAG)


def extract(fragment: str) -> str | None:
    """Return the version carried by a trailer fragment.

    Only the first line is the version; anything after it (git trailers
    such as ``Signed-off-by``) is ignored. Returns None for a wrong prefix
    or an empty value.
    """
    if not matches(fragment):
        return None
    value = fragment[len(_PREFIX):].split("\n", 1)[0].strip()
    return value or None
