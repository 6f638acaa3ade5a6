"""Semantic-version comparison used when deduplicating endpoint records.

Example
-------
>>> from apidoc_markdown.versions import is_greater
>>> is_greater("1.2.0", "1.1.0-rc.1")
True
>>> is_greater("1.0.0-rc.1", "1.0.0")
False
"""

from __future__ import annotations

import functools

import semver


@functools.lru_cache(maxsize=512)
def parse_version(text: str) -> semver.Version:
    """Parse ``text`` into a :class:`semver.Version`.

    A single leading ``v`` or ``=`` is accepted, as apiDoc projects commonly
    write ``@apiVersion v1.2.0``.

    Raises
    ------
    ValueError
        If ``text`` is not a valid semantic version.
    """
    normalized = text.strip()
    if normalized[:1] in {"v", "V", "="}:
        normalized = normalized[1:].strip()
    return semver.Version.parse(normalized)


def is_greater(a: str, b: str) -> bool:
    """Return True when ``a`` is a strictly greater semantic version than ``b``."""
    return parse_version(a) > parse_version(b)


__all__ = ["is_greater", "parse_version"]
