"""Partition endpoint records by group and keep the newest record per title."""

from __future__ import annotations

import typing as typ

import msgspec.json as msgspec_json

from apidoc_markdown.models import EndpointRecord, GroupNode
from apidoc_markdown.versions import is_greater

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class MissingTitleError(ValueError):
    """Raised when one or more endpoint records have no ``title``.

    Attributes
    ----------
    records : list[EndpointRecord]
        The offending records, in input order.
    """

    def __init__(self, records: cabc.Sequence[EndpointRecord]) -> None:
        self.records = list(records)
        listing = msgspec_json.format(
            msgspec_json.encode([record.to_dict() for record in self.records]),
            indent=2,
        ).decode("utf-8")
        msg = (
            "Missing `title` key in one or more elements. Run with `--debug` to "
            "generate the `api_data.json` file and find the offending blocks "
            "(see https://github.com/techdyn/apidoc-markdown/issues/26).\n"
            f"Elements without `title` key: {listing}"
        )
        super().__init__(msg)


def find_untitled(records: cabc.Iterable[EndpointRecord]) -> list[EndpointRecord]:
    """Return the records whose title is missing or empty."""
    return [record for record in records if not record.title]


def group_records(records: cabc.Sequence[EndpointRecord]) -> list[GroupNode]:
    """Group ``records`` by ``group`` and deduplicate each group by title.

    Parameters
    ----------
    records : Sequence[EndpointRecord]
        Endpoint records in parser order.

    Returns
    -------
    list[GroupNode]
        One node per distinct group, in first-seen order. Each node holds at
        most one record per title: the one with the highest semantic version,
        or the first encountered when versions are equal. Entry order is not
        meaningful until :func:`~apidoc_markdown.assembly.ordering.order_groups`
        sorts it.

    Raises
    ------
    MissingTitleError
        If any record lacks a title.
    ValueError
        If a version string is not a valid semantic version.
    """
    untitled = find_untitled(records)
    if untitled:
        raise MissingTitleError(untitled)

    buckets: dict[str, dict[str, EndpointRecord]] = {}
    for record in records:
        by_title = buckets.setdefault(record.group, {})
        title = typ.cast("str", record.title)
        current = by_title.get(title)
        if current is None or is_greater(record.version, current.version):
            by_title[title] = record

    return [
        GroupNode(name=name, entries=list(by_title.values()))
        for name, by_title in buckets.items()
    ]


__all__ = ["MissingTitleError", "find_untitled", "group_records"]
