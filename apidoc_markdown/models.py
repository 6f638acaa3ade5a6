"""Dataclasses shared by the assembly, rendering, and output stages.

apiDoc records carry an open-ended bag of rendering fields (parameters,
examples, permissions, ...). The core only reads ``group``, ``title`` and
``version``; every other key is kept untouched in ``fields`` and exposed to
templates through item access, so ``{{ entry.url }}`` works in Jinja.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ
from types import MappingProxyType

if typ.TYPE_CHECKING:
    from pathlib import Path

DEFAULT_VERSION = "0.0.0"


class _FieldAccess:
    """Mixin exposing the raw ``fields`` mapping through item access."""

    __slots__ = ()
    fields: cabc.Mapping[str, typ.Any]

    def __getitem__(self, key: str) -> typ.Any:  # noqa: ANN401 - opaque payload
        return self.fields[key]

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def get(self, key: str, default: typ.Any = None) -> typ.Any:  # noqa: ANN401
        """Return ``fields[key]`` or ``default`` when the key is absent."""
        return self.fields.get(key, default)

    def to_dict(self) -> dict[str, typ.Any]:
        """Return a plain, mutable copy of the raw payload."""
        return dict(self.fields)


@dc.dataclass(frozen=True, slots=True)
class EndpointRecord(_FieldAccess):
    """One documented API operation as produced by apiDoc.

    Attributes
    ----------
    group : str
        Name of the documentation section the endpoint belongs to.
    title : str | None
        Endpoint title; ``None`` or empty marks an invalid record.
    version : str
        Semantic version string (``MAJOR.MINOR.PATCH[-pre]``).
    fields : Mapping[str, Any]
        The complete raw record, passed through to templates.
    """

    group: str
    title: str | None
    version: str
    fields: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    @classmethod
    def from_mapping(cls, payload: cabc.Mapping[str, typ.Any]) -> EndpointRecord:
        """Build a record from a raw apiDoc mapping without validating it."""
        title = payload.get("title")
        version = payload.get("version")
        return cls(
            group=str(payload.get("group") or ""),
            title=None if title is None else str(title),
            version=str(version) if version else DEFAULT_VERSION,
            fields=MappingProxyType(dict(payload)),
        )


@dc.dataclass(slots=True)
class GroupNode:
    """A logical section of the documentation and its deduplicated entries."""

    name: str
    entries: list[EndpointRecord] = dc.field(default_factory=list)


@dc.dataclass(frozen=True, slots=True)
class ProjectMetadata(_FieldAccess):
    """Project-level metadata from ``api_project.json``.

    Attributes
    ----------
    name : str | None
        Project name used in document titles.
    description : str | None
        Project description placed under the README title.
    order : tuple[str, ...]
        User-declared group order, compared case-insensitively.
    fields : Mapping[str, Any]
        The complete raw metadata (``title``, ``version``, ``header``, ...).
    """

    name: str | None = None
    description: str | None = None
    order: tuple[str, ...] = ()
    fields: cabc.Mapping[str, typ.Any] = dc.field(
        default_factory=lambda: MappingProxyType({}), compare=False, repr=False
    )

    @classmethod
    def from_mapping(
        cls, payload: cabc.Mapping[str, typ.Any] | None
    ) -> ProjectMetadata:
        """Build metadata from a raw mapping, normalizing ``order`` to strings."""
        raw = dict(payload or {})
        order = raw.get("order") or ()
        if isinstance(order, str):
            order = (order,)
        return cls(
            name=_optional_str(raw.get("name")),
            description=_optional_str(raw.get("description")),
            order=tuple(str(item) for item in order),
            fields=MappingProxyType(raw),
        )

    def with_overrides(
        self, overrides: cabc.Mapping[str, typ.Any]
    ) -> ProjectMetadata:
        """Return new metadata with ``overrides`` merged over the raw payload."""
        merged = self.to_dict()
        merged.update(overrides)
        return ProjectMetadata.from_mapping(merged)


@dc.dataclass(frozen=True, slots=True)
class ArtifactPlan:
    """One planned render: a logical name and the groups it receives."""

    logical_name: str
    data: tuple[GroupNode, ...]


@dc.dataclass(frozen=True, slots=True)
class RenderedArtifact:
    """The text produced by rendering one :class:`ArtifactPlan`."""

    logical_name: str
    content: str


@dc.dataclass(frozen=True, slots=True)
class OutputEntry:
    """A file to write (or already written) and the name it was given.

    ``file_name`` excludes the ``.md`` suffix and may carry an ``NN_`` ordinal
    prefix. Table-of-contents generation reads the same entries, so file names
    and TOC links can never disagree.
    """

    output_path: Path
    content: str
    logical_name: str
    file_name: str


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "DEFAULT_VERSION",
    "ArtifactPlan",
    "EndpointRecord",
    "GroupNode",
    "OutputEntry",
    "ProjectMetadata",
    "RenderedArtifact",
]
