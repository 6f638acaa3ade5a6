"""Name multi-file outputs and build the README table of contents.

File names and TOC entries are computed from the same
:class:`~apidoc_markdown.models.OutputEntry` list and the same position
resolver, so with ordinal prefixes enabled the file ``03_Users.md`` is always
the third link in ``README.md``.
"""

from __future__ import annotations

import typing as typ

from apidoc_markdown.models import OutputEntry

from .ordering import build_position_resolver, order_by_position

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from apidoc_markdown.models import ProjectMetadata, RenderedArtifact

TOC_NAME = "README"
MARKDOWN_SUFFIX = ".md"


def format_title(name: str) -> str:
    """Return ``name`` with underscores shown as spaces, for link text."""
    return name.replace("_", " ")


def ordinal_prefix(ordinal: int) -> str:
    """Return the two-digit, zero-padded file prefix for ``ordinal``."""
    return f"{ordinal:02d}_"


def name_artifacts(
    artifacts: cabc.Sequence[RenderedArtifact],
    output_dir: Path,
    project_order: cabc.Sequence[str] | None = None,
    *,
    use_order_prefix: bool = False,
) -> list[OutputEntry]:
    """Assign file names and output paths to rendered multi-file artifacts.

    Parameters
    ----------
    artifacts : Sequence[RenderedArtifact]
        Rendered documents in planning order.
    output_dir : Path
        Directory the Markdown files are written to.
    project_order : Sequence[str], optional
        Declared group order, matched case-insensitively.
    use_order_prefix : bool, optional
        When True, prefix every file name with ``NN_`` where ``NN`` is the
        artifact's 1-based position in the table of contents.

    Returns
    -------
    list[OutputEntry]
        One entry per artifact, in planning order.
    """
    ordinals: dict[int, int] = {}
    if use_order_prefix:
        resolver = build_position_resolver(project_order)
        ranked = order_by_position(
            enumerate(artifacts), lambda pair: pair[1].logical_name, resolver
        )
        ordinals = {index: rank for rank, (index, _) in enumerate(ranked, start=1)}

    entries: list[OutputEntry] = []
    for index, artifact in enumerate(artifacts):
        file_name = artifact.logical_name
        if use_order_prefix:
            file_name = f"{ordinal_prefix(ordinals[index])}{file_name}"
        entries.append(
            OutputEntry(
                output_path=output_dir / f"{file_name}{MARKDOWN_SUFFIX}",
                content=artifact.content,
                logical_name=artifact.logical_name,
                file_name=file_name,
            )
        )
    return entries


def toc_order(
    entries: cabc.Iterable[OutputEntry], project_order: cabc.Sequence[str] | None
) -> list[OutputEntry]:
    """Return ``entries`` in table-of-contents order.

    Entries whose logical name appears in ``project_order`` come first, by
    declared position; the others follow in their incoming order.
    """
    resolver = build_position_resolver(project_order)
    return order_by_position(entries, lambda entry: entry.logical_name, resolver)


def build_toc(project: ProjectMetadata, entries: cabc.Iterable[OutputEntry]) -> str:
    """Render the README table of contents linking every output file.

    The layout is a ``# {name} Documentation`` title (``API`` when the project
    has no name), the optional project description, a ``## Table of
    Contents`` heading, and one ``- [Label](./file.md)`` bullet per entry.
    """
    lines = [f"# {project.name or 'API'} Documentation", ""]
    if project.description:
        lines.extend([project.description, ""])
    lines.extend(["## Table of Contents", ""])
    lines.extend(
        f"- [{format_title(entry.logical_name)}](./{entry.file_name}{MARKDOWN_SUFFIX})"
        for entry in toc_order(entries, project.order)
    )
    return "\n".join(lines) + "\n"


def toc_entry(output_dir: Path, content: str) -> OutputEntry:
    """Wrap README ``content`` in an :class:`OutputEntry`."""
    return OutputEntry(
        output_path=output_dir / f"{TOC_NAME}{MARKDOWN_SUFFIX}",
        content=content,
        logical_name=TOC_NAME,
        file_name=TOC_NAME,
    )


__all__ = [
    "MARKDOWN_SUFFIX",
    "TOC_NAME",
    "build_toc",
    "format_title",
    "name_artifacts",
    "ordinal_prefix",
    "toc_entry",
    "toc_order",
]
