"""Typed dataclasses describing apidoc-markdown generator configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path


class ConfigurationError(ValueError):
    """Raised when a required path is missing or the output mode is invalid."""


@dc.dataclass(slots=True)
class GeneratorConfig:
    """A fully resolved generator configuration.

    Attributes
    ----------
    input : Path | None
        apiDoc output to read: a directory holding ``api_data.json`` and
        ``api_project.json`` or a single combined JSON file.
    output : Path | None
        Target Markdown file (single-file mode) or directory (multi-file mode).
    template : str | None
        Raw Jinja text, bundled template name, or path to a template file.
    header, footer, prepend : Path | None
        Markdown files injected into the render context.
    apidoc_json : Path | None
        Custom ``apidoc.json`` whose keys override the project metadata.
    multi : bool
        Render one document per group instead of a single document.
    create_path : bool
        Create the output directory when it does not exist.
    use_order_prefix : bool
        Prefix multi-file names with a two-digit ordinal.
    toc_file : bool
        Write a ``README.md`` table of contents in multi-file mode.
    debug : bool
        Persist ``api_project.json`` and ``api_data.json`` next to the output.
    """

    input: Path | None = None
    output: Path | None = None
    template: str | None = None
    header: Path | None = None
    footer: Path | None = None
    prepend: Path | None = None
    apidoc_json: Path | None = None
    multi: bool = False
    create_path: bool = False
    use_order_prefix: bool = False
    toc_file: bool = False
    debug: bool = False


PATH_FIELDS = frozenset(
    {"input", "output", "header", "footer", "prepend", "apidoc_json"}
)
FLAG_FIELDS = frozenset(
    {"multi", "create_path", "use_order_prefix", "toc_file", "debug"}
)


__all__ = ["FLAG_FIELDS", "PATH_FIELDS", "ConfigurationError", "GeneratorConfig"]
