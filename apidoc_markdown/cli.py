"""Cyclopts CLI entrypoint for rendering apiDoc output as Markdown.

The ``apidoc-markdown`` console script reads the JSON that ``apidoc`` emits and
writes either one Markdown document or one document per API group, optionally
with ordinal file prefixes and a ``README.md`` table of contents. Every option
can also come from an ``APIDOC_MARKDOWN_*`` environment variable or from an
``apidoc-markdown.yaml`` file.

Examples
--------
Render a single document:

>>> from apidoc_markdown.cli import app
>>> app(["-i", "doc", "-o", "API.md"])  # doctest: +SKIP

Render one file per group with a table of contents:

>>> app(
...     ["-i", "doc", "-o", "api", "--multi", "--use-order-prefix", "--toc-file"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import DEFAULT_CONFIG_NAME, load_generator_config, resolve_config
from .generator import MarkdownFileSystemGenerator
from .rendering import bundled_templates

app = App(
    name="apidoc-markdown",
    help="Generate Markdown documentation from apiDoc output.",
    config=cyclopts.config.Env("APIDOC_MARKDOWN_", command=False),  # type: ignore[unknown-argument]
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    level = logging.WARNING
    if debug:
        level = logging.INFO
    if verbose:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _file_values(config: Path | None) -> dict[str, typ.Any]:
    """Load option defaults from ``config`` or a discovered config file."""
    if config is not None:
        return load_generator_config(config)
    discovered = Path.cwd() / DEFAULT_CONFIG_NAME
    if discovered.is_file():
        return load_generator_config(discovered)
    return {}


@app.default
def generate(
    *,
    input: typ.Annotated[  # noqa: A002 - mirrors the --input flag
        Path | None,
        Parameter(name=["--input", "-i"], help="apiDoc output directory or JSON file"),
    ] = None,
    output: typ.Annotated[
        Path | None,
        Parameter(
            name=["--output", "-o"],
            help="Output .md file, or output directory with --multi",
        ),
    ] = None,
    template: typ.Annotated[
        str | None,
        Parameter(
            name=["--template", "-t"],
            help="Bundled template name, template path, or raw Jinja text",
        ),
    ] = None,
    header: typ.Annotated[
        Path | None, Parameter(help="Markdown file inserted as the header")
    ] = None,
    footer: typ.Annotated[
        Path | None, Parameter(help="Markdown file inserted as the footer")
    ] = None,
    prepend: typ.Annotated[
        Path | None, Parameter(help="Markdown file prepended to the document")
    ] = None,
    apidoc_json: typ.Annotated[
        Path | None,
        Parameter(help="Custom apidoc.json overriding the project metadata"),
    ] = None,
    multi: typ.Annotated[
        bool | None,
        Parameter(name=["--multi", "-m"], help="Write one file per API group"),
    ] = None,
    create_path: typ.Annotated[
        bool | None, Parameter(help="Create the output directory if missing")
    ] = None,
    use_order_prefix: typ.Annotated[
        bool | None,
        Parameter(help="Prefix multi-file names with their reading order"),
    ] = None,
    toc_file: typ.Annotated[
        bool | None,
        Parameter(help="Write a README.md table of contents with --multi"),
    ] = None,
    debug: typ.Annotated[
        bool | None,
        Parameter(help="Also write api_project.json and api_data.json"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help=f"Options file (defaults to ./{DEFAULT_CONFIG_NAME})"),
    ] = None,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Generate Markdown documentation from apiDoc output.

    Parameters
    ----------
    input : Path or None, optional
        Directory holding ``api_data.json`` and ``api_project.json``, or a
        combined JSON file.
    output : Path or None, optional
        Target ``.md`` file in single-file mode, or directory with ``multi``.
    template : str or None, optional
        Bundled template name, template path, or raw Jinja text.
    header, footer, prepend : Path or None, optional
        Markdown files made available to the template.
    apidoc_json : Path or None, optional
        ``apidoc.json`` whose keys override the project metadata.
    multi, create_path, use_order_prefix, toc_file, debug : bool or None
        Generator flags; ``None`` defers to the options file.
    config : Path or None, optional
        YAML options file; ``./apidoc-markdown.yaml`` is used when present.
    verbose : bool, optional
        Log every pipeline step.

    Returns
    -------
    None
        Writes the Markdown files and prints each written path.

    Raises
    ------
    ConfigurationError
        If a required path is missing or the output does not match the mode.
    MissingTitleError
        If an apiDoc record has no title.
    """
    settings = resolve_config(
        _file_values(config),
        input=input,
        output=output,
        template=template,
        header=header,
        footer=footer,
        prepend=prepend,
        apidoc_json=apidoc_json,
        multi=multi,
        create_path=create_path,
        use_order_prefix=use_order_prefix,
        toc_file=toc_file,
        debug=debug,
    )
    _configure_logging(verbose=verbose, debug=settings.debug)
    for entry in MarkdownFileSystemGenerator(settings).run():
        print(f"wrote {_format_path(entry.output_path)}")


@app.command(help="List the templates bundled with apidoc-markdown.")
def templates() -> None:
    """Print the name of every bundled template, one per line."""
    for name in bundled_templates():
        print(name)


def main(tokens: list[str] | None = None) -> None:
    """Invoke the Cyclopts application behind the ``apidoc-markdown`` command.

    Examples
    --------
    >>> main(["--help"])  # doctest: +SKIP
    """
    app(tokens)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
