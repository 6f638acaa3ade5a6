"""High-level orchestration for Markdown documentation generation.

The pipeline runs in a fixed order: reject untitled records, group and
deduplicate, sort and apply the project order, plan one or many artifacts,
render each plan, then name and write the results. :func:`generate` covers
everything up to rendering and never touches the filesystem;
:class:`MarkdownFileSystemGenerator` adds configuration checks, input loading,
and file output on top.

Example
-------
>>> from pathlib import Path
>>> from apidoc_markdown.config import GeneratorConfig
>>> from apidoc_markdown.generator import MarkdownFileSystemGenerator
>>> config = GeneratorConfig(  # doctest: +SKIP
...     input=Path("doc"), output=Path("api"), multi=True, toc_file=True
... )
>>> MarkdownFileSystemGenerator(config).run()  # doctest: +SKIP
[OutputEntry(output_path=PosixPath('/work/api/Users.md'), ...), ...]
"""

from __future__ import annotations

import logging
import typing as typ

from .assembly import (
    MAIN_ARTIFACT,
    MissingTitleError,
    build_toc,
    group_records,
    name_artifacts,
    order_groups,
    plan_artifacts,
    toc_entry,
)
from .assembly.naming import MARKDOWN_SUFFIX
from .config import ConfigurationError
from .fsutil import dump_json, ensure_directory, path_exists, write_text
from .models import EndpointRecord, OutputEntry, ProjectMetadata
from .rendering import load_template, render_plans, template_renderer
from .sources import (
    API_DATA_FILE,
    API_PROJECT_FILE,
    SECTION_OPTIONS,
    JsonApiDocSource,
    load_apidoc_json,
    load_section,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

    from .config import GeneratorConfig
    from .models import GroupNode, RenderedArtifact
    from .rendering import RenderFunction
    from .sources import ApiDocSource

logger = logging.getLogger(__name__)


def assemble(
    records: cabc.Sequence[EndpointRecord], project_order: cabc.Sequence[str] | None
) -> list[GroupNode]:
    """Group, deduplicate, and order ``records`` into documentation sections."""
    return order_groups(group_records(records), project_order)


def generate(
    project: ProjectMetadata,
    records: cabc.Sequence[EndpointRecord],
    render: RenderFunction,
    *,
    multi: bool = False,
    header: str | None = None,
    footer: str | None = None,
    prepend: str | None = None,
) -> list[RenderedArtifact]:
    """Render apiDoc records into one document or one document per group.

    Parameters
    ----------
    project : ProjectMetadata
        Project metadata; ``project.order`` sets the group order.
    records : Sequence[EndpointRecord]
        Endpoint records (non-endpoint parser output already removed).
    render : RenderFunction
        Called once per artifact with the template context.
    multi : bool, optional
        Produce one artifact per group instead of a single ``"main"`` one.
    header, footer, prepend : str or None, optional
        Markdown placed in the template context.

    Returns
    -------
    list[RenderedArtifact]
        Rendered artifacts in planning order.

    Raises
    ------
    MissingTitleError
        If any record has no title; nothing is rendered.
    """
    groups = assemble(records, project.order)
    return render_plans(
        plan_artifacts(groups, multi=multi),
        render,
        project=project,
        header=header,
        footer=footer,
        prepend=prepend,
    )


def generate_markdown(
    project: ProjectMetadata | cabc.Mapping[str, typ.Any],
    records: cabc.Iterable[EndpointRecord | cabc.Mapping[str, typ.Any]],
    *,
    template: str | None = None,
    multi: bool = False,
    header: str | None = None,
    footer: str | None = None,
    prepend: str | None = None,
) -> list[RenderedArtifact]:
    """Render Markdown in memory from project metadata and endpoint records.

    Raw mappings are accepted for both ``project`` and ``records``, so
    ``api_project.json`` and ``api_data.json`` payloads can be passed as
    decoded. See :func:`~apidoc_markdown.rendering.load_template` for the
    accepted ``template`` forms.
    """
    metadata = (
        project
        if isinstance(project, ProjectMetadata)
        else ProjectMetadata.from_mapping(project)
    )
    endpoint_records = [
        record
        if isinstance(record, EndpointRecord)
        else EndpointRecord.from_mapping(record)
        for record in records
    ]
    renderer = template_renderer(load_template(template, log_if_missing=False))
    return generate(
        metadata,
        endpoint_records,
        renderer,
        multi=multi,
        header=header,
        footer=footer,
        prepend=prepend,
    )


class MarkdownFileSystemGenerator:
    """Validate configuration, render apiDoc output, and write Markdown files."""

    def __init__(
        self, config: GeneratorConfig, *, source: ApiDocSource | None = None
    ) -> None:
        """Initialize the generator.

        Parameters
        ----------
        config : GeneratorConfig
            Resolved generator options.
        source : ApiDocSource, optional
            Parser collaborator; defaults to :class:`JsonApiDocSource`.
        """
        self.config = config
        self.source = source or JsonApiDocSource()

    def run(self) -> list[OutputEntry]:
        """Generate the documentation and write it to disk.

        Returns
        -------
        list[OutputEntry]
            Written files: the single document, or every group document in
            planning order followed by ``README`` when a TOC was requested.

        Raises
        ------
        ConfigurationError
            If a required path is missing or the output target does not match
            the mode. Raised before any template is rendered.
        MissingTitleError
            If an endpoint record has no title. No Markdown file is written;
            with ``debug`` the debug files still are, holding every parsed
            record.

        Notes
        -----
        Files are written one at a time; when a write fails, files already
        written stay on disk.
        """
        self._check_input()
        output_dir = self._prepare_output_dir()

        parsed = self.source.parse(self.config)
        project = self._apply_apidoc_json(parsed.project)
        header, footer, prepend = (
            load_section(option, getattr(self.config, option), project)
            for option in SECTION_OPTIONS
        )
        render = template_renderer(load_template(self.config.template))

        try:
            groups = assemble(parsed.records, project.order)
        except MissingTitleError:
            if self.config.debug:
                self._write_debug_files(output_dir, project, parsed.records)
            raise
        artifacts = render_plans(
            plan_artifacts(groups, multi=self.config.multi),
            render,
            project=project,
            header=header,
            footer=footer,
            prepend=prepend,
        )

        if self.config.multi:
            written = self._write_multi(artifacts, output_dir, project)
        else:
            written = self._write_single(artifacts)
        if self.config.debug:
            surviving = [entry for group in groups for entry in group.entries]
            self._write_debug_files(output_dir, project, surviving)
        return written

    def _check_input(self) -> None:
        """Ensure ``config.input`` was given and can be read."""
        if self.config.input is None:
            msg = "`cli.input` is required but was not provided."
            raise ConfigurationError(msg)
        if not path_exists(self.config.input):
            msg = (
                "The `cli.input` path does not exist or is not readable. "
                f"Path: {self.config.input}"
            )
            raise ConfigurationError(msg)

    def _prepare_output_dir(self) -> Path:
        """Validate ``config.output`` against the mode and return the target directory.

        A target ending in ``.md`` names a file. Single-file mode needs such a
        file path that is not an existing directory; its parent is created
        only with ``create_path``. Multi-file mode needs a directory, which is
        always created on demand.
        """
        output = self.config.output
        if output is None:
            msg = "`cli.output` is required but was not provided."
            raise ConfigurationError(msg)
        names_file = output.suffix.lower() == MARKDOWN_SUFFIX

        if self.config.multi:
            if (output.exists() and not output.is_dir()) or (
                names_file and not output.exists()
            ):
                msg = (
                    "The `cli.output` must be a directory in multi-file mode, "
                    f"but a file was provided. Path: {output}"
                )
                raise ConfigurationError(msg)
            return ensure_directory(output.resolve())

        if output.is_dir() or not names_file:
            msg = (
                "The `cli.output` must be a file in single-file mode, but a "
                "directory was provided. Please specify a `.md` file path or use "
                f"multi-file mode with '--multi'. Path: {output}"
            )
            raise ConfigurationError(msg)
        parent = output.resolve().parent
        if not parent.exists():
            if not self.config.create_path:
                msg = (
                    "The `cli.output` directory does not exist. Create it or "
                    f"pass '--create-path'. Path: {parent}"
                )
                raise ConfigurationError(msg)
            ensure_directory(parent)
        return parent

    def _apply_apidoc_json(self, project: ProjectMetadata) -> ProjectMetadata:
        """Merge a custom ``apidoc.json`` over the parsed project metadata."""
        if self.config.apidoc_json is None:
            return project
        overrides = load_apidoc_json(self.config.apidoc_json)
        if overrides is None:
            return project
        logger.debug("applying project overrides from %s", self.config.apidoc_json)
        return project.with_overrides(overrides)

    def _write_single(self, artifacts: list[RenderedArtifact]) -> list[OutputEntry]:
        output = typ.cast("Path", self.config.output)
        content = artifacts[0].content
        entry = OutputEntry(
            output_path=output,
            content=content,
            logical_name=MAIN_ARTIFACT,
            file_name=output.stem,
        )
        write_text(entry.output_path, entry.content)
        return [entry]

    def _write_multi(
        self,
        artifacts: list[RenderedArtifact],
        output_dir: Path,
        project: ProjectMetadata,
    ) -> list[OutputEntry]:
        entries = name_artifacts(
            artifacts,
            output_dir,
            project.order,
            use_order_prefix=self.config.use_order_prefix,
        )
        for entry in entries:
            write_text(entry.output_path, entry.content)
        if self.config.toc_file:
            readme = toc_entry(output_dir, build_toc(project, entries))
            write_text(readme.output_path, readme.content)
            entries.append(readme)
        return entries

    def _write_debug_files(
        self,
        output_dir: Path,
        project: ProjectMetadata,
        records: cabc.Sequence[EndpointRecord],
    ) -> None:
        """Persist the project metadata and ``records`` for bug reports.

        After a successful run ``records`` are the entries that survived
        deduplication, in document order. When grouping rejects untitled
        records they are every parsed record, untitled ones included.
        """
        dump_json(output_dir / API_PROJECT_FILE, project.to_dict())
        dump_json(output_dir / API_DATA_FILE, [record.to_dict() for record in records])
        logger.info(
            "Debug files `%s` and `%s` created in %s. Attach them to bug reports.",
            API_PROJECT_FILE,
            API_DATA_FILE,
            output_dir,
        )


__all__ = [
    "MarkdownFileSystemGenerator",
    "assemble",
    "generate",
    "generate_markdown",
]
