"""Read apiDoc output and resolve the Markdown sections injected into templates.

apidoc-markdown does not parse source comments itself. It consumes the JSON
that ``apidoc`` emits (``api_data.json`` and ``api_project.json``), either as
the two files side by side in a directory or as one combined document::

    {"project": {...}, "data": [{...}, ...]}

Any object exposing ``parse(config) -> ParsedDoc`` can stand in for
:class:`JsonApiDocSource`, for example a wrapper around a different parser.

Example
-------
>>> from pathlib import Path
>>> from apidoc_markdown.config import GeneratorConfig
>>> doc = JsonApiDocSource().parse(GeneratorConfig(input=Path("doc")))  # doctest: +SKIP
>>> doc.project.name  # doctest: +SKIP
'Acme API'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json

from .config import ConfigurationError
from .fsutil import path_exists, read_required_file
from .models import EndpointRecord, ProjectMetadata

if typ.TYPE_CHECKING:
    from .config import GeneratorConfig

logger = logging.getLogger(__name__)

API_DATA_FILE = "api_data.json"
API_PROJECT_FILE = "api_project.json"
SECTION_OPTIONS = ("header", "footer", "prepend")


@dc.dataclass(frozen=True, slots=True)
class ParsedDoc:
    """Project metadata and endpoint records produced by a parser."""

    project: ProjectMetadata
    records: list[EndpointRecord]


class ApiDocSource(typ.Protocol):
    """A parser collaborator turning configuration into apiDoc data."""

    def parse(self, config: GeneratorConfig) -> ParsedDoc:
        """Return the project metadata and endpoint records for ``config``."""
        ...


class JsonApiDocSource:
    """Load apiDoc JSON output from a directory or a combined JSON file."""

    def parse(self, config: GeneratorConfig) -> ParsedDoc:
        """Read ``config.input`` and keep only records declaring a ``type``.

        Raises
        ------
        ConfigurationError
            If ``config.input`` is unset, or a directory without
            ``api_data.json``.
        msgspec.DecodeError
            If a file is not valid JSON.
        """
        if config.input is None:
            msg = "`cli.input` is required but was not provided."
            raise ConfigurationError(msg)

        source = config.input
        if source.is_dir():
            data_path = source / API_DATA_FILE
            if not path_exists(data_path):
                msg = f"No `{API_DATA_FILE}` found in the `cli.input` directory. Path: {source}"
                raise ConfigurationError(msg)
            raw_data = _decode(data_path)
            project_path = source / API_PROJECT_FILE
            raw_project = (
                _decode(project_path)
                if path_exists(project_path, log_if_missing=False)
                else {}
            )
        else:
            payload = _decode(source)
            if isinstance(payload, cabc.Mapping) and "data" in payload:
                raw_data = payload["data"]
                raw_project = payload.get("project") or {}
            else:
                raw_data = payload
                raw_project = {}

        if not isinstance(raw_project, cabc.Mapping):
            msg = f"apiDoc project metadata must be a JSON object. Path: {source}"
            raise ConfigurationError(msg)
        records = endpoint_records(raw_data)
        logger.debug("loaded %d endpoint records from %s", len(records), source)
        return ParsedDoc(
            project=ProjectMetadata.from_mapping(raw_project), records=records
        )


def endpoint_records(raw_data: object) -> list[EndpointRecord]:
    """Convert raw apiDoc data into records, discarding non-endpoint entries.

    ``raw_data`` may be a list of records or a mapping of id to record.
    Entries that are not objects or have no truthy ``type`` are parser
    artifacts (for example ``@apiDefine`` blocks) and are dropped.
    """
    match raw_data:
        case cabc.Mapping():
            items: cabc.Iterable[object] = raw_data.values()
        case list():
            items = raw_data
        case _:
            msg = "apiDoc data must be a JSON array or object."
            raise ConfigurationError(msg)
    return [
        EndpointRecord.from_mapping(item)
        for item in items
        if isinstance(item, cabc.Mapping) and item.get("type")
    ]


def load_apidoc_json(path: Path) -> dict[str, typ.Any] | None:
    """Load a custom ``apidoc.json``; return None when the file is absent.

    Raises
    ------
    ConfigurationError
        If the file does not hold a JSON object.
    """
    if not path_exists(path):
        return None
    payload = _decode(path)
    if not isinstance(payload, dict):
        msg = f"The `cli.apidoc-json` file must hold a JSON object. Path: {path}"
        raise ConfigurationError(msg)
    return payload


def load_section(
    option_name: str, cli_value: Path | None, project: ProjectMetadata
) -> str | None:
    """Resolve a header, footer, or prepend section to Markdown text.

    An explicit CLI file wins. Otherwise the project metadata entry of the same
    name is used: its ``filename`` is read from disk, or its ``title`` and
    ``content`` are combined into ``# {title}\\n\\n{content}``.

    Raises
    ------
    ConfigurationError
        If an explicitly named file is missing or unreadable.
    """
    if cli_value is not None:
        return read_required_file(f"cli.{option_name}", cli_value)
    section = project.get(option_name)
    if not isinstance(section, cabc.Mapping):
        return None
    filename = section.get("filename")
    if filename:
        return read_required_file(
            f"apidoc_project_file.{option_name}.filename", Path(str(filename))
        )
    content = section.get("content")
    if not content:
        return None
    title = section.get("title")
    if title:
        return f"# {title}\n\n{content}"
    return str(content)


def _decode(path: Path) -> typ.Any:  # noqa: ANN401 - arbitrary JSON
    return msgspec_json.decode(path.read_bytes())


__all__ = [
    "API_DATA_FILE",
    "API_PROJECT_FILE",
    "SECTION_OPTIONS",
    "ApiDocSource",
    "JsonApiDocSource",
    "ParsedDoc",
    "endpoint_records",
    "load_apidoc_json",
    "load_section",
]
