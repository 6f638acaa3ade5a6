"""Shared fixtures for apidoc-markdown tests.

The fixtures build apiDoc-shaped payloads in memory and, where a test needs
the filesystem, write them to ``tmp_path`` in the layout ``apidoc`` produces
(``api_data.json`` next to ``api_project.json``).
"""

from __future__ import annotations

import json
import typing as typ

import pytest

from apidoc_markdown.models import EndpointRecord

if typ.TYPE_CHECKING:
    from pathlib import Path

RecordFactory = typ.Callable[..., EndpointRecord]


def endpoint(
    group: str,
    title: str | None,
    version: str = "1.0.0",
    **extra: typ.Any,
) -> dict[str, typ.Any]:
    """Return a raw apiDoc endpoint payload."""
    payload: dict[str, typ.Any] = {
        "type": extra.pop("type", "get"),
        "url": extra.pop("url", f"/{group.lower()}"),
        "group": group,
        "version": version,
        **extra,
    }
    if title is not None:
        payload["title"] = title
    return payload


@pytest.fixture
def make_payload() -> typ.Callable[..., dict[str, typ.Any]]:
    """Return a factory building raw apiDoc endpoint payloads."""
    return endpoint


@pytest.fixture
def make_record() -> RecordFactory:
    """Return a factory building :class:`EndpointRecord` instances."""

    def _make(
        group: str, title: str | None, version: str = "1.0.0", **extra: typ.Any
    ) -> EndpointRecord:
        return EndpointRecord.from_mapping(endpoint(group, title, version, **extra))

    return _make


@pytest.fixture
def api_project() -> dict[str, typ.Any]:
    """Return project metadata declaring a partial group order."""
    return {
        "name": "Acme",
        "version": "2.1.0",
        "description": "Acme REST API",
        "order": ["Users", "admin_tools"],
    }


@pytest.fixture
def api_data() -> list[dict[str, typ.Any]]:
    """Return endpoint records spanning three groups and two versions."""
    return [
        endpoint("Billing", "List invoices", url="/invoices"),
        endpoint("Users", "Get user", "1.0.0", url="/users/:id"),
        endpoint("Users", "Get user", "1.2.0", url="/v2/users/:id"),
        endpoint("Users", "Create user", type="post", url="/users"),
        endpoint("admin_tools", "Purge cache", type="delete", url="/cache"),
        {"type": "", "group": "Users", "name": "defined_but_not_an_endpoint"},
    ]


@pytest.fixture
def apidoc_dir(
    tmp_path: Path,
    api_project: dict[str, typ.Any],
    api_data: list[dict[str, typ.Any]],
) -> Path:
    """Write apiDoc JSON output into a temporary directory and return it."""
    source = tmp_path / "apidoc"
    source.mkdir()
    (source / "api_project.json").write_text(json.dumps(api_project), encoding="utf-8")
    (source / "api_data.json").write_text(json.dumps(api_data), encoding="utf-8")
    return source
