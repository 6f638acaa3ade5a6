"""End-to-end tests for :class:`MarkdownFileSystemGenerator`.

These tests run the full pipeline against apiDoc JSON written to ``tmp_path``
by the ``apidoc_dir`` fixture: three groups (``Billing``, ``Users`` and
``admin_tools``), a duplicated ``Get user`` endpoint in two versions, and a
project order declaring ``Users`` then ``admin_tools``.
"""

from __future__ import annotations

import json
import typing as typ

import pytest

from apidoc_markdown.assembly import MissingTitleError
from apidoc_markdown.config import ConfigurationError, GeneratorConfig
from apidoc_markdown.generator import MarkdownFileSystemGenerator

if typ.TYPE_CHECKING:
    from pathlib import Path

    from pytest_mock import MockerFixture

GROUP_TEMPLATE = (
    "{% for group in data %}## {{ group.name }}\n"
    "{% for entry in group.entries %}- {{ entry.title }} {{ entry.url }}\n"
    "{% endfor %}{% endfor %}"
)


def _run(**overrides: typ.Any) -> list[typ.Any]:
    return MarkdownFileSystemGenerator(GeneratorConfig(**overrides)).run()


def test_single_file_mode_writes_one_document(apidoc_dir: Path, tmp_path: Path) -> None:
    """Single-file mode writes every group, declared ones first."""
    output = tmp_path / "API.md"
    (entry,) = _run(input=apidoc_dir, output=output, template=GROUP_TEMPLATE)

    assert entry.output_path == output
    assert entry.logical_name == "main"
    assert output.read_text(encoding="utf-8") == (
        "## Users\n"
        "- Create user /users\n"
        "- Get user /v2/users/:id\n"
        "## admin_tools\n"
        "- Purge cache /cache\n"
        "## Billing\n"
        "- List invoices /invoices\n"
    )


def test_multi_file_mode_with_prefix_and_toc(apidoc_dir: Path, tmp_path: Path) -> None:
    """Multi-file mode names files by reading order and writes README last."""
    output = tmp_path / "api"
    entries = _run(
        input=apidoc_dir,
        output=output,
        template=GROUP_TEMPLATE,
        multi=True,
        use_order_prefix=True,
        toc_file=True,
    )

    assert [entry.file_name for entry in entries] == [
        "01_Users",
        "02_admin_tools",
        "03_Billing",
        "README",
    ]
    assert sorted(path.name for path in output.iterdir()) == [
        "01_Users.md",
        "02_admin_tools.md",
        "03_Billing.md",
        "README.md",
    ]
    assert (output / "02_admin_tools.md").read_text(encoding="utf-8") == (
        "## admin_tools\n- Purge cache /cache\n"
    )
    assert (output / "README.md").read_text(encoding="utf-8") == (
        "# Acme Documentation\n"
        "\n"
        "Acme REST API\n"
        "\n"
        "## Table of Contents\n"
        "\n"
        "- [Users](./01_Users.md)\n"
        "- [admin tools](./02_admin_tools.md)\n"
        "- [Billing](./03_Billing.md)\n"
    )


def test_multi_file_mode_creates_missing_directory(
    apidoc_dir: Path, tmp_path: Path
) -> None:
    output = tmp_path / "nested" / "api"
    entries = _run(input=apidoc_dir, output=output, template=GROUP_TEMPLATE, multi=True)
    assert output.is_dir()
    assert [entry.file_name for entry in entries] == ["Users", "admin_tools", "Billing"]


def test_single_mode_rejects_directory_before_rendering(
    apidoc_dir: Path, tmp_path: Path, mocker: MockerFixture
) -> None:
    """An existing directory as single-file output fails before any render."""
    spy = mocker.patch("apidoc_markdown.generator.render_plans")
    with pytest.raises(ConfigurationError, match="must be a file"):
        _run(input=apidoc_dir, output=tmp_path)
    spy.assert_not_called()


def test_single_mode_rejects_non_markdown_target(
    apidoc_dir: Path, tmp_path: Path
) -> None:
    with pytest.raises(ConfigurationError, match="must be a file"):
        _run(input=apidoc_dir, output=tmp_path / "api")


def test_multi_mode_rejects_existing_file(apidoc_dir: Path, tmp_path: Path) -> None:
    target = tmp_path / "API.md"
    target.write_text("existing", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="must be a directory"):
        _run(input=apidoc_dir, output=target, multi=True)


def test_single_mode_parent_needs_create_path(apidoc_dir: Path, tmp_path: Path) -> None:
    """A missing parent directory is created only on request."""
    output = tmp_path / "missing" / "API.md"
    with pytest.raises(ConfigurationError, match="--create-path"):
        _run(input=apidoc_dir, output=output)
    _run(input=apidoc_dir, output=output, create_path=True)
    assert output.is_file()


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"output": "API.md"}, r"`cli\.input` is required"),
        ({"input": "missing-dir", "output": "API.md"}, "does not exist"),
    ],
)
def test_input_is_validated(
    tmp_path: Path, overrides: dict[str, str], message: str
) -> None:
    config = {key: tmp_path / value for key, value in overrides.items()}
    with pytest.raises(ConfigurationError, match=message):
        _run(**config)


def test_output_is_required(apidoc_dir: Path) -> None:
    with pytest.raises(ConfigurationError, match=r"`cli\.output` is required"):
        _run(input=apidoc_dir)


def test_missing_header_file_fails_before_rendering(
    apidoc_dir: Path, tmp_path: Path
) -> None:
    output = tmp_path / "API.md"
    with pytest.raises(ConfigurationError, match=r"`cli\.header`"):
        _run(input=apidoc_dir, output=output, header=tmp_path / "header.md")
    assert not output.exists()


def test_missing_title_writes_nothing(tmp_path: Path) -> None:
    """A record without a title aborts the run before any file is written."""
    source = tmp_path / "apidoc"
    source.mkdir()
    (source / "api_data.json").write_text(
        json.dumps([{"type": "get", "group": "G", "url": "/untitled"}]),
        encoding="utf-8",
    )
    output = tmp_path / "out"
    with pytest.raises(MissingTitleError, match="/untitled"):
        _run(input=source, output=output, multi=True, toc_file=True)
    assert list(output.iterdir()) == []


def test_missing_title_with_debug_writes_only_debug_files(tmp_path: Path) -> None:
    """With ``debug`` a rejected run still leaves files for the bug report."""
    source = tmp_path / "apidoc"
    source.mkdir()
    (source / "api_data.json").write_text(
        json.dumps(
            [
                {"type": "get", "group": "G", "title": "Listed", "url": "/listed"},
                {"type": "get", "group": "G", "url": "/untitled"},
            ]
        ),
        encoding="utf-8",
    )
    output = tmp_path / "out"
    with pytest.raises(MissingTitleError, match="--debug"):
        _run(input=source, output=output, multi=True, debug=True)

    assert sorted(path.name for path in output.iterdir()) == [
        "api_data.json",
        "api_project.json",
    ]
    data = json.loads((output / "api_data.json").read_text(encoding="utf-8"))
    assert [record["url"] for record in data] == ["/listed", "/untitled"], (
        "expected every parsed record, untitled ones included"
    )


def test_apidoc_json_changes_order(apidoc_dir: Path, tmp_path: Path) -> None:
    """A custom apidoc.json overrides the declared group order."""
    custom = tmp_path / "apidoc.json"
    custom.write_text(json.dumps({"order": ["billing"]}), encoding="utf-8")
    entries = _run(
        input=apidoc_dir,
        output=tmp_path / "api",
        template=GROUP_TEMPLATE,
        apidoc_json=custom,
        multi=True,
        use_order_prefix=True,
    )
    assert [entry.file_name for entry in entries] == [
        "01_Billing",
        "02_admin_tools",
        "03_Users",
    ]


def test_debug_files_hold_project_and_surviving_records(
    apidoc_dir: Path, tmp_path: Path
) -> None:
    output = tmp_path / "API.md"
    _run(input=apidoc_dir, output=output, template=GROUP_TEMPLATE, debug=True)

    project = json.loads((tmp_path / "api_project.json").read_text(encoding="utf-8"))
    data = json.loads((tmp_path / "api_data.json").read_text(encoding="utf-8"))
    assert project["name"] == "Acme"
    assert [(record["title"], record["version"]) for record in data] == [
        ("Create user", "1.0.0"),
        ("Get user", "1.2.0"),
        ("Purge cache", "1.0.0"),
        ("List invoices", "1.0.0"),
    ]


def test_runs_are_idempotent(apidoc_dir: Path, tmp_path: Path) -> None:
    """Two runs over the same input produce byte-identical files."""

    def snapshot(target: Path) -> dict[str, bytes]:
        _run(
            input=apidoc_dir,
            output=target,
            multi=True,
            use_order_prefix=True,
            toc_file=True,
        )
        return {path.name: path.read_bytes() for path in sorted(target.iterdir())}

    first = snapshot(tmp_path / "first")
    second = snapshot(tmp_path / "second")
    assert first == second
    assert len(first) == 4
