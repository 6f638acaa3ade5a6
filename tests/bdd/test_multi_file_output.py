"""Behaviour tests for multi-file Markdown output using pytest-bdd.

These scenarios run :class:`MarkdownFileSystemGenerator` in multi-file mode
against apiDoc JSON written to a temporary directory. They check that group
files are numbered by reading order, that the ``README.md`` table of contents
agrees with those numbers, and that an untitled endpoint aborts the run before
anything reaches the output directory.

Usage
-----
Run ``pytest tests/bdd/test_multi_file_output.py -v``.
"""

from __future__ import annotations

import json
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from apidoc_markdown.assembly import MissingTitleError
from apidoc_markdown.config import GeneratorConfig
from apidoc_markdown.generator import MarkdownFileSystemGenerator

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "multi_file_output.feature"
)
scenarios(FEATURE_FILE)

EXPECTED_FILES = ["01_Users.md", "02_admin_tools.md", "03_Billing.md"]

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between ``given``, ``when``,
        and ``then`` steps.
    """
    return {}


@given("apiDoc output with a declared group order")
def given_declared_order(apidoc_dir: Path, scenario_state: ScenarioState) -> None:
    """Record the fixture directory holding ``api_data.json`` and ``api_project.json``."""
    scenario_state["input"] = apidoc_dir


@given("apiDoc output containing an untitled endpoint")
def given_untitled_endpoint(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Write apiDoc data where one endpoint lacks a ``title``."""
    source = tmp_path / "untitled"
    source.mkdir()
    (source / "api_data.json").write_text(
        json.dumps(
            [
                {"type": "get", "group": "Users", "title": "Get user", "url": "/u"},
                {"type": "post", "group": "Users", "url": "/orphan"},
            ]
        ),
        encoding="utf-8",
    )
    scenario_state["input"] = source


@when("I generate multi-file Markdown with ordinal prefixes and a TOC")
def when_generate_multi(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Run the generator with ``multi``, ``use_order_prefix`` and ``toc_file``."""
    output = tmp_path / "docs"
    config = GeneratorConfig(
        input=typ.cast("Path", scenario_state["input"]),
        output=output,
        multi=True,
        use_order_prefix=True,
        toc_file=True,
    )
    scenario_state["entries"] = MarkdownFileSystemGenerator(config).run()
    scenario_state["output"] = output


@when("I try to generate multi-file Markdown")
def when_try_generate_multi(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Run the generator and keep the raised error for later steps."""
    output = tmp_path / "docs"
    config = GeneratorConfig(
        input=typ.cast("Path", scenario_state["input"]),
        output=output,
        multi=True,
        toc_file=True,
    )
    with pytest.raises(MissingTitleError) as excinfo:
        MarkdownFileSystemGenerator(config).run()
    scenario_state["error"] = excinfo.value
    scenario_state["output"] = output


@then("one prefixed file exists per group in reading order")
def then_prefixed_files(scenario_state: ScenarioState) -> None:
    output = typ.cast("Path", scenario_state["output"])
    written = sorted(path.name for path in output.glob("0*.md"))
    assert written == EXPECTED_FILES, f"unexpected group files: {written}"


@then("the README links every group file in the same order")
def then_readme_links(scenario_state: ScenarioState) -> None:
    """Every TOC link points at a written file, in prefix order."""
    output = typ.cast("Path", scenario_state["output"])
    readme = (output / "README.md").read_text(encoding="utf-8")
    links = [
        line.split("](./", 1)[1].rstrip(")")
        for line in readme.splitlines()
        if line.startswith("- [")
    ]
    assert links == EXPECTED_FILES
    assert all((output / link).is_file() for link in links)
    assert readme.startswith("# Acme Documentation\n")


@then("the run fails naming the untitled endpoint")
def then_fails_on_untitled(scenario_state: ScenarioState) -> None:
    error = typ.cast("MissingTitleError", scenario_state["error"])
    assert "/orphan" in str(error)
    assert [record.group for record in error.records] == ["Users"]


@then("no Markdown files are written")
def then_nothing_written(scenario_state: ScenarioState) -> None:
    output = typ.cast("Path", scenario_state["output"])
    assert not list(output.glob("*.md")), "expected the output directory to stay empty"
