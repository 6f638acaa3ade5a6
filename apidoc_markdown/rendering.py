"""Load Jinja templates and invoke them once per planned artifact.

Templates receive a uniform context::

    {
        "to_link": ..., "url_encode": ..., "url_decode": ...,
        "to_lower": ..., "to_upper": ...,
        "project": ProjectMetadata,
        "header": str | None, "footer": str | None, "prepend": str | None,
        "data": tuple[GroupNode, ...],
    }

``data`` holds every group in single-file mode and exactly one group in
multi-file mode, so the same template serves both.
"""

from __future__ import annotations

import logging
import re
import typing as typ
from pathlib import Path
from types import MappingProxyType
from urllib.parse import quote, unquote

from jinja2 import Environment, FileSystemLoader, Template

from .fsutil import path_exists
from .models import RenderedArtifact

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import ArtifactPlan, ProjectMetadata

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE = "default"
TEMPLATE_SUFFIX = ".md"
RAW_TEMPLATE_MARKERS = ("{{", "{%", "{#")

RenderFunction = typ.Callable[[typ.Mapping[str, typ.Any]], str]

_WHITESPACE = re.compile(r"\s+")
# Characters left alone by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def to_link(text: str) -> str:
    """Convert a heading into a Markdown anchor by hyphenating whitespace."""
    return _WHITESPACE.sub("-", text)


def url_encode(text: str) -> str:
    """Percent-encode ``text`` as a single URI component."""
    return quote(text, safe=_URI_COMPONENT_SAFE)


def url_decode(text: str) -> str:
    """Decode a percent-encoded URI component."""
    return unquote(text)


def to_lower(text: str) -> str:
    """Return ``text`` in lower case."""
    return text.lower()


def to_upper(text: str) -> str:
    """Return ``text`` in upper case, as used for HTTP methods."""
    return text.upper()


TemplateUtils: typ.Mapping[str, typ.Callable[[str], str]] = MappingProxyType(
    {
        "to_link": to_link,
        "url_encode": url_encode,
        "url_decode": url_decode,
        "to_lower": to_lower,
        "to_upper": to_upper,
    }
)


def _build_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=False,  # noqa: S701 - output is Markdown, not HTML
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def bundled_templates() -> list[str]:
    """Return the names of the templates shipped with the package."""
    return sorted(path.stem for path in TEMPLATES_DIR.glob(f"*{TEMPLATE_SUFFIX}"))


def load_template(template: str | None = None, *, log_if_missing: bool = True) -> Template:
    """Compile the template selected by ``template``.

    Parameters
    ----------
    template : str or None, optional
        Raw Jinja text (recognized by ``{{``, ``{%`` or ``{#``), the name of a
        bundled template such as ``"default"``, or a path to a template file.
        ``None`` selects the bundled ``default`` template. Any other string is
        compiled as literal template text.
    log_if_missing : bool, optional
        Log a warning when ``template`` looks like a path that does not exist.

    Returns
    -------
    jinja2.Template
        The compiled template.

    Raises
    ------
    jinja2.TemplateSyntaxError
        If the template text is not valid Jinja.
    """
    env = _build_environment()
    if template is None:
        return env.get_template(f"{DEFAULT_TEMPLATE}{TEMPLATE_SUFFIX}")
    if any(marker in template for marker in RAW_TEMPLATE_MARKERS):
        return env.from_string(template)
    if template in bundled_templates():
        return env.get_template(f"{template}{TEMPLATE_SUFFIX}")
    candidate = Path(template)
    if path_exists(candidate, log_if_missing=log_if_missing) and candidate.is_file():
        return env.from_string(candidate.read_text(encoding="utf-8"))
    return env.from_string(template)


def build_context(
    project: ProjectMetadata,
    *,
    data: cabc.Sequence[typ.Any],
    header: str | None = None,
    footer: str | None = None,
    prepend: str | None = None,
) -> dict[str, typ.Any]:
    """Return the render context handed to the template for one artifact."""
    return {
        **TemplateUtils,
        "project": project,
        "header": header,
        "footer": footer,
        "prepend": prepend,
        "data": data,
    }


def render_plans(
    plans: cabc.Iterable[ArtifactPlan],
    render: RenderFunction,
    *,
    project: ProjectMetadata,
    header: str | None = None,
    footer: str | None = None,
    prepend: str | None = None,
) -> list[RenderedArtifact]:
    """Invoke ``render`` once per plan and collect results in plan order.

    Exceptions raised by ``render`` propagate unchanged and abort the
    remaining plans.
    """
    rendered: list[RenderedArtifact] = []
    for plan in plans:
        context = build_context(
            project, data=plan.data, header=header, footer=footer, prepend=prepend
        )
        logger.debug("rendering %s (%d groups)", plan.logical_name, len(plan.data))
        rendered.append(
            RenderedArtifact(logical_name=plan.logical_name, content=render(context))
        )
    return rendered


def template_renderer(template: Template) -> RenderFunction:
    """Adapt a compiled Jinja template to the render-function interface."""

    def render(context: typ.Mapping[str, typ.Any]) -> str:
        return template.render(**context)

    return render


__all__ = [
    "DEFAULT_TEMPLATE",
    "TEMPLATES_DIR",
    "RenderFunction",
    "TemplateUtils",
    "build_context",
    "bundled_templates",
    "load_template",
    "render_plans",
    "template_renderer",
    "to_link",
    "to_lower",
    "to_upper",
    "url_decode",
    "url_encode",
]
