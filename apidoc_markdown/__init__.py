"""Generate Markdown documentation from apiDoc output.

The package reads apiDoc's JSON (``api_data.json`` and ``api_project.json``),
groups endpoints, keeps the newest version of each, orders groups by the
project's declared ``order``, and renders the result through a Jinja template
into one document or one document per group.

Exports
-------
- ``app``: Cyclopts application behind the ``apidoc-markdown`` command.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``generate_markdown``: In-memory rendering without filesystem access.
- ``MarkdownFileSystemGenerator``: Full pipeline that writes Markdown files.

Examples
--------
>>> from apidoc_markdown import generate_markdown
>>> docs = generate_markdown(
...     {"name": "Acme"},
...     [{"group": "Users", "title": "Get user", "version": "1.0.0", "type": "get"}],
...     template="{% for group in data %}{{ group.name }}{% endfor %}",
... )
>>> docs[0].content
'Users'
"""

from __future__ import annotations

from .cli import app, main
from .generator import MarkdownFileSystemGenerator, generate, generate_markdown

__all__ = [
    "MarkdownFileSystemGenerator",
    "app",
    "generate",
    "generate_markdown",
    "main",
]
