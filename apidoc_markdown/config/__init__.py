"""Resolve generator options from the command line and ``apidoc-markdown.yaml``.

Options come from three layers: dataclass defaults, an optional YAML file read
by :func:`load_generator_config`, and explicit CLI values merged on top by
:func:`resolve_config`. The result is a :class:`GeneratorConfig` consumed by
:class:`~apidoc_markdown.generator.MarkdownFileSystemGenerator`.

Examples
--------
>>> from apidoc_markdown.config import resolve_config
>>> config = resolve_config({"multi": True}, multi=None, toc_file=True)
>>> (config.multi, config.toc_file)
(True, True)
"""

from .loader import DEFAULT_CONFIG_NAME, load_generator_config, resolve_config
from .models import ConfigurationError, GeneratorConfig

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "ConfigurationError",
    "GeneratorConfig",
    "load_generator_config",
    "resolve_config",
]
