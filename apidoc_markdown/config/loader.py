"""Load generator defaults from YAML and merge them with CLI values."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .models import FLAG_FIELDS, PATH_FIELDS, ConfigurationError, GeneratorConfig

DEFAULT_CONFIG_NAME = "apidoc-markdown.yaml"


def load_generator_config(path: Path) -> dict[str, typ.Any]:
    """Load generator defaults from an ``apidoc-markdown.yaml`` file.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file.

    Returns
    -------
    dict[str, Any]
        Normalized values keyed by :class:`GeneratorConfig` field name. Path
        fields are converted to :class:`~pathlib.Path` and resolved relative
        to the directory holding the configuration file.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigurationError
        If the file names a key that is not a generator option, or a flag
        whose value is not a boolean.

    Examples
    --------
    >>> from pathlib import Path
    >>> values = load_generator_config(Path("apidoc-markdown.yaml"))  # doctest: +SKIP
    >>> values["multi"]  # doctest: +SKIP
    True
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)

    base_dir = path.parent
    values: dict[str, typ.Any] = {}
    for raw_key, value in loaded.items():
        key = str(raw_key).replace("-", "_")
        if key in PATH_FIELDS:
            values[key] = _resolve_path(value, base_dir)
        elif key in FLAG_FIELDS:
            if not isinstance(value, bool):
                msg = f"Option '{raw_key}' in '{path}' must be true or false."
                raise ConfigurationError(msg)
            values[key] = value
        elif key == "template":
            values[key] = None if value is None else str(value)
        else:
            msg = f"Unknown option '{raw_key}' in '{path}'."
            raise ConfigurationError(msg)
    return values


def resolve_config(
    file_values: typ.Mapping[str, typ.Any] | None = None, **cli_values: typ.Any
) -> GeneratorConfig:
    """Build a :class:`GeneratorConfig`, preferring explicit CLI values.

    ``None`` in ``cli_values`` means "not given on the command line" and falls
    back to the file value, then to the dataclass default.
    """
    merged: dict[str, typ.Any] = dict(file_values or {})
    for key, value in cli_values.items():
        if value is not None:
            merged[key] = value
    return GeneratorConfig(**merged)


def _resolve_path(value: object, base_dir: Path) -> Path | None:
    if value is None or value == "":
        return None
    candidate = Path(str(value)).expanduser()
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


__all__ = ["DEFAULT_CONFIG_NAME", "load_generator_config", "resolve_config"]
