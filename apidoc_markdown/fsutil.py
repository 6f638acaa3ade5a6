"""Small filesystem helpers shared by the loaders and the output writer."""

from __future__ import annotations

import logging
import os
import typing as typ

import msgspec.json as msgspec_json

from .config import ConfigurationError

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def path_exists(path: Path, *, log_if_missing: bool = True) -> bool:
    """Return True when ``path`` exists and is readable.

    This is a best-effort probe: failures are logged (unless
    ``log_if_missing`` is False) and reported as ``False``, never raised.
    """
    if path.exists() and os.access(path, os.R_OK):
        return True
    if log_if_missing:
        logger.warning("Path does not exist or is not readable: %s", path)
    return False


def ensure_directory(path: Path) -> Path:
    """Create ``path`` and any missing parents; return ``path``."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_required_file(option_name: str, path: Path) -> str:
    """Read a UTF-8 file that the user explicitly asked for.

    Raises
    ------
    ConfigurationError
        If ``path`` does not exist or cannot be read; the message names
        ``option_name`` so users can find the offending parameter.
    """
    if not path_exists(path) or not path.is_file():
        msg = f"The `{option_name}` path does not exist or is not readable. Path: {path}"
        raise ConfigurationError(msg)
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> Path:
    """Write ``content`` to ``path`` as UTF-8 and return the path."""
    path.write_text(content, encoding="utf-8")
    logger.debug("wrote %s (%d characters)", path, len(content))
    return path


def dump_json(path: Path, payload: object) -> Path:
    """Write ``payload`` to ``path`` as two-space indented JSON."""
    encoded = msgspec_json.format(msgspec_json.encode(payload), indent=2)
    path.write_bytes(encoded)
    return path


__all__ = [
    "dump_json",
    "ensure_directory",
    "path_exists",
    "read_required_file",
    "write_text",
]
