"""File helpers: creation, TOML loading, ignore files and filtered scans."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from rulematch.errors import ConfigNotFoundError, FileOperationError
from rulematch.utils.pattern import DEFAULT_SYNTAX, WildcardSyntax

logger = logging.getLogger(__name__)

__all__ = [
    "ScanResult",
    "append_to_file",
    "check_file_exists",
    "create_dir_if_not_exists",
    "create_file_if_not_exists",
    "is_inside_dir",
    "read_ignore_file",
    "read_toml_file",
    "scan_and_filter_files",
    "should_ignore",
    "write_file",
    "write_file_if_not_exists",
]

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ScanResult:
    """Relative paths kept and skipped by scan_and_filter_files."""

    files: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)


def check_file_exists(path: str | Path) -> bool:
    return os.path.exists(path)


def create_file_if_not_exists(path: str | Path) -> bool:
    """Create an empty file, and its parent directories, if it does not exist.

    Returns:
        True if the file was created, False if it already existed.
    """
    path = Path(path)
    if path.exists():
        return False
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(str(path.parent), "failed to create directory", cause=e) from e
    try:
        path.touch(exist_ok=False)
    except FileExistsError:
        return False
    except OSError as e:
        raise FileOperationError(str(path), "failed to create file", cause=e) from e
    return True


def create_dir_if_not_exists(path: str | Path) -> bool:
    """Create a directory tree if it does not exist.

    Returns:
        True if the directory was created, False if it already existed.
    """
    path = Path(path)
    if path.exists():
        return False
    try:
        path.mkdir(parents=True)
    except FileExistsError:
        return False
    except OSError as e:
        raise FileOperationError(str(path), "failed to create directory", cause=e) from e
    return True


def write_file(path: str | Path, data: bytes) -> bool:
    try:
        Path(path).write_bytes(data)
    except OSError as e:
        raise FileOperationError(str(path), "failed to write file", cause=e) from e
    return True


def write_file_if_not_exists(path: str | Path, data: bytes) -> bool:
    """Write ``data`` only when ``path`` does not exist yet.

    Returns:
        True if the file was written, False if it already existed.
    """
    if os.path.exists(path):
        return False
    return write_file(path, data)


def append_to_file(path: str | Path, data: bytes) -> bool:
    """Append ``data`` to ``path``, creating the file if needed."""
    try:
        with open(path, "ab") as f:
            f.write(data)
    except OSError as e:
        raise FileOperationError(str(path), "failed to append to file", cause=e) from e
    return True


def read_toml_file(path: str | Path, model: type[ModelT] | None = None) -> dict[str, Any] | ModelT:
    """Read a TOML file into a dict, or into ``model`` when one is given.

    Raises:
        FileOperationError: If the file cannot be read, parsed or validated.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise FileOperationError(str(path), "failed to open file", cause=e) from e
    except tomllib.TOMLDecodeError as e:
        raise FileOperationError(str(path), "failed to unmarshal TOML", cause=e) from e

    if model is None:
        return data
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise FileOperationError(str(path), "TOML does not match schema", cause=e) from e


def is_inside_dir(name: str, start: str | Path | None = None) -> bool:
    """Check whether ``start`` or one of its ancestors is named ``name``.

    ``start`` defaults to the current working directory.
    """
    current = Path(start if start is not None else os.getcwd()).resolve()
    return any(p.name == name for p in (current, *current.parents))


def read_ignore_file(path: str | Path) -> list[str]:
    """Read ignore patterns, one per line; blank lines and ``#`` comments are skipped."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise FileOperationError(str(path), "failed to read ignore file", cause=e) from e

    patterns: list[str] = []
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


def _path_prefixes(path: str) -> list[str]:
    """``a/b/c`` -> ``["a", "a/b", "a/b/c"]``."""
    parts = [p for p in path.split("/") if p]
    return ["/".join(parts[: i + 1]) for i in range(len(parts))]


def should_ignore(
    path: str,
    ignore_patterns: Iterable[str],
    syntax: WildcardSyntax = DEFAULT_SYNTAX,
) -> bool:
    """Decide whether ``path`` is ignored.

    Patterns are applied in order and the last applicable one wins; a ``!``
    prefix re-includes. A pattern applies when it matches the path or one of
    its parent directories, so a trailing-slash pattern such as ``build/``
    covers everything beneath ``build``.
    """
    path = path.replace(os.sep, "/")
    if path.startswith("./"):
        path = path[2:]
    prefixes = _path_prefixes(path)

    ignored = False
    for raw in ignore_patterns:
        negated = raw.startswith("!")
        pattern = raw[1:] if negated else raw
        pattern = pattern.rstrip("/")
        if pattern.startswith("./"):
            pattern = pattern[2:]
        if not pattern:
            continue
        if any(syntax.matches(pattern, prefix) for prefix in prefixes):
            ignored = not negated
    return ignored


def scan_and_filter_files(
    root: str | Path,
    extensions: Iterable[str] = (),
    ignore_patterns: Iterable[str] = (),
    syntax: WildcardSyntax = DEFAULT_SYNTAX,
) -> ScanResult:
    """Recursively list files under ``root``, honouring ignore patterns.

    Paths are reported relative to ``root`` with ``/`` separators. Ignored
    directories are reported once and not descended into. When
    ``extensions`` is non-empty, files whose name does not end with one of
    them (case-insensitively) are reported as ignored.

    Raises:
        ConfigNotFoundError: If ``root`` does not exist.
    """
    root = Path(root).resolve()
    if not root.exists():
        raise ConfigNotFoundError(config_path=str(root))

    exts = [e.lower() for e in extensions]
    patterns = list(ignore_patterns)
    result = ScanResult()

    def _scan_dir(dir_path: Path) -> None:
        try:
            entries = sorted(os.scandir(dir_path), key=lambda e: e.name)
        except PermissionError as e:
            logger.error("Permission denied scanning %s: %s", dir_path, e)
            return
        except OSError as e:
            logger.error("OS error scanning %s: %s", dir_path, e)
            return

        for entry in entries:
            entry_path = Path(entry.path)
            rel = entry_path.relative_to(root).as_posix()
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                logger.error("OS error accessing %s: %s", entry.path, e)
                continue

            if should_ignore(rel, patterns, syntax):
                logger.debug("Ignoring %s", rel)
                result.ignored.append(rel)
                continue

            if is_dir:
                _scan_dir(entry_path)
                continue

            if exts and not any(entry.name.lower().endswith(ext) for ext in exts):
                result.ignored.append(rel)
                continue
            result.files.append(rel)

    _scan_dir(root)
    return result
