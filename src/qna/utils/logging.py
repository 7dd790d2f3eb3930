"""
Project metadata for log records (service name and version).

The installed distribution is authoritative; a source checkout without an install falls
back to the nearest pyproject.toml.
"""
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path
from typing import Any
import tomllib

DISTRIBUTION_NAME = "qna-service"


def find_pyproject(start: Path, max_up: int = 5) -> Path | None:
    for directory in [start, *start.parents][:max_up]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=8)
def _load_pyproject(path: Path) -> dict:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_pyproject_value(
    key: str,
    start: str | Path | None = None,
    max_up: int = 5,
    default: Any = None,
) -> Any:
    """
    Look up a dotted `key` ("project.version") in the nearest pyproject.toml above `start`
    (default: this package). Missing file, bad TOML or missing key all give `default`.
    """
    start_path = Path(start).resolve() if start is not None else Path(__file__).resolve().parent
    pyproject = find_pyproject(start_path, max_up=max_up)
    if pyproject is None:
        return default

    node: Any = _load_pyproject(pyproject)
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def get_project_name(start: Path | str | None = None, default: str | None = None) -> str | None:
    return get_pyproject_value("project.name", start=start, default=default)


def get_project_version(start: Path | str | None = None, default: str = "unknown") -> str:
    name = get_project_name(start=start) or DISTRIBUTION_NAME
    try:
        return importlib_metadata.version(name)
    except importlib_metadata.PackageNotFoundError:
        return get_pyproject_value("project.version", start=start, default=default)


__all__ = [
    "DISTRIBUTION_NAME",
    "find_pyproject",
    "get_pyproject_value",
    "get_project_name",
    "get_project_version",
]
