"""Resolve the distribution version reported by the health endpoint."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

DISTRIBUTION_NAME: Final = "storefront-client"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed version, reading ``pyproject.toml`` for source checkouts."""

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    """Return ``[project].version`` from the given ``pyproject.toml``."""

    if not path.exists():
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    section: str | None = None
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            section = line.strip("[]")
        elif section == "project" and line.startswith("version"):
            version = line.partition("=")[2].strip().strip('"')
            if version:
                return version
            break

    raise RuntimeError(f"No [project] version declared in {path}")


__all__ = ["DISTRIBUTION_NAME", "get_project_version", "read_pyproject_version"]
