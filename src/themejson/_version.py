"""Version lookup for themejson: source checkout first, then installed metadata."""

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as distribution_version
from pathlib import Path

DISTRIBUTION = "themejson"
PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"
UNKNOWN_VERSION = "0.0.0"

_PROJECT_VERSION = re.compile(r'^version\s*=\s*"([^"]+)"', re.MULTILINE)


def read_pyproject_version(path: Path = PYPROJECT_PATH) -> str | None:
    """The ``version`` declared in a pyproject file, or None if there is none."""
    if not path.is_file():
        return None
    found = _PROJECT_VERSION.search(path.read_text(encoding="utf-8"))
    return found.group(1) if found else None


def get_version() -> str:
    declared = read_pyproject_version(PYPROJECT_PATH)
    if declared is not None:
        return declared
    try:
        return distribution_version(DISTRIBUTION)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
