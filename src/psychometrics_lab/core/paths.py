from pathlib import Path

import toml

PROJECT_NAME = "psychometrics-lab"


class ProjectRootNotFound(Exception):
    pass


def get_project_root_dir() -> Path:
    """Look for the root pyproject.toml"""
    current = Path(__file__).parent

    while True:
        candidate = current / "pyproject.toml"
        if candidate.exists():
            return current

        parent = current.parent
        if parent == current:
            raise ProjectRootNotFound

        current = parent


def get_project_version() -> str:
    """Read the version from pyproject.toml, or "unknown" when installed
    without the source tree."""
    try:
        root = get_project_root_dir()
    except ProjectRootNotFound:
        return "unknown"
    data = toml.load(root / "pyproject.toml")
    project = data.get("project", {})
    if project.get("name") != PROJECT_NAME:
        return "unknown"
    return str(project.get("version", "unknown"))
