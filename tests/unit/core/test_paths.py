from psychometrics_lab.core.paths import (
    get_project_root_dir,
    get_project_version,
)


def test_project_root_holds_pyproject() -> None:
    root = get_project_root_dir()
    assert (root / "pyproject.toml").exists()


def test_project_version_read_from_pyproject() -> None:
    version = get_project_version()
    assert version != "unknown"
    assert version.count(".") >= 1
