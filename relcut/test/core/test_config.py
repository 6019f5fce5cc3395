"""Tests for relcut.core.config module."""

from __future__ import annotations

from pathlib import Path

from relcut.core.config import (
    CONFIG_FILE_NAME,
    FilesConfig,
    ReleaseConfig,
    load_config,
    load_config_or_default,
)
from relcut.core.result import Err, Ok


def test_defaults() -> None:
    config = ReleaseConfig(root=Path("/project"))
    assert config.git.release_branch == "main"
    assert config.git.branch_prefix == "next-release-"
    assert config.changelog.features_heading == "### Features"
    assert config.forge.repo is None
    assert config.path("CHANGELOG.md") == Path("/project/CHANGELOG.md")
    assert FilesConfig().release_files() == (
        "app/build.gradle",
        "CHANGELOG.md",
        "docs/contributors.json",
        "docs/credits.md",
        "docs/licenses.md",
    )


def test_load_config_overrides(tmp_path: Path) -> None:
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text(
        """
[forge]
repo = "example/app"

[git]
release_branch = "develop"

[files]
descriptor = "client/build.gradle"
changelog_title = "# Release history"

[pages]
contributors_command = ["python3", "tools/contributors.py"]
licenses_command = "tools/licenses.sh"
""",
        encoding="utf-8",
    )

    result = load_config(path, root=tmp_path)

    assert isinstance(result, Ok)
    config = result.value
    assert config.root == tmp_path
    assert config.forge.repo == "example/app"
    assert config.forge.notes_config == ".github/release.yml"
    assert config.git.release_branch == "develop"
    assert config.git.remote == "origin"
    assert config.files.descriptor == "client/build.gradle"
    assert config.files.changelog_title == "# Release history"
    assert config.pages.contributors_command == ("python3", "tools/contributors.py")
    assert config.pages.licenses_command == ("tools/licenses.sh",)


def test_load_config_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text("[forge\nrepo = ", encoding="utf-8")

    result = load_config(path, root=tmp_path)

    assert isinstance(result, Err)
    assert "Invalid TOML" in result.error.message


def test_load_config_or_default_without_file(tmp_path: Path) -> None:
    assert load_config_or_default(tmp_path) == Ok(ReleaseConfig(root=tmp_path))


def test_with_repo() -> None:
    config = ReleaseConfig(root=Path("/p"))
    assert config.with_repo("o/r").forge.repo == "o/r"
    assert config.with_repo(None) is config
