"""Release configuration.

``relcut.toml`` at the project root describes the one release workflow this
tool drives. Every key is optional; missing keys fall back to the defaults
below. The resulting ``ReleaseConfig`` is frozen and built once per process.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ChangelogConfig",
    "ConfigError",
    "FilesConfig",
    "ForgeConfig",
    "GitConfig",
    "PagesConfig",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "relcut.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ForgeConfig:
    """Where release notes come from and where links point to."""

    repo: str | None = None  # owner/name
    notes_config: str = ".github/release.yml"
    placeholder_tag: str = "next"


@dataclass(frozen=True, slots=True)
class GitConfig:
    remote: str = "origin"
    release_branch: str = "main"
    branch_prefix: str = "next-release-"


@dataclass(frozen=True, slots=True)
class FilesConfig:
    """Paths relative to the project root.

    The five paths besides ``changelog_title`` are exactly the files staged in
    the release commit.
    """

    descriptor: str = "app/build.gradle"
    changelog: str = "CHANGELOG.md"
    changelog_title: str = "# Changelog"
    contributors_data: str = "docs/contributors.json"
    credits_page: str = "docs/credits.md"
    licenses_page: str = "docs/licenses.md"

    def release_files(self) -> tuple[str, ...]:
        return (
            self.descriptor,
            self.changelog,
            self.contributors_data,
            self.credits_page,
            self.licenses_page,
        )


@dataclass(frozen=True, slots=True)
class ChangelogConfig:
    features_heading: str = "### Features"


@dataclass(frozen=True, slots=True)
class PagesConfig:
    contributors_command: tuple[str, ...] = ("scripts/update-contributors",)
    licenses_command: tuple[str, ...] = ("scripts/update-licenses",)


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    root: Path = field(default_factory=Path.cwd)
    forge: ForgeConfig = field(default_factory=ForgeConfig)
    git: GitConfig = field(default_factory=GitConfig)
    files: FilesConfig = field(default_factory=FilesConfig)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    pages: PagesConfig = field(default_factory=PagesConfig)

    def path(self, rel: str) -> Path:
        return self.root / rel

    def with_repo(self, repo: str | None) -> ReleaseConfig:
        """Return a copy with ``forge.repo`` overridden (None keeps the current one)."""
        if repo is None:
            return self
        return replace(self, forge=replace(self.forge, repo=repo))

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, root: Path) -> ReleaseConfig:
        """Create a ReleaseConfig from parsed TOML."""
        forge: StrDict = get_table(data, "forge") or {}
        git: StrDict = get_table(data, "git") or {}
        files: StrDict = get_table(data, "files") or {}
        changelog: StrDict = get_table(data, "changelog") or {}
        pages: StrDict = get_table(data, "pages") or {}

        d_forge = ForgeConfig()
        d_git = GitConfig()
        d_files = FilesConfig()
        d_pages = PagesConfig()

        return cls(
            root=root,
            forge=ForgeConfig(
                repo=get_str(forge, "repo"),
                notes_config=get_str(forge, "notes_config") or d_forge.notes_config,
                placeholder_tag=get_str(forge, "placeholder_tag") or d_forge.placeholder_tag,
            ),
            git=GitConfig(
                remote=get_str(git, "remote") or d_git.remote,
                release_branch=get_str(git, "release_branch") or d_git.release_branch,
                branch_prefix=get_str(git, "branch_prefix") or d_git.branch_prefix,
            ),
            files=FilesConfig(
                descriptor=get_str(files, "descriptor") or d_files.descriptor,
                changelog=get_str(files, "changelog") or d_files.changelog,
                changelog_title=get_str(files, "changelog_title") or d_files.changelog_title,
                contributors_data=get_str(files, "contributors_data")
                or d_files.contributors_data,
                credits_page=get_str(files, "credits_page") or d_files.credits_page,
                licenses_page=get_str(files, "licenses_page") or d_files.licenses_page,
            ),
            changelog=ChangelogConfig(
                features_heading=get_str(changelog, "features_heading")
                or ChangelogConfig().features_heading,
            ),
            pages=PagesConfig(
                contributors_command=get_str_list(pages, "contributors_command")
                or d_pages.contributors_command,
                licenses_command=get_str_list(pages, "licenses_command")
                or d_pages.licenses_command,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path, *, root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse the release configuration from a TOML file.

    Args:
        path: Path to relcut.toml
        root: Project root the configured relative paths resolve against

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value, root=root))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load ``<root>/relcut.toml`` if present, else the default configuration.

    A present but broken file is still an error.
    """
    path = root / CONFIG_FILE_NAME
    if not path.exists():
        return Ok(ReleaseConfig(root=root))
    return load_config(path, root=root)
