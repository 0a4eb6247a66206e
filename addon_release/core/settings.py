"""Typed settings loading.

Settings come from an optional TOML file. Every value has a default so a
missing file is not an error; a malformed one is.

    [gitlab]
    url = "https://gitlab.cee.redhat.com"
    api_endpoint = "api/v4"
    token = "..."

    [repos]
    stable_origin = "service/managed-tenants"
    stable_fork = "integreatly-qe/managed-tenants"
    bundles_origin = "service/managed-tenants-bundles"
    bundles_fork = "integreatly-qe/managed-tenants-bundles"
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_table

__all__ = [
    "DEFAULT_SETTINGS_PATH",
    "GitLabSettings",
    "ReposSettings",
    "Settings",
    "SettingsError",
    "load_settings",
    "load_settings_or_default",
]

DEFAULT_SETTINGS_PATH = Path("~/.config/addon-release/config.toml")

GITLAB_URL = "https://gitlab.cee.redhat.com"
GITLAB_API_ENDPOINT = "api/v4"

STABLE_ORIGIN = "service/managed-tenants"
STABLE_FORK = "integreatly-qe/managed-tenants"
BUNDLES_ORIGIN = "service/managed-tenants-bundles"
BUNDLES_FORK = "integreatly-qe/managed-tenants-bundles"


@dataclass(frozen=True, slots=True)
class SettingsError:
    """Error when the settings file cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitLabSettings:
    url: str = GITLAB_URL
    api_endpoint: str = GITLAB_API_ENDPOINT
    token: str | None = None

    @property
    def api_url(self) -> str:
        return f"{self.url.rstrip('/')}/{self.api_endpoint.strip('/')}"


@dataclass(frozen=True, slots=True)
class ReposSettings:
    """Origin/fork project paths of the managed-tenants repositories.

    The stable channel promotes into managed-tenants; stage and edge promote
    bundles into managed-tenants-bundles.
    """

    stable_origin: str = STABLE_ORIGIN
    stable_fork: str = STABLE_FORK
    bundles_origin: str = BUNDLES_ORIGIN
    bundles_fork: str = BUNDLES_FORK

    def origin_for(self, channel_name: str) -> str:
        return self.stable_origin if channel_name == "stable" else self.bundles_origin

    def fork_for(self, channel_name: str) -> str:
        return self.stable_fork if channel_name == "stable" else self.bundles_fork


@dataclass(frozen=True, slots=True)
class Settings:
    gitlab: GitLabSettings = field(default_factory=GitLabSettings)
    repos: ReposSettings = field(default_factory=ReposSettings)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Settings:
        """Create Settings from a mapping (parsed TOML)."""
        gitlab: StrDict = get_table(data, "gitlab") or {}
        repos: StrDict = get_table(data, "repos") or {}

        return cls(
            gitlab=GitLabSettings(
                url=get_str(gitlab, "url") or GITLAB_URL,
                api_endpoint=get_str(gitlab, "api_endpoint") or GITLAB_API_ENDPOINT,
                token=get_str(gitlab, "token"),
            ),
            repos=ReposSettings(
                stable_origin=get_str(repos, "stable_origin") or STABLE_ORIGIN,
                stable_fork=get_str(repos, "stable_fork") or STABLE_FORK,
                bundles_origin=get_str(repos, "bundles_origin") or BUNDLES_ORIGIN,
                bundles_fork=get_str(repos, "bundles_fork") or BUNDLES_FORK,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, SettingsError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(SettingsError(f"Settings file not found: {path}", path=path))
    except PermissionError:
        return Err(SettingsError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(SettingsError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(SettingsError(f"Error reading settings: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(SettingsError("Settings root must be a TOML table", path=path))
    return Ok(data)


def load_settings(path: Path) -> Result[Settings, SettingsError]:
    """Load and parse settings from a TOML file.

    Args:
        path: Path to the settings file

    Returns:
        Ok(Settings) on success, Err(SettingsError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(Settings.from_dict(result.value))


def load_settings_or_default(path: Path) -> Result[Settings, SettingsError]:
    """Like load_settings, but a missing file yields default settings."""
    if not path.exists():
        return Ok(Settings())
    return load_settings(path)
