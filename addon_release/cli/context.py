from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from addon_release.cli.commands._helpers import exit_release
from addon_release.core.errors import ErrorCode
from addon_release.core.result import Err
from addon_release.core.settings import DEFAULT_SETTINGS_PATH, Settings, load_settings_or_default
from addon_release.output.console import ConsoleProtocol, RichConsole

GITLAB_TOKEN_ENV = "GITLAB_TOKEN"


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    console: ConsoleProtocol


def build_context(config_path: Path | None) -> CLIContext:
    path = (config_path or DEFAULT_SETTINGS_PATH).expanduser()
    settings = load_settings_or_default(path)
    if isinstance(settings, Err):
        exit_release(settings.error.message, code=ErrorCode.USER_ERROR)

    return CLIContext(settings=settings.value, console=RichConsole())


def resolve_token(flag_value: str | None, settings: Settings) -> str | None:
    """Token precedence: --gitlab-token, then $GITLAB_TOKEN, then the settings file."""
    for candidate in (flag_value, os.environ.get(GITLAB_TOKEN_ENV), settings.gitlab.token):
        if candidate and candidate.strip():
            return candidate.strip()
    return None
