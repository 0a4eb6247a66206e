from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from addon_release.catalog.loader import load_catalog
from addon_release.cli.commands._helpers import exit_release
from addon_release.cli.context import build_context, resolve_token
from addon_release.core.errors import ErrorCode
from addon_release.core.result import Err
from addon_release.output.console import ConsoleProtocol, Style
from addon_release.output.errors import print_release_error, release_error_exit_code
from addon_release.release.errors import ReleaseError
from addon_release.release.gitlab import RealGitLabClient
from addon_release.release.publish import ReviewTarget
from addon_release.release.service import execute_release, plan_release, prepare_workspace


def osd_addon(
    name: str = typer.Option(..., "--name", help="Name of the addon to update"),
    version: str = typer.Option(
        ...,
        "--version",
        help='The version to push to the managed-tenants repo (ex "2.0.0", "2.0.0-er4")',
    ),
    addons_config: Path = typer.Option(
        ..., "--addons-config", help="Configuration file for the addons"
    ),
    channel: str = typer.Option(
        "stage",
        "--channel",
        help="The OSD channel to push the release to (stage, edge or stable)",
    ),
    gitlab_token: str | None = typer.Option(
        None, "--gitlab-token", help="GitLab token to push the changes and open the MR"
    ),
    merge_request_description: str = typer.Option(
        "",
        "--merge-request-description",
        help='Optional merge request description, e.g. to notify users ("ping: @someone")',
    ),
    managed_tenants_origin: str | None = typer.Option(
        None,
        "--managed-tenants-origin",
        help="managed-tenants origin repository the MR targets (default depends on channel)",
    ),
    managed_tenants_fork: str | None = typer.Option(
        None,
        "--managed-tenants-fork",
        help="managed-tenants fork repository the release branch is pushed to",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Commit locally, skip push and MR"),
    config: Path | None = typer.Option(None, "--config", help="Settings file (TOML)"),
) -> None:
    """Create a MR to the managed-tenants repo to update the addon's version."""
    ctx = build_context(config)
    console = ctx.console
    settings = ctx.settings

    token = resolve_token(gitlab_token, settings)
    if token is None and not dry_run:
        exit_release(
            "missing GitLab token (use --gitlab-token or GITLAB_TOKEN)",
            code=ErrorCode.USER_ERROR,
        )

    catalog = load_catalog(addons_config)
    if isinstance(catalog, Err):
        _fail(catalog.error, console)

    plan = plan_release(
        catalog=catalog.value,
        addon_name=name,
        channel_name=channel,
        version_text=version,
    )
    if isinstance(plan, Err):
        _fail(plan.error, console)

    target = ReviewTarget(
        origin=managed_tenants_origin or settings.repos.origin_for(channel),
        fork=managed_tenants_fork or settings.repos.fork_for(channel),
    )
    tag = plan.value.version.tag_name()
    console.header(f"create osd addon release for {name} {tag} to the {channel} channel")

    workspace = prepare_workspace(
        plan=plan.value,
        gitlab_url=settings.gitlab.url,
        target=target,
        console=console,
    )
    if isinstance(workspace, Err):
        _fail(workspace.error, console)

    url = execute_release(
        plan=plan.value,
        workspace=workspace.value,
        gitlab=RealGitLabClient(settings.gitlab.api_url, token or ""),
        target=target,
        token=token,
        description=merge_request_description,
        console=console,
        dry_run=dry_run,
    )
    if isinstance(url, Err):
        _fail(url.error, console)

    if dry_run:
        branch = plan.value.names.branch
        console.success(f"dry run: {branch} committed in {workspace.value.target_root}")
        return

    console.success(
        f"merge request for version {plan.value.version} and channel {channel} created successfully"
    )
    console.print(f"MR: {url.value}", Style.INFO)


def _fail(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    print_release_error(error, console)
    raise typer.Exit(code=release_error_exit_code(error))
