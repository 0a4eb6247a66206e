"""Release orchestration: plan, prepare the clones, transform, commit, publish.

Each step runs only after its predecessor succeeded; the first error is
returned unchanged and nothing is rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from addon_release.catalog.model import AddonCatalog, AddonConfig, ReleaseChannel
from addon_release.catalog.resolve import resolve
from addon_release.core.result import Err, Ok, Result
from addon_release.git.repository import Repository, clone
from addon_release.output.console import ConsoleProtocol, Style
from addon_release.platform.files import make_temp_dir
from addon_release.release.changeset import commit_changeset, start_branch
from addon_release.release.channels import Promotion, StablePromotion, promotion_for
from addon_release.release.config import (
    ADDON_BUNDLE_CLONE_PREFIX,
    BUNDLES_CLONE_PREFIX,
    FORK_REMOTE,
    MAIN_BRANCH,
    STABLE_CLONE_PREFIX,
    ReleaseNames,
    release_names,
)
from addon_release.release.errors import GitFailed, ReleaseError
from addon_release.release.gitlab import GitLabClient
from addon_release.release.policy import check_allowed
from addon_release.release.publish import ReviewTarget, publish_review
from addon_release.release.transform import transform
from addon_release.release.version import AddonVersion


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    addon: AddonConfig
    channel: ReleaseChannel
    version: AddonVersion
    promotion: Promotion
    names: ReleaseNames


@dataclass(frozen=True, slots=True)
class ReleaseWorkspace:
    """Local clones used by one run.

    bundle_root is None for stable releases, which need no bundle source.
    """

    target_root: Path
    bundle_root: Path | None


def plan_release(
    *,
    catalog: AddonCatalog,
    addon_name: str,
    channel_name: str,
    version_text: str,
) -> Result[ReleasePlan, ReleaseError]:
    """Resolve the addon and channel, parse the version and apply the policy gate."""
    resolved = resolve(catalog, addon_name, channel_name)
    if isinstance(resolved, Err):
        return resolved
    addon, channel = resolved.value

    version = AddonVersion.parse(version_text)
    if isinstance(version, Err):
        return version

    allowed = check_allowed(version.value, channel)
    if isinstance(allowed, Err):
        return allowed

    promotion = promotion_for(channel)
    if isinstance(promotion, Err):
        return promotion

    return Ok(
        ReleasePlan(
            addon=addon,
            channel=channel,
            version=version.value,
            promotion=promotion.value,
            names=release_names(addon=addon.name, channel=channel.name, version=str(version.value)),
        )
    )


def prepare_workspace(
    *,
    plan: ReleasePlan,
    gitlab_url: str,
    target: ReviewTarget,
    console: ConsoleProtocol,
) -> Result[ReleaseWorkspace, GitFailed]:
    """Clone the origin at main, add the fork remote and fetch the bundle source."""
    stable = isinstance(plan.promotion, StablePromotion)
    base_url = gitlab_url.rstrip("/")

    target_root = make_temp_dir(STABLE_CLONE_PREFIX if stable else BUNDLES_CLONE_PREFIX)
    origin_url = f"{base_url}/{target.origin}"
    console.print(f"clone {origin_url} -> {target_root}", Style.DIM)
    cloned = clone(origin_url, target_root, ref=MAIN_BRANCH).map_err(GitFailed.from_git)
    if isinstance(cloned, Err):
        return cloned

    fork_url = f"{base_url}/{target.fork}"
    console.print(f"git remote add {FORK_REMOTE} {fork_url}", Style.DIM)
    remote = cloned.value.add_remote(FORK_REMOTE, fork_url).map_err(GitFailed.from_git)
    if isinstance(remote, Err):
        return remote

    if stable:
        return Ok(ReleaseWorkspace(target_root=target_root, bundle_root=None))

    bundle_root = make_temp_dir(ADDON_BUNDLE_CLONE_PREFIX)
    tag = plan.version.tag_name()
    console.print(f"clone {plan.addon.bundle.repo}@{tag} -> {bundle_root}", Style.DIM)
    bundle = clone(plan.addon.bundle.repo, bundle_root, ref=tag, depth=1).map_err(
        GitFailed.from_git
    )
    if isinstance(bundle, Err):
        return bundle

    return Ok(ReleaseWorkspace(target_root=target_root, bundle_root=bundle_root))


def execute_release(
    *,
    plan: ReleasePlan,
    workspace: ReleaseWorkspace,
    gitlab: GitLabClient,
    target: ReviewTarget,
    token: str | None,
    description: str,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[str, ReleaseError]:
    """Create the release branch, apply the promotion, commit and publish.

    Returns:
        Ok(review request URL)
    """
    repo = Repository(workspace.target_root)
    names = plan.names

    started = start_branch(repo=repo, branch=names.branch, console=console)
    if isinstance(started, Err):
        return started

    staged = transform(
        promotion=plan.promotion,
        addon=plan.addon,
        version=plan.version,
        target_root=workspace.target_root,
        bundle_root=workspace.bundle_root,
        console=console,
    )
    if isinstance(staged, Err):
        return staged

    committed = commit_changeset(
        repo=repo,
        pathspecs=staged.value.pathspecs,
        message=names.commit_message,
        console=console,
    )
    if isinstance(committed, Err):
        return committed
    console.success(f"committed {committed.value[:8]} on {names.branch}")

    return publish_review(
        repo=repo,
        gitlab=gitlab,
        target=target,
        branch=names.branch,
        title=names.title,
        description=description,
        token=token,
        console=console,
        dry_run=dry_run,
    )
