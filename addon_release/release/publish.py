"""Push the release branch to the fork and open the review request."""

from __future__ import annotations

from dataclasses import dataclass

from addon_release.core.result import Err, Ok, Result
from addon_release.git.repository import Repository
from addon_release.output.console import ConsoleProtocol, Style
from addon_release.release.config import FORK_REMOTE, MAIN_BRANCH
from addon_release.release.errors import PublishFailed
from addon_release.release.gitlab import GitLabClient, MergeRequestOptions

DRY_RUN_URL = "(dry-run)"


@dataclass(frozen=True, slots=True)
class ReviewTarget:
    """Projects (GitLab `group/name` paths) involved in the review request."""

    origin: str
    fork: str


def publish_review(
    *,
    repo: Repository,
    gitlab: GitLabClient,
    target: ReviewTarget,
    branch: str,
    title: str,
    description: str,
    token: str | None,
    console: ConsoleProtocol,
    dry_run: bool = False,
) -> Result[str, PublishFailed]:
    """Publish the committed branch and return the review request URL.

    The clone is switched back to main afterwards, including in dry-run mode.
    """
    ref = f"refs/heads/{branch}"
    console.print(f"git push {FORK_REMOTE} {ref}:{ref}", Style.DIM)
    console.print(
        f"create merge request {target.fork}:{branch} -> {target.origin}:{MAIN_BRANCH}",
        Style.DIM,
    )

    url = DRY_RUN_URL
    if not dry_run:
        pushed = repo.push(FORK_REMOTE, f"{ref}:{ref}", token=token)
        if isinstance(pushed, Err):
            return Err(PublishFailed(step="push", message=pushed.error.message))

        origin = gitlab.get_project(target.origin)
        if isinstance(origin, Err):
            return origin

        mr = gitlab.create_merge_request(
            target.fork,
            MergeRequestOptions(
                source_branch=branch,
                target_branch=MAIN_BRANCH,
                target_project_id=origin.value.id,
                title=title,
                description=description,
                remove_source_branch=True,
            ),
        )
        if isinstance(mr, Err):
            return mr
        url = mr.value.web_url

    console.print(f"git checkout {MAIN_BRANCH}", Style.DIM)
    reset = repo.checkout(MAIN_BRANCH)
    if isinstance(reset, Err):
        return Err(PublishFailed(step="checkout main", message=reset.error.message))

    return Ok(url)
