from __future__ import annotations

from dataclasses import dataclass

from addon_release.git.repository import CommitAuthor

# Branch the review request targets; clones must start on it.
MAIN_BRANCH = "main"

FORK_REMOTE = "fork"

BRANCH_NAME_TEMPLATE = "{addon}-{channel}-v{version}"
COMMIT_MESSAGE_TEMPLATE = "update {addon} {channel} to {version}"
REVIEW_TITLE_TEMPLATE = "Update {addon} {channel} to {version}"

COMMIT_AUTHOR = CommitAuthor(name="Delorean", email="cloud-services-delorean@redhat.com")

STABLE_CLONE_PREFIX = "managed-tenants-"
BUNDLES_CLONE_PREFIX = "managed-tenants-bundles-"
ADDON_BUNDLE_CLONE_PREFIX = "addon-bundle-"


@dataclass(frozen=True, slots=True)
class ReleaseNames:
    branch: str
    commit_message: str
    title: str


def release_names(*, addon: str, channel: str, version: str) -> ReleaseNames:
    values = {"addon": addon, "channel": channel, "version": version}
    return ReleaseNames(
        branch=BRANCH_NAME_TEMPLATE.format(**values),
        commit_message=COMMIT_MESSAGE_TEMPLATE.format(**values),
        title=REVIEW_TITLE_TEMPLATE.format(**values),
    )
