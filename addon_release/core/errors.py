"""Process exit codes.

Each family of release failure maps to one stable exit code so that CI jobs
wrapping the tool can tell a bad request from a broken remote.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (unknown addon/channel, bad version, bad config)
    - 2: Policy error (version not permitted in the channel)
    - 3: Transform error (bundle copy or manifest edit failed)
    - 4: Git error (wrong branch, dirty tree, git command failed)
    - 5: Network error (push or review request failed)
    """

    OK = 0
    USER_ERROR = 1
    POLICY_ERROR = 2
    TRANSFORM_ERROR = 3
    GIT_ERROR = 4
    NETWORK_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
