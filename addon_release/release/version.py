from __future__ import annotations

import re
from dataclasses import dataclass

from addon_release.core.result import Err, Ok, Result
from addon_release.release.errors import InvalidVersion

_VERSION_RE = re.compile(
    r"^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-([0-9A-Za-z][0-9A-Za-z.-]*))?$"
)


@dataclass(frozen=True, slots=True)
class AddonVersion:
    """A release version such as `1.2.3` or `1.2.3-rc1`.

    base() drops the pre-release suffix, so every release candidate of one
    release shares a bundle directory.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    @classmethod
    def parse(cls, text: str) -> Result[AddonVersion, InvalidVersion]:
        m = _VERSION_RE.match(text.strip())
        if m is None:
            return Err(InvalidVersion(value=text))
        return Ok(cls(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4)))

    def base(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def tag_name(self) -> str:
        """Git tag of this release in the addon's source repository."""
        return f"v{self}"

    def is_prerelease(self) -> bool:
        return self.prerelease is not None

    def __str__(self) -> str:
        if self.prerelease is None:
            return self.base()
        return f"{self.base()}-{self.prerelease}"
