"""GitLab review-request client.

This module provides:
- GitLabClient: Protocol for the two calls a release needs (injectable for tests)
- RealGitLabClient: REST v4 implementation using urllib
- MockGitLabClient: Mock implementation for testing
"""

from __future__ import annotations

import json
import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from addon_release.core.result import Err, Ok, Result
from addon_release.core.structured import StrDict, as_str_dict, get_int, get_str
from addon_release.release.errors import PublishFailed

__all__ = [
    "GitLabClient",
    "GitLabProject",
    "MergeRequest",
    "MergeRequestOptions",
    "MockGitLabClient",
    "RealGitLabClient",
]


@dataclass(frozen=True, slots=True)
class GitLabProject:
    id: int
    path: str


@dataclass(frozen=True, slots=True)
class MergeRequestOptions:
    source_branch: str
    target_branch: str
    target_project_id: int
    title: str
    description: str = ""
    remove_source_branch: bool = True

    def as_payload(self) -> StrDict:
        return {
            "source_branch": self.source_branch,
            "target_branch": self.target_branch,
            "target_project_id": self.target_project_id,
            "title": self.title,
            "description": self.description,
            "remove_source_branch": self.remove_source_branch,
        }


@dataclass(frozen=True, slots=True)
class MergeRequest:
    iid: int
    web_url: str


@runtime_checkable
class GitLabClient(Protocol):
    def get_project(self, project: str) -> Result[GitLabProject, PublishFailed]:
        """Fetch a project by its `group/name` path."""
        ...

    def create_merge_request(
        self,
        project: str,
        options: MergeRequestOptions,
    ) -> Result[MergeRequest, PublishFailed]:
        """Open a merge request from `project` (the fork)."""
        ...


class RealGitLabClient:
    """GitLab REST client using urllib.

    Handles:
    - HTTPS with system certificates
    - PRIVATE-TOKEN authentication
    - JSON request/response bodies
    """

    def __init__(self, api_url: str, token: str, *, timeout: float = 60.0) -> None:
        """Initialize the client.

        Args:
            api_url: API base URL, e.g. https://gitlab.example.com/api/v4
            token: Personal access token
            timeout: Request timeout in seconds
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._ssl_context = ssl.create_default_context()

    def _project_url(self, project: str) -> str:
        return f"{self.api_url}/projects/{urllib.parse.quote(project, safe='')}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        step: str,
        payload: StrDict | None = None,
    ) -> Result[StrDict, PublishFailed]:
        headers = {"PRIVATE-TOKEN": self._token, "Accept": "application/json"}
        data: bytes | None = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"

        try:
            req = urllib.request.Request(url, data=data, headers=headers, method=method)
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            return Err(PublishFailed(step=step, message=f"HTTP {e.code}: {e.reason} ({url})"))
        except urllib.error.URLError as e:
            return Err(PublishFailed(step=step, message=f"{e.reason} ({url})"))
        except TimeoutError:
            return Err(PublishFailed(step=step, message=f"request timed out ({url})"))
        except (ValueError, OSError) as e:
            return Err(PublishFailed(step=step, message=f"{e} ({url})"))

        try:
            obj: object = json.loads(body.decode("utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return Err(PublishFailed(step=step, message=f"invalid JSON response: {e}"))

        parsed = as_str_dict(obj)
        if parsed is None:
            return Err(PublishFailed(step=step, message="expected a JSON object"))
        return Ok(parsed)

    def get_project(self, project: str) -> Result[GitLabProject, PublishFailed]:
        data = self._request("GET", self._project_url(project), step="get project")
        if isinstance(data, Err):
            return data

        project_id = get_int(data.value, "id")
        if project_id is None:
            return Err(PublishFailed(step="get project", message=f"missing id for {project}"))
        path = get_str(data.value, "path_with_namespace") or project
        return Ok(GitLabProject(id=project_id, path=path))

    def create_merge_request(
        self,
        project: str,
        options: MergeRequestOptions,
    ) -> Result[MergeRequest, PublishFailed]:
        data = self._request(
            "POST",
            f"{self._project_url(project)}/merge_requests",
            step="create merge request",
            payload=options.as_payload(),
        )
        if isinstance(data, Err):
            return data

        web_url = get_str(data.value, "web_url")
        if web_url is None:
            return Err(PublishFailed(step="create merge request", message="missing web_url"))
        return Ok(MergeRequest(iid=get_int(data.value, "iid") or 0, web_url=web_url))


class MockGitLabClient:
    """Mock GitLab client for testing.

    Usage:
        client = MockGitLabClient()
        client.set_project("service/managed-tenants", 42)
        result = client.get_project("service/managed-tenants")
        assert result == Ok(GitLabProject(id=42, path="service/managed-tenants"))
    """

    def __init__(self, *, web_url: str = "https://gitlab.example.com/mr/1") -> None:
        self._projects: dict[str, int] = {}
        self._web_url = web_url
        self._merge_request_error: PublishFailed | None = None
        self.calls: list[tuple[str, str]] = []
        self.merge_requests: list[tuple[str, MergeRequestOptions]] = []

    def set_project(self, project: str, project_id: int) -> None:
        self._projects[project] = project_id

    def fail_merge_requests(self, error: PublishFailed) -> None:
        self._merge_request_error = error

    def get_project(self, project: str) -> Result[GitLabProject, PublishFailed]:
        self.calls.append(("get_project", project))
        if project not in self._projects:
            return Err(
                PublishFailed(step="get project", message=f"HTTP 404: Not found (mock) {project}")
            )
        return Ok(GitLabProject(id=self._projects[project], path=project))

    def create_merge_request(
        self,
        project: str,
        options: MergeRequestOptions,
    ) -> Result[MergeRequest, PublishFailed]:
        self.calls.append(("create_merge_request", project))
        if self._merge_request_error is not None:
            return Err(self._merge_request_error)
        self.merge_requests.append((project, options))
        return Ok(MergeRequest(iid=len(self.merge_requests), web_url=self._web_url))
