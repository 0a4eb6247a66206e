"""Shared fixtures: sample bundle documents and throwaway git repositories."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

SEED_IDENTITY = ["-c", "user.name=Seed", "-c", "user.email=seed@example.com"]


def sample_csv(name: str = "foo", version: str = "1.2.3", replaces: str | None = "1.2.2") -> dict:
    spec: dict[str, object] = {}
    if replaces is not None:
        spec["replaces"] = f"{name}.v{replaces}"
    spec["installModes"] = [
        {"type": "OwnNamespace", "supported": True},
        {"type": "SingleNamespace", "supported": False},
        {"type": "MultiNamespace", "supported": False},
        {"type": "AllNamespaces", "supported": False},
    ]
    spec["install"] = {
        "strategy": "deployment",
        "spec": {
            "deployments": [
                {
                    "name": "rhmi-operator",
                    "spec": {
                        "template": {
                            "spec": {
                                "containers": [
                                    {
                                        "name": "rhmi-operator",
                                        "image": f"quay.io/integreatly/operator:{version}",
                                        "env": [{"name": "OLD", "value": "1"}],
                                    }
                                ]
                            }
                        }
                    },
                }
            ]
        },
    }
    return {
        "apiVersion": "operators.coreos.com/v1alpha1",
        "kind": "ClusterServiceVersion",
        "metadata": {
            "name": f"{name}.v{version}",
            "annotations": {"containerImage": f"quay.io/integreatly/operator:{version}"},
        },
        "spec": spec,
    }


def sample_annotations(package: str = "foo") -> dict:
    return {
        "annotations": {
            "operators.operatorframework.io.bundle.mediatype.v1": "registry+v1",
            "operators.operatorframework.io.bundle.package.v1": package,
            "operators.operatorframework.io.bundle.channels.v1": "stable",
            "operators.operatorframework.io.bundle.channel.default.v1": "stable",
        }
    }


def write_bundle(
    root: Path,
    *,
    addon: str = "foo",
    version: str = "1.2.3",
    bundle_path: str = "bundles/foo",
    with_dockerfile: bool = True,
    with_tests: bool = True,
) -> Path:
    """Lay out `<root>/<bundle_path>/<version>/` the way operator bundles are packaged."""
    version_dir = root / bundle_path / version
    (version_dir / "manifests").mkdir(parents=True, exist_ok=True)
    (version_dir / "metadata").mkdir(parents=True, exist_ok=True)
    (version_dir / "manifests" / f"{addon}.clusterserviceversion.yaml").write_text(
        yaml.safe_dump(sample_csv(addon, version), sort_keys=False), encoding="utf-8"
    )
    (version_dir / "metadata" / "annotations.yaml").write_text(
        yaml.safe_dump(sample_annotations(addon), sort_keys=False), encoding="utf-8"
    )
    if with_dockerfile:
        (version_dir / "bundle.Dockerfile").write_text("FROM scratch\n", encoding="utf-8")
    if with_tests:
        (version_dir / "tests" / "scorecard").mkdir(parents=True)
        (version_dir / "tests" / "scorecard" / "config.yaml").write_text(
            "kind: Configuration\n", encoding="utf-8"
        )
    return version_dir


@pytest.fixture
def bundle_writer() -> Callable[..., Path]:
    return write_bundle


class GitSandbox:
    """Create real repositories under a temp dir with an isolated git config."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def git(self, cwd: Path, *args: str) -> str:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout

    def init_repo(self, name: str, files: dict[str, str], *, branch: str = "main") -> Path:
        repo = self.root / name
        repo.mkdir(parents=True)
        self.git(repo, "init", "-q", "-b", branch)
        self.write(repo, files)
        self.commit_all(repo, "initial")
        return repo

    def write(self, repo: Path, files: dict[str, str]) -> None:
        for rel, content in files.items():
            path = repo / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    def commit_all(self, repo: Path, message: str) -> None:
        self.git(repo, "add", "-A")
        self.git(repo, *SEED_IDENTITY, "commit", "-q", "-m", message)

    def tag(self, repo: Path, name: str) -> None:
        self.git(repo, "tag", name)

    def bare_clone(self, source: Path, name: str) -> Path:
        dest = self.root / name
        self.git(self.root, "clone", "-q", "--bare", str(source), str(dest))
        return dest

    def bare_init(self, name: str) -> Path:
        dest = self.root / name
        dest.mkdir(parents=True)
        self.git(dest, "init", "-q", "--bare")
        return dest

    def branches(self, repo: Path) -> list[str]:
        out = self.git(repo, "for-each-ref", "--format=%(refname:short)", "refs/heads")
        return out.split()

    def head_author(self, repo: Path, ref: str = "HEAD") -> str:
        return self.git(repo, "log", "-1", "--format=%an <%ae>", ref).strip()

    def head_subject(self, repo: Path, ref: str = "HEAD") -> str:
        return self.git(repo, "log", "-1", "--format=%s", ref).strip()

    def changed_files(self, repo: Path, ref: str = "HEAD") -> list[str]:
        out = self.git(repo, "show", "--name-only", "--format=", ref)
        return sorted(line for line in out.splitlines() if line.strip())


@pytest.fixture
def git_sandbox(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> GitSandbox:
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    # Keep the developer's global config (signing, hooks, default branch) out of the way.
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_TERMINAL_PROMPT", "0")
    root = tmp_path / "git"
    root.mkdir()
    return GitSandbox(root)


@pytest.fixture
def csv_factory() -> Callable[..., dict]:
    return sample_csv


@pytest.fixture
def annotations_factory() -> Callable[..., dict]:
    return sample_annotations
