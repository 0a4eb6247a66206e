"""Tests for release/transform.py."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import yaml

from addon_release.catalog.model import AddonConfig, BundleSource, ReleaseChannel
from addon_release.core.result import Err, Ok
from addon_release.output.console import MockConsole
from addon_release.release.channels import EdgePromotion, StablePromotion, StagePromotion
from addon_release.release.errors import CopyFailed
from addon_release.release.transform import StagedChange, transform
from addon_release.release.version import AddonVersion

STAGE = ReleaseChannel(name="stage", directory="foo", environment="stage")
EDGE = ReleaseChannel(name="edge", directory="foo-edge", environment="stage")
STABLE = ReleaseChannel(name="stable", directory="foo-stable", environment="production")
ADDON = AddonConfig(
    name="foo",
    bundle=BundleSource(repo="https://example.com/foo.git", path="bundles/foo"),
    channels=(STAGE, EDGE, STABLE),
)


def test_stage_stages_bundle_directory(tmp_path: Path, bundle_writer: Callable[..., Path]) -> None:
    bundle_writer(tmp_path / "bundle")
    result = transform(
        promotion=StagePromotion(STAGE),
        addon=ADDON,
        version=AddonVersion(1, 2, 3),
        target_root=tmp_path / "target",
        bundle_root=tmp_path / "bundle",
        console=MockConsole(),
    )
    assert result == Ok(StagedChange(pathspecs=("addons/foo/main/1.2.3/*",)))


def test_edge_without_rule_keeps_identity(
    tmp_path: Path, bundle_writer: Callable[..., Path]
) -> None:
    bundle_writer(tmp_path / "bundle")
    result = transform(
        promotion=EdgePromotion(EDGE),
        addon=ADDON,
        version=AddonVersion(1, 2, 3),
        target_root=tmp_path / "target",
        bundle_root=tmp_path / "bundle",
        console=MockConsole(),
    )
    assert result == Ok(StagedChange(pathspecs=("addons/foo-edge/main/1.2.3/*",)))
    bundle_dir = tmp_path / "target" / "addons/foo-edge/main/1.2.3"
    csv_path = bundle_dir / "manifests" / "foo.clusterserviceversion.yaml"
    csv = yaml.safe_load(csv_path.read_text(encoding="utf-8"))
    assert csv["metadata"]["name"] == "foo.v1.2.3"


def test_bundle_promotion_needs_bundle_root(tmp_path: Path) -> None:
    result = transform(
        promotion=StagePromotion(STAGE),
        addon=ADDON,
        version=AddonVersion(1, 2, 3),
        target_root=tmp_path,
        bundle_root=None,
        console=MockConsole(),
    )
    assert isinstance(result, Err)
    assert isinstance(result.error, CopyFailed)


def test_stable_stages_single_file(tmp_path: Path) -> None:
    stage = tmp_path / "addons" / "foo-stable" / "addonimagesets" / "stage"
    stage.mkdir(parents=True)
    (stage / "foo.v1.2.3.yaml").write_text(
        yaml.safe_dump({"indexImage": "idx", "name": "foo.v1.2.3", "relatedImages": []}),
        encoding="utf-8",
    )

    result = transform(
        promotion=StablePromotion(STABLE),
        addon=ADDON,
        version=AddonVersion(1, 2, 3),
        target_root=tmp_path,
        bundle_root=None,
        console=MockConsole(),
    )
    image_set = "addons/foo-stable/addonimagesets/production/foo-stable.v1.2.3.yaml"
    assert result == Ok(StagedChange(pathspecs=(image_set,)))
