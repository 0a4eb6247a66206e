"""Bundle promotion for the stage and edge channels.

The addon's bundle for the release is copied from its source checkout into
`addons/<directory>/main/<base-version>/` of the target repository, stripped
of files that must not ship downstream, and its CSV and annotations are
edited in place.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from addon_release.catalog.model import AddonConfig, ReleaseChannel
from addon_release.core.result import Err, Ok, Result
from addon_release.output.console import ConsoleProtocol, Style
from addon_release.platform.files import copy_directory
from addon_release.platform.yaml_io import load_yaml_mapping, write_yaml_mapping
from addon_release.release.errors import (
    CopyFailed,
    DocumentInvalid,
    ExpectedFileMissing,
    InstallModeNotFound,
    TransformError,
)
from addon_release.release.identity import IdentityRewrite
from addon_release.release.manifest import (
    INSTALL_MODE_SINGLE_NAMESPACE,
    annotations_of,
    apply_override,
    force_install_mode,
    rewrite_identity,
)
from addon_release.release.version import AddonVersion

BUNDLE_DOCKERFILE = "bundle.Dockerfile"
SCORECARD_TESTS_DIR = "tests"


@dataclass(frozen=True, slots=True)
class BundlePaths:
    source: Path
    destination: Path
    relative_destination: str

    def csv_file(self, addon_name: str) -> Path:
        return self.destination / "manifests" / f"{addon_name}.clusterserviceversion.yaml"

    def annotations_file(self) -> Path:
        return self.destination / "metadata" / "annotations.yaml"


def bundle_paths(
    *,
    addon: AddonConfig,
    channel: ReleaseChannel,
    version: AddonVersion,
    bundle_root: Path,
    target_root: Path,
) -> BundlePaths:
    relative = f"{channel.bundles_directory()}/{version.base()}"
    return BundlePaths(
        source=bundle_root / addon.bundle.path / version.base(),
        destination=target_root / relative,
        relative_destination=relative,
    )


def copy_bundle(paths: BundlePaths, console: ConsoleProtocol) -> Result[None, TransformError]:
    console.print(f"copy {paths.source} -> {paths.destination}", Style.DIM)
    copied = copy_directory(paths.source, paths.destination)
    if isinstance(copied, Err):
        return Err(
            CopyFailed(source=paths.source, destination=paths.destination, reason=copied.error)
        )

    dockerfile = paths.destination / BUNDLE_DOCKERFILE
    if not dockerfile.is_file():
        return Err(ExpectedFileMissing(path=dockerfile))
    # Scorecard tests only exist in newer bundles.
    tests = paths.destination / SCORECARD_TESTS_DIR
    try:
        dockerfile.unlink()
        if tests.is_dir():
            shutil.rmtree(tests)
        else:
            console.info("no scorecard tests in bundle, skipping removal")
    except OSError as e:
        return Err(CopyFailed(source=paths.source, destination=paths.destination, reason=str(e)))

    return Ok(None)


def update_manifests(
    *,
    paths: BundlePaths,
    addon: AddonConfig,
    identity: IdentityRewrite | None,
    console: ConsoleProtocol,
) -> Result[None, TransformError]:
    csv_file = paths.csv_file(addon.name)
    annotations_file = paths.annotations_file()
    console.print(f"update csv manifest {csv_file.name}", Style.DIM)

    csv = load_yaml_mapping(csv_file)
    if isinstance(csv, Err):
        return Err(DocumentInvalid(path=csv_file, reason=csv.error.reason))
    metadata = load_yaml_mapping(annotations_file)
    if isinstance(metadata, Err):
        return Err(DocumentInvalid(path=annotations_file, reason=metadata.error.reason))

    if addon.override is not None:
        if not apply_override(csv.value, addon.override):
            console.warning(
                f"override target {addon.override.deployment}/{addon.override.container} "
                "not found in CSV, env left unchanged"
            )

    if identity is not None:
        renamed = rewrite_identity(csv.value, identity)
        if isinstance(renamed, Err):
            return renamed
        annotations = annotations_of(metadata.value)
        if annotations is not None:
            identity.rewrite_annotations(annotations)

    if not force_install_mode(csv.value, INSTALL_MODE_SINGLE_NAMESPACE):
        return Err(InstallModeNotFound(path=csv_file, mode=INSTALL_MODE_SINGLE_NAMESPACE))

    for doc, path in ((csv.value, csv_file), (metadata.value, annotations_file)):
        written = write_yaml_mapping(doc, path)
        if isinstance(written, Err):
            return Err(DocumentInvalid(path=path, reason=written.error.reason))

    return Ok(None)


def promote_bundle(
    *,
    addon: AddonConfig,
    channel: ReleaseChannel,
    version: AddonVersion,
    bundle_root: Path,
    target_root: Path,
    identity: IdentityRewrite | None,
    console: ConsoleProtocol,
) -> Result[str, TransformError]:
    """Materialize the bundle in the target tree.

    Returns:
        Ok(relative directory) to be staged for commit
    """
    paths = bundle_paths(
        addon=addon,
        channel=channel,
        version=version,
        bundle_root=bundle_root,
        target_root=target_root,
    )

    copied = copy_bundle(paths, console)
    if isinstance(copied, Err):
        return copied

    updated = update_manifests(paths=paths, addon=addon, identity=identity, console=console)
    if isinstance(updated, Err):
        return updated

    return Ok(paths.relative_destination)
