"""Tests for release/identity.py."""

from __future__ import annotations

from addon_release.core.result import Err, Ok
from addon_release.release.errors import VersionMarkerMissing
from addon_release.release.identity import (
    BUNDLE_CHANNELS_ANNOTATION,
    BUNDLE_DEFAULT_CHANNEL_ANNOTATION,
    BUNDLE_PACKAGE_ANNOTATION,
    identity_rewrite_for,
    version_suffix,
)


def test_suffix() -> None:
    assert version_suffix("metadata.name", "managed-api-service.v1.2.3") == Ok("1.2.3")


def test_suffix_keeps_segment_before_second_marker() -> None:
    assert version_suffix("metadata.name", "a.v1.2.3.v4") == Ok("1.2.3")


def test_suffix_missing_marker() -> None:
    assert version_suffix("spec.replaces", "managed-api-service") == Err(
        VersionMarkerMissing(field="spec.replaces", value="managed-api-service")
    )


def test_only_managed_api_service_edge_has_a_rule() -> None:
    assert identity_rewrite_for("managed-api-service", "edge") is not None
    assert identity_rewrite_for("managed-api-service", "stage") is None
    assert identity_rewrite_for("managed-api-service", "stable") is None
    assert identity_rewrite_for("foo", "edge") is None


def test_rename() -> None:
    rule = identity_rewrite_for("managed-api-service", "edge")
    assert rule is not None
    assert rule.rename("metadata.name", "managed-api-service.v1.2.3") == Ok(
        "managed-api-service-internal.v1.2.3"
    )


def test_rewrite_annotations() -> None:
    rule = identity_rewrite_for("managed-api-service", "edge")
    assert rule is not None
    annotations = {
        BUNDLE_PACKAGE_ANNOTATION: "managed-api-service",
        BUNDLE_CHANNELS_ANNOTATION: "stable",
        BUNDLE_DEFAULT_CHANNEL_ANNOTATION: "stable",
        "operators.operatorframework.io.bundle.mediatype.v1": "registry+v1",
    }
    rule.rewrite_annotations(annotations)
    assert annotations == {
        BUNDLE_PACKAGE_ANNOTATION: "managed-api-service-internal",
        BUNDLE_CHANNELS_ANNOTATION: "edge",
        BUNDLE_DEFAULT_CHANNEL_ANNOTATION: "edge",
        "operators.operatorframework.io.bundle.mediatype.v1": "registry+v1",
    }


def test_rewrite_annotations_leaves_unknown_values() -> None:
    rule = identity_rewrite_for("managed-api-service", "edge")
    assert rule is not None
    annotations = {BUNDLE_CHANNELS_ANNOTATION: "stable,alpha"}
    rule.rewrite_annotations(annotations)
    assert annotations == {BUNDLE_CHANNELS_ANNOTATION: "stable,alpha"}
