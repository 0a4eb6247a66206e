"""Load the addon catalog from YAML.

    addons:
      - name: managed-api-service
        bundle: {repo: https://github.com/..., path: bundles/managed-api-service}
        channels:
          - {name: stage, directory: managed-api-service, environment: stage,
             allow_pre_release: true}
        override:
          deployment:
            name: rhmi-operator
            container:
              name: rhmi-operator
              env_vars:
                - {name: USE_CLUSTER_STORAGE, value: "false"}
                - name: WATCH_NAMESPACE
                  valueFrom: {fieldRef: {fieldPath: "metadata.annotations['olm.targetNamespaces']"}}

Shape errors are reported with the index of the offending entry. Env var
values must be strings, and WATCH_NAMESPACE / POD_NAME must name a
fieldPath. Duplicate addon or channel names are accepted; lookups take the
first match.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from addon_release.catalog.model import (
    FIELD_REF_ENV_VARS,
    AddonCatalog,
    AddonConfig,
    BundleSource,
    DeploymentOverride,
    EnvVarOverride,
    ReleaseChannel,
)
from addon_release.core.result import Err, Ok, Result
from addon_release.core.structured import (
    as_str_dict,
    get_bool,
    get_list,
    get_str,
    get_table,
)
from addon_release.platform.yaml_io import load_yaml_mapping
from addon_release.release.errors import CatalogInvalid

__all__ = ["load_catalog", "parse_catalog"]


class _Invalid(Exception):
    """Internal: aborts parsing with a reason; converted to CatalogInvalid."""


def _require_str(table: Mapping[str, object], key: str, where: str) -> str:
    value = get_str(table, key)
    if value is None:
        raise _Invalid(f"{where}: missing or empty '{key}'")
    return value


def _parse_channel(obj: object, where: str) -> ReleaseChannel:
    d = as_str_dict(obj)
    if d is None:
        raise _Invalid(f"{where}: expected a mapping")
    return ReleaseChannel(
        name=_require_str(d, "name", where),
        directory=_require_str(d, "directory", where),
        environment=get_str(d, "environment") or "",
        allow_pre_release=get_bool(d, "allow_pre_release"),
    )


def _parse_env_var(obj: object, where: str) -> EnvVarOverride:
    d = as_str_dict(obj)
    if d is None:
        raise _Invalid(f"{where}: expected a mapping")

    name = _require_str(d, "name", where)
    value = d.get("value")
    if value is not None and not isinstance(value, str):
        raise _Invalid(f"{where}: value of {name} must be a quoted string, got {value!r}")

    field_path: str | None = None
    value_from = get_table(d, "valueFrom")
    if value_from is not None:
        field_ref = get_table(value_from, "fieldRef") or {}
        field_path = get_str(field_ref, "fieldPath")
    if name in FIELD_REF_ENV_VARS and field_path is None:
        raise _Invalid(f"{where}: {name} requires valueFrom.fieldRef.fieldPath")

    return EnvVarOverride(name=name, value=value or "", field_path=field_path)


def _parse_override(obj: object, where: str) -> DeploymentOverride:
    d = as_str_dict(obj)
    deployment = get_table(d, "deployment") if d is not None else None
    if deployment is None:
        raise _Invalid(f"{where}: expected a 'deployment' mapping")
    container = get_table(deployment, "container")
    if container is None:
        raise _Invalid(f"{where}.deployment: expected a 'container' mapping")

    env_vars = tuple(
        _parse_env_var(item, f"{where}.deployment.container.env_vars[{i}]")
        for i, item in enumerate(get_list(container, "env_vars") or [])
    )
    return DeploymentOverride(
        deployment=_require_str(deployment, "name", f"{where}.deployment"),
        container=_require_str(container, "name", f"{where}.deployment.container"),
        env_vars=env_vars,
    )


def _parse_addon(obj: object, where: str) -> AddonConfig:
    d = as_str_dict(obj)
    if d is None:
        raise _Invalid(f"{where}: expected a mapping")

    name = _require_str(d, "name", where)
    bundle = get_table(d, "bundle")
    if bundle is None:
        raise _Invalid(f"{where}: missing 'bundle' mapping")

    raw_channels = get_list(d, "channels")
    if raw_channels is None:
        raise _Invalid(f"{where}: missing 'channels' list")
    channels = tuple(
        _parse_channel(item, f"{where}.channels[{i}]") for i, item in enumerate(raw_channels)
    )

    seen: set[str] = set()
    for channel in channels:
        if channel.directory in seen:
            raise _Invalid(f"{where}: directory '{channel.directory}' is used by two channels")
        seen.add(channel.directory)

    override = None
    if d.get("override") is not None:
        override = _parse_override(d["override"], f"{where}.override")

    return AddonConfig(
        name=name,
        bundle=BundleSource(
            repo=_require_str(bundle, "repo", f"{where}.bundle"),
            path=_require_str(bundle, "path", f"{where}.bundle"),
        ),
        channels=channels,
        override=override,
    )


def parse_catalog(
    data: Mapping[str, object],
    *,
    path: Path | None = None,
) -> Result[AddonCatalog, CatalogInvalid]:
    """Build an AddonCatalog from an already-parsed document."""
    raw_addons = get_list(data, "addons")
    if raw_addons is None:
        return Err(CatalogInvalid(path=path, reason="missing 'addons' list"))

    try:
        addons = tuple(_parse_addon(item, f"addons[{i}]") for i, item in enumerate(raw_addons))
    except _Invalid as e:
        return Err(CatalogInvalid(path=path, reason=str(e)))

    return Ok(AddonCatalog(addons=addons))


def load_catalog(path: Path) -> Result[AddonCatalog, CatalogInvalid]:
    """Load and validate the addon catalog file.

    Args:
        path: Path to the catalog YAML file

    Returns:
        Ok(AddonCatalog) on success, Err(CatalogInvalid) on failure
    """
    doc = load_yaml_mapping(path)
    if isinstance(doc, Err):
        return Err(CatalogInvalid(path=path, reason=doc.error.reason))
    return parse_catalog(doc.value, path=path)
