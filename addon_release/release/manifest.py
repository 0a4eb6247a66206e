"""In-place edits of a ClusterServiceVersion (CSV) document.

The CSV is handled as the plain mapping PyYAML produced, so fields this
module does not touch survive the round trip unchanged.

    metadata: {name: managed-api-service.v1.2.3}
    spec:
      replaces: managed-api-service.v1.2.2
      installModes: [{type: SingleNamespace, supported: false}, ...]
      install:
        spec:
          deployments:
            - name: rhmi-operator
              spec: {template: {spec: {containers: [{name: rhmi-operator, env: [...]}]}}}
"""

from __future__ import annotations

from typing import cast

from addon_release.catalog.model import FIELD_REF_ENV_VARS, DeploymentOverride, EnvVarOverride
from addon_release.core.result import Err, Ok, Result
from addon_release.core.structured import (
    StrDict,
    as_str_dict,
    dict_items,
    get_list,
    get_str,
    get_table,
)
from addon_release.release.errors import VersionMarkerMissing
from addon_release.release.identity import IdentityRewrite

INSTALL_MODE_SINGLE_NAMESPACE = "SingleNamespace"


def _walk(doc: StrDict, *keys: str) -> StrDict | None:
    node: StrDict | None = doc
    for key in keys:
        if node is None:
            return None
        node = get_table(node, key)
    return node


def find_named(items: list[StrDict], name: str) -> StrDict | None:
    """First mapping whose `name` equals name exactly."""
    for item in items:
        if item.get("name") == name:
            return item
    return None


def deployments(csv: StrDict) -> list[StrDict]:
    install_spec = _walk(csv, "spec", "install", "spec")
    if install_spec is None:
        return []
    return dict_items(get_list(install_spec, "deployments") or [])


def containers(deployment: StrDict) -> list[StrDict]:
    pod_spec = _walk(deployment, "spec", "template", "spec")
    if pod_spec is None:
        return []
    return dict_items(get_list(pod_spec, "containers") or [])


def env_entry(var: EnvVarOverride) -> StrDict:
    if var.name in FIELD_REF_ENV_VARS:
        return {
            "name": var.name,
            "valueFrom": {"fieldRef": {"fieldPath": var.field_path or ""}},
        }
    return {"name": var.name, "value": var.value}


def apply_override(csv: StrDict, override: DeploymentOverride) -> bool:
    """Replace the env of the overridden container with the override's env vars.

    Returns False (and leaves the CSV alone) when the deployment or the
    container is not present.
    """
    deployment = find_named(deployments(csv), override.deployment)
    if deployment is None:
        return False
    container = find_named(containers(deployment), override.container)
    if container is None:
        return False

    container["env"] = [env_entry(var) for var in override.env_vars]
    return True


def force_install_mode(csv: StrDict, mode: str = INSTALL_MODE_SINGLE_NAMESPACE) -> bool:
    """Mark install mode `mode` as supported. Returns False if the CSV lacks it."""
    spec = get_table(csv, "spec")
    if spec is None:
        return False
    for entry in dict_items(get_list(spec, "installModes") or []):
        if entry.get("type") == mode:
            entry["supported"] = True
            return True
    return False


def rewrite_identity(csv: StrDict, rule: IdentityRewrite) -> Result[None, VersionMarkerMissing]:
    """Rename metadata.name and spec.replaces per the rule.

    A CSV without `replaces` (the first release of a package) keeps it absent.
    """
    metadata = get_table(csv, "metadata")
    if metadata is None:
        return Err(VersionMarkerMissing(field="metadata.name", value=""))

    name = rule.rename("metadata.name", get_str(metadata, "name") or "")
    if isinstance(name, Err):
        return name

    spec = get_table(csv, "spec")
    replaces_value = get_str(spec, "replaces") if spec is not None else None
    replaces: str | None = None
    if replaces_value is not None:
        renamed = rule.rename("spec.replaces", replaces_value)
        if isinstance(renamed, Err):
            return renamed
        replaces = renamed.value

    # Both fields are validated before either is written.
    metadata["name"] = name.value
    if spec is not None and replaces is not None:
        spec["replaces"] = replaces
    return Ok(None)


def annotations_of(doc: StrDict) -> dict[str, str] | None:
    """The `annotations` mapping of a bundle metadata document, stringified in place."""
    table = as_str_dict(doc.get("annotations"))
    if table is None:
        return None
    for key, value in list(table.items()):
        if not isinstance(value, str):
            table[key] = "" if value is None else str(value)
    return cast(dict[str, str], table)
