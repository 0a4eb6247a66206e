"""YAML document I/O.

Manifests, annotations, image sets and the addon catalog are all YAML
mappings. Documents are loaded with safe_load and written back with key
order preserved so review diffs stay minimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from addon_release.core.result import Err, Ok, Result
from addon_release.core.structured import StrDict, as_str_dict
from addon_release.platform.files import atomic_write_text

__all__ = ["DocumentError", "dump_yaml", "load_yaml_mapping", "write_yaml_mapping"]


@dataclass(frozen=True, slots=True)
class DocumentError:
    path: Path
    reason: str


def load_yaml_mapping(path: Path) -> Result[StrDict, DocumentError]:
    """Load a YAML file whose root must be a mapping."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(DocumentError(path, "file not found"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(DocumentError(path, str(e)))

    try:
        obj: object = yaml.safe_load(text)
    except yaml.YAMLError as e:
        return Err(DocumentError(path, f"invalid YAML: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(DocumentError(path, "document root must be a mapping"))
    return Ok(data)


def dump_yaml(data: StrDict) -> str:
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)


def write_yaml_mapping(data: StrDict, path: Path) -> Result[None, DocumentError]:
    try:
        atomic_write_text(path, dump_yaml(data))
    except (OSError, yaml.YAMLError) as e:
        return Err(DocumentError(path, str(e)))
    return Ok(None)
