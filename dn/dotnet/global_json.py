"""SDK version lookup from global.json.

    {"sdk": {"version": "2.0.0"}}

The document is deserialized into typed records; a missing `sdk` table or
`version` field is an explicit failure, never a silent default.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from dn.core.result import Err, Ok, Result
from dn.core.structured import as_str_dict, get_str, get_table

from .errors import ConfigParseFailed

__all__ = ["GlobalJson", "SdkSection", "parse_global_json", "global_json_sdk"]


@dataclass(frozen=True, slots=True)
class SdkSection:
    version: str | None = None


@dataclass(frozen=True, slots=True)
class GlobalJson:
    sdk: SdkSection | None = None


def parse_global_json(text: str, path: Path) -> Result[GlobalJson, ConfigParseFailed]:
    """Deserialize global.json content."""
    try:
        data_obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(ConfigParseFailed(path=path, reason=f"invalid JSON: {e}"))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigParseFailed(path=path, reason="root must be a JSON object"))

    sdk = get_table(data, "sdk")
    if sdk is None:
        return Ok(GlobalJson(sdk=None))
    return Ok(GlobalJson(sdk=SdkSection(version=get_str(sdk, "version"))))


def global_json_sdk(path: Path) -> Result[str, ConfigParseFailed]:
    """Read sdk.version from a global.json file.

    Returns:
        Ok(version), or Err(ConfigParseFailed) when the file is unreadable,
        not JSON, or has no sdk.version.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        return Err(ConfigParseFailed(path=path, reason=f"cannot read file: {e}"))
    except UnicodeDecodeError as e:
        return Err(ConfigParseFailed(path=path, reason=f"cannot decode file: {e}"))

    parsed = parse_global_json(text, path)
    if isinstance(parsed, Err):
        return parsed

    sdk = parsed.value.sdk
    if sdk is None:
        return Err(ConfigParseFailed(path=path, reason="missing 'sdk' section"))
    if sdk.version is None:
        return Err(ConfigParseFailed(path=path, reason="missing 'sdk.version'"))
    return Ok(sdk.version)
