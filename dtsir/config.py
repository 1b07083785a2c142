"""Tool configuration loaded from ``.dtsir.yaml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_CONFIG_FILE = ".dtsir.yaml"


@dataclass
class ToolConfig:
    fail_on_gaps: bool = False  # 'gaps' exits non-zero when TODO nodes exist
    strict: bool = False  # Lint warnings fail 'check'
    ignore: list[str] = field(default_factory=list)  # fnmatch patterns over node paths


def load_config(path: str | Path | None = None) -> ToolConfig:
    """Load tool configuration from a YAML file.

    Without an explicit path, ``.dtsir.yaml`` in the working directory is
    used when present; otherwise the defaults apply. Unknown keys are ignored
    and a single ``ignore`` pattern may be given as a string.

    Raises:
        ValueError: if the file does not hold a mapping.
    """
    if path is None:
        path = Path(DEFAULT_CONFIG_FILE)
        if not path.exists():
            return ToolConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file must be a mapping, got {type(data).__name__}: {path}")

    ignore = data.get("ignore") or []
    if not isinstance(ignore, list):
        ignore = [ignore]

    return ToolConfig(
        fail_on_gaps=bool(data.get("fail_on_gaps", False)),
        strict=bool(data.get("strict", False)),
        ignore=[str(pattern) for pattern in ignore],
    )
