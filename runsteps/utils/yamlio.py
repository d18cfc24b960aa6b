from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from ..errors import ValidationError


def read_yaml(path: Path) -> Dict[str, Any]:
    """Parse a YAML mapping. An empty file yields an empty dict."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValidationError(f"invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(f"YAML root must be a mapping: {path}")
    return data
