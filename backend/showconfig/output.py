"""Reading the previous configuration and rendering JSON documents."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import PreviousConfigError
from .schemas import PreviousConfig


def load_previous_config(path: Path) -> PreviousConfig:
    """Read the configuration whose timing data is carried forward."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PreviousConfigError(f"Cannot read existing config {path}: {exc}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PreviousConfigError(f"Existing config {path} is not valid JSON: {exc}") from exc

    try:
        return PreviousConfig.model_validate(payload)
    except ValidationError as exc:
        raise PreviousConfigError(f"Existing config {path} has an unexpected shape: {exc}") from exc


def render(document: Any, *, pretty: bool) -> str:
    """Serialise ``document`` minified, or indented with a trailing newline."""

    minified = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
    if not pretty:
        return minified
    return json.dumps(json.loads(minified), ensure_ascii=False, indent=2) + "\n"
