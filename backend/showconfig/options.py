"""Immutable per-run options for the builder and the episode lister."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

DEFAULT_LANGUAGES = ("en",)


def flatten_languages(values: Iterable[str] | None) -> tuple[str, ...]:
    """Split comma-separated groups into individual language codes.

    ``["en,fr", "de"]`` becomes ``("en", "fr", "de")``. Blank items are dropped
    and an empty result falls back to :data:`DEFAULT_LANGUAGES`.
    """

    languages = tuple(
        code.strip() for value in values or () for code in value.split(",") if code.strip()
    )
    return languages or DEFAULT_LANGUAGES


@dataclass(frozen=True, slots=True)
class BuildOptions:
    """Inputs of a Config Builder run."""

    api_key: str
    tv_id: str
    existing_config: Path
    languages: tuple[str, ...] = DEFAULT_LANGUAGES
    rate_limit: int = 1
    output_path: Path | None = None
    pretty_print: bool = True


@dataclass(frozen=True, slots=True)
class ListOptions:
    """Inputs of an Episode Lister run."""

    api_key: str
    tv_id: str
    output_path: Path | None = None
    pretty_print: bool = False
