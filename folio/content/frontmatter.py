"""Split and parse the front-matter block of a markdown document.

Two fence styles are accepted:

- ``---`` blocks are YAML, loaded with PyYAML's safe loader. Only
  ``true``/``false`` resolve to booleans, so ``draft: yes`` stays a string
  and fails validation.
- ``+++`` blocks are TOML and go through ``tomllib``.
"""

from __future__ import annotations

import re
import tomllib
from pathlib import Path
from typing import Any

import yaml

_YAML_FENCE = "---"
_TOML_FENCE = "+++"

_BOOL_TAG = "tag:yaml.org,2002:bool"


class FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that resolves only true/false (YAML 1.2 style) as booleans."""


FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontMatterLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class FrontMatterError(ValueError):
    """Raised for a malformed or incomplete front-matter block."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


def split_front_matter(text: str) -> tuple[str | None, str]:
    """Return ``(raw_block, body)``; ``raw_block`` is None when there is no block."""
    _, raw, body = _split(text)
    return raw, body


def parse_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Parse a document into ``(metadata, body)``.

    Documents without a front-matter block return an empty mapping and the
    whole text as body.
    """
    fence, raw, body = _split(text)
    if raw is None:
        return {}, body

    if fence == _TOML_FENCE:
        try:
            return tomllib.loads(raw), body
        except tomllib.TOMLDecodeError as e:
            raise FrontMatterError(f"invalid TOML front-matter: {e}") from e

    try:
        data = yaml.load(raw, Loader=FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        # Impossible timestamps such as 2023-13-45 surface as ValueError.
        raise FrontMatterError(f"invalid YAML front-matter: {e}") from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontMatterError("front-matter must be a 'key: value' mapping")
    return {str(k): v for k, v in data.items()}, body


def _split(text: str) -> tuple[str | None, str | None, str]:
    text = text.lstrip("\ufeff").replace("\r\n", "\n").replace("\r", "\n")
    lines = text.split("\n")

    fence = lines[0].strip()
    if fence not in (_YAML_FENCE, _TOML_FENCE):
        return None, None, text

    for i in range(1, len(lines)):
        if lines[i].strip() == fence:
            raw = "\n".join(lines[1:i])
            body = "\n".join(lines[i + 1 :]).lstrip("\n")
            return fence, raw, body

    raise FrontMatterError(f"front-matter opened with {fence!r} is never closed")
