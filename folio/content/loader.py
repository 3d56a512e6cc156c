"""Load posts, the profile and the home page introduction from a content tree.

Layout::

    content/
      index.md            optional home page introduction
      profile.json        link list
      posts/
        some-post.md
        bundled-post/
          index.md
          cover.png
      static/             copied verbatim into the site
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from ..config import SITE_TITLE
from .frontmatter import FrontMatterError, parse_front_matter
from .models import FrontMatter, Post, Profile, slugify


def post_files(content_dir: Path) -> list[Path]:
    """All post sources: ``posts/*.md`` and ``posts/<bundle>/index.md``."""
    posts_dir = content_dir / "posts"
    if not posts_dir.is_dir():
        return []

    files: list[Path] = []
    for entry in sorted(posts_dir.iterdir()):
        if entry.is_file() and entry.suffix == ".md" and not entry.name.startswith("_"):
            files.append(entry)
        elif entry.is_dir() and (entry / "index.md").is_file():
            files.append(entry / "index.md")
    return files


def is_bundle(path: Path) -> bool:
    return path.name == "index.md"


def load_post(path: Path) -> Post:
    """Load and validate one post.

    Raises:
        FrontMatterError: front-matter missing, malformed, or failing validation
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FrontMatterError(f"not valid UTF-8: {e.reason} at byte {e.start}", path) from e
    except OSError as e:
        raise FrontMatterError(f"cannot read file: {e.strerror or e}", path) from e

    try:
        meta, body = parse_front_matter(text)
    except FrontMatterError as e:
        e.path = path
        raise

    if not meta:
        raise FrontMatterError("missing front-matter block", path)

    try:
        fm = FrontMatter.from_mapping(meta)
    except ValidationError as e:
        raise FrontMatterError(describe_validation_error(e), path) from e

    default_slug = slugify(path.parent.name if is_bundle(path) else path.stem)
    return Post(
        title=fm.title,
        date=fm.date,
        draft=fm.draft,
        description=fm.description,
        tags=fm.tags,
        cover=fm.cover,
        slug=fm.slug or default_slug,
        body=body,
        source=path,
    )


def load_posts(content_dir: Path, include_drafts: bool = False) -> list[Post]:
    """Load every post, newest first (ties broken by slug).

    Raises:
        FrontMatterError: on the first invalid post, or when two posts share a slug
    """
    posts = [load_post(p) for p in post_files(content_dir)]
    if not include_drafts:
        posts = [p for p in posts if not p.draft]

    seen: dict[str, Path] = {}
    for post in posts:
        other = seen.get(post.slug)
        if other is not None:
            raise FrontMatterError(f"duplicate slug {post.slug!r} (also used by {other})", post.source)
        seen[post.slug] = post.source

    posts.sort(key=lambda p: p.slug)
    posts.sort(key=lambda p: p.sort_key, reverse=True)
    return posts


def load_profile(content_dir: Path) -> Profile:
    """Load ``profile.json``; a missing file yields an empty profile."""
    path = content_dir / "profile.json"
    if not path.exists():
        return Profile(name=SITE_TITLE)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON: {e}") from e

    try:
        return Profile.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"{path}: {describe_validation_error(e)}") from e


def load_index_page(content_dir: Path) -> str | None:
    """Markdown body of ``index.md`` (front-matter, if any, is dropped)."""
    path = content_dir / "index.md"
    if not path.exists():
        return None
    try:
        _, body = parse_front_matter(path.read_text(encoding="utf-8"))
    except FrontMatterError as e:
        e.path = path
        raise
    return body


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into ``field: message; ...``."""
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
