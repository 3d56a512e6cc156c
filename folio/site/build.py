"""Static site generator for the portfolio and blog."""

from __future__ import annotations

import json
import shutil
from datetime import UTC, date, datetime
from email.utils import format_datetime
from html import escape
from pathlib import Path
from xml.etree import ElementTree as ET

from pydantic import BaseModel

from ..config import FEED_LIMIT, GA_ID, SCHEMA_VERSION, SITE_DESCRIPTION, SITE_TITLE
from ..content.loader import is_bundle, load_index_page, load_posts, load_profile
from ..content.models import Post
from .markdown import markdown_to_html
from .templates import html_doc, link, not_found_page, post_list, post_page, project_list


class BuildReport(BaseModel):
    """Result of building a site."""

    model_config = {"arbitrary_types_allowed": True}

    out_dir: Path
    posts: int
    drafts_skipped: int
    pages: int
    total_bytes: int
    feed: bool
    warnings: list[str]


def build_site(
    content_dir: Path,
    out_dir: Path,
    include_drafts: bool = False,
    base_url: str | None = None,
    ga_id: str | None = GA_ID,
) -> BuildReport:
    """Render a content tree into a static HTML site.

    Args:
        content_dir: Directory holding ``profile.json``, ``index.md`` and ``posts/``
        out_dir: Output directory (created if missing)
        include_drafts: Render draft posts too (they never enter the feed)
        base_url: Absolute site URL; required for ``feed.xml``
        ga_id: Analytics measurement id, or None to omit the tag

    Returns:
        BuildReport with counts and warnings
    """
    content_dir = content_dir.resolve()
    out_dir = out_dir.resolve()
    if not content_dir.is_dir():
        raise ValueError(f"content directory not found: {content_dir}")

    warnings: list[str] = []
    pages = 0

    profile = load_profile(content_dir)
    intro = load_index_page(content_dir)
    all_posts = load_posts(content_dir, include_drafts=True)
    posts = all_posts if include_drafts else [p for p in all_posts if not p.draft]
    drafts_skipped = len(all_posts) - len(posts)

    out_dir.mkdir(parents=True, exist_ok=True)
    # Posts are regenerated from scratch so removed posts don't linger.
    if (out_dir / "posts").exists():
        shutil.rmtree(out_dir / "posts")

    static_dir = content_dir / "static"
    if static_dir.is_dir():
        shutil.copytree(static_dir, out_dir, ignore=_ignore, dirs_exist_ok=True)

    feed_written = False
    if base_url:
        published = [p for p in posts if not p.draft]
        _write_feed(published[:FEED_LIMIT], base_url, out_dir / "feed.xml")
        feed_written = True
    else:
        (out_dir / "feed.xml").unlink(missing_ok=True)
        warnings.append("feed.xml skipped: no base URL configured")

    nav = link("feed.xml", "RSS") if feed_written else ""

    # Post pages
    for post in posts:
        target_dir = out_dir / "posts" / post.slug
        if is_bundle(post.source):
            shutil.copytree(post.source.parent, target_dir, ignore=_ignore_bundle, dirs_exist_ok=True)
        target_dir.mkdir(parents=True, exist_ok=True)

        cover_src = _cover_src(post, target_dir, warnings)
        body = post_page(post, markdown_to_html(post.body), cover_src=cover_src)
        html = html_doc(
            title=f"{post.title} | {SITE_TITLE}",
            description=post.description or SITE_DESCRIPTION,
            header_left=link("../../index.html", f"← {SITE_TITLE}"),
            header_right=link("../../feed.xml", "RSS") if feed_written else "",
            body=body,
            ga_id=ga_id,
        )
        (target_dir / "index.html").write_text(html, encoding="utf-8")
        pages += 1

    # Root index
    sections = []
    if intro and intro.strip():
        sections.append(markdown_to_html(intro))
    elif profile.tagline:
        sections.append(f"<p>{escape(profile.tagline)}</p>")
    sections.append(project_list("PROJECTS", profile.projects))
    sections.append(project_list("ARTICLES", profile.articles))
    sections.append(post_list(posts))
    index_html = html_doc(
        title=SITE_TITLE,
        description=SITE_DESCRIPTION,
        header_left=link("index.html", profile.name),
        header_right=nav,
        body="\n".join(s for s in sections if s),
        ga_id=ga_id,
    )
    (out_dir / "index.html").write_text(index_html, encoding="utf-8")
    pages += 1

    not_found = html_doc(
        title=f"Not found | {SITE_TITLE}",
        description=SITE_DESCRIPTION,
        header_left=link("/", SITE_TITLE),
        body=not_found_page(),
        ga_id=ga_id,
    )
    (out_dir / "404.html").write_text(not_found, encoding="utf-8")
    pages += 1

    _write_site_json(out_dir / "site.json", posts, warnings)

    return BuildReport(
        out_dir=out_dir,
        posts=len(posts),
        drafts_skipped=drafts_skipped,
        pages=pages,
        total_bytes=_dir_size_bytes(out_dir),
        feed=feed_written,
        warnings=warnings,
    )


def _cover_src(post: Post, target_dir: Path, warnings: list[str]) -> str | None:
    cover = post.cover
    if cover is None:
        return None
    if not cover.relative:
        return cover.image

    source = post.source.parent / cover.image
    if not source.is_file():
        warnings.append(f"{post.source}: cover image not found: {cover.image}")
        return None
    dest = target_dir / cover.image
    if not dest.exists():
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, dest)
    return cover.image


def _ignore(path: str, names: list[str]) -> set[str]:
    ignored = {".DS_Store", "__pycache__", ".git"}
    return {n for n in names if n in ignored}


def _ignore_bundle(path: str, names: list[str]) -> set[str]:
    return _ignore(path, names) | {n for n in names if n.endswith(".md")}


def _write_feed(posts: list[Post], base_url: str, path: Path) -> None:
    base = base_url.rstrip("/") + "/"
    rss = ET.Element("rss", version="2.0")
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = SITE_TITLE
    ET.SubElement(channel, "link").text = base
    ET.SubElement(channel, "description").text = SITE_DESCRIPTION

    for post in posts:
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = post.title
        ET.SubElement(item, "link").text = base + post.url
        ET.SubElement(item, "guid").text = base + post.url
        ET.SubElement(item, "pubDate").text = format_datetime(_as_utc(post.date))
        if post.description:
            ET.SubElement(item, "description").text = post.description

    ET.indent(rss)
    path.write_bytes(ET.tostring(rss, encoding="utf-8", xml_declaration=True))


def _as_utc(value: datetime | date) -> datetime:
    if not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _write_site_json(path: Path, posts: list[Post], warnings: list[str]) -> None:
    data = {
        "schema_version": SCHEMA_VERSION,
        "generated_at": datetime.now(UTC).isoformat(),
        "posts": [
            {
                "slug": p.slug,
                "title": p.title,
                "date": p.date.isoformat(),
                "draft": p.draft,
                "url": p.url,
            }
            for p in posts
        ],
        "warnings": warnings,
    }
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def _dir_size_bytes(path: Path) -> int:
    total = 0
    for p in path.rglob("*"):
        if p.is_file():
            total += p.stat().st_size
    return total
