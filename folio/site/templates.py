"""HTML templates for the static site generator."""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import date
from html import escape

from ..config import GA_ID, SITE_LANG
from ..content.models import Cover, Post, Project
from .styles import CSS

GA_ID_RE = re.compile(r"^(?:G-[A-Z0-9]+|UA-\d+-\d+)$")
GTAG_SRC = "https://www.googletagmanager.com/gtag/js?id="


def analytics_tag(ga_id: str) -> str:
    """Google tag snippet for ``ga_id``.

    Raises:
        ValueError: if ``ga_id`` does not look like a measurement id
    """
    if not GA_ID_RE.match(ga_id):
        raise ValueError(f"invalid analytics id: {ga_id!r}")
    return (
        f'<script async src="{GTAG_SRC}{ga_id}"></script>\n'
        "<script>\n"
        "window.dataLayer = window.dataLayer || [];\n"
        "function gtag(){dataLayer.push(arguments);}\n"
        "gtag('js', new Date());\n"
        f"gtag('config', '{ga_id}');\n"
        "</script>\n"
    )


def html_doc(
    title: str,
    description: str,
    body: str,
    header_left: str = "",
    header_right: str = "",
    ga_id: str | None = GA_ID,
    lang: str = SITE_LANG,
    head_extra: str = "",
) -> str:
    return (
        "<!doctype html>\n"
        f'<html lang="{escape(lang, quote=True)}">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"<title>{escape(title)}</title>\n"
        f'<meta name="description" content="{escape(description, quote=True)}">\n'
        f"{head_extra}"
        f"{analytics_tag(ga_id) if ga_id else ''}"
        f"<style>{CSS}</style>\n"
        "</head>\n"
        "<body>\n"
        "<header>\n"
        f"<div>{header_left}</div>\n"
        f"<nav>{header_right}</nav>\n"
        "</header>\n"
        f"<main>\n{body}\n</main>\n"
        "</body>\n"
        "</html>\n"
    )


def link(href: str, text: str) -> str:
    return f'<a href="{escape(href, quote=True)}">{escape(text)}</a>'


def h1(text: str) -> str:
    return f"<h1>{escape(text)}</h1>"


def h2(text: str) -> str:
    return f"<h2>{escape(text)}</h2>"


def rule() -> str:
    return '<div class="rule"></div>'


def format_date(value: date) -> str:
    return value.isoformat()


def project_list(heading: str, projects: Iterable[Project]) -> str:
    """Link list entries: name, language tag, description, co-owner."""
    items = list(projects)
    if not items:
        return ""
    lines = [h2(heading), '<ul class="list">']
    for p in items:
        parts = [link(p.url, p.name)]
        if p.language:
            parts.append(f'<span class="tag">{escape(p.language)}</span>')
        if p.co_owner:
            parts.append(f'<span class="muted">with {link(p.co_owner, _host_path(p.co_owner))}</span>')
        lines.append("<li>" + " ".join(parts))
        if p.description:
            lines.append(f'<div class="muted">{escape(p.description)}</div>')
        lines.append("</li>")
    lines.append("</ul>")
    return "\n".join(lines)


def post_list(posts: Iterable[Post], prefix: str = "") -> str:
    items = list(posts)
    lines = [h2("POSTS")]
    if not items:
        lines.append('<div class="muted">Nothing here yet.</div>')
        return "\n".join(lines)
    lines.append('<ul class="list">')
    for p in items:
        marker = ' <span class="tag">draft</span>' if p.draft else ""
        lines.append(
            "<li>"
            f'<span class="mono muted">{format_date(p.published_on)}</span> '
            f"{link(prefix + p.url, p.title)}{marker}"
            "</li>"
        )
    lines.append("</ul>")
    return "\n".join(lines)


def cover_figure(cover: Cover, src: str) -> str:
    caption = f"<figcaption>{escape(cover.caption)}</figcaption>" if cover.caption else ""
    return (
        "<figure>"
        f'<img src="{escape(src, quote=True)}" alt="{escape(cover.alt, quote=True)}">'
        f"{caption}"
        "</figure>"
    )


def post_page(post: Post, body_html: str, cover_src: str | None = None) -> str:
    lines = []
    if post.draft:
        lines.append('<div class="banner">Draft: not published</div>')
    lines.append(h1(post.title))
    meta = format_date(post.published_on)
    if post.tags:
        meta += " · " + ", ".join(post.tags)
    lines.append(f'<div class="muted">{escape(meta)}</div>')
    if post.cover and cover_src:
        lines.append(cover_figure(post.cover, cover_src))
    lines.append(rule())
    lines.append(f"<article>\n{body_html}\n</article>")
    return "\n".join(lines)


def not_found_page() -> str:
    return "\n".join([h1("Not found"), f'<p>{link("/", "Back to the home page")}</p>'])


def _host_path(url: str) -> str:
    return re.sub(r"^https?://(www\.)?", "", url).rstrip("/")
