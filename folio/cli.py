"""CLI entry point for folio.

This CLI intentionally avoids third-party CLI frameworks so the project remains
easy to run in constrained environments.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path
from typing import Any

from . import __version__
from .config import CONTENT_DIR, OUT_DIR


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="folio",
        description="Build and check a static portfolio and blog.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"folio {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_build = sub.add_parser("build", help="Render the content tree into a static site")
    p_build.add_argument("--content", "-c", type=Path, default=CONTENT_DIR, help="Content directory")
    p_build.add_argument("--out", "-o", type=Path, default=OUT_DIR, help="Site output directory")
    p_build.add_argument("--drafts", action="store_true", help="Render draft posts too")
    p_build.add_argument("--base-url", default=None, help="Absolute site URL (enables feed.xml)")

    p_check = sub.add_parser("check", help="Check front-matter, rendered pages and links")
    p_check.add_argument("--content", "-c", type=Path, default=CONTENT_DIR, help="Content directory")
    p_check.add_argument("--site", "-s", type=Path, default=OUT_DIR, help="Built site directory")
    p_check.add_argument("--links", action="store_true", help="Also check that profile links resolve")
    p_check.add_argument("--no-pages", action="store_true", help="Skip rendered page checks")

    p_new = sub.add_parser("new", help="Create a draft post")
    p_new.add_argument("title", help="Post title")
    p_new.add_argument("--content", "-c", type=Path, default=CONTENT_DIR, help="Content directory")
    p_new.add_argument("--slug", default=None, help="File name slug (defaults to the title)")

    p_list = sub.add_parser("list", help="List posts, newest first")
    p_list.add_argument("--content", "-c", type=Path, default=CONTENT_DIR, help="Content directory")
    p_list.add_argument("--drafts", action="store_true", help="Include drafts")

    args = parser.parse_args(argv)

    if args.cmd == "build":
        return _cmd_build(args)
    if args.cmd == "check":
        return _cmd_check(args)
    if args.cmd == "new":
        return _cmd_new(args)
    if args.cmd == "list":
        return _cmd_list(args)

    parser.print_help()
    return 2


def _cmd_build(args: Any) -> int:
    from .site.build import build_site

    try:
        report = build_site(
            args.content,
            args.out,
            include_drafts=bool(args.drafts),
            base_url=args.base_url,
        )
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("✓ Site generated")
    print(f"  Output: {report.out_dir}")
    print(f"  Posts: {report.posts}")
    if report.drafts_skipped:
        print(f"  Drafts skipped: {report.drafts_skipped}")
    print(f"  Pages: {report.pages}")
    print(f"  Size: {report.total_bytes / 1024:.1f} KB")

    if report.warnings:
        print(f"\nWarnings ({len(report.warnings)}):")
        for w in report.warnings[:10]:
            print(f"  - {w}")
        if len(report.warnings) > 10:
            print(f"  ... and {len(report.warnings) - 10} more")
    return 0


def _cmd_check(args: Any) -> int:
    from .check.content import check_front_matter, check_pages

    issues = check_front_matter(args.content)
    if not args.no_pages:
        issues.extend(check_pages(args.site))

    for issue in issues:
        print(f"  {issue}", file=sys.stderr)
    errors = [i for i in issues if i.is_error]

    broken = 0
    if args.links:
        broken = _run_link_check(args.content)
        if broken < 0:
            return 1

    if errors or broken:
        print(f"✗ {len(errors)} content error(s), {broken} broken link(s)", file=sys.stderr)
        return 1

    print("✓ Content checks passed")
    return 0


def _run_link_check(content_dir: Path) -> int:
    from .check.links import check_links
    from .content.loader import load_profile

    try:
        urls = list(load_profile(content_dir).links())
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return -1

    results = asyncio.run(check_links(urls))
    broken = 0
    for r in results:
        if r.ok:
            print(f"  ok   {r.url}")
            continue
        broken += 1
        detail = r.error or f"HTTP {r.status}"
        print(f"  FAIL {r.url} ({detail})", file=sys.stderr)
    return broken


def _cmd_new(args: Any) -> int:
    import yaml

    from .content.models import SLUG_RE, slugify

    slug = args.slug or slugify(args.title)
    if not SLUG_RE.match(slug):
        print(f"Error: slug must be lowercase words joined by '-', got {slug!r}", file=sys.stderr)
        return 2

    posts_dir = args.content / "posts"
    path = posts_dir / f"{slug}.md"
    for existing in (path, posts_dir / slug / "index.md"):
        if existing.exists():
            print(f"Error: {existing} already exists", file=sys.stderr)
            return 1

    front = {
        "title": args.title,
        "date": date.today(),
        "draft": True,
        "description": "",
        "tags": [],
    }
    text = "---\n" + yaml.safe_dump(front, sort_keys=False, allow_unicode=True) + "---\n\n"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Draft created: {path}")
    return 0


def _cmd_list(args: Any) -> int:
    from .content.frontmatter import FrontMatterError
    from .content.loader import load_posts

    try:
        posts = load_posts(args.content, include_drafts=bool(args.drafts))
    except FrontMatterError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not posts:
        print("No posts found")
        return 0

    for p in posts:
        marker = "  (draft)" if p.draft else ""
        print(f"  {p.published_on}  {p.slug:32} {p.title}{marker}")
    return 0


if __name__ == "__main__":
    app()
