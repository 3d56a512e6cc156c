"""Content checks: post front-matter and rendered page metadata."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from html.parser import HTMLParser
from pathlib import Path

from ..config import GA_ID
from ..content.frontmatter import FrontMatterError
from ..content.loader import load_post, load_profile, post_files
from ..site.templates import GTAG_SRC


@dataclass(frozen=True)
class Issue:
    path: Path
    message: str
    severity: str = "error"

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def __str__(self) -> str:
        return f"{self.severity}: {self.path}: {self.message}"


def check_front_matter(content_dir: Path, today: date | None = None) -> list[Issue]:
    """Validate every post (drafts included) and the profile."""
    if not content_dir.is_dir():
        return [Issue(path=content_dir, message="content directory not found")]

    today = today or date.today()
    issues: list[Issue] = []
    slugs: dict[str, Path] = {}

    for path in post_files(content_dir):
        try:
            post = load_post(path)
        except FrontMatterError as e:
            issues.append(Issue(path=path, message=e.message))
            continue

        other = slugs.get(post.slug)
        if other is not None:
            issues.append(Issue(path=path, message=f"duplicate slug {post.slug!r} (also used by {other})"))
        slugs[post.slug] = path

        if not post.draft and post.published_on > today:
            issues.append(
                Issue(
                    path=path,
                    message=f"published post is dated in the future ({post.published_on})",
                    severity="warning",
                )
            )

    try:
        load_profile(content_dir)
    except ValueError as e:
        issues.append(Issue(path=content_dir / "profile.json", message=str(e)))

    return issues


class _HeadParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.title: str | None = None
        self.description: str | None = None
        self.script_srcs: list[str] = []
        self.inline_scripts: list[str] = []
        self._in_title = False
        self._in_script = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        attr = {k: (v or "") for k, v in attrs}
        if tag == "title":
            self._in_title = True
            self.title = self.title or ""
        elif tag == "meta" and attr.get("name", "").lower() == "description":
            self.description = attr.get("content", "")
        elif tag == "script":
            self._in_script = True
            if attr.get("src"):
                self.script_srcs.append(attr["src"])
            self.inline_scripts.append("")

    def handle_endtag(self, tag: str) -> None:
        if tag == "title":
            self._in_title = False
        elif tag == "script":
            self._in_script = False

    def handle_data(self, data: str) -> None:
        if self._in_title:
            self.title = (self.title or "") + data
        elif self._in_script and self.inline_scripts:
            self.inline_scripts[-1] += data


def check_page(path: Path, ga_id: str | None = GA_ID) -> list[Issue]:
    parser = _HeadParser()
    parser.feed(path.read_text(encoding="utf-8"))
    parser.close()

    issues: list[Issue] = []
    if not (parser.title or "").strip():
        issues.append(Issue(path=path, message="missing <title>"))
    if parser.description is None:
        issues.append(Issue(path=path, message="missing meta description"))
    elif not parser.description.strip():
        issues.append(Issue(path=path, message="empty meta description"))

    if ga_id:
        loader = f"{GTAG_SRC}{ga_id}"
        has_loader = loader in parser.script_srcs
        has_config = any(f"gtag('config', '{ga_id}')" in s for s in parser.inline_scripts)
        if not (has_loader and has_config):
            issues.append(Issue(path=path, message=f"analytics tag {ga_id} not found"))
    return issues


def check_pages(site_dir: Path, ga_id: str | None = GA_ID) -> list[Issue]:
    """Check every rendered ``*.html`` page under ``site_dir``."""
    if not site_dir.is_dir():
        return [Issue(path=site_dir, message="site directory not found; run `folio build` first")]
    issues: list[Issue] = []
    for path in sorted(site_dir.rglob("*.html")):
        issues.extend(check_page(path, ga_id=ga_id))
    return issues
