"""Tests for front-matter and rendered page checks."""

from __future__ import annotations

import tempfile
import unittest
from datetime import date
from pathlib import Path

from folio.check.content import check_front_matter, check_page, check_pages
from folio.site.templates import html_doc


class TestCheckFrontMatter(unittest.TestCase):
    def test_reports_each_bad_post(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            posts = Path(td) / "posts"
            posts.mkdir()
            (posts / "good.md").write_text(
                "---\ntitle: Good\ndate: 2020-01-01\ndraft: false\n---\n", encoding="utf-8"
            )
            (posts / "no-draft.md").write_text("---\ntitle: A\ndate: 2020-01-01\n---\n", encoding="utf-8")
            (posts / "bad-draft.md").write_text(
                "---\ntitle: A\ndate: 2020-01-01\ndraft: maybe\n---\n", encoding="utf-8"
            )
            (posts / "plain.md").write_text("No front-matter\n", encoding="utf-8")

            issues = check_front_matter(Path(td))
            flagged = sorted(i.path.name for i in issues)
            self.assertEqual(flagged, ["bad-draft.md", "no-draft.md", "plain.md"])
            self.assertTrue(all(i.is_error for i in issues))

    def test_future_dated_post_is_a_warning(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            posts = Path(td) / "posts"
            posts.mkdir()
            (posts / "later.md").write_text(
                "---\ntitle: Later\ndate: 2030-01-01\ndraft: false\n---\n", encoding="utf-8"
            )
            (posts / "later-draft.md").write_text(
                "---\ntitle: Later\ndate: 2030-01-01\ndraft: true\n---\n", encoding="utf-8"
            )
            issues = check_front_matter(Path(td), today=date(2025, 1, 1))
            self.assertEqual(len(issues), 1)
            self.assertEqual(issues[0].severity, "warning")
            self.assertEqual(issues[0].path.name, "later.md")

    def test_duplicate_slug_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            posts = Path(td) / "posts"
            posts.mkdir()
            for name in ("a.md", "b.md"):
                (posts / name).write_text(
                    "---\ntitle: X\ndate: 2020-01-01\ndraft: true\nslug: x\n---\n", encoding="utf-8"
                )
            issues = check_front_matter(Path(td))
            self.assertEqual(len(issues), 1)
            self.assertIn("duplicate slug", issues[0].message)

    def test_undecodable_post_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            posts = Path(td) / "posts"
            posts.mkdir()
            (posts / "cafe.md").write_bytes(
                "---\ntitle: café\ndate: 2024-01-01\ndraft: false\n---\n".encode("latin-1")
            )
            issues = check_front_matter(Path(td))
            self.assertEqual(len(issues), 1)
            self.assertEqual(issues[0].path.name, "cafe.md")

    def test_missing_content_dir_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            issues = check_front_matter(Path(td) / "typo")
            self.assertEqual(len(issues), 1)
            self.assertTrue(issues[0].is_error)
            self.assertIn("content directory not found", issues[0].message)

    def test_invalid_profile_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            (Path(td) / "profile.json").write_text("{not json", encoding="utf-8")
            issues = check_front_matter(Path(td))
            self.assertEqual(issues[0].path.name, "profile.json")


class TestCheckPages(unittest.TestCase):
    def test_rendered_page_passes(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "index.html"
            path.write_text(html_doc("Home", "A blog", "<p>x</p>", ga_id="G-ABC123"), encoding="utf-8")
            self.assertEqual(check_page(path, ga_id="G-ABC123"), [])

    def test_missing_metadata_and_analytics(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "bare.html"
            path.write_text("<html><head><title> </title></head><body></body></html>", encoding="utf-8")
            messages = [i.message for i in check_page(path, ga_id="G-ABC123")]
            self.assertIn("missing <title>", messages)
            self.assertIn("missing meta description", messages)
            self.assertIn("analytics tag G-ABC123 not found", messages)

    def test_wrong_analytics_id(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "index.html"
            path.write_text(html_doc("Home", "A blog", "", ga_id="G-OTHER"), encoding="utf-8")
            issues = check_page(path, ga_id="G-ABC123")
            self.assertEqual(len(issues), 1)

    def test_check_pages_walks_tree(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            site = Path(td)
            (site / "posts" / "a").mkdir(parents=True)
            (site / "index.html").write_text(html_doc("Home", "d", "", ga_id=None), encoding="utf-8")
            (site / "posts" / "a" / "index.html").write_text("<html></html>", encoding="utf-8")
            issues = check_pages(site, ga_id=None)
            self.assertEqual({i.path.name for i in issues}, {"index.html"})
            self.assertEqual(len(issues), 2)

    def test_missing_site_dir(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            issues = check_pages(Path(td) / "public")
            self.assertEqual(len(issues), 1)


if __name__ == "__main__":
    unittest.main()
