"""Tests for content models and loaders."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from folio.content.frontmatter import FrontMatterError
from folio.content.loader import load_index_page, load_post, load_posts, load_profile, post_files
from folio.content.models import FrontMatter, Profile, Project, slugify


def write_post(posts_dir: Path, name: str, front: str, body: str = "Body\n") -> Path:
    path = posts_dir / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"---\n{front}---\n\n{body}", encoding="utf-8")
    return path


class TestModels(unittest.TestCase):
    def test_slugify(self) -> None:
        self.assertEqual(slugify("DNSSEC, explained!"), "dnssec-explained")
        self.assertEqual(slugify("  "), "post")

    def test_project_rejects_non_http_url(self) -> None:
        with self.assertRaises(ValidationError):
            Project(name="x", url="ftp://example.com")

    def test_blank_co_owner_is_none(self) -> None:
        p = Project(name="x", url="https://example.com", co_owner=" ")
        self.assertIsNone(p.co_owner)

    def test_profile_links_dedupes_in_order(self) -> None:
        profile = Profile(
            name="me",
            projects=[
                Project(name="a", url="https://a.test", co_owner="https://github.com/friend"),
                Project(name="b", url="https://b.test", co_owner="https://github.com/friend"),
            ],
            articles=[Project(name="c", url="https://a.test")],
        )
        self.assertEqual(
            list(profile.links()),
            ["https://a.test", "https://github.com/friend", "https://b.test"],
        )

    def test_front_matter_draft_is_strict(self) -> None:
        with self.assertRaises(ValidationError):
            FrontMatter.from_mapping({"title": "t", "date": date(2020, 1, 1), "draft": "yes"})

    def test_front_matter_keeps_unknown_keys(self) -> None:
        fm = FrontMatter.from_mapping(
            {"title": "t", "date": date(2020, 1, 1), "draft": False, "weight": 2}
        )
        self.assertEqual(fm.extra, {"weight": 2})


class TestLoadPost(unittest.TestCase):
    def test_loads_valid_post(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = write_post(
                Path(td) / "posts",
                "Go Concurrency.md",
                "title: Go concurrency\ndate: 2022-05-01\ndraft: false\ntags: [go]\n",
            )
            post = load_post(path)
            self.assertEqual(post.title, "Go concurrency")
            self.assertEqual(post.slug, "go-concurrency")
            self.assertEqual(post.url, "posts/go-concurrency/")
            self.assertEqual(post.published_on, date(2022, 5, 1))
            self.assertEqual(post.body, "Body\n")

    def test_bundle_slug_comes_from_directory(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = write_post(
                Path(td) / "posts", "dnssec/index.md", "title: DNSSEC\ndate: 2021-01-01\ndraft: false\n"
            )
            self.assertEqual(load_post(path).slug, "dnssec")

    def test_missing_front_matter(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "a.md"
            path.write_text("# Just markdown\n", encoding="utf-8")
            with self.assertRaises(FrontMatterError) as ctx:
                load_post(path)
            self.assertEqual(ctx.exception.path, path)

    def test_missing_draft_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = write_post(Path(td), "a.md", "title: A\ndate: 2021-01-01\n")
            with self.assertRaises(FrontMatterError) as ctx:
                load_post(path)
            self.assertIn("draft", str(ctx.exception))

    def test_wrong_date_type_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = write_post(Path(td), "a.md", "title: A\ndate: last tuesday\ndraft: false\n")
            with self.assertRaises(FrontMatterError):
                load_post(path)

    def test_bare_year_is_not_a_date(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = write_post(Path(td), "a.md", "title: A\ndate: 2024\ndraft: false\n")
            with self.assertRaises(FrontMatterError) as ctx:
                load_post(path)
            self.assertIn("date", str(ctx.exception))

    def test_empty_description_and_tags_use_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = write_post(
                Path(td), "a.md", "title: A\ndate: 2024-02-03\ndraft: false\ndescription:\ntags:\n"
            )
            post = load_post(path)
            self.assertEqual(post.description, "")
            self.assertEqual(post.tags, [])

    def test_undecodable_file_is_a_front_matter_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "cafe.md"
            path.write_bytes("---\ntitle: café\ndate: 2024-01-01\ndraft: false\n---\n".encode("latin-1"))
            with self.assertRaises(FrontMatterError) as ctx:
                load_post(path)
            self.assertEqual(ctx.exception.path, path)
            self.assertIn("UTF-8", ctx.exception.message)


class TestLoadPosts(unittest.TestCase):
    def test_orders_newest_first_and_skips_drafts(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            content = Path(td)
            posts_dir = content / "posts"
            write_post(posts_dir, "old.md", "title: Old\ndate: 2020-01-01\ndraft: false\n")
            write_post(posts_dir, "b-new.md", "title: B\ndate: 2022-01-01\ndraft: false\n")
            write_post(posts_dir, "a-new.md", "title: A\ndate: 2022-01-01\ndraft: false\n")
            write_post(posts_dir, "wip.md", "title: WIP\ndate: 2023-01-01\ndraft: true\n")
            (posts_dir / "_notes.md").write_text("scratch", encoding="utf-8")

            self.assertEqual(len(post_files(content)), 4)
            posts = load_posts(content)
            self.assertEqual([p.slug for p in posts], ["a-new", "b-new", "old"])
            with_drafts = load_posts(content, include_drafts=True)
            self.assertEqual(with_drafts[0].slug, "wip")

    def test_duplicate_slugs_raise(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            posts_dir = Path(td) / "posts"
            write_post(posts_dir, "one.md", "title: One\ndate: 2020-01-01\ndraft: false\nslug: same\n")
            write_post(posts_dir, "two.md", "title: Two\ndate: 2020-01-02\ndraft: false\nslug: same\n")
            with self.assertRaises(FrontMatterError):
                load_posts(Path(td))

    def test_missing_posts_dir(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            self.assertEqual(load_posts(Path(td)), [])


class TestLoadProfile(unittest.TestCase):
    def test_missing_profile_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            profile = load_profile(Path(td))
            self.assertEqual(profile.projects, [])

    def test_loads_profile(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            data = {
                "name": "glucn",
                "projects": [
                    {
                        "name": "dnssec-resolver",
                        "url": "https://github.com/glucn/dnssec",
                        "description": "Validating resolver",
                        "language": "Go",
                    }
                ],
            }
            (Path(td) / "profile.json").write_text(json.dumps(data), encoding="utf-8")
            profile = load_profile(Path(td))
            self.assertEqual(profile.projects[0].language, "Go")

    def test_invalid_profile_raises_value_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            (Path(td) / "profile.json").write_text('{"projects": []}', encoding="utf-8")
            with self.assertRaises(ValueError) as ctx:
                load_profile(Path(td))
            self.assertIn("name", str(ctx.exception))

    def test_index_page_drops_front_matter(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            (Path(td) / "index.md").write_text("---\ntitle: Home\n---\nHello\n", encoding="utf-8")
            self.assertEqual(load_index_page(Path(td)), "Hello\n")


if __name__ == "__main__":
    unittest.main()
