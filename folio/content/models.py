"""Content records: the profile link list and blog posts."""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, Field, Strict, StrictBool, ValidationInfo, field_validator

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

# Strict: an integer such as `date: 2024` is not a timestamp.
PostDate = Annotated[dt.datetime, Strict()] | Annotated[dt.date, Strict()]


def _check_http_url(value: str) -> str:
    cleaned = value.strip()
    if not cleaned.lower().startswith(("http://", "https://")):
        raise ValueError(f"expected an http(s) URL, got {value!r}")
    return cleaned


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated slug. Empty input yields "post"."""
    text = text.strip().lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-") or "post"


class Project(BaseModel):
    """One entry of the link list (an external project or article)."""

    name: str = Field(min_length=1)
    url: str
    description: str = ""
    language: str | None = None
    co_owner: str | None = None

    @field_validator("url")
    @classmethod
    def _url(cls, value: str) -> str:
        return _check_http_url(value)

    @field_validator("co_owner")
    @classmethod
    def _co_owner(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return _check_http_url(value)


class Profile(BaseModel):
    """The home page record: who this is and what they link to."""

    name: str
    tagline: str = ""
    projects: list[Project] = Field(default_factory=list)
    articles: list[Project] = Field(default_factory=list)

    def links(self) -> Iterator[str]:
        """Every URL referenced by the profile, in document order, once."""
        seen: set[str] = set()
        for entry in [*self.projects, *self.articles]:
            for url in (entry.url, entry.co_owner):
                if url and url not in seen:
                    seen.add(url)
                    yield url


class Cover(BaseModel):
    """Optional cover image of a post."""

    image: str = Field(min_length=1)
    alt: str = ""
    caption: str = ""
    relative: StrictBool = False


class FrontMatter(BaseModel):
    """Validated front-matter block of a post."""

    title: str = Field(min_length=1)
    date: PostDate
    draft: StrictBool
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    slug: str | None = None
    cover: Cover | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("description", "tags", mode="before")
    @classmethod
    def _empty_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # An empty YAML value (`description:`) loads as None.
        if value is None:
            return "" if info.field_name == "description" else []
        return value

    @field_validator("title")
    @classmethod
    def _title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value.strip()

    @field_validator("slug")
    @classmethod
    def _slug(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if not SLUG_RE.match(value):
            raise ValueError(f"slug must be lowercase words joined by '-', got {value!r}")
        return value

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> FrontMatter:
        known = set(cls.model_fields) - {"extra"}
        fields = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**fields, extra=extra)


class Post(BaseModel):
    """A blog post: validated front-matter plus its markdown body."""

    title: str
    date: dt.datetime | dt.date
    draft: bool
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    cover: Cover | None = None
    slug: str
    body: str
    source: Path

    @property
    def published_on(self) -> dt.date:
        if isinstance(self.date, dt.datetime):
            return self.date.date()
        return self.date

    @property
    def url(self) -> str:
        return f"posts/{self.slug}/"

    @property
    def sort_key(self) -> tuple[dt.date, dt.time]:
        # datetime.time() drops tzinfo, so aware and naive posts still compare.
        at = self.date.time() if isinstance(self.date, dt.datetime) else dt.time.min
        return (self.published_on, at)
