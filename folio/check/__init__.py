"""Content QA: front-matter, rendered pages and external links."""

from .content import Issue, check_front_matter, check_page, check_pages
from .links import LinkResult, check_links

__all__ = [
    "Issue",
    "check_front_matter",
    "check_page",
    "check_pages",
    "LinkResult",
    "check_links",
]
