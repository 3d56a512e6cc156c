"""Static HTML site generation."""

from .build import BuildReport, build_site
from .markdown import markdown_to_html

__all__ = ["BuildReport", "build_site", "markdown_to_html"]
