"""Content records and their loaders."""

from .frontmatter import FrontMatterError, parse_front_matter, split_front_matter
from .loader import load_index_page, load_post, load_posts, load_profile, post_files
from .models import Cover, FrontMatter, Post, Profile, Project, slugify

__all__ = [
    "FrontMatterError",
    "parse_front_matter",
    "split_front_matter",
    "load_index_page",
    "load_post",
    "load_posts",
    "load_profile",
    "post_files",
    "Cover",
    "FrontMatter",
    "Post",
    "Profile",
    "Project",
    "slugify",
]
