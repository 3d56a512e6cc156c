"""Configuration constants and paths for folio."""

import os
from pathlib import Path

# Root layout metadata
SITE_TITLE = os.getenv("FOLIO_SITE_TITLE", "glucn.github.io")
SITE_DESCRIPTION = os.getenv("FOLIO_SITE_DESCRIPTION", "glucn blog")
SITE_LANG = "en"

# Google Analytics measurement id; set FOLIO_GA_ID="" to disable the tag
GA_ID = os.getenv("FOLIO_GA_ID", "G-B8P5T02T2B")

# Content and output locations
CONTENT_DIR = Path(os.getenv("FOLIO_CONTENT_DIR", "content"))
OUT_DIR = Path(os.getenv("FOLIO_OUT_DIR", "public"))

# Link checker HTTP settings
USER_AGENT = os.getenv("FOLIO_USER_AGENT", "folio-linkcheck/0.1 (+https://glucn.github.io)")
CONNECT_TIMEOUT = 10.0
READ_TIMEOUT = 20.0
MAX_RETRIES = 3
RATE_LIMIT = 5

# Build report versioning
SCHEMA_VERSION = 1

# Feed
FEED_LIMIT = 20
