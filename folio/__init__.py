"""folio: a static portfolio and blog generator."""

__version__ = "0.1.0"
