"""CLI command modules."""

from . import config, review

__all__ = ["config", "review"]
