"""Configuration constants (see :mod:`tabledata.config.settings`)."""

from . import settings  # noqa: F401

__all__ = ["settings"]
