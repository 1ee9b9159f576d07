"""Bundled sample data."""

from .samples import SAMPLE_BUSINESSES

__all__ = ["SAMPLE_BUSINESSES"]
