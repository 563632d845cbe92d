"""CLI package for mathbox tools."""

__all__ = ["parse"]
