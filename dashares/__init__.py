"""Namespaces and compact shares for laying out block data in a data-availability square."""

__version__ = "0.1.0"