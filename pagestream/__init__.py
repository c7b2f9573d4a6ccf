"""Incremental page-by-page retrieval of an unbounded, ordered item source."""

__version__ = "0.1.0"
