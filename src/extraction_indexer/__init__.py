"""Extraction indexer: turns structured extraction output into embedded, searchable chunks."""

__version__ = "0.1.0"
