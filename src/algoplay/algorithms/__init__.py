"""Bundled trace generators and the catalog that indexes them."""

from __future__ import annotations

from .catalog import AlgorithmEntry, all_algorithms, categories, create_session, lookup

__all__ = ["AlgorithmEntry", "all_algorithms", "categories", "create_session", "lookup"]
