"""Lineage graph over arrangement fork relationships."""
