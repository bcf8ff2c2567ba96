"""Shared, immutable vocabulary tables used by several extractors."""
