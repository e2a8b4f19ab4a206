"""Bundled per-language translation tables."""
