"""Bundled catalog datasets served when the remote API is unreachable."""
