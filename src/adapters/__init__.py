"""Adaptadores de I/O (HTTP, parsers, exportación)."""
