# src/i2f/__init__.py
"""Inline-to-File: move inline component templates and styles into files."""

__version__ = "0.1.0"
