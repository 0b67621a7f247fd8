# src/i2f/codemod/errors.py
"""Exceptions raised by the codemod engine.

Only ``EnumerationError`` aborts a run. Everything else is caught by the
orchestrator and turned into a diagnostic for the unit being processed.
"""


class MigrationError(Exception):
    """Base class for every error raised by the codemod."""


class EnumerationError(MigrationError):
    """Candidate discovery failed; the whole run is aborted."""


class ParseError(MigrationError):
    """The source file could not be parsed into a clean syntax tree."""


class MissingNodeError(MigrationError):
    """An entry extracted from the block can no longer be found in it."""


class PatchConflictError(MigrationError):
    """Two staged edits overlap, or an edit lies outside the source."""
