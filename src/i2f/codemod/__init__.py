# /codemod/__init__.py
# Makes codemod a package and re-exports the migration entry points.

from .orchestrator import ComponentMigrator, MigrationReport, UnitOutcome, UnitState, ConcernState, migrate
from .diagnostics import Diagnostic, DiagnosticKind, Diagnostics, Severity

__all__ = [
    "ComponentMigrator",
    "MigrationReport",
    "UnitOutcome",
    "UnitState",
    "ConcernState",
    "migrate",
    "Diagnostic",
    "DiagnosticKind",
    "Diagnostics",
    "Severity",
]
