# src/i2f/codemod/diagnostics.py
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional


class Severity(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class DiagnosticKind(Enum):
    NOT_CANDIDATE = "not_candidate"
    ALREADY_MIGRATED = "already_migrated"
    NO_LITERAL = "no_literal"
    UNUSABLE_LITERAL = "unusable_literal"
    MISSING_NODE = "missing_node"
    TARGET_FILE_EXISTS = "target_file_exists"
    PER_UNIT_FAULT = "per_unit_fault"
    ENUMERATION_FAULT = "enumeration_fault"


@dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    path: Optional[Path] = None
    kind: Optional[DiagnosticKind] = None

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class Diagnostics:
    """
    Ordered collection of diagnostics produced by one operation.

    Operations return these as plain values; only the orchestrator hands
    them to a sink.
    """

    def __init__(self, items: Optional[List[Diagnostic]] = None):
        self._items: List[Diagnostic] = list(items or [])

    def add(self, severity: Severity, message: str, path: Optional[Path] = None,
            kind: Optional[DiagnosticKind] = None) -> Diagnostic:
        diagnostic = Diagnostic(severity, message, path, kind)
        self._items.append(diagnostic)
        return diagnostic

    def debug(self, message, path=None, kind=None):
        return self.add(Severity.DEBUG, message, path, kind)

    def info(self, message, path=None, kind=None):
        return self.add(Severity.INFO, message, path, kind)

    def warn(self, message, path=None, kind=None):
        return self.add(Severity.WARN, message, path, kind)

    def error(self, message, path=None, kind=None):
        return self.add(Severity.ERROR, message, path, kind)

    def fatal(self, message, path=None, kind=None):
        return self.add(Severity.FATAL, message, path, kind)

    def extend(self, other: "Diagnostics") -> None:
        self._items.extend(other)

    def of_severity(self, severity: Severity) -> List[Diagnostic]:
        return [d for d in self._items if d.severity is severity]

    def of_kind(self, kind: DiagnosticKind) -> List[Diagnostic]:
        return [d for d in self._items if d.kind is kind]

    def emit_to(self, sink) -> None:
        if sink is None:
            return
        for diagnostic in self._items:
            sink.emit(diagnostic)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
