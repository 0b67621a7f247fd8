# src/i2f/codemod/domain/source_unit.py
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from i2f.codemod.syntax_tree import Property, Span, SyntaxTree


@dataclass(frozen=True)
class SourceUnit:
    path: Path             # the component file being migrated
    original: bytes        # untouched snapshot every edit is expressed against
    tree: SyntaxTree


class EntryKind(Enum):
    SCALAR_LITERAL = "scalarLiteral"
    LIST_LITERAL = "listLiteral"
    OTHER = "other"


@dataclass(frozen=True)
class Entry:
    name: str
    kind: EntryKind
    values: tuple          # decoded literal strings, empty for OTHER
    full_span: Span        # leading trivia included
    core_span: Span
    node: Optional[Property] = None

    def __post_init__(self):
        if not self.full_span.covers(self.core_span):
            raise ValueError(f"Entry '{self.name}': core range {self.core_span} outside full range {self.full_span}")

    @property
    def usable(self) -> bool:
        return self.kind is not EntryKind.OTHER


@dataclass(frozen=True)
class Edit:
    """
    Replace the bytes of ``remove`` with ``text``.

    ``text`` stands in for the whole removal span: any trivia or separator
    inside ``remove`` that must survive is part of ``text``. ``insert_at``
    records where the replaced entry's core started in the original and
    always lies inside ``remove``; rendering does not depend on it.
    """
    remove: Span
    insert_at: int
    text: bytes

    def __post_init__(self):
        if not self.remove.start <= self.insert_at <= self.remove.end:
            raise ValueError(f"Insertion point {self.insert_at} outside removal {self.remove}")


@dataclass(frozen=True)
class ExternalFileSpec:
    path: Path
    content: str
