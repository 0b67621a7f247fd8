# src/i2f/codemod/range_resolver.py
"""
Removal-span arithmetic for replacing one entry of an object literal.

An entry is removed together with exactly one neighbouring separator when it
has neighbours, and the replacement re-emits that separator on the same side.
The block therefore keeps the same number of entries and separators whatever
the position of the replaced entry (first, middle, last or only).

Edits for one unit are all expressed against the original bytes. A separator
already swallowed by a previously staged edit is "claimed": it belongs to that
edit's replacement and must not be removed (or re-emitted) a second time.
"""

import re
from dataclasses import dataclass
from typing import Iterable

from i2f.codemod.domain.source_unit import Edit, Entry
from i2f.codemod.syntax_tree import Span

SEPARATOR = b","
_SEPARATOR_AFTER = re.compile(rb"\s*,")


@dataclass(frozen=True)
class RemovalPlan:
    remove: Span
    insert_at: int
    leading_separator: bool = False
    trailing_separator: bool = False


def _is_claimed(offset: int, claimed: Iterable[Span]) -> bool:
    return any(span.contains(offset) for span in claimed)


def resolve_removal(entry: Entry, entry_count: int, source: bytes, claimed: Iterable[Span] = ()) -> RemovalPlan:
    claimed = tuple(claimed)
    full_start, full_end = entry.full_span.start, entry.full_span.end
    start, end = full_start, full_end
    leading = trailing = False

    if entry_count > 1:
        after = _SEPARATOR_AFTER.match(source, full_end)
        if after:
            # not the last entry; take the following separator with us
            if not _is_claimed(after.end() - 1, claimed):
                end = after.end()
                trailing = True
        else:
            head = source[:full_start].rstrip()
            if head.endswith(SEPARATOR) and not _is_claimed(len(head) - 1, claimed):
                start = len(head) - 1
                leading = True

    return RemovalPlan(
        remove=Span(start, end),
        insert_at=entry.core_span.start,
        leading_separator=leading,
        trailing_separator=trailing,
    )


def build_edit(plan: RemovalPlan, entry: Entry, source: bytes, replacement: str) -> Edit:
    """Turn a removal plan into an edit that puts ``replacement`` where the entry was."""
    full_start, full_end = entry.full_span.start, entry.full_span.end
    parts = []
    if plan.leading_separator:
        parts.append(source[plan.remove.start:full_start])
    # comments and indentation in front of the entry are kept as they were
    parts.append(source[full_start:entry.core_span.start])
    parts.append(replacement.encode("utf-8"))
    if plan.trailing_separator:
        parts.append(source[full_end:plan.remove.end])
    return Edit(remove=plan.remove, insert_at=plan.insert_at, text=b"".join(parts))
