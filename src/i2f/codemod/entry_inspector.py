# src/i2f/codemod/entry_inspector.py
"""Read named entries out of a component configuration block."""

from typing import Optional

from i2f.codemod.domain.source_unit import Entry, EntryKind
from i2f.codemod.errors import MissingNodeError
from i2f.codemod.syntax_tree import ArrayLiteral, ObjectLiteral, Property, StringLiteral


def find_property(block: ObjectLiteral, name: str) -> Optional[Property]:
    """First ``name: value`` pair of the block whose key is the identifier ``name``."""
    for prop in block.properties:
        if isinstance(prop, Property) and prop.key == name:
            return prop
    return None


def has_property(block: ObjectLiteral, name: str) -> bool:
    return find_property(block, name) is not None


def describe_value(value) -> str:
    if isinstance(value, ArrayLiteral):
        return "array with non-literal elements"
    kind = getattr(value, "kind", type(value).__name__)
    if kind == "template_string":
        return "template string with interpolation"
    return kind.replace("_", " ")


def inspect_entry(block: ObjectLiteral, name: str, allow_list: bool = False) -> Optional[Entry]:
    """
    Extract the entry ``name`` from the block.

    Returns None when the entry is absent. A present entry whose value is not
    a literal string (or, with ``allow_list``, an array of literal strings)
    comes back with kind OTHER and no values.
    """
    prop = find_property(block, name)
    if prop is None:
        return None

    value = prop.value
    kind = EntryKind.OTHER
    values = ()
    if isinstance(value, StringLiteral):
        kind = EntryKind.SCALAR_LITERAL
        values = (value.value,)
    elif allow_list and isinstance(value, ArrayLiteral):
        if all(isinstance(element, StringLiteral) for element in value.elements):
            kind = EntryKind.LIST_LITERAL
            values = tuple(element.value for element in value.elements)

    return Entry(
        name=name,
        kind=kind,
        values=values,
        full_span=prop.full_span,
        core_span=prop.span,
        node=prop,
    )


def locate_entry_node(block: ObjectLiteral, entry: Entry) -> Property:
    """Resolve an extracted entry back to its node in the block."""
    prop = find_property(block, entry.name)
    if prop is None or prop.span != entry.core_span:
        raise MissingNodeError(f"property '{entry.name}' not found in the configuration block after extraction")
    return prop
