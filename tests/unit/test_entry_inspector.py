import pytest

from i2f.codemod.domain.source_unit import Entry, EntryKind
from i2f.codemod.entry_inspector import (
    describe_value,
    find_property,
    has_property,
    inspect_entry,
    locate_entry_node,
)
from i2f.codemod.errors import MissingNodeError
from i2f.codemod.syntax_tree import Span


def test_scalar_template(block_of):
    _, block = block_of("@Component({ selector: 'x', template: '<p>hi</p>' })\nexport class X {}\n")
    entry = inspect_entry(block, "template")
    assert entry.kind is EntryKind.SCALAR_LITERAL
    assert entry.values == ("<p>hi</p>",)
    assert entry.full_span.covers(entry.core_span)
    assert entry.node is find_property(block, "template")


def test_template_string_without_interpolation(block_of):
    _, block = block_of("@Component({\n  template: `\n    <h1>Ideas</h1>\n  `,\n})\nexport class I {}\n")
    entry = inspect_entry(block, "template")
    assert entry.kind is EntryKind.SCALAR_LITERAL
    assert entry.values == ("\n    <h1>Ideas</h1>\n  ",)


def test_escapes_are_decoded(block_of):
    _, block = block_of('@Component({ template: "<p class=\\"a\\">it\'s</p>" })\nexport class E {}\n')
    assert inspect_entry(block, "template").values == ('<p class="a">it\'s</p>',)


def test_absent_entry(block_of):
    _, block = block_of("@Component({ selector: 'x' })\nexport class X {}\n")
    assert inspect_entry(block, "template") is None
    assert not has_property(block, "templateUrl")


@pytest.mark.parametrize("value, description", [
    ("TEMPLATE", "identifier"),
    ("`<p>${title}</p>`", "template string with interpolation"),
    ("buildTemplate()", "call expression"),
    ("'<p>' + body", "binary expression"),
])
def test_non_literal_template_is_unusable(block_of, value, description):
    _, block = block_of(f"@Component({{ template: {value} }})\nexport class X {{}}\n")
    entry = inspect_entry(block, "template")
    assert entry.kind is EntryKind.OTHER
    assert not entry.usable
    assert entry.values == ()
    assert describe_value(entry.node.value) == description


def test_styles_list(block_of):
    _, block = block_of("@Component({ styles: ['a{}', `b{}`, \"c{}\"] })\nexport class S {}\n")
    entry = inspect_entry(block, "styles", allow_list=True)
    assert entry.kind is EntryKind.LIST_LITERAL
    assert entry.values == ("a{}", "b{}", "c{}")


def test_styles_scalar(block_of):
    _, block = block_of("@Component({ styles: ':host { display: block }' })\nexport class S {}\n")
    entry = inspect_entry(block, "styles", allow_list=True)
    assert entry.kind is EntryKind.SCALAR_LITERAL
    assert entry.values == (":host { display: block }",)


def test_styles_list_with_non_literal_element(block_of):
    _, block = block_of("@Component({ styles: ['a{}', sharedStyles] })\nexport class S {}\n")
    entry = inspect_entry(block, "styles", allow_list=True)
    assert entry.kind is EntryKind.OTHER
    assert describe_value(entry.node.value) == "array with non-literal elements"


def test_list_not_accepted_for_template(block_of):
    _, block = block_of("@Component({ template: ['<p></p>'] })\nexport class T {}\n")
    assert inspect_entry(block, "template").kind is EntryKind.OTHER


def test_empty_styles_list(block_of):
    _, block = block_of("@Component({ styles: [] })\nexport class S {}\n")
    entry = inspect_entry(block, "styles", allow_list=True)
    assert entry.kind is EntryKind.LIST_LITERAL
    assert entry.values == ()


def test_first_duplicate_key_wins(block_of):
    _, block = block_of("@Component({ template: 'first', template: 'second' })\nexport class D {}\n")
    assert inspect_entry(block, "template").values == ("first",)


def test_locate_entry_node_round_trip(block_of):
    _, block = block_of("@Component({ selector: 'x', template: 'a' })\nexport class X {}\n")
    entry = inspect_entry(block, "template")
    assert locate_entry_node(block, entry) is entry.node


def test_locate_entry_node_reports_missing_node(block_of):
    _, block = block_of("@Component({ selector: 'x', template: 'a' })\nexport class X {}\n")
    _, other = block_of("@Component({ selector: 'x' })\nexport class X {}\n")
    entry = inspect_entry(block, "template")
    with pytest.raises(MissingNodeError):
        locate_entry_node(other, entry)


def test_entry_rejects_core_range_outside_full_range():
    with pytest.raises(ValueError):
        Entry("template", EntryKind.OTHER, (), full_span=Span(10, 20), core_span=Span(5, 20))
