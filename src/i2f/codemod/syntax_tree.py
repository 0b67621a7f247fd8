# src/i2f/codemod/syntax_tree.py
"""
TypeScript syntax tree used by the codemod.

tree-sitter does the parsing; the concrete tree is then lowered into a small,
closed set of node variants. Everything the locator and inspector need is
expressed with these variants, and anything else becomes ``Opaque``.

All offsets are byte offsets into the parsed source.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from tree_sitter import Language, Node, Parser

from i2f.codemod.errors import ParseError

TRIVIA_TYPES = frozenset({"comment", "html_comment"})
CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration"})


@dataclass(frozen=True)
class Span:
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is after end {self.end}")

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def covers(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end

    def overlaps(self, other: "Span") -> bool:
        return self.start < other.end and other.start < self.end


# --- Node variants ---

@dataclass(frozen=True, eq=False)
class StringLiteral:
    value: str
    notation: str          # "quoted" or "template"
    span: Span

    @property
    def children(self) -> tuple:
        return ()


@dataclass(frozen=True, eq=False)
class ArrayLiteral:
    elements: tuple
    span: Span

    @property
    def children(self) -> tuple:
        return self.elements


@dataclass(frozen=True, eq=False)
class Property:
    key: Optional[str]     # None unless the key is a plain identifier
    value: object
    span: Span             # core range, first token to last token
    full_start: int        # end of the preceding token, leading trivia included

    @property
    def full_span(self) -> Span:
        return Span(self.full_start, self.span.end)

    @property
    def children(self) -> tuple:
        return (self.value,)


@dataclass(frozen=True, eq=False)
class ObjectLiteral:
    properties: tuple      # Property nodes, or Opaque for spreads/shorthands/methods
    separators: tuple      # byte offsets of the ',' tokens, in order
    span: Span

    @property
    def children(self) -> tuple:
        return self.properties


@dataclass(frozen=True, eq=False)
class Decorator:
    callee: Optional[str]  # identifier of a call decorator, e.g. "Component"
    arguments: tuple
    span: Span

    @property
    def children(self) -> tuple:
        return self.arguments


@dataclass(frozen=True, eq=False)
class ClassDeclaration:
    name: Optional[str]
    decorators: tuple
    members: tuple
    span: Span

    @property
    def children(self) -> tuple:
        return self.decorators + self.members


@dataclass(frozen=True, eq=False)
class Opaque:
    kind: str
    nodes: tuple
    span: Span

    @property
    def children(self) -> tuple:
        return self.nodes


@dataclass(frozen=True)
class SyntaxTree:
    root: Opaque
    source: bytes


def walk(node) -> Iterator[object]:
    """Depth-first, pre-order traversal over any node variant."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


# --- String decoding ---

_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
}
_LINE_CONTINUATIONS = ("\n", "\r\n", "\r", "\u2028", "\u2029")
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")


def _cook_escape(match) -> str:
    token = match.group(1)
    if token.startswith("u{"):
        return chr(int(token[2:-1], 16))
    if len(token) == 5 and token[0] == "u":
        return chr(int(token[1:], 16))
    if len(token) == 3 and token[0] == "x":
        return chr(int(token[1:], 16))
    if token in _LINE_CONTINUATIONS:
        return ""
    return _SIMPLE_ESCAPES.get(token, token)


def decode_string_body(raw: str, notation: str = "quoted") -> str:
    """Cook the text between the quotes of a string or template literal."""
    if notation == "template":
        raw = raw.replace("\r\n", "\n").replace("\r", "\n")
    cooked = _ESCAPE_RE.sub(_cook_escape, raw)
    # \uD83D\uDE00 style pairs come out as two lone surrogates
    return cooked.encode("utf-16", "surrogatepass").decode("utf-16")


# --- Lowering ---

def _span(node: Node) -> Span:
    return Span(node.start_byte, node.end_byte)


def _text(node: Optional[Node]) -> Optional[str]:
    if node is None:
        return None
    return node.text.decode("utf-8")


def _significant(node: Node) -> list:
    return [child for child in node.named_children if child.type not in TRIVIA_TYPES]


def _lower_string(node: Node):
    body = node.text[1:-1].decode("utf-8")
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return Opaque(node.type, (), _span(node))
        return StringLiteral(decode_string_body(body, "template"), "template", _span(node))
    return StringLiteral(decode_string_body(body, "quoted"), "quoted", _span(node))


def _class_decorators(node: Node) -> list:
    decorators = [child for child in node.children if child.type == "decorator"]
    # "@Component(...) export class X" hangs the decorators on the export
    parent = node.parent
    if parent is not None and parent.type == "export_statement":
        decorators = [child for child in parent.children if child.type == "decorator"] + decorators
    return decorators


def _class_members(node: Node) -> list:
    body = node.child_by_field_name("body")
    return _significant(body) if body is not None else []


def _decorator_call(node: Node) -> Optional[Node]:
    expressions = _significant(node)
    if expressions and expressions[0].type == "call_expression":
        return expressions[0]
    return None


def _decorator_arguments(node: Node) -> list:
    call = _decorator_call(node)
    args = call.child_by_field_name("arguments") if call is not None else None
    return _significant(args) if args is not None else []


def _object_entries(node: Node) -> list:
    return [child for child in node.named_children if child.type not in TRIVIA_TYPES]


def _opaque_children(node: Node) -> list:
    children = _significant(node)
    if node.type == "export_statement":
        # already attached to the exported class
        children = [child for child in children if child.type != "decorator"]
    return children


def _lowering_inputs(node: Node) -> list:
    """Nodes whose lowered form the lowering of ``node`` is built from."""
    if node.type in CLASS_TYPES:
        return _class_decorators(node) + _class_members(node)
    if node.type == "object":
        inputs = []
        for child in _object_entries(node):
            if child.type != "pair":
                inputs.append(child)
                continue
            value = child.child_by_field_name("value")
            if value is not None:
                inputs.append(value)
        return inputs
    if node.type == "array":
        return _significant(node)
    if node.type in ("string", "template_string"):
        return []
    if node.type == "decorator":
        return _decorator_arguments(node)
    return _opaque_children(node)


def _lower_object(node: Node, lowered: dict) -> ObjectLiteral:
    properties = []
    separators = []
    last_token_end = node.start_byte
    for child in node.children:
        if child.type in TRIVIA_TYPES:
            continue
        if child.type == ",":
            separators.append(child.start_byte)
        elif child.is_named:
            if child.type == "pair":
                key = child.child_by_field_name("key")
                value = child.child_by_field_name("value")
                properties.append(Property(
                    key=_text(key) if key is not None and key.type == "property_identifier" else None,
                    value=lowered[value.id] if value is not None else None,
                    span=_span(child),
                    full_start=last_token_end,
                ))
            else:
                properties.append(lowered[child.id])
        last_token_end = child.end_byte
    return ObjectLiteral(tuple(properties), tuple(separators), _span(node))


def _lower_decorator(node: Node, lowered: dict) -> Decorator:
    callee = None
    call = _decorator_call(node)
    if call is not None:
        function = call.child_by_field_name("function")
        if function is not None and function.type == "identifier":
            callee = _text(function)
    arguments = tuple(lowered[arg.id] for arg in _decorator_arguments(node))
    return Decorator(callee, arguments, _span(node))


def _lower_one(node: Node, lowered: dict):
    if node.type in CLASS_TYPES:
        return ClassDeclaration(
            name=_text(node.child_by_field_name("name")),
            decorators=tuple(lowered[d.id] for d in _class_decorators(node)),
            members=tuple(lowered[m.id] for m in _class_members(node)),
            span=_span(node),
        )
    if node.type == "object":
        return _lower_object(node, lowered)
    if node.type == "array":
        return ArrayLiteral(tuple(lowered[child.id] for child in _significant(node)), _span(node))
    if node.type in ("string", "template_string"):
        return _lower_string(node)
    if node.type == "decorator":
        return _lower_decorator(node, lowered)
    return Opaque(node.type, tuple(lowered[child.id] for child in _opaque_children(node)), _span(node))


def lower(node: Node):
    """
    Lower one tree-sitter node (and its subtree) into node variants.

    Children are lowered before their parent from an explicit stack, so a
    deeply nested expression such as a long ``a + b + ...`` chain is not
    limited by the interpreter's recursion depth.
    """
    lowered = {}
    stack = [(node, False)]
    while stack:
        current, ready = stack.pop()
        if ready:
            lowered[current.id] = _lower_one(current, lowered)
            continue
        stack.append((current, True))
        stack.extend((child, False) for child in _lowering_inputs(current))
    return lowered[node.id]


# --- Parser ---

_PARSER: Optional[Parser] = None


def get_parser() -> Parser:
    """Lazy-load the TypeScript parser."""
    global _PARSER
    if _PARSER is None:
        import tree_sitter_typescript as ts_typescript

        _PARSER = Parser(Language(ts_typescript.language_typescript()))
    return _PARSER


def _first_error(node: Node) -> Optional[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


def parse_source(source: bytes) -> SyntaxTree:
    """Parse TypeScript source bytes; raises ParseError on syntax errors."""
    tree = get_parser().parse(source)
    root = tree.root_node
    if root.has_error:
        error = _first_error(root)
        if error is not None:
            row, column = error.start_point
            raise ParseError(f"syntax error at line {row + 1}, column {column + 1}")
        raise ParseError("syntax error")
    return SyntaxTree(lower(root), source)
