# src/i2f/codemod/decorator_locator.py
from typing import Optional

from i2f.codemod.syntax_tree import ClassDeclaration, ObjectLiteral, SyntaxTree, walk

COMPONENT_DECORATOR = "Component"


def find_component_decorator(tree: SyntaxTree, decorator_name: str = COMPONENT_DECORATOR) -> Optional[ObjectLiteral]:
    """
    Return the object literal passed as the single argument of the first
    ``@Component({...})`` class decorator in the file, or None when no class
    carries one.
    """
    for node in walk(tree.root):
        if not isinstance(node, ClassDeclaration):
            continue
        for decorator in node.decorators:
            if decorator.callee != decorator_name or len(decorator.arguments) != 1:
                continue
            if isinstance(decorator.arguments[0], ObjectLiteral):
                return decorator.arguments[0]
    return None
