"""Find decorator-based declarations such as ``@Component({...})`` in a parsed file."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from tree_sitter import Node

from codex_scaffold.core.ast import SyntaxTree, iter_nodes, run_query
from codex_scaffold.core.errors import DeclarationNotFound, MalformedDeclaration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecoratorApplication:
    name: str
    decorator: Node
    call: Node
    argument: Node | None


@dataclass(frozen=True)
class DeclarationSite:
    """A decorator whose first argument is a non-empty object literal.

    Holds references into ``tree``; it is only meaningful while that tree is.
    """

    tree: SyntaxTree
    name: str
    decorator: Node
    metadata: Node

    @property
    def path(self) -> str:
        return self.tree.path


@dataclass(frozen=True)
class _ModuleBindings:
    names: dict[str, str]
    namespaces: set[str]


def _unquote(text: str) -> str:
    return text[1:-1] if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"`" else text


def _module_bindings(tree: SyntaxTree, module: str) -> _ModuleBindings:
    """Map local names to the names they import from ``module``."""
    names: dict[str, str] = {}
    namespaces: set[str] = set()
    for captures in run_query(tree, "imports"):
        source = captures["import.source"][0]
        if _unquote(tree.text(source)) != module:
            continue
        clause = captures["import.clause"][0]
        for child in clause.named_children:
            if child.type == "namespace_import":
                namespaces.update(tree.text(ident) for ident in child.named_children if ident.type == "identifier")
            elif child.type == "named_imports":
                for specifier in child.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    imported = specifier.child_by_field_name("name")
                    local = specifier.child_by_field_name("alias") or imported
                    if imported is not None and local is not None:
                        names[tree.text(local)] = _unquote(tree.text(imported))
    return _ModuleBindings(names=names, namespaces=namespaces)


def _callee_matches(tree: SyntaxTree, callee: Node, name: str, bindings: _ModuleBindings | None) -> bool:
    if callee.type == "identifier":
        local = tree.text(callee)
        if bindings is None:
            return local == name
        return bindings.names.get(local) == name

    if callee.type == "member_expression":
        obj = callee.child_by_field_name("object")
        prop = callee.child_by_field_name("property")
        if prop is None or tree.text(prop) != name:
            return False
        if bindings is None:
            return True
        return obj is not None and obj.type == "identifier" and tree.text(obj) in bindings.namespaces

    return False


def _first_argument(arguments: Node | None) -> Node | None:
    if arguments is None:
        return None
    for child in arguments.named_children:
        if child.type != "comment":
            return child
    return None


def _has_properties(node: Node) -> bool:
    return any(child.type != "comment" for child in node.named_children)


def iter_decorators(tree: SyntaxTree, name: str, module: str | None = None) -> Iterator[DecoratorApplication]:
    """Yield every call of decorator ``name`` in document order.

    With ``module`` set, the decorator must be imported from that module, directly,
    under an alias, or through a namespace import.
    """
    bindings = _module_bindings(tree, module) if module is not None else None

    for decorator in iter_nodes(tree.root, "decorator"):
        call = next((child for child in decorator.named_children if child.type == "call_expression"), None)
        if call is None:
            continue
        callee = call.child_by_field_name("function")
        if callee is None or not _callee_matches(tree, callee, name, bindings):
            continue
        yield DecoratorApplication(
            name=name,
            decorator=decorator,
            call=call,
            argument=_first_argument(call.child_by_field_name("arguments")),
        )


def find_declaration(tree: SyntaxTree, name: str, module: str | None = None) -> DeclarationSite:
    """Return the first ``@name({...})`` whose argument is a non-empty object literal."""
    seen = 0
    for application in iter_decorators(tree, name, module):
        seen += 1
        argument = application.argument
        if argument is not None and argument.type == "object" and _has_properties(argument):
            logger.debug("Found @%s in %s at byte %d", name, tree.path, application.decorator.start_byte)
            return DeclarationSite(tree=tree, name=name, decorator=application.decorator, metadata=argument)

    if seen == 0:
        raise DeclarationNotFound(f"Decorator @{name} not found in {tree.path}.")
    raise MalformedDeclaration(
        f"Invalid @{name} decorator content found in {tree.path}: expected a non-empty object literal argument."
    )
