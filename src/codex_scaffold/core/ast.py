import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import cast

from tree_sitter import Node, Query, QueryCursor, Tree
from tree_sitter_language_pack import SupportedLanguage, get_language, get_parser

from codex_scaffold.core.errors import ParseFailure
from codex_scaffold.core.languages import query_family, resolve_language

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyntaxTree:
    """A parsed source file. Offsets are byte offsets into ``source``."""

    path: str
    language: str
    source: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def text(self, node: Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")


def _load_query(language: str, query_type: str) -> Query:
    queries_dir = Path(__file__).parent.parent / "queries"
    query_path = queries_dir / f"{query_family(language)}_{query_type}.scm"
    if not query_path.exists():
        raise FileNotFoundError(f"Query file not found: {query_path}")
    query_text = query_path.read_text(encoding="utf-8")
    return Query(get_language(cast(SupportedLanguage, language)), query_text)


def run_query(tree: SyntaxTree, query_type: str) -> list[dict[str, list[Node]]]:
    """Run the named query file against ``tree`` and return the captures of each match."""
    cursor = QueryCursor(_load_query(tree.language, query_type))
    return [captures for _, captures in cursor.matches(tree.root)]


def iter_nodes(root: Node, node_type: str | None = None) -> Iterator[Node]:
    """Yield ``root`` and its descendants in document order, optionally filtered by type."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node_type is None or node.type == node_type:
            yield node
        stack.extend(reversed(node.children))


def _first_error(root: Node) -> Node | None:
    for node in iter_nodes(root):
        if node.is_error or node.is_missing:
            return node
    return None


def parse_source(source: bytes, path: str, language: str | None = None) -> SyntaxTree:
    """Parse ``source`` and refuse anything tree-sitter could only partially recover."""
    resolved_language = resolve_language(language, path)
    parser = get_parser(cast(SupportedLanguage, resolved_language))
    tree = parser.parse(source)

    if tree.root_node.has_error:
        error = _first_error(tree.root_node) or tree.root_node
        row, column = error.start_point
        raise ParseFailure(path, row, column)

    logger.debug("Parsed %s as %s (%d bytes)", path, resolved_language, len(source))
    return SyntaxTree(path=path, language=resolved_language, source=source, tree=tree)
