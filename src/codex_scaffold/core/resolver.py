import logging

from tree_sitter import Node

from codex_scaffold.core.changes import InsertChange
from codex_scaffold.core.errors import MissingStructuralCollection
from codex_scaffold.core.locator import DeclarationSite

logger = logging.getLogger(__name__)


def _find_property(site: DeclarationSite, property_name: str) -> Node | None:
    for prop in site.metadata.named_children:
        if prop.type != "pair":
            continue
        key = prop.child_by_field_name("key")
        if key is not None and key.type == "property_identifier" and site.tree.text(key) == property_name:
            return prop
    return None


def find_collection(site: DeclarationSite, property_name: str) -> Node:
    """Return the array literal assigned to ``property_name`` in the decorator metadata."""
    prop = _find_property(site, property_name)
    if prop is None:
        raise MissingStructuralCollection(site.path, site.name, property_name)
    value = prop.child_by_field_name("value")
    if value is None or value.type != "array":
        raise MissingStructuralCollection(site.path, site.name, property_name, reason="is not an array literal")
    return value


def resolve_insertion(site: DeclarationSite, property_name: str, element: str) -> InsertChange | None:
    """Compute the insertion that appends ``element`` as the last entry of the collection.

    Returns None when an entry with exactly that text is already present.
    """
    collection = find_collection(site, property_name)
    elements = [child for child in collection.named_children if child.type != "comment"]

    if any(site.tree.text(existing) == element for existing in elements):
        logger.info("%s already lists %s in %s, skipping", site.path, element, property_name)
        return None

    if not elements:
        opening = collection.children[0]
        return InsertChange(path=site.path, pos=opening.end_byte, to_add=element)

    last = elements[-1]
    trailing_comma = next(
        (child for child in collection.children if child.type == "," and child.start_byte >= last.end_byte),
        None,
    )
    if trailing_comma is not None:
        return InsertChange(path=site.path, pos=trailing_comma.end_byte, to_add=f" {element}")
    return InsertChange(path=site.path, pos=last.end_byte, to_add=f", {element}")
