"""Locate the file that hosts the declaration a new artifact is registered with."""

import logging
import posixpath

from codex_scaffold.core.errors import ModuleResolutionError
from codex_scaffold.core.naming import normalize_path
from codex_scaffold.core.ports.tree import Tree

logger = logging.getLogger(__name__)

MODULE_SUFFIX = ".module.ts"
COMPONENT_SUFFIX = ".component.ts"
_ROUTING_SUFFIX = "-routing.module.ts"


def _resolve_hint(tree: Tree, directory: str, hint: str, suffix: str) -> str:
    module_path = normalize_path(posixpath.join(directory, hint))
    base_name = posixpath.basename(module_path)

    candidate_dirs = {normalize_path(directory)}
    current = module_path
    while current != "/":
        candidate_dirs.add(current)
        current = posixpath.dirname(current)

    for candidate_dir in sorted(candidate_dirs, key=len, reverse=True):
        for name in ("", f"{base_name}.ts", f"{base_name}{suffix}"):
            candidate = normalize_path(posixpath.join(candidate_dir, name))
            if tree.exists(candidate):
                return candidate

    raise ModuleResolutionError(f'Specified file "{hint}" does not exist. Looked in "{directory}" and its parents.')


def find_module_file(tree: Tree, directory: str, hint: str | None = None, suffix: str = MODULE_SUFFIX) -> str:
    """Return the path of the file ending in ``suffix`` closest to ``directory``.

    With a ``hint`` the named file is resolved instead. Raises ModuleResolutionError
    when nothing matches or the nearest directory holds several candidates.
    """
    if hint is not None:
        found = _resolve_hint(tree, directory, hint, suffix)
        logger.debug("Resolved %s to %s", hint, found)
        return found

    current = normalize_path(directory)
    while True:
        matches = [
            name for name in tree.list_files(current) if name.endswith(suffix) and not name.endswith(_ROUTING_SUFFIX)
        ]
        if len(matches) == 1:
            found = normalize_path(posixpath.join(current, matches[0]))
            logger.debug("Found %s walking up from %s", found, directory)
            return found
        if len(matches) > 1:
            raise ModuleResolutionError(
                f"More than one file ending in {suffix} matches in {current}: {', '.join(matches)}. "
                "Use the module option to pick one, or skip-import to skip registration."
            )
        if current == "/":
            break
        current = posixpath.dirname(current)

    raise ModuleResolutionError(
        f"Could not find a file ending in {suffix} in {directory} or its parents. "
        "Use the skip-import option to skip registration."
    )
