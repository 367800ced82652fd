import posixpath
import re
from dataclasses import dataclass

from codex_scaffold.core.errors import InvalidSelector
from codex_scaffold.core.strings import camelize

_HTML_SELECTOR_RE = re.compile(r"^[a-zA-Z][.0-9a-zA-Z]*((:?-[0-9]+)*|(:?-[a-zA-Z][.0-9a-zA-Z]*(:?-[0-9]+)*)*)$")


@dataclass(frozen=True)
class Location:
    name: str
    path: str


def normalize_path(path: str) -> str:
    """Collapse ``path`` to an absolute POSIX path; ``..`` never climbs above ``/``."""
    return posixpath.normpath("/" + path.replace("\\", "/")).replace("//", "/")


def parse_name(path: str, name: str) -> Location:
    """Split a name that may carry directories (``shared/foo``) into its directory and base name."""
    base_name = posixpath.basename(normalize_path(name))
    name_path = posixpath.dirname(posixpath.join(normalize_path(path), name))
    return Location(name=base_name, path=normalize_path(name_path))


def build_selector(name: str, prefix: str | None, project_prefix: str | None) -> str:
    selector = name
    if prefix:
        selector = f"{prefix}-{selector}"
    elif prefix is None and project_prefix:
        selector = f"{project_prefix}-{selector}"
    return camelize(selector)


def validate_html_selector(selector: str) -> None:
    if not selector or not _HTML_SELECTOR_RE.match(selector):
        raise InvalidSelector(f'Selector "{selector}" is invalid.')
