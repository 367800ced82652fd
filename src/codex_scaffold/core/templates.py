"""Render a template set into files staged under a destination directory.

File contents are Jinja2 templates with the ``.j2`` suffix. Path segments use
``__<key>@<fn>@<fn>__`` placeholders: the context value for ``key`` passed
through each function in turn, e.g. ``__name@dasherize__.directive.ts.j2``.
"""

import logging
import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from codex_scaffold.core.naming import normalize_path
from codex_scaffold.core.strings import camelize, classify, dasherize, underscore
from codex_scaffold.models import StagedFile

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".j2"
_TEST_TEMPLATE_SUFFIX = ".spec.ts" + TEMPLATE_SUFFIX
_PATH_TOKEN_RE = re.compile(r"__([a-zA-Z_]\w*)((?:@[\w-]+)*)__")

_STRING_FUNCTIONS: dict[str, Callable[[str], str]] = {
    "camelize": camelize,
    "classify": classify,
    "dasherize": dasherize,
    "underscore": underscore,
}


def templates_dir() -> Path:
    return Path(__file__).parent.parent / "templates"


def create_environment(root: Path | None = None) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(root or templates_dir())),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        autoescape=False,
    )
    env.filters.update(_STRING_FUNCTIONS)
    return env


def render_path(relative: str, context: Mapping[str, Any]) -> str:
    functions = dict(_STRING_FUNCTIONS)
    functions["if-flat"] = lambda value: "" if context.get("flat") else value

    def _substitute(match: re.Match[str]) -> str:
        key = match.group(1)
        if key not in context:
            raise KeyError(f"Path placeholder '{key}' has no value in the template context")
        value = str(context[key])
        for name in filter(None, match.group(2).split("@")):
            value = functions[name](value)
        return value

    return _PATH_TOKEN_RE.sub(_substitute, relative)


def render_template_set(
    template_set: str,
    context: Mapping[str, Any],
    destination: str,
    skip_tests: bool = False,
    root: Path | None = None,
) -> list[StagedFile]:
    base = root or templates_dir()
    set_dir = base / template_set
    if not set_dir.is_dir():
        raise FileNotFoundError(f"Template set not found: {set_dir}")

    env = create_environment(base)
    staged: list[StagedFile] = []
    for template_path in sorted(set_dir.rglob(f"*{TEMPLATE_SUFFIX}")):
        relative = template_path.relative_to(set_dir).as_posix()
        if skip_tests and relative.endswith(_TEST_TEMPLATE_SUFFIX):
            logger.debug("Skipping test template %s", relative)
            continue

        template = env.get_template(template_path.relative_to(base).as_posix())
        content = template.render(**context)
        output = render_path(relative[: -len(TEMPLATE_SUFFIX)], context)
        staged.append(StagedFile(path=normalize_path(f"{destination}/{output}"), content=content.encode("utf-8")))

    logger.debug("Rendered %d file(s) from %s", len(staged), template_set)
    return staged
