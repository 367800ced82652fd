import logging
from dataclasses import dataclass

from codex_scaffold.core.ast import parse_source
from codex_scaffold.core.changes import UpdateRecorder
from codex_scaffold.core.commit import commit_changes
from codex_scaffold.core.find_module import COMPONENT_SUFFIX, MODULE_SUFFIX, find_module_file
from codex_scaffold.core.locator import find_declaration
from codex_scaffold.core.naming import build_selector, parse_name, validate_html_selector
from codex_scaffold.core.ports.tree import Tree
from codex_scaffold.core.resolver import resolve_insertion
from codex_scaffold.core.strings import classify
from codex_scaffold.core.templates import render_template_set
from codex_scaffold.core.workspace import WorkspaceConfig, build_default_path
from codex_scaffold.models import AppliedChange, ScaffoldOptions, ScaffoldResult

logger = logging.getLogger(__name__)

ANGULAR_CORE = "@angular/core"


@dataclass(frozen=True)
class Registration:
    """Where a new class gets listed: a decorator, its list properties, and the element text."""

    decorator: str
    suffix: str
    properties: tuple[str, ...]
    element: str


def registration_for(options: ScaffoldOptions, class_name: str) -> Registration:
    if options.standalone:
        return Registration(
            decorator="Component",
            suffix=COMPONENT_SUFFIX,
            properties=("imports",),
            element=f"[{class_name}]",
        )
    properties = ("declarations", "exports") if options.export else ("declarations",)
    return Registration(decorator="NgModule", suffix=MODULE_SUFFIX, properties=properties, element=class_name)


def scaffold_directive(tree: Tree, options: ScaffoldOptions, workspace: WorkspaceConfig) -> ScaffoldResult:
    """Generate a directive and register it with its hosting declaration in one commit.

    Any failure raises before the commit, leaving ``tree`` untouched.
    """
    project = workspace.get_project(options.project)
    location = parse_name(options.path or build_default_path(project), options.name)

    selector = options.selector or build_selector(location.name, options.prefix, project.prefix)
    validate_html_selector(selector)
    class_name = f"{classify(location.name)}Directive"

    result = ScaffoldResult(selector=selector, class_name=class_name, path=location.path)
    recorders: list[UpdateRecorder] = []

    if options.skip_import:
        logger.info("Skipping registration of %s", class_name)
    else:
        registration = registration_for(options, class_name)
        host_file = find_module_file(tree, location.path, options.module, registration.suffix)
        recorder = tree.begin_update(host_file)
        syntax = parse_source(recorder.original, host_file)
        site = find_declaration(syntax, registration.decorator, ANGULAR_CORE)
        for property_name in registration.properties:
            change = resolve_insertion(site, property_name, registration.element)
            if change is None:
                continue
            recorder.record(change)
            logger.info("Registering %s in %s of @%s in %s", class_name, property_name, site.name, host_file)

        recorders.append(recorder)
        result.host_file = host_file
        result.changes = [AppliedChange(path=c.path, pos=c.pos, to_add=c.to_add) for c in recorder.changes]

    context = {
        **options.model_dump(),
        "name": location.name,
        "path": location.path,
        "selector": selector,
    }
    staged = render_template_set("directive", context, location.path, skip_tests=options.skip_tests)

    summary = commit_changes(tree, recorders, staged)
    result.created = summary.created
    result.updated = summary.updated
    result.unchanged = summary.unchanged
    return result
