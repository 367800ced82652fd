"""Scaffold against a real directory through HostTree."""

import json
from pathlib import Path

import pytest

from codex_scaffold.core.errors import MissingStructuralCollection
from codex_scaffold.core.scaffold import scaffold_directive
from codex_scaffold.core.workspace import load_workspace
from codex_scaffold.models import ScaffoldOptions
from codex_scaffold.tree import HostTree


@pytest.fixture
def library(tmp_path: Path, app_module_source: str) -> Path:
    (tmp_path / "angular.json").write_text(
        json.dumps(
            {
                "version": 1,
                "projects": {
                    "ui": {
                        "root": "projects/ui",
                        "sourceRoot": "projects/ui/src",
                        "prefix": "ui",
                        "projectType": "library",
                    }
                },
            }
        ),
        encoding="utf-8",
    )
    lib_dir = tmp_path / "projects" / "ui" / "src" / "lib"
    lib_dir.mkdir(parents=True)
    (lib_dir / "ui.module.ts").write_text(app_module_source, encoding="utf-8")
    return tmp_path


def _files(root: Path) -> dict[str, bytes]:
    return {str(p.relative_to(root)): p.read_bytes() for p in root.rglob("*") if p.is_file()}


def test_library_module_registration(library: Path) -> None:
    tree = HostTree(library)
    options = ScaffoldOptions(name="tooltip", standalone=False, export=True)

    result = scaffold_directive(tree, options, load_workspace(tree))

    lib_dir = library / "projects" / "ui" / "src" / "lib"
    module = (lib_dir / "ui.module.ts").read_text(encoding="utf-8")
    assert "declarations: [AppComponent, TooltipDirective]," in module
    assert "exports: [TooltipDirective]," in module
    assert result.selector == "uiTooltip"
    assert (lib_dir / "tooltip.directive.ts").read_text(encoding="utf-8").count("selector: '[uiTooltip]'") == 1
    assert (lib_dir / "tooltip.directive.spec.ts").exists()


def test_failure_writes_nothing_to_disk(tmp_path: Path) -> None:
    (tmp_path / "angular.json").write_text(json.dumps({"projects": {"app": {"sourceRoot": "src"}}}), encoding="utf-8")
    app_dir = tmp_path / "src" / "app"
    app_dir.mkdir(parents=True)
    (app_dir / "app.component.ts").write_text(
        "import { Component } from '@angular/core';\n\n@Component({ selector: 'app-root' })\nexport class App {}\n",
        encoding="utf-8",
    )
    before = _files(tmp_path)

    tree = HostTree(tmp_path)
    with pytest.raises(MissingStructuralCollection):
        scaffold_directive(tree, ScaffoldOptions(name="foo"), load_workspace(tree))

    assert _files(tmp_path) == before
