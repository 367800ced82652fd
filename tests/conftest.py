"""Shared fixtures and helpers for tests."""

import json
from pathlib import Path

import pytest
from tree_sitter import Parser
from tree_sitter_language_pack import get_parser

from codex_scaffold.core.workspace import WorkspaceConfig
from codex_scaffold.tree import InMemoryTree

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Sample sources
# ---------------------------------------------------------------------------

APP_COMPONENT = """\
import { Component } from '@angular/core';
import { Bar } from './bar';

@Component({
  selector: 'app-root',
  imports: [Bar],
  templateUrl: './app.component.html',
})
export class AppComponent {
  title = 'app';
}
"""

APP_MODULE = """\
import { NgModule } from '@angular/core';
import { BrowserModule } from '@angular/platform-browser';
import { AppComponent } from './app.component';

@NgModule({
  declarations: [AppComponent],
  imports: [BrowserModule],
  exports: [],
  bootstrap: [AppComponent]
})
export class AppModule { }
"""

WORKSPACE = {
    "version": 1,
    "projects": {
        "app": {
            "root": "",
            "sourceRoot": "src",
            "prefix": "app",
            "projectType": "application",
        },
    },
}


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def typescript_parser() -> Parser:
    """Return a tree-sitter parser for TypeScript."""
    return get_parser("typescript")


@pytest.fixture
def app_component_source() -> str:
    return APP_COMPONENT


@pytest.fixture
def app_module_source() -> str:
    return APP_MODULE


@pytest.fixture
def workspace() -> WorkspaceConfig:
    return WorkspaceConfig.model_validate(WORKSPACE)


@pytest.fixture
def app_tree() -> InMemoryTree:
    """A standalone application: workspace file plus a root component."""
    return InMemoryTree(
        {
            "/angular.json": json.dumps(WORKSPACE),
            "/src/app/app.component.ts": APP_COMPONENT,
        }
    )


@pytest.fixture
def module_tree() -> InMemoryTree:
    """An NgModule-based application."""
    return InMemoryTree(
        {
            "/angular.json": json.dumps(WORKSPACE),
            "/src/app/app.component.ts": APP_COMPONENT,
            "/src/app/app.module.ts": APP_MODULE,
        }
    )
