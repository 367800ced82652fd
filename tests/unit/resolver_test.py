"""Unit tests for insertion-point resolution."""

import pytest

from codex_scaffold.core.ast import parse_source
from codex_scaffold.core.changes import UpdateRecorder
from codex_scaffold.core.errors import MissingStructuralCollection
from codex_scaffold.core.locator import DeclarationSite, find_declaration
from codex_scaffold.core.resolver import find_collection, resolve_insertion

PATH = "/src/app/app.component.ts"


def _site(source: str) -> DeclarationSite:
    return find_declaration(parse_source(source.encode("utf-8"), PATH), "Component", "@angular/core")


def _apply(source: str, element: str = "[FooDirective]", property_name: str = "imports") -> str:
    change = resolve_insertion(_site(source), property_name, element)
    assert change is not None
    recorder = UpdateRecorder(path=PATH, original=source.encode("utf-8"))
    recorder.record(change)
    return recorder.apply().decode("utf-8")


def _component(imports: str) -> str:
    return (
        "import { Component } from '@angular/core';\n"
        "\n"
        "@Component({\n"
        "  selector: 'app-root',\n"
        f"  imports: {imports},\n"
        "})\n"
        "export class AppComponent {}\n"
    )


class TestResolveInsertion:
    def test_appends_after_single_element(self) -> None:
        result = _apply(_component("[Bar]"))
        assert "imports: [Bar, [FooDirective]]," in result

    def test_appends_after_last_of_many(self) -> None:
        result = _apply(_component("[Bar, Baz, Qux]"))
        assert "imports: [Bar, Baz, Qux, [FooDirective]]," in result

    def test_empty_collection(self) -> None:
        result = _apply(_component("[]"))
        assert "imports: [[FooDirective]]," in result

    def test_trailing_comma_is_kept(self) -> None:
        result = _apply(_component("[\n    Bar,\n  ]"))
        assert "imports: [\n    Bar, [FooDirective]\n  ]," in result

    def test_comment_after_last_element_is_untouched(self) -> None:
        result = _apply(_component("[Bar /* keep */]"))
        assert "imports: [Bar, [FooDirective] /* keep */]," in result

    def test_offset_is_computed_against_original_bytes(self) -> None:
        source = _component("[Bar]").replace("app-root", "app-rööt")
        change = resolve_insertion(_site(source), "imports", "[FooDirective]")
        assert change is not None
        encoded = source.encode("utf-8")
        assert encoded[: change.pos].endswith(b"imports: [Bar")

    def test_n_plus_one_elements_and_surrounding_text_unchanged(self) -> None:
        source = _component("[Bar, Baz]")
        change = resolve_insertion(_site(source), "imports", "[FooDirective]")
        assert change is not None
        result = _apply(source)

        assert result[: change.pos] == source[: change.pos]
        assert result[change.pos + len(change.to_add) :] == source[change.pos :]

        collection = find_collection(_site(result), "imports")
        elements = [c for c in collection.named_children if c.type != "comment"]
        assert len(elements) == 3
        assert result.encode("utf-8")[elements[-1].start_byte : elements[-1].end_byte] == b"[FooDirective]"

    def test_already_listed_element_is_skipped(self) -> None:
        source = _component("[Bar, [FooDirective]]")
        assert resolve_insertion(_site(source), "imports", "[FooDirective]") is None

    def test_bare_identifier_element(self) -> None:
        result = _apply(_component("[Bar]"), element="FooDirective")
        assert "imports: [Bar, FooDirective]," in result

    def test_missing_property_raises(self) -> None:
        source = (
            "import { Component } from '@angular/core';\n"
            "@Component({ selector: 'app-root' })\n"
            "export class AppComponent {}\n"
        )
        with pytest.raises(MissingStructuralCollection, match="Property 'imports' not found") as excinfo:
            resolve_insertion(_site(source), "imports", "[FooDirective]")
        assert excinfo.value.path == PATH
        assert excinfo.value.property_name == "imports"

    def test_non_array_property_raises(self) -> None:
        source = _component("SHARED_IMPORTS")
        with pytest.raises(MissingStructuralCollection, match="is not an array literal"):
            resolve_insertion(_site(source), "imports", "[FooDirective]")

    def test_quoted_key_is_not_matched(self) -> None:
        source = (
            "import { Component } from '@angular/core';\n"
            "@Component({ 'imports': [Bar] })\n"
            "export class AppComponent {}\n"
        )
        with pytest.raises(MissingStructuralCollection):
            resolve_insertion(_site(source), "imports", "[FooDirective]")
