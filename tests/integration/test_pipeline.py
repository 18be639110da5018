"""Integration tests for the document-to-host pipeline."""

import json

import pytest

from domcanvas import (
    DiagnosticKind,
    TextSupport,
    build_for_host,
    get_host,
    parse_document,
    realize,
)
from domcanvas.output import format_build_result, result_to_dict


def _walk(widget: dict):
    yield widget
    for child in widget["children"]:
        yield from _walk(child)


@pytest.mark.integration
class TestDictHostPipeline:
    """Parse, build and realize the login screen on the dict host."""

    def test_realized_tree_mirrors_records(self, login_screen_document):
        host = get_host("dict", text_support=TextSupport.RICH)
        result = build_for_host(parse_document(login_screen_document), host)

        surface = realize(result, host)

        assert surface["canvas"]["name"] == "ImportedCanvas"
        [screen] = surface["children"]
        assert screen["name"] == "LoginScreen"
        assert [child["name"] for child in screen["children"]] == [
            "Title",
            "Fields",
            "Submit",
            "Socials",
        ]
        assert host.widgets_created == result.root.count()

    def test_unsupported_tile_dropped(self, login_screen_document):
        host = get_host("dict", text_support=TextSupport.RICH)
        result = build_for_host(parse_document(login_screen_document), host)

        surface = realize(result, host)

        names = {widget["name"] for widget in _walk(surface["children"][0])}
        assert "Promo" not in names
        assert [d.kind for d in result.diagnostics] == [
            DiagnosticKind.UNSUPPORTED_NODE_KIND
        ]

    def test_legacy_host_uses_fallback_widget(self, login_screen_document):
        host = get_host("dict", text_support=TextSupport.LEGACY)
        result = build_for_host(parse_document(login_screen_document), host)

        surface = realize(result, host)

        texts = [
            instruction
            for widget in _walk(surface["children"][0])
            for instruction in widget["instructions"]
            if instruction["kind"] == "text"
        ]
        assert [t["content"] for t in texts] == ["Welcome back", "Sign in"]
        assert {t["widget"] for t in texts} == {"legacy"}

    def test_textless_host_keeps_structure(self, login_screen_document):
        host = get_host("dict", text_support=TextSupport.NONE)
        result = build_for_host(parse_document(login_screen_document), host)

        surface = realize(result, host)

        submit = surface["children"][0]["children"][2]
        assert [child["name"] for child in submit["children"]] == ["Label"]
        assert submit["children"][0]["instructions"] == []
        missing = [
            d
            for d in result.diagnostics
            if d.kind == DiagnosticKind.MISSING_TEXT_CAPABILITY
        ]
        assert len(missing) == 2

    def test_result_is_json_serializable(self, login_screen_document):
        host = get_host("dict")
        result = build_for_host(parse_document(login_screen_document), host)

        data = json.loads(json.dumps(result_to_dict(result)))

        assert data["canvas"]["reference_resolution"] == {"x": 1080.0, "y": 1920.0}
        assert "Socials [container, grid 3 cols]" in format_build_result(result)
