"""Tests for host abstraction, realization and the dict host."""

import json

import pytest

from domcanvas.builder import CanvasDescriptor, TextSupport, WidgetRecord
from domcanvas.hosts import WidgetHost, build_for_host, get_host, list_hosts, realize
from domcanvas.hosts.dict import DictHost
from domcanvas.schema import parse_document


class RecordingHost(WidgetHost):
    """Host that records calls for inspection."""

    def __init__(self, support: TextSupport = TextSupport.RICH):
        self._support = support
        self.support_queries = 0
        self.calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "recording"

    def text_support(self) -> TextSupport:
        self.support_queries += 1
        return self._support

    def create_canvas(self, canvas: CanvasDescriptor) -> str:
        self.calls.append(("canvas", canvas.name))
        return canvas.name

    def create_widget(self, record: WidgetRecord, parent: str) -> str:
        self.calls.append((parent, record.name))
        return record.name


@pytest.fixture
def nested_document():
    """Document with two levels of children."""
    return parse_document(
        {
            "root": {
                "name": "root",
                "children": [
                    {"name": "a", "children": [{"name": "a1"}, {"name": "a2"}]},
                    {"name": "b", "type": "text", "text": "b"},
                    {"name": "c", "type": "text", "text": "c"},
                ],
            }
        }
    )


class TestRealize:
    """Tests for build_for_host and realize."""

    @pytest.mark.unit
    def test_parent_before_children(self, nested_document):
        """Widgets are created depth-first, parents first."""
        host = RecordingHost()
        realize(build_for_host(nested_document, host), host)
        assert host.calls == [
            ("canvas", "ImportedCanvas"),
            ("ImportedCanvas", "root"),
            ("root", "a"),
            ("a", "a1"),
            ("a", "a2"),
            ("root", "b"),
            ("root", "c"),
        ]

    @pytest.mark.unit
    def test_text_support_queried_once(self, nested_document):
        """The capability is asked once per build session."""
        host = RecordingHost(TextSupport.NONE)
        result = build_for_host(nested_document, host)
        assert host.support_queries == 1
        assert len(result.diagnostics) == 2

    @pytest.mark.unit
    def test_dropped_root_realizes_canvas_only(self):
        """An unknown root leaves only the canvas."""
        host = RecordingHost()
        realize(build_for_host(parse_document({"root": {"type": "x"}}), host), host)
        assert host.calls == [("canvas", "ImportedCanvas")]


class TestRegistry:
    """Tests for the host registry."""

    @pytest.mark.unit
    def test_list_hosts(self):
        """Built-in hosts are registered."""
        assert "dict" in list_hosts()

    @pytest.mark.unit
    def test_get_host(self):
        """Hosts are instantiated with keyword arguments."""
        host = get_host("dict", text_support=TextSupport.LEGACY)
        assert isinstance(host, DictHost)
        assert host.text_support() == TextSupport.LEGACY

    @pytest.mark.unit
    def test_unknown_host(self):
        """Unknown names raise KeyError listing available hosts."""
        with pytest.raises(KeyError, match="Available: .*dict"):
            get_host("qt")


class TestDictHost:
    """Tests for DictHost."""

    @pytest.mark.unit
    def test_realizes_nested_dicts(self, nested_document):
        """The canvas dict nests widget dicts in document order."""
        host = DictHost(text_support=TextSupport.RICH)
        tree = realize(build_for_host(nested_document, host), host)
        assert tree["canvas"]["name"] == "ImportedCanvas"
        (root,) = tree["children"]
        assert [c["name"] for c in root["children"]] == ["a", "b", "c"]
        assert [c["name"] for c in root["children"][0]["children"]] == ["a1", "a2"]
        assert host.widgets_created == 6
        json.dumps(tree)

    @pytest.mark.unit
    def test_text_support_from_environment(self, monkeypatch):
        """Default text support comes from the environment."""
        monkeypatch.setenv("DOMCANVAS_TEXT_SUPPORT", "none")
        assert DictHost().text_support() == TextSupport.NONE
        monkeypatch.delenv("DOMCANVAS_TEXT_SUPPORT")
        assert DictHost().text_support() == TextSupport.RICH
