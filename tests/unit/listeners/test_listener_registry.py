"""
Tests for ListenerRegistry.
"""

import pytest

from github_http.core.message import Request, Response
from github_http.listeners.listener import Listener, ListenerKind, ListenerRegistry


class NamedListener(Listener):

    def __init__(self, kind, name=None):
        self.kind = kind
        self.name = name or kind


class TestListenerRegistry:

    def test_insertion_order(self):
        registry = ListenerRegistry()
        registry.add(NamedListener("a"))
        registry.add(NamedListener("b"))
        registry.add(NamedListener("c"))
        assert [l.name for l in registry] == ["a", "b", "c"]

    def test_replacement_keeps_position(self):
        registry = ListenerRegistry()
        registry.add(NamedListener("a"))
        registry.add(NamedListener("b"))

        previous = registry.add(NamedListener("a", name="a2"))

        assert previous.name == "a"
        assert [l.name for l in registry] == ["a2", "b"]
        assert len(registry) == 2

    def test_enum_and_string_kinds_share_key(self):
        registry = ListenerRegistry()
        registry.add(NamedListener(ListenerKind.AUTH, name="enum"))
        registry.add(NamedListener("auth", name="string"))

        assert len(registry) == 1
        assert registry.get(ListenerKind.AUTH).name == "string"
        assert ListenerKind.AUTH in registry

    def test_missing_kind_rejected(self):
        class Anonymous(Listener):
            pass

        with pytest.raises(ValueError):
            ListenerRegistry().add(Anonymous())

    def test_remove(self):
        registry = ListenerRegistry()
        registry.add(NamedListener("a"))
        assert registry.remove("a").name == "a"
        assert registry.remove("a") is None
        assert "a" not in registry

    def test_default_hooks_are_noops(self):
        class Quiet(Listener):
            kind = "quiet"

        registry = ListenerRegistry()
        registry.add(Quiet())
        request = Request("GET", "https://api.github.com")

        registry.run_pre_send(request)
        registry.run_post_send(request, Response(200))

        assert request.headers == []

    def test_listener_registered_during_iteration(self):
        registry = ListenerRegistry()

        class Spawning(Listener):
            kind = "spawning"

            def pre_send(self, request):
                registry.add(NamedListener("late"))

        registry.add(Spawning())
        registry.run_pre_send(Request("GET", "u"))

        assert "late" in registry
