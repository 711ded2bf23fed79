"""Tests for the in-memory session registry."""

from gemini_editor.sessions import SessionRegistry
from tests.conftest import StubEditor


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make_registry(**kwargs):
    return SessionRegistry(StubEditor(), **kwargs)


class TestSessionRegistry:

    def test_get_creates_once_per_session(self):
        registry = make_registry()

        assert registry.get("a" * 32) is registry.get("a" * 32)
        assert registry.get("b" * 32) is not registry.get("a" * 32)
        assert len(registry) == 2

    def test_peek_never_creates(self):
        registry = make_registry()

        assert registry.peek(None) is None
        assert registry.peek("unknown") is None
        assert len(registry) == 0

        ctrl = registry.get("known")
        assert registry.peek("known") is ctrl

    def test_bounded_by_least_recently_used(self):
        clock = FakeClock()
        registry = make_registry(max_sessions=3, clock=clock)
        for sid in ["s1", "s2", "s3"]:
            clock.now += 1
            registry.get(sid)
        clock.now += 1
        registry.peek("s1")

        clock.now += 1
        registry.get("s4")

        assert len(registry) == 3
        assert "s2" not in registry
        assert "s1" in registry and "s4" in registry

    def test_many_sessions_stay_within_cap(self):
        registry = make_registry(max_sessions=10)
        for i in range(100):
            registry.get(f"session-{i}")

        assert len(registry) == 10

    def test_idle_sessions_expire(self):
        clock = FakeClock()
        registry = make_registry(ttl=60, clock=clock)
        registry.get("old")
        clock.now = 61

        registry.get("new")

        assert "old" not in registry
        assert "new" in registry

    def test_session_with_edit_in_flight_is_kept(self):
        clock = FakeClock()
        registry = make_registry(max_sessions=1, ttl=60, clock=clock)
        busy = registry.get("busy")
        busy._update(is_loading=True)
        clock.now = 120

        registry.get("other")

        assert registry.peek("busy") is busy
