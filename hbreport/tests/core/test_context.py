"""Unit tests for the Context store."""

import threading

from hbreport.core.context import Context


class TestContextAccessors:
    """Tests for get/set/delete."""

    def test_set_then_get_returns_exact_value(self) -> None:
        context = Context()
        value = {"nested": [1, 2, 3]}

        context.set("payload", value)

        assert context.get("payload") == value

    def test_set_replaces_existing_value(self) -> None:
        context = Context()
        context.set("user", "alice")
        context.set("user", "bob")

        assert context.get("user") == "bob"
        assert len(context) == 1

    def test_get_missing_key_returns_default(self) -> None:
        context = Context()

        assert context.get("missing") is None
        assert context.get("missing", "fallback") == "fallback"

    def test_delete_removes_key(self) -> None:
        context = Context()
        context.set("user", "alice")

        context.delete("user")

        assert "user" not in context
        assert context.get("user") is None

    def test_delete_missing_key_is_noop(self) -> None:
        context = Context({"kept": True})

        context.delete("missing")

        assert context.snapshot() == {"kept": True}

    def test_independent_contexts_do_not_interfere(self) -> None:
        first = Context()
        second = Context()

        first.set("shared", 1)
        second.set("shared", 2)
        second.delete("shared")

        assert first.get("shared") == 1
        assert "shared" not in second


class TestContextSnapshot:
    """Tests for snapshot isolation."""

    def test_snapshot_is_not_affected_by_later_mutation(self) -> None:
        context = Context()
        tags = ["a"]
        context.set("tags", tags)

        snapshot = context.snapshot()
        tags.append("b")
        context.set("extra", 1)

        assert snapshot == {"tags": ["a"]}

    def test_initial_values_are_copied(self) -> None:
        initial = {"user": "alice"}
        context = Context(initial)

        initial["user"] = "mallory"

        assert context.get("user") == "alice"

    def test_concurrent_mutation_and_snapshot(self) -> None:
        context = Context()

        def writer(offset: int) -> None:
            for i in range(200):
                context.set(f"key-{offset}-{i}", i)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for _ in range(50):
            context.snapshot()
        for thread in threads:
            thread.join()

        assert len(context) == 800
