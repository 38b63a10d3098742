"""Tests for the example store."""

import pytest

from exemplify.core import DuplicateExampleError, Example, ExampleStore, Part


def make_example(name: str, text: str = "x") -> Example:
    return Example(name=name, parts=[Part(part=1, lines=[text])])


class TestExampleStore:

    def test_get_missing_returns_none(self, store):
        assert store.get("missing") is None
        assert "missing" not in store

    def test_put_and_get(self, store):
        store.begin_pass()
        example = make_example("foo/bar")
        store.put(example)

        assert store.get("foo/bar") is example
        assert "foo/bar" in store
        assert len(store) == 1

    def test_names_in_insertion_order(self, store):
        store.begin_pass()
        for name in ["b", "a", "c/d"]:
            store.put(make_example(name))

        assert store.names() == ["b", "a", "c/d"]

    def test_same_pass_duplicate_rejected(self, store):
        store.begin_pass()
        store.put(make_example("a"))

        with pytest.raises(DuplicateExampleError):
            store.put(make_example("a", "other"))
        assert store.get("a").text == "x"

    def test_replace_across_passes(self, store):
        store.begin_pass()
        store.put(make_example("a", "old"))
        store.begin_pass()
        store.put(make_example("a", "new"))

        assert store.get("a").text == "new"
        assert store.generation == 2

    def test_all_is_restartable_snapshot(self, store):
        store.begin_pass()
        store.put(make_example("a"))
        store.put(make_example("b"))

        first = [e.name for e in store.all()]
        second = [e.name for e in store.all()]

        assert first == second
        assert sorted(first) == ["a", "b"]

    def test_snapshot_unaffected_by_later_put(self, store):
        store.begin_pass()
        store.put(make_example("a"))
        iterator = store.all()
        store.put(make_example("b"))

        assert [e.name for e in iterator] == ["a"]

    def test_reset(self, store):
        store.begin_pass()
        store.put(make_example("a"))
        store.reset()

        assert len(store) == 0
        assert store.names() == []
        assert store.generation == 0
        store.put(make_example("a"))
        assert store.get("a") is not None

    def test_separate_instances_are_independent(self):
        one, two = ExampleStore(), ExampleStore()
        one.put(make_example("a"))

        assert two.get("a") is None
