"""Tests for example rendering and output."""

import json

import pytest

from exemplify.core import Callout, Example, ExampleStore, Part, extract_examples
from exemplify.transforms import (
    OutputFormat,
    output_file_name,
    render,
    render_asciidoc,
    to_dict,
    write_examples,
)


@pytest.fixture
def foo_bar(first_fixture, fixtures_dir) -> Example:
    store = ExampleStore()
    extract_examples([first_fixture], store, root=fixtures_dir)
    return store.get("foo/bar")


class TestOutputContract:

    def test_to_dict(self, foo_bar):
        data = to_dict(foo_bar)

        assert data["name"] == "foo/bar"
        assert data["title"] == "Test example 1"
        assert [p["part"] for p in data["parts"]] == [1, 2]
        assert "language" not in data["parts"][0]
        assert data["parts"][1]["language"] == "javascript"
        assert data["parts"][0]["callouts"] == [{"offset": 5, "value": "this is a callout"}]
        assert data["parts"][1]["text"] == "}"

    def test_optional_fields_omitted(self):
        data = to_dict(Example(name="bare", parts=[Part(part=1, lines=["x"])]))

        assert data == {"name": "bare", "parts": [{"part": 1, "text": "x", "callouts": []}]}

    def test_json_render_round_trips_contract(self, foo_bar):
        assert json.loads(render(foo_bar, OutputFormat.JSON)) == to_dict(foo_bar)


class TestAsciidoc:

    def test_fixture_example(self, foo_bar):
        assert render_asciidoc(foo_bar) == "\n".join([
            ".Test example 1",
            "[source,javascript]",
            "----",
            "export class Foobar {",
            "    function nestedExample() {",
            "",
            "    }",
            "    public doSomethingWorthwhile() {",
            '        console.log("This is important!"); // <1>',
            "        return new Something();",
            "    }",
            "}",
            "----",
            "<1> this is a callout",
        ]) + "\n"

    def test_without_title_or_language(self):
        example = Example(name="x", parts=[Part(part=1, lines=["a"])])

        assert render_asciidoc(example) == "[source]\n----\na\n----\n"

    def test_callout_offsets_span_parts(self):
        example = Example(name="x", parts=[
            Part(part=1, lines=["a", "b"], callouts=[Callout(1, "first", "#")]),
            Part(part=2, lines=["c"], callouts=[Callout(0, "second")]),
        ])

        assert render_asciidoc(example).splitlines()[2:7] == [
            "a",
            "b # <1>",
            "c <2>",
            "----",
            "<1> first",
        ]

    def test_file_names(self, foo_bar):
        assert output_file_name(foo_bar, OutputFormat.ASCIIDOC) == "foo/bar.adoc"
        assert output_file_name(foo_bar, OutputFormat.PLAIN) == "foo/bar"
        assert output_file_name(foo_bar, OutputFormat.JSON) == "foo/bar.json"


class TestWriteExamples:

    def test_creates_nested_directories(self, foo_bar, tmp_path):
        written = write_examples([foo_bar], tmp_path, OutputFormat.ASCIIDOC)

        target = tmp_path / "foo" / "bar.adoc"
        assert written == [target.resolve()]
        assert target.read_text(encoding="utf-8").startswith(".Test example 1\n")

    def test_plain_output(self, foo_bar, tmp_path):
        write_examples([foo_bar], tmp_path)

        assert (tmp_path / "foo" / "bar").read_text(encoding="utf-8") == foo_bar.text

    @pytest.mark.parametrize("name", ["../escape", "/abs/path", "a/../../b"])
    def test_refuses_names_outside_output_dir(self, tmp_path, name):
        example = Example(name=name, parts=[Part(part=1, lines=["x"])])

        with pytest.raises(ValueError):
            write_examples([example], tmp_path / "out")
