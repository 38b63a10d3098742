"""Tests for the region tracker."""

import pytest

from exemplify.core import IssueCode, RegionTracker, parse_marker_line, track_regions
from exemplify.core.regions import split_callout_line


def track(source: str, file_path: str = "test.ts"):
    return track_regions(source.split("\n"), file_path)


class TestFixtureRegions:
    """Regions extracted from the first TypeScript fixture."""

    @pytest.fixture
    def result(self, first_fixture):
        return track_regions(first_fixture.read_text(encoding="utf-8").splitlines(), "test.ts")

    def test_no_issues(self, result):
        assert result.issues == []

    def test_regions_in_start_order(self, result):
        assert [(r.name, r.part) for r in result.regions] == [
            ("foo/bar", 1),
            ("multi-file-example", 1),
            ("foo/bar", 2),
        ]

    def test_marker_lines_excluded(self, result):
        """Each region holds exactly the lines strictly between its markers."""
        nested = result.regions[1]

        assert nested.start_line == 5
        assert nested.end_line == 9
        assert nested.text_lines == ["    function nestedExample() {", "", "    }"]
        assert [line.line_number for line in nested.lines] == [6, 7, 8]

    def test_outer_region_includes_inner_content(self, result):
        outer = result.regions[0]

        assert outer.text_lines == [
            "export class Foobar {",
            "    function nestedExample() {",
            "",
            "    }",
            "    public doSomethingWorthwhile() {",
            '        console.log("This is important!");',
            "        return new Something();",
            "    }",
        ]

    def test_trailing_callout(self, result):
        """The code survives, the callout points at its line."""
        outer = result.regions[0]

        assert len(outer.callouts) == 1
        callout = outer.callouts[0]
        assert callout.value == "this is a callout"
        assert callout.comment == "//"
        assert outer.text_lines[callout.offset] == '        console.log("This is important!");'

    def test_attributes_carried(self, result):
        first, _, second = result.regions

        assert first.title == "Test example 1"
        assert first.language is None
        assert second.language == "javascript"
        assert second.text_lines == ["}"]


class TestNesting:
    """Nested regions and callout ownership."""

    def test_callout_attaches_to_innermost_only(self):
        result = track(
            '//##exemplify-start##{name="outer"}\n'
            "a\n"
            '//##exemplify-start##{name="inner"}\n'
            'b // ##callout##{value="note"}\n'
            "//##exemplify-end##\n"
            "c\n"
            "//##exemplify-end##"
        )
        inner = next(r for r in result.regions if r.name == "inner")
        outer = next(r for r in result.regions if r.name == "outer")

        assert outer.text_lines == ["a", "b", "c"]
        assert outer.callouts == []
        assert inner.text_lines == ["b"]
        assert [(c.offset, c.value) for c in inner.callouts] == [(0, "note")]

    def test_stack_depth(self):
        tracker = RegionTracker("x.py")
        tracker.feed('###exemplify-start##{name="a"}')
        tracker.feed('###exemplify-start##{name="b"}')
        assert tracker.depth == 2
        tracker.feed("###exemplify-end##")
        assert tracker.depth == 1


class TestUnterminatedRegions:

    def test_single_unterminated_region(self):
        """An unterminated region yields one error at its Start line and no region."""
        result = track(
            '//##exemplify-start##{name="example-1" part=1}\n'
            "class ExampleClass {}\n"
            "//##exemplify-end##\n"
            '//##exemplify-start##{name="example-2" part=1}\n'
            "//This chunk has no explicit end\n"
        )

        assert [r.name for r in result.regions] == ["example-1"]
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.code is IssueCode.UNTERMINATED_REGION
        assert issue.severity == "error"
        assert issue.line_number == 4
        assert issue.file_path == "test.ts"

    def test_one_error_per_open_region(self):
        result = track(
            '//##exemplify-start##{name="a"}\n'
            '//##exemplify-start##{name="b"}\n'
            "x\n"
        )

        assert result.regions == []
        assert [i.line_number for i in result.issues] == [1, 2]
        assert all(i.code is IssueCode.UNTERMINATED_REGION for i in result.issues)

    def test_other_regions_survive(self):
        result = track(
            '//##exemplify-start##{name="dangling"}\n'
            '//##exemplify-start##{name="ok"}\n'
            "x\n"
            "//##exemplify-end##\n"
        )

        assert [r.name for r in result.regions] == ["ok"]
        assert [i.line_number for i in result.issues] == [1]


class TestRecoverableErrors:

    def test_unmatched_end(self):
        result = track("x\n//##exemplify-end##\n")

        assert result.regions == []
        assert [(i.code, i.severity, i.line_number) for i in result.issues] == [
            (IssueCode.UNMATCHED_END, "warning", 2)
        ]

    def test_malformed_start_absorbs_its_end(self):
        result = track(
            '//##exemplify-start##{name="broken"\n'
            "x\n"
            "//##exemplify-end##\n"
            '//##exemplify-start##{name="ok"}\n'
            "y\n"
            "//##exemplify-end##\n"
        )

        assert [r.name for r in result.regions] == ["ok"]
        assert [(i.code, i.line_number) for i in result.issues] == [
            (IssueCode.MALFORMED_ATTRIBUTE_BLOCK, 1)
        ]

    def test_rejected_start_is_not_reported_as_unterminated(self):
        result = track('//##exemplify-start##{name="x" part=zero}\ncode\n')

        assert [i.code for i in result.issues] == [IssueCode.INVALID_NUMERIC_ATTRIBUTE]

    def test_missing_name_without_context(self):
        result = track("//##exemplify-start##{part=2}\nx\n//##exemplify-end##\n")

        assert result.regions == []
        assert [(i.code, i.line_number) for i in result.issues] == [
            (IssueCode.MISSING_NAME_ON_START, 1)
        ]

    def test_nameless_start_continues_previous_example(self):
        result = track(
            '//##exemplify-start##{name="walkthrough" part=1}\n'
            "step one\n"
            "//##exemplify-end##\n"
            "noise\n"
            "//##exemplify-start##{}\n"
            "step two\n"
            "//##exemplify-end##\n"
            "//##exemplify-start##{part=7}\n"
            "step seven\n"
            "//##exemplify-end##\n"
        )

        assert result.issues == []
        assert [(r.name, r.part, r.text_lines) for r in result.regions] == [
            ("walkthrough", 1, ["step one"]),
            ("walkthrough", 2, ["step two"]),
            ("walkthrough", 7, ["step seven"]),
        ]

    def test_malformed_callout_keeps_code(self):
        result = track(
            '//##exemplify-start##{name="x"}\n'
            "a\n"
            "b // ##callout##{value=}\n"
            "    // ##callout##{oops}\n"
            "c\n"
            "//##exemplify-end##\n"
        )

        assert result.regions[0].text_lines == ["a", "b", "c"]
        assert result.regions[0].callouts == []
        assert [(i.code, i.line_number) for i in result.issues] == [
            (IssueCode.MALFORMED_ATTRIBUTE_BLOCK, 3),
            (IssueCode.MALFORMED_ATTRIBUTE_BLOCK, 4),
        ]

    def test_feed_after_finish(self):
        tracker = RegionTracker("x.py")
        tracker.finish()

        with pytest.raises(RuntimeError):
            tracker.feed("x")


class TestStandaloneCallouts:

    def test_attaches_to_previous_line(self):
        result = track(
            '//##exemplify-start##{name="x"}\n'
            "a\n"
            "b\n"
            '// ##callout##{value="about b"}\n'
            "c\n"
            "//##exemplify-end##\n"
        )
        region = result.regions[0]

        assert region.text_lines == ["a", "b", "c"]
        assert [(c.offset, c.value) for c in region.callouts] == [(1, "about b")]

    def test_pending_until_first_line(self):
        result = track(
            '//##exemplify-start##{name="x"}\n'
            '// ##callout##{value="first"}\n'
            "a\n"
            "//##exemplify-end##\n"
        )

        assert [(c.offset, c.value) for c in result.regions[0].callouts] == [(0, "first")]
        assert result.issues == []

    def test_orphan_in_empty_region(self):
        result = track(
            '//##exemplify-start##{name="x"}\n'
            '// ##callout##{value="lonely"}\n'
            "//##exemplify-end##\n"
        )

        assert result.regions[0].callouts == []
        assert [(i.code, i.severity) for i in result.issues] == [(IssueCode.ORPHAN_CALLOUT, "warning")]

    def test_outside_any_region(self):
        result = track('x = 1  # ##callout##{value="nobody listens"}\n')

        assert result.regions == []
        assert [i.code for i in result.issues] == [IssueCode.ORPHAN_CALLOUT]


class TestSplitCalloutLine:

    @pytest.mark.parametrize("line, expected", [
        ('foo()  // ##callout##{value="v"}', ("foo()", "//")),
        ('x = 1  # ##callout##{value="v"}', ("x = 1", "#")),
        ('SELECT 1 -- ##callout##{value="v"}', ("SELECT 1", "--")),
        ('foo(); /* ##callout##{value="v"} */', ("foo();", "/*")),
        ('foo() ##callout##{value="v"}', ("foo()", None)),
        ('    // ##callout##{value="v"}', ("", "//")),
    ])
    def test_strips_marker_and_comment_leader(self, line, expected):
        marker = parse_marker_line(line)

        assert split_callout_line(line, marker) == expected
