# tests/unit/test_filters.py
import pytest
from ado_review.models.diff import ChangeKind, FileDiff, Hunk, LineChange
from ado_review.review.filters import filter_files, is_excluded


def _file(path, source_path="x"):
    hunk = Hunk(header="@@ -1 +1 @@", changes=(LineChange(ChangeKind.ADDED, "x", new_line_no=1),))
    return FileDiff(path=path, hunks=(hunk,), source_path=source_path)


def test_star_pattern_matches_nested_path():
    assert is_excluded("docs/readme.md", ["*.md"]) is True
    assert is_excluded("src/readme.md.ts", ["*.md"]) is False


def test_double_star_pattern():
    assert is_excluded("docs/readme.md", ["**/*.md"]) is True
    assert is_excluded("src/readme.md.ts", ["**/*.md"]) is False
    assert is_excluded("readme.md", ["**/*.md"]) is True


def test_question_mark_and_character_class():
    assert is_excluded("build/v1.js", ["build/v?.js"]) is True
    assert is_excluded("build/v10.js", ["build/v?.js"]) is False
    assert is_excluded("gen/a.py", ["gen/[ab].py"]) is True
    assert is_excluded("gen/c.py", ["gen/[ab].py"]) is False


def test_matching_is_case_sensitive_and_anchored():
    assert is_excluded("README.MD", ["*.md"]) is False
    assert is_excluded("src/vendor/lib.js", ["vendor/*"]) is False
    assert is_excluded("vendor/lib.js", ["vendor/*"]) is True


def test_blank_patterns_are_ignored():
    assert is_excluded("main.py", ["", "  "]) is False


def test_deleted_file_is_never_excluded():
    assert is_excluded(None, ["*", "**"]) is False


def test_filter_files_keeps_order_and_structure():
    files = [_file("a.py"), _file("docs/b.md"), _file("c.py"), _file(None)]

    result = filter_files(files, ["*.md"])

    assert [f.path for f in result] == ["a.py", "c.py", None]
    assert result[0] is files[0]


def test_filter_files_without_patterns_keeps_everything():
    files = [_file("a.py"), _file("b.md")]
    assert filter_files(files, []) == files


def test_filter_files_is_idempotent():
    files = [_file("a.py"), _file("docs/b.md"), _file("package-lock.json"), _file("c.lock")]
    patterns = ["*.md", "*.lock", "package-lock.json"]

    once = filter_files(files, patterns)

    assert filter_files(once, patterns) == once
    assert [f.path for f in once] == ["a.py"]
