# tests/unit/test_parser.py
import pytest
from ado_review.models.diff import ChangeKind
from ado_review.review.parser import parse_diff


SAMPLE_DIFF = """diff --git a/src/main.py b/src/main.py
--- a/src/main.py
+++ b/src/main.py
@@ -11,4 +11,6 @@ def hello():
     print("hello")
+    print("world")
+    return True
 
 def goodbye():
     pass
"""

MULTI_FILE_DIFF = """diff --git a/docs/readme.md b/docs/readme.md
--- a/docs/readme.md
+++ b/docs/readme.md
@@ -1,2 +1,2 @@
 # Title
-old text
+new text
diff --git a/old.txt b/old.txt
deleted file mode 100644
--- a/old.txt
+++ /dev/null
@@ -1,2 +0,0 @@
-a
-b
diff --git a/img.png b/img.png
Binary files a/img.png and b/img.png differ
diff --git a/src/app.py b/src/app.py
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,3 @@
 import os
-import sys
+import json
 
@@ -20,2 +20,3 @@ def run():
     x = 1
+    y = 2
     return x
"""


def test_parse_diff_extracts_files():
    files = parse_diff(SAMPLE_DIFF)

    assert len(files) == 1
    assert files[0].path == "src/main.py"
    assert files[0].source_path == "src/main.py"
    assert files[0].is_new is False
    assert len(files[0].hunks) == 1


def test_parse_diff_hunk_header_and_kinds():
    hunk = parse_diff(SAMPLE_DIFF)[0].hunks[0]

    assert hunk.header == "@@ -11,4 +11,6 @@ def hello():"
    assert [c.kind for c in hunk.changes] == [
        ChangeKind.CONTEXT,
        ChangeKind.ADDED,
        ChangeKind.ADDED,
        ChangeKind.CONTEXT,
        ChangeKind.CONTEXT,
        ChangeKind.CONTEXT,
    ]
    assert hunk.changes[1].content == '    print("world")'


def test_parse_diff_resolves_new_file_line_numbers():
    hunk = parse_diff(SAMPLE_DIFF)[0].hunks[0]

    assert hunk.added_lines == [12, 13]
    assert [c.new_line_no for c in hunk.changes] == [11, 12, 13, 14, 15, 16]


def test_removed_lines_do_not_consume_new_line_numbers():
    diff = """--- a/f.txt
+++ b/f.txt
@@ -1,2 +1,3 @@
 context1
+addedA
-removed1
+addedB
"""
    hunk = parse_diff(diff)[0].hunks[0]

    assert [(c.kind, c.line_no) for c in hunk.changes] == [
        (ChangeKind.CONTEXT, 1),
        (ChangeKind.ADDED, 2),
        (ChangeKind.REMOVED, 2),
        (ChangeKind.ADDED, 3),
    ]
    assert hunk.changes[2].new_line_no is None


def test_line_numbers_strictly_increase_within_hunks():
    for file in parse_diff(MULTI_FILE_DIFF):
        for hunk in file.hunks:
            numbers = [c.new_line_no for c in hunk.changes if c.kind is not ChangeKind.REMOVED]
            assert numbers == sorted(set(numbers))


def test_parse_diff_keeps_file_and_hunk_order():
    files = parse_diff(MULTI_FILE_DIFF)

    assert [f.path for f in files] == ["docs/readme.md", None, "src/app.py"]
    assert [h.header for h in files[2].hunks] == [
        "@@ -1,3 +1,3 @@",
        "@@ -20,2 +20,3 @@ def run():",
    ]
    assert files[2].hunks[1].added_lines == [21]


def test_parse_diff_deleted_file_has_no_destination():
    deleted = parse_diff(MULTI_FILE_DIFF)[1]

    assert deleted.path is None
    assert deleted.is_deleted is True
    assert deleted.source_path == "old.txt"
    assert deleted.hunks[0].added_lines == []


def test_parse_diff_drops_files_without_hunks():
    diff = """diff --git a/img.png b/img.png
Binary files a/img.png and b/img.png differ
diff --git a/a.py b/b.py
similarity index 100%
rename from a.py
rename to b.py
"""
    assert parse_diff(diff) == []


def test_parse_diff_new_file():
    diff = """--- /dev/null
+++ b/new_file.py
@@ -0,0 +1,3 @@
+def new_func():
+    pass
+
"""
    files = parse_diff(diff)

    assert len(files) == 1
    assert files[0].path == "new_file.py"
    assert files[0].is_new is True
    assert files[0].hunks[0].added_lines == [1, 2, 3]


def test_parse_diff_skips_no_newline_marker():
    diff = """--- a/f.txt
+++ b/f.txt
@@ -1 +1 @@
-old
\\ No newline at end of file
+new
\\ No newline at end of file
"""
    hunk = parse_diff(diff)[0].hunks[0]

    assert [c.kind for c in hunk.changes] == [ChangeKind.REMOVED, ChangeKind.ADDED]
    assert hunk.added_lines == [1]


@pytest.mark.parametrize("text", ["", "   \n", "this is not a diff\n", "@@ -1 +1 @@\n+orphan hunk\n"])
def test_parse_diff_empty_or_garbage_returns_empty(text):
    assert parse_diff(text) == []


def test_malformed_file_section_does_not_block_others():
    diff = """diff --git a/broken.py b/broken.py
--- a/broken.py
+++ b/broken.py
@@ -1,5 +1,5 @@
 only one line
diff --git a/ok.py b/ok.py
--- a/ok.py
+++ b/ok.py
@@ -1 +1,2 @@
 keep
+added
"""
    files = parse_diff(diff)

    assert [f.path for f in files] == ["ok.py"]
    assert files[0].hunks[0].added_lines == [2]


def test_parse_diff_is_deterministic():
    assert parse_diff(MULTI_FILE_DIFF) == parse_diff(MULTI_FILE_DIFF)
