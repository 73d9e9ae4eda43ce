# src/ado_review/review/parser.py
import re
import logging
from unidiff import PatchSet
from unidiff.errors import UnidiffParseError
from ado_review.models.diff import ChangeKind, FileDiff, Hunk, LineChange


logger = logging.getLogger(__name__)

DEV_NULL = "/dev/null"
_FILE_SECTION = re.compile(r"^(?=diff --git )", re.MULTILINE)


def parse_diff(diff_text: str) -> list[FileDiff]:
    """Parse unified diff into per-file records of hunks.

    Files without textual hunks (binary, rename-only, mode-only) are dropped.
    If the diff as a whole is malformed, each `diff --git` section is parsed on its
    own so a single broken file does not hide the others.
    """
    if not diff_text or not diff_text.strip():
        return []

    try:
        patch = PatchSet(diff_text)
    except UnidiffParseError as e:
        logger.warning(f"Diff is malformed ({e}), parsing file sections separately")
        return _parse_sections(diff_text)

    return _collect_files(patch)


def _parse_sections(diff_text: str) -> list[FileDiff]:
    files = []
    for section in _FILE_SECTION.split(diff_text):
        if not section.startswith("diff --git "):
            continue
        try:
            patch = PatchSet(section)
        except UnidiffParseError as e:
            header = section.split("\n", 1)[0]
            logger.warning(f"Skipping unparseable file section '{header}': {e}")
            continue
        files.extend(_collect_files(patch))
    return files


def _collect_files(patch: PatchSet) -> list[FileDiff]:
    files = []
    for patched_file in patch:
        hunks = tuple(_convert_hunk(hunk) for hunk in patched_file)
        path = None if patched_file.is_removed_file else _strip_prefix(patched_file.target_file)

        if not hunks:
            logger.debug(f"Dropping {path or patched_file.path}: no textual hunks")
            continue

        files.append(FileDiff(
            path=path,
            hunks=hunks,
            source_path=None if patched_file.is_added_file else _strip_prefix(patched_file.source_file),
        ))
    return files


def _convert_hunk(hunk) -> Hunk:
    header = f"@@ -{hunk.source_start},{hunk.source_length} +{hunk.target_start},{hunk.target_length} @@"
    if hunk.section_header:
        header = f"{header} {hunk.section_header}"

    changes = []
    for line in hunk:
        content = line.value.rstrip("\r\n")
        if line.is_added:
            changes.append(LineChange(ChangeKind.ADDED, content, new_line_no=line.target_line_no))
        elif line.is_removed:
            changes.append(LineChange(ChangeKind.REMOVED, content, old_line_no=line.source_line_no))
        elif line.is_context:
            changes.append(LineChange(
                ChangeKind.CONTEXT,
                content,
                new_line_no=line.target_line_no,
                old_line_no=line.source_line_no,
            ))
        # "\ No newline at end of file" is a marker, not a change

    return Hunk(header=header, changes=tuple(changes))


def _strip_prefix(name: str) -> str | None:
    if name is None or name == DEV_NULL:
        return None
    if name.startswith(("a/", "b/")):
        return name[2:]
    return name
