# src/ado_review/review/mapper.py
import logging
from ado_review.models.diff import ChangeKind, FileDiff, Hunk
from ado_review.models.review import ReviewComment


logger = logging.getLogger(__name__)


def map_comment(file: FileDiff, hunk: Hunk, critique: str | None) -> ReviewComment | None:
    """Anchor a critique to the last added line of the hunk.

    Returns None when there is no critique, when the file has no destination
    path, or when the hunk adds no lines.
    """
    if critique is None:
        return None

    last_added = next(
        (change for change in reversed(hunk.changes) if change.kind is ChangeKind.ADDED),
        None,
    )
    if last_added is None or file.path is None:
        logger.info(f"Dropping critique for {file.path or file.source_path} {hunk.header}: no added line to anchor to")
        return None

    return ReviewComment(body=critique, path=file.path, line=last_added.new_line_no)
