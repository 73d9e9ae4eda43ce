# src/ado_review/review/filters.py
import logging
from fnmatch import fnmatchcase
from typing import Iterable
from ado_review.models.diff import FileDiff


logger = logging.getLogger(__name__)


def is_excluded(path: str | None, patterns: Iterable[str]) -> bool:
    """Check if path matches any exclude pattern.

    Matching is case-sensitive and covers the whole path. `*` also crosses
    directory separators, and a leading `**/` matches top-level files too.
    Files without a destination path (deletions) are never excluded.
    """
    if path is None:
        return False
    for pattern in patterns:
        pattern = pattern.strip()
        if not pattern:
            continue
        if fnmatchcase(path, pattern):
            return True
        if pattern.startswith("**/") and fnmatchcase(path, pattern[3:]):
            return True
    return False


def filter_files(files: Iterable[FileDiff], patterns: Iterable[str]) -> list[FileDiff]:
    """Drop files whose destination path matches an exclusion glob, keeping order."""
    patterns = tuple(patterns)
    kept = []
    for file in files:
        if is_excluded(file.path, patterns):
            logger.debug(f"Excluded {file.path}")
            continue
        kept.append(file)
    return kept
