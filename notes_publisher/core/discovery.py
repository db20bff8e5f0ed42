"""File discovery for the notes source directory."""

import logging
import os
import re
from pathlib import Path
from typing import List, Optional, Pattern, Union

from notes_publisher.core.models import DiscoveryError, FilesystemError

log = logging.getLogger(__name__)

MARKDOWN_PATTERN = re.compile(r'\.md$')

MatchPattern = Union[str, Pattern[str]]


def find_files_recursively(
    directory: Union[str, Path],
    match: Optional[MatchPattern] = MARKDOWN_PATTERN,
) -> List[Path]:
    """Find all files under a directory whose name matches a pattern.

    Traversal is depth-first. Within each directory, entries are visited in
    lexicographic order of their names, so the result is the same on every
    platform. That order is the catalog order, and the catalog order decides
    which note wins when several notes share a title.

    Args:
        directory: Directory to search. Returned paths are built on it, so a
            relative directory gives relative paths.
        match: Regex searched in each file name; None keeps every file

    Returns:
        List of file paths in traversal order

    Raises:
        DiscoveryError: If the directory does not exist or is not a directory
        FilesystemError: If a directory cannot be listed
    """
    root = Path(directory)
    if not root.exists():
        raise DiscoveryError(f"Source directory not found: {root}")
    if not root.is_dir():
        raise DiscoveryError(f"Source path is not a directory: {root}")

    pattern = re.compile(match) if isinstance(match, str) else match
    files: List[Path] = []
    _walk(root, pattern, files)
    log.debug("Found %d matching files in %s", len(files), root)
    return files


def _walk(directory: Path, pattern: Optional[Pattern[str]], files: List[Path]) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise FilesystemError(f"Failed to list {directory}: {e}") from e

    for entry in entries:
        path = directory / entry.name
        if entry.is_dir():
            _walk(path, pattern, files)
        elif entry.is_file():
            if pattern is not None and not pattern.search(entry.name):
                continue
            files.append(path)
