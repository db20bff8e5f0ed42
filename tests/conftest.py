"""Shared fixtures for Notes Publisher tests."""

import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo the handler the CLI installs so caplog sees every record."""
    logger = logging.getLogger("notes_publisher")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def make_note_text(title, body="", slug=None, status="publish", tags=None):
    """Build the raw text of a note with frontmatter."""
    lines = ["---", f"title: {title}"]
    if slug is not None:
        lines.append(f"slug: {slug}")
    if status is not None:
        lines.append(f"status: {status}")
    lines.append("tags:")
    for tag in tags or ["notes"]:
        lines.append(f"  - {tag}")
    lines.append("created_at: 2023-01-01 12:00")
    lines.append("last_modified_at: 2023-01-01 18:00")
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture
def write_note():
    """Write a note file; returns its path."""
    def write(path: Path, title, body="", **kwargs) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(make_note_text(title, body, **kwargs), encoding="utf-8")
        return path
    return write


@pytest.fixture
def note_text():
    """Factory building the raw text of a note."""
    return make_note_text
