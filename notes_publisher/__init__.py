"""
Notes Publisher - Publish Markdown notes with wikilinks to a blog

Scans a directory of Markdown notes, parses their YAML frontmatter,
resolves [[wikilinks]] into relative links addressed by slug, and writes
the notes marked ``status: publish`` to a blog directory.
"""

__version__ = "0.1.0"

from notes_publisher.core.models import (
    BackupError,
    DiscoveryError,
    FilesystemError,
    Frontmatter,
    Note,
    NoteError,
    NoteStatus,
    PublishError,
    PublisherError,
    PublishResult,
    SlugCollisionError,
)
from notes_publisher.core.catalog import NotesCatalog
from notes_publisher.core.processor import LinkIndex, LinkResolver
from notes_publisher.core.publisher import Publisher, publish_notes

__all__ = [
    "BackupError",
    "DiscoveryError",
    "FilesystemError",
    "Frontmatter",
    "Note",
    "NoteError",
    "NoteStatus",
    "PublishError",
    "PublisherError",
    "PublishResult",
    "SlugCollisionError",
    "NotesCatalog",
    "LinkIndex",
    "LinkResolver",
    "Publisher",
    "publish_notes",
]
