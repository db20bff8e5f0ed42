"""Core components for Notes Publisher."""

from notes_publisher.core.frontmatter import Frontmatter, NoteStatus, parse_frontmatter
from notes_publisher.core.models import (
    BackupError,
    DiscoveryError,
    FilesystemError,
    Note,
    NoteError,
    NoteStateError,
    PublishError,
    PublisherError,
    PublishResult,
    SlugCollisionError,
)
from notes_publisher.core.discovery import find_files_recursively
from notes_publisher.core.processor import LinkIndex, LinkResolver, resolve
from notes_publisher.core.catalog import CatalogStats, NotesCatalog, build, resolve_all, select_publishable
from notes_publisher.core.backup import create_backup, prepare_dest_directory
from notes_publisher.core.publisher import Publisher, publish_from_config, publish_notes

__all__ = [
    "Frontmatter",
    "NoteStatus",
    "parse_frontmatter",
    "BackupError",
    "DiscoveryError",
    "FilesystemError",
    "Note",
    "NoteError",
    "NoteStateError",
    "PublishError",
    "PublisherError",
    "PublishResult",
    "SlugCollisionError",
    "find_files_recursively",
    "LinkIndex",
    "LinkResolver",
    "resolve",
    "CatalogStats",
    "NotesCatalog",
    "build",
    "resolve_all",
    "select_publishable",
    "create_backup",
    "prepare_dest_directory",
    "Publisher",
    "publish_from_config",
    "publish_notes",
]
