"""The notes catalog: every note of one run, built before any link is resolved."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from notes_publisher.core.discovery import MARKDOWN_PATTERN, MatchPattern, find_files_recursively
from notes_publisher.core.models import Note, NoteObserver
from notes_publisher.core.processor import LinkResolver, MissingLink
from notes_publisher.transforms.links import LinkTransform

log = logging.getLogger(__name__)


@dataclass
class CatalogStats:
    """Counters gathered while building and resolving a catalog."""
    files: int = 0
    created: int = 0
    ignored: int = 0
    no_content: int = 0
    resolved: int = 0
    unresolved_links: int = 0
    duplicate_titles: int = 0


class NotesCatalog:
    """Owns the notes discovered in a source directory.

    Build it with ``NotesCatalog.build``, then call ``resolve_all`` once the
    whole catalog exists: a wikilink may point to any other note, whatever
    the discovery order.
    """

    def __init__(self, notes: Sequence[Note], stats: Optional[CatalogStats] = None):
        self._notes = list(notes)
        self.stats = stats or CatalogStats(
            files=len(self._notes),
            created=sum(1 for n in self._notes if n.has_frontmatter),
            ignored=sum(1 for n in self._notes if not n.has_frontmatter),
        )
        self.missing_links: List[MissingLink] = []
        self._resolved = False

    @classmethod
    def build(
        cls,
        source_dir: Union[str, Path],
        match: Optional[MatchPattern] = MARKDOWN_PATTERN,
        on_create: Optional[NoteObserver] = None,
    ) -> "NotesCatalog":
        """Discover and parse every note in a directory.

        Files without valid frontmatter are kept in the catalog but can be
        neither link targets nor published.

        Args:
            source_dir: Directory to scan recursively
            match: Regex selecting note files by name
            on_create: Callback invoked with each created note

        Returns:
            The catalog, in discovery order

        Raises:
            DiscoveryError: If the source directory does not exist
            FilesystemError: If a file cannot be read
        """
        files = find_files_recursively(source_dir, match=match)

        notes = []
        stats = CatalogStats(files=len(files))
        for file_path in files:
            note = Note.from_path(file_path, on_create=on_create)
            notes.append(note)
            if note.has_frontmatter:
                stats.created += 1
                log.debug("%r created.", note)
            else:
                stats.ignored += 1
                log.debug("%s is not a note. It has been ignored.", file_path)

        log.info("Notes created: %d", stats.created)
        log.info("Notes ignored: %d", stats.ignored)
        log.info("Total files: %d", stats.files)

        return cls(notes, stats)

    @property
    def notes(self) -> List[Note]:
        return list(self._notes)

    @property
    def resolved(self) -> bool:
        return self._resolved

    def resolve_all(self, link_transform: Optional[LinkTransform] = None) -> List[Note]:
        """Replace the wikilinks of every note by Markdown links.

        Notes without frontmatter are left untouched. Notes whose body is
        empty keep no processed body and are therefore never published.
        Resolving again with the same link transform leaves every note
        unchanged; a different transform raises NoteStateError.

        Args:
            link_transform: Transform for resolved links (default: relative_link)

        Returns:
            The notes that received a processed body

        Raises:
            NoteStateError: If a note was already resolved to different text
        """
        resolver = LinkResolver(self._notes, link_transform=link_transform)
        self.stats.duplicate_titles = len(resolver.link_index.duplicates)
        self.stats.no_content = 0

        processed = []
        for note in self._notes:
            if note.frontmatter is None:
                continue
            name = note.file_path.name
            if not note.body:
                self.stats.no_content += 1
                log.info("No content for note: %s", name)
                continue
            note.processed_body = resolver.resolve(note)
            processed.append(note)
            log.debug("New content for note: %s", name)

        self.missing_links = list(resolver.missing_links)
        self.stats.resolved = len(processed)
        self.stats.unresolved_links = len(self.missing_links)
        self._resolved = True
        return processed

    def select_publishable(self) -> List[Note]:
        """Notes with ``status: publish`` and a processed body, in catalog order."""
        return select_publishable(self._notes)

    def get(self, title: str) -> Optional[Note]:
        """First note carrying a title, following the link resolution rule."""
        for note in self._notes:
            if note.title == title:
                return note
        return None

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self):
        return iter(self._notes)


def build(
    source_dir: Union[str, Path],
    match: Optional[MatchPattern] = MARKDOWN_PATTERN,
    on_create: Optional[NoteObserver] = None,
) -> List[Note]:
    """List-based form of ``NotesCatalog.build``."""
    return NotesCatalog.build(source_dir, match=match, on_create=on_create).notes


def resolve_all(notes: Sequence[Note], link_transform: Optional[LinkTransform] = None) -> List[Note]:
    """Resolve every note of a complete catalog; returns the same notes."""
    NotesCatalog(notes).resolve_all(link_transform=link_transform)
    return list(notes)


def select_publishable(notes: Sequence[Note]) -> List[Note]:
    """Keep notes with ``status: publish`` whose links have been resolved."""
    return [note for note in notes if note.is_publishable]
