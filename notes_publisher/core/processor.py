"""Wikilink resolution for a catalog of notes."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from notes_publisher.core.models import Note
from notes_publisher.transforms.links import LinkTransform, relative_link

log = logging.getLogger(__name__)


@dataclass
class LinkIndex:
    """Index mapping note titles to their slugs.

    Titles are matched exactly. When several notes share a title, the first
    one in catalog order is kept and the title is reported in ``duplicates``.
    """

    title_to_slug: Dict[str, str]
    duplicates: Dict[str, List[Path]] = field(default_factory=dict)

    @classmethod
    def from_notes(cls, notes: Sequence[Note]) -> "LinkIndex":
        """Build a link index from a list of notes.

        Notes without frontmatter are not link targets and are skipped.
        """
        title_to_slug: Dict[str, str] = {}
        owners: Dict[str, Path] = {}
        duplicates: Dict[str, List[Path]] = {}

        for note in notes:
            if note.frontmatter is None:
                continue
            title = note.frontmatter.title
            if title in title_to_slug:
                duplicates.setdefault(title, [owners[title]]).append(note.file_path)
                continue
            title_to_slug[title] = note.frontmatter.slug
            owners[title] = note.file_path

        return cls(title_to_slug, duplicates)

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "LinkIndex":
        """Build a link index from a title->slug dictionary."""
        return cls(dict(data))

    def get_slug(self, title: str) -> Optional[str]:
        """Get slug for a title, case-sensitive."""
        return self.title_to_slug.get(title)


@dataclass
class MissingLink:
    """A wikilink whose target title is not in the catalog."""
    path: Path
    target: str


class LinkResolver:
    """Rewrites wikilinks into Markdown links.

    ``[[Title]]`` becomes ``[Title](./slug)`` and ``[[Title|Text]]`` becomes
    ``[Text](./slug)``. A link to an unknown title is replaced by its visible
    text with no link. Text that does not form a wikilink is kept verbatim.
    """

    # Pattern for wikilinks: [[target]] or [[target|display]], up to the first ]]
    WIKILINK_PATTERN = re.compile(r'\[\[(.+?)\]\]')

    def __init__(
        self,
        notes: Sequence[Note],
        link_transform: Optional[LinkTransform] = None,
        warn_on_missing_link: bool = True,
    ):
        """Initialize LinkResolver.

        Args:
            notes: The complete catalog; every note may be a link target
            link_transform: Transform for resolved links (default: relative_link)
            warn_on_missing_link: Whether to log unresolved wikilinks
        """
        self.link_index = LinkIndex.from_notes(notes)
        self.link_transform = link_transform or relative_link()
        self.warn_on_missing_link = warn_on_missing_link
        self.missing_links: List[MissingLink] = []

        for title, paths in self.link_index.duplicates.items():
            log.warning(
                "Title '%s' is shared by %d notes; links resolve to %s",
                title, len(paths), paths[0],
            )

    def resolve(self, target: Note) -> str:
        """Rewrite the wikilinks of a note's body.

        Args:
            target: The note to rewrite

        Returns:
            The rewritten body
        """
        content, _ = self.resolve_with_misses(target)
        return content

    def resolve_with_misses(self, target: Note) -> Tuple[str, List[str]]:
        """Rewrite the wikilinks of a note's body.

        Args:
            target: The note to rewrite

        Returns:
            Tuple of (rewritten body, list of unresolved link titles)
        """
        content, missing = self.process_text(target.body)

        for link_title in missing:
            self.missing_links.append(MissingLink(target.file_path, link_title))
            if self.warn_on_missing_link:
                log.warning(
                    "%s has a link to '%s' that could not be resolved. "
                    "The link has been replaced by its text.",
                    target.file_path, link_title,
                )

        return content, missing

    def process_text(self, content: str) -> Tuple[str, List[str]]:
        """Process wikilinks in content, one line at a time.

        Args:
            content: Note body

        Returns:
            Tuple of (transformed content, list of missing link targets)
        """
        missing_links: List[str] = []

        def replace_link(match: re.Match) -> str:
            inner = match.group(1)
            link_title, sep, display = inner.partition('|')
            text = display if sep else link_title

            slug = self.link_index.get_slug(link_title)
            if slug is None:
                missing_links.append(link_title)
                return text

            return self.link_transform(text, slug)

        lines = [
            self.WIKILINK_PATTERN.sub(replace_link, line)
            for line in content.split('\n')
        ]
        return '\n'.join(lines), missing_links


def resolve(all_notes: Sequence[Note], target: Note) -> str:
    """Resolve the wikilinks of one note against a whole catalog.

    Args:
        all_notes: The complete catalog
        target: The note to rewrite

    Returns:
        The rewritten body
    """
    return LinkResolver(all_notes).resolve(target)
