"""Data models for Notes Publisher."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from notes_publisher.core.frontmatter import Frontmatter, NoteStatus, parse_frontmatter


class PublisherError(Exception):
    """Base class for errors surfaced to the caller."""


class FilesystemError(PublisherError):
    """An I/O failure while discovering, reading or writing notes."""


class DiscoveryError(FilesystemError):
    """The source directory cannot be scanned."""


class BackupError(PublisherError):
    """The backup could not be created; nothing must be published."""


class SlugCollisionError(PublisherError):
    """Several publishable notes would be written to the same file."""

    def __init__(self, collisions: Dict[str, List[Path]]):
        self.collisions = collisions
        details = "; ".join(
            f"{slug}: {', '.join(str(p) for p in paths)}"
            for slug, paths in collisions.items()
        )
        super().__init__(f"Duplicate slugs: {details}")


class NoteStateError(PublisherError):
    """A note's processed body was reassigned to a different value."""


NoteObserver = Callable[["Note"], None]


class Note:
    """One source file of the catalog.

    The frontmatter and body are parsed once, at construction. The processed
    body is filled in by the link resolver and can only be set once.
    """

    def __init__(
        self,
        file_path: Path,
        raw_content: str,
        on_create: Optional[NoteObserver] = None,
    ):
        self._file_path = Path(file_path)
        self._raw_content = raw_content
        self._frontmatter, self._body = parse_frontmatter(raw_content)
        self._processed_body: Optional[str] = None

        if on_create is not None:
            on_create(self)

    @classmethod
    def from_path(cls, file_path: Path, on_create: Optional[NoteObserver] = None) -> "Note":
        """Read a file as UTF-8 and build a Note from it.

        Raises:
            FilesystemError: If the file cannot be read or decoded
        """
        path = Path(file_path)
        try:
            raw = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(f"Failed to read {path}: {e}") from e
        return cls(path, raw, on_create=on_create)

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def raw_content(self) -> str:
        return self._raw_content

    @property
    def frontmatter(self) -> Optional[Frontmatter]:
        return self._frontmatter

    @property
    def body(self) -> str:
        return self._body

    @property
    def processed_body(self) -> Optional[str]:
        return self._processed_body

    @processed_body.setter
    def processed_body(self, value: str) -> None:
        """Set once. Assigning the stored value again is a no-op."""
        if self._processed_body is not None and self._processed_body != value:
            raise NoteStateError(f"Processed body already set for {self._file_path}")
        self._processed_body = value

    @property
    def has_frontmatter(self) -> bool:
        return self._frontmatter is not None

    @property
    def title(self) -> Optional[str]:
        return self._frontmatter.title if self._frontmatter else None

    @property
    def slug(self) -> Optional[str]:
        return self._frontmatter.slug if self._frontmatter else None

    @property
    def is_publishable(self) -> bool:
        """Valid frontmatter, ``status: publish`` and links resolved."""
        return (
            self._frontmatter is not None
            and self._frontmatter.is_published
            and self._processed_body is not None
        )

    def __repr__(self) -> str:
        return f"Note({str(self._file_path)!r}, title={self.title!r})"


@dataclass
class NoteError:
    """An error that occurred while processing a note.

    Used for errors at any phase: discovery, processing, or publishing.
    """
    path: Path
    error: str
    title: Optional[str] = None


@dataclass
class PublishResult:
    """Result of a publish operation."""
    published_slugs: List[str] = field(default_factory=list)
    published_paths: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)
    failures: List[NoteError] = field(default_factory=list)
    dry_run: bool = False
    backup_dir: Optional[Path] = None

    @property
    def published_count(self) -> int:
        return len(self.published_slugs)


class PublishError(FilesystemError):
    """Writing a note failed; ``result`` holds what was published before."""

    def __init__(self, message: str, result: PublishResult):
        super().__init__(message)
        self.result = result
