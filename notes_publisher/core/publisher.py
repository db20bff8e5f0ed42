"""Publishing of resolved notes into the blog directory."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Union

import yaml

from notes_publisher.core.backup import create_backup, prepare_dest_directory
from notes_publisher.core.catalog import NotesCatalog, select_publishable
from notes_publisher.core.discovery import MARKDOWN_PATTERN, MatchPattern
from notes_publisher.core.models import (
    FilesystemError,
    Note,
    NoteError,
    NoteObserver,
    PublishError,
    PublishResult,
    SlugCollisionError,
)
from notes_publisher.transforms.frontmatter import FrontmatterTransform, get_frontmatter_transform, identity
from notes_publisher.transforms.links import LinkTransform, get_link_transform

if TYPE_CHECKING:
    from notes_publisher.config import Config

log = logging.getLogger(__name__)


def find_slug_collisions(notes: Sequence[Note]) -> Dict[str, List[Path]]:
    """Group notes by slug and keep the slugs used more than once."""
    by_slug: Dict[str, List[Path]] = {}
    for note in notes:
        if note.slug is not None:
            by_slug.setdefault(note.slug, []).append(note.file_path)
    return {slug: paths for slug, paths in by_slug.items() if len(paths) > 1}


def is_safe_slug(slug: str) -> bool:
    """A slug must name a single file inside the blog directory."""
    if not slug or slug in ('.', '..'):
        return False
    return '/' not in slug and '\\' not in slug and '\0' not in slug


class Publisher:
    """Writes publishable notes to ``<blog_dir>/<slug>.md``.

    By default only the processed body is written, without frontmatter.
    """

    def __init__(
        self,
        blog_dir: Union[str, Path],
        include_frontmatter: bool = False,
        frontmatter_transform: Optional[FrontmatterTransform] = None,
        clean_destination: bool = False,
        dry_run: bool = False,
    ):
        """Initialize Publisher.

        Args:
            blog_dir: Destination directory
            include_frontmatter: Write a YAML frontmatter block before the body
            frontmatter_transform: Shapes the written frontmatter (default: identity)
            clean_destination: Empty the destination before writing
            dry_run: Report what would be published without writing anything
        """
        self.blog_dir = Path(blog_dir)
        self.include_frontmatter = include_frontmatter
        self.frontmatter_transform = frontmatter_transform or identity()
        self.clean_destination = clean_destination
        self.dry_run = dry_run

    def publish(self, notes: Sequence[Note]) -> PublishResult:
        """Publish every publishable note of a resolved catalog.

        Args:
            notes: Notes whose links have been resolved

        Returns:
            PublishResult listing published, skipped and failed notes

        Raises:
            SlugCollisionError: If two publishable notes share a slug; nothing is written
            PublishError: If a write fails; carries the notes published so far
            FilesystemError: If the destination cannot be prepared
        """
        result = PublishResult(dry_run=self.dry_run)
        publishable = select_publishable(notes)
        publishable_ids = {id(note) for note in publishable}

        for note in notes:
            if id(note) not in publishable_ids:
                result.skipped.append(note.file_path)

        collisions = find_slug_collisions(publishable)
        if collisions:
            raise SlugCollisionError(collisions)

        if not self.dry_run:
            self._prepare_destination()

        for note in publishable:
            slug = note.slug
            if not is_safe_slug(slug):
                log.error("Refusing to publish %s: invalid slug '%s'", note.file_path, slug)
                result.failures.append(NoteError(
                    path=note.file_path,
                    error=f"Invalid slug: {slug!r}",
                    title=note.title,
                ))
                continue

            output_path = self.blog_dir / f"{slug}.md"
            if not self.dry_run:
                try:
                    output_path.write_text(self.build_output(note), encoding='utf-8')
                except OSError as e:
                    log.error(
                        "Failed to write %s after publishing %d notes: %s",
                        output_path, result.published_count, e,
                    )
                    raise PublishError(
                        f"Failed to write {output_path} "
                        f"({result.published_count} notes published before the failure): {e}",
                        result,
                    ) from e

            result.published_slugs.append(slug)
            result.published_paths.append(output_path)
            log.info("Note published: %s.md", slug)

        return result

    def build_output(self, note: Note) -> str:
        """Build the published text of a note.

        Args:
            note: Resolved, publishable note

        Returns:
            The processed body, preceded by a YAML frontmatter block when
            include_frontmatter is set
        """
        body = note.processed_body or ""
        if not self.include_frontmatter:
            return body

        frontmatter = self.frontmatter_transform(note.frontmatter.to_dict(), note)
        if not frontmatter:
            return body

        frontmatter_str = yaml.dump(
            frontmatter,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )
        return f"---\n{frontmatter_str}---\n{body}"

    def _prepare_destination(self) -> None:
        if self.clean_destination:
            prepare_dest_directory(self.blog_dir)
            return
        try:
            self.blog_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Failed to create {self.blog_dir}: {e}") from e


def publish_notes(
    source_dir: Union[str, Path],
    blog_dir: Union[str, Path],
    backup_dir: Optional[Union[str, Path]] = None,
    link_transform: Optional[LinkTransform] = None,
    include_frontmatter: bool = False,
    frontmatter_transform: Optional[FrontmatterTransform] = None,
    clean_destination: bool = False,
    dry_run: bool = False,
    match: Optional[MatchPattern] = MARKDOWN_PATTERN,
    on_create: Optional[NoteObserver] = None,
) -> PublishResult:
    """Run the whole pipeline: backup, build, resolve, publish.

    When a backup directory is given, the backup is taken before anything
    else and a failure stops the run before any note is written.

    Raises:
        BackupError: If the backup cannot be created
        DiscoveryError: If the source directory cannot be scanned
        SlugCollisionError: If two publishable notes share a slug
        PublishError: If writing a note fails
    """
    backup_path = None
    if backup_dir is not None and not dry_run:
        backup_path = create_backup(source_dir, blog_dir, backup_dir)

    catalog = NotesCatalog.build(source_dir, match=match, on_create=on_create)
    catalog.resolve_all(link_transform=link_transform)

    publisher = Publisher(
        blog_dir,
        include_frontmatter=include_frontmatter,
        frontmatter_transform=frontmatter_transform,
        clean_destination=clean_destination,
        dry_run=dry_run,
    )
    result = publisher.publish(catalog.notes)
    result.backup_dir = backup_path

    log.info(
        "Published %d notes to %s (%d skipped, %d failed)",
        result.published_count, publisher.blog_dir,
        len(result.skipped), len(result.failures),
    )
    return result


def publish_from_config(
    config: "Config",
    backup: bool = True,
    clean_destination: bool = False,
    dry_run: bool = False,
) -> PublishResult:
    """Run the pipeline with the directories and options of a configuration."""
    config.validate()
    return publish_notes(
        config.source_dir,
        config.blog_dir,
        backup_dir=config.backup_dir if backup else None,
        link_transform=get_link_transform(config.link_style, config.link_prefix),
        include_frontmatter=config.include_frontmatter,
        frontmatter_transform=get_frontmatter_transform(config.frontmatter_style, config.author),
        clean_destination=clean_destination,
        dry_run=dry_run,
    )
