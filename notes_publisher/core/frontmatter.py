"""Frontmatter parsing and validation.

A note starts with a YAML block delimited by two ``---`` lines::

    ---
    title: Hello World
    slug: hello-world
    status: publish
    tags:
      - hello
    created_at: 2023-01-01 12:00
    last_modified_at: 2023-01-01 18:00
    ---
    Body text...

Anything that does not fit this shape degrades to "no frontmatter": the
parser never raises.
"""

import datetime
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import yaml

log = logging.getLogger(__name__)

# Opening delimiter on the first line, closing delimiter on its own line
FRONTMATTER_PATTERN = re.compile(
    r'\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)',
    re.DOTALL | re.MULTILINE,
)

KNOWN_KEYS = ('title', 'slug', 'status', 'tags', 'created_at', 'last_modified_at')

_WHITESPACE_RUN = re.compile(r'\s+')


class NoteStatus:
    """Known values of the frontmatter ``status`` field.

    Status is an open set; only ``publish`` makes a note publishable.
    """
    PUBLISH = "publish"
    DRAFT = "draft"


class FrontmatterError(ValueError):
    """The metadata block does not match the frontmatter schema."""


@dataclass
class Frontmatter:
    """Validated metadata block of a note."""
    title: str
    slug: str
    status: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    created_at: Optional[datetime.datetime] = None
    last_modified_at: Optional[datetime.datetime] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_published(self) -> bool:
        return self.status == NoteStatus.PUBLISH

    def to_dict(self) -> Dict[str, Any]:
        """Mapping suitable for ``yaml.dump``; unset optional fields are omitted."""
        result: Dict[str, Any] = dict(self.extra)
        result['title'] = self.title
        result['slug'] = self.slug
        if self.status is not None:
            result['status'] = self.status
        result['tags'] = list(self.tags)
        if self.created_at is not None:
            result['created_at'] = self.created_at
        if self.last_modified_at is not None:
            result['last_modified_at'] = self.last_modified_at
        return result


def derive_slug(title: str) -> str:
    """Lowercase the title and replace each whitespace run with a hyphen."""
    return _WHITESPACE_RUN.sub('-', title.lower())


def split_frontmatter(raw: str) -> Tuple[Optional[str], str]:
    """Split the leading metadata block from the body.

    Args:
        raw: Full file content

    Returns:
        Tuple of (YAML text or None, body). Without a block the body is the
        unchanged raw text.
    """
    match = FRONTMATTER_PATTERN.match(raw)
    if not match:
        return None, raw
    return match.group(1), raw[match.end():]


def parse_frontmatter(raw: str) -> Tuple[Optional[Frontmatter], str]:
    """Parse and validate the frontmatter of a note.

    Args:
        raw: Full file content

    Returns:
        Tuple of (Frontmatter, body) on success, (None, raw) otherwise
    """
    block, body = split_frontmatter(raw)
    if block is None:
        return None, raw

    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        log.debug("Invalid YAML in frontmatter: %s", e)
        return None, raw

    if not isinstance(data, dict):
        log.debug("Frontmatter is not a mapping")
        return None, raw

    try:
        frontmatter = validate_frontmatter(data)
    except FrontmatterError as e:
        log.debug("Frontmatter rejected: %s", e)
        return None, raw

    return frontmatter, body


def validate_frontmatter(data: Dict[str, Any]) -> Frontmatter:
    """Check a parsed mapping against the frontmatter schema.

    Raises:
        FrontmatterError: If a field is missing or has the wrong type
    """
    title = data.get('title')
    if not isinstance(title, str) or not title.strip():
        raise FrontmatterError("'title' must be a non-empty string")

    slug = data.get('slug')
    if slug is None:
        slug = derive_slug(title)
    elif not isinstance(slug, str) or not slug.strip():
        raise FrontmatterError("'slug' must be a non-empty string")

    status = data.get('status')
    if status is not None and not isinstance(status, str):
        raise FrontmatterError("'status' must be a string")

    return Frontmatter(
        title=title,
        slug=slug,
        status=status,
        tags=_extract_tags(data.get('tags')),
        created_at=_parse_timestamp('created_at', data.get('created_at')),
        last_modified_at=_parse_timestamp('last_modified_at', data.get('last_modified_at')),
        extra={str(k): v for k, v in data.items() if k not in KNOWN_KEYS},
    )


def _extract_tags(tag_data: Any) -> List[str]:
    """Extract tags, accepting both list and string formats."""
    if tag_data is None:
        return []

    if isinstance(tag_data, str):
        return [tag_data]

    if isinstance(tag_data, list):
        tags = []
        for tag in tag_data:
            if isinstance(tag, (dict, list)) or tag is None:
                raise FrontmatterError(f"Invalid tag: {tag!r}")
            tags.append(str(tag))
        return tags

    raise FrontmatterError("'tags' must be a list of strings")


def _parse_timestamp(key: str, value: Any) -> Optional[datetime.datetime]:
    """Convert the date formats YAML can produce to a datetime.

    Args:
        key: Field name, for error messages
        value: str, datetime, date or None

    Returns:
        datetime or None when the field is absent
    """
    if value is None:
        return None

    if isinstance(value, datetime.datetime):
        return value

    if isinstance(value, datetime.date):
        return datetime.datetime(value.year, value.month, value.day)

    if isinstance(value, str):
        try:
            return datetime.datetime.fromisoformat(value.strip())
        except ValueError:
            raise FrontmatterError(f"'{key}' is not a valid timestamp: {value!r}")

    raise FrontmatterError(f"'{key}' must be a timestamp")
