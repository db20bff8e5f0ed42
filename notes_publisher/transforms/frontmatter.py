"""Frontmatter transform factories for Notes Publisher.

These factories create transform functions that shape the frontmatter
written at the top of published notes. Frontmatter is only written when
publishing with ``include_frontmatter``.
"""

import titlecase as tc
from typing import Any, Callable, Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from notes_publisher.core.models import Note

FrontmatterTransform = Callable[[Dict[str, Any], "Note"], Dict[str, Any]]


def identity() -> FrontmatterTransform:
    """Create a pass-through transform that returns frontmatter unchanged.

    Returns:
        A transform function (frontmatter, note) -> frontmatter
    """
    def transform(fm: Dict[str, Any], note: "Note") -> Dict[str, Any]:
        return fm.copy()
    return transform


def hugo_frontmatter(author: Optional[str] = None) -> FrontmatterTransform:
    """Create a transform that produces standard Hugo frontmatter.

    Output includes: title, slug, date (last modification), doc (creation
    date), author (optional), tags. Status and unknown keys are dropped.
    Title is converted to proper title case using the titlecase library.

    Args:
        author: Author name to include in frontmatter

    Returns:
        A transform function for Hugo frontmatter
    """
    def transform(fm: Dict[str, Any], note: "Note") -> Dict[str, Any]:
        meta = note.frontmatter
        # Semicolons in titles break YAML parsing, replace with colons
        title = tc.titlecase(meta.title).replace(';', ':')
        result: Dict[str, Any] = {
            'title': title,
            'slug': meta.slug,
        }
        if meta.last_modified_at is not None:
            result['date'] = meta.last_modified_at
        if meta.created_at is not None:
            result['doc'] = meta.created_at
        if author:
            result['author'] = author
        if meta.tags:
            result['tags'] = list(meta.tags)
        return result
    return transform


FRONTMATTER_STYLES = {
    "identity": identity,
    "hugo": hugo_frontmatter,
}


def get_frontmatter_transform(style: str = "identity", author: Optional[str] = None) -> FrontmatterTransform:
    """Look up a frontmatter transform by name.

    Raises:
        ValueError: If the style is unknown
    """
    if style not in FRONTMATTER_STYLES:
        known = ', '.join(sorted(FRONTMATTER_STYLES))
        raise ValueError(f"Unknown frontmatter style '{style}' (expected one of: {known})")
    if style == "hugo":
        return hugo_frontmatter(author)
    return FRONTMATTER_STYLES[style]()
