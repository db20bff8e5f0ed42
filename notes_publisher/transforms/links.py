"""Link transform factories for Notes Publisher.

A link transform turns a resolved wikilink into Markdown link syntax.
"""

from typing import Callable

LinkTransform = Callable[[str, str], str]


def relative_link() -> LinkTransform:
    """Create a transform producing links relative to the published note.

    Returns:
        A transform function (text, slug) -> "[text](./slug)"
    """
    def transform(text: str, slug: str) -> str:
        return f"[{text}](./{slug})"
    return transform


def absolute_link(prefix: str = "") -> LinkTransform:
    """Create a transform producing site-absolute links.

    Args:
        prefix: URL path prefix, e.g. "/blog"

    Returns:
        A transform function (text, slug) -> "[text](/prefix/slug)"
    """
    clean_prefix = prefix.strip('/')

    def transform(text: str, slug: str) -> str:
        if clean_prefix:
            return f"[{text}](/{clean_prefix}/{slug})"
        return f"[{text}](/{slug})"
    return transform


def hugo_ref() -> LinkTransform:
    """Create a transform producing Hugo ``ref`` shortcodes."""
    def transform(text: str, slug: str) -> str:
        return f'[{text}]({{{{< ref "{slug}" >}}}})'
    return transform


LINK_STYLES = {
    "relative": relative_link,
    "absolute": absolute_link,
    "hugo": hugo_ref,
}


def get_link_transform(style: str = "relative", prefix: str = "") -> LinkTransform:
    """Look up a link transform by name.

    Raises:
        ValueError: If the style is unknown
    """
    if style not in LINK_STYLES:
        known = ', '.join(sorted(LINK_STYLES))
        raise ValueError(f"Unknown link style '{style}' (expected one of: {known})")
    if style == "absolute":
        return absolute_link(prefix)
    return LINK_STYLES[style]()
