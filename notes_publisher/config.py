"""Configuration management for Notes Publisher.

The configuration stores the three directories the tool works with (notes
source, blog destination, backups) plus publishing options. It lives in a
YAML file, by default ``~/.config/notes-publisher/config.yaml``; the
``NOTES_PUBLISHER_CONFIG`` environment variable points to another file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from notes_publisher.transforms.frontmatter import FRONTMATTER_STYLES
from notes_publisher.transforms.links import LINK_STYLES

CONFIG_ENV_VAR = "NOTES_PUBLISHER_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/notes-publisher/config.yaml")


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    pass


@dataclass
class Config:
    """Directories and options of a publishing run."""
    source_dir: Path
    blog_dir: Path
    backup_dir: Optional[Path] = None
    include_frontmatter: bool = False
    link_style: str = "relative"
    link_prefix: str = ""
    frontmatter_style: str = "identity"
    author: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a Config from a parsed YAML mapping.

        Raises:
            ConfigurationError: If a directory is missing or a value has the wrong type
        """
        missing = [key for key in ('source_dir', 'blog_dir') if not data.get(key)]
        if missing:
            raise ConfigurationError(f"Missing configuration keys: {', '.join(missing)}")

        backup = data.get('backup_dir')
        author = data.get('author')
        include_frontmatter = data.get('include_frontmatter', False)
        if not isinstance(include_frontmatter, bool):
            raise ConfigurationError("'include_frontmatter' must be true or false")

        return cls(
            source_dir=Path(str(data['source_dir'])).expanduser(),
            blog_dir=Path(str(data['blog_dir'])).expanduser(),
            backup_dir=Path(str(backup)).expanduser() if backup else None,
            include_frontmatter=include_frontmatter,
            link_style=str(data.get('link_style', "relative")),
            link_prefix=str(data.get('link_prefix', "")),
            frontmatter_style=str(data.get('frontmatter_style', "identity")),
            author=str(author) if author else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source_dir': str(self.source_dir),
            'blog_dir': str(self.blog_dir),
            'backup_dir': str(self.backup_dir) if self.backup_dir else None,
            'include_frontmatter': self.include_frontmatter,
            'link_style': self.link_style,
            'link_prefix': self.link_prefix,
            'frontmatter_style': self.frontmatter_style,
            'author': self.author,
        }

    def validate(self) -> None:
        """Check that the configuration can be used for publishing.

        None of the source, blog and backup directories may contain another.

        Raises:
            ConfigurationError: If a directory is unusable or an option is unknown
        """
        if not self.source_dir.is_dir():
            raise ConfigurationError(f"Source directory not found: {self.source_dir}")
        if self.blog_dir.exists() and not self.blog_dir.is_dir():
            raise ConfigurationError(f"Blog path is not a directory: {self.blog_dir}")
        if self.source_dir.resolve() == self.blog_dir.resolve():
            raise ConfigurationError("Source and blog directories must differ")
        if _is_inside(self.blog_dir, self.source_dir) or _is_inside(self.source_dir, self.blog_dir):
            raise ConfigurationError("Source and blog directories must not contain each other")
        if self.backup_dir is not None:
            if self.backup_dir.exists() and not self.backup_dir.is_dir():
                raise ConfigurationError(f"Backup path is not a directory: {self.backup_dir}")
            for name, directory in (("source", self.source_dir), ("blog", self.blog_dir)):
                if _is_inside(self.backup_dir, directory) or _is_inside(directory, self.backup_dir):
                    raise ConfigurationError(
                        f"Backup directory and {name} directory must not contain each other: {self.backup_dir}"
                    )
        if self.link_style not in LINK_STYLES:
            known = ', '.join(sorted(LINK_STYLES))
            raise ConfigurationError(f"Unknown link style '{self.link_style}' (expected one of: {known})")
        if self.frontmatter_style not in FRONTMATTER_STYLES:
            known = ', '.join(sorted(FRONTMATTER_STYLES))
            raise ConfigurationError(
                f"Unknown frontmatter style '{self.frontmatter_style}' (expected one of: {known})"
            )


def _is_inside(path: Path, directory: Path) -> bool:
    """True when ``path`` is ``directory`` or one of its descendants."""
    path = path.expanduser().resolve()
    directory = directory.expanduser().resolve()
    return path == directory or directory in path.parents


def config_path() -> Path:
    """Location of the configuration file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Load the stored configuration.

    Args:
        path: Configuration file (default: config_path())

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    file_path = Path(path) if path else config_path()
    if not file_path.exists():
        raise ConfigurationError(
            f"No configuration found at {file_path}. "
            "Run 'notes-publisher init' or pass --source and --blog."
        )

    try:
        data = yaml.safe_load(file_path.read_text(encoding='utf-8'))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read configuration {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration {file_path} must be a mapping")

    return Config.from_dict(data)


def save_config(config: Config, path: Optional[Union[str, Path]] = None) -> Path:
    """Write a configuration to disk, creating parent directories.

    Returns:
        The path written to

    Raises:
        ConfigurationError: If the file cannot be written
    """
    file_path = Path(path) if path else config_path()
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(
            yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False),
            encoding='utf-8',
        )
    except OSError as e:
        raise ConfigurationError(f"Failed to write configuration {file_path}: {e}") from e
    return file_path
