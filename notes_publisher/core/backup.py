"""Backups of the source and blog directories taken before publishing."""

import datetime
import logging
import shutil
import uuid
from pathlib import Path
from typing import Union

from notes_publisher.core.models import BackupError, FilesystemError

log = logging.getLogger(__name__)


def create_backup(
    source_dir: Union[str, Path],
    destination_dir: Union[str, Path],
    backup_dir: Union[str, Path],
) -> Path:
    """Copy both the source and the destination directories into a fresh backup.

    The backup is written to ``<backup_dir>/<YYYY-MM-DD>/<unique id>/`` with a
    ``source`` and a ``destination`` subdirectory. A destination that does not
    exist yet is backed up as an empty directory.

    Args:
        source_dir: Notes directory
        destination_dir: Blog directory
        backup_dir: Root of all backups

    Returns:
        The unique backup directory

    Raises:
        BackupError: If anything goes wrong; publication must not proceed
    """
    source = Path(source_dir)
    destination = Path(destination_dir)
    unique_backup_dir = (
        Path(backup_dir)
        / datetime.date.today().isoformat()
        / uuid.uuid4().hex
    )

    try:
        if not source.is_dir():
            raise FileNotFoundError(f"Source directory not found: {source}")
        unique_backup_dir.mkdir(parents=True)
        shutil.copytree(source, unique_backup_dir / "source")
        if destination.exists():
            shutil.copytree(destination, unique_backup_dir / "destination")
        else:
            (unique_backup_dir / "destination").mkdir()
    except OSError as e:
        log.error("Failed to prepare backup: %s", e)
        raise BackupError(f"Failed to prepare backup in {unique_backup_dir}: {e}") from e

    log.info("Backup successful. Backup directory: %s", unique_backup_dir)
    return unique_backup_dir


def prepare_dest_directory(dir_path: Union[str, Path]) -> Path:
    """Empty a directory of all its content, or create it.

    Raises:
        FilesystemError: If the directory cannot be emptied or created
    """
    path = Path(dir_path)
    try:
        if path.is_dir():
            for child in path.iterdir():
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        else:
            path.mkdir(parents=True)
    except OSError as e:
        raise FilesystemError(f"Failed to prepare {path}: {e}") from e
    return path
