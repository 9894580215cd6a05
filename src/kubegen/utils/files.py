"""File helpers used while writing artifacts."""

import logging
import shutil
from pathlib import Path
from typing import Union

from kubegen.constants import BALX
from kubegen.errors import ArtifactIOError


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def write_to_file(content: str, target_file_path: PathLike) -> None:
    """Write content to a file, appending if the file already exists.

    Missing parent directories are created. Existing content is never
    truncated, so regenerating into a dirty output tree concatenates.
    """
    target = Path(target_file_path)
    try:
        if target.exists():
            with target.open("a", encoding="utf-8") as f:
                f.write(content)
            logger.debug(f"Appended to {target}")
            return

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug(f"Wrote {target}")
    except OSError as e:
        raise ArtifactIOError(f"Unable to write to file {target}: {e}") from e


def read_file_content(target_file_path: PathLike) -> bytes:
    """Read the raw bytes of a file."""
    path = Path(target_file_path)
    if not path.is_file():
        raise ArtifactIOError(f"Unable to read contents of the file {path}")
    try:
        return path.read_bytes()
    except OSError as e:
        raise ArtifactIOError(f"Unable to read contents of the file {path}") from e


def copy_file(source: PathLike, destination: PathLike) -> None:
    """Copy a file, creating the destination directory if needed."""
    destination = Path(destination)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        logger.debug(f"Copied {source} to {destination}")
    except OSError as e:
        raise ArtifactIOError(f"Error while copying file {source}: {e}") from e


def delete_directory(path: PathLike) -> None:
    """Delete a directory tree if it exists."""
    directory = Path(path)
    if not directory.exists():
        return
    try:
        shutil.rmtree(directory)
        logger.debug(f"Deleted directory {directory}")
    except OSError as e:
        raise ArtifactIOError(f"Unable to delete directory: {directory}") from e


def extract_balx_name(balx_file_path: PathLike) -> str:
    """Return the artifact name: the file name without directory or .balx suffix."""
    name = Path(balx_file_path).name
    if name.endswith(BALX):
        return name[: -len(BALX)]
    return Path(name).stem
