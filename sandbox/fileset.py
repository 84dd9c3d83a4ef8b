from pathlib import Path
from typing import Tuple, Union

from .exceptions import InvalidRoot
from .utils import get_logger

log = get_logger("sandbox.fileset")

FileSet = Tuple[str, ...]


def resolve(root: Union[str, Path], pattern: str) -> FileSet:
    """
    Returns every regular file under root matching a glob pattern.

    Paths are POSIX-style, relative to root and sorted lexicographically.
    `**/` matches zero or more directories, so `**/*.md` also matches
    files at the top level. Hidden directories are not skipped.
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise InvalidRoot(root)

    matches = sorted(
        p.relative_to(root_path).as_posix()
        for p in root_path.glob(pattern)
        if p.is_file()
    )

    log.debug(f"{pattern}: {len(matches)} file(s) under {root_path}")
    return tuple(matches)
