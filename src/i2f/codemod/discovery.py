# src/i2f/codemod/discovery.py
import os
from pathlib import Path
from typing import Iterable, List

from i2f.codemod.errors import EnumerationError


def find_candidates(root: Path, suffix: str = ".component.ts", skip_dirs: Iterable[str] = ()) -> List[Path]:
    """
    Every regular file under ``root`` whose name ends with ``suffix``, sorted.

    The walk completes before anything is returned; any OS error raised while
    walking is fatal for the run.
    """
    root = Path(root)
    if not root.exists():
        raise EnumerationError(f"root directory does not exist: {root}")
    if not root.is_dir():
        raise EnumerationError(f"root is not a directory: {root}")

    skip = set(skip_dirs)

    def _fail(error: OSError):
        raise EnumerationError(f"cannot list {error.filename}: {error.strerror or error}") from error

    candidates = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_fail):
        dirnames[:] = sorted(d for d in dirnames if d not in skip)
        for filename in filenames:
            if not filename.endswith(suffix):
                continue
            path = Path(dirpath) / filename
            if path.is_symlink() or not path.is_file():
                continue
            candidates.append(path)
    return sorted(candidates)
