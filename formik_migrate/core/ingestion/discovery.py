"""Source file discovery.

Walks a project directory and collects the files the analyzer should
look at. Ignored directories are pruned during the walk, not filtered
afterwards, so ``node_modules`` is never traversed.
"""

import logging
import os
from typing import Iterable, List, Optional

from ..ast_parser import DEFAULT_EXTENSIONS, SKIP_DIRECTORIES, should_skip_directory

logger = logging.getLogger(__name__)


def discover_files(
    root_dir: str,
    extensions: Optional[Iterable[str]] = None,
    skip_directories: Optional[Iterable[str]] = None,
) -> List[str]:
    """Walk directory tree and collect source files.

    Args:
        root_dir: Directory to scan
        extensions: Extensions to include (default ``.js .jsx .ts .tsx``)
        skip_directories: Directory names to prune (dot-directories are
            always pruned)

    Returns:
        Sorted absolute paths of matching files
    """
    wanted = {ext.lower() for ext in (extensions or DEFAULT_EXTENSIONS)}
    skipped = frozenset(skip_directories) if skip_directories is not None else SKIP_DIRECTORIES
    root_dir = os.path.abspath(root_dir)

    if not os.path.isdir(root_dir):
        logger.warning(f"Directory does not exist: {root_dir}")
        return []

    files = []
    for dirpath, dirnames, filenames in os.walk(root_dir):
        dirnames[:] = [d for d in dirnames if not should_skip_directory(d, skipped)]

        for fname in filenames:
            _, ext = os.path.splitext(fname)
            if ext.lower() in wanted:
                files.append(os.path.join(dirpath, fname))

    files.sort()
    logger.info(f"Discovered {len(files)} source files under {root_dir}")
    return files
