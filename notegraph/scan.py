"""Find the markdown documents that make up a notes corpus."""

import logging
from pathlib import Path

from .config import EXCLUDE_DIRS

logger = logging.getLogger(__name__)


def find_markdown_files(root, exclude_dirs=EXCLUDE_DIRS):
    """Recursively collect markdown files under root.

    Directories named in exclude_dirs are skipped entirely, as are files
    whose name starts with an underscore. Entries are visited in lexical
    order so repeated scans return the same list. A directory reached
    twice through symlinks is only scanned the first time.

    Returns:
        List of Path objects.
    """
    root = Path(root)
    excluded = set(exclude_dirs)
    files = []
    visited = set()

    def scan_dir(current):
        real = current.resolve()
        if real in visited:
            logger.debug("Skipping already scanned directory %s", current)
            return
        visited.add(real)

        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning("Could not read directory %s: %s", current, e)
            return

        for entry in entries:
            if entry.is_dir():
                if entry.name not in excluded:
                    scan_dir(entry)
            elif entry.name.endswith(".md") and not entry.name.startswith("_"):
                files.append(entry)

    if not root.is_dir():
        logger.warning("Corpus directory %s does not exist", root)
        return files

    scan_dir(root)
    return files
