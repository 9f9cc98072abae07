"""Source file discovery."""
import logging
import os
from pathlib import Path
from typing import List

from ..config import AuditConfig
from ..errors import RootNotFound
from ..models import FileRecord

logger = logging.getLogger(__name__)


class FileCollector:
    """Enumerate candidate source files under the configured source root."""

    def __init__(self, config: AuditConfig):
        """Initialize file collector.

        Args:
            config: Audit settings (source root, extensions, excluded directories)
        """
        self.root = config.source_root
        self.extensions = {ext.lower() for ext in config.extensions}
        self.exclude_dirs = set(config.exclude_dirs)

    def collect(self) -> List[FileRecord]:
        """Walk the source root and return every matching file.

        Excluded directories are pruned before descending, so nothing below
        them is ever visited.

        Returns:
            FileRecords sorted by relative path

        Raises:
            RootNotFound: If the source root is missing or not a directory
        """
        if not self.root.is_dir():
            logger.error("Source root not found: %s", self.root)
            raise RootNotFound(self.root)

        root = self.root.resolve()
        records: List[FileRecord] = []

        for dirpath, dirnames, filenames in os.walk(root, onerror=self._on_walk_error):
            dirnames[:] = [d for d in dirnames if d not in self.exclude_dirs]
            for name in filenames:
                if Path(name).suffix.lower() not in self.extensions:
                    continue
                full_path = Path(dirpath) / name
                try:
                    size = full_path.stat().st_size
                except OSError as e:
                    logger.warning("Skipping %s: %s", full_path, e)
                    continue
                records.append(FileRecord(
                    absolute_path=full_path,
                    relative_path=full_path.relative_to(root).as_posix(),
                    byte_size=size,
                ))

        records.sort(key=lambda r: r.relative_path)
        logger.debug("Collected %d source files under %s", len(records), root)
        return records

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        # Files below an unlistable directory are never collected
        logger.warning("Skipping unreadable directory %s: %s", error.filename, error)
