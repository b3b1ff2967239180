"""Local filesystem access used by post storage.

Reads keep the file's own line endings so bodies survive a round trip
untouched; writes go through a temporary file and an atomic rename.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """Whole-file read, write and listing on the local disk."""

    encoding = "utf-8"

    def list_files(self, directory: Path, pattern: str) -> list[Path]:
        """Return the files in ``directory`` matching a glob ``pattern``.

        A missing directory is treated as empty.
        """
        if not directory.is_dir():
            return []
        return sorted(path for path in directory.glob(pattern) if path.is_file())

    def read_text(self, path: Path) -> str:
        with path.open("r", encoding=self.encoding, newline="") as f:
            return f.read()

    def write_text(self, path: Path, content: str) -> None:
        """Write text to a file atomically.

        Writes to a temporary file in the same directory, then renames it over
        the destination so readers never see partial content.
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, temp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding, newline="") as f:
                f.write(content)
            os.replace(temp_path, path)
        except BaseException:
            try:
                os.unlink(temp_path)
            except OSError:
                logger.debug("Could not remove temporary file %s", temp_path)
            raise

    def exists(self, path: Path) -> bool:
        return path.exists()

    def delete(self, path: Path) -> None:
        path.unlink()
