"""Flat-file byte store for serialized events.

The store knows nothing about the record format: it reads a whole file into
bytes and writes bytes back. Writes go to a sibling temp file which is then
renamed over the target, so a failed save never leaves a half-written file.
"""
from pathlib import Path

from loguru import logger

logger = logger.bind(module="scheduler.store")


class EventFileStore:
    """Byte-level source and sink for one data file."""

    def __init__(self, path: str | Path):
        """Initialize store.

        Args:
            path: File to read from and write to
        """
        self.path = Path(path).expanduser()

    def read_bytes(self) -> bytes:
        """Read the whole file.

        Raises:
            OSError: the file cannot be opened or read
        """
        with open(self.path, "rb") as f:
            data = f.read()
        logger.debug(f"Read {len(data)} bytes from {self.path}")
        return data

    def write_bytes(self, data: bytes) -> None:
        """Replace the file contents (atomic).

        Raises:
            OSError: the directory or file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(temp_path, "wb") as f:
                f.write(data)
            temp_path.replace(self.path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Wrote {len(data)} bytes to {self.path}")
