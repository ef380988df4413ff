"""
Flat File Storage Implementation

DESIGN DECISION: A plain text file, one record per line, is the storage
backend because:
1. The user can open and read their data in any editor
2. No database setup required
3. The data set is one person's history, small enough to rewrite whole

TRADEOFFS:
- Every save rewrites the entire file (no append-only log)
- No file locking: a second process writing the same file wins silently
"""

from pathlib import Path
from typing import Iterable, Iterator, Union

from expense_tracker.services.storage.interface import (
    StorageReadError,
    StorageWriteError,
    TransactionStorageInterface,
)


class FlatFileStorage(TransactionStorageInterface):
    """Stores encoded transactions in a single newline-delimited file."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.is_file()

    def read_lines(self) -> Iterator[str]:
        """
        Yield lines as text.

        Bytes that are not valid in the file encoding are kept as lone
        surrogates, so only the line holding them fails to decode.
        """
        if not self.exists():
            return
        try:
            with open(
                self._path, "r",
                encoding=self._encoding,
                errors="surrogateescape",
                newline="",
            ) as f:
                for line in f:
                    yield line.rstrip("\r\n")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read transactions from {self._path}: {e}")

    def write_lines(self, lines: Iterable[str]) -> int:
        count = 0
        try:
            with open(self._path, "w", encoding=self._encoding, newline="\n") as f:
                for line in lines:
                    f.write(line)
                    f.write("\n")
                    count += 1
        except (OSError, UnicodeEncodeError) as e:
            raise StorageWriteError(self._path, e) from e
        return count
