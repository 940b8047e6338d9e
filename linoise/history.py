"""Bounded, file-backed history of entered lines.

The store keeps the most recent lines in a fixed-size ring and persists
them to a plain text file, one entry per line. Lines typed with a leading
space are kept for recall during the session but never written to disk.
"""

import logging
import os

logger = logging.getLogger(__name__)

# Maximum entries kept when no size is given.
HISTORY_CAP = 500

# Permission bits for a newly created history file.
FILE_PERM = 0o600


class HistorySizeError(ValueError):
    """Raised when a history is requested with a non-positive size."""

    def __init__(self, size: object) -> None:
        super().__init__(f"wrong size for the history: {size!r}")
        self.size = size


class HistoryClosedError(Exception):
    """Raised when a history is used after its file was closed."""


class HistoryStore:
    """Ring buffer of lines bound to a history file.

    Usage::

        history = HistoryStore(os.path.expanduser("~/.linoise_history"))
        history.load()
        ...
        history.add(line)
        ...
        history.save()

    The file stays open from construction until ``save()`` (or ``close()``),
    which releases it exactly once.
    """

    def __init__(
        self, filename: str, capacity: int = HISTORY_CAP, *, file_perm: int = FILE_PERM
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise HistorySizeError(capacity)

        fd = os.open(filename, os.O_CREAT | os.O_RDWR, file_perm)
        # newline="" keeps '\r' inside entries; only '\n' separates records.
        # Undecodable bytes are carried through as surrogates and written back.
        self._file = os.fdopen(
            fd, "r+", encoding="utf-8", errors="surrogateescape", newline=""
        )
        self._filename = filename
        self._capacity = capacity
        self._slots: list[str | None] = [None] * capacity
        self._cursor = 0  # Next slot to write
        self._length = 0

    # --- Properties ---

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._file is None

    def __len__(self) -> int:
        return self._length

    def __iter__(self):
        return iter(self.entries())

    def __repr__(self) -> str:
        return (
            f"HistoryStore({self._filename!r}, capacity={self._capacity}, "
            f"length={self._length})"
        )

    # --- Buffer ---

    def add(self, line: str) -> None:
        """Add a line, overwriting the oldest entry once the ring is full."""
        self._slots[self._cursor] = line
        self._cursor = (self._cursor + 1) % self._capacity

        if self._length < self._capacity:
            self._length += 1

    def entries(self) -> list[str]:
        """Return the stored lines, oldest first."""
        start = (self._cursor - self._length) % self._capacity
        result = []
        for step in range(self._length):
            line = self._slots[(start + step) % self._capacity]
            if line is not None:
                result.append(line)
        return result

    # --- File ---

    def load(self) -> None:
        """Load the history file into the buffer.

        Should be called once, right after construction, so loaded lines
        end up older than anything added during the session.

        Raises:
            HistoryClosedError: If the file was already closed.
            OSError: If the file cannot be read.
        """
        file = self._require_file()
        count = 0
        while True:
            record = file.readline()
            if not record:
                break
            self.add(record.removesuffix("\n"))
            count += 1
        logger.debug("Loaded %d history lines from %s", count, self._filename)

    def save(self) -> bool:
        """Write the history back to its file and close it.

        Entries starting with a space or blank after trimming are skipped;
        the rest are written trimmed, oldest first, replacing the previous
        file content. A write error is logged and stops writing, but the
        file is closed in any case.

        Returns:
            True if every entry was written, False after a write error.

        Raises:
            HistoryClosedError: If the file was already closed.
        """
        file = self._require_file()
        ok = True
        written = 0

        try:
            file.seek(0)
            for line in self.entries():
                if line.startswith(" "):
                    continue
                line = line.strip()
                if not line:
                    continue
                file.write(line + "\n")
                written += 1
        except OSError as exc:
            logger.error("history.save: %s", exc)
            ok = False

        try:
            file.flush()
            file.truncate()
        except OSError as exc:
            logger.error("history.save: %s", exc)
            ok = False

        self.close()
        logger.debug("Saved %d history lines to %s", written, self._filename)
        return ok

    def close(self) -> None:
        """Close the history file without saving. Safe to call twice."""
        if self._file is None:
            return
        try:
            self._file.close()
        except OSError as exc:
            logger.error("history.close: %s", exc)
        finally:
            self._file = None

    def _require_file(self):
        if self._file is None:
            raise HistoryClosedError(f"history file {self._filename!r} is closed")
        return self._file
