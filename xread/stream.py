import io
import logging
import lzma
import zlib
from contextlib import contextmanager
from typing import Callable, List, Optional

import zstandard

from . import CloseError, Error, ReadError

log = logging.getLogger(__name__)

# Everything a decoder or a raw file may raise while reading.
_READ_FAILURES = (OSError, EOFError, lzma.LZMAError, zlib.error, zstandard.ZstdError)


class Closers:
    """Ownership stack of release callbacks.

    Callbacks are pushed as resources are acquired and run last-in first-out.
    """

    def __init__(self):
        self._callbacks: List[Callable[[], object]] = []

    def push(self, callback: Callable[[], object]) -> Callable[[], object]:
        self._callbacks.append(callback)
        return callback

    def close(self):
        """Run every callback, even after failures.

        Raises
        ------
        CloseError
            If any callback raised; carries all of the failures.
        """
        errors = []
        while self._callbacks:
            callback = self._callbacks.pop()
            try:
                callback()
            except Exception as e:
                errors.append(e)
        if errors:
            raise CloseError(errors)

    def discard(self):
        """Run every callback, logging rather than raising failures."""
        try:
            self.close()
        except CloseError as e:
            for error in e.errors:
                log.debug("Ignoring error during cleanup: %r", error)

    def __len__(self):
        return len(self._callbacks)


class UnifiedStream(io.RawIOBase):
    """Readable byte stream that owns a chain of decoder and file handles.

    Can be used as a context manager:

    .. code-block:: python

        with xread.open("access.log.gz") as f:
            data = f.read()
    """

    def __init__(self, reader, closers: Optional[Closers] = None, *, name: Optional[str] = None):
        """
        Parameters
        ----------
        reader: file-like
            Object to delegate reads to; the outermost decoder layer, or the raw file.
        closers: Optional[Closers]
            Release actions for every owned layer. ``None`` for a stream that owns nothing.
        name: Optional[str]
            Identifier the stream was opened from.
        """
        super().__init__()
        self._reader = reader
        self._closers = Closers() if closers is None else closers
        self.name = name

    @contextmanager
    def _reading(self):
        if self.closed:
            raise ValueError("I/O operation on closed file.")
        try:
            yield
        except Error:
            raise
        except _READ_FAILURES as e:
            raise ReadError(f"Error reading {self.name}: {e}") from e

    def readable(self) -> bool:
        return True

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to ``size`` decompressed bytes; all remaining bytes if negative."""
        if size is None:
            size = -1
        with self._reading():
            return self._reader.read(size)

    def readall(self) -> bytes:
        return self.read(-1)

    def readinto(self, buf) -> int:
        """Decompress data into provided buffer.

        Returns
        -------
        int
            Number of bytes written into ``buf``; ``0`` at end of stream.
        """
        with self._reading():
            return self._reader.readinto(buf)

    def close(self):
        """Release every owned layer, outermost first.

        Raises
        ------
        CloseError
            If any layer failed to close. The stream is closed regardless.
        """
        if self.closed:
            return
        try:
            self._closers.close()
        finally:
            super().close()

    def discard(self):
        """Close every owned layer, logging rather than raising failures."""
        if self.closed:
            return
        try:
            self._closers.discard()
        finally:
            super().close()

    def __repr__(self):
        return f"<{type(self).__name__} name={self.name!r} closed={self.closed}>"
