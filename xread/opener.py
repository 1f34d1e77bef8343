import builtins
import logging
import os
import sys

from . import STDIN, FileOpenError
from .decoders import DECODERS
from .formats import Format, detect_format
from .stream import Closers, UnifiedStream

log = logging.getLogger(__name__)


def _open_raw(path: str):
    try:
        return builtins.open(path, "rb")
    except OSError as e:
        raise FileOpenError(e.errno, e.strerror, path) from e


def open_stream(identifier) -> UnifiedStream:
    """Open ``identifier`` for binary reading, decompressing by suffix.

    Parameters
    ----------
    identifier: Union[str, os.PathLike]
        Path to read, or ``"-"`` for stdin.

    Raises
    ------
    FileOpenError
        The file could not be opened.
    DecodeInitError
        The file does not start with a valid header for its suffix's format.
        The file has already been closed.
    """
    path = os.fspath(identifier)
    if path == STDIN:
        log.debug("Reading from stdin.")
        stdin = sys.stdin
        return UnifiedStream(getattr(stdin, "buffer", stdin), name="<stdin>")

    fmt = detect_format(path)
    log.debug("Opening %s as %s.", path, fmt.name)

    closers = Closers()
    raw = _open_raw(path)
    closers.push(raw.close)
    if fmt is Format.NONE:
        return UnifiedStream(raw, closers, name=path)

    try:
        decoder = DECODERS[fmt](raw)
    except BaseException:
        closers.discard()
        raise
    closers.push(decoder.close)
    return UnifiedStream(decoder, closers, name=path)
