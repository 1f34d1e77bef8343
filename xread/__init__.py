import io

__version__ = "0.1.0"

STDIN = "-"


class Error(OSError):
    """Base class for every error raised by xread."""


class FileOpenError(Error):
    """The underlying file could not be opened."""


class DecodeInitError(Error):
    """File contents do not start with a valid header for the format implied by its name."""


class ReadError(Error):
    """Compressed data was corrupt or truncated, or the underlying read failed."""


class CloseError(Error):
    """One or more owned resources failed to close.

    Every failure is kept, in the order the resources were released.
    """

    def __init__(self, errors):
        self.errors = tuple(errors)
        super().__init__("; ".join(f"{type(e).__name__}: {e}" for e in self.errors))


from .formats import Format, detect_format
from .stream import Closers, UnifiedStream
from .opener import open_stream

_READ_MODES = ("r", "rt", "tr", "rb", "br")


def open(identifier, mode="rb", *, encoding=None, errors=None, newline=None):
    """Open a file, or ``"-"`` for stdin, decompressing it based on its suffix.

    Parameters
    ----------
    identifier: Union[str, os.PathLike]
        Path to open. Names ending in ``.zst``, ``.xz``, ``.gz`` or ``.bz2``
        are decompressed; anything else is read as-is.
    mode: str
        ``"rb"`` (default) for a :class:`UnifiedStream`; ``"r"``/``"rt"``
        for text.
    encoding, errors, newline: Optional[str]
        Passed to :class:`io.TextIOWrapper` in text mode.

    Returns
    -------
    Union[UnifiedStream, io.TextIOWrapper]
    """
    if mode not in _READ_MODES:
        raise ValueError(f"Unsupported mode {mode!r}; xread only reads.")

    stream = open_stream(identifier)
    if "b" in mode:
        return stream

    try:
        return io.TextIOWrapper(io.BufferedReader(stream), encoding=encoding, errors=errors, newline=newline)
    except BaseException:
        stream.discard()
        raise
