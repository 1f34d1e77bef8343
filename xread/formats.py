import enum
import re


class Format(enum.Enum):
    NONE = ""
    ZSTD = ".zst"
    XZ = ".xz"
    GZIP = ".gz"
    BZIP2 = ".bz2"


# Ordered; the empty alternative makes every string match. The prefix is lazy so
# a real suffix wins over the empty one.
_SUFFIX_PATTERN = re.compile(r".*?(\.zst|\.xz|\.gz|\.bz2|)", re.DOTALL)


def detect_format(identifier: str) -> Format:
    """Map an identifier to the compression format its suffix names.

    The full identifier is matched, not just the basename, so ``"logs.gz/today"``
    is a plain file.

    Parameters
    ----------
    identifier: str
        Filename or path.

    Returns
    -------
    Format
        ``Format.NONE`` if no recognized suffix is present.
    """
    return Format(_SUFFIX_PATTERN.fullmatch(identifier).group(1))
