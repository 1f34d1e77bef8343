"""Decoder constructors, one per compressed format.

Each takes the raw, buffered, binary file handle and returns a file-like
decoder reading from it. Decoders never close the raw handle themselves.
"""

import bz2
import gzip
import io
import lzma
import struct
import zlib

import zstandard

from . import DecodeInitError
from .formats import Format

_GZIP_HEADER_SIZE = 10
_GZIP_MAGIC = b"\x1f\x8b"
_GZIP_METHOD_DEFLATE = 8
_GZIP_RESERVED_FLAGS = 0xE0
_GZIP_FHCRC = 0x02
_GZIP_FEXTRA = 0x04
_GZIP_FNAME = 0x08
_GZIP_FCOMMENT = 0x10

_XZ_HEADER_SIZE = 12
_XZ_MAGIC = b"\xfd7zXZ\x00"


class _Replay(io.RawIOBase):
    """Raw stream yielding ``prefix`` and then the rest of ``raw``.

    Closing it leaves ``raw`` open.
    """

    def __init__(self, prefix: bytes, raw):
        super().__init__()
        self._prefix = memoryview(prefix)
        self._raw = raw

    def readable(self) -> bool:
        return True

    def readinto(self, buf) -> int:
        if self._prefix:
            n = min(len(buf), len(self._prefix))
            buf[:n] = self._prefix[:n]
            self._prefix = self._prefix[n:]
            return n
        return self._raw.readinto(buf)


class _HeaderReader:
    """Consumes a stream header from ``raw``, keeping every byte read.

    Reads block until the requested bytes arrive, so slow pipes are handled.
    """

    def __init__(self, raw, format_name: str):
        self._raw = raw
        self.format_name = format_name
        self.consumed = bytearray()

    def read(self, size: int) -> bytes:
        chunk = bytearray()
        while len(chunk) < size:
            try:
                data = self._raw.read(size - len(chunk))
            except OSError as e:
                raise DecodeInitError(f"Unable to read {self.format_name} header: {e}") from e
            if not data:
                self.consumed += chunk
                raise DecodeInitError(f"Truncated {self.format_name} header after {len(self.consumed)} bytes.")
            chunk += data
        self.consumed += chunk
        return bytes(chunk)

    def skip_string(self):
        """Skip a NUL-terminated field."""
        while self.read(1) != b"\x00":
            pass

    def replay(self):
        """Buffered stream over the consumed header followed by the rest of the data."""
        return io.BufferedReader(_Replay(bytes(self.consumed), self._raw))


def check_gzip_header(header: _HeaderReader):
    fixed = header.read(_GZIP_HEADER_SIZE)
    if fixed[:2] != _GZIP_MAGIC:
        raise DecodeInitError(f"Not a gzip file (magic {fixed[:2].hex()}).")
    if fixed[2] != _GZIP_METHOD_DEFLATE:
        raise DecodeInitError(f"Unknown gzip compression method {fixed[2]}.")
    flags = fixed[3]
    if flags & _GZIP_RESERVED_FLAGS:
        raise DecodeInitError("Reserved gzip header flags are set.")

    if flags & _GZIP_FEXTRA:
        (extra_size,) = struct.unpack("<H", header.read(2))
        header.read(extra_size)
    if flags & _GZIP_FNAME:
        header.skip_string()
    if flags & _GZIP_FCOMMENT:
        header.skip_string()
    if flags & _GZIP_FHCRC:
        expected = zlib.crc32(header.consumed) & 0xFFFF
        (crc,) = struct.unpack("<H", header.read(2))
        if crc != expected:
            raise DecodeInitError("gzip header CRC16 mismatch.")


def check_xz_header(header: _HeaderReader):
    fixed = header.read(_XZ_HEADER_SIZE)
    if fixed[:6] != _XZ_MAGIC:
        raise DecodeInitError(f"Not an xz file (magic {fixed[:6].hex()}).")
    flags = fixed[6:8]
    if flags[0] or flags[1] & 0xF0:
        raise DecodeInitError("Reserved xz stream flags are set.")
    (crc,) = struct.unpack("<I", fixed[8:12])
    if zlib.crc32(flags) != crc:
        raise DecodeInitError("xz stream header CRC32 mismatch.")


def open_zstd(raw):
    try:
        return zstandard.ZstdDecompressor().stream_reader(raw, read_across_frames=True, closefd=False)
    except zstandard.ZstdError as e:
        raise DecodeInitError(f"Unable to create zstd decoder: {e}") from e


def open_xz(raw):
    header = _HeaderReader(raw, "xz")
    check_xz_header(header)
    return lzma.LZMAFile(header.replay(), mode="rb", format=lzma.FORMAT_XZ)


def open_gzip(raw):
    header = _HeaderReader(raw, "gzip")
    check_gzip_header(header)
    return gzip.GzipFile(fileobj=header.replay(), mode="rb")


def open_bzip2(raw):
    # bzip2 data is only validated once reading starts.
    return bz2.BZ2File(raw, mode="rb")


DECODERS = {
    Format.ZSTD: open_zstd,
    Format.XZ: open_xz,
    Format.GZIP: open_gzip,
    Format.BZIP2: open_bzip2,
}
