"""
Local-header walker for archives produced by the ZIP writer.

Only lists what is inside: it hops from one local file header to the next
using the name length, extra length and compressed size fields, and stops
at the first signature that is not a local header (normally the start of
the central directory). The central directory itself is never read.
"""

import struct
from pathlib import Path
from typing import Iterator

from .zip_writer import LOCAL_FILE_HEADER_SIGNATURE, LOCAL_FILE_HEADER_SIZE


def read_u16(data: bytes, offset: int) -> int:
    return struct.unpack_from("<H", data, offset)[0]


def read_u32(data: bytes, offset: int) -> int:
    return struct.unpack_from("<I", data, offset)[0]


def entries(data: bytes) -> Iterator[tuple[str, int]]:
    """Yield ``(file_name, compressed_size)`` for each local header."""
    offset = 0

    while offset + LOCAL_FILE_HEADER_SIZE <= len(data):
        if read_u32(data, offset) != LOCAL_FILE_HEADER_SIGNATURE:
            break

        compressed_size = read_u32(data, offset + 18)
        name_length = read_u16(data, offset + 26)
        extra_length = read_u16(data, offset + 28)

        name_start = offset + LOCAL_FILE_HEADER_SIZE
        name_end = name_start + name_length
        if name_end > len(data):
            break

        try:
            name = data[name_start:name_end].decode("utf-8")
        except UnicodeDecodeError:
            name = None
        if name is not None:
            yield name, compressed_size

        offset = name_end + extra_length + compressed_size


def file_names(data: bytes) -> list[str]:
    """Names of all entries found by walking the local headers."""
    return [name for name, _ in entries(data)]


def file_names_at(path: Path) -> list[str]:
    """Read an archive from disk and list its entry names."""
    return file_names(Path(path).read_bytes())
