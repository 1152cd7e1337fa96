"""
Minimal store-only ZIP writer.

Builds a PKZIP archive byte by byte: for every entry a local file header,
the file name and the raw payload; then one central directory record per
entry; then the end-of-central-directory record. Nothing is compressed
(method 0, "stored"), so compressed and uncompressed sizes are equal.

Layout reference (PKWARE APPNOTE.TXT):

    local file header        30 bytes + name
    central directory record 46 bytes + name
    end of central directory 22 bytes

All integers are little-endian and fixed width.

The writer does not check names for duplicates or path components such as
"../"; callers pass trusted, flat names.
"""

import logging
import struct
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable

from ..files import atomic_write_bytes
from .crc32 import crc32

logger = logging.getLogger(__name__)

LOCAL_FILE_HEADER_SIGNATURE = 0x04034B50
CENTRAL_DIR_SIGNATURE = 0x02014B50
END_OF_CENTRAL_DIR_SIGNATURE = 0x06054B50

LOCAL_FILE_HEADER_SIZE = 30
CENTRAL_DIR_RECORD_SIZE = 46
END_OF_CENTRAL_DIR_SIZE = 22

VERSION = 20  # 2.0, the minimum for plain stored files
METHOD_STORE = 0


@dataclass
class ZipEntry:
    """A flat file inside the archive."""
    file_name: str
    data: bytes
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def encoded_name(self) -> bytes:
        return self.file_name.encode("utf-8")


def pack_u16(value: int) -> bytes:
    return struct.pack("<H", value)


def pack_u32(value: int) -> bytes:
    return struct.pack("<I", value)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def dos_date_time(timestamp: datetime) -> tuple[int, int]:
    """
    Encode a timestamp as (dos_time, dos_date) in local time.

    DOS time (16 bits): hour << 11 | minute << 5 | second // 2
    DOS date (16 bits): (year - 1980) << 9 | month << 5 | day

    Years outside 1980..2107 are clamped. Seconds have 2-second resolution,
    so odd seconds round down.
    """
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone()

    year = _clamp(timestamp.year - 1980, 0, 127)
    month = _clamp(timestamp.month, 1, 12)
    day = _clamp(timestamp.day, 1, 31)
    hour = _clamp(timestamp.hour, 0, 23)
    minute = _clamp(timestamp.minute, 0, 59)
    second = _clamp(timestamp.second, 0, 59)

    dos_date = (year << 9) | (month << 5) | day
    dos_time = (hour << 11) | (minute << 5) | (second // 2)
    return dos_time, dos_date


def _local_file_header(name: bytes, crc: int, size: int, dos_time: int, dos_date: int) -> bytes:
    return b"".join([
        pack_u32(LOCAL_FILE_HEADER_SIGNATURE),
        pack_u16(VERSION),        # version needed to extract
        pack_u16(0),              # general purpose flags
        pack_u16(METHOD_STORE),
        pack_u16(dos_time),
        pack_u16(dos_date),
        pack_u32(crc),
        pack_u32(size),           # compressed size
        pack_u32(size),           # uncompressed size
        pack_u16(len(name)),
        pack_u16(0),              # extra field length
    ])


def _central_dir_record(
    name: bytes,
    crc: int,
    size: int,
    dos_time: int,
    dos_date: int,
    local_header_offset: int,
) -> bytes:
    return b"".join([
        pack_u32(CENTRAL_DIR_SIGNATURE),
        pack_u16(VERSION),        # version made by
        pack_u16(VERSION),        # version needed to extract
        pack_u16(0),              # general purpose flags
        pack_u16(METHOD_STORE),
        pack_u16(dos_time),
        pack_u16(dos_date),
        pack_u32(crc),
        pack_u32(size),
        pack_u32(size),
        pack_u16(len(name)),
        pack_u16(0),              # extra field length
        pack_u16(0),              # file comment length
        pack_u16(0),              # disk number start
        pack_u16(0),              # internal attributes
        pack_u32(0),              # external attributes
        pack_u32(local_header_offset),
    ])


def _end_of_central_dir(entry_count: int, cd_size: int, cd_offset: int) -> bytes:
    return b"".join([
        pack_u32(END_OF_CENTRAL_DIR_SIGNATURE),
        pack_u16(0),              # number of this disk
        pack_u16(0),              # disk where central directory starts
        pack_u16(entry_count),    # entries on this disk
        pack_u16(entry_count),    # total entries
        pack_u32(cd_size),
        pack_u32(cd_offset),
        pack_u16(0),              # comment length
    ])


def build_archive(entries: Iterable[ZipEntry]) -> bytes:
    """Assemble a complete store-only ZIP archive in memory."""
    archive = bytearray()
    central_directory = bytearray()
    count = 0

    for entry in entries:
        name = entry.encoded_name
        payload = bytes(entry.data)
        dos_time, dos_date = dos_date_time(entry.timestamp)
        checksum = crc32(payload)
        size = len(payload)
        offset = len(archive)

        archive += _local_file_header(name, checksum, size, dos_time, dos_date)
        archive += name
        archive += payload

        central_directory += _central_dir_record(name, checksum, size, dos_time, dos_date, offset)
        central_directory += name
        count += 1

    cd_offset = len(archive)
    archive += central_directory
    archive += _end_of_central_dir(count, len(central_directory), cd_offset)

    logger.debug(
        "Built ZIP archive",
        extra={"entries": count, "size_bytes": len(archive)}
    )

    return bytes(archive)


def write_archive(entries: Iterable[ZipEntry], path: Path) -> Path:
    """Build an archive and write it atomically to ``path``."""
    return atomic_write_bytes(path, build_archive(entries))
