"""
Table-driven CRC-32 (ISO 3309 / PKZIP).

Reflected polynomial 0xEDB88320, initial value and final XOR 0xFFFFFFFF,
processed one byte at a time. Produces the same checksums as every zip
tool, e.g. crc32(b"123456789") == 0xCBF43926.
"""

POLYNOMIAL = 0xEDB88320
_MASK = 0xFFFFFFFF


def _build_table() -> tuple[int, ...]:
    table = []
    for byte in range(256):
        value = byte
        for _ in range(8):
            if value & 1:
                value = POLYNOMIAL ^ (value >> 1)
            else:
                value >>= 1
        table.append(value)
    return tuple(table)


CRC_TABLE = _build_table()


def crc32(data: bytes) -> int:
    """Checksum ``data`` and return an unsigned 32-bit integer."""
    crc = _MASK
    for byte in data:
        crc = (crc >> 8) ^ CRC_TABLE[(crc ^ byte) & 0xFF]
    return crc ^ _MASK
