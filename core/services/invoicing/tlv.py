"""
TLV (Tag-Length-Value) encoding for compliance QR payloads.

Wire format, per field:
  - Tag:    1 byte
  - Length: 1 byte (length of the value in bytes, max 255)
  - Value:  raw bytes

Fields are written in the order given. Nothing is sorted or de-duplicated.
"""

from typing import Iterable

from .exceptions import EncodingError


MAX_VALUE_LENGTH = 255


def encode(fields: Iterable[tuple[int, bytes]]) -> bytes:
    """
    Encode an ordered sequence of (tag, value) pairs.

    Args:
        fields: Ordered (tag, value) pairs; tag must fit in one byte

    Returns:
        Concatenated TLV bytes

    Raises:
        EncodingError: If a tag is out of range or a value exceeds 255 bytes
    """
    buffer = bytearray()
    for tag, value in fields:
        if not 0 <= tag <= 0xFF:
            raise EncodingError(f"Invalid tag number: {tag} (must be 0-255)")
        if len(value) > MAX_VALUE_LENGTH:
            raise EncodingError(
                f"Tag {tag} value too long: {len(value)} bytes (max {MAX_VALUE_LENGTH})"
            )
        buffer.append(tag)
        buffer.append(len(value))
        buffer.extend(value)
    return bytes(buffer)


def decode(data: bytes) -> list[tuple[int, bytes]]:
    """
    Decode TLV bytes back into ordered (tag, value) pairs.

    Raises:
        EncodingError: If the data is truncated
    """
    result = []
    i = 0
    while i < len(data):
        if i + 1 >= len(data):
            raise EncodingError(f"Truncated TLV data at position {i}")
        tag = data[i]
        length = data[i + 1]
        if i + 2 + length > len(data):
            raise EncodingError(
                f"Tag {tag} claims length {length} but only "
                f"{len(data) - i - 2} bytes remain"
            )
        result.append((tag, bytes(data[i + 2:i + 2 + length])))
        i += 2 + length
    return result
