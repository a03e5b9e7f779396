"""
EMV Tag-Length-Value helpers: 2-digit tag, 2-digit length, value.
"""

import re

from .errors import ValidationError, PayloadFormatError

MAX_VALUE_LENGTH = 99
_TWO_DIGITS = re.compile(r"[0-9]{2}")


def tlv(tag: str, value: str) -> str:
    if not _TWO_DIGITS.fullmatch(tag):
        raise ValidationError(f"invalid TLV tag {tag!r}")
    if len(value) > MAX_VALUE_LENGTH:
        raise ValidationError(f"value for tag {tag} is {len(value)} chars, max {MAX_VALUE_LENGTH}")
    return f"{tag}{len(value):02d}{value}"

def parse_tlv(data: str) -> list[tuple[str, str]]:
    fields = []
    pos = 0
    while pos < len(data):
        header = data[pos:pos + 4]
        if len(header) < 4:
            raise PayloadFormatError(f"truncated field header at offset {pos}")
        tag, length = header[:2], header[2:]
        if not (_TWO_DIGITS.fullmatch(tag) and _TWO_DIGITS.fullmatch(length)):
            raise PayloadFormatError(f"malformed field header {header!r} at offset {pos}")
        end = pos + 4 + int(length)
        if end > len(data):
            raise PayloadFormatError(f"field {tag} runs past end of data")
        fields.append((tag, data[pos + 4:end]))
        pos = end
    return fields
