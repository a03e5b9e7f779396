from .errors import ValidationError, PayloadFormatError
from .crc import crc16, crc16_hex
from .tlv import tlv, parse_tlv
from .payload import (
    PromptPayIDType,
    build_promptpay_payload,
    encode,
    new_reference,
    normalize_amount,
    normalize_recipient,
)
from .decoder import PromptPayPayload, parse_payload, verify_payload

__all__ = [
    "ValidationError",
    "PayloadFormatError",
    "crc16",
    "crc16_hex",
    "tlv",
    "parse_tlv",
    "PromptPayIDType",
    "build_promptpay_payload",
    "encode",
    "new_reference",
    "normalize_amount",
    "normalize_recipient",
    "PromptPayPayload",
    "parse_payload",
    "verify_payload",
]
