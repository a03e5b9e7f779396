"""
PromptPay QR payload builder (EMVCo merchant-presented QR), compatible with Thai banking apps.
"""

from decimal import Decimal, InvalidOperation
from enum import Enum
import re
import secrets
import string

from .crc import crc16_hex
from .errors import ValidationError
from .tlv import tlv, MAX_VALUE_LENGTH

PROMPTPAY_AID = "A000000677010111"
CURRENCY_THB = "764"
COUNTRY_TH = "TH"
CRC_TAG = "6304"

MAX_PAYLOAD_BYTES = 512
MAX_REFERENCE_LENGTH = 25
MAX_AMOUNT_LENGTH = 13
MAX_MERCHANT_NAME_LENGTH = 25
MAX_MERCHANT_CITY_LENGTH = 15

_CENTS = Decimal("0.01")
_PRINTABLE = re.compile(r"[\x20-\x7e]+")


class PromptPayIDType(Enum):
    # value is the sub-tag used inside Merchant Account Information (29)
    PHONE = 1
    NATIONAL_ID = 2
    EWALLET = 3

    @property
    def subtag(self) -> str:
        return f"{self.value:02d}"


def _infer_kind(digits: str) -> PromptPayIDType:
    if len(digits) == 13:
        return PromptPayIDType.NATIONAL_ID
    if len(digits) == 15:
        return PromptPayIDType.EWALLET
    return PromptPayIDType.PHONE

def normalize_recipient(recipient_id: str, kind: PromptPayIDType | None = None) -> tuple[PromptPayIDType, str]:
    """Return the ID type and the account value as it goes on the wire.

    Phone numbers become 13 digits: ``0812345678`` -> ``0066812345678``.
    National/tax IDs are 13 digits as-is, e-wallet IDs 15 digits as-is.
    An inferred ID that does not fit the phone layout keeps its own digits,
    zero-padded to 13; only an explicit ``kind`` enforces exact lengths.
    """
    digits = re.sub(r"[^0-9]", "", recipient_id or "")
    if not digits:
        raise ValidationError("recipient id must contain digits")
    inferred = kind is None
    if inferred:
        kind = _infer_kind(digits)

    if kind == PromptPayIDType.PHONE:
        phone = digits
        if phone.startswith("0"):
            phone = "66" + phone[1:]
        elif not phone.startswith("66"):
            phone = "66" + phone
        phone = phone.zfill(13)
        if len(phone) <= 13:
            return kind, phone
        if not inferred:
            raise ValidationError(f"phone number {recipient_id!r} is too long")
        # legacy layout: raw digits, zero-padded to 13, typed by length
        digits = digits.zfill(13)
        kind = PromptPayIDType.EWALLET if len(digits) >= 15 else PromptPayIDType.NATIONAL_ID
    elif kind == PromptPayIDType.NATIONAL_ID:
        if len(digits) != 13:
            raise ValidationError(f"national/tax id must be 13 digits, got {len(digits)}")
    else:
        if len(digits) != 15:
            raise ValidationError(f"e-wallet id must be 15 digits, got {len(digits)}")
    return kind, digits

def normalize_amount(amount) -> str:
    """Render an amount the way tag 54 carries it, always with two decimals."""
    if amount is None or isinstance(amount, bool):
        raise ValidationError("amount is required")
    text = str(amount).strip()
    try:
        value = Decimal(text)
        if not value.is_finite():
            raise ValidationError(f"amount {text!r} is not a finite number")
        cents = value.quantize(_CENTS)
    except InvalidOperation:
        raise ValidationError(f"amount {text!r} is not a decimal number") from None
    if value <= 0:
        raise ValidationError(f"amount must be positive, got {text!r}")
    if cents != value:
        raise ValidationError(f"amount {text!r} has more than 2 decimal places")
    out = f"{cents:f}"
    if len(out) > MAX_AMOUNT_LENGTH:
        raise ValidationError(f"amount {text!r} is too large")
    return out

def _check_text(label: str, value: str, max_len: int) -> str:
    if len(value) > MAX_VALUE_LENGTH:
        raise ValidationError(f"{label} is {len(value)} chars, TLV length field allows {MAX_VALUE_LENGTH}")
    if len(value) > max_len:
        raise ValidationError(f"{label} is {len(value)} chars, max {max_len}")
    if not _PRINTABLE.fullmatch(value):
        raise ValidationError(f"{label} must be 1-{max_len} printable ASCII characters")
    return value

def _sanitize_name(text: str | None) -> str:
    return (text or "").strip()

def build_promptpay_payload(
    recipient_id: str,
    kind: PromptPayIDType | None = None,
    amount=None,
    reference: str | None = None,
    merchant_name: str | None = None,
    merchant_city: str | None = None,
    dynamic: bool | None = None,
) -> str:
    kind, account = normalize_recipient(recipient_id, kind)
    txn_amount = normalize_amount(amount) if amount is not None else None
    if reference is not None:
        _check_text("reference", reference, MAX_REFERENCE_LENGTH)
    m_name = _sanitize_name(merchant_name)
    m_city = _sanitize_name(merchant_city)

    if dynamic is None:
        dynamic = txn_amount is not None

    fields = [
        tlv("00", "01"),
        tlv("01", "12" if dynamic else "11"),
        tlv("29", tlv("00", PROMPTPAY_AID) + tlv(kind.subtag, account)),
        tlv("53", CURRENCY_THB),
    ]
    if txn_amount is not None:
        fields.append(tlv("54", txn_amount))
    fields.append(tlv("58", COUNTRY_TH))
    if m_name:
        fields.append(tlv("59", _check_text("merchant name", m_name, MAX_MERCHANT_NAME_LENGTH)))
    if m_city:
        fields.append(tlv("60", _check_text("merchant city", m_city, MAX_MERCHANT_CITY_LENGTH)))
    if reference is not None:
        fields.append(tlv("62", tlv("05", reference)))

    payload_wo_crc = "".join(fields) + CRC_TAG
    size = len(payload_wo_crc.encode("utf-8")) + 4
    if size > MAX_PAYLOAD_BYTES:
        raise ValidationError(f"payload is {size} bytes, max {MAX_PAYLOAD_BYTES}")
    return payload_wo_crc + crc16_hex(payload_wo_crc)

def encode(recipient_id: str, amount, reference: str) -> str:
    """Dynamic PromptPay payload for a fixed amount carrying a merchant reference.

    Tags emitted, in order: 00 01 29 53 54 58 62 63.
    """
    if not reference:
        raise ValidationError("reference is required")
    return build_promptpay_payload(recipient_id, amount=amount, reference=reference, dynamic=True)

def new_reference(prefix: str = "TOPUP", n: int = 12) -> str:
    prefix = prefix.strip().upper()
    room = MAX_REFERENCE_LENGTH - len(prefix) - 1
    if not re.fullmatch(r"[A-Z0-9_]*", prefix) or room < 4:
        raise ValidationError(f"invalid reference prefix {prefix!r}")
    alphabet = string.ascii_uppercase + string.digits
    token = "".join(secrets.choice(alphabet) for _ in range(min(n, room)))
    return f"{prefix}_{token}" if prefix else token
