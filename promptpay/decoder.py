"""
Decode and verify PromptPay payload strings.
"""

from dataclasses import dataclass, field

from .crc import crc16_hex
from .errors import PayloadFormatError
from .payload import PromptPayIDType, PROMPTPAY_AID
from .tlv import parse_tlv


@dataclass
class PromptPayPayload:
    format_indicator: str
    point_of_initiation: str | None
    aid: str | None
    account_subtag: str | None
    account: str | None
    currency: str | None
    amount: str | None
    country: str | None
    merchant_name: str | None
    merchant_city: str | None
    reference: str | None
    crc: str
    fields: list[tuple[str, str]] = field(default_factory=list)

    @property
    def is_dynamic(self) -> bool:
        return self.point_of_initiation == "12"

    @property
    def kind(self) -> PromptPayIDType | None:
        if self.account_subtag is None:
            return None
        try:
            return PromptPayIDType(int(self.account_subtag))
        except ValueError:
            return None


def _nested(value: str | None) -> dict[str, str]:
    if not value:
        return {}
    return dict(parse_tlv(value))

def parse_payload(payload: str) -> PromptPayPayload:
    payload = (payload or "").strip()
    fields = parse_tlv(payload)
    if not fields:
        raise PayloadFormatError("empty payload")

    top: dict[str, str] = {}
    for tag, value in fields:
        if tag in top:
            raise PayloadFormatError(f"duplicate tag {tag}")
        top[tag] = value
    if "00" not in top:
        raise PayloadFormatError("missing payload format indicator (00)")
    if fields[-1][0] != "63":
        raise PayloadFormatError("CRC field (63) must be last")
    if len(top["63"]) != 4:
        raise PayloadFormatError("CRC field must be 4 characters")

    merchant = _nested(top.get("29"))
    subtag = next((t for t in ("01", "02", "03") if t in merchant), None)
    additional = _nested(top.get("62"))

    return PromptPayPayload(
        format_indicator=top["00"],
        point_of_initiation=top.get("01"),
        aid=merchant.get("00"),
        account_subtag=subtag,
        account=merchant.get(subtag) if subtag else None,
        currency=top.get("53"),
        amount=top.get("54"),
        country=top.get("58"),
        merchant_name=top.get("59"),
        merchant_city=top.get("60"),
        reference=additional.get("05"),
        crc=top["63"],
        fields=fields,
    )

def verify_payload(payload: str) -> bool:
    """True when the trailing CRC matches; malformed payloads raise PayloadFormatError."""
    payload = (payload or "").strip()
    parsed = parse_payload(payload)
    return crc16_hex(payload[:-4]) == parsed.crc.upper()

def is_promptpay(payload: PromptPayPayload) -> bool:
    return payload.aid == PROMPTPAY_AID
