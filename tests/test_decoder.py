import pytest

from promptpay.decoder import is_promptpay, parse_payload, verify_payload
from promptpay.errors import PayloadFormatError
from promptpay.payload import PromptPayIDType, build_promptpay_payload, encode


def test_parse_encoded_payload():
    p = parse_payload(encode("0812345678", "100.50", "TOPUP_123"))
    assert p.format_indicator == "01"
    assert p.is_dynamic
    assert is_promptpay(p)
    assert p.kind == PromptPayIDType.PHONE
    assert p.account == "0066812345678"
    assert p.currency == "764"
    assert p.amount == "100.50"
    assert p.country == "TH"
    assert p.reference == "TOPUP_123"
    assert p.merchant_name is None
    assert [t for t, _ in p.fields] == ["00", "01", "29", "53", "54", "58", "62", "63"]

@pytest.mark.parametrize("recipient,amount,reference", [
    ("0812345678", "1", "A"),
    ("0899999999", "12345.67", "ORDER123456"),
    ("1234567890123", "0.01", "SUB1"),
    ("123456789012345", "999999.99", "WITHDRAW_ABCDEF"),
])
def test_encoded_payloads_verify(recipient, amount, reference):
    assert verify_payload(encode(recipient, amount, reference))

def test_static_payload():
    p = parse_payload(build_promptpay_payload("1234567890123"))
    assert not p.is_dynamic
    assert p.amount is None
    assert p.reference is None
    assert p.kind == PromptPayIDType.NATIONAL_ID

def test_lowercase_crc_accepted():
    payload = encode("0812345678", "20", "X1")
    assert verify_payload(payload[:-4] + payload[-4:].lower())

def test_tampered_amount_fails_checksum():
    payload = encode("0812345678", "100.50", "TOPUP_123")
    tampered = payload.replace("5406100.50", "5406900.50")
    assert not verify_payload(tampered)

def test_wrong_crc_fails():
    payload = encode("0812345678", "100.50", "TOPUP_123")
    bad = "0000" if payload[-4:] != "0000" else "FFFF"
    assert not verify_payload(payload[:-4] + bad)

@pytest.mark.parametrize("payload", [
    "",
    "000201",
    "0002016304",
    "00020163041234" + "5802TH",
    "000201000201" + "63041234",
    "0102126304ABCD",
    "00020163051234X",
])
def test_malformed_payloads(payload):
    with pytest.raises(PayloadFormatError):
        verify_payload(payload)
