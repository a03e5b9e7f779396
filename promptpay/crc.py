"""
CRC16-CCITT as used by EMV QR / PromptPay (poly 0x1021, init 0xFFFF, not reflected, no final XOR).
"""

POLY = 0x1021
INIT = 0xFFFF


def crc16(data: bytes | str) -> int:
    if isinstance(data, str):
        data = data.encode("utf-8")
    crc = INIT
    for c in data:
        crc ^= (c << 8)
        for _ in range(8):
            if (crc & 0x8000) != 0:
                crc = ((crc << 1) ^ POLY) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc & 0xFFFF

def crc16_hex(data: bytes | str) -> str:
    return f"{crc16(data):04X}"
