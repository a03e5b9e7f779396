from promptpay.crc import crc16, crc16_hex


def test_check_value():
    assert crc16(b"123456789") == 0x29B1
    assert crc16_hex("123456789") == "29B1"

def test_empty_input_is_initial_register():
    assert crc16(b"") == 0xFFFF

def test_str_and_bytes_agree():
    assert crc16("000201010212") == crc16(b"000201010212")

def test_hex_is_zero_padded_uppercase():
    for data in ("", "a", "6304", "5802TH", "hello world"):
        out = crc16_hex(data)
        assert len(out) == 4
        assert out == out.upper()
        assert int(out, 16) == crc16(data)
