from ttk91_asm.utils import u32, to_i32, sign_extend, is_unsigned_nbit, is_signed_nbit, fits_16, split_bits

def test_split_bits():
    x = 0b1101_0010
    # fields: [7:5]=110, [3:1]=001
    assert split_bits(x, ((7,5),(3,1))) == (6, 1)

def test_u32_i32():
    assert u32(-1) == 0xFFFFFFFF
    assert to_i32(0xFFFFFFFF) == -1
    assert to_i32(0x7FFFFFFF) == 2147483647

def test_sign_extend():
    assert sign_extend(0xFFFF, 16) == -1
    assert sign_extend(0x7FFF, 16) == 32767
    assert sign_extend(0x8000, 16) == -32768

def test_nbit_checks():
    assert is_unsigned_nbit(65535, 16)
    assert not is_unsigned_nbit(65536, 16)
    assert is_signed_nbit(-32768, 16)
    assert not is_signed_nbit(32768, 16)
    assert fits_16(65535) and fits_16(-32768)
    assert not fits_16(65536) and not fits_16(-32769)
