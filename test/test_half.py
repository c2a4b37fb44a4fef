from half import FP16


def test_float_to_fp16_conversion():
    test_cases = [
        (0.0, 0x0000),
        (1.0, 0x3C00),
        (2.0, 0x4000),
        (-1.0, 0xBC00),
        (0.5, 0x3800),
        (3.0, 0x4200),
        (65504.0, 0x7BFF),
    ]

    for f, expected_bits in test_cases:
        fp16 = FP16.from_float(f)
        result = fp16.to_bits()
        assert result == expected_bits, f"Expected 0x{expected_bits:04X}, got 0x{result:04X}"


def test_fp16_to_float_conversion():
    test_cases = [
        (0x0000, 0.0),
        (0x3C00, 1.0),
        (0x4000, 2.0),
        (0xC000, -2.0),
        (0x3800, 0.5),
        (0x4120, 2.5625),
        (0x1C00, 2.0**-8),
    ]

    for bits, expected_f in test_cases:
        fp16 = FP16.from_bits(bits)
        result = fp16.to_float()
        assert result == expected_f, f"Expected {expected_f}, got {result}"


def test_pack_unpack_fp16():
    test_cases = [
        (0, 15, 0, 0x3C00),
        (1, 15, 0, 0xBC00),
        (0, 16, 0x200, 0x4200),
        (0, 30, 0x3FF, 0x7BFF),
        (0, 0, 0, 0x0000),
    ]

    for sign, exp, mant, expected_bits in test_cases:
        fp16 = FP16.pack(sign, exp, mant)
        packed = fp16.to_bits()
        assert packed == expected_bits, (
            f"FP16.pack({sign}, {exp}, {mant}) = 0x{packed:04X}, expected 0x{expected_bits:04X}"
        )

        unpacked = FP16.from_bits(expected_bits).unpack()
        assert unpacked == (sign, exp, mant), (
            f"FP16(0x{expected_bits:04X}).unpack() = {unpacked}, expected ({sign}, {exp}, {mant})"
        )
