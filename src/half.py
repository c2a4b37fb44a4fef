import struct

from amaranth import *
from amaranth.lib import data

BIAS = 15
EXP_MAX = 31
SATURATED = 0x7F80


class Half(data.Struct):
    mantissa: 10
    exponent: 5
    sign: 1

    def is_zero(self):
        return (self.exponent == 0) & (self.mantissa == 0)


class DecodedHalf(data.Struct):
    """Operand split for multiplication

    `significand` carries the implicit leading one in bit 10, which is only
    set when the stored exponent is nonzero.
    """

    significand: 11
    exponent: 5
    sign: 1
    is_zero: 1


class FP16:
    def __init__(self, bits: int):
        self.bits = bits

    @classmethod
    def from_float(cls, f: float):
        bits = struct.unpack(">H", struct.pack(">e", f))[0]
        return cls(bits)

    @classmethod
    def from_bits(cls, bits: int):
        return cls(bits)

    def to_bits(self) -> int:
        return self.bits

    def to_float(self) -> float:
        return struct.unpack(">e", struct.pack(">H", self.bits))[0]

    def unpack(self) -> tuple[int, int, int]:
        sign = (self.bits >> 15) & 0x1
        exp = (self.bits >> 10) & 0x1F
        mant = self.bits & 0x3FF
        return sign, exp, mant

    @classmethod
    def pack(cls, sign: int, exp: int, mant: int):
        bits = (sign << 15) | (exp << 10) | mant
        return cls(bits)

    def __repr__(self):
        return f"FP16(0x{self.bits:04X})"
