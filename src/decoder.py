from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out

from half import DecodedHalf, Half


class Decoder(wiring.Component):
    operand: In(Half)
    decoded: Out(DecodedHalf)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        # ---- Implicit one only for nonzero exponent ----
        hidden = self.operand.exponent != 0

        m.d.comb += [
            self.decoded.sign.eq(self.operand.sign),
            self.decoded.exponent.eq(self.operand.exponent),
            self.decoded.significand.eq(Cat(self.operand.mantissa, hidden)),
            self.decoded.is_zero.eq(self.operand.is_zero()),
        ]

        return m
