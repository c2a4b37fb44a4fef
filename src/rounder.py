from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class Rounder(wiring.Component):
    """Round-to-nearest-even on a normalized significand product

    The kept significand is `product[-1 - width:-1]`; the three bits below it
    are guard, round and sticky (OR of everything lower). `carry` is set when
    rounding pushes the significand to exactly 2.0.
    """

    def __init__(self, width: int = 11, product_width: int = 22):
        self.width = width
        self.product_width = product_width

        super().__init__(
            {
                "product": In(product_width),
                "mantissa_out": Out(width),
                "carry": Out(1),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        # ---- Split ----
        top = self.product_width - 1
        low = top - self.width

        kept = self.product[low:top]
        lsb = kept[0]
        guard = self.product[low - 1]
        round_bit = self.product[low - 2]
        sticky = self.product[: low - 2].any()

        round_up = Signal()
        with m.If(guard):
            with m.If(round_bit | sticky):
                m.d.comb += round_up.eq(1)
            with m.Else():
                m.d.comb += round_up.eq(lsb)
        with m.Else():
            m.d.comb += round_up.eq(0)

        incremented = Signal(self.width + 1)
        m.d.comb += incremented.eq(kept + round_up)

        m.d.comb += self.mantissa_out.eq(incremented[0 : self.width])
        m.d.comb += self.carry.eq(incremented[self.width])

        return m
