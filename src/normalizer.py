from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class Normalizer(wiring.Component):
    """Single-step right shift into 1.xxxx form

    A product of two significands in [1, 2) lies in [1, 4), so at most one
    right shift is ever needed.
    """

    def __init__(self, width: int = 22, exp_width: int = 10):
        self.width = width
        self.exp_width = exp_width

        super().__init__(
            {
                "product_in": In(width),
                "exponent_in": In(signed(exp_width)),
                "product_out": Out(width),
                "exponent_out": Out(signed(exp_width)),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        with m.If(self.product_in[-1]):
            m.d.comb += [
                self.product_out.eq(self.product_in[1:]),
                self.exponent_out.eq(self.exponent_in + 1),
            ]
        with m.Else():
            m.d.comb += [
                self.product_out.eq(self.product_in),
                self.exponent_out.eq(self.exponent_in),
            ]

        return m
