from amaranth import *
from amaranth.build import Platform
from amaranth.lib import wiring
from amaranth.lib.wiring import In, Out


class MantissaMultiplier(wiring.Component):
    """11x11 significand multiply

    Both inputs already carry the implicit bit, so the 22-bit product is in
    2.20 fixed point: [1, 4) for normal operands.
    """

    def __init__(self, width: int = 11):
        self.width = width

        super().__init__(
            {
                "a_sig": In(width),
                "b_sig": In(width),
                "product": Out(2 * width, init=0),
            }
        )

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.d.comb += self.product.eq(self.a_sig * self.b_sig)

        return m
