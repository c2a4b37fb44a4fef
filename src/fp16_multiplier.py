from amaranth import *
from amaranth.build import Platform
from amaranth.lib import data, wiring
from amaranth.lib.wiring import In, Out

from decoder import Decoder
from half import BIAS, EXP_MAX, SATURATED
from mantissa_multiplier import MantissaMultiplier
from normalizer import Normalizer
from rounder import Rounder


class Stage1(data.Struct):
    product: 22
    exponent: signed(10)
    sign: 1
    is_zero: 1


class Stage2(data.Struct):
    product: 22
    exponent: signed(10)
    sign: 1
    is_zero: 1


class FP16Multiplier(wiring.Component):
    """Three-stage pipelined half-precision multiplier: result = a * b

    - Stage 1: sign XOR, biased exponent sum, 11x11 significand product
    - Stage 2: normalize to 1.xxxx (at most one right shift)
    - Stage 3: round-to-nearest-even, classify, pack

    Results appear on `result`/`overflow`/`underflow` three clock edges after
    the operands are presented. `srst` is a synchronous reset that clears
    every stage register on the edge it is sampled, overriding in-flight data.

    Overflow saturates to 0x7F80 regardless of sign, underflow flushes to
    +0. NaN and infinity operands are not special-cased.
    """

    LATENCY = 3

    a: In(16)
    b: In(16)
    srst: In(1)
    result: Out(16)
    overflow: Out(1)
    underflow: Out(1)

    def elaborate(self, platform: Platform | None) -> Module:
        m = Module()

        m.submodules.decode_a = decode_a = Decoder()
        m.submodules.decode_b = decode_b = Decoder()
        m.submodules.mult = mult = MantissaMultiplier()
        m.submodules.normalizer = normalizer = Normalizer()
        m.submodules.rounder = rounder = Rounder()

        stage1 = Signal(Stage1)
        stage2 = Signal(Stage2)

        # ---- Stage 1: Decode & Multiply ----
        m.d.comb += decode_a.operand.eq(self.a)
        m.d.comb += decode_b.operand.eq(self.b)

        a_dec = decode_a.decoded
        b_dec = decode_b.decoded

        m.d.comb += mult.a_sig.eq(a_dec.significand)
        m.d.comb += mult.b_sig.eq(b_dec.significand)

        # NOTE: widen before the sum, 5-bit exponents minus bias go negative
        a_exp = Signal(signed(10))
        b_exp = Signal(signed(10))
        exp_sum = Signal(signed(10))
        m.d.comb += [
            a_exp.eq(a_dec.exponent),
            b_exp.eq(b_dec.exponent),
            exp_sum.eq(a_exp + b_exp - BIAS),
        ]

        # ---- Stage 2: Normalize ----
        m.d.comb += normalizer.product_in.eq(stage1.product)
        m.d.comb += normalizer.exponent_in.eq(stage1.exponent)

        # ---- Stage 3: Round & Classify ----
        m.d.comb += rounder.product.eq(stage2.product)

        carry = rounder.carry
        final_exp = Signal(signed(10))
        m.d.comb += final_exp.eq(stage2.exponent + carry)

        packed = Signal(16)
        m.d.comb += packed.eq(
            Cat(
                Mux(carry, 0, rounder.mantissa_out[0:10]),
                final_exp[0:5],
                stage2.sign,
            )
        )

        # ---- Registers ----
        with m.If(self.srst):
            m.d.sync += [
                stage1.eq(0),
                stage2.eq(0),
                self.result.eq(0),
                self.overflow.eq(0),
                self.underflow.eq(0),
            ]
        with m.Else():
            m.d.sync += [
                stage1.sign.eq(a_dec.sign ^ b_dec.sign),
                stage1.exponent.eq(exp_sum),
                stage1.product.eq(mult.product),
                stage1.is_zero.eq(a_dec.is_zero | b_dec.is_zero),
            ]

            m.d.sync += [
                stage2.sign.eq(stage1.sign),
                stage2.exponent.eq(normalizer.exponent_out),
                stage2.product.eq(normalizer.product_out),
                stage2.is_zero.eq(stage1.is_zero),
            ]

            with m.If(stage2.is_zero):
                m.d.sync += [
                    self.result.eq(0),
                    self.overflow.eq(0),
                    self.underflow.eq(0),
                ]
            with m.Elif(final_exp >= EXP_MAX):
                m.d.sync += [
                    self.result.eq(SATURATED),
                    self.overflow.eq(1),
                    self.underflow.eq(0),
                ]
            with m.Elif(final_exp <= 0):
                m.d.sync += [
                    self.result.eq(0),
                    self.overflow.eq(0),
                    self.underflow.eq(1),
                ]
            with m.Else():
                m.d.sync += [
                    self.result.eq(packed),
                    self.overflow.eq(0),
                    self.underflow.eq(0),
                ]

        return m


if __name__ == "__main__":
    from amaranth.back import verilog

    dut = FP16Multiplier()

    print(verilog.convert(dut, name="fp16_multiplier"))
