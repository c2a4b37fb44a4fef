import sys

from amaranth.sim import Simulator

import decoder
from half import FP16


def test_decoder(request):
    dut = decoder.Decoder()

    test_cases = [
        # (operand, sign, exponent, significand, is_zero)
        (0x3C00, 0, 15, 0x400, 0),  # 1.0
        (0xC000, 1, 16, 0x400, 0),  # -2.0
        (0x4120, 0, 16, 0x520, 0),  # 2.5625
        (0x7BFF, 0, 30, 0x7FF, 0),  # 65504
        (0x0000, 0, 0, 0x000, 1),  # +0
        (0x8000, 1, 0, 0x000, 1),  # -0
        (0x0001, 0, 0, 0x001, 0),  # subnormal: no implicit one
        (0x03FF, 0, 0, 0x3FF, 0),
        (0x7C00, 0, 31, 0x400, 0),  # infinity pattern decodes as ordinary
    ]

    async def bench(ctx):
        for bits, sign, exp, sig, is_zero in test_cases:
            s, e, f = FP16.from_bits(bits).unpack()
            ctx.set(dut.operand, {"sign": s, "exponent": e, "mantissa": f})

            decoded = ctx.get(dut.decoded)

            got = (decoded["sign"], decoded["exponent"], decoded["significand"], decoded["is_zero"])
            assert got == (sign, exp, sig, is_zero), (
                f"0x{bits:04X}: got {got}, expected {(sign, exp, sig, is_zero)}"
            )

    sim = Simulator(dut)
    sim.add_testbench(bench)

    if request.config.getoption("--vcd"):
        vcd_name = f"{dut.__class__.__name__}_{sys._getframe().f_code.co_name}.vcd"
        with sim.write_vcd(vcd_name):
            sim.run()
    else:
        sim.run()
