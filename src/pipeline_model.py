"""Software golden model of the FP16Multiplier pipeline

Every stage is a pure function over immutable records and `tick` advances
the whole pipeline by one clock edge. The model reproduces the gateware
register-for-register, including the state left behind by a reset.
"""

from dataclasses import dataclass, field

from half import BIAS, EXP_MAX, SATURATED

LATENCY = 3

PRODUCT_TOP = 21
KEPT_LOW = 10


@dataclass(frozen=True)
class DecodedOperand:
    sign: int
    exponent: int
    significand: int
    is_zero: bool


@dataclass(frozen=True)
class Stage1Record:
    sign: int = 0
    exponent: int = 0
    product: int = 0
    is_zero: bool = False


@dataclass(frozen=True)
class Stage2Record:
    sign: int = 0
    exponent: int = 0
    product: int = 0
    is_zero: bool = False


@dataclass(frozen=True)
class FinalResult:
    bits: int = 0
    overflow: bool = False
    underflow: bool = False


@dataclass(frozen=True)
class PipelineState:
    stage1: Stage1Record = field(default_factory=Stage1Record)
    stage2: Stage2Record = field(default_factory=Stage2Record)
    result: FinalResult = field(default_factory=FinalResult)


def decode(bits: int) -> DecodedOperand:
    if not 0 <= bits <= 0xFFFF:
        raise ValueError(f"operand 0x{bits:X} does not fit in 16 bits")

    sign = (bits >> 15) & 0x1
    exponent = (bits >> 10) & 0x1F
    fraction = bits & 0x3FF
    hidden = 1 if exponent != 0 else 0

    return DecodedOperand(
        sign=sign,
        exponent=exponent,
        significand=(hidden << 10) | fraction,
        is_zero=exponent == 0 and fraction == 0,
    )


def multiply_stage(a: DecodedOperand, b: DecodedOperand) -> Stage1Record:
    return Stage1Record(
        sign=a.sign ^ b.sign,
        exponent=a.exponent + b.exponent - BIAS,
        product=a.significand * b.significand,
        is_zero=a.is_zero or b.is_zero,
    )


def normalize_stage(s1: Stage1Record) -> Stage2Record:
    if s1.product >> PRODUCT_TOP & 1:
        product = s1.product >> 1
        exponent = s1.exponent + 1
    else:
        product = s1.product
        exponent = s1.exponent

    return Stage2Record(sign=s1.sign, exponent=exponent, product=product, is_zero=s1.is_zero)


def round_mantissa(product: int) -> tuple[int, bool]:
    """Round a normalized 22-bit product to 11 significand bits

    Returns the 11-bit rounded significand and whether rounding carried out
    of it (the significand reached 2.0).
    """
    kept = (product >> KEPT_LOW) & 0x7FF
    lsb = kept & 1
    guard = (product >> 9) & 1
    round_bit = (product >> 8) & 1
    sticky = int(product & 0xFF != 0)

    round_up = guard & (round_bit | sticky | lsb)

    rounded = kept + round_up
    return rounded & 0x7FF, bool(rounded >> 11)


def round_assemble_stage(s2: Stage2Record) -> FinalResult:
    mantissa, carry = round_mantissa(s2.product)
    final_exp = s2.exponent + int(carry)

    if s2.is_zero:
        return FinalResult()
    if final_exp >= EXP_MAX:
        return FinalResult(bits=SATURATED, overflow=True)
    if final_exp <= 0:
        return FinalResult(underflow=True)

    fraction = 0 if carry else mantissa & 0x3FF
    bits = (s2.sign << 15) | ((final_exp & 0x1F) << 10) | fraction
    return FinalResult(bits=bits)


def tick(state: PipelineState, a: int, b: int, reset: bool = False) -> PipelineState:
    """Advance one clock edge

    Each stage reads the pre-tick value of the stage before it. With `reset`
    set every register is cleared, discarding operands in flight.
    """
    if reset:
        return PipelineState()

    return PipelineState(
        stage1=multiply_stage(decode(a), decode(b)),
        stage2=normalize_stage(state.stage1),
        result=round_assemble_stage(state.stage2),
    )


def multiply(a: int, b: int) -> FinalResult:
    return round_assemble_stage(normalize_stage(multiply_stage(decode(a), decode(b))))
