from fractions import Fraction

import pytest

from dvtoolbox.rational import (
    AVRational,
    DenominatorZeroError,
    IntKind,
    RationalConversionError,
    RationalRangeError,
)


def test_to_fraction_signed_reduces():
    assert AVRational(6, 8).to_fraction() == Fraction(3, 4)


@pytest.mark.parametrize("kind", [IntKind.I32, IntKind.U32])
def test_to_fraction_zero_denominator(kind):
    with pytest.raises(DenominatorZeroError):
        AVRational(6, 0).to_fraction(kind)


def test_to_fraction_unsigned():
    assert AVRational(6, 8).to_fraction(IntKind.U32) == Fraction(3, 4)


def test_to_fraction_negative_into_unsigned():
    with pytest.raises(RationalRangeError) as info:
        AVRational(-6, 8).to_fraction(IntKind.U32)
    assert info.value.value == -6
    assert info.value.kind is IntKind.U32


def test_from_fraction_reduces():
    converted = AVRational.from_fraction(Fraction(6, 8))
    assert (converted.num, converted.den) == (3, 4)


def test_from_fraction_out_of_range():
    with pytest.raises(RationalRangeError):
        AVRational.from_fraction(Fraction(2**32 - 1, 8))


def test_errors_share_base_class():
    with pytest.raises(RationalConversionError):
        AVRational(1, 0).to_fraction()


def test_denominator_zero_message():
    with pytest.raises(DenominatorZeroError, match="zero value denominator"):
        AVRational(3, 0).to_fraction()


def test_int_kind_bounds():
    assert IntKind.U8.check(255) == 255
    assert IntKind.I8.check(IntKind.I8.minimum) == IntKind.I8.minimum
    with pytest.raises(RationalRangeError):
        IntKind.U8.check(256)
    with pytest.raises(RationalRangeError):
        IntKind.I8.check(IntKind.I8.maximum + 1)


def test_round_trip_through_fraction():
    original = AVRational(30000, 1001)
    assert AVRational.from_fraction(original.to_fraction()) == original