"""Conversions between FFmpeg-style rationals and :class:`fractions.Fraction`."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from fractions import Fraction
from typing import Union


class RationalConversionError(ValueError):
    """A rational could not be converted to or from an :class:`AVRational`."""


class DenominatorZeroError(RationalConversionError):
    """The denominator was zero; most likely the value was missing entirely."""

    def __init__(self) -> None:
        super().__init__("zero value denominator")


class RationalRangeError(RationalConversionError):
    """A numerator or denominator does not fit in the requested integer type."""

    def __init__(self, value: int, kind: "IntKind"):
        self.value = value
        self.kind = kind
        super().__init__(
            "rational cannot be converted to another numeric type: "
            f"{value} is out of range for {kind.name.lower()}"
        )


class IntKind(enum.Enum):
    """A fixed-width integer type that rational parts may be held in."""

    I8 = (8, True)
    U8 = (8, False)
    I16 = (16, True)
    U16 = (16, False)
    I32 = (32, True)
    U32 = (32, False)
    I64 = (64, True)
    U64 = (64, False)
    U128 = (128, False)

    def __init__(self, bits: int, signed: bool):
        self.bits = bits
        self.signed = signed

    @property
    def minimum(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def maximum(self) -> int:
        return (1 << (self.bits - 1 if self.signed else self.bits)) - 1

    def check(self, value: int) -> int:
        """Return ``value`` if it fits in this type, else raise :class:`RationalRangeError`."""
        if not self.minimum <= value <= self.maximum:
            raise RationalRangeError(value, self)
        return value


@dataclass(frozen=True)
class AVRational:
    """A rational as stored by FFmpeg: a 32-bit signed numerator and denominator."""

    num: int
    den: int

    def __post_init__(self) -> None:
        IntKind.I32.check(self.num)
        IntKind.I32.check(self.den)

    def to_fraction(self, kind: IntKind = IntKind.I32) -> Fraction:
        """Convert to a reduced :class:`Fraction` whose parts fit in ``kind``."""
        if self.den == 0:
            raise DenominatorZeroError()
        return Fraction(kind.check(self.num), kind.check(self.den))

    @classmethod
    def from_fraction(cls, value: Union[Fraction, int]) -> "AVRational":
        """Build from a fraction, reducing it first."""
        reduced = Fraction(value)
        return cls(
            IntKind.I32.check(reduced.numerator),
            IntKind.I32.check(reduced.denominator),
        )