from dataclasses import dataclass
from fractions import Fraction

import pytest

from dvtoolbox.file_info import Info
from dvtoolbox.packs.base import PackContext, PackData, PackValidationError, RawPackError
from dvtoolbox.validation import ValidationError

NTSC = PackContext(
    Info(600_000, Fraction(30_000, 1_001), Fraction(1_001 * 5, 30_000), 2, 32_000).validate()
)


def _check_small(count):
    if count > 100:
        raise ValueError("too big")


@dataclass(frozen=True)
class Counter(PackData):
    count: int

    @classmethod
    def _unpack(cls, value, ctx):
        if value == 0xFFFFFFFF:
            raise RawPackError("all bits set")
        return cls(value)

    def _pack(self, ctx):
        return self.count

    def _validators(self, ctx):
        yield "count", lambda: _check_small(self.count)


def test_decode_reads_little_endian():
    assert Counter.decode(bytes([5, 0, 0, 0]), NTSC) == Counter(5)


def test_to_raw_round_trip():
    raw = bytes([7, 0, 0, 0])
    assert Counter.decode(raw, NTSC).to_raw(NTSC) == raw


def test_validate_returns_self():
    pack = Counter(9)
    assert pack.validate(NTSC) is pack


def test_decode_validation_failure():
    with pytest.raises(PackValidationError) as info:
        Counter.decode(bytes([200, 0, 0, 0]), NTSC)
    assert str(info.value) == "Pack failed validation during deserialization of raw bytes"
    assert info.value.report.errors == [("count", "too big")]
    assert isinstance(info.value.__cause__, ValidationError)


def test_from_raw_skips_validation():
    assert Counter.from_raw(bytes([200, 0, 0, 0]), NTSC) == Counter(200)


def test_raw_error_message():
    with pytest.raises(RawPackError) as info:
        Counter.decode(b"\xff\xff\xff\xff", NTSC)
    assert str(info.value) == "Pack failed deserialization of raw bytes: all bits set"
    assert info.value.message == "all bits set"


def test_wrong_length_rejected():
    with pytest.raises(ValueError):
        Counter.from_raw(b"\x01\x02\x03", NTSC)


def test_to_raw_refuses_invalid():
    with pytest.raises(ValidationError) as info:
        Counter(500).to_raw(NTSC)
    assert str(info.value) == "count: too big\n"