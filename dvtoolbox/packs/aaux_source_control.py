"""AAUX source control pack: copy protection, recording and playback metadata for audio."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, FrozenSet, Iterator, List, Optional

from dvtoolbox.packs.base import PackContext, PackData, Validator
from dvtoolbox.packs.common import (
    CompressionCount,
    CopyProtection,
    InputSource,
    SourceSituation,
    _optional_bits,
    _optional_enum,
    check_genre_category,
)

_NO_INFO_7_BITS = 0x7F


class AAUXRecordingMode(enum.Enum):
    """Recording mode of the audio: whether and where new audio was dubbed in."""

    ORIGINAL = 0x1
    """All audio was recorded at the same time as the video."""
    ONE_CHANNEL_INSERT = 0x3
    """One audio block channel was later replaced with new content."""
    TWO_CHANNEL_INSERT = 0x5
    """Two audio block channels (CH1 and CH2, or CH3 and CH4) were later replaced."""
    FOUR_CHANNEL_INSERT = 0x4
    """All four audio block channels were later replaced."""
    INVALID_RECORDING = 0x7
    RESERVED_0 = 0x0
    RESERVED_2 = 0x2
    RESERVED_6 = 0x6


class AAUXInsertChannel(enum.Enum):
    """Which audio block channels were inserted; meaningful only for Memory in Cassette."""

    CHANNEL_1 = 0b000
    CHANNEL_2 = 0b001
    CHANNEL_3 = 0b010
    CHANNEL_4 = 0b011
    CHANNELS_1_2 = 0b100
    CHANNELS_3_4 = 0b101
    CHANNELS_1_2_3_4 = 0b110


class Direction(enum.Enum):
    """Tape playback direction."""

    FORWARD = 0x1
    REVERSE = 0x0


def _build_speed_table() -> List[Optional[Fraction]]:
    speeds: List[Optional[Fraction]] = [None] * 128

    # The first row (coarse value 0) is special.
    speeds[0x00] = Fraction(0)
    speeds[0x01] = Fraction(1, 32)  # really "some speed slower than 1/16"
    for fine in range(0x2, 0x10):
        speeds[fine] = Fraction(1, 18 - fine)

    # Remaining rows follow simple exponential rules: coarse values 1/2, 1, 2, ... 32.
    for coarse in range(0x1, 0x8):
        coarse_value = Fraction(2) ** (coarse - 2)
        for fine in range(0x0, 0x10):
            speed_bits = (coarse << 4) | fine
            if speed_bits == _NO_INFO_7_BITS:
                continue  # all bits set means "unknown speed"
            speeds[speed_bits] = coarse_value + Fraction(fine) / Fraction(2) ** (6 - coarse)
    return speeds


_SPEED_BY_BITS: List[Optional[Fraction]] = _build_speed_table()
_BITS_BY_SPEED: Dict[Optional[Fraction], int] = {
    speed: bits for bits, speed in enumerate(_SPEED_BY_BITS)
}
_VALID_PLAYBACK_SPEEDS: FrozenSet[Fraction] = frozenset(
    speed for speed in _SPEED_BY_BITS if speed is not None
)


def valid_playback_speeds() -> FrozenSet[Fraction]:
    """The playback speeds that can be stored in :attr:`AAUXSourceControl.playback_speed`."""
    return _VALID_PLAYBACK_SPEEDS


def _bits(value: int, shift: int, width: int) -> int:
    return (value >> shift) & ((1 << width) - 1)


@dataclass(frozen=True)
class AAUXSourceControl(PackData):
    """Metadata about the audio stream.

    See IEC 61834-4:1998 Section 8.2 and SMPTE 306M-2002 Section 7.4.2.
    """

    copy_protection: CopyProtection
    source_situation: Optional[SourceSituation]
    input_source: Optional[InputSource]
    compression_count: Optional[CompressionCount]
    recording_start_point: bool
    recording_end_point: bool
    recording_mode: AAUXRecordingMode
    insert_channel: Optional[AAUXInsertChannel]
    genre_category: Optional[int]
    direction: Direction
    playback_speed: Optional[Fraction]
    reserved: int

    def __post_init__(self) -> None:
        if self.playback_speed is not None:
            object.__setattr__(self, "playback_speed", Fraction(self.playback_speed))

    @classmethod
    def _unpack(cls, value: int, ctx: PackContext) -> "AAUXSourceControl":
        genre = _bits(value, 24, 7)
        return cls(
            copy_protection=CopyProtection(_bits(value, 6, 2)),
            source_situation=_optional_enum(SourceSituation, _bits(value, 0, 2)),
            input_source=_optional_enum(InputSource, _bits(value, 4, 2)),
            compression_count=_optional_enum(CompressionCount, _bits(value, 2, 2)),
            recording_start_point=not _bits(value, 15, 1),
            recording_end_point=not _bits(value, 14, 1),
            recording_mode=AAUXRecordingMode(_bits(value, 11, 3)),
            insert_channel=_optional_enum(AAUXInsertChannel, _bits(value, 8, 3)),
            genre_category=None if genre == _NO_INFO_7_BITS else genre,
            direction=Direction(_bits(value, 23, 1)),
            playback_speed=_SPEED_BY_BITS[_bits(value, 16, 7)],
            reserved=_bits(value, 31, 1),
        )

    def _pack(self, ctx: PackContext) -> int:
        genre = _NO_INFO_7_BITS if self.genre_category is None else self.genre_category
        return (
            _optional_bits(self.source_situation, 2)
            | (_optional_bits(self.compression_count, 2) << 2)
            | (_optional_bits(self.input_source, 2) << 4)
            | (self.copy_protection.value << 6)
            | (_optional_bits(self.insert_channel, 3) << 8)
            | (self.recording_mode.value << 11)
            | (int(not self.recording_end_point) << 14)
            | (int(not self.recording_start_point) << 15)
            | (_BITS_BY_SPEED[self.playback_speed] << 16)
            | (self.direction.value << 23)
            | (genre << 24)
            | (self.reserved << 31)
        )

    def _validators(self, ctx: PackContext) -> Iterator[Validator]:
        yield "genre_category", self._check_genre_category
        yield "playback_speed", self._check_playback_speed
        yield "reserved", self._check_reserved

    def _check_genre_category(self) -> None:
        check_genre_category(self.genre_category)
        if self.genre_category is not None and not 0 <= self.genre_category < (1 << 7):
            raise ValueError(f"value {self.genre_category} does not fit in 7 bits")

    def _check_playback_speed(self) -> None:
        speed = self.playback_speed
        if speed is not None and speed not in _VALID_PLAYBACK_SPEEDS:
            raise ValueError(
                f"playback speed {speed} not supported: only playback speeds returned by the "
                "valid_playback_speeds function are supported"
            )

    def _check_reserved(self) -> None:
        if self.reserved not in (0, 1):
            raise ValueError(f"value {self.reserved} does not fit in 1 bits")