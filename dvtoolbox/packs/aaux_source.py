"""AAUX source pack: basic information about the audio stream."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from dvtoolbox.file_info import System
from dvtoolbox.packs.base import PackContext, PackData, RawPackError, Validator
from dvtoolbox.packs.common import SourceType, check_field_count


class AudioQuantization(enum.Enum):
    """Quantization format of audio samples."""

    LINEAR_16_BIT = 0x0
    """16-bit linear samples (standard PCM)."""
    NON_LINEAR_12_BIT = 0x1
    """Special 12-bit non-linear samples."""
    LINEAR_20_BIT = 0x2
    """20-bit linear samples."""
    RESERVED_3 = 0x3
    RESERVED_4 = 0x4
    RESERVED_5 = 0x5
    RESERVED_6 = 0x6
    RESERVED_7 = 0x7


class LockedMode(enum.Enum):
    """Whether the audio clock was locked to the video clock."""

    LOCKED = 0x0
    """Locked audio: a fixed number of samples per frame (professional equipment)."""
    UNLOCKED = 0x1
    """Unlocked audio: samples per frame drift (typical of consumer camcorders)."""


class StereoMode(enum.Enum):
    """Partially determines the channel layout."""

    MULTI_STEREO_AUDIO = 0x0
    LUMPED_AUDIO = 0x1


class AudioBlockPairing(enum.Enum):
    """Whether audio block channel CH1 (CH3) is related to CH2 (CH4)."""

    PAIRED = 0x0
    INDEPENDENT = 0x1


class EmphasisTimeConstant(enum.Enum):
    """Time constant of audio pre-emphasis."""

    EMPHASIS_50_15 = 0x1
    """Pre-emphasis of 50/15 microseconds."""
    RESERVED = 0x0


_SUPPORTED_SAMPLE_RATES = (32_000, 44_100, 48_000)

_FRAME_SIZE_RANGES: Dict[System, Dict[int, Tuple[int, int]]] = {
    System.SYS_525_60: {
        32_000: (1_053, 1_080),
        44_100: (1_452, 1_489),
        48_000: (1_580, 1_620),
    },
    System.SYS_625_50: {
        32_000: (1_264, 1_296),
        44_100: (1_742, 1_786),
        48_000: (1_896, 1_944),
    },
}

_SAMPLE_RATE_BY_BITS = {0x0: 48_000, 0x1: 44_100, 0x2: 32_000}
_BITS_BY_SAMPLE_RATE = {rate: bits for bits, rate in _SAMPLE_RATE_BY_BITS.items()}

_CHANNELS_BY_BITS = {0x0: 1, 0x1: 2}
_BITS_BY_CHANNELS = {count: bits for bits, count in _CHANNELS_BY_BITS.items()}

_FIELDS_BY_BIT = {0x0: 60, 0x1: 50}
_BIT_BY_FIELDS = {count: bit for bit, count in _FIELDS_BY_BIT.items()}


def _allowed_frame_size_range(system: System, sample_rate: int) -> Optional[Tuple[int, int]]:
    return _FRAME_SIZE_RANGES[system].get(sample_rate)


def _bits(value: int, shift: int, width: int) -> int:
    return (value >> shift) & ((1 << width) - 1)


@dataclass(frozen=True)
class AAUXSource(PackData):
    """Information about the audio stream within one audio block channel.

    See IEC 61834-4:1998 Section 8.1 and SMPTE 306M-2002 Section 7.4.1.
    """

    audio_sample_rate: int
    quantization: AudioQuantization
    audio_frame_size: int
    locked_mode: LockedMode
    stereo_mode: StereoMode
    audio_block_channel_count: int
    audio_mode: int
    audio_block_pairing: AudioBlockPairing
    multi_language: bool
    source_type: SourceType
    field_count: int
    emphasis_on: bool
    emphasis_time_constant: EmphasisTimeConstant
    reserved: int

    @classmethod
    def _unpack(cls, value: int, ctx: PackContext) -> "AAUXSource":
        system = ctx.file_info.system()
        smp = _bits(value, 27, 3)
        try:
            sample_rate = _SAMPLE_RATE_BY_BITS[smp]
        except KeyError:
            raise RawPackError(
                f"smp value of {smp} does not correspond to a known audio sample rate"
            ) from None
        frame_range = _allowed_frame_size_range(system, sample_rate)
        if frame_range is None:
            raise RawPackError("audio sample rate is unsupported")
        chn = _bits(value, 13, 2)
        try:
            channel_count = _CHANNELS_BY_BITS[chn]
        except KeyError:
            raise RawPackError(
                f"chn value of {chn} does not correspond to a known number of channels "
                "per audio block"
            ) from None
        return cls(
            audio_sample_rate=sample_rate,
            quantization=AudioQuantization(_bits(value, 24, 3)),
            audio_frame_size=frame_range[0] + _bits(value, 0, 6),
            locked_mode=LockedMode(_bits(value, 7, 1)),
            stereo_mode=StereoMode(_bits(value, 15, 1)),
            audio_block_channel_count=channel_count,
            audio_mode=_bits(value, 8, 4),
            audio_block_pairing=AudioBlockPairing(_bits(value, 12, 1)),
            multi_language=not _bits(value, 22, 1),
            source_type=SourceType(_bits(value, 16, 5)),
            field_count=_FIELDS_BY_BIT[_bits(value, 21, 1)],
            emphasis_on=not _bits(value, 31, 1),
            emphasis_time_constant=EmphasisTimeConstant(_bits(value, 30, 1)),
            reserved=_bits(value, 6, 1) | (_bits(value, 23, 1) << 1),
        )

    def _pack(self, ctx: PackContext) -> int:
        system = ctx.file_info.system()
        minimum, _ = _FRAME_SIZE_RANGES[system][self.audio_sample_rate]
        return (
            (self.audio_frame_size - minimum)
            | ((self.reserved & 0x1) << 6)
            | (self.locked_mode.value << 7)
            | (self.audio_mode << 8)
            | (self.audio_block_pairing.value << 12)
            | (_BITS_BY_CHANNELS[self.audio_block_channel_count] << 13)
            | (self.stereo_mode.value << 15)
            | (self.source_type.value << 16)
            | (_BIT_BY_FIELDS[self.field_count] << 21)
            | (int(not self.multi_language) << 22)
            | (((self.reserved >> 1) & 0x1) << 23)
            | (self.quantization.value << 24)
            | (_BITS_BY_SAMPLE_RATE[self.audio_sample_rate] << 27)
            | (self.emphasis_time_constant.value << 30)
            | (int(not self.emphasis_on) << 31)
        )

    def _validators(self, ctx: PackContext) -> Iterator[Validator]:
        yield "audio_sample_rate", self._check_audio_sample_rate
        yield "audio_frame_size", lambda: self._check_audio_frame_size(ctx)
        yield "audio_block_channel_count", self._check_channel_count
        yield "audio_mode", lambda: self._check_width(self.audio_mode, 4)
        yield "field_count", lambda: check_field_count(self.field_count, ctx)
        yield "reserved", lambda: self._check_width(self.reserved, 2)

    def _check_audio_sample_rate(self) -> None:
        if self.audio_sample_rate not in _SUPPORTED_SAMPLE_RATES:
            raise ValueError(
                f"audio sample rate of {self.audio_sample_rate} is not one of the supported "
                "values of 32000, 44100, or 48000 Hz"
            )

    def _check_audio_frame_size(self, ctx: PackContext) -> None:
        system = ctx.file_info.system()
        sample_rate = self.audio_sample_rate
        frame_range = _allowed_frame_size_range(system, sample_rate)
        if frame_range is None:
            raise ValueError(
                "cannot validate the audio frame size because the audio sample rate "
                "is unsupported"
            )
        minimum, maximum = frame_range
        size = self.audio_frame_size
        if size < minimum:
            raise ValueError(
                f"video frame contains {size} audio samples, which is below the required "
                f"minimum of {minimum} for video system {system} and audio sample rate "
                f"{sample_rate} Hz"
            )
        if size > maximum:
            raise ValueError(
                f"video frame contains {size} audio samples, which is above the maximum of "
                f"{maximum} for video system {system} and audio sample rate {sample_rate} Hz"
            )

    def _check_channel_count(self) -> None:
        if self.audio_block_channel_count < 1:
            raise ValueError("lower than 1")
        if self.audio_block_channel_count > 2:
            raise ValueError("greater than 2")

    @staticmethod
    def _check_width(value: int, width: int) -> None:
        if not 0 <= value < (1 << width):
            raise ValueError(f"value {value} does not fit in {width} bits")