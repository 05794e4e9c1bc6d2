"""Top-level metadata about a DV file."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from fractions import Fraction
from typing import List, Optional, Tuple

from dvtoolbox.validation import ValidationError

_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1

_DIF_BLOCK_SIZE = 80
_DIF_BLOCKS_PER_SEQUENCE = 150

# frame size in bytes -> (channel count, DIF sequences per channel)
_FRAME_LAYOUTS = {
    channels * sequences * _DIF_BLOCKS_PER_SEQUENCE * _DIF_BLOCK_SIZE: (channels, sequences)
    for channels in (1, 2)
    for sequences in (10, 12)
}

_SUPPORTED_FRAME_RATES = frozenset({Fraction(30000, 1001), Fraction(25)})
_SUPPORTED_AUDIO_SAMPLE_RATES = frozenset({32_000, 44_100, 48_000})


class System(enum.Enum):
    """DV system as defined in IEC 61834."""

    SYS_525_60 = "525-60"
    """525 lines (480 active) at 29.97 Hz: standard definition NTSC."""

    SYS_625_50 = "625-50"
    """625 lines (576 active) at 25 Hz: standard definition PAL/SECAM."""

    def __str__(self) -> str:
        return self.value


class _InfoProblem(ValueError):
    """A derived value of an Info cannot be computed."""


class DissimilarError(ValueError):
    """Two file infos do not describe the same format."""


@dataclass(frozen=True)
class Info:
    """Unvalidated top-level metadata about a DV file."""

    file_size: int
    video_frame_rate: Fraction
    video_duration: Fraction
    audio_stereo_stream_count: int
    audio_sample_rate: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "video_frame_rate", Fraction(self.video_frame_rate))
        object.__setattr__(self, "video_duration", Fraction(self.video_duration))

    def validate(self) -> "ValidInfo":
        """Return the validated form, or raise :class:`ValidationError`."""
        return ValidInfo(self)

    # ----- derived values -----

    def _frame_count(self) -> int:
        frame_count = self.video_frame_rate * self.video_duration
        if frame_count.denominator != 1:
            raise _InfoProblem(
                f"Total video frame count {frame_count} is not an integer; it resulted from "
                f"multiplying video frame rate {self.video_frame_rate} by video duration "
                f"{self.video_duration}"
            )
        if not 0 <= frame_count <= _U64_MAX:
            raise _InfoProblem(f"Frame count {frame_count} does not fit in a 64-bit integer")
        return int(frame_count)

    def _frame_size(self) -> int:
        frame_count = self._frame_count()
        if frame_count == 0:
            raise _InfoProblem("Video frame count is zero, so cannot calculate the frame size")
        frame_size, remainder = divmod(self.file_size, frame_count)
        if remainder:
            raise _InfoProblem(
                f"File size {self.file_size} is not evenly divisible by video frame count "
                f"{frame_count}"
            )
        if not 0 <= frame_size <= _U32_MAX:
            raise _InfoProblem(
                f"Video frame size count {frame_size} does not fit in a 64-bit integer"
            )
        return frame_size

    def _frame_layout(self) -> Tuple[int, int]:
        frame_size = self._frame_size()
        try:
            return _FRAME_LAYOUTS[frame_size]
        except KeyError:
            raise _InfoProblem(f"Unsupported frame size {frame_size}") from None

    def _system(self) -> System:
        channel_count, sequence_count = self._frame_layout()
        if sequence_count == 10:
            return System.SYS_525_60
        if sequence_count == 12:
            return System.SYS_625_50
        raise _InfoProblem(
            f"Unable to determine the DV system in use from channel count of {channel_count} "
            f"and DIF sequences per channel of {sequence_count}"
        )

    # ----- validation -----

    def _audio_sample_rate_problem(self) -> Optional[str]:
        rate = self.audio_sample_rate
        has_streams = self.audio_stereo_stream_count > 0
        if rate is None and has_streams:
            return "Could not detect sample rate for audio streams"
        if rate is not None and not has_streams:
            return "Audio sample rate cannot be provided if there are no audio streams"
        if rate is not None and rate not in _SUPPORTED_AUDIO_SAMPLE_RATES:
            return f"Unsupported audio sample rate {rate}"
        return None

    def _problems(self) -> List[Tuple[str, str]]:
        problems: List[Tuple[str, str]] = []
        if self.video_frame_rate not in _SUPPORTED_FRAME_RATES:
            problems.append(
                (
                    "video_frame_rate",
                    f"Video frame rate {self.video_frame_rate} is not a supported "
                    "NTSC/PAL/SECAM rate",
                )
            )
        try:
            self._system()
        except _InfoProblem as exc:
            problems.append(("video_duration", str(exc)))
        if self.audio_stereo_stream_count < 0:
            problems.append(("audio_stereo_stream_count", "lower than 0"))
        elif self.audio_stereo_stream_count > 2:
            problems.append(("audio_stereo_stream_count", "greater than 2"))
        audio_problem = self._audio_sample_rate_problem()
        if audio_problem is not None:
            problems.append(("audio_sample_rate", audio_problem))
        return problems


def _optional_str(value: Optional[int]) -> str:
    return "None" if value is None else str(value)


@dataclass(frozen=True)
class ValidInfo:
    """Top-level metadata about a DV file that has passed validation."""

    info: Info

    def __post_init__(self) -> None:
        problems = self.info._problems()
        if problems:
            raise ValidationError(problems)

    @property
    def file_size(self) -> int:
        return self.info.file_size

    @property
    def video_frame_rate(self) -> Fraction:
        return self.info.video_frame_rate

    @property
    def video_duration(self) -> Fraction:
        return self.info.video_duration

    @property
    def audio_stereo_stream_count(self) -> int:
        return self.info.audio_stereo_stream_count

    @property
    def audio_sample_rate(self) -> Optional[int]:
        return self.info.audio_sample_rate

    def video_frame_count(self) -> int:
        """Total number of frames in the video stream."""
        return self.info._frame_count()

    def video_frame_size(self) -> int:
        """Size of a single DV frame in bytes."""
        return self.info._frame_size()

    def video_frame_channel_count(self) -> int:
        """Number of channels: 1 for 25 Mbps, 2 for 50 Mbps."""
        return self.info._frame_layout()[0]

    def video_frame_dif_sequence_count(self) -> int:
        """DIF sequences per frame per channel: 10 for NTSC, 12 for PAL/SECAM."""
        return self.info._frame_layout()[1]

    def system(self) -> System:
        """The DV system in use within the file."""
        return self.info._system()

    def ideal_audio_samples_per_frame(self) -> Optional[Fraction]:
        """Ideal (average) audio samples per video frame, or None without audio."""
        if self.audio_sample_rate is None:
            return None
        return Fraction(self.audio_sample_rate) / self.video_frame_rate

    def check_similar(self, other: "ValidInfo") -> None:
        """Raise :class:`DissimilarError` unless ``other`` has the same format.

        The file size may differ.
        """
        checks = [
            (self.video_frame_rate, other.video_frame_rate, "Video frame rate"),
            (self.video_frame_size(), other.video_frame_size(), "Video frame size"),
            (
                self.video_frame_channel_count(),
                other.video_frame_channel_count(),
                "Video frame channel count",
            ),
            (
                self.video_frame_dif_sequence_count(),
                other.video_frame_dif_sequence_count(),
                "Video DIF sequence count",
            ),
        ]
        for mine, theirs, label in checks:
            if mine != theirs:
                raise DissimilarError(f"{label} {theirs} does not match {mine}")
        if self.system() != other.system():
            raise DissimilarError(
                f"DV system {other.system().name} does not match {self.system().name}"
            )
        if self.audio_stereo_stream_count != other.audio_stereo_stream_count:
            raise DissimilarError(
                f"Audio stereo stream count {other.audio_stereo_stream_count} does not match "
                f"{self.audio_stereo_stream_count}"
            )
        if self.audio_sample_rate != other.audio_sample_rate:
            raise DissimilarError(
                f"Audio sample rate {_optional_str(other.audio_sample_rate)} does not match "
                f"{_optional_str(self.audio_sample_rate)}"
            )