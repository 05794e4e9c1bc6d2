"""Data types shared between multiple packs."""

from __future__ import annotations

import enum
from typing import Optional, Type, TypeVar

from dvtoolbox.file_info import System
from dvtoolbox.packs.base import PackContext

E = TypeVar("E", bound=enum.Enum)

_NO_INFO_GENRE = 0x7F


def _optional_enum(enum_cls: Type[E], bits: int) -> Optional[E]:
    """Map raw bits to an enum member, or None for the "no information" code."""
    try:
        return enum_cls(bits)
    except ValueError:
        return None


def _optional_bits(member: Optional[enum.Enum], width: int) -> int:
    """Map an optional enum member to raw bits; None becomes all bits set."""
    return (1 << width) - 1 if member is None else member.value


class SourceType(enum.Enum):
    """Which video system type is in use, together with the field count."""

    STANDARD_DEFINITION_COMPRESSED_CHROMA = 0x00
    """525-60 or 625-50 system, 25 Mbps, 4:1:1 chroma on NTSC."""
    RESERVED_1 = 0x01
    ANALOG_HIGH_DEFINITION_1125_1250 = 0x02
    """1125-60 or 1250-50 system."""
    RESERVED_3 = 0x03
    STANDARD_DEFINITION_MORE_CHROMA = 0x04
    """525-60 or 625-50 system, 50 Mbps, 4:2:2 chroma."""
    RESERVED_5 = 0x05
    RESERVED_6 = 0x06
    RESERVED_7 = 0x07
    RESERVED_8 = 0x08
    RESERVED_9 = 0x09
    RESERVED_10 = 0x0A
    RESERVED_11 = 0x0B
    RESERVED_12 = 0x0C
    RESERVED_13 = 0x0D
    RESERVED_14 = 0x0E
    RESERVED_15 = 0x0F
    RESERVED_16 = 0x10
    RESERVED_17 = 0x11
    RESERVED_18 = 0x12
    RESERVED_19 = 0x13
    RESERVED_20 = 0x14
    RESERVED_21 = 0x15
    RESERVED_22 = 0x16
    RESERVED_23 = 0x17
    RESERVED_24 = 0x18
    RESERVED_25 = 0x19
    RESERVED_26 = 0x1A
    RESERVED_27 = 0x1B
    RESERVED_28 = 0x1C
    RESERVED_29 = 0x1D
    RESERVED_30 = 0x1E
    RESERVED_31 = 0x1F


class CopyProtection(enum.Enum):
    """Copy protection flags."""

    NO_RESTRICTION = 0x0
    """Copies may be made freely."""
    RESERVED = 0x1
    ONE_GENERATION_ONLY = 0x2
    """One copy may be made; it is then flagged as not permitted."""
    NOT_PERMITTED = 0x3
    """No copies may be made."""


class SourceSituation(enum.Enum):
    """Whether the source was scrambled and whether it was descrambled when recorded."""

    SCRAMBLED_SOURCE_WITH_AUDIENCE_RESTRICTIONS = 0b00
    SCRAMBLED_SOURCE_WITHOUT_AUDIENCE_RESTRICTIONS = 0b01
    SOURCE_WITH_AUDIENCE_RESTRICTIONS = 0b10


class InputSource(enum.Enum):
    """Input source of the recorded content."""

    ANALOG = 0b00
    DIGITAL = 0b01
    RESERVED = 0b10


class CompressionCount(enum.Enum):
    """The number of times the content has been compressed."""

    COMPRESSED_1 = 0b00
    COMPRESSED_2 = 0b01
    COMPRESSED_3_OR_MORE = 0b10


def check_field_count(field_count: int, ctx: PackContext) -> None:
    """Raise ValueError unless the field count matches the file's system."""
    system = ctx.file_info.system()
    expected = 60 if system is System.SYS_525_60 else 50
    if field_count != expected:
        raise ValueError(
            f"field count of {field_count} does not match the expected value of "
            f"{expected} for system {system}"
        )


def check_genre_category(genre_category: Optional[int]) -> None:
    """Raise ValueError if "no information" is given as 0x7F instead of None."""
    if genre_category == _NO_INFO_GENRE:
        raise ValueError("instead of specifying Some(0x7F), use None to indicate no information")