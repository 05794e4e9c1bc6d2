"""Title, AAUX and VAUX binary group packs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

from dvtoolbox.packs.base import PackContext, PackData, Validator

_GROUP_COUNT = 8
_NIBBLE_BITS = 4
_NIBBLE_MASK = 0xF


@dataclass(frozen=True)
class BinaryGroup(PackData):
    """Raw binary group data: eight 4-bit values, lowest bits first.

    The meaning depends on the binary group flags of the matching timecode pack;
    no further interpretation is attempted here.
    """

    group_data: Tuple[int, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "group_data", tuple(self.group_data))

    @classmethod
    def _unpack(cls, value: int, ctx: PackContext) -> "BinaryGroup":
        return cls(
            tuple(
                (value >> (_NIBBLE_BITS * index)) & _NIBBLE_MASK
                for index in range(_GROUP_COUNT)
            )
        )

    def _pack(self, ctx: PackContext) -> int:
        return sum(
            nibble << (_NIBBLE_BITS * index) for index, nibble in enumerate(self.group_data)
        )

    def _validators(self, ctx: PackContext) -> Iterator[Validator]:
        yield "group_data", self._check_group_data

    def _check_group_data(self) -> None:
        if len(self.group_data) != _GROUP_COUNT:
            raise ValueError(
                f"binary group data must hold exactly {_GROUP_COUNT} values, "
                f"not {len(self.group_data)}"
            )
        for nibble in self.group_data:
            if not 0 <= nibble <= _NIBBLE_MASK:
                raise ValueError(f"value {nibble} does not fit in {_NIBBLE_BITS} bits")