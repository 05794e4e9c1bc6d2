"""Base types for DV data packs (IEC 61834-4)."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Callable, Iterable, Tuple, Type, TypeVar

from dvtoolbox.file_info import ValidInfo
from dvtoolbox.validation import ValidationError

_RAW_SIZE = 4

Validator = Tuple[str, Callable[[], object]]

P = TypeVar("P", bound="PackData")


@dataclass(frozen=True)
class PackContext:
    """Information about the whole file that packs need when encoding or validating."""

    file_info: ValidInfo


class RawPackError(ValueError):
    """The raw bytes of a pack could not be deserialized."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Pack failed deserialization of raw bytes: {message}")


class PackValidationError(RawPackError):
    """Raw bytes were read into a pack, but the pack then failed validation."""

    def __init__(self, report: ValidationError):
        self.report = report
        self.message = str(report)
        ValueError.__init__(self, "Pack failed validation during deserialization of raw bytes")


class PackData(abc.ABC):
    """Contents of a DV data pack, excluding the pack header byte."""

    @classmethod
    def from_raw(cls: Type[P], raw: bytes, ctx: PackContext) -> P:
        """Parse the four pack data bytes without validating the result."""
        data = memoryview(raw).tobytes()
        if len(data) != _RAW_SIZE:
            raise ValueError(f"raw pack data must be exactly {_RAW_SIZE} bytes, got {len(data)}")
        return cls._unpack(int.from_bytes(data, "little"), ctx)

    @classmethod
    def decode(cls: Type[P], raw: bytes, ctx: PackContext) -> P:
        """Parse the four pack data bytes and validate the result."""
        pack = cls.from_raw(raw, ctx)
        try:
            pack.validate(ctx)
        except ValidationError as exc:
            raise PackValidationError(exc) from exc
        return pack

    def validate(self: P, ctx: PackContext) -> P:
        """Return ``self`` if every field is valid, else raise :class:`ValidationError`."""
        errors = []
        for field_name, check in self._validators(ctx):
            try:
                check()
            except ValueError as exc:
                errors.append((field_name, str(exc)))
        if errors:
            raise ValidationError(errors)
        return self

    def to_raw(self, ctx: PackContext) -> bytes:
        """Validate and serialize into the four pack data bytes."""
        self.validate(ctx)
        return self._pack(ctx).to_bytes(_RAW_SIZE, "little")

    @classmethod
    @abc.abstractmethod
    def _unpack(cls: Type[P], value: int, ctx: PackContext) -> P:
        """Build the pack from the little-endian 32-bit pack value."""

    @abc.abstractmethod
    def _pack(self, ctx: PackContext) -> int:
        """Return the little-endian 32-bit pack value."""

    def _validators(self, ctx: PackContext) -> Iterable[Validator]:
        """Field checks run by :meth:`validate`; each raises ValueError on failure."""
        return ()