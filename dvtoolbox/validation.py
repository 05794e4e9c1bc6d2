"""Validation failure reporting shared by the metadata and pack models."""

from __future__ import annotations

from typing import Iterable, Tuple


class ValidationError(ValueError):
    """One or more fields of a structure failed validation.

    ``errors`` holds ``(field, message)`` pairs, ordered by field name.
    """

    def __init__(self, errors: Iterable[Tuple[str, str]]):
        self.errors = sorted(
            ((str(path), str(message)) for path, message in errors),
            key=lambda entry: entry[0],
        )
        super().__init__(str(self))

    def __str__(self) -> str:
        return "".join(f"{path}: {message}\n" for path, message in self.errors)