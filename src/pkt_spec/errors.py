"""PKT Python spec error codes and exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ErrorCategory(IntEnum):
    VALIDATION = 0x01
    ARITHMETIC = 0x03
    CONSENSUS = 0x06


class ErrorCode(IntEnum):
    # Validation
    INVALID_FORMAT = 0x0100
    INVALID_HASH_LENGTH = 0x0101
    INVALID_COMPACT = 0x0102
    INVALID_ANN_COUNT = 0x0103
    INVALID_ANN_AGE = 0x0104

    # Arithmetic
    OVERFLOW = 0x0304
    NEGATIVE_TARGET = 0x0306
    NEGATIVE_WORK = 0x0307

    # Consensus
    INVALID_ANN_MIN_DIFF = 0x0610
    ANN_NOT_USABLE = 0x0611
    ANN_TARGET_TOO_HIGH = 0x0612

    @property
    def category(self) -> ErrorCategory:
        return ErrorCategory(self.value >> 8)


@dataclass(frozen=True)
class SpecError(Exception):
    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.name}({self.code:#06x}): {self.message}"


# Allow Python's Exception machinery to set __traceback__/__context__/__cause__
# while keeping dataclass fields frozen (Python 3.13 contextlib compat).
_EXCEPTION_ATTRS = frozenset(("__traceback__", "__context__", "__cause__"))
_frozen_setattr = SpecError.__setattr__


def _spec_error_setattr(self: SpecError, name: str, value: object) -> None:
    if name in _EXCEPTION_ATTRS:
        object.__setattr__(self, name, value)
    else:
        _frozen_setattr(self, name, value)


SpecError.__setattr__ = _spec_error_setattr  # type: ignore[method-assign]


def err(code: ErrorCode, message: str) -> SpecError:
    return SpecError(code=code, message=message)
