"""Exceptions raised by the roster, lottery and grouping engines."""

from __future__ import annotations


class HrDrawError(Exception):
    """Base class for recoverable, user-facing errors."""


class EncodingUnrecognized(HrDrawError, ValueError):
    """Uploaded bytes decode neither as UTF-8 nor as the legacy code page."""

    def __init__(self, encodings: tuple[str, ...]) -> None:
        self.encodings = encodings
        super().__init__(
            "Could not recognise the file encoding; save it as "
            + " or ".join(enc.upper() for enc in encodings)
        )


class PoolExhausted(HrDrawError):
    """A draw was requested while nobody is left in the remaining pool."""

    def __init__(self, message: str = "Everyone in the list has already been drawn") -> None:
        super().__init__(message)


class InvalidGroupSize(HrDrawError, ValueError):
    """Group size is not a positive integer."""

    def __init__(self, size: object) -> None:
        self.size = size
        super().__init__(f"Group size must be a positive integer, got {size!r}")


class DrawInProgress(HrDrawError):
    """A second draw was requested before the running one finished."""

    def __init__(self) -> None:
        super().__init__("A draw is already in progress")


__all__ = [
    "HrDrawError",
    "EncodingUnrecognized",
    "PoolExhausted",
    "InvalidGroupSize",
    "DrawInProgress",
]
