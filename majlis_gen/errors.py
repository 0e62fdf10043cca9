"""Errors raised by majlis layout generation."""

from __future__ import annotations

import math


class MajlisError(Exception):
    """Base class for all majlis_gen errors."""


class InvalidDimension(MajlisError, ValueError):
    """A non-positive or non-finite width/depth/length reached a layout function."""

    def __init__(self, name: str, value: float):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a positive finite number, got {value!r}")


class UnknownPattern(MajlisError, ValueError):
    """A pattern identifier outside the fixed enumeration."""

    def __init__(self, value: object, known: tuple[str, ...] = ()):
        self.value = value
        msg = f"Unknown pattern {value!r}"
        if known:
            msg += f". Available: {', '.join(known)}"
        super().__init__(msg)


class InvalidColor(MajlisError, ValueError):
    """A palette entry that is not a usable color."""


class ConfigError(MajlisError, ValueError):
    """A configuration mapping with unrecognized fields."""


def require_positive(name: str, value: float) -> float:
    """Return value as a float, or raise InvalidDimension."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidDimension(name, value) from None
    if not math.isfinite(v) or v <= 0:
        raise InvalidDimension(name, value)
    return v
