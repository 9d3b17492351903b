"""Fixed-point decimal with 18 digits of precision and banker's rounding."""

from __future__ import annotations

import functools
import re

PRECISION = 18
_ONE = 10**PRECISION
_HALF = _ONE // 2
_MAX_BIT_LEN = 256 + 60
_DIGITS = re.compile(r"[0-9]+")


def _checked(raw: int) -> int:
    if raw.bit_length() > _MAX_BIT_LEN:
        raise OverflowError("decimal out of range")
    return raw


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _chop_and_round(value: int) -> int:
    if value < 0:
        return -_chop_and_round(-value)
    quotient, remainder = divmod(value, _ONE)
    if remainder < _HALF:
        return quotient
    if remainder > _HALF:
        return quotient + 1
    return quotient if quotient % 2 == 0 else quotient + 1


@functools.total_ordering
class Dec:
    """Signed decimal number stored as an integer scaled by 10**18."""

    __slots__ = ("_raw",)

    def __init__(self, value: int | str | Dec = 0) -> None:
        if isinstance(value, Dec):
            raw = value._raw
        elif isinstance(value, bool):
            raise TypeError("a bool is not a decimal")
        elif isinstance(value, int):
            raw = value * _ONE
        elif isinstance(value, str):
            raw = dec_from_str(value)._raw
        else:
            raise TypeError(f"cannot make a decimal from {type(value).__name__}")
        self._raw = _checked(raw)

    @classmethod
    def from_raw(cls, raw: int) -> Dec:
        """Build a decimal from its scaled integer representation."""
        dec = cls.__new__(cls)
        dec._raw = _checked(raw)
        return dec

    @property
    def raw(self) -> int:
        return self._raw

    @staticmethod
    def _coerce(other: object) -> Dec | None:
        if isinstance(other, Dec):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Dec(other)
        return None

    def __add__(self, other: object) -> Dec:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Dec.from_raw(self._raw + rhs._raw)

    __radd__ = __add__

    def __sub__(self, other: object) -> Dec:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Dec.from_raw(self._raw - rhs._raw)

    def __rsub__(self, other: object) -> Dec:
        lhs = self._coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: object) -> Dec:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return Dec.from_raw(_chop_and_round(self._raw * rhs._raw))

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Dec:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        if rhs._raw == 0:
            raise ZeroDivisionError("decimal division by zero")
        quotient = _trunc_div(self._raw * _ONE * _ONE, rhs._raw)
        return Dec.from_raw(_chop_and_round(quotient))

    def __neg__(self) -> Dec:
        return Dec.from_raw(-self._raw)

    def __abs__(self) -> Dec:
        return Dec.from_raw(abs(self._raw))

    def __eq__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._raw == rhs._raw

    def __lt__(self, other: object) -> bool:
        rhs = self._coerce(other)
        if rhs is None:
            return NotImplemented
        return self._raw < rhs._raw

    def __hash__(self) -> int:
        return hash(("Dec", self._raw))

    def __int__(self) -> int:
        return self.truncate_int()

    def __str__(self) -> str:
        sign = "-" if self._raw < 0 else ""
        whole, fraction = divmod(abs(self._raw), _ONE)
        return f"{sign}{whole}.{fraction:0{PRECISION}d}"

    def __repr__(self) -> str:
        return f"Dec('{self}')"

    def power(self, n: int) -> Dec:
        """Raise to a non-negative integer power, rounding at every step."""
        if n < 0:
            raise ValueError("power must be non-negative")
        if n == 0:
            return Dec(1)
        base = self
        acc = Dec(1)
        while n > 1:
            if n % 2:
                acc = acc * base
            n //= 2
            base = base * base
        return base * acc

    def quo_int(self, i: int) -> Dec:
        """Divide by an integer, truncating toward zero."""
        if i == 0:
            raise ZeroDivisionError("decimal division by zero")
        return Dec.from_raw(_trunc_div(self._raw, i))

    def truncate_int(self) -> int:
        """Drop the fractional part, rounding toward zero."""
        return _trunc_div(self._raw, _ONE)

    def is_negative(self) -> bool:
        return self._raw < 0

    def is_positive(self) -> bool:
        return self._raw > 0

    def is_zero(self) -> bool:
        return self._raw == 0


def dec_from_str(text: str) -> Dec:
    """Parse a decimal such as ``"-26.5"``; at most 18 fractional digits."""
    if not text:
        raise ValueError("decimal string cannot be empty")
    negative = text.startswith("-")
    body = text[1:] if negative else text
    if not body:
        raise ValueError("decimal string cannot be empty")
    parts = body.split(".")
    if len(parts) > 2:
        raise ValueError(f"invalid decimal string: {text}")
    whole = parts[0]
    fraction = ""
    if len(parts) == 2:
        fraction = parts[1]
        if not fraction or not whole:
            raise ValueError(f"invalid decimal length: {text}")
    if len(fraction) > PRECISION:
        raise ValueError(
            f"value '{text}' exceeds max precision by {len(fraction) - PRECISION} decimal places"
        )
    digits = whole + fraction
    if not _DIGITS.fullmatch(digits):
        raise ValueError(f"failed to set decimal string: {text}")
    raw = int(digits + "0" * (PRECISION - len(fraction)))
    return Dec.from_raw(-raw if negative else raw)


def dec_with_prec(value: int, prec: int) -> Dec:
    """Return ``value * 10**-prec``."""
    if not 0 <= prec <= PRECISION:
        raise ValueError(f"too much precision, maximum {PRECISION}, provided {prec}")
    return Dec.from_raw(value * 10 ** (PRECISION - prec))


def min_dec(a: Dec, b: Dec) -> Dec:
    """Return the smaller of two decimals, preferring ``b`` on ties."""
    return a if a < b else b