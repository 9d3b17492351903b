"""Coins and sorted coin collections."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from .dec import Dec, dec_from_str

_DENOM = r"[a-zA-Z][a-zA-Z0-9/:._-]{2,127}"
_DENOM_RE = re.compile(_DENOM)
_DEC_COIN_RE = re.compile(rf"([0-9]+(?:\.[0-9]+)?|\.[0-9]+)[ \t\n\r\f\v]*({_DENOM})")
_MAX_INT_BITS = 256


def validate_denom(denom: str) -> None:
    """Raise ValueError unless ``denom`` is a valid coin denomination."""
    if not isinstance(denom, str) or not _DENOM_RE.fullmatch(denom):
        raise ValueError(f"invalid denom: {denom}")


@dataclass(frozen=True)
class Coin:
    """An amount of a single denomination; never negative."""

    denom: str
    amount: int = 0

    def __post_init__(self) -> None:
        validate_denom(self.denom)
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise TypeError("coin amount must be an integer")
        if self.amount < 0:
            raise ValueError(f"negative coin amount: {self.amount}")
        if self.amount.bit_length() > _MAX_INT_BITS:
            raise OverflowError("coin amount out of range")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    def is_valid(self) -> bool:
        try:
            validate_denom(self.denom)
        except ValueError:
            return False
        return self.amount >= 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_zero(self) -> bool:
        return self.amount == 0

    def _check_denom(self, other: Coin) -> None:
        if self.denom != other.denom:
            raise ValueError(f"invalid coin denominations; {self.denom}, {other.denom}")

    def add(self, other: Coin) -> Coin:
        self._check_denom(other)
        return Coin(self.denom, self.amount + other.amount)

    def sub(self, other: Coin) -> Coin:
        self._check_denom(other)
        if other.amount > self.amount:
            raise ValueError("negative coin amount")
        return Coin(self.denom, self.amount - other.amount)

    def __add__(self, other: object) -> Coin:
        if not isinstance(other, Coin):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Coin:
        if not isinstance(other, Coin):
            return NotImplemented
        return self.sub(other)


def _from_totals(totals: dict[str, int]) -> Coins:
    if any(amount < 0 for amount in totals.values()):
        raise ValueError("negative coin amount")
    return Coins(Coin(denom, amount) for denom, amount in sorted(totals.items()) if amount)


class Coins(Sequence[Coin]):
    """An immutable list of coins, kept as given; see ``new_coins`` for a sanitised one."""

    __slots__ = ("_items",)

    def __init__(self, coins: Iterable[Coin] = ()) -> None:
        items = tuple(coins)
        for coin in items:
            if not isinstance(coin, Coin):
                raise TypeError(f"not a coin: {coin!r}")
        self._items = items

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Coins(self._items[index])
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Coin]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coins):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __str__(self) -> str:
        return ",".join(str(coin) for coin in self._items)

    def __repr__(self) -> str:
        return f"Coins({list(self._items)!r})"

    def validate(self) -> None:
        """Raise ValueError unless the coins are sorted, unique and positive."""
        seen: set[str] = set()
        previous: str | None = None
        for coin in self._items:
            validate_denom(coin.denom)
            if coin.denom in seen:
                raise ValueError(f"duplicate denomination {coin.denom}")
            if previous is not None and coin.denom <= previous:
                raise ValueError(f"denomination {coin.denom} is not sorted")
            if not coin.is_positive():
                raise ValueError(f"coin {coin} amount is not positive")
            seen.add(coin.denom)
            previous = coin.denom

    def is_valid(self) -> bool:
        try:
            self.validate()
        except ValueError:
            return False
        return True

    def is_all_positive(self) -> bool:
        return bool(self._items) and all(coin.is_positive() for coin in self._items)

    def is_empty(self) -> bool:
        return not self._items

    def amount_of(self, denom: str) -> int:
        validate_denom(denom)
        return sum(coin.amount for coin in self._items if coin.denom == denom)

    def _totals(self) -> dict[str, int]:
        totals: dict[str, int] = {}
        for coin in self._items:
            totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
        return totals

    def add(self, *args: Coin) -> Coins:
        """Sum with the given coins; the result is sorted and holds no zeros."""
        totals = self._totals()
        for coin in args:
            totals[coin.denom] = totals.get(coin.denom, 0) + coin.amount
        return _from_totals(totals)

    def sub(self, other: Iterable[Coin]) -> Coins:
        """Subtract; raises ValueError if any amount would go negative."""
        totals = self._totals()
        for coin in other:
            totals[coin.denom] = totals.get(coin.denom, 0) - coin.amount
        return _from_totals(totals)


def new_coins(*args: Coin) -> Coins:
    """Sorted coins with zero amounts removed; raises on duplicates."""
    coins = Coins(sorted((c for c in args if c.amount), key=lambda c: c.denom))
    coins.validate()
    return coins


def parse_coins_normalized(text: str) -> Coins:
    """Parse ``"10acudos,1.5eth"``; decimal amounts are truncated to integers."""
    text = text.strip()
    if not text:
        return Coins()
    parsed: list[tuple[str, Dec]] = []
    for part in text.split(","):
        match = _DEC_COIN_RE.fullmatch(part.strip())
        if match is None:
            raise ValueError(f"invalid decimal coin expression: {part}")
        try:
            amount = dec_from_str(match.group(1))
        except ValueError as exc:
            raise ValueError(f"failed to parse decimal coin amount: {match.group(1)}") from exc
        parsed.append((match.group(2), amount))
    parsed = sorted((p for p in parsed if not p[1].is_zero()), key=lambda p: p[0])
    seen: set[str] = set()
    for denom, amount in parsed:
        if denom in seen:
            raise ValueError(f"duplicate denomination {denom}")
        seen.add(denom)
    return Coins(Coin(denom, amount.truncate_int()) for denom, amount in parsed)