"""The cudoMint module: mints acudos every block along a fixed ten-year curve.

Emission follows f(t) = 358 - 53 t + 1.8 t^2 (millions of cudos per year),
where t is the normalised time in years.  Each block advances t by a fixed
step and mints the integral of f over that step.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace

from .bank import BankKeeper
from .coins import Coin, Coins, new_coins
from .dec import Dec, dec_from_str, dec_with_prec, min_dec
from .errors import UnknownRequestError

MODULE_NAME = "cudoMint"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
MEM_STORE_KEY = "mem_capability"
MINTER_KEY = b"\x00"
INCREMENT_MODIFIER_KEY = b"IncrementModifier"
DEFAULT_INDEX = 1
CONSENSUS_VERSION = 1
FEE_COLLECTOR_NAME = "fee_collector"

EVENT_TYPE_MINT = MODULE_NAME
ATTRIBUTE_MINTED_DENOM = "minted_denom"
ATTRIBUTE_MINTED_TOKENS = "minted_tokens"

# The curve's arithmetic assumes this denomination's size; it is not configurable.
DENOM = "acudos"
TOTAL_DAYS = 3652
DEFAULT_INCREMENT_MODIFIER = 17280
INITIAL_NORM_TIME_PASSED = dec_with_prec(53172694105988, 14)
FINAL_NORM_TIME_PASSED = Dec(10)
ZERO_POINT_SIX = dec_from_str("0.6")
TWENTY_SIX_POINT_FIVE = dec_from_str("26.5")
_SCALE = Dec(10).power(24)


def key_prefix(prefix: str) -> bytes:
    return prefix.encode()


@dataclass(frozen=True)
class Minter:
    """Minting progress: the normalised time reached and the fractional remainder."""

    mint_remainder: Dec = field(default_factory=Dec)
    norm_time_passed: Dec = field(default_factory=Dec)


def validate_minter(minter: Minter) -> None:
    """Raise ValueError if either minter field is negative."""
    if minter.mint_remainder.is_negative():
        raise ValueError(
            f"mint parameter MintRemainder should be positive, is {minter.mint_remainder}"
        )
    if minter.norm_time_passed.is_negative():
        raise ValueError(
            f"mint parameter NormTimePassed should be positive, is {minter.norm_time_passed}"
        )


def validate_increment_modifier(value: object) -> None:
    """Raise unless ``value`` is a positive integer."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"invalid parameter type: {type(value).__name__}")
    if value <= 0:
        raise ValueError(f"blocks per day must be positive: {value}")


@dataclass(frozen=True)
class Params:
    """Module parameters; the increment modifier is the number of blocks per day."""

    increment_modifier: int = DEFAULT_INCREMENT_MODIFIER

    def validate(self) -> None:
        validate_increment_modifier(self.increment_modifier)


@dataclass(frozen=True)
class GenesisState:
    """The minter and parameters the module starts from."""

    minter: Minter = field(default_factory=Minter)
    params: Params = field(default_factory=Params)

    def validate(self) -> None:
        self.params.validate()
        validate_minter(self.minter)

    def to_dict(self) -> dict[str, dict[str, str]]:
        """The JSON-ready form, with numbers written as strings."""
        return {
            "minter": {
                "mint_remainder": str(self.minter.mint_remainder),
                "norm_time_passed": str(self.minter.norm_time_passed),
            },
            "params": {"increment_modifier": str(self.params.increment_modifier)},
        }

    @staticmethod
    def from_dict(data: Mapping[str, Mapping[str, object]]) -> GenesisState:
        """Build a genesis state from the form ``to_dict`` produces."""
        try:
            minter_data = data["minter"]
            params_data = data["params"]
            minter = Minter(
                mint_remainder=Dec(minter_data["mint_remainder"]),
                norm_time_passed=Dec(minter_data["norm_time_passed"]),
            )
            params = Params(increment_modifier=int(params_data["increment_modifier"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"failed to unmarshal {MODULE_NAME} genesis state: {exc}") from exc
        return GenesisState(minter=minter, params=params)


def default_genesis() -> GenesisState:
    return GenesisState()


@dataclass(frozen=True)
class MintEvent:
    """Emitted once for every block that mints."""

    minted_denom: str
    minted_tokens: int
    type: str = EVENT_TYPE_MINT

    @property
    def attributes(self) -> dict[str, str]:
        return {
            ATTRIBUTE_MINTED_DENOM: self.minted_denom,
            ATTRIBUTE_MINTED_TOKENS: str(self.minted_tokens),
        }


class MintKeeper:
    """Holds the minter and parameters and mints through the bank keeper."""

    def __init__(
        self, bank_keeper: BankKeeper, fee_collector_name: str = FEE_COLLECTOR_NAME
    ) -> None:
        self.bank_keeper = bank_keeper
        self.fee_collector_name = fee_collector_name
        self.logger = logging.getLogger(f"x/{MODULE_NAME}")
        self.events: list[MintEvent] = []
        self._minter: Minter | None = None
        self._params: Params | None = None

    def get_minter(self) -> Minter:
        if self._minter is None:
            raise RuntimeError("stored minter should not have been nil")
        return self._minter

    def set_minter(self, minter: Minter) -> None:
        self._minter = minter

    def get_params(self) -> Params:
        if self._params is None:
            raise RuntimeError("mint parameters have not been set")
        return self._params

    def set_params(self, params: Params) -> None:
        params.validate()
        self._params = params

    def mint_coins(self, coins: Iterable[Coin]) -> None:
        """Mint into the module account; an empty set is a no-op."""
        coins = coins if isinstance(coins, Coins) else Coins(coins)
        if coins.is_empty():
            return
        self.bank_keeper.mint_coins(MODULE_NAME, coins)

    def add_collected_fees(self, fees: Iterable[Coin]) -> None:
        """Move coins from the module account to the fee collector."""
        self.bank_keeper.send_coins_from_module_to_module(
            MODULE_NAME, self.fee_collector_name, fees
        )


def normalize_block_height_inc(increment_modifier: int) -> Dec:
    """The normalised time step for one block."""
    total_blocks = increment_modifier * TOTAL_DAYS
    return Dec(1).quo_int(total_blocks) * FINAL_NORM_TIME_PASSED


def calculate_integral(t: Dec) -> Dec:
    """Integral of the emission curve: 0.6 t^3 - 26.5 t^2 + 358 t."""
    return ZERO_POINT_SIX * t.power(3) - TWENTY_SIX_POINT_FIVE * t.power(2) + Dec(358) * t


def calculate_minted_coins(minter: Minter, increment: Dec) -> Dec:
    """Amount in acudos to mint when advancing the minter by ``increment``."""
    prev_step = calculate_integral(min_dec(minter.norm_time_passed, FINAL_NORM_TIME_PASSED))
    next_step = calculate_integral(
        min_dec(minter.norm_time_passed + increment, FINAL_NORM_TIME_PASSED)
    )
    return (next_step - prev_step) * _SCALE


def minting_info(minter: Minter) -> dict[str, int]:
    """Amounts minted so far, left to mint and in total, in acudos."""
    skipped = calculate_integral(INITIAL_NORM_TIME_PASSED)
    reached = min_dec(minter.norm_time_passed, FINAL_NORM_TIME_PASSED)
    minted = (calculate_integral(reached) - skipped) * _SCALE
    total = (calculate_integral(FINAL_NORM_TIME_PASSED) - skipped) * _SCALE
    return {
        "minted_so_far": minted.truncate_int(),
        "left": (total - minted).truncate_int(),
        "total": total.truncate_int(),
    }


def begin_blocker(keeper: MintKeeper) -> MintEvent | None:
    """Mint this block's coins and pass them to the fee collector."""
    minter = keeper.get_minter()
    params = keeper.get_params()
    if minter.norm_time_passed > FINAL_NORM_TIME_PASSED:
        return None

    increment = normalize_block_height_inc(params.increment_modifier)
    amount_dec = calculate_minted_coins(minter, increment)
    amount = amount_dec.truncate_int()
    minted = new_coins(Coin(DENOM, amount))
    keeper.mint_coins(minted)

    minter = replace(
        minter,
        norm_time_passed=minter.norm_time_passed + increment,
        mint_remainder=amount_dec - amount,
    )
    keeper.set_minter(minter)
    keeper.add_collected_fees(minted)

    info = minting_info(minter)
    keeper.logger.info(
        "CudosMint module minted_so_far=%s%s left=%s%s total=%s%s",
        info["minted_so_far"], DENOM, info["left"], DENOM, info["total"], DENOM,
    )

    event = MintEvent(minted_denom=DENOM, minted_tokens=amount)
    keeper.events.append(event)
    return event


def handle_msg(keeper: MintKeeper, msg: object) -> None:
    """The module accepts no messages."""
    raise UnknownRequestError().wrap(
        f"unrecognized {MODULE_NAME} message type: {type(msg).__name__}"
    )


def query(keeper: MintKeeper, path: Sequence[str]) -> bytes:
    """Legacy query entry point; the module serves no endpoints."""
    if not path:
        raise UnknownRequestError().wrap(f"empty {MODULE_NAME} query path")
    raise UnknownRequestError().wrap(f"unknown {MODULE_NAME} query endpoint: {path[0]}")


def init_genesis(keeper: MintKeeper, state: GenesisState) -> None:
    keeper.set_minter(state.minter)
    keeper.set_params(state.params)


def export_genesis(keeper: MintKeeper) -> GenesisState:
    return GenesisState(minter=keeper.get_minter(), params=keeper.get_params())