"""The admin module: admin-token holders may spend from the community pool."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .address import AccAddress, acc_address_from_bech32
from .bank import BankKeeper, DistributionKeeper
from .coins import Coins
from .errors import (
    InvalidAddressError,
    InvalidCoinsError,
    UnauthorizedError,
    UnknownRequestError,
)

MODULE_NAME = "admin"
STORE_KEY = MODULE_NAME
ROUTER_KEY = MODULE_NAME
QUERIER_ROUTE = MODULE_NAME
MEM_STORE_KEY = "mem_capability"
ADMIN_DENOM = "cudosAdmin"
DEFAULT_INDEX = 1
CONSENSUS_VERSION = 1

TYPE_MSG_SEND = "adminSpendCommunityPool"
TYPE_MSG_MULTI_SEND = "multisend"


def key_prefix(prefix: str) -> bytes:
    return prefix.encode()


@dataclass(frozen=True)
class MsgAdminSpendCommunityPool:
    """Request to pay coins from the community pool to ``to_address``."""

    initiator: str = ""
    to_address: str = ""
    coins: Coins = field(default_factory=Coins)

    def route(self) -> str:
        return ROUTER_KEY

    def type(self) -> str:
        return TYPE_MSG_SEND

    def validate_basic(self) -> None:
        """Check addresses and coins without touching state."""
        try:
            acc_address_from_bech32(self.initiator)
        except InvalidAddressError as exc:
            raise InvalidAddressError().wrap(f"Invalid sender address ({exc})") from exc
        try:
            acc_address_from_bech32(self.to_address)
        except InvalidAddressError as exc:
            raise InvalidAddressError().wrap(f"Invalid recipient address ({exc})") from exc
        if not self.coins.is_valid() or not self.coins.is_all_positive():
            raise InvalidCoinsError().wrap(str(self.coins))

    def get_sign_bytes(self) -> bytes:
        """Canonical JSON with sorted keys, as signed by the initiator."""
        document: dict[str, object] = {
            "coins": [{"amount": str(c.amount), "denom": c.denom} for c in self.coins]
        }
        if self.initiator:
            document["initiator"] = self.initiator
        if self.to_address:
            document["to_address"] = self.to_address
        return json.dumps(document, sort_keys=True, separators=(",", ":")).encode()

    def get_signers(self) -> list[AccAddress]:
        return [acc_address_from_bech32(self.initiator)]


def new_msg_admin_spend_community_pool(
    from_addr: AccAddress, to_addr: AccAddress, amount: Coins
) -> MsgAdminSpendCommunityPool:
    return MsgAdminSpendCommunityPool(str(from_addr), str(to_addr), amount)


@dataclass(frozen=True)
class GenesisState:
    """The admin module keeps no genesis data."""

    def validate(self) -> None:
        return None


def default_genesis() -> GenesisState:
    return GenesisState()


class AdminKeeper:
    """Gives the admin module access to the distribution and bank keepers."""

    def __init__(self, distribution_keeper: DistributionKeeper, bank_keeper: BankKeeper) -> None:
        self.distribution_keeper = distribution_keeper
        self.bank_keeper = bank_keeper
        self.logger = logging.getLogger(f"x/{MODULE_NAME}")

    def admin_distribute_from_fee_pool(self, amount: Coins, receive_addr: AccAddress) -> None:
        self.distribution_keeper.distribute_from_fee_pool(amount, receive_addr)


class MsgServer:
    """Executes admin module messages against a keeper."""

    def __init__(self, keeper: AdminKeeper) -> None:
        self.keeper = keeper

    def admin_spend_community_pool(self, msg: MsgAdminSpendCommunityPool) -> None:
        initiator = acc_address_from_bech32(msg.initiator)
        balance = self.keeper.bank_keeper.get_balance(initiator, ADMIN_DENOM)
        if not balance.is_positive():
            raise UnauthorizedError().wrap(
                f"Insufficient permissions. Address '{initiator}' has no {ADMIN_DENOM} tokens"
            )
        receiver = acc_address_from_bech32(msg.to_address)
        self.keeper.admin_distribute_from_fee_pool(msg.coins, receiver)


def handle_msg(keeper: AdminKeeper, msg: object) -> None:
    """Route a message to the admin message server."""
    if isinstance(msg, MsgAdminSpendCommunityPool):
        MsgServer(keeper).admin_spend_community_pool(msg)
        return
    raise UnknownRequestError().wrap(
        f"unrecognized {MODULE_NAME} message type: {type(msg).__name__}"
    )


def query(keeper: AdminKeeper, path: Sequence[str]) -> bytes:
    """Legacy query entry point; the module serves no endpoints."""
    if not path:
        raise UnknownRequestError().wrap(f"empty {MODULE_NAME} query path")
    raise UnknownRequestError().wrap(f"unknown {MODULE_NAME} query endpoint: {path[0]}")


def init_genesis(keeper: AdminKeeper, state: GenesisState) -> None:
    """Nothing to load: the module holds no state of its own."""
    state.validate()


def export_genesis(keeper: AdminKeeper) -> GenesisState:
    return default_genesis()