"""In-memory bank and distribution keepers, plus the chain's custom burn rules."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .address import AccAddress, new_module_address
from .coins import Coin, Coins, new_coins
from .dec import Dec
from .errors import InsufficientFundsError, InvalidCoinsError

DISTRIBUTION_MODULE = "distribution"
SEND_TO_COMMUNITY_DENOM = "acudos"
IGNORED_DENOM = "cudosAdmin"


def _as_valid_coins(coins: Iterable[Coin]) -> Coins:
    coins = coins if isinstance(coins, Coins) else Coins(coins)
    if not coins.is_valid():
        raise InvalidCoinsError().wrap(str(coins))
    return coins


def _to_coins(totals: Mapping[str, int]) -> Coins:
    return Coins(Coin(denom, amount) for denom, amount in sorted(totals.items()) if amount)


class BankKeeper:
    """Tracks account balances and the total supply of every denomination."""

    def __init__(self) -> None:
        self._balances: dict[AccAddress, dict[str, int]] = {}
        self._supply: dict[str, int] = {}

    def module_address(self, name: str) -> AccAddress:
        """Address of the module account called ``name``."""
        return new_module_address(name)

    def _credit(self, addr: AccAddress, coins: Coins) -> None:
        balance = self._balances.setdefault(addr, {})
        for coin in coins:
            balance[coin.denom] = balance.get(coin.denom, 0) + coin.amount

    def _debit(self, addr: AccAddress, coins: Coins) -> None:
        balance = self._balances.get(addr, {})
        for coin in coins:
            have = balance.get(coin.denom, 0)
            if have < coin.amount:
                raise InsufficientFundsError().wrap(
                    f"{have}{coin.denom} is smaller than {coin}"
                )
        for coin in coins:
            remaining = balance[coin.denom] - coin.amount
            if remaining:
                balance[coin.denom] = remaining
            else:
                del balance[coin.denom]

    def mint_coins(self, module: str, coins: Iterable[Coin]) -> None:
        """Create new coins in a module account and add them to the supply."""
        coins = _as_valid_coins(coins)
        self._credit(self.module_address(module), coins)
        for coin in coins:
            self._supply[coin.denom] = self._supply.get(coin.denom, 0) + coin.amount

    def burn_coins(self, module: str, coins: Iterable[Coin]) -> None:
        """Destroy coins held by a module account and remove them from the supply."""
        coins = _as_valid_coins(coins)
        self._debit(self.module_address(module), coins)
        for coin in coins:
            remaining = self._supply.get(coin.denom, 0) - coin.amount
            if remaining:
                self._supply[coin.denom] = remaining
            else:
                self._supply.pop(coin.denom, None)

    def send_coins(
        self, sender: AccAddress, recipient: AccAddress, coins: Iterable[Coin]
    ) -> None:
        """Move coins between two accounts; the sender must hold them all."""
        coins = _as_valid_coins(coins)
        self._debit(sender, coins)
        self._credit(recipient, coins)

    def send_coins_from_module_to_module(
        self, sender_module: str, recipient_module: str, coins: Iterable[Coin]
    ) -> None:
        self.send_coins(
            self.module_address(sender_module),
            self.module_address(recipient_module),
            coins,
        )

    def send_coins_from_module_to_account(
        self, sender_module: str, recipient: AccAddress, coins: Iterable[Coin]
    ) -> None:
        self.send_coins(self.module_address(sender_module), recipient, coins)

    def get_balance(self, addr: AccAddress, denom: str) -> Coin:
        return Coin(denom, self._balances.get(addr, {}).get(denom, 0))

    def get_all_balances(self, addr: AccAddress) -> Coins:
        return _to_coins(self._balances.get(addr, {}))

    def total_supply(self) -> Coins:
        return _to_coins(self._supply)


class DistributionKeeper:
    """Holds the community pool, backed by the distribution module account."""

    def __init__(self, bank: BankKeeper) -> None:
        self._bank = bank
        self._pool: dict[str, Dec] = {}

    def distribution_address(self) -> AccAddress:
        return self._bank.module_address(DISTRIBUTION_MODULE)

    def community_pool(self) -> dict[str, Dec]:
        """The community pool as a mapping from denomination to amount."""
        return dict(self._pool)

    def set_community_pool(self, coins: Mapping[str, Dec | int] | Iterable[Coin]) -> None:
        if isinstance(coins, Mapping):
            pool = {denom: Dec(amount) for denom, amount in coins.items()}
        else:
            pool: dict[str, Dec] = {}
            for coin in coins:
                pool[coin.denom] = pool.get(coin.denom, Dec(0)) + coin.amount
        if any(amount.is_negative() for amount in pool.values()):
            raise ValueError("community pool amounts must not be negative")
        self._pool = {denom: amount for denom, amount in pool.items() if not amount.is_zero()}

    def fund_community_pool(self, amount: Iterable[Coin], sender: AccAddress) -> None:
        """Move coins from ``sender`` into the community pool."""
        amount = _as_valid_coins(amount)
        self._bank.send_coins(sender, self.distribution_address(), amount)
        for coin in amount:
            self._pool[coin.denom] = self._pool.get(coin.denom, Dec(0)) + coin.amount

    def distribute_from_fee_pool(self, amount: Iterable[Coin], receiver: AccAddress) -> None:
        """Pay coins out of the community pool to ``receiver``."""
        amount = _as_valid_coins(amount)
        pool = dict(self._pool)
        for coin in amount:
            remaining = pool.get(coin.denom, Dec(0)) - coin.amount
            if remaining.is_negative():
                raise InsufficientFundsError(
                    "community pool does not have sufficient coins to distribute"
                )
            pool[coin.denom] = remaining
        self._bank.send_coins_from_module_to_account(DISTRIBUTION_MODULE, receiver, amount)
        self._pool = {denom: value for denom, value in pool.items() if not value.is_zero()}


class CustomBankKeeper(BankKeeper):
    """Bank keeper whose burns send acudos to the community pool and skip admin tokens."""

    def __init__(self) -> None:
        super().__init__()
        self._distr: DistributionKeeper | None = None

    def set_distr_keeper(self, distr_keeper: DistributionKeeper) -> None:
        self._distr = distr_keeper

    def burn_coins(self, module: str, coins: Iterable[Coin]) -> None:
        if self._distr is None:
            raise RuntimeError("distr keeper not set for bank keeper")
        to_burn = Coins()
        for coin in coins:
            if coin.denom == SEND_TO_COMMUNITY_DENOM:
                self._distr.fund_community_pool(new_coins(coin), self.module_address(module))
            elif coin.denom == IGNORED_DENOM:
                continue
            else:
                to_burn = to_burn.add(coin)
        if to_burn:
            super().burn_coins(module, to_burn)