# cudosnode

State-machine logic for a proof-of-stake chain's custom modules: a
ten-year token minting schedule, an admin module that lets holders of
admin tokens spend from the community pool, and a bank keeper with
custom burn rules. Everything runs in memory as a plain Python library
with no dependencies beyond the standard library.

## Modules

- `cudosnode.dec`: `Dec`, a signed fixed-point decimal with 18 digits of
  precision. Multiplication and division round half to even; `quo_int`
  and `truncate_int` truncate toward zero; `power` raises to a
  non-negative integer power. Helpers: `dec_from_str`, `dec_with_prec`,
  `min_dec`.
- `cudosnode.address`: bech32 encoding (`bech32_encode`, `bech32_decode`),
  `AccAddress` (raw bytes, shown in bech32 under the `cosmos` prefix),
  `acc_address_from_bech32`, and `new_module_address`, which takes the
  first 20 bytes of the SHA-256 of a module name.
- `cudosnode.coins`: `Coin` (a denomination and a non-negative integer
  amount), `Coins` (an immutable sequence of coins with `add`, `sub`,
  `amount_of`, `is_valid`, `is_all_positive`, `is_empty`), `new_coins`
  (sorted, zeros dropped, duplicates rejected) and
  `parse_coins_normalized` (parses `"10acudos,1.5eth"`, truncating decimal
  amounts).
- `cudosnode.bank`:
  - `BankKeeper` keeps account balances and the total supply, with
    `mint_coins`, `burn_coins`, `send_coins`,
    `send_coins_from_module_to_module`, `send_coins_from_module_to_account`,
    `get_balance`, `get_all_balances`, `total_supply` and
    `module_address`.
  - `DistributionKeeper` holds the community pool in the `distribution`
    module account, with `community_pool`, `set_community_pool`,
    `fund_community_pool` and `distribute_from_fee_pool`.
  - `CustomBankKeeper` overrides `burn_coins` so that `acudos` goes to the
    community pool, `cudosAdmin` is left untouched, and every other
    denomination is burned. Call `set_distr_keeper` before burning.
- `cudosnode.admin`: the `MsgAdminSpendCommunityPool` message
  (`route`, `type`, `validate_basic`, `get_sign_bytes`, `get_signers`),
  `new_msg_admin_spend_community_pool`, `AdminKeeper`, `MsgServer`,
  `handle_msg`, `query`, and the genesis helpers `GenesisState`,
  `default_genesis`, `init_genesis` and `export_genesis`. Only an initiator
  holding a positive `cudosAdmin` balance may spend from the pool.
- `cudosnode.mint`: the minting schedule. Emission follows
  `f(t) = 358 - 53 t + 1.8 t^2` over ten years of normalised time; each
  block mints the integral of `f` over one block step, scaled to `acudos`.
  It provides `Minter`, `Params`, `GenesisState` (with `to_dict` and
  `from_dict`), `MintEvent`, `MintKeeper`, `normalize_block_height_inc`,
  `calculate_integral`, `calculate_minted_coins`, `minting_info`,
  `begin_blocker`, `handle_msg`, `query`, `default_genesis`,
  `init_genesis`, `export_genesis`, `validate_minter` and
  `validate_increment_modifier`.
- `cudosnode.legacy_params`: the earlier parameter set, `LegacyParams`
  with its `blocks_per_day` field, `validate_blocks_per_day` and
  `default_legacy_params`.
- `cudosnode.errors`: `SdkError` and its subclasses `UnauthorizedError`,
  `InsufficientFundsError`, `UnknownRequestError`, `InvalidAddressError`
  and `InvalidCoinsError`. `SdkError.wrap` returns an error of the same
  kind with a prefixed message.

## Example: minting

```python
from cudosnode.bank import BankKeeper
from cudosnode.mint import MintKeeper, begin_blocker, default_genesis, init_genesis

bank = BankKeeper()
keeper = MintKeeper(bank, fee_collector_name="fee_collector")
init_genesis(keeper, default_genesis())

event = begin_blocker(keeper)
print(event.minted_tokens, event.minted_denom)
print(bank.get_balance(bank.module_address("fee_collector"), "acudos"))
```

Each call to `begin_blocker` advances the minter by one block step, mints
into the `cudoMint` module account, moves the coins to the fee collector,
records a `MintEvent` in `keeper.events` and returns it. Once the
normalised time passes ten it mints nothing and returns `None`.

## Example: spending from the community pool

```python
from cudosnode.address import AccAddress
from cudosnode.admin import AdminKeeper, handle_msg, new_msg_admin_spend_community_pool
from cudosnode.bank import BankKeeper, DistributionKeeper
from cudosnode.coins import Coin, new_coins

bank = BankKeeper()
distr = DistributionKeeper(bank)
admin = AdminKeeper(distr, bank)

admin_addr = AccAddress(b"admin_account_______")
receiver = AccAddress(b"receiver_account____")

bank.mint_coins("treasury", new_coins(Coin("cudosAdmin", 1), Coin("acudos", 100)))
bank.send_coins_from_module_to_account("treasury", admin_addr, new_coins(Coin("cudosAdmin", 1)))
distr.fund_community_pool(new_coins(Coin("acudos", 100)), bank.module_address("treasury"))

msg = new_msg_admin_spend_community_pool(admin_addr, receiver, new_coins(Coin("acudos", 40)))
msg.validate_basic()
handle_msg(admin, msg)
print(bank.get_balance(receiver, "acudos"))  # 40acudos
```

## What this package does not do

It is a library of module logic only. It does not run a node or take part
in consensus, has no command-line program, serves no gRPC or REST
endpoints, keeps no state on disk, and does not sign or broadcast
transactions or manage keys. The keepers hold their state in memory for
as long as the objects live.

## Running the tests

```
pip install -e ".[test]"
pytest
```