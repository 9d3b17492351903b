import pytest

from cudosnode.address import AccAddress
from cudosnode.admin import (
    ROUTER_KEY,
    AdminKeeper,
    GenesisState,
    MsgAdminSpendCommunityPool,
    MsgServer,
    default_genesis,
    export_genesis,
    handle_msg,
    init_genesis,
    new_msg_admin_spend_community_pool,
    query,
)
from cudosnode.bank import CustomBankKeeper, DistributionKeeper
from cudosnode.coins import Coin, Coins, new_coins
from cudosnode.dec import Dec
from cudosnode.errors import (
    InsufficientFundsError,
    InvalidAddressError,
    InvalidCoinsError,
    SdkError,
    UnauthorizedError,
    UnknownRequestError,
)

BOND = "acudos"
ADMIN_DENOM = "cudosAdmin"
MINT = "cudoMint"
DISTR = "distribution"

RECEIVER = AccAddress(b"receiver____________")
ADMIN_ADDR = AccAddress(b"admin_______________")
NOT_ADMIN_ADDR = AccAddress(b"notadmin____________")


def make_chain():
    bank = CustomBankKeeper()
    distr = DistributionKeeper(bank)
    bank.set_distr_keeper(distr)
    return bank, distr, AdminKeeper(distr, bank)


def fund_pool(bank, distr, amount):
    coins = new_coins(Coin(BOND, amount))
    bank.mint_coins(MINT, coins)
    bank.send_coins_from_module_to_module(MINT, DISTR, coins)
    distr.set_community_pool(coins)


def test_route_and_type():
    msg = new_msg_admin_spend_community_pool(
        AccAddress(b"from"), AccAddress(b"to"), new_coins(Coin(BOND, 10))
    )
    assert msg.route() == ROUTER_KEY
    assert msg.type() == "adminSpendCommunityPool"


ADDR1 = AccAddress(b"from________________")
ADDR2 = AccAddress(b"to__________________")
ADDR_EMPTY = AccAddress(b"")
ADDR_LONG = AccAddress(b"Purposefully long address")
ACUDOS123 = new_coins(Coin(BOND, 123))
ACUDOS0 = new_coins(Coin(BOND, 0))
ACUDOS123ETH123 = new_coins(Coin(BOND, 123), Coin("eth", 123))
ACUDOS123ETH0 = Coins([Coin(BOND, 123), Coin("eth", 0)])


@pytest.mark.parametrize(
    "sender, recipient, coins",
    [
        (ADDR1, ADDR2, ACUDOS123),
        (ADDR1, ADDR2, ACUDOS123ETH123),
        (ADDR_LONG, ADDR2, ACUDOS123),
        (ADDR1, ADDR_LONG, ACUDOS123),
    ],
)
def test_validate_basic_accepts(sender, recipient, coins):
    msg = new_msg_admin_spend_community_pool(sender, recipient, coins)
    msg.validate_basic()
    assert msg.get_signers() == [sender]


@pytest.mark.parametrize(
    "sender, recipient, coins, error, text",
    [
        (ADDR1, ADDR2, ACUDOS0, InvalidCoinsError, ": invalid coins"),
        (ADDR1, ADDR2, ACUDOS123ETH0, InvalidCoinsError, "123acudos,0eth: invalid coins"),
        (
            ADDR_EMPTY,
            ADDR2,
            ACUDOS123,
            InvalidAddressError,
            "Invalid sender address (empty address string is not allowed): invalid address",
        ),
        (
            ADDR1,
            ADDR_EMPTY,
            ACUDOS123,
            InvalidAddressError,
            "Invalid recipient address (empty address string is not allowed): invalid address",
        ),
    ],
)
def test_validate_basic_rejects(sender, recipient, coins, error, text):
    msg = new_msg_admin_spend_community_pool(sender, recipient, coins)
    with pytest.raises(error) as info:
        msg.validate_basic()
    assert str(info.value) == text


def test_get_sign_bytes():
    msg = new_msg_admin_spend_community_pool(
        AccAddress(b"input"), AccAddress(b"output"), new_coins(Coin(BOND, 10))
    )
    expected = (
        '{"coins":[{"amount":"10","denom":"acudos"}],'
        '"initiator":"cosmos1d9h8qat57ljhcm","to_address":"cosmos1da6hgur4wsmpnjyg"}'
    )
    assert msg.get_sign_bytes().decode() == expected


def test_get_signers():
    sender = AccAddress(b"input111111111111111")
    msg = new_msg_admin_spend_community_pool(sender, AccAddress(), new_coins())
    signers = msg.get_signers()
    assert len(signers) == 1
    assert signers[0] == sender


@pytest.mark.parametrize(
    "withdraw, fee, expect_error, remaining",
    [
        (30, 40, False, 10),
        (50, 40, True, None),
        (40, 40, False, 0),
        (0, 40, False, 40),
        (0, 0, False, 0),
    ],
)
def test_admin_distribute_from_fee_pool(withdraw, fee, expect_error, remaining):
    bank, distr, keeper = make_chain()
    fund_pool(bank, distr, fee)
    amount = new_coins(Coin(BOND, withdraw))
    if expect_error:
        with pytest.raises(InsufficientFundsError):
            keeper.admin_distribute_from_fee_pool(amount, RECEIVER)
        assert bank.get_balance(RECEIVER, BOND).amount == 0
    else:
        keeper.admin_distribute_from_fee_pool(amount, RECEIVER)
        assert bank.get_balance(RECEIVER, BOND).amount == withdraw
        assert distr.community_pool().get(BOND, Dec(0)) == Dec(remaining)


@pytest.mark.parametrize(
    "sender, withdraw, pool, error, remaining",
    [
        (ADMIN_ADDR, 30, 40, None, 10),
        (ADMIN_ADDR, 50, 40, InsufficientFundsError, None),
        (ADMIN_ADDR, 40, 40, None, 0),
        (ADMIN_ADDR, 0, 40, None, 40),
        (ADMIN_ADDR, 0, 0, None, 0),
        (NOT_ADMIN_ADDR, 20, 30, UnauthorizedError, None),
        (NOT_ADMIN_ADDR, 40, 30, UnauthorizedError, None),
    ],
)
def test_msg_admin_spend_community_pool(sender, withdraw, pool, error, remaining):
    bank, distr, keeper = make_chain()
    admin_coins = new_coins(Coin(BOND, 100), Coin(ADMIN_DENOM, 100))
    bank.mint_coins(MINT, admin_coins)
    bank.send_coins_from_module_to_account(MINT, ADMIN_ADDR, admin_coins)
    fund_pool(bank, distr, pool)
    msg = MsgAdminSpendCommunityPool(
        initiator=str(sender),
        to_address=str(RECEIVER),
        coins=new_coins(Coin(BOND, withdraw)),
    )
    server = MsgServer(keeper)
    if error is not None:
        with pytest.raises(error):
            server.admin_spend_community_pool(msg)
        assert bank.get_balance(RECEIVER, BOND).amount == 0
    else:
        server.admin_spend_community_pool(msg)
        assert bank.get_balance(RECEIVER, BOND) == Coin(BOND, withdraw)
        assert distr.community_pool().get(BOND, Dec(0)) == Dec(remaining)


def test_unauthorized_message_names_address():
    bank, distr, keeper = make_chain()
    fund_pool(bank, distr, 30)
    msg = new_msg_admin_spend_community_pool(
        NOT_ADMIN_ADDR, RECEIVER, new_coins(Coin(BOND, 20))
    )
    with pytest.raises(UnauthorizedError) as info:
        MsgServer(keeper).admin_spend_community_pool(msg)
    assert str(info.value) == (
        f"Insufficient permissions. Address '{NOT_ADMIN_ADDR}' has no cudosAdmin tokens"
        ": unauthorized"
    )


def test_handle_msg_dispatches_spend():
    bank, distr, keeper = make_chain()
    admin_coins = new_coins(Coin(ADMIN_DENOM, 1))
    bank.mint_coins(MINT, admin_coins)
    bank.send_coins_from_module_to_account(MINT, ADMIN_ADDR, admin_coins)
    fund_pool(bank, distr, 40)
    handle_msg(
        keeper,
        new_msg_admin_spend_community_pool(ADMIN_ADDR, RECEIVER, new_coins(Coin(BOND, 25))),
    )
    assert bank.get_balance(RECEIVER, BOND).amount == 25


def test_handle_msg_rejects_unknown_message():
    _, _, keeper = make_chain()
    with pytest.raises(UnknownRequestError) as info:
        handle_msg(keeper, object())
    assert str(info.value) == "unrecognized admin message type: object: unknown request"


def test_query_has_no_endpoints():
    _, _, keeper = make_chain()
    with pytest.raises(UnknownRequestError) as info:
        query(keeper, ["params"])
    assert str(info.value) == "unknown admin query endpoint: params: unknown request"
    assert isinstance(info.value, SdkError)


def test_genesis_round_trip():
    _, _, keeper = make_chain()
    init_genesis(keeper, default_genesis())
    assert export_genesis(keeper) == GenesisState()
    assert default_genesis() == GenesisState()