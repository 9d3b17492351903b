import pytest

from cudosnode.coins import Coin, Coins, new_coins, parse_coins_normalized


def test_new_coins_sorts_and_drops_zero():
    coins = new_coins(Coin("eth", 5), Coin("acudos", 3), Coin("btc", 0))
    assert [c.denom for c in coins] == ["acudos", "eth"]
    assert coins.is_valid()


def test_unsanitized_listing_with_zero():
    coins = Coins([Coin("acudos", 123), Coin("eth", 0)])
    assert str(coins) == "123acudos,0eth"
    assert not coins.is_valid()
    assert not coins.is_all_positive()


def test_zero_only_coins_are_empty():
    coins = new_coins(Coin("acudos", 0))
    assert coins.is_empty()
    assert str(coins) == ""
    assert coins.is_valid()
    assert not coins.is_all_positive()


def test_multiple_positive_coins_valid():
    coins = new_coins(Coin("acudos", 123), Coin("eth", 123))
    assert coins.is_valid()
    assert coins.is_all_positive()
    assert str(coins) == "123acudos,123eth"


def test_unsorted_coins_invalid():
    assert not Coins([Coin("eth", 1), Coin("acudos", 1)]).is_valid()


def test_duplicate_denoms_rejected():
    with pytest.raises(ValueError):
        new_coins(Coin("acudos", 1), Coin("acudos", 2))


def test_amount_of():
    coins = new_coins(Coin("acudos", 10), Coin("eth", 7))
    assert coins.amount_of("acudos") == 10
    assert coins.amount_of("eth") == 7
    assert coins.amount_of("btc") == 0
    with pytest.raises(ValueError):
        coins.amount_of("x")


def test_add_then_sub_round_trip():
    base = new_coins(Coin("acudos", 10), Coin("eth", 7))
    extra = new_coins(Coin("acudos", 2), Coin("btc", 4))
    total = base.add(*extra)
    assert [c.denom for c in total] == sorted(c.denom for c in total)
    assert total.sub(extra) == base
    assert total.sub(base) == extra


def test_add_to_empty():
    extra = new_coins(Coin("acudos", 2))
    assert Coins().add(*extra) == extra


def test_sub_to_zero_removes_denom():
    coins = new_coins(Coin("acudos", 10))
    assert coins.sub(coins).is_empty()


def test_sub_negative_raises():
    with pytest.raises(ValueError, match="negative"):
        new_coins(Coin("acudos", 1)).sub(new_coins(Coin("acudos", 2)))
    with pytest.raises(ValueError):
        Coins().sub(new_coins(Coin("eth", 1)))


def test_coin_validation():
    with pytest.raises(ValueError):
        Coin("x", 1)
    with pytest.raises(ValueError):
        Coin("acudos", -1)
    assert Coin("acudos", 0).is_valid()
    assert not Coin("acudos", 0).is_positive()


def test_coin_add_sub():
    a, b = Coin("acudos", 10), Coin("acudos", 4)
    assert (a + b) - b == a
    assert a.add(b).sub(a) == b
    with pytest.raises(ValueError):
        b.sub(a)
    with pytest.raises(ValueError):
        a.add(Coin("eth", 1))


def test_coin_string():
    assert str(Coin("acudos", 10)) == "10acudos"


def test_parse_coins():
    expected = new_coins(Coin("acudos", 10), Coin("eth", 5))
    assert parse_coins_normalized("10acudos,5eth") == expected
    assert parse_coins_normalized("5eth, 10acudos") == expected
    assert parse_coins_normalized("10 acudos,5eth") == expected


def test_parse_empty():
    assert parse_coins_normalized("   ").is_empty()


def test_parse_truncates_decimals():
    assert parse_coins_normalized("1.5acudos") == Coins([Coin("acudos", 1)])


def test_parse_drops_zero():
    assert parse_coins_normalized("0acudos,3eth") == new_coins(Coin("eth", 3))


@pytest.mark.parametrize("text", ["abc", "10", "10acudos,10acudos", ".5acudos", "-1acudos"])
def test_parse_errors(text):
    with pytest.raises(ValueError):
        parse_coins_normalized(text)


def test_parse_round_trip():
    coins = new_coins(Coin("acudos", 123), Coin("cudosAdmin", 4), Coin("eth", 9))
    assert parse_coins_normalized(str(coins)) == coins