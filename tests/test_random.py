import pytest

from simplebank.random import (
    ALPHABET,
    CURRENCIES,
    random_currency,
    random_int,
    random_money,
    random_owner,
    random_string,
)


@pytest.mark.parametrize("bounds", [(0, 10), (-5, 5), (100, 200)])
def test_random_int_stays_in_range(bounds):
    low, high = bounds
    values = {random_int(low, high) for _ in range(500)}
    assert min(values) >= low
    assert max(values) <= high


def test_random_int_single_value_range():
    assert random_int(7, 7) == 7


def test_random_int_covers_both_ends():
    values = {random_int(0, 2) for _ in range(500)}
    assert values == {0, 1, 2}


def test_random_int_rejects_empty_range():
    with pytest.raises(ValueError):
        random_int(5, 4)


@pytest.mark.parametrize("length", [0, 1, 6, 40])
def test_random_string_length_and_alphabet(length):
    value = random_string(length)
    assert len(value) == length
    assert set(value) <= set(ALPHABET)


def test_random_string_rejects_negative_length():
    with pytest.raises(ValueError):
        random_string(-1)


def test_random_owner():
    owner = random_owner()
    assert len(owner) == 6
    assert owner.islower() and owner.isalpha()


def test_random_money_in_range():
    for _ in range(200):
        assert 0 <= random_money() <= 1000


def test_random_currency_is_supported():
    seen = {random_currency() for _ in range(300)}
    assert seen <= set(CURRENCIES)
    assert seen == {"EUR", "USD", "CAD"}