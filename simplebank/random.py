"""Random values for accounts, used to fill databases with sample data."""

import random

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
CURRENCIES = ("EUR", "USD", "CAD")


def random_int(min_value, max_value):
    """Return a random integer between min_value and max_value, both included."""
    if max_value < min_value:
        raise ValueError(
            f"empty range: min_value {min_value} is greater than max_value {max_value}"
        )
    return min_value + random.randrange(max_value - min_value + 1)


def random_string(n):
    """Return a string of n random lower-case letters."""
    if n < 0:
        raise ValueError(f"length must not be negative, got {n}")
    return "".join(random.choices(ALPHABET, k=n))


def random_owner():
    """Return a random account owner name."""
    return random_string(6)


def random_money():
    """Return a random amount of money."""
    return random_int(0, 1000)


def random_currency():
    """Return a random supported currency code."""
    return random.choice(CURRENCIES)