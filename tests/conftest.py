"""
Shared fixtures for the splitledger test suite.
"""

import random
from typing import Callable, List, Optional

import pytest

from splitledger.cli.render import _Color
from splitledger.core.models import User
from splitledger.ledger.group import Group


@pytest.fixture(autouse=True)
def plain_output():
    """Reports without ANSI codes, so substring asserts are stable."""
    _Color.configure(False)
    yield
    _Color.configure(False)


@pytest.fixture
def abc():
    return User("A"), User("B"), User("C")


@pytest.fixture
def group(abc):
    """Group 'Trip' with members A, B, C in that order, all at zero."""
    g = Group("Trip")
    for user in abc:
        g.add_member(user)
    return g


def _random_event(group: Group, users: List[User], rng: random.Random) -> None:
    if rng.random() < 0.7:
        payer = rng.choice(users)
        participants = rng.sample(users, rng.randint(1, len(users)))
        shares = {u: rng.randint(0, 500) for u in participants}
        total = sum(shares.values()) + rng.randint(0, 50)
        group.add_expense(payer, total, shares)
    else:
        a, b = rng.sample(users, 2)
        group.make_payment(a, b, rng.randint(0, 300))


@pytest.fixture
def random_ledger():
    """
    Factory: build a group with seeded random expenses and payments.

    `after_each(group)` runs after every event when given.
    """
    def build(
        n_users: int = 6,
        n_events: int = 40,
        seed: int = 0,
        after_each: Optional[Callable[[Group], None]] = None,
    ) -> Group:
        rng = random.Random(seed)
        users = [User(f"u{i}") for i in range(n_users)]
        group = Group(f"random-{seed}")
        for user in users:
            group.add_member(user)
        for _ in range(n_events):
            _random_event(group, users, rng)
            if after_each is not None:
                after_each(group)
        return group

    return build
