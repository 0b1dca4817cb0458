"""
Trip Demo - the built-in scenario behind `splitledger demo` and menu option 10.

Five users "0".."4" share a group "Trip". Three expenses leave:

    0: +200    1: +200    2: -400    3: 0    4: 0

Settling emits "2 will pay 200 to 0" then "2 will pay 200 to 1".
"""

from splitledger.ledger.group import Group
from splitledger.runtime.context import AppState


TRIP_GROUP = "Trip"
TRIP_USERS = ("0", "1", "2", "3", "4")


def build_trip(state: AppState) -> Group:
    """
    Register the demo users and group in `state` and record the expenses.

    Settlement is left to the caller so the unsettled balances can be shown.
    """
    a, b, c, d, e = (state.create_user(name) for name in TRIP_USERS)

    trip = state.create_group(TRIP_GROUP)
    for user in (a, b, c, d, e):
        trip.add_member(user)

    trip.add_expense(a, 600, {a: 200, b: 0, c: 400})
    trip.add_expense(b, 300, {a: 100, b: 100, c: 100})
    trip.add_expense(c, 100, {a: 100, b: 0, c: 0})
    return trip
