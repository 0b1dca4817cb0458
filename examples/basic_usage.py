"""
splitledger: Basic Usage Example

Demonstrates:
- Registering users and a group
- Recording expenses and a direct payment
- Previewing and applying debt simplification
- Checking the audit log
"""

from splitledger import AppState, strict_config


def main():
    """Basic splitledger usage."""

    print("="*60)
    print("splitledger: Basic Usage Example")
    print("="*60)
    print()

    # 1️⃣ Application state (strict mode: invariant breaks raise)
    print("1️⃣ Creating application state...")
    state = AppState(config=strict_config())
    alice, bob, carol = (state.create_user(n) for n in ("alice", "bob", "carol"))
    flat = state.create_group("Flat")
    for user in (alice, bob, carol):
        flat.add_member(user)
    print(f"✅ {state!r}")
    print()

    # 2️⃣ Expenses
    print("2️⃣ Recording expenses...")
    flat.add_expense(alice, 900, {alice: 300, bob: 300, carol: 300})
    flat.add_expense(bob, 120, {alice: 40, bob: 40, carol: 40})
    flat.make_payment(carol, alice, 50)
    for user, balance in flat.balances.items():
        print(f"  {user.name:<6} {balance:+d}")
    print()

    # 3️⃣ Settlement
    print("3️⃣ Pending transfers:")
    for transfer in flat.pending_debts():
        print(f"  {transfer}")
    flat.simplify_debts()
    print(f"✅ Settled, net total = {flat.net_total()}")
    print()

    # 4️⃣ Audit log
    print("4️⃣ Audit log:")
    for entry in flat.log:
        print(f"  #{entry.sequence} [{entry.event_type}] {entry.message}")
    print(f"✅ Chain intact: {flat.log.verify()}")


if __name__ == "__main__":
    main()
