#!/usr/bin/env python3
"""
Complete demo of the partner multisig wallet
"""

from partner_multisig.addresses import PartnerKey, to_base_units, from_base_units
from partner_multisig.config import configure_logging
from partner_multisig.errors import MultiSigError
from partner_multisig.wallet import MultiSigWallet

def main():
    configure_logging("WARNING")

    print("=" * 60)
    print("🏦 PARTNER MULTISIG WALLET - COMPLETE DEMO")
    print("=" * 60)
    print()

    # Step 1: Setup
    print("🔧 STEP 1: Generating partner keys")
    print("-" * 40)

    keys = {name: PartnerKey() for name in ["Owner", "Alice", "Bob", "Carol"]}
    for name, key in keys.items():
        print(f"✅ {name}: {key.address}")

    owner = keys["Owner"].address
    alice = keys["Alice"].address
    bob = keys["Bob"].address
    carol = keys["Carol"].address
    print()

    # Step 2: Deploy
    print("🏗️  STEP 2: Deploying wallet with Alice and Bob as partners")
    print("-" * 40)

    wallet = MultiSigWallet(owner, [alice, bob])
    wallet.notifier.subscribe(lambda event: print(f"   📣 {event.name} {event.to_dict()['args']}"))

    print(f"✅ Partners: {len(wallet.get_partners())}")
    print(f"✅ Required confirmations: {wallet.rules.required_confirmations(len(wallet.get_partners()))}")
    print()

    # Step 3: Fund
    print("💰 STEP 3: Funding the wallet")
    print("-" * 40)

    wallet.deposit(carol, to_base_units("2.5"))
    print(f"✅ Balance: {from_base_units(wallet.get_balance())} coins")
    print()

    # Step 4: Submit and confirm
    print("📝 STEP 4: Alice proposes paying Carol 1.0")
    print("-" * 40)

    tx_id = wallet.submit_transaction(alice, carol, to_base_units("1.0"), b"")
    print(f"✅ Transaction {tx_id} needs {wallet.calculate_confirmation_left(tx_id)} confirmation(s)")

    try:
        wallet.execute_transaction(bob, tx_id)
    except MultiSigError as e:
        print(f"❌ Early execution rejected: {e}")

    wallet.confirm_transaction(owner, tx_id)
    print(f"✅ Owner confirmed, {wallet.calculate_confirmation_left(tx_id)} left")
    print()

    # Step 5: Execute
    print("🚀 STEP 5: Executing")
    print("-" * 40)

    wallet.execute_transaction(bob, tx_id)
    print(f"✅ Executed: {wallet.get_transaction(tx_id).executed}")
    print(f"✅ Carol received: {from_base_units(wallet.transfer.balance_of(carol))} coins")
    print(f"✅ Wallet balance: {from_base_units(wallet.get_balance())} coins")

    try:
        wallet.execute_transaction(bob, tx_id)
    except MultiSigError as e:
        print(f"❌ Re-execution rejected: {e}")
    print()

    # Step 6: Administration
    print("🔐 STEP 6: Owner administration")
    print("-" * 40)

    wallet.add_new_partner(owner, carol)
    print(f"✅ Carol added, registry size {len(wallet.get_partners())}")

    wallet.pause_all_partners(owner)
    try:
        wallet.submit_transaction(alice, bob, 1, b"")
    except MultiSigError as e:
        print(f"❌ Submission while paused: {e}")
    wallet.unpause_all_partners(owner)

    try:
        wallet.set_contract_owner(alice, alice)
    except MultiSigError as e:
        print(f"❌ Alice cannot take ownership: {e}")
    print()

    print(f"🧾 State root: {wallet.state_root()}")
    print("=" * 60)

if __name__ == "__main__":
    main()
