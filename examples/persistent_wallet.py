#!/usr/bin/env python3
"""
Example: a wallet whose state survives restarts
"""

import os
import tempfile

from partner_multisig.addresses import PartnerKey, to_base_units
from partner_multisig.config import WalletConfig
from partner_multisig.wallet import MultiSigWallet

def main():
    print("=== Persistent Partner Wallet ===")
    print()

    owner, alice, bob = (PartnerKey().address for _ in range(3))
    state_path = os.path.join(tempfile.mkdtemp(), "wallet.json")

    config = WalletConfig(owner=owner, partners=[alice, bob], state_path=state_path)

    # First process: deploy, fund and submit
    wallet = MultiSigWallet.from_config(config)
    wallet.deposit(owner, to_base_units("5"))
    tx_id = wallet.submit_transaction(alice, bob, to_base_units("2"), b"rent")
    print(f"📝 Submitted transaction {tx_id}, state saved to {state_path}")

    # Second process: reload and finish the approval
    restored = MultiSigWallet.from_config(config)
    print(f"🔁 Reloaded wallet, state root {restored.state_root()[:16]}...")
    restored.confirm_transaction(alice, tx_id)
    restored.execute_transaction(owner, tx_id)
    print(f"✅ Executed: {restored.get_transaction(tx_id).executed}")
    print(f"💰 Remaining balance: {restored.get_balance()}")

if __name__ == "__main__":
    main()
