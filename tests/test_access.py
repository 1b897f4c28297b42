import unittest
from partner_multisig.addresses import PartnerKey, ZERO_ADDRESS
from partner_multisig.errors import AccessDenied, InvalidInput, Paused
from partner_multisig.events import ContractOwnerChange, NewPartner
from partner_multisig.wallet import MultiSigWallet

class TestAccessControl(unittest.TestCase):

    def setUp(self):
        """Owner plus two configured partners, and some outsiders"""
        self.owner, self.p1, self.p2, self.p3, self.p4 = (PartnerKey().address for _ in range(5))
        self.wallet = MultiSigWallet(self.owner, [self.p1, self.p2])

    def test_deploy_sets_owner(self):
        self.assertEqual(self.wallet.get_contract_owner(), self.owner)

    def test_deploy_seeds_registry(self):
        """Owner first, then configured partners"""
        self.assertEqual(self.wallet.get_partners(), [self.owner, self.p1, self.p2])
        self.assertTrue(self.wallet.is_partner(self.p1))
        self.assertTrue(self.wallet.is_partner(self.p2))
        self.assertTrue(self.wallet.is_partner(self.owner))
        self.assertFalse(self.wallet.is_partner(self.p3))

    def test_deploy_validation(self):
        with self.assertRaises(InvalidInput):
            MultiSigWallet(ZERO_ADDRESS, [self.p1, self.p2])
        with self.assertRaises(InvalidInput):
            MultiSigWallet(self.owner, [self.p1])
        with self.assertRaises(InvalidInput):
            MultiSigWallet(self.owner, [self.p1, self.p1])
        with self.assertRaises(InvalidInput):
            MultiSigWallet(self.owner, [self.p1, ZERO_ADDRESS])
        with self.assertRaises(InvalidInput):
            MultiSigWallet(self.owner, [self.owner, self.p1])

    def test_address_case_is_normalized(self):
        self.assertTrue(self.wallet.is_partner(self.p1.upper().replace("0X", "0x")))

    def test_only_owner_adds_partners(self):
        with self.assertRaises(AccessDenied) as cm:
            self.wallet.add_new_partner(self.p1, self.p3)
        self.assertIn("only owner", str(cm.exception))
        self.assertEqual(len(self.wallet.get_partners()), 3)

    def test_add_partner_emits_event(self):
        self.wallet.add_new_partner(self.owner, self.p3)

        self.assertTrue(self.wallet.is_partner(self.p3))
        self.assertEqual(self.wallet.get_partners()[-1], self.p3)
        self.assertEqual(self.wallet.get_events(), [NewPartner(self.p3)])

    def test_add_partner_rejects_duplicates_and_null(self):
        with self.assertRaises(InvalidInput):
            self.wallet.add_new_partner(self.owner, self.p1)
        with self.assertRaises(InvalidInput):
            self.wallet.add_new_partner(self.owner, self.owner)
        with self.assertRaises(InvalidInput):
            self.wallet.add_new_partner(self.owner, ZERO_ADDRESS)
        self.assertEqual(len(self.wallet.get_partners()), 3)

    def test_registry_only_grows(self):
        sizes = [len(self.wallet.get_partners())]
        for partner in (self.p3, self.p4):
            self.wallet.add_new_partner(self.owner, partner)
            sizes.append(len(self.wallet.get_partners()))
        self.assertEqual(sizes, [3, 4, 5])

    def test_only_owner_changes_owner(self):
        with self.assertRaises(AccessDenied):
            self.wallet.set_contract_owner(self.p1, self.p1)
        self.assertEqual(self.wallet.get_contract_owner(), self.owner)

    def test_owner_cannot_be_null(self):
        with self.assertRaises(InvalidInput) as cm:
            self.wallet.set_contract_owner(self.owner, ZERO_ADDRESS)
        self.assertEqual(str(cm.exception), "invalid address")

    def test_change_owner(self):
        self.wallet.set_contract_owner(self.owner, self.p1)

        self.assertEqual(self.wallet.get_contract_owner(), self.p1)
        self.assertEqual(self.wallet.get_events(), [ContractOwnerChange(self.owner, self.p1)])

        # Old owner loses admin rights but stays in the registry
        with self.assertRaises(AccessDenied):
            self.wallet.add_new_partner(self.owner, self.p3)
        self.assertTrue(self.wallet.is_partner(self.owner))

    def test_new_owner_outside_registry_is_partner(self):
        self.wallet.set_contract_owner(self.owner, self.p3)

        self.assertTrue(self.wallet.is_partner(self.p3))
        self.assertNotIn(self.p3, self.wallet.get_partners())
        self.wallet.submit_transaction(self.p3, self.p1, 1, b"")

    def test_new_owner_can_join_registry(self):
        self.wallet.set_contract_owner(self.owner, self.p3)
        self.wallet.add_new_partner(self.p3, self.p3)

        self.assertEqual(self.wallet.get_partners(), [self.owner, self.p1, self.p2, self.p3])
        self.assertEqual(self.wallet.get_events()[-1], NewPartner(self.p3))
        with self.assertRaises(InvalidInput):
            self.wallet.add_new_partner(self.p3, self.p3)

    def test_only_owner_pauses(self):
        with self.assertRaises(AccessDenied):
            self.wallet.pause_all_partners(self.p1)
        with self.assertRaises(AccessDenied):
            self.wallet.unpause_all_partners(self.p1)
        self.assertFalse(self.wallet.is_paused())

    def test_pause_blocks_partners_until_unpaused(self):
        self.wallet.pause_all_partners(self.owner)
        self.assertTrue(self.wallet.is_paused())

        with self.assertRaises(Paused) as cm:
            self.wallet.submit_transaction(self.owner, self.p3, 1000, b"\x00")
        self.assertEqual(str(cm.exception), "owner has paused the access")

        # Owner-only operations still work while paused
        self.wallet.add_new_partner(self.owner, self.p3)

        self.wallet.unpause_all_partners(self.owner)
        self.assertEqual(self.wallet.submit_transaction(self.owner, self.p3, 1000, b"\x00"), 0)

    def test_non_owner_admin_calls_never_succeed(self):
        for caller in (self.p1, self.p2, self.p3):
            for call in (
                lambda: self.wallet.set_contract_owner(caller, self.p4),
                lambda: self.wallet.add_new_partner(caller, self.p4),
                lambda: self.wallet.pause_all_partners(caller),
                lambda: self.wallet.unpause_all_partners(caller),
            ):
                with self.assertRaises(AccessDenied):
                    call()

if __name__ == '__main__':
    unittest.main()
