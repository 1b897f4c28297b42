import unittest
from partner_multisig.addresses import PartnerKey, to_base_units
from partner_multisig.wallet import MultiSigWallet
from web_interface import app as web_app

class TestWebInterface(unittest.TestCase):

    def setUp(self):
        self.owner, self.p1, self.p2, self.outsider = (PartnerKey() for _ in range(4))
        self.wallet = MultiSigWallet(self.owner.address, [self.p1.address, self.p2.address])
        web_app.init_wallet(self.wallet)
        self.client = web_app.app.test_client()
        self._nonce = 0

    def signed_call(self, key, method, **params):
        self._nonce += 1
        body = web_app.sign_call(key, method, params, str(self._nonce))
        return self.client.post('/api/call', json=body)

    def test_wallet_summary(self):
        response = self.client.get('/api/wallet')
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data['owner'], self.owner.address)
        self.assertEqual(len(data['partners']), 3)

    def test_full_flow(self):
        response = self.signed_call(self.p1, 'submit_transaction',
                                    to=self.outsider.address, value=to_base_units("1.0"), data="0x00")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['tx_id'], 0)

        tx = self.client.get('/api/transactions/0').get_json()
        self.assertEqual(tx['confirmations_left'], 1)

        self.assertEqual(self.signed_call(self.owner, 'confirm_transaction', tx_id=0).status_code, 200)

        response = self.client.post('/api/deposit', json={'sender': self.outsider.address,
                                                          'amount': to_base_units("1.0")})
        self.assertEqual(response.get_json()['balance'], to_base_units("1.0"))

        self.assertEqual(self.signed_call(self.outsider, 'execute_transaction', tx_id=0).status_code, 200)
        self.assertTrue(self.wallet.get_transaction(0).executed)

        events = self.client.get('/api/events').get_json()['events']
        self.assertEqual([e['event'] for e in events],
                         ['SubmitTransaction', 'ConfirmTransaction', 'ExecuteTransaction'])

    def test_error_statuses(self):
        response = self.signed_call(self.outsider, 'submit_transaction', to=self.p1.address, value=1)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.get_json()['code'], 'access_denied')

        self.assertEqual(self.client.get('/api/transactions/4').status_code, 404)
        self.assertEqual(self.client.get('/api/transactions/count').status_code, 409)
        self.assertEqual(self.signed_call(self.owner, 'confirm_transaction').status_code, 400)

        self.signed_call(self.owner, 'pause_all_partners')
        response = self.signed_call(self.p1, 'submit_transaction', to=self.p2.address, value=1)
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.get_json()['error'], 'owner has paused the access')

    def test_bad_signature(self):
        body = web_app.sign_call(self.owner, 'pause_all_partners', {}, "1")
        body['sender_pubkey'] = self.p1.get_public_key_hex()
        response = self.client.post('/api/call', json=body)
        self.assertEqual(response.status_code, 401)
        self.assertFalse(self.wallet.is_paused())

    def test_replayed_call_rejected(self):
        body = web_app.sign_call(self.p1, 'submit_transaction', {'to': self.p2.address, 'value': 1}, "7")
        self.assertEqual(self.client.post('/api/call', json=body).status_code, 200)
        self.assertEqual(self.client.post('/api/call', json=body).status_code, 409)
        self.assertEqual(self.wallet.get_transaction_count(), 1)

    def test_params_must_be_an_object(self):
        for params in (["tx_id"], 5, "tx_id"):
            self._nonce += 1
            body = web_app.sign_call(self.owner, 'confirm_transaction', params, str(self._nonce))
            response = self.client.post('/api/call', json=body)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(response.get_json()['code'], 'invalid_input')

    def test_nonces_must_increase(self):
        body = web_app.sign_call(self.p1, 'submit_transaction', {'to': self.p2.address, 'value': 1}, "5")
        self.assertEqual(self.client.post('/api/call', json=body).status_code, 200)

        older = web_app.sign_call(self.p1, 'submit_transaction', {'to': self.p2.address, 'value': 1}, "4")
        self.assertEqual(self.client.post('/api/call', json=older).status_code, 409)

        # Nonces are tracked per key
        other = web_app.sign_call(self.p2, 'submit_transaction', {'to': self.p1.address, 'value': 1}, "1")
        self.assertEqual(self.client.post('/api/call', json=other).status_code, 200)
        self.assertEqual(web_app.last_nonces, {self.p1.get_public_key_hex(): 5, self.p2.get_public_key_hex(): 1})

    def test_nonce_must_be_numeric(self):
        body = web_app.sign_call(self.p1, 'pause_all_partners', {}, "abc")
        self.assertEqual(self.client.post('/api/call', json=body).status_code, 400)

    def test_requests_before_wallet_loaded(self):
        web_app.init_wallet(None)
        self.assertEqual(self.client.get('/api/wallet').status_code, 503)
        self.assertEqual(self.client.post('/api/deposit', json={}).status_code, 503)

    def test_unknown_method(self):
        response = self.client.post('/api/call', json={'method': 'drain'})
        self.assertEqual(response.status_code, 400)

    def test_partner_check(self):
        response = self.client.get(f'/api/partners/{self.p2.address}')
        self.assertTrue(response.get_json()['is_partner'])
        self.assertEqual(self.client.get('/api/partners/nonsense').status_code, 400)

if __name__ == '__main__':
    unittest.main()
