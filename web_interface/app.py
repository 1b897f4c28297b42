#!/usr/bin/env python3
"""
Web interface for the partner multisig wallet
"""

from flask import Flask, request, jsonify
import json
import logging
import os
import sys

# Add project root to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from partner_multisig.addresses import PartnerKey, address_from_public_key
from partner_multisig.config import WalletConfig, configure_logging
from partner_multisig.errors import (
    MultiSigError, AccessDenied, InvalidInput, NotFound, EmptyLedger, TransferFailed
)
from partner_multisig.wallet import MultiSigWallet

logger = logging.getLogger(__name__)

app = Flask(__name__)

# Single wallet served by this process
wallet = None
last_nonces = {}  # pubkey -> highest nonce used; nonces must strictly increase

CALL_METHODS = {
    'set_contract_owner': ('new_owner',),
    'add_new_partner': ('partner',),
    'pause_all_partners': (),
    'unpause_all_partners': (),
    'submit_transaction': ('to', 'value', 'data'),
    'confirm_transaction': ('tx_id',),
    'revoke_confirmation': ('tx_id',),
    'execute_transaction': ('tx_id',),
}


def init_wallet(new_wallet: MultiSigWallet) -> None:
    """Install the wallet served by the API"""
    global wallet
    wallet = new_wallet
    last_nonces.clear()


def canonical_call_message(method: str, params: dict, nonce: str) -> bytes:
    """Bytes a caller signs to authorize a call"""
    return json.dumps(
        {'method': method, 'params': params, 'nonce': nonce},
        sort_keys=True, separators=(',', ':')
    ).encode()


def sign_call(key: PartnerKey, method: str, params: dict, nonce: str) -> dict:
    """Build a signed /api/call body; used by clients and tests"""
    return {
        'method': method,
        'params': params,
        'nonce': nonce,
        'sender_pubkey': key.get_public_key_hex(),
        'signature': key.sign_message(canonical_call_message(method, params, nonce))
    }


def error_status(error: MultiSigError) -> int:
    if isinstance(error, AccessDenied):
        return 403
    if isinstance(error, NotFound):
        return 404
    if isinstance(error, InvalidInput):
        return 400
    if isinstance(error, TransferFailed):
        return 502
    return 409


def error_response(error: MultiSigError):
    return jsonify(dict(error.to_dict(), success=False)), error_status(error)


def _call_kwargs(method: str, params: dict) -> dict:
    allowed = CALL_METHODS[method]
    unknown = set(params) - set(allowed)
    if unknown:
        raise InvalidInput(f"unexpected params for {method}: {sorted(unknown)}")
    missing = set(allowed) - set(params) - {'data'}
    if missing:
        raise InvalidInput(f"missing params for {method}: {sorted(missing)}")

    kwargs = dict(params)
    if 'data' in kwargs:
        raw = kwargs['data'] or ''
        try:
            kwargs['data'] = bytes.fromhex(raw[2:] if raw.startswith('0x') else raw)
        except (AttributeError, ValueError):
            raise InvalidInput("data must be hex")
    return kwargs


@app.route('/api/wallet')
def get_wallet():
    """Get wallet summary"""
    return jsonify(wallet.describe())


@app.route('/api/transactions/<int:tx_id>')
def get_transaction(tx_id):
    """Get transaction details and how many confirmations it still needs"""
    try:
        return jsonify(wallet.describe(tx_id)['transaction'])
    except MultiSigError as e:
        return error_response(e)


@app.route('/api/transactions/count')
def get_transaction_count():
    try:
        return jsonify({'count': wallet.get_transaction_count()})
    except EmptyLedger as e:
        return error_response(e)


@app.route('/api/partners/<address>')
def check_partner(address):
    try:
        return jsonify({'address': address, 'is_partner': wallet.is_partner(address)})
    except MultiSigError as e:
        return error_response(e)


@app.route('/api/events')
def get_events():
    return jsonify({'events': [event.to_dict() for event in wallet.get_events()]})


@app.before_request
def require_wallet():
    if wallet is None:
        return jsonify({'success': False, 'code': 'not_ready', 'error': 'no wallet loaded'}), 503


@app.route('/api/call', methods=['POST'])
def call():
    """Run a signed state-changing call"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    method = data.get('method')
    if method not in CALL_METHODS:
        return jsonify({'success': False, 'code': 'unknown_method', 'error': f"unknown method {method!r}"}), 400

    params = data.get('params') or {}
    if not isinstance(params, dict):
        return error_response(InvalidInput("params must be an object"))

    nonce = str(data.get('nonce', ''))
    pubkey = str(data.get('sender_pubkey', ''))
    signature = str(data.get('signature', ''))

    if not nonce.isdigit():
        return error_response(InvalidInput("nonce must be a non-negative integer"))
    if not PartnerKey.verify_signature(canonical_call_message(method, params, nonce), signature, pubkey):
        logger.debug("Rejected %s call with bad signature", method)
        return jsonify({'success': False, 'code': 'bad_signature', 'error': 'invalid signature'}), 401
    if int(nonce) <= last_nonces.get(pubkey, -1):
        return jsonify({'success': False, 'code': 'replayed_call', 'error': 'nonce already used'}), 409

    # Consumed even when the call fails
    last_nonces[pubkey] = int(nonce)
    try:
        sender = address_from_public_key(pubkey)
        result = getattr(wallet, method)(sender, **_call_kwargs(method, params))
    except MultiSigError as e:
        return error_response(e)

    response = {'success': True, 'sender': sender}
    if method == 'submit_transaction':
        response['tx_id'] = result
    return jsonify(response)


@app.route('/api/deposit', methods=['POST'])
def deposit():
    """Unconditional deposit into the wallet"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    try:
        wallet.deposit(data.get('sender', ''), data.get('amount'))
    except MultiSigError as e:
        return error_response(e)
    return jsonify({'success': True, 'balance': wallet.get_balance()})


if __name__ == "__main__":
    config = WalletConfig.from_env()
    configure_logging(config.log_level)
    init_wallet(MultiSigWallet.from_config(config))
    app.run(
        host=config.host,
        port=config.port,
        debug=False
    )
