"""
Address and key utilities

Partners are identified by 20-byte addresses derived from secp256k1 public
keys. Calls arriving over the network are authenticated with ECDSA
signatures made by the matching private key.
"""

import hashlib
import re
from decimal import Decimal, InvalidOperation
from typing import Tuple, Union

from ecdsa import SigningKey, SECP256k1, VerifyingKey, BadSignatureError
from ecdsa.errors import MalformedPointError
from ecdsa.util import sigencode_string, sigdecode_string, MalformedSignature

from .errors import InvalidInput

ZERO_ADDRESS = "0x" + "00" * 20
UNITS_PER_COIN = 10 ** 18

_ADDRESS_RE = re.compile(r"^0x[0-9a-f]{40}$")


def normalize_address(address: str) -> str:
    """Return the canonical lowercase form, rejecting malformed input"""
    if not isinstance(address, str):
        raise InvalidInput(f"invalid address: {address!r}")
    candidate = address.strip().lower()
    if not candidate.startswith("0x"):
        candidate = "0x" + candidate
    if not _ADDRESS_RE.match(candidate):
        raise InvalidInput(f"invalid address: {address!r}")
    return candidate


def is_null_address(address: str) -> bool:
    return normalize_address(address) == ZERO_ADDRESS


def require_non_null(address: str) -> str:
    """Normalize and reject the zero address"""
    canonical = normalize_address(address)
    if canonical == ZERO_ADDRESS:
        raise InvalidInput("invalid address")
    return canonical


def to_base_units(amount: Union[str, int, Decimal]) -> int:
    """Convert a coin amount such as "1.0" to integer base units"""
    if isinstance(amount, bool):
        raise InvalidInput(f"invalid amount: {amount!r}")
    try:
        units = Decimal(str(amount)) * UNITS_PER_COIN
    except InvalidOperation:
        raise InvalidInput(f"invalid amount: {amount!r}")
    if units != units.to_integral_value():
        raise InvalidInput(f"amount {amount} has more than 18 decimals")
    return int(units)


def from_base_units(units: int) -> Decimal:
    return Decimal(units) / UNITS_PER_COIN


class PartnerKey:
    """secp256k1 key pair owned by a partner (or any caller)"""

    def __init__(self, private_key: bytes = None):
        if private_key:
            self.private_key = SigningKey.from_string(private_key, curve=SECP256k1)
        else:
            self.private_key = SigningKey.generate(curve=SECP256k1)

        self.public_key = self.private_key.get_verifying_key()

    @property
    def address(self) -> str:
        return address_from_public_key(self.public_key.to_string("uncompressed").hex())

    def get_public_key_hex(self) -> str:
        """Compressed public key in hex format"""
        return self.public_key.to_string("compressed").hex()

    def sign_message(self, message: bytes) -> str:
        """Sign message and return a 64-byte r||s signature in hex"""
        signature = self.private_key.sign_deterministic(
            message, hashfunc=hashlib.sha256, sigencode=sigencode_string
        )
        return signature.hex()

    @staticmethod
    def verify_signature(message: bytes, signature_hex: str, pubkey_hex: str) -> bool:
        """Verify a signature against a compressed or uncompressed public key"""
        try:
            vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
            return vk.verify(
                bytes.fromhex(signature_hex), message,
                hashfunc=hashlib.sha256, sigdecode=sigdecode_string
            )
        except (BadSignatureError, MalformedSignature, MalformedPointError, ValueError):
            return False

    @staticmethod
    def generate_key_pair() -> Tuple[str, str]:
        """Generate new key pair and return (private_key_hex, address)"""
        key = PartnerKey()
        return key.private_key.to_string().hex(), key.address


def address_from_public_key(pubkey_hex: str) -> str:
    """Last 20 bytes of SHA3-256 over the raw 64-byte public key point"""
    try:
        vk = VerifyingKey.from_string(bytes.fromhex(pubkey_hex), curve=SECP256k1)
    except (MalformedPointError, ValueError):
        raise InvalidInput(f"invalid public key: {pubkey_hex[:16]}...")
    raw_point = vk.to_string("raw")
    return "0x" + hashlib.sha3_256(raw_point).digest()[-20:].hex()
