import copy
import hashlib
import json
from dataclasses import dataclass, field, asdict
from typing import Dict, List, NamedTuple, Tuple


class TransactionSnapshot(NamedTuple):
    """Read-only view of a transaction, ordered like the contract getter"""
    to: str
    value: int
    data: bytes
    executed: bool
    confirmations: int


@dataclass
class Transaction:
    """Outgoing transfer request awaiting partner confirmations"""
    to: str
    value: int  # base units
    data: bytes = b""
    executed: bool = False
    confirmations: int = 0

    def snapshot(self) -> TransactionSnapshot:
        return TransactionSnapshot(self.to, self.value, self.data, self.executed, self.confirmations)

    def to_dict(self) -> dict:
        data = asdict(self)
        data['data'] = self.data.hex()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Transaction':
        return cls(
            to=data['to'],
            value=data['value'],
            data=bytes.fromhex(data.get('data', '')),
            executed=data.get('executed', False),
            confirmations=data.get('confirmations', 0)
        )


@dataclass
class ContractState:
    """The whole shared wallet state; every operation receives it explicitly"""
    owner: str
    partners: List[str]
    paused: bool = False
    transactions: List[Transaction] = field(default_factory=list)
    confirmations: Dict[Tuple[int, str], bool] = field(default_factory=dict)
    balance: int = 0

    def is_confirmed(self, tx_id: int, partner: str) -> bool:
        return self.confirmations.get((tx_id, partner), False)

    def copy(self) -> 'ContractState':
        """Deep copy used as the draft of an in-flight call"""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        """Serialize state to a JSON-compatible dictionary"""
        confirmed = sorted(pair for pair, flag in self.confirmations.items() if flag)
        return {
            'owner': self.owner,
            'partners': list(self.partners),
            'paused': self.paused,
            'transactions': [tx.to_dict() for tx in self.transactions],
            'confirmations': [[tx_id, partner] for tx_id, partner in confirmed],
            'balance': self.balance
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ContractState':
        """Deserialize state from dictionary"""
        return cls(
            owner=data['owner'],
            partners=list(data['partners']),
            paused=data.get('paused', False),
            transactions=[Transaction.from_dict(tx) for tx in data.get('transactions', [])],
            confirmations={(tx_id, partner): True for tx_id, partner in data.get('confirmations', [])},
            balance=data.get('balance', 0)
        )

    def state_root(self) -> str:
        """Deterministic commitment over the full state"""
        hasher = hashlib.sha256()
        hasher.update(b"PARTNER_MULTISIG_STATE_V1")
        hasher.update(json.dumps(self.to_dict(), sort_keys=True, separators=(',', ':')).encode())
        return hasher.hexdigest()


@dataclass
class CallContext:
    """One in-flight call: the draft state, the caller and buffered events"""
    state: ContractState
    sender: str
    events: list = field(default_factory=list)

    def emit(self, event) -> None:
        self.events.append(event)
