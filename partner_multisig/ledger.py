"""
Transaction ledger: append-only list of submitted transfer requests
"""

import logging

from .access import AccessControl
from .addresses import require_non_null
from .errors import EmptyLedger, InvalidInput, NotFound
from .events import SubmitTransaction
from .state import CallContext, ContractState, Transaction

logger = logging.getLogger(__name__)


class TransactionLedger:

    @staticmethod
    def submit(ctx: CallContext, to: str, value: int, data: bytes = b"") -> int:
        """Append a new transaction and return its id"""
        AccessControl.require_partner(ctx)
        AccessControl.require_not_paused(ctx)
        to = require_non_null(to)

        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidInput(f"invalid value: {value!r}")
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidInput("data must be bytes")

        tx_id = len(ctx.state.transactions)
        ctx.state.transactions.append(Transaction(to=to, value=value, data=bytes(data)))
        ctx.emit(SubmitTransaction(ctx.sender, tx_id, to, value, bytes(data)))
        logger.info("Transaction %d submitted by %s: %d to %s", tx_id, ctx.sender, value, to)
        return tx_id

    @staticmethod
    def get(state: ContractState, tx_id: int) -> Transaction:
        """Live record for tx_id, NotFound when out of range"""
        if isinstance(tx_id, bool) or not isinstance(tx_id, int) or not 0 <= tx_id < len(state.transactions):
            raise NotFound()
        return state.transactions[tx_id]

    @staticmethod
    def count(state: ContractState) -> int:
        if not state.transactions:
            raise EmptyLedger()
        return len(state.transactions)
