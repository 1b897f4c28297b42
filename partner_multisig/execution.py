"""
Execution engine: pays out a transaction once it clears its threshold
"""

import logging
from typing import Callable, Dict

from .confirmations import ConfirmationEngine
from .errors import AlreadyExecuted, InsufficientBalance, ThresholdNotMet, TransferFailed
from .events import ExecuteTransaction
from .ledger import TransactionLedger
from .state import CallContext

logger = logging.getLogger(__name__)

# Receives (to, value, data); raising aborts the whole execution
TransferHandler = Callable[[str, int, bytes], None]


class AccountBook:
    """Default transfer handler: records what each external account received"""

    def __init__(self):
        self._balances: Dict[str, int] = {}
        self._transfer_history = []

    def __call__(self, to: str, value: int, data: bytes) -> None:
        self._balances[to] = self.balance_of(to) + value
        self._transfer_history.append({'to': to, 'value': value, 'data': data.hex()})

    def balance_of(self, address: str) -> int:
        return self._balances.get(address, 0)

    def get_transfer_history(self):
        return self._transfer_history.copy()


class ExecutionEngine:

    def __init__(self, confirmations: ConfirmationEngine, transfer: TransferHandler = None):
        self.confirmations = confirmations
        self.transfer = transfer or AccountBook()

    def execute(self, ctx: CallContext, tx_id: int) -> None:
        tx = TransactionLedger.get(ctx.state, tx_id)
        if tx.executed:
            raise AlreadyExecuted()
        if self.confirmations.confirmations_left(ctx.state, tx_id) != 0:
            raise ThresholdNotMet()
        if ctx.state.balance < tx.value:
            raise InsufficientBalance()

        tx.executed = True
        ctx.state.balance -= tx.value

        # The draft is discarded by the caller if the transfer raises
        try:
            self.transfer(tx.to, tx.value, tx.data)
        except Exception as e:
            logger.warning("Transfer for transaction %d to %s failed: %s", tx_id, tx.to, e)
            raise TransferFailed(f"tx failed: {e}") from e

        ctx.emit(ExecuteTransaction(ctx.sender, tx_id))
        logger.info("Transaction %d executed by %s: %d sent to %s", tx_id, ctx.sender, tx.value, tx.to)
