"""
Confirmation engine: per-partner approvals and the live threshold
"""

import logging

from .access import AccessControl
from .errors import AlreadyConfirmed, AlreadyExecuted, NotConfirmed
from .events import ConfirmTransaction, RevokeConfirmation
from .ledger import TransactionLedger
from .rules import ConfirmationRules
from .state import CallContext, ContractState

logger = logging.getLogger(__name__)


class ConfirmationEngine:

    def __init__(self, rules: ConfirmationRules = None):
        self.rules = rules or ConfirmationRules.sixty_percent()

    def confirm(self, ctx: CallContext, tx_id: int) -> None:
        AccessControl.require_partner(ctx)
        tx = TransactionLedger.get(ctx.state, tx_id)
        if tx.executed:
            raise AlreadyExecuted()
        if ctx.state.is_confirmed(tx_id, ctx.sender):
            raise AlreadyConfirmed()

        ctx.state.confirmations[(tx_id, ctx.sender)] = True
        tx.confirmations += 1
        ctx.emit(ConfirmTransaction(ctx.sender, tx_id))
        logger.info("Transaction %d confirmed by %s (%d confirmations)", tx_id, ctx.sender, tx.confirmations)

    def revoke(self, ctx: CallContext, tx_id: int) -> None:
        AccessControl.require_partner(ctx)
        AccessControl.require_not_paused(ctx)
        tx = TransactionLedger.get(ctx.state, tx_id)
        if tx.executed:
            raise AlreadyExecuted()
        if not ctx.state.is_confirmed(tx_id, ctx.sender):
            raise NotConfirmed()

        del ctx.state.confirmations[(tx_id, ctx.sender)]
        tx.confirmations -= 1
        ctx.emit(RevokeConfirmation(ctx.sender, tx_id))
        logger.info("Transaction %d confirmation revoked by %s", tx_id, ctx.sender)

    def confirmations_left(self, state: ContractState, tx_id: int) -> int:
        """Recomputed from the current registry size on every call"""
        tx = TransactionLedger.get(state, tx_id)
        return self.rules.confirmations_left(len(state.partners), tx.confirmations)
