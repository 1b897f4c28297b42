import logging
import threading
from contextlib import contextmanager
from typing import List, Optional

from .access import AccessControl
from .addresses import normalize_address
from .confirmations import ConfirmationEngine
from .errors import InvalidInput, MultiSigError, ReentrantCall
from .events import Event, EventNotifier
from .execution import ExecutionEngine, TransferHandler
from .ledger import TransactionLedger
from .rules import ConfirmationRules
from .state import CallContext, ContractState, TransactionSnapshot

logger = logging.getLogger(__name__)


class MultiSigWallet:
    """High-level interface for partner multisig operations

    Every state-changing call runs against a draft copy of the state and is
    committed only if it completes; on any error the draft and its events
    are dropped.
    """

    def __init__(self, owner: str, partners: List[str], rules: ConfirmationRules = None,
                 transfer: TransferHandler = None, store=None, notifier: EventNotifier = None):
        self._init_engines(AccessControl.seed(owner, partners), rules, transfer, store, notifier)
        if self.store is not None:
            self.store.save(self.state)
        logger.info("Wallet created for owner %s with %d partners", self.state.owner, len(self.state.partners))

    def _init_engines(self, state, rules, transfer, store, notifier):
        self.state = state
        self.rules = rules or ConfirmationRules.sixty_percent()
        self.confirmation_engine = ConfirmationEngine(self.rules)
        self.execution_engine = ExecutionEngine(self.confirmation_engine, transfer)
        self.store = store
        self.notifier = notifier or EventNotifier()
        self._lock = threading.RLock()
        self._in_call = False

    @classmethod
    def from_state(cls, state: ContractState, rules: ConfirmationRules = None,
                   transfer: TransferHandler = None, store=None,
                   notifier: EventNotifier = None) -> 'MultiSigWallet':
        """Resume a wallet from previously persisted state"""
        wallet = cls.__new__(cls)
        wallet._init_engines(state, rules, transfer, store, notifier)
        return wallet

    @classmethod
    def from_config(cls, config, transfer: TransferHandler = None) -> 'MultiSigWallet':
        """Load the wallet from config.state_path if present, else deploy a new one"""
        from .storage import JsonStateStore

        store = JsonStateStore(config.state_path) if config.state_path else None
        if store is not None:
            state = store.load()
            if state is not None:
                logger.info("Loaded wallet state from %s", config.state_path)
                return cls.from_state(state, config.rules(), transfer, store)

        return cls(config.owner, config.partners, config.rules(), transfer, store)

    @property
    def transfer(self) -> TransferHandler:
        return self.execution_engine.transfer

    @contextmanager
    def _call(self, sender: str):
        with self._lock:
            # A transfer handler calling back in would work on a stale copy
            if self._in_call:
                raise ReentrantCall()

            ctx = CallContext(self.state.copy(), normalize_address(sender))
            self._in_call = True
            try:
                yield ctx
            except MultiSigError as e:
                logger.debug("Call by %s rejected: %s", ctx.sender, e)
                raise
            finally:
                self._in_call = False

            if self.store is not None:
                self.store.save(ctx.state)
            self.state = ctx.state
            self.notifier.publish(ctx.events)

    # Access control

    def get_contract_owner(self) -> str:
        return self.state.owner

    def set_contract_owner(self, sender: str, new_owner: str) -> None:
        with self._call(sender) as ctx:
            AccessControl.set_contract_owner(ctx, new_owner)

    def add_new_partner(self, sender: str, partner: str) -> None:
        with self._call(sender) as ctx:
            AccessControl.add_new_partner(ctx, partner)

    def pause_all_partners(self, sender: str) -> None:
        with self._call(sender) as ctx:
            AccessControl.set_paused(ctx, True)

    def unpause_all_partners(self, sender: str) -> None:
        with self._call(sender) as ctx:
            AccessControl.set_paused(ctx, False)

    def is_partner(self, address: str) -> bool:
        return AccessControl.is_partner(self.state, address)

    def get_partners(self) -> List[str]:
        return list(self.state.partners)

    def is_paused(self) -> bool:
        return self.state.paused

    # Ledger

    def submit_transaction(self, sender: str, to: str, value: int, data: bytes = b"") -> int:
        with self._call(sender) as ctx:
            return TransactionLedger.submit(ctx, to, value, data)

    def get_transaction(self, tx_id: int) -> TransactionSnapshot:
        return TransactionLedger.get(self.state, tx_id).snapshot()

    def get_transaction_count(self) -> int:
        return TransactionLedger.count(self.state)

    # Confirmations

    def confirm_transaction(self, sender: str, tx_id: int) -> None:
        with self._call(sender) as ctx:
            self.confirmation_engine.confirm(ctx, tx_id)

    def revoke_confirmation(self, sender: str, tx_id: int) -> None:
        with self._call(sender) as ctx:
            self.confirmation_engine.revoke(ctx, tx_id)

    def calculate_confirmation_left(self, tx_id: int) -> int:
        return self.confirmation_engine.confirmations_left(self.state, tx_id)

    def is_confirmed(self, tx_id: int, partner: str) -> bool:
        TransactionLedger.get(self.state, tx_id)
        return self.state.is_confirmed(tx_id, normalize_address(partner))

    # Execution and funds

    def execute_transaction(self, sender: str, tx_id: int) -> None:
        with self._call(sender) as ctx:
            self.execution_engine.execute(ctx, tx_id)

    def deposit(self, sender: str, amount: int) -> None:
        """Unconditional deposit; anyone may fund the wallet"""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise InvalidInput(f"invalid amount: {amount!r}")

        with self._call(sender) as ctx:
            ctx.state.balance += amount
            logger.info("Deposit of %d from %s, balance %d", amount, ctx.sender, ctx.state.balance)

    def get_balance(self) -> int:
        return self.state.balance

    def execution_status(self, tx_id: int) -> tuple[bool, str]:
        """Whether tx_id could execute right now, with the blocking reason"""
        return self._execution_status(self.state, tx_id)

    def _execution_status(self, state: ContractState, tx_id: int) -> tuple[bool, str]:
        tx = TransactionLedger.get(state, tx_id)
        if tx.executed:
            return False, "tx already executed"
        return self.rules.validate_execution(tx, len(state.partners), state.balance)

    # Events and state

    def get_events(self) -> List[Event]:
        return self.notifier.get_history()

    def state_root(self) -> str:
        return self.state.state_root()

    def to_dict(self) -> dict:
        return self.state.to_dict()

    def describe(self, tx_id: Optional[int] = None) -> dict:
        """Summary used by the HTTP API and the demo"""
        # Commits swap self.state wholesale; one reference gives one consistent view
        state = self.state
        summary = {
            'owner': state.owner,
            'partners': list(state.partners),
            'paused': state.paused,
            'balance': state.balance,
            'transaction_count': len(state.transactions),
            'required_confirmations': self.rules.required_confirmations(len(state.partners)),
            'state_root': state.state_root()
        }
        if tx_id is not None:
            tx = TransactionLedger.get(state, tx_id)
            executable, reason = self._execution_status(state, tx_id)
            summary['transaction'] = dict(
                tx.to_dict(),
                tx_id=tx_id,
                confirmations_left=self.confirmation_engine.confirmations_left(state, tx_id),
                executable=executable,
                reason=reason
            )
        return summary
