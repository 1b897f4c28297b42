"""
Partner MultiSig - threshold-approved custody for a shared pool of funds
"""

from .addresses import PartnerKey, ZERO_ADDRESS, to_base_units, from_base_units
from .config import WalletConfig, configure_logging
from .errors import (
    MultiSigError, AccessDenied, InvalidInput, Paused, NotFound, AlreadyExecuted,
    AlreadyConfirmed, NotConfirmed, ThresholdNotMet, InsufficientBalance,
    EmptyLedger, TransferFailed, ReentrantCall
)
from .events import EventNotifier
from .execution import AccountBook
from .rules import ConfirmationRules
from .state import ContractState, Transaction
from .storage import JsonStateStore
from .wallet import MultiSigWallet

__version__ = "0.1.0"
__all__ = [
    "MultiSigWallet",
    "ContractState",
    "Transaction",
    "ConfirmationRules",
    "WalletConfig",
    "configure_logging",
    "JsonStateStore",
    "EventNotifier",
    "AccountBook",
    "PartnerKey",
    "ZERO_ADDRESS",
    "to_base_units",
    "from_base_units",
    "MultiSigError",
    "AccessDenied",
    "InvalidInput",
    "Paused",
    "NotFound",
    "AlreadyExecuted",
    "AlreadyConfirmed",
    "NotConfirmed",
    "ThresholdNotMet",
    "InsufficientBalance",
    "EmptyLedger",
    "TransferFailed",
    "ReentrantCall"
]
