"""
Error taxonomy for the partner multisig wallet.

Every failure aborts the whole call; the message is meant for the caller.
"""


class MultiSigError(ValueError):
    """Base class for all wallet call failures"""

    code = "multisig_error"
    default_message = "multisig call failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def reason(self) -> str:
        return self.args[0]

    def to_dict(self) -> dict:
        return {'code': self.code, 'error': self.reason}


class AccessDenied(MultiSigError):
    code = "access_denied"
    default_message = "caller is not a partner"


class InvalidInput(MultiSigError):
    code = "invalid_input"
    default_message = "invalid address"


class Paused(MultiSigError):
    code = "paused"
    default_message = "owner has paused the access"


class NotFound(MultiSigError):
    code = "not_found"
    default_message = "tx does not exist"


class AlreadyExecuted(MultiSigError):
    code = "already_executed"
    default_message = "tx already executed"


class AlreadyConfirmed(MultiSigError):
    code = "already_confirmed"
    default_message = "tx already confirmed by caller"


class NotConfirmed(MultiSigError):
    code = "not_confirmed"
    default_message = "tx not confirmed by caller"


class ThresholdNotMet(MultiSigError):
    code = "threshold_not_met"
    default_message = "did not reach the desired confirmation count to execute"


class InsufficientBalance(MultiSigError):
    code = "insufficient_balance"
    default_message = "insufficient balance in contract"


class EmptyLedger(MultiSigError):
    code = "empty_ledger"
    default_message = "no transaction yet"


class TransferFailed(MultiSigError):
    code = "transfer_failed"
    default_message = "tx failed"


class ReentrantCall(MultiSigError):
    code = "reentrant_call"
    default_message = "state-changing call made while another call is in progress"


OWNER_ONLY_MESSAGE = "only owner can access this function"
