from dataclasses import dataclass

from .state import Transaction


@dataclass(frozen=True)
class ConfirmationRules:
    """Confirmation threshold rules, fixed for the lifetime of a wallet"""

    # threshold = floor(partner_count * numerator / denominator)
    numerator: int = 3
    denominator: int = 5

    def __post_init__(self):
        if self.denominator <= 0 or not (0 < self.numerator <= self.denominator):
            raise ValueError("Confirmation ratio must be in (0, 1]")

    @classmethod
    def sixty_percent(cls) -> 'ConfirmationRules':
        """Default rules: 60% of the partner registry"""
        return cls(numerator=3, denominator=5)

    def required_confirmations(self, partner_count: int) -> int:
        return (partner_count * self.numerator) // self.denominator

    def confirmations_left(self, partner_count: int, confirmations: int) -> int:
        """Confirmations still needed, never negative"""
        return max(self.required_confirmations(partner_count) - confirmations, 0)

    def validate_execution(self, tx: Transaction, partner_count: int, balance: int) -> tuple[bool, str]:
        """Check threshold then funds for an unexecuted transaction"""
        left = self.confirmations_left(partner_count, tx.confirmations)
        if left > 0:
            return False, f"did not reach the desired confirmation count to execute ({left} more needed)"

        if balance < tx.value:
            return False, f"insufficient balance in contract: need {tx.value}, have {balance}"

        return True, "Valid execution"
