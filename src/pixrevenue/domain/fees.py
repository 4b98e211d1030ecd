"""Platform fee and acquirer cost calculation."""

from dataclasses import dataclass
from decimal import Decimal

from pixrevenue.domain.entities import ZERO, AcquirerFeeConfig, Transaction

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class TransactionFees:
    """Fees of a single transaction under both fee models."""

    percentage_fee: Decimal
    fixed_fee: Decimal
    acquirer: str
    acquirer_cost: Decimal

    @property
    def gross(self) -> Decimal:
        """Platform fee revenue charged to the payer."""
        return self.percentage_fee + self.fixed_fee

    @property
    def net(self) -> Decimal:
        """Gross profit minus acquirer cost; may be negative."""
        return self.gross - self.acquirer_cost


class FeeCalculator:
    """Computes platform fees and acquirer costs for transactions."""

    def __init__(self, fee_config: AcquirerFeeConfig):
        self.fee_config = fee_config

    @staticmethod
    def percentage_fee(txn: Transaction) -> Decimal:
        return txn.amount * (txn.fee_percentage or ZERO) / HUNDRED

    @staticmethod
    def fixed_fee(txn: Transaction) -> Decimal:
        return txn.fee_fixed or ZERO

    def gross_profit(self, txn: Transaction) -> Decimal:
        """Platform fee: amount * fee_percentage / 100 + fee_fixed."""
        return self.percentage_fee(txn) + self.fixed_fee(txn)

    def acquirer_cost(self, txn: Transaction) -> Decimal:
        """Acquirer cost: amount * rate / 100 + fixed of the resolved acquirer."""
        _, fee = self.fee_config.resolve(txn.acquirer)
        return txn.amount * fee.rate / HUNDRED + fee.fixed

    def net_profit(self, txn: Transaction) -> Decimal:
        return self.gross_profit(txn) - self.acquirer_cost(txn)

    def calculate(self, txn: Transaction) -> TransactionFees:
        """Compute every fee component of a transaction at once."""
        acquirer, fee = self.fee_config.resolve(txn.acquirer)
        return TransactionFees(
            percentage_fee=self.percentage_fee(txn),
            fixed_fee=self.fixed_fee(txn),
            acquirer=acquirer,
            acquirer_cost=txn.amount * fee.rate / HUNDRED + fee.fixed,
        )
