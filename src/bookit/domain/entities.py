"""Domain model entities for bookit.

These are pure data classes representing business concepts, independent of
database schema. Amounts are always non-negative magnitudes; the direction of
money is carried by ``TransactionType`` and re-derived wherever a sign is needed.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

UNCATEGORIZED = "Uncategorized"
CASH_LINE_NAME = "Cash & Equivalents"
RETAINED_EARNINGS_LINE_NAME = "Retained Earnings"
OVERRIDE_EPSILON = Decimal("0.01")


class TransactionType(str, Enum):
    """Direction of a transaction. There is no transfer or neutral type."""

    INCOME = "income"
    EXPENSE = "expense"


class AccountType(str, Enum):
    """Account type a user may declare on a category."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"
    CURRENT_ASSET = "CURRENT_ASSET"
    FIXED_ASSET = "FIXED_ASSET"
    CURRENT_LIABILITY = "CURRENT_LIABILITY"
    LONG_TERM_LIABILITY = "LONG_TERM_LIABILITY"
    EQUITY = "EQUITY"
    # Generic types kept for categories declared before the split
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"


class AccountBucket(str, Enum):
    """Statement bucket a category resolves to."""

    CURRENT_ASSET = "CURRENT_ASSET"
    FIXED_ASSET = "FIXED_ASSET"
    CURRENT_LIABILITY = "CURRENT_LIABILITY"
    LONG_TERM_LIABILITY = "LONG_TERM_LIABILITY"
    EQUITY = "EQUITY"
    PROFIT_AND_LOSS_ITEM = "PROFIT_AND_LOSS_ITEM"

    @property
    def is_asset(self) -> bool:
        return self in (AccountBucket.CURRENT_ASSET, AccountBucket.FIXED_ASSET)

    @property
    def is_liability(self) -> bool:
        return self in (
            AccountBucket.CURRENT_LIABILITY,
            AccountBucket.LONG_TERM_LIABILITY,
        )


class AdjustmentType(str, Enum):
    """Statement section a manual adjustment is appended to."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"


class ProfileType(str, Enum):
    """Kind of counterparty profile."""

    VENDOR = "VENDOR"
    CLIENT = "CLIENT"


@dataclass(frozen=True)
class Category:
    """Category domain entity with an optional declared account type."""

    id: int
    name: str
    account_type: Optional[AccountType] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    Only the classification fields (category, entity link) and the edited
    description change after a transaction is recorded.
    """

    id: str
    date: date
    description: str
    amount: Decimal
    type: TransactionType
    category: str = UNCATEGORIZED
    original_description: str = ""
    entity_id: Optional[int] = None
    entity_name: Optional[str] = None
    document_id: Optional[str] = None
    imported_at: Optional[datetime] = None

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    def with_category(self, category: str) -> "Transaction":
        """Return a copy carrying a different category."""
        return replace(self, category=category)


@dataclass(frozen=True)
class CategorizationRule:
    """Keyword rule assigning a category to matching transactions."""

    id: int
    keyword: str
    target_category: str
    target_type: Optional[TransactionType] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class EntityProfile:
    """Vendor or client profile transactions can be linked to."""

    id: int
    name: str
    type: ProfileType
    keyword: Optional[str] = None
    default_category: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def match_keyword(self) -> str:
        return self.keyword or self.name


@dataclass(frozen=True)
class BalanceSheetAdjustment:
    """Manually entered balance sheet line with no backing transactions."""

    id: int
    name: str
    amount: Decimal
    type: AdjustmentType


@dataclass(frozen=True)
class StatementLine:
    """One line of a statement section.

    ``computed_amount`` is the value derived from transactions; ``amount`` is
    what is displayed and totalled, which differs when an override is applied.
    Adjustment lines have no computed counterpart.
    """

    name: str
    amount: Decimal
    computed_amount: Optional[Decimal] = None
    adjustment_id: Optional[int] = None

    @property
    def is_adjustment(self) -> bool:
        return self.adjustment_id is not None

    @property
    def has_override(self) -> bool:
        if self.computed_amount is None:
            return False
        return abs(self.amount - self.computed_amount) > OVERRIDE_EPSILON

    def reset(self) -> "StatementLine":
        """Return the line with its computed value restored."""
        if self.computed_amount is None:
            return self
        return replace(self, amount=self.computed_amount)


@dataclass(frozen=True)
class ProfitAndLoss:
    """Profit and loss statement."""

    income_by_category: dict[str, Decimal]
    expense_by_category: dict[str, Decimal]
    total_income: Decimal
    total_expense: Decimal

    @property
    def net_profit(self) -> Decimal:
        return self.total_income - self.total_expense


@dataclass(frozen=True)
class BalanceSheet:
    """Balance sheet statement.

    The accounting identity is not enforced: ``imbalance`` is surfaced so that
    incomplete categorization can be seen next to both totals.
    """

    current_assets: tuple[StatementLine, ...]
    fixed_assets: tuple[StatementLine, ...]
    current_liabilities: tuple[StatementLine, ...]
    long_term_liabilities: tuple[StatementLine, ...]
    equity_lines: tuple[StatementLine, ...]
    retained_earnings: Decimal
    total_current_assets: Decimal
    total_fixed_assets: Decimal
    total_current_liabilities: Decimal
    total_long_term_liabilities: Decimal
    total_equity: Decimal

    @property
    def total_assets(self) -> Decimal:
        return self.total_current_assets + self.total_fixed_assets

    @property
    def total_liabilities(self) -> Decimal:
        return self.total_current_liabilities + self.total_long_term_liabilities

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity

    @property
    def imbalance(self) -> Decimal:
        return self.total_assets - self.total_liabilities_and_equity

    @property
    def is_balanced(self) -> bool:
        return abs(self.imbalance) <= OVERRIDE_EPSILON

    def all_lines(self) -> tuple[StatementLine, ...]:
        return (
            self.current_assets
            + self.fixed_assets
            + self.current_liabilities
            + self.long_term_liabilities
            + self.equity_lines
        )

    def find_line(self, name: str) -> Optional[StatementLine]:
        wanted = name.casefold()
        for line in self.all_lines():
            if line.name.casefold() == wanted:
                return line
        return None


@dataclass(frozen=True)
class FinancialSummary:
    """Totals handed to the narrative generator."""

    total_income: Decimal
    total_expense: Decimal
    top_expenses: tuple[str, ...] = field(default_factory=tuple)

    @property
    def net_profit(self) -> Decimal:
        return self.total_income - self.total_expense
