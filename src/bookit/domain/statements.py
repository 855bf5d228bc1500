"""Financial statement aggregation.

``build_profit_and_loss`` and ``build_balance_sheet`` are pure: they fold a
transaction collection (plus adjustments and overrides for the balance sheet)
into new statement objects and never touch their inputs. ``StatementService``
loads those inputs from the database.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Sequence

import structlog

from bookit.database.base import Database
from bookit.domain.category import CategoryService
from bookit.domain.classifier import AccountClassifier
from bookit.domain.entities import (
    AccountBucket,
    AdjustmentType,
    BalanceSheet,
    BalanceSheetAdjustment,
    CASH_LINE_NAME,
    FinancialSummary,
    ProfitAndLoss,
    RETAINED_EARNINGS_LINE_NAME,
    StatementLine,
    Transaction,
    TransactionType,
    UNCATEGORIZED,
)
from bookit.domain.errors import NotFoundError, ValidationError, adjustment_not_found
from bookit.domain.registry import CategoryRegistry, normalize_name
from bookit.utils.amount_parser import parse_money

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")


def transaction_impact(bucket: AccountBucket, txn: Transaction) -> Decimal:
    """Signed contribution of a transaction to a balance sheet line.

    Assets grow with expense outflows; liabilities and equity grow with income
    inflows. Profit and loss items have no line impact.
    """
    if bucket == AccountBucket.PROFIT_AND_LOSS_ITEM:
        return ZERO
    if bucket.is_asset:
        return txn.amount if txn.type == TransactionType.EXPENSE else -txn.amount
    return txn.amount if txn.type == TransactionType.INCOME else -txn.amount


class _Classification:
    """Per-call memo of category name to bucket and display name."""

    def __init__(
        self,
        registry: Optional[CategoryRegistry],
        classifier: Optional[AccountClassifier],
    ):
        self.registry = registry or CategoryRegistry()
        self.classifier = classifier or AccountClassifier()
        self._buckets: dict[str, AccountBucket] = {}
        self._names: dict[str, str] = {}

    def bucket(self, category: str) -> AccountBucket:
        key = normalize_name(category or UNCATEGORIZED)
        if key not in self._buckets:
            self._buckets[key] = self.classifier.classify(
                category or UNCATEGORIZED, self.registry
            )
        return self._buckets[key]

    def line_name(self, category: str) -> str:
        """Display name shared by every spelling of a category."""
        name = category or UNCATEGORIZED
        key = normalize_name(name)
        if key not in self._names:
            registered = self.registry.get(name)
            self._names[key] = registered.name if registered else name
        return self._names[key]


def build_profit_and_loss(
    transactions: Iterable[Transaction],
    registry: Optional[CategoryRegistry] = None,
    classifier: Optional[AccountClassifier] = None,
) -> ProfitAndLoss:
    """Build the profit and loss statement.

    Only transactions whose category classifies as a profit and loss item are
    included. Expense rows are ordered by descending amount; income rows keep
    first-seen order.
    """
    classification = _Classification(registry, classifier)
    income: dict[str, Decimal] = defaultdict(Decimal)
    expenses: dict[str, Decimal] = defaultdict(Decimal)
    total_income = ZERO
    total_expense = ZERO

    for txn in transactions:
        if classification.bucket(txn.category) != AccountBucket.PROFIT_AND_LOSS_ITEM:
            continue
        name = classification.line_name(txn.category)
        if txn.type == TransactionType.INCOME:
            income[name] += txn.amount
            total_income += txn.amount
        else:
            expenses[name] += txn.amount
            total_expense += txn.amount

    sorted_expenses = dict(
        sorted(expenses.items(), key=lambda item: item[1], reverse=True)
    )
    return ProfitAndLoss(
        income_by_category=dict(income),
        expense_by_category=sorted_expenses,
        total_income=total_income,
        total_expense=total_expense,
    )


def _override_lookup(overrides: Optional[Mapping[str, object]]) -> dict[str, Decimal]:
    lookup: dict[str, Decimal] = {}
    for name, value in (overrides or {}).items():
        try:
            amount = parse_money(value)
        except ValueError:
            # Non-numeric overrides are never applied
            continue
        lookup[normalize_name(name)] = amount
    return lookup


def _computed_lines(
    amounts: Mapping[str, Decimal], overrides: Mapping[str, Decimal]
) -> list[StatementLine]:
    lines = []
    for name, computed in amounts.items():
        amount = overrides.get(normalize_name(name), computed)
        lines.append(StatementLine(name=name, amount=amount, computed_amount=computed))
    return lines


def _adjustment_lines(
    adjustments: Sequence[BalanceSheetAdjustment], adjustment_type: AdjustmentType
) -> list[StatementLine]:
    return [
        StatementLine(name=adj.name, amount=adj.amount, adjustment_id=adj.id)
        for adj in adjustments
        if adj.type == adjustment_type
    ]


def _total(lines: Iterable[StatementLine]) -> Decimal:
    return sum((line.amount for line in lines), ZERO)


def build_balance_sheet(
    transactions: Iterable[Transaction],
    registry: Optional[CategoryRegistry] = None,
    adjustments: Sequence[BalanceSheetAdjustment] = (),
    overrides: Optional[Mapping[str, object]] = None,
    classifier: Optional[AccountClassifier] = None,
) -> BalanceSheet:
    """Build the balance sheet.

    Args:
        transactions: Categorized transactions
        registry: Current categories, for declared account types
        adjustments: Manual lines appended to their section
        overrides: Line name to forced amount; the computed value is kept
        classifier: Classifier to use (default tables if omitted)

    Returns:
        BalanceSheet. Totals are reported even when they don't balance.
    """
    classification = _Classification(registry, classifier)
    bucket_lines: dict[AccountBucket, dict[str, Decimal]] = {
        bucket: defaultdict(Decimal)
        for bucket in AccountBucket
        if bucket != AccountBucket.PROFIT_AND_LOSS_ITEM
    }
    cash_in = ZERO
    cash_out = ZERO
    operating_income = ZERO
    operating_expense = ZERO

    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            cash_in += txn.amount
        else:
            cash_out += txn.amount

        bucket = classification.bucket(txn.category)
        if bucket == AccountBucket.PROFIT_AND_LOSS_ITEM:
            if txn.type == TransactionType.INCOME:
                operating_income += txn.amount
            else:
                operating_expense += txn.amount
            continue
        name = classification.line_name(txn.category)
        bucket_lines[bucket][name] += transaction_impact(bucket, txn)

    forced = _override_lookup(overrides)
    forced.pop(normalize_name(RETAINED_EARNINGS_LINE_NAME), None)

    cash_computed = cash_in - cash_out
    cash_line = StatementLine(
        name=CASH_LINE_NAME,
        amount=forced.get(normalize_name(CASH_LINE_NAME), cash_computed),
        computed_amount=cash_computed,
    )

    current_assets = (
        [cash_line]
        + _computed_lines(bucket_lines[AccountBucket.CURRENT_ASSET], forced)
        + _adjustment_lines(adjustments, AdjustmentType.ASSET)
    )
    fixed_assets = _computed_lines(bucket_lines[AccountBucket.FIXED_ASSET], forced)
    current_liabilities = _computed_lines(
        bucket_lines[AccountBucket.CURRENT_LIABILITY], forced
    )
    long_term_liabilities = _computed_lines(
        bucket_lines[AccountBucket.LONG_TERM_LIABILITY], forced
    ) + _adjustment_lines(adjustments, AdjustmentType.LIABILITY)
    equity_lines = _computed_lines(bucket_lines[AccountBucket.EQUITY], forced)

    retained_earnings = operating_income - operating_expense
    return BalanceSheet(
        current_assets=tuple(current_assets),
        fixed_assets=tuple(fixed_assets),
        current_liabilities=tuple(current_liabilities),
        long_term_liabilities=tuple(long_term_liabilities),
        equity_lines=tuple(equity_lines),
        retained_earnings=retained_earnings,
        total_current_assets=_total(current_assets),
        total_fixed_assets=_total(fixed_assets),
        total_current_liabilities=_total(current_liabilities),
        total_long_term_liabilities=_total(long_term_liabilities),
        total_equity=retained_earnings + _total(equity_lines),
    )


def build_financial_summary(
    transactions: Iterable[Transaction], top_n: int = 3
) -> FinancialSummary:
    """Summarize totals across all transactions for narrative generation."""
    total_income = ZERO
    total_expense = ZERO
    expense_categories: dict[str, Decimal] = defaultdict(Decimal)
    for txn in transactions:
        if txn.type == TransactionType.INCOME:
            total_income += txn.amount
        else:
            total_expense += txn.amount
            expense_categories[txn.category or UNCATEGORIZED] += txn.amount

    top = sorted(expense_categories.items(), key=lambda item: item[1], reverse=True)
    return FinancialSummary(
        total_income=total_income,
        total_expense=total_expense,
        top_expenses=tuple(name for name, _ in top[:top_n]),
    )


class StatementService:
    """Service for building statements from stored data."""

    def __init__(self, db: Database, classifier: Optional[AccountClassifier] = None):
        """Initialize statement service.

        Args:
            db: Database instance
            classifier: Account classifier (default tables if omitted)
        """
        self.db = db
        self.classifier = classifier or AccountClassifier()
        self.category_service = CategoryService(db)

    def _load_transactions(
        self, start_date: Optional[date], end_date: Optional[date]
    ) -> list[Transaction]:
        return self.db.list_transactions(start_date=start_date, end_date=end_date)

    def profit_and_loss(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> ProfitAndLoss:
        transactions = self._load_transactions(start_date, end_date)
        return build_profit_and_loss(
            transactions, self.category_service.get_registry(), self.classifier
        )

    def balance_sheet(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> BalanceSheet:
        """Build the balance sheet with stored adjustments and overrides."""
        transactions = self._load_transactions(start_date, end_date)
        sheet = build_balance_sheet(
            transactions,
            registry=self.category_service.get_registry(),
            adjustments=self.db.list_adjustments(),
            overrides=self.db.list_overrides(),
            classifier=self.classifier,
        )
        if not sheet.is_balanced:
            logger.warning(
                "balance_sheet_unbalanced",
                total_assets=str(sheet.total_assets),
                total_liabilities_and_equity=str(sheet.total_liabilities_and_equity),
                imbalance=str(sheet.imbalance),
            )
        return sheet

    def financial_summary(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        top_n: int = 3,
    ) -> FinancialSummary:
        return build_financial_summary(self._load_transactions(start_date, end_date), top_n=top_n)

    def uncategorized_count(self) -> int:
        """Number of transactions still in Uncategorized."""
        return self.db.count_transactions(uncategorized=True)

    # Adjustments
    def add_adjustment(
        self, name: str, amount: object, adjustment_type: AdjustmentType | str
    ) -> int:
        """Add a manual balance sheet line.

        Raises:
            ValidationError: If the name is blank, the amount isn't a finite
                number or the type is unknown
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Adjustment name cannot be empty")
        value = self._validated_amount(amount)
        if isinstance(adjustment_type, AdjustmentType):
            adj_type = adjustment_type
        else:
            try:
                adj_type = AdjustmentType(str(adjustment_type).upper())
            except ValueError:
                raise ValidationError(
                    f"Adjustment type must be ASSET or LIABILITY (got '{adjustment_type}')"
                )

        adjustment_id = self.db.create_adjustment(name=name, amount=value, type=adj_type)
        logger.info(
            "adjustment_added",
            adjustment_id=adjustment_id,
            name=name,
            amount=str(value),
            type=adj_type.value,
        )
        return adjustment_id

    def remove_adjustment(self, adjustment_id: int) -> None:
        if self.db.get_adjustment(adjustment_id) is None:
            raise NotFoundError(adjustment_not_found(adjustment_id))
        self.db.delete_adjustment(adjustment_id)
        logger.info("adjustment_removed", adjustment_id=adjustment_id)

    def list_adjustments(self) -> list[BalanceSheetAdjustment]:
        return self.db.list_adjustments()

    # Overrides
    def set_override(self, name: str, amount: object) -> None:
        """Force the displayed amount of a balance sheet line.

        Raises:
            ValidationError: If the line is derived or the amount is invalid
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Override line name cannot be empty")
        if normalize_name(name) == normalize_name(RETAINED_EARNINGS_LINE_NAME):
            raise ValidationError(
                f"'{RETAINED_EARNINGS_LINE_NAME}' is derived and cannot be overridden"
            )
        value = self._validated_amount(amount)
        self.db.set_override(name, value)
        logger.info("override_set", line=name, amount=str(value))

    def reset_override(self, name: str) -> bool:
        """Remove an override, restoring the computed value.

        Returns:
            True if an override was removed
        """
        removed = self.db.delete_override(name)
        if removed:
            logger.info("override_reset", line=name)
        return removed

    def list_overrides(self) -> dict[str, Decimal]:
        return self.db.list_overrides()

    def _validated_amount(self, amount: object) -> Decimal:
        try:
            return parse_money(amount)
        except ValueError as e:
            raise ValidationError(str(e))
