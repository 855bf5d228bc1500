"""Keyword categorization rules.

The pure functions at the top of this module are the rule engine: they take a
rule list and transactions and return new transactions. ``RuleService`` wraps
them with persistence.
"""

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

import structlog

from bookit.database.base import Database
from bookit.domain.category import CategoryService
from bookit.domain.entities import CategorizationRule, Transaction, TransactionType
from bookit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_rule,
    rule_not_found,
    transaction_not_found,
)
from bookit.domain.registry import is_uncategorized, normalize_name

logger = structlog.get_logger(__name__)


def sort_rules(rules: Iterable[CategorizationRule]) -> list[CategorizationRule]:
    """Order rules longest keyword first.

    ``sorted`` is stable, so rules with equal keyword length keep their
    definition order.
    """
    return sorted(rules, key=lambda rule: len(rule.keyword), reverse=True)


def rule_matches(rule: CategorizationRule, txn: Transaction) -> bool:
    """Check whether a rule applies to a transaction."""
    keyword = rule.keyword.strip().casefold()
    if not keyword:
        return False
    if rule.target_type is not None and rule.target_type != txn.type:
        return False
    return keyword in (txn.description or "").casefold() or keyword in (
        txn.original_description or ""
    ).casefold()


def find_matching_rule(
    txn: Transaction, rules: Sequence[CategorizationRule], presorted: bool = False
) -> Optional[CategorizationRule]:
    """Return the winning rule for a transaction, or None."""
    ordered = rules if presorted else sort_rules(rules)
    for rule in ordered:
        if rule_matches(rule, txn):
            return rule
    return None


def apply_rules(
    rules: Sequence[CategorizationRule], transactions: Iterable[Transaction]
) -> list[Transaction]:
    """Re-evaluate every transaction against the same sorted rule list.

    Returns a new list. Transactions without a match, or already carrying the
    winning rule's category, are returned unchanged.
    """
    ordered = sort_rules(rules)
    result = []
    for txn in transactions:
        match = find_matching_rule(txn, ordered, presorted=True)
        if match is None or normalize_name(match.target_category) == normalize_name(
            txn.category
        ):
            result.append(txn)
        else:
            result.append(txn.with_category(match.target_category))
    return result


def count_rule_impact(
    rules: Sequence[CategorizationRule], transactions: Iterable[Transaction]
) -> dict[int, int]:
    """Count how many transactions each rule wins."""
    ordered = sort_rules(rules)
    counts = {rule.id: 0 for rule in rules}
    for txn in transactions:
        match = find_matching_rule(txn, ordered, presorted=True)
        if match is not None:
            counts[match.id] += 1
    return counts


def suggest_keyword(description: str) -> str:
    """Derive a rule keyword from a transaction description."""
    words = (description or "").split()
    return re.sub(r"[*#]", "", " ".join(words[:2])).strip()


@dataclass(frozen=True)
class RuleApplicationResult:
    """Outcome of applying the stored rule set to stored transactions."""

    evaluated: int
    changed_ids: tuple[str, ...]

    @property
    def changed(self) -> int:
        return len(self.changed_ids)


class RuleService:
    """Service for managing and applying categorization rules."""

    def __init__(self, db: Database):
        """Initialize rule service.

        Args:
            db: Database instance
        """
        self.db = db
        self.category_service = CategoryService(db)

    def create_rule(
        self,
        keyword: str,
        target_category: str,
        target_type: Optional[TransactionType] = None,
    ) -> int:
        """Create a rule.

        Args:
            keyword: Case-insensitive substring to look for in descriptions
            target_category: Category name assigned on match (created if new)
            target_type: Optional transaction type the rule is limited to

        Returns:
            Rule ID

        Raises:
            ValidationError: If the keyword is blank or the target is Uncategorized
            ConflictError: If the same keyword and type are already defined
        """
        keyword = (keyword or "").strip()
        if not keyword:
            raise ValidationError("Rule keyword cannot be empty")
        if is_uncategorized(target_category):
            raise ValidationError("Rules must target a named category")

        for rule in self.db.list_rules():
            if (
                normalize_name(rule.keyword) == normalize_name(keyword)
                and rule.target_type == target_type
            ):
                raise ConflictError(duplicate_rule(keyword))

        category = self.category_service.ensure_category(target_category)
        rule_id = self.db.create_rule(
            keyword=keyword,
            category_id=category.id,
            target_type=target_type,
        )
        logger.info(
            "rule_created",
            rule_id=rule_id,
            keyword=keyword,
            target_category=target_category,
            target_type=target_type.value if target_type else None,
        )
        return rule_id

    def create_rule_from_transaction(
        self, transaction_id: str, target_category: str
    ) -> int:
        """Create a rule whose keyword is derived from a transaction description."""
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return self.create_rule(
            keyword=suggest_keyword(txn.description), target_category=target_category
        )

    def get_rule(self, rule_id: int) -> Optional[CategorizationRule]:
        return self.db.get_rule(rule_id)

    def list_rules(self) -> list[CategorizationRule]:
        """List rules in definition order."""
        return self.db.list_rules()

    def delete_rule(self, rule_id: int) -> None:
        if self.db.get_rule(rule_id) is None:
            raise NotFoundError(rule_not_found(rule_id))
        self.db.delete_rule(rule_id)
        logger.info("rule_deleted", rule_id=rule_id)

    def apply_rules(self) -> RuleApplicationResult:
        """Apply all rules to all stored transactions.

        Only transactions whose category actually changes are written back, so
        running this twice in a row changes nothing the second time.
        """
        rules = self.db.list_rules()
        transactions = self.db.list_transactions()
        if not rules:
            return RuleApplicationResult(evaluated=len(transactions), changed_ids=())

        changed = []
        for before, after in zip(transactions, apply_rules(rules, transactions)):
            if after.category != before.category:
                category = self.category_service.ensure_category(after.category)
                self.db.update_transaction_category(
                    before.id, category.id if category else None
                )
                changed.append(before.id)

        logger.info(
            "rules_applied",
            rule_count=len(rules),
            evaluated=len(transactions),
            changed=len(changed),
        )
        return RuleApplicationResult(
            evaluated=len(transactions), changed_ids=tuple(changed)
        )

    def rule_impact(self) -> dict[int, int]:
        """Count stored transactions won by each rule."""
        return count_rule_impact(self.db.list_rules(), self.db.list_transactions())
