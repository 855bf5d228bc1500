"""Mapper functions to convert between domain models and SQLAlchemy models.

Stored enum columns are plain strings; the mappers turn them back into the
domain enums and resolve foreign keys to the names the domain works with.
"""

from decimal import Decimal
from typing import Optional

from bookit.domain import entities as domain
from bookit.database.models import (
    BalanceSheetAdjustment as ORMAdjustment,
    Category as ORMCategory,
    Profile as ORMProfile,
    Rule as ORMRule,
    Transaction as ORMTransaction,
)


def _account_type(value: Optional[str]) -> Optional[domain.AccountType]:
    if not value:
        return None
    try:
        return domain.AccountType(value)
    except ValueError:
        # Hand-edited or future values classify as undeclared
        return None


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        account_type=_account_type(orm_category.account_type),
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    category = orm_transaction.category
    entity = orm_transaction.entity
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        amount=Decimal(orm_transaction.amount),
        type=domain.TransactionType(orm_transaction.type),
        category=category.name if category is not None else domain.UNCATEGORIZED,
        original_description=orm_transaction.original_description or "",
        entity_id=orm_transaction.entity_id,
        entity_name=entity.name if entity is not None else None,
        document_id=orm_transaction.document_id,
        imported_at=orm_transaction.imported_at,
    )


def rule_to_domain(orm_rule: ORMRule) -> domain.CategorizationRule:
    """Convert SQLAlchemy Rule model to domain CategorizationRule entity."""
    return domain.CategorizationRule(
        id=orm_rule.id,
        keyword=orm_rule.keyword,
        target_category=orm_rule.category.name,
        target_type=domain.TransactionType(orm_rule.target_type) if orm_rule.target_type else None,
        created_at=orm_rule.created_at,
    )


def profile_to_domain(orm_profile: ORMProfile) -> domain.EntityProfile:
    """Convert SQLAlchemy Profile model to domain EntityProfile entity."""
    default_category = orm_profile.default_category
    return domain.EntityProfile(
        id=orm_profile.id,
        name=orm_profile.name,
        type=domain.ProfileType(orm_profile.type),
        keyword=orm_profile.keyword,
        default_category=default_category.name if default_category is not None else None,
        description=orm_profile.description,
        created_at=orm_profile.created_at,
    )


def adjustment_to_domain(orm_adjustment: ORMAdjustment) -> domain.BalanceSheetAdjustment:
    """Convert SQLAlchemy adjustment model to domain BalanceSheetAdjustment."""
    return domain.BalanceSheetAdjustment(
        id=orm_adjustment.id,
        name=orm_adjustment.name,
        amount=Decimal(orm_adjustment.amount),
        type=domain.AdjustmentType(orm_adjustment.type),
    )
