"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime
from decimal import Decimal

from bookit.database.factories import create_sqlite_database
from bookit.domain import entities


def _add_txn(db, txn_id, txn_date=date(2024, 1, 15), description="Coffee", amount="4.50",
             txn_type=entities.TransactionType.EXPENSE, category_id=None):
    return db.upsert_transaction(
        transaction_id=txn_id,
        date=txn_date,
        description=description,
        amount=Decimal(amount),
        type=txn_type,
        category_id=category_id,
    )


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_category_returns_domain_model(self, temp_db):
        """Test that get_category returns a domain Category entity."""
        category_id = temp_db.create_category(name="Inventory", account_type=entities.AccountType.CURRENT_ASSET)

        category = temp_db.get_category(category_id)

        assert isinstance(category, entities.Category)
        assert category.id == category_id
        assert category.name == "Inventory"
        assert category.account_type == entities.AccountType.CURRENT_ASSET
        assert isinstance(category.created_at, datetime)

    def test_get_category_by_name_ignores_case(self, temp_db):
        category_id = temp_db.create_category(name="Office Supplies")

        assert temp_db.get_category_by_name("office SUPPLIES").id == category_id
        assert temp_db.get_category_by_name("Missing") is None

    def test_list_categories_in_definition_order(self, temp_db):
        for name in ("Zeta", "Alpha", "Mid"):
            temp_db.create_category(name=name)

        assert [c.name for c in temp_db.list_categories()] == ["Zeta", "Alpha", "Mid"]

    def test_update_category_clears_account_type(self, temp_db):
        category_id = temp_db.create_category(name="Equipment", account_type=entities.AccountType.FIXED_ASSET)

        temp_db.update_category(category_id, name="Tools")
        assert temp_db.get_category(category_id).account_type == entities.AccountType.FIXED_ASSET

        temp_db.update_category(category_id, account_type=None, update_account_type=True)
        category = temp_db.get_category(category_id)
        assert category.name == "Tools"
        assert category.account_type is None

    def test_update_category_duplicate_name(self, temp_db):
        temp_db.create_category(name="Rent")
        other = temp_db.create_category(name="Utilities")

        with pytest.raises(ValueError, match="already exists"):
            temp_db.update_category(other, name="rent")

    def test_delete_category_detaches_transactions_and_rules(self, temp_db):
        category_id = temp_db.create_category(name="Meals")
        _add_txn(temp_db, "a", category_id=category_id)
        _add_txn(temp_db, "b", category_id=category_id)
        temp_db.create_rule(keyword="coffee", category_id=category_id)
        profile_id = temp_db.create_profile(
            name="Cafe", type=entities.ProfileType.VENDOR, default_category_id=category_id
        )

        detached = temp_db.delete_category(category_id)

        assert detached == 2
        assert temp_db.get_transaction("a").category == entities.UNCATEGORIZED
        assert temp_db.list_rules() == []
        assert temp_db.get_profile(profile_id).default_category is None
        assert temp_db.count_transactions(uncategorized=True) == 2

    def test_get_transaction_returns_domain_model(self, temp_db):
        """Test that get_transaction returns a domain Transaction entity."""
        category_id = temp_db.create_category(name="Meals")
        txn_id = _add_txn(temp_db, "TXN001", category_id=category_id)

        transaction = temp_db.get_transaction(txn_id)

        assert isinstance(transaction, entities.Transaction)
        assert transaction.id == "TXN001"
        assert transaction.amount == Decimal("4.50")
        assert transaction.type == entities.TransactionType.EXPENSE
        assert transaction.category == "Meals"
        assert transaction.original_description == "Coffee"
        assert isinstance(transaction.imported_at, datetime)

    def test_upsert_replaces_by_identity(self, temp_db):
        _add_txn(temp_db, "same", amount="4.50")
        _add_txn(temp_db, "same", amount="5.00", description="Coffee and cake")

        assert temp_db.count_transactions() == 1
        transaction = temp_db.get_transaction("same")
        assert transaction.amount == Decimal("5.00")
        assert transaction.description == "Coffee and cake"

    def test_upsert_keeps_classification_of_existing_row(self, temp_db):
        meals = temp_db.create_category(name="Meals")
        travel = temp_db.create_category(name="Travel")
        _add_txn(temp_db, "kept", description="SQ *BLUE BTL 0042")
        temp_db.update_transaction_category("kept", meals)
        temp_db.update_transaction_description("kept", "Blue Bottle coffee")

        _add_txn(temp_db, "kept", amount="4.75", description="SQ *BLUE BTL 0042", category_id=travel)

        transaction = temp_db.get_transaction("kept")
        assert transaction.amount == Decimal("4.75")
        assert transaction.category == "Meals"
        assert transaction.description == "Blue Bottle coffee"
        assert transaction.original_description == "SQ *BLUE BTL 0042"

    def test_update_description_keeps_original(self, temp_db):
        _add_txn(temp_db, "d1", description="SQ *BLUE BTL 0042")

        temp_db.update_transaction_description("d1", "Blue Bottle coffee")

        transaction = temp_db.get_transaction("d1")
        assert transaction.description == "Blue Bottle coffee"
        assert transaction.original_description == "SQ *BLUE BTL 0042"

    def test_list_transactions_filters(self, temp_db):
        rent = temp_db.create_category(name="Rent")
        _add_txn(temp_db, "r1", date(2024, 1, 1), "LANDLORD JAN", "1000", category_id=rent)
        _add_txn(temp_db, "r2", date(2024, 2, 1), "LANDLORD FEB", "1000", category_id=rent)
        _add_txn(temp_db, "c1", date(2024, 2, 3), "100% Coffee", "4.50")
        _add_txn(temp_db, "s1", date(2024, 3, 1), "Stripe payout", "250", entities.TransactionType.INCOME)

        assert [t.id for t in temp_db.list_transactions()] == ["s1", "c1", "r2", "r1"]
        assert [t.id for t in temp_db.list_transactions(category_id=rent)] == ["r2", "r1"]
        assert [t.id for t in temp_db.list_transactions(uncategorized=True)] == ["s1", "c1"]
        assert [t.id for t in temp_db.list_transactions(start_date=date(2024, 2, 1), end_date=date(2024, 2, 28))] == [
            "c1",
            "r2",
        ]
        assert [t.id for t in temp_db.list_transactions(search="landlord")] == ["r2", "r1"]
        assert [t.id for t in temp_db.list_transactions(search="100%")] == ["c1"]
        assert [t.id for t in temp_db.list_transactions(min_amount=Decimal("100"), max_amount=Decimal("500"))] == [
            "s1"
        ]

    def test_rules_round_trip(self, temp_db):
        category_id = temp_db.create_category(name="Other Income")
        rule_id = temp_db.create_rule("refund", category_id, entities.TransactionType.INCOME)

        rule = temp_db.get_rule(rule_id)

        assert isinstance(rule, entities.CategorizationRule)
        assert rule.target_category == "Other Income"
        assert rule.target_type == entities.TransactionType.INCOME

        temp_db.delete_rule(rule_id)
        assert temp_db.get_rule(rule_id) is None

    def test_create_rule_requires_category(self, temp_db):
        with pytest.raises(ValueError):
            temp_db.create_rule("refund", 999)

    def test_profiles_and_linking(self, temp_db):
        software = temp_db.create_category(name="Software")
        profile_id = temp_db.create_profile(name="Adobe", type=entities.ProfileType.VENDOR, keyword="adobe")
        _add_txn(temp_db, "a1", description="ADOBE *CREATIVE CLOUD", amount="54.99")
        _add_txn(temp_db, "g1", description="Groceries")

        linked = temp_db.link_transactions_to_profile(profile_id, "adobe", category_id=software)

        assert linked == 1
        txn = temp_db.get_transaction("a1")
        assert txn.entity_name == "Adobe"
        assert txn.category == "Software"
        assert temp_db.list_transactions(entity_id=profile_id)[0].id == "a1"

        assert temp_db.delete_profile(profile_id) == 1
        assert temp_db.get_transaction("a1").entity_id is None

    def test_adjustments(self, temp_db):
        adjustment_id = temp_db.create_adjustment("Prepaid Rent", Decimal("300.00"), entities.AdjustmentType.ASSET)

        assert temp_db.list_adjustments() == [
            entities.BalanceSheetAdjustment(adjustment_id, "Prepaid Rent", Decimal("300.00"), entities.AdjustmentType.ASSET)
        ]
        temp_db.delete_adjustment(adjustment_id)
        assert temp_db.get_adjustment(adjustment_id) is None

    def test_overrides_are_case_insensitive(self, temp_db):
        temp_db.set_override("Cash & Equivalents", Decimal("999"))
        temp_db.set_override("cash & equivalents", Decimal("1000"))

        assert temp_db.list_overrides() == {"Cash & Equivalents": Decimal("1000")}
        assert temp_db.delete_override("CASH & EQUIVALENTS") is True
        assert temp_db.delete_override("Cash & Equivalents") is False
        assert temp_db.list_overrides() == {}


def test_factory_uses_environment_path(tmp_path, monkeypatch):
    db_file = tmp_path / "env.db"
    monkeypatch.setenv("BOOKIT_DB_PATH", str(db_file))

    db = create_sqlite_database()
    db.create_category(name="Rent")
    db.disconnect()

    assert db.database_path == str(db_file)
    assert db_file.exists()
