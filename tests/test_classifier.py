"""Tests for account classification and its configuration."""

import json

import pytest

from bookit.domain.classifier import AccountClassifier, classify_account
from bookit.domain.classifier_config import (
    ClassifierConfig,
    DEFAULT_CLASSIFIER_CONFIG,
    load_classifier_config,
)
from bookit.domain.entities import AccountBucket, AccountType, Category
from bookit.domain.errors import ValidationError
from bookit.domain.registry import CategoryRegistry


def _registry(*categories):
    return CategoryRegistry([Category(id=i, name=n, account_type=t) for i, (n, t) in enumerate(categories, 1)])


class TestPrecedence:
    def test_declared_type_beats_keyword_heuristic(self):
        """'Equipment' declared as EXPENSE stays on the P&L."""
        registry = _registry(("Equipment", AccountType.EXPENSE))

        assert classify_account("Equipment", registry) == AccountBucket.PROFIT_AND_LOSS_ITEM
        assert classify_account("Equipment") == AccountBucket.FIXED_ASSET

    def test_declared_type_beats_default_mapping(self):
        registry = _registry(("Inventory", AccountType.FIXED_ASSET))

        assert classify_account("Inventory", registry) == AccountBucket.FIXED_ASSET
        assert classify_account("Inventory") == AccountBucket.CURRENT_ASSET

    def test_default_mapping_beats_keyword_heuristic(self):
        # "Vehicle Loan Payment" hits the fixed-asset keyword "vehicle" first
        assert classify_account("Vehicle Loan Payment") == AccountBucket.LONG_TERM_LIABILITY

    def test_undeclared_registry_entry_falls_through(self):
        registry = _registry(("Office Chairs Furniture", None))

        assert classify_account("Office Chairs Furniture", registry) == AccountBucket.FIXED_ASSET


class TestDeclaredTypes:
    @pytest.mark.parametrize(
        "account_type, bucket",
        [
            (AccountType.INCOME, AccountBucket.PROFIT_AND_LOSS_ITEM),
            (AccountType.CURRENT_ASSET, AccountBucket.CURRENT_ASSET),
            (AccountType.CURRENT_LIABILITY, AccountBucket.CURRENT_LIABILITY),
            (AccountType.EQUITY, AccountBucket.EQUITY),
            (AccountType.ASSET, AccountBucket.FIXED_ASSET),
            (AccountType.LIABILITY, AccountBucket.LONG_TERM_LIABILITY),
        ],
    )
    def test_declared_bucket(self, account_type, bucket):
        registry = _registry(("Custom", account_type))
        assert classify_account("Custom", registry) == bucket


class TestDefaultMapping:
    def test_known_names(self):
        assert classify_account("Loans") == AccountBucket.LONG_TERM_LIABILITY
        assert classify_account("Withdrawal") == AccountBucket.EQUITY
        assert classify_account("Rent") == AccountBucket.PROFIT_AND_LOSS_ITEM

    def test_misspelling_is_tolerated(self):
        assert classify_account("Withdrawl") == AccountBucket.EQUITY
        assert classify_account("Repairs & Maintainance") == AccountBucket.PROFIT_AND_LOSS_ITEM

    def test_lookup_ignores_case(self):
        assert classify_account("accounts receivable") == AccountBucket.CURRENT_ASSET


class TestKeywordHeuristic:
    def test_lists_checked_in_order(self):
        # Contains both a fixed-asset and a long-term-liability keyword
        assert classify_account("Equipment Financing") == AccountBucket.FIXED_ASSET
        assert classify_account("Mortgage Principal") == AccountBucket.LONG_TERM_LIABILITY
        assert classify_account("Amex Credit Card") == AccountBucket.CURRENT_LIABILITY

    def test_unknown_falls_back_to_profit_and_loss(self):
        assert classify_account("Team Lunches") == AccountBucket.PROFIT_AND_LOSS_ITEM
        assert classify_account("") == AccountBucket.PROFIT_AND_LOSS_ITEM

    def test_classification_is_repeatable(self):
        classifier = AccountClassifier()
        registry = _registry(("Equipment", AccountType.EXPENSE))
        results = {classifier.classify("Equipment", registry) for _ in range(5)}

        assert results == {AccountBucket.PROFIT_AND_LOSS_ITEM}


class TestClassifierConfig:
    def test_custom_config_replaces_tables(self):
        config = ClassifierConfig.from_dict(
            {
                "default_mapping": {"Crypto Wallet": "current_asset"},
                "fixed_asset_keywords": ["Drone"],
            }
        )
        classifier = AccountClassifier(config)

        assert classifier.classify("crypto wallet") == AccountBucket.CURRENT_ASSET
        assert classifier.classify("Survey Drone") == AccountBucket.FIXED_ASSET
        # Shipped mapping replaced, keyword lists not given keep their defaults
        assert classifier.classify("Inventory") == AccountBucket.PROFIT_AND_LOSS_ITEM
        assert classifier.classify("Car Loan") == AccountBucket.LONG_TERM_LIABILITY

    def test_round_trip_through_dict(self):
        config = ClassifierConfig.from_dict(DEFAULT_CLASSIFIER_CONFIG.to_dict())

        assert config.default_bucket_for("Loans") == AccountBucket.LONG_TERM_LIABILITY
        assert config.fixed_asset_keywords == DEFAULT_CLASSIFIER_CONFIG.fixed_asset_keywords

    def test_unknown_bucket_rejected(self):
        with pytest.raises(ValidationError, match="Unknown account bucket"):
            ClassifierConfig.from_dict({"default_mapping": {"X": "SOMEWHERE"}})

    def test_malformed_keyword_list_rejected(self):
        with pytest.raises(ValidationError, match="list of strings"):
            ClassifierConfig.from_dict({"current_liability_keywords": "payable"})

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "classifier.json"
        path.write_text(json.dumps({"version": "2", "default_mapping": {"Deposits": "CURRENT_ASSET"}}))

        config = load_classifier_config(path)

        assert config.version == "2"
        assert config.default_bucket_for("Deposits") == AccountBucket.CURRENT_ASSET

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "classifier.json"
        path.write_text("{not json")

        with pytest.raises(ValidationError):
            load_classifier_config(path)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_classifier_config(tmp_path / "missing.json")
