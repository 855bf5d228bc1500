"""Tests for similar transaction lookup."""

from datetime import date
from decimal import Decimal

import pytest

from bookit.domain.errors import NotFoundError
from bookit.domain.similarity import SimilarityOptions, SimilarityService, find_similar, tokenize


def test_tokenize():
    assert tokenize("ADOBE *CREATIVE-CLOUD 4 x12") == {"adobe", "creative", "cloud", "x12"}
    assert tokenize("") == set()
    assert tokenize(None) == set()


@pytest.fixture
def population(make_txn):
    return [
        make_txn("ADOBE CREATIVE CLOUD", "54.99", id="base", txn_date=date(2024, 3, 1)),
        make_txn("ADOBE CREATIVE CLOUD", "54.99", id="same", txn_date=date(2024, 2, 1)),
        make_txn("ADOBE CREATIVE CLOUD", "59.99", id="price-change", txn_date=date(2024, 4, 1)),
        make_txn("ADOBE STOCK", "29.99", id="one-token", txn_date=date(2024, 1, 1)),
        make_txn("GYM MEMBERSHIP", "54.99", id="amount-only", txn_date=date(2024, 1, 15)),
        make_txn("GROCERIES", "12.00", id="unrelated", txn_date=date(2024, 1, 20)),
    ]


class TestFindSimilar:
    def test_scoring_and_order(self, population):
        base = population[0]

        result = find_similar(base, population)

        assert [t.id for t in result] == ["same", "price-change", "amount-only"]

    def test_excludes_base(self, population):
        result = find_similar(population[0], population)

        assert "base" not in {t.id for t in result}

    def test_deterministic(self, population):
        base = population[0]
        runs = [[t.id for t in find_similar(base, population)] for _ in range(3)]

        assert runs[0] == runs[1] == runs[2]

    def test_date_breaks_score_ties(self, make_txn):
        base = make_txn("ACME SUPPLY CO", "10", id="base")
        older = make_txn("ACME SUPPLY", "99", id="older", txn_date=date(2024, 1, 1))
        newer = make_txn("ACME SUPPLY", "98", id="newer", txn_date=date(2024, 5, 1))

        assert [t.id for t in find_similar(base, [older, base, newer])] == ["newer", "older"]

    def test_single_token_needs_lower_threshold(self, population):
        options = SimilarityOptions(min_token_overlap=1)

        ids = [t.id for t in find_similar(population[0], population, options)]

        assert "one-token" in ids

    def test_tolerance_widens_amount_gate(self, population):
        options = SimilarityOptions(amount_tolerance=Decimal("5.00"))

        result = find_similar(population[0], population, options)

        # Both now score 7; the newer one comes first
        assert [t.id for t in result[:2]] == ["price-change", "same"]

    def test_max_results(self, population):
        options = SimilarityOptions(max_results=1)

        assert [t.id for t in find_similar(population[0], population, options)] == ["same"]

    def test_population_untouched(self, population):
        before = list(population)
        find_similar(population[0], population)
        assert population == before


class TestSimilarityService:
    def test_find_and_apply(self, temp_db, transaction_service, sample_categories):
        for txn_id, amount in (("a1", "54.99"), ("a2", "54.99"), ("a3", "54.99")):
            transaction_service.create_transaction(
                date=date(2024, 1, int(txn_id[1])),
                description="ADOBE CREATIVE CLOUD",
                amount=Decimal(amount),
                type="expense",
                transaction_id=txn_id,
            )
        service = SimilarityService(temp_db)

        base, matches = service.find_similar("a1")
        assert base.id == "a1"
        assert [t.id for t in matches] == ["a3", "a2"]

        updated = service.apply_category([base.id] + [t.id for t in matches], "Software")
        assert updated == 3
        assert {t.id for t in transaction_service.list_transactions(category="Software")} == {"a1", "a2", "a3"}

    def test_missing_base(self, temp_db):
        with pytest.raises(NotFoundError):
            SimilarityService(temp_db).find_similar("nope")
