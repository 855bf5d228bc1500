"""Similar transaction lookup.

Used to batch-apply one categorization decision to the other transactions of
the same recurring counterparty.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

import structlog

from bookit.database.base import Database
from bookit.domain.entities import Transaction
from bookit.domain.transaction import TransactionService
from bookit.domain.errors import NotFoundError, transaction_not_found

logger = structlog.get_logger(__name__)

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9\s]")


@dataclass(frozen=True)
class SimilarityOptions:
    """Matching thresholds."""

    min_token_overlap: int = 2
    amount_tolerance: Decimal = Decimal("0")
    max_results: int = 100


def tokenize(text: Optional[str]) -> set[str]:
    """Lowercase, replace non-alphanumerics with spaces and drop 1-char tokens."""
    if not text:
        return set()
    cleaned = _NON_ALPHANUMERIC.sub(" ", text.lower())
    return {token for token in cleaned.split() if len(token) > 1}


def _match_text(txn: Transaction) -> str:
    return txn.original_description or txn.description


def find_similar(
    base: Transaction,
    population: Iterable[Transaction],
    options: Optional[SimilarityOptions] = None,
) -> list[Transaction]:
    """Find transactions that likely describe the same counterparty.

    Each candidate scores one point for an amount within tolerance and two per
    token shared with the base description. A candidate is kept when its score
    is positive and it either reaches the token overlap threshold or passed
    the amount check. Results are ordered by score, then most recent date.
    """
    options = options or SimilarityOptions()
    tolerance = Decimal(str(options.amount_tolerance))
    base_tokens = tokenize(_match_text(base))

    scored: list[tuple[int, Transaction]] = []
    for candidate in population:
        if candidate.id == base.id:
            continue

        amount_close = abs(candidate.amount - base.amount) <= tolerance
        overlap = len(tokenize(_match_text(candidate)) & base_tokens)
        score = (1 if amount_close else 0) + 2 * overlap

        if score > 0 and (overlap >= options.min_token_overlap or amount_close):
            scored.append((score, candidate))

    # Two stable passes: date descending, then score descending
    scored.sort(key=lambda item: item[1].date, reverse=True)
    scored.sort(key=lambda item: item[0], reverse=True)
    return [txn for _, txn in scored[: max(options.max_results, 0)]]


class SimilarityService:
    """Service for finding and bulk-categorizing similar stored transactions."""

    def __init__(self, db: Database):
        self.db = db
        self.transaction_service = TransactionService(db)

    def find_similar(
        self, transaction_id: str, options: Optional[SimilarityOptions] = None
    ) -> tuple[Transaction, list[Transaction]]:
        """Find stored transactions similar to one transaction.

        Returns:
            Tuple of (base transaction, ordered matches)

        Raises:
            NotFoundError: If the base transaction doesn't exist
        """
        base = self.db.get_transaction(transaction_id)
        if base is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return base, find_similar(base, self.db.list_transactions(), options)

    def apply_category(self, transaction_ids: Iterable[str], category: str) -> int:
        """Assign one category to a batch of transactions.

        Returns:
            Number of transactions updated
        """
        updated = self.transaction_service.bulk_update_category(transaction_ids, category)
        logger.info("similar_transactions_categorized", category=category, count=updated)
        return updated
