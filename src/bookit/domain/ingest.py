"""Ingestion of transactions proposed by the document extraction service.

Document parsing happens outside bookit. The extraction service hands over
proposed transactions; ``TransactionExtractor`` is the seam, and
``CSVTransactionExtractor`` reads the CSV export the service produces.
"""

import csv
import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

import structlog

from bookit.database.base import Database
from bookit.domain.entities import Transaction, TransactionType, UNCATEGORIZED
from bookit.domain import rules as rule_engine
from bookit.domain.transaction import TransactionService, coerce_transaction_type
from bookit.utils.amount_parser import parse_amount
from bookit.utils.date_parser import parse_date

logger = structlog.get_logger(__name__)

REQUIRED_COLUMNS = ("date", "description", "amount")


def split_signed_amount(amount: Decimal) -> tuple[Decimal, TransactionType]:
    """Turn a signed amount into a magnitude and a direction.

    Negative amounts are expenses; zero and positive amounts are income.
    """
    if amount < 0:
        return -amount, TransactionType.EXPENSE
    return amount, TransactionType.INCOME


@dataclass(frozen=True)
class ProposedTransaction:
    """A transaction as proposed by the extraction service."""

    date: date
    description: str
    amount: Decimal
    type: TransactionType
    category: Optional[str] = None
    original_description: Optional[str] = None
    id: Optional[str] = None
    document_id: Optional[str] = None

    def identity(self) -> str:
        """Return the explicit ID, or one derived from the content.

        Deriving the ID makes re-importing the same export an update rather
        than a duplicate.
        """
        if self.id:
            return self.id
        key = "|".join(
            [
                self.date.isoformat(),
                self.original_description or self.description,
                str(self.amount),
                self.type.value,
                self.document_id or "",
            ]
        )
        return hashlib.sha1(key.encode("utf-8")).hexdigest()[:32]

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.identity(),
            date=self.date,
            description=self.description,
            amount=self.amount,
            type=self.type,
            category=self.category or UNCATEGORIZED,
            original_description=self.original_description or self.description,
            document_id=self.document_id,
        )


@dataclass(frozen=True)
class ExtractionError:
    """A record the extractor could not turn into a proposal."""

    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class TransactionExtractor(ABC):
    """Source of proposed transactions for one document."""

    @abstractmethod
    def extract(self, path: str | Path) -> Iterator[ProposedTransaction | ExtractionError]:
        """Yield proposals (or per-record errors) lazily."""
        pass


class CSVTransactionExtractor(TransactionExtractor):
    """Reads the extraction service's CSV export.

    Columns: ``date``, ``description``, ``amount`` are required; ``id``,
    ``type``, ``category``, ``original_description`` and ``document_id`` are
    optional. Without a ``type`` column the direction is taken from the
    amount sign (negative is an expense).
    """

    def extract(self, path: str | Path) -> Iterator[ProposedTransaction | ExtractionError]:
        csv_path = Path(path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {path}")

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValueError("CSV file has no columns")
            columns = {name.strip().lower(): name for name in reader.fieldnames}
            missing = [col for col in REQUIRED_COLUMNS if col not in columns]
            if missing:
                raise ValueError(f"CSV file missing required columns: {', '.join(missing)}")

            for row_num, row in enumerate(reader, start=2):
                values = {
                    key: (row.get(original) or "").strip()
                    for key, original in columns.items()
                }
                try:
                    yield self._parse_row(values)
                except ValueError as e:
                    yield ExtractionError(location=f"Row {row_num}", message=str(e))

    def _parse_row(self, values: dict[str, str]) -> ProposedTransaction:
        if not values.get("date"):
            raise ValueError("Missing date")
        if not values.get("amount"):
            raise ValueError("Missing amount")

        txn_date = parse_date(values["date"])
        magnitude, inferred_type = split_signed_amount(parse_amount(values["amount"]))
        txn_type = (
            coerce_transaction_type(values["type"]) if values.get("type") else inferred_type
        )

        description = values.get("description") or "No Description"
        return ProposedTransaction(
            date=txn_date,
            description=description,
            amount=magnitude,
            type=txn_type,
            category=values.get("category") or None,
            original_description=values.get("original_description") or description,
            id=values.get("id") or None,
            document_id=values.get("document_id") or None,
        )


class ImportService:
    """Service for importing extracted transactions."""

    def __init__(self, db: Database, extractor: Optional[TransactionExtractor] = None):
        """Initialize import service.

        Args:
            db: Database instance
            extractor: Extraction source (CSV export reader by default)
        """
        self.db = db
        self.extractor = extractor or CSVTransactionExtractor()
        self.transaction_service = TransactionService(db)

    def import_file(self, path: str | Path, apply_rules: bool = True) -> dict[str, Any]:
        """Import one extracted document.

        Returns:
            Dict with import statistics:
            - imported: number of new transactions
            - updated: number of transactions that already existed
            - errors: list of error messages

        Raises:
            ValueError: If the document cannot be read at all
            FileNotFoundError: If the file doesn't exist
        """
        proposals: list[ProposedTransaction] = []
        errors: list[str] = []
        for item in self.extractor.extract(path):
            if isinstance(item, ExtractionError):
                errors.append(str(item))
            else:
                proposals.append(item)

        result = self.import_proposals(proposals, apply_rules=apply_rules)
        result["errors"] = errors + result["errors"]
        logger.info(
            "transactions_imported",
            path=str(path),
            imported=result["imported"],
            updated=result["updated"],
            errors=len(result["errors"]),
        )
        return result

    def import_proposals(
        self, proposals: Iterable[ProposedTransaction], apply_rules: bool = True
    ) -> dict[str, Any]:
        """Import already-extracted proposals."""
        transactions = [proposal.to_transaction() for proposal in proposals]
        if apply_rules:
            transactions = rule_engine.apply_rules(self.db.list_rules(), transactions)

        imported = 0
        updated = 0
        errors = []
        for txn in transactions:
            try:
                inserted, changed = self.transaction_service.upsert_transactions([txn])
            except ValueError as e:
                errors.append(f"Transaction {txn.id}: {e}")
                continue
            imported += inserted
            updated += changed

        return {"imported": imported, "updated": updated, "errors": errors}
