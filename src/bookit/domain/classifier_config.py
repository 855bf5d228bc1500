"""Fallback tables used by the account classifier.

The tables are data, not code: a ``ClassifierConfig`` is passed into the
classifier and can be loaded from a JSON file to override the shipped defaults.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from bookit.domain.entities import AccountBucket
from bookit.domain.errors import ValidationError
from bookit.domain.registry import normalize_name

P_AND_L = AccountBucket.PROFIT_AND_LOSS_ITEM

DEFAULT_MAPPING: dict[str, AccountBucket] = {
    # Balance sheet items
    "Inventory": AccountBucket.CURRENT_ASSET,
    "Accounts Receivable": AccountBucket.CURRENT_ASSET,
    "Prepaid Expenses": AccountBucket.CURRENT_ASSET,
    "Security Deposit": AccountBucket.CURRENT_ASSET,
    "Equipment Purchase": AccountBucket.FIXED_ASSET,
    "Computer Hardware": AccountBucket.FIXED_ASSET,
    "Accounts Payable": AccountBucket.CURRENT_LIABILITY,
    "Credit Card": AccountBucket.CURRENT_LIABILITY,
    "Sales Tax Payable": AccountBucket.CURRENT_LIABILITY,
    "Loans": AccountBucket.LONG_TERM_LIABILITY,
    "Business Loan": AccountBucket.LONG_TERM_LIABILITY,
    "Vehicle Loan Payment": AccountBucket.LONG_TERM_LIABILITY,
    "Owner Investment": AccountBucket.EQUITY,
    "Owner Contribution": AccountBucket.EQUITY,
    "Withdrawal": AccountBucket.EQUITY,
    "Withdrawl": AccountBucket.EQUITY,
    "Owner Draw": AccountBucket.EQUITY,
    "Drawings": AccountBucket.EQUITY,
    # Operating items
    "Sales Revenue": P_AND_L,
    "Services Income": P_AND_L,
    "Client Revenue": P_AND_L,
    "Other Income": P_AND_L,
    "Interest Income": P_AND_L,
    "Rent": P_AND_L,
    "Utilities": P_AND_L,
    "Payroll": P_AND_L,
    "Office Supplies": P_AND_L,
    "Software": P_AND_L,
    "Contractors": P_AND_L,
    "Travel": P_AND_L,
    "Professional Fees": P_AND_L,
    "Bank Fees": P_AND_L,
    "Marketing": P_AND_L,
    "Insurance": P_AND_L,
    "Repairs & Maintenance": P_AND_L,
    "Repairs & Maintainance": P_AND_L,
    "Uncategorized": P_AND_L,
}

FIXED_ASSET_KEYWORDS = (
    "equipment",
    "computer",
    "furniture",
    "vehicle",
    "property",
    "machinery",
    "building",
    "asset",
)

LONG_TERM_LIABILITY_KEYWORDS = (
    "loan",
    "principal",
    "mortgage",
    "financing",
    "note payable",
    "liability",
)

CURRENT_LIABILITY_KEYWORDS = (
    "credit card",
    "credit line",
    "payable",
    "accrued",
    "overdraft",
)


@dataclass(frozen=True)
class ClassifierConfig:
    """Versioned default mapping and keyword lists for account classification."""

    version: str = "1"
    default_mapping: Mapping[str, AccountBucket] = field(
        default_factory=lambda: dict(DEFAULT_MAPPING)
    )
    fixed_asset_keywords: tuple[str, ...] = FIXED_ASSET_KEYWORDS
    long_term_liability_keywords: tuple[str, ...] = LONG_TERM_LIABILITY_KEYWORDS
    current_liability_keywords: tuple[str, ...] = CURRENT_LIABILITY_KEYWORDS

    def __post_init__(self):
        # Store lookups under the case-insensitive key
        normalized = {
            normalize_name(name): AccountBucket(bucket)
            for name, bucket in self.default_mapping.items()
        }
        object.__setattr__(self, "_lookup", normalized)

    def default_bucket_for(self, category_name: str) -> AccountBucket | None:
        return self._lookup.get(normalize_name(category_name))

    def keyword_lists(self) -> tuple[tuple[AccountBucket, tuple[str, ...]], ...]:
        """Keyword lists in the order they are checked."""
        return (
            (AccountBucket.FIXED_ASSET, self.fixed_asset_keywords),
            (AccountBucket.LONG_TERM_LIABILITY, self.long_term_liability_keywords),
            (AccountBucket.CURRENT_LIABILITY, self.current_liability_keywords),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "default_mapping": {
                name: AccountBucket(bucket).value
                for name, bucket in self.default_mapping.items()
            },
            "fixed_asset_keywords": list(self.fixed_asset_keywords),
            "long_term_liability_keywords": list(self.long_term_liability_keywords),
            "current_liability_keywords": list(self.current_liability_keywords),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClassifierConfig":
        """Build a config from plain data, falling back to defaults per key.

        Raises:
            ValidationError: If a bucket name is unknown or a list is malformed
        """
        defaults = cls()
        mapping = defaults.default_mapping
        if "default_mapping" in data:
            raw_mapping = data["default_mapping"]
            if not isinstance(raw_mapping, Mapping):
                raise ValidationError("default_mapping must be an object")
            mapping = {}
            for name, bucket in raw_mapping.items():
                try:
                    mapping[name] = AccountBucket(str(bucket).upper())
                except ValueError:
                    raise ValidationError(
                        f"Unknown account bucket '{bucket}' for category '{name}'"
                    )

        def keywords(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
            if key not in data:
                return default
            value = data[key]
            if not isinstance(value, list) or not all(
                isinstance(item, str) for item in value
            ):
                raise ValidationError(f"{key} must be a list of strings")
            return tuple(item.casefold() for item in value if item.strip())

        return cls(
            version=str(data.get("version", defaults.version)),
            default_mapping=mapping,
            fixed_asset_keywords=keywords(
                "fixed_asset_keywords", defaults.fixed_asset_keywords
            ),
            long_term_liability_keywords=keywords(
                "long_term_liability_keywords", defaults.long_term_liability_keywords
            ),
            current_liability_keywords=keywords(
                "current_liability_keywords", defaults.current_liability_keywords
            ),
        )


DEFAULT_CLASSIFIER_CONFIG = ClassifierConfig()


def load_classifier_config(path: str | Path) -> ClassifierConfig:
    """Load classifier tables from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the file isn't valid JSON or has malformed tables
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Classifier config not found: {path}")
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid classifier config '{path}': {e}")
    if not isinstance(data, dict):
        raise ValidationError(f"Invalid classifier config '{path}': expected an object")
    return ClassifierConfig.from_dict(data)
