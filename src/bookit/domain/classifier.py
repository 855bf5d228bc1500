"""Account classification.

Resolves a category name to the statement bucket it is reported in. The
precedence is:

1. the account type declared on the category in the registry
2. the default mapping of well-known category names
3. keyword heuristics on the category name (fixed asset, long-term
   liability, current liability lists, in that order)
4. otherwise a profit and loss item

Classification is a pure function of the category name, the registry and the
classifier config.
"""

from typing import Optional

from bookit.domain.classifier_config import ClassifierConfig, DEFAULT_CLASSIFIER_CONFIG
from bookit.domain.entities import AccountBucket, AccountType
from bookit.domain.registry import CategoryRegistry

DECLARED_TYPE_BUCKETS: dict[AccountType, AccountBucket] = {
    AccountType.INCOME: AccountBucket.PROFIT_AND_LOSS_ITEM,
    AccountType.EXPENSE: AccountBucket.PROFIT_AND_LOSS_ITEM,
    AccountType.CURRENT_ASSET: AccountBucket.CURRENT_ASSET,
    AccountType.FIXED_ASSET: AccountBucket.FIXED_ASSET,
    AccountType.CURRENT_LIABILITY: AccountBucket.CURRENT_LIABILITY,
    AccountType.LONG_TERM_LIABILITY: AccountBucket.LONG_TERM_LIABILITY,
    AccountType.EQUITY: AccountBucket.EQUITY,
    AccountType.ASSET: AccountBucket.FIXED_ASSET,
    AccountType.LIABILITY: AccountBucket.LONG_TERM_LIABILITY,
}


class AccountClassifier:
    """Classifies category names into statement buckets."""

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self.config = config or DEFAULT_CLASSIFIER_CONFIG

    def classify(
        self, category_name: str, registry: Optional[CategoryRegistry] = None
    ) -> AccountBucket:
        """Classify a category name.

        Args:
            category_name: Category name as carried by a transaction
            registry: Current categories; declared account types win

        Returns:
            The bucket the category is reported in
        """
        declared = self.declared_bucket(category_name, registry)
        if declared is not None:
            return declared

        default = self.config.default_bucket_for(category_name)
        if default is not None:
            return default

        heuristic = self.keyword_bucket(category_name)
        if heuristic is not None:
            return heuristic

        return AccountBucket.PROFIT_AND_LOSS_ITEM

    def declared_bucket(
        self, category_name: str, registry: Optional[CategoryRegistry]
    ) -> Optional[AccountBucket]:
        if registry is None:
            return None
        account_type = registry.account_type_for(category_name)
        if account_type is None:
            return None
        return DECLARED_TYPE_BUCKETS[AccountType(account_type)]

    def keyword_bucket(self, category_name: str) -> Optional[AccountBucket]:
        lowered = (category_name or "").casefold()
        for bucket, keywords in self.config.keyword_lists():
            if any(keyword in lowered for keyword in keywords):
                return bucket
        return None


_DEFAULT_CLASSIFIER = AccountClassifier()


def classify_account(
    category_name: str,
    registry: Optional[CategoryRegistry] = None,
    config: Optional[ClassifierConfig] = None,
) -> AccountBucket:
    """Classify a category using the given or default config."""
    classifier = AccountClassifier(config) if config is not None else _DEFAULT_CLASSIFIER
    return classifier.classify(category_name, registry)
