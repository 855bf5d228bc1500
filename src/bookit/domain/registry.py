"""In-memory category registry.

Categories are open, user-defined string keys. The registry is the lookup the
classifier and the aggregator run against; names compare case-insensitively.
"""

from typing import Iterable, Iterator, Optional

from bookit.domain.entities import AccountType, Category, UNCATEGORIZED


def normalize_name(name: str) -> str:
    """Return the comparison key for a category name."""
    return name.strip().casefold()


def is_uncategorized(name: Optional[str]) -> bool:
    """Check whether a name refers to the default Uncategorized entry."""
    return not name or normalize_name(name) == normalize_name(UNCATEGORIZED)


class CategoryRegistry:
    """Immutable, case-insensitive mapping of category name to Category."""

    def __init__(self, categories: Iterable[Category] = ()):
        self._by_key: dict[str, Category] = {}
        for category in categories:
            # First definition wins on a case-insensitive clash
            self._by_key.setdefault(normalize_name(category.name), category)

    @classmethod
    def from_categories(cls, categories: Iterable[Category]) -> "CategoryRegistry":
        return cls(categories)

    def get(self, name: str) -> Optional[Category]:
        """Get category by name, ignoring case."""
        if not name:
            return None
        return self._by_key.get(normalize_name(name))

    def account_type_for(self, name: str) -> Optional[AccountType]:
        """Get the declared account type of a category, if any."""
        category = self.get(name)
        return category.account_type if category else None

    def resolve_name(self, name: Optional[str]) -> str:
        """Return the registered spelling of a name, or Uncategorized if unknown."""
        if is_uncategorized(name):
            return UNCATEGORIZED
        category = self.get(name)
        return category.name if category else UNCATEGORIZED

    def names(self) -> list[str]:
        return [category.name for category in self._by_key.values()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[Category]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)
