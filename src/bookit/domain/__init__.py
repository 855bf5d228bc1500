"""Domain layer for bookit application.

Services are resolved on first attribute access. The database layer imports
``bookit.domain.entities``, and the services import the database layer, so
loading them eagerly here would make the two packages import each other.
"""

import importlib

_SERVICES = {
    "CategoryService": "bookit.domain.category",
    "TransactionService": "bookit.domain.transaction",
    "RuleService": "bookit.domain.rules",
    "StatementService": "bookit.domain.statements",
    "SimilarityService": "bookit.domain.similarity",
    "ProfileService": "bookit.domain.profile",
    "ImportService": "bookit.domain.ingest",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
