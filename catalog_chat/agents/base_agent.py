"""BaseAgent interface for the intent agents."""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..data.catalog_store import CatalogStore
from ..schemas.io_models import CatalogItem, ResolverResult


class BaseAgent(ABC):
    name: str = "base"
    intent: str = ""

    def __init__(self, store: CatalogStore):
        self.store = store

    @abstractmethod
    def handle(self, question: str) -> ResolverResult:
        """Return the products this intent contributes; no prose here."""
        ...

    def _ok(self, items: List[CatalogItem], basis: Optional[str] = None) -> ResolverResult:
        return ResolverResult(agent=self.name, intent=self.intent, items=items,
                              basis=basis)

    def _empty(self) -> ResolverResult:
        return ResolverResult(agent=self.name, intent=self.intent)
