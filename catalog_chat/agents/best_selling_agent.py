"""Best Selling Agent: ranks products by units sold, or by rating when nothing has sold yet."""
from .base_agent import BaseAgent
from ..app.config import Config
from ..app.errors import CatalogError
from ..data.catalog_store import CatalogStore
from ..nlu.rules import Intent
from ..schemas.io_models import ResolverResult
from ..utils.logger import get_logger

logger = get_logger()


class BestSellingAgent(BaseAgent):
    name = "best_selling"
    intent = Intent.BEST_SELLING.value

    def __init__(self, store: CatalogStore, limit: int = None, min_ratings: int = None):
        super().__init__(store)
        self.limit = Config.BEST_SELLING_LIMIT if limit is None else limit
        self.min_ratings = Config.MIN_RATINGS if min_ratings is None else min_ratings

    def handle(self, question: str) -> ResolverResult:
        logger.info("[WORKFLOW] Executing BestSellingAgent...")
        try:
            if self.store.has_order_history():
                return self._ok(self.store.best_selling_products(self.limit), basis="sales")
            # no sales at all yet: fall back to customer ratings
            return self._ok(self.store.top_rated_products(self.limit, self.min_ratings), basis="ratings")
        except CatalogError:
            logger.exception("Best selling lookup failed")
            return self._empty()
