"""Lowest Price Agent: finds the cheapest priced product in the catalog."""
from .base_agent import BaseAgent
from ..app.errors import CatalogError
from ..nlu.rules import Intent
from ..schemas.io_models import ResolverResult
from ..utils.logger import get_logger

logger = get_logger()


class LowestPriceAgent(BaseAgent):
    name = "lowest_price"
    intent = Intent.LOWEST_PRICE.value

    def handle(self, question: str) -> ResolverResult:
        logger.info("[WORKFLOW] Executing LowestPriceAgent...")
        try:
            product = self.store.lowest_priced_product()
        except CatalogError:
            logger.exception("Lowest price lookup failed")
            return self._empty()
        if product is None:
            return self._empty()
        return self._ok([product])
