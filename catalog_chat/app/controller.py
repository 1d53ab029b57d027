"""Controller / Orchestrator for the product chat.

ChatService is built once per process and owns the embedding cache and the
availability flags; every ask() call shares them.
"""
import threading
from typing import Dict, List, Optional

from .availability import AvailabilityFlags
from .composer import AI_UNAVAILABLE, AnswerComposer
from .config import Config
from .embed import get_embedding_client
from .embedding_cache import EmbeddingCache, check_cancelled
from .generate import get_generation_client
from .retrieval import Retriever
from ..agents.base_agent import BaseAgent
from ..agents.best_selling_agent import BestSellingAgent
from ..agents.lowest_price_agent import LowestPriceAgent
from ..data.catalog_store import CatalogStore, get_catalog_store
from ..nlu.rules import Intent, detect_intents
from ..schemas.io_models import CatalogItem, ChatAnswer, ResolverResult
from ..utils.logger import get_logger

logger = get_logger()

# agents run in this order; their products join the candidates in the same order
AGENT_ORDER = (Intent.LOWEST_PRICE, Intent.BEST_SELLING)


def merge_candidates(products: List[CatalogItem], extra: List[CatalogItem]) -> List[CatalogItem]:
    """Append ``extra`` to ``products``, skipping ids already present."""
    seen = {p.id for p in products}
    merged = list(products)
    for p in extra:
        if p.id not in seen:
            seen.add(p.id)
            merged.append(p)
    return merged


class ChatService:
    def __init__(self, store: CatalogStore = None, embedding_client=None, generation_client=None,
                 top_k: int = None):
        self.store = store or get_catalog_store()
        self.embedding_client = embedding_client or get_embedding_client()
        self.generation_client = generation_client or get_generation_client()
        self.top_k = top_k or Config.RETRIEVAL_TOP_K

        self.flags = AvailabilityFlags()
        self.cache = EmbeddingCache(self.store, self.embedding_client, self.flags)
        self.retriever = Retriever(self.cache, self.store, self.embedding_client, self.flags)
        self.composer = AnswerComposer(self.store, self.generation_client, self.flags)
        self.agents: Dict[Intent, BaseAgent] = {
            Intent.LOWEST_PRICE: LowestPriceAgent(self.store),
            Intent.BEST_SELLING: BestSellingAgent(self.store),
        }

    @property
    def embedding_available(self) -> bool:
        return self.flags.embedding_available

    @property
    def chat_available(self) -> bool:
        return self.flags.chat_available

    def ask(self, question: str, cancel_event: Optional[threading.Event] = None) -> ChatAnswer:
        """
        Answer a catalog question.

        Provider and catalog failures come back as degraded answers, never as
        exceptions. Only ChatCancelled escapes, when ``cancel_event`` is set.
        """
        logger.info("[WORKFLOW] 1. ChatService received question: '%s'", question)
        self.cache.ensure_initialized(cancel_event)

        if not self.flags.chat_available:
            logger.info("[WORKFLOW] Chat provider unavailable, returning degraded answer")
            return ChatAnswer(answer=AI_UNAVAILABLE, sources=[])

        intents = detect_intents(question)
        logger.info("[WORKFLOW] 2. Intents detected: %s", sorted(i.value for i in intents))

        products = self.retriever.retrieve_top_k(question, self.top_k, cancel_event)
        logger.info("[WORKFLOW] 3. Retrieved %d products", len(products))

        results: Dict[Intent, ResolverResult] = {}
        for intent in AGENT_ORDER:
            if intent not in intents:
                continue
            check_cancelled(cancel_event)
            res = self.agents[intent].handle(question)
            check_cancelled(cancel_event)
            results[intent] = res
            products = merge_candidates(products, res.items)
            logger.info("[WORKFLOW] 4. Agent '%s' contributed %d products", res.agent, len(res.items))

        return self.composer.compose(
            question,
            intents,
            products,
            lowest=results.get(Intent.LOWEST_PRICE),
            best_selling=results.get(Intent.BEST_SELLING),
            cancel_event=cancel_event,
        )
