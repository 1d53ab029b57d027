#!/usr/bin/env python3
"""
Retrieval module for the catalog chat.

Ranks the cached product embeddings against the question and loads the
top-K products from the catalog. When the embedding provider is unusable the
question is embedded with the deterministic hash fallback instead.
"""

import threading
from typing import List, Optional

from .availability import AvailabilityFlags
from .config import Config
from .embed import try_embed
from .embedding_cache import EmbeddingCache, check_cancelled
from .errors import CatalogError, ErrorKind
from .vector_math import cosine_similarity, hash_embed
from ..data.catalog_store import CatalogStore
from ..schemas.io_models import CatalogItem
from ..utils.logger import get_logger

logger = get_logger()


class Retriever:
    """Similarity retriever over the process-wide embedding cache."""

    def __init__(self, cache: EmbeddingCache, store: CatalogStore, embedding_client, flags: AvailabilityFlags):
        self.cache = cache
        self.store = store
        self.embedding_client = embedding_client
        self.flags = flags

    def _question_vector(self, question: str, cancel_event: Optional[threading.Event]) -> List[float]:
        if self.flags.embedding_available:
            check_cancelled(cancel_event)
            result = try_embed(self.embedding_client, question)
            check_cancelled(cancel_event)
            if result.ok:
                return list(result.value)
            kind = "authorization" if result.error is ErrorKind.AUTH else "provider"
            self.flags.disable_embeddings(f"{kind} failure embedding question: {result.detail}")
        # dimension may differ from the cached vectors; cosine_similarity truncates
        return hash_embed(question, Config.HASH_EMBED_DIM)

    def rank(self, question_vector: List[float], k: int) -> List[int]:
        scored = [(pid, cosine_similarity(question_vector, vec)) for pid, vec in self.cache.items()]
        scored.sort(key=lambda x: x[1], reverse=True)
        return [pid for pid, _ in scored[:k]]

    def retrieve_top_k(self, question: str, k: int = 5,
                       cancel_event: Optional[threading.Event] = None) -> List[CatalogItem]:
        """
        Find the top-K products most similar to the question.

        Args:
            question: User question
            k: Number of products to return

        Returns:
            Products in rank order; empty when the cache is empty or the catalog query fails
        """
        if len(self.cache) == 0:
            logger.info("[WORKFLOW] Retrieval skipped: embedding cache is empty")
            return []

        question_vector = self._question_vector(question, cancel_event)
        top_ids = self.rank(question_vector, k)
        logger.info("[WORKFLOW] Retrieval selected product ids %s", top_ids)

        check_cancelled(cancel_event)
        try:
            return self.store.products_by_ids(top_ids)
        except CatalogError:
            logger.exception("Could not load retrieved products")
            return []
