"""Process-lifetime cache of product embeddings.

The cache is filled once, under a lock. A provider failure stops the fill
and switches embeddings off for the rest of the process, but whatever was
embedded before the failure is kept. After initialization the map is only
read, so lookups do not take the lock.
"""
import threading
from typing import Dict, List, Optional

from .availability import AvailabilityFlags
from .embed import try_embed
from .errors import CatalogError, ChatCancelled, ErrorKind
from .prompt_builder import build_product_text
from ..data.catalog_store import CatalogStore
from ..utils.logger import get_logger

logger = get_logger()

def check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise ChatCancelled("request cancelled")

class EmbeddingCache:
    def __init__(self, store: CatalogStore, embedding_client, flags: AvailabilityFlags):
        self.store = store
        self.embedding_client = embedding_client
        self.flags = flags
        self._vectors: Dict[int, List[float]] = {}
        self._lock = threading.Lock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def __len__(self) -> int:
        return len(self._vectors)

    def items(self):
        return list(self._vectors.items())

    def ensure_initialized(self, cancel_event: Optional[threading.Event] = None) -> None:
        if self._initialized:
            return
        with self._lock:
            if self._initialized:
                return
            check_cancelled(cancel_event)
            self._populate(cancel_event)
            self._initialized = True
            logger.info("[WORKFLOW] Embedding cache ready: %d vectors (embeddings available: %s)",
                        len(self._vectors), self.flags.embedding_available)

    def _populate(self, cancel_event: Optional[threading.Event]) -> None:
        try:
            products = self.store.list_products()
        except CatalogError as e:
            logger.exception("Could not load catalog for embedding")
            self.flags.disable_embeddings(f"catalog load failed: {e}")
            return

        for p in products:
            if not self.flags.embedding_available:
                break
            if p.id in self._vectors:
                # left over from a cancelled pass
                continue
            check_cancelled(cancel_event)
            result = try_embed(self.embedding_client, build_product_text(p))
            if not result.ok:
                kind = "authorization" if result.error is ErrorKind.AUTH else "provider"
                self.flags.disable_embeddings(f"{kind} failure embedding product {p.id}: {result.detail}")
                break
            self._vectors[p.id] = list(result.value)
