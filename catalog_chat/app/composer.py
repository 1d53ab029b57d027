"""Answer composition: prompt, chat call, guard rails and intent guarantees."""
import threading
from typing import FrozenSet, List, Optional

from .availability import AvailabilityFlags
from .embedding_cache import check_cancelled
from .errors import CatalogError, ErrorKind
from .generate import try_complete
from .postprocess import Postprocessor
from .prompt_builder import PromptBuilder
from ..data.catalog_store import CatalogStore
from ..nlu.rules import Intent
from ..schemas.io_models import CatalogItem, ChatAnswer, ResolverResult
from ..utils.logger import get_logger

logger = get_logger()

AI_UNAVAILABLE = "AI not available (invalid or missing key)."
AI_INVALID_KEY = "AI not available (invalid key)."
AI_CALL_FAILED = "AI not available (error calling model)."


class AnswerComposer:
    def __init__(self, store: CatalogStore, generation_client, flags: AvailabilityFlags,
                 prompt_builder: PromptBuilder = None, postprocessor: Postprocessor = None):
        self.store = store
        self.generation_client = generation_client
        self.flags = flags
        self.builder = prompt_builder or PromptBuilder()
        self.postprocessor = postprocessor or Postprocessor()

    def _count_products(self) -> Optional[int]:
        try:
            return self.store.count_products()
        except CatalogError:
            logger.exception("Could not count products")
            return None

    def compose(self, question: str, intents: FrozenSet[Intent], products: List[CatalogItem],
                lowest: Optional[ResolverResult] = None,
                best_selling: Optional[ResolverResult] = None,
                cancel_event: Optional[threading.Event] = None) -> ChatAnswer:
        lowest_item = lowest.items[0] if lowest and lowest.items else None
        best = best_selling if best_selling and best_selling.items else None

        system_prompt = self.builder.build_system_prompt(
            lowest_price=lowest_item is not None,
            best_selling_basis=best.basis if best else None,
        )
        prompt = self.builder.build_prompt(question, products, system_prompt)

        if not self.flags.chat_available:
            return ChatAnswer(answer=AI_UNAVAILABLE, sources=[])

        logger.info("[WORKFLOW] Calling chat model with %d context products", len(products))
        check_cancelled(cancel_event)
        result = try_complete(self.generation_client, self.builder.build_messages(system_prompt, prompt))
        check_cancelled(cancel_event)

        if not result.ok:
            if result.error is ErrorKind.AUTH:
                self.flags.disable_chat(f"authorization failure: {result.detail}")
                return ChatAnswer(answer=AI_INVALID_KEY, sources=products)
            self.flags.disable_chat(f"provider failure: {result.detail}")
            return ChatAnswer(answer=AI_CALL_FAILED, sources=products)

        raw_answer = result.value or "(no answer)"
        logger.info("[WORKFLOW] LLM raw answer length: %d", len(raw_answer))

        total = self._count_products() if Intent.LIST_ALL in intents else None
        answer = self.postprocessor.process(
            question,
            raw_answer,
            products,
            embedding_available=self.flags.embedding_available,
            total_products=total,
            lowest=lowest_item,
            best_selling=best,
        )
        return ChatAnswer(answer=answer, sources=products)
