#!/usr/bin/env python3
"""
Postprocessing module for the catalog chat.

Guard rails force the refusal answer for empty context, "I don't know"
answers and off-topic content. Intent guarantees overwrite the model's
answer with a deterministic one when it failed to name the product(s)
the catalog query found.
"""

from typing import List, Optional

from .prompt_builder import REFUSAL
from ..schemas.io_models import CatalogItem, ResolverResult

FORBIDDEN_TOPICS = ["politics", "weather", "news", "sports"]
EMBEDDING_NOTE = "\n\n(Note: Embedding model unavailable, retrieval reduced.)"
LIST_ALL_NOTE = (
    "\n\nNote: Showing only {shown} of {total} products (top matches) to keep the response concise "
    "and within token limits. Ask about a category, feature, brand, or specific criteria for more "
    "targeted details."
)
BEST_SELLING_HEADERS = {
    "sales": "Best-selling products (based on sales):",
    "ratings": "Top rated products (based on ratings):",
}
MAX_LISTED = 3


def _price(value) -> str:
    return "unknown" if value is None else f"{value:.2f}"


class Postprocessor:
    """Postprocesses LLM answers for the catalog chat."""

    def apply_guard_rails(self, question: str, answer: str, products: List[CatalogItem]) -> str:
        if not products or "i don't know" in answer.lower():
            return REFUSAL
        # the question is checked too, so "sports shoes" style product questions are refused as well
        haystack = f"{question}\n{answer}".lower()
        if any(topic in haystack for topic in FORBIDDEN_TOPICS):
            return REFUSAL
        return answer

    def add_notes(self, answer: str, embedding_available: bool, shown: int = 0,
                  total_products: Optional[int] = None) -> str:
        if not embedding_available:
            answer += EMBEDDING_NOTE
        # total_products is only passed for list-all questions
        if total_products is not None and shown and shown < total_products:
            answer += LIST_ALL_NOTE.format(shown=shown, total=total_products)
        return answer

    def guarantee_lowest_price(self, answer: str, product: Optional[CatalogItem]) -> str:
        if product is None:
            return answer
        low = answer.lower()
        id_str = str(product.id)
        name = product.name or ""
        # plain substring match: id 1 is "mentioned" by any answer containing a 1, prices included
        # TODO: match the id as a whole token (e.g. "Id 1") once answers are asked to cite ids that way
        if id_str in low or (name and name.lower() in low):
            return answer
        return f"Lowest priced product: {name} (Id {id_str}) at price {_price(product.price)}."

    def guarantee_best_selling(self, answer: str, result: Optional[ResolverResult]) -> str:
        if result is None or not result.items:
            return answer
        low = answer.lower()
        if any(p.name and p.name.lower() in low for p in result.items):
            return answer

        lines = [BEST_SELLING_HEADERS.get(result.basis, BEST_SELLING_HEADERS["sales"])]
        for p in result.items[:MAX_LISTED]:
            lines.append(f"- {p.name} (Id {p.id}) at price {_price(p.price)}")
        extra = len(result.items) - MAX_LISTED
        if extra > 0:
            lines.append(f"({extra} more not shown)")
        return "\n".join(lines)

    def process(self, question: str, answer: str, products: List[CatalogItem], embedding_available: bool,
                total_products: Optional[int] = None,
                lowest: Optional[CatalogItem] = None,
                best_selling: Optional[ResolverResult] = None) -> str:
        """
        Run every post-generation rule in order.

        The lowest-price guarantee runs before the best-selling one, so when a
        question triggers both and the model named neither, the best-selling
        listing is what the user sees.
        """
        answer = self.apply_guard_rails(question, answer, products)
        answer = self.add_notes(answer, embedding_available, len(products), total_products)
        answer = self.guarantee_lowest_price(answer, lowest)
        answer = self.guarantee_best_selling(answer, best_selling)
        return answer
