"""Rule-based intent detection for catalog questions.

Each intent is a fixed phrase table; a question matches an intent when any
phrase is a substring of the lower-cased question. Intents are independent,
so one question can carry several of them.
"""
import enum
from typing import Dict, FrozenSet, List


class Intent(str, enum.Enum):
    LIST_ALL = "list_all"
    LOWEST_PRICE = "lowest_price"
    BEST_SELLING = "best_selling"


LIST_ALL = ["list all products", "show all products", "what products do you have",
            "show me every product", "list every product", "all your products",
            "entire catalog", "full catalog", "everything you have"]
LOWEST_PRICE = ["lowest priced", "lowest price", "cheapest", "least expensive",
                "lowest cost", "lowest-priced", "cheapest product", "least costly"]
BEST_SELLING = ["best selling", "best-selling", "most popular", "top selling", "most sold",
                "bestseller", "best seller", "most ordered", "top rated", "most bought",
                "popular products", "trending products", "top products"]

PHRASES: Dict[Intent, List[str]] = {
    Intent.LIST_ALL: LIST_ALL,
    Intent.LOWEST_PRICE: LOWEST_PRICE,
    Intent.BEST_SELLING: BEST_SELLING,
}


def _contains_any(q: str, vocab: List[str]) -> bool:
    if not q or not q.strip():
        return False
    ql = q.lower()
    return any(phrase in ql for phrase in vocab)


def is_list_all_request(question: str) -> bool:
    return _contains_any(question, LIST_ALL)


def is_lowest_price_request(question: str) -> bool:
    return _contains_any(question, LOWEST_PRICE)


def is_best_selling_request(question: str) -> bool:
    return _contains_any(question, BEST_SELLING)


def detect_intents(question: str) -> FrozenSet[Intent]:
    return frozenset(intent for intent, vocab in PHRASES.items() if _contains_any(question, vocab))
