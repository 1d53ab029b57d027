"""
CATALOG-CHAT — System Documentation
===================================

This module-style README documents the architecture, request flow and
operational practices of the product catalog chat. It can be imported to
surface sections programmatically or printed for human consumption.

How to use this file
--------------------
- View in an editor for structured reading.
- Run `python README.py` to print the outline.

Table of Contents
-----------------
1. System Overview
2. Architecture
3. Request Flow
4. Degradation Model
5. Data & Persistence
6. Configuration & Environment
7. Testing Strategy
8. Running Locally

"""

from __future__ import annotations

import textwrap


def section(title: str, body: str) -> str:
    return f"\n{title}\n{'-' * len(title)}\n{body.strip()}\n"


SYSTEM_OVERVIEW = section(
    "1. System Overview",
    """
    CATALOG-CHAT answers natural-language questions about a product catalog.
    Answers are grounded in catalog records: products are retrieved by
    embedding similarity, a few special questions (cheapest, best selling,
    list everything) are resolved deterministically from the database, and a
    chat model writes the final answer under strict guard rails.
    """,
)


ARCHITECTURE = section(
    "2. Architecture",
    """
    app/
      - main.py: FastAPI app, `POST /api/chat/products`, `GET /health`.
      - controller.py: ChatService, the per-process orchestrator.
      - embedding_cache.py: one-time, lock-guarded product embedding cache.
      - retrieval.py: cosine top-K over the cache with a hash fallback.
      - composer.py/prompt_builder.py/postprocess.py: prompt, chat call, guard rails.
      - embed.py/generate.py: Gemini / Groq / sentence-transformers clients.
      - availability.py: the two one-way provider availability flags.

    agents/
      - lowest_price_agent.py, best_selling_agent.py: deterministic resolvers.

    nlu/
      - rules.py: phrase-table intent detection.

    data/
      - models.py/database.py: SQLAlchemy catalog schema and sessions.
      - catalog_store.py: read-only catalog queries.
      - populate_db.py: seed the catalog from `data/raw/products.csv`.
    """,
)


REQUEST_FLOW = section(
    "3. Request Flow",
    """
    1) Ensure the embedding cache is filled (first caller only).
    2) Short-circuit if the chat provider has been disabled.
    3) Detect intents (list-all, lowest-price, best-selling).
    4) Retrieve the top-K products; run the resolvers for active intents.
    5) Build the prompt, call the chat model, apply guard rails, notes and
       the lowest-price / best-selling answer guarantees.
    """,
)


DEGRADATION = section(
    "4. Degradation Model",
    """
    - Embedding and chat availability start on and switch off for good on the
      first provider failure. There is no retry.
    - Without embeddings, questions are embedded with a character-hash vector
      and answers carry a "retrieval reduced" note.
    - Without chat, every answer is "AI not available (invalid or missing key)."
    - Guard rails refuse any exchange where the question or the answer contains
      politics, weather, news or sports. The match is a plain substring, so a
      genuine catalog question such as "Do you sell sports shoes?" is refused
      too; the question is checked so that an off-topic question is refused
      whatever the model replies.
    - The lowest-price guarantee treats the product id as mentioned when it
      appears anywhere in the answer. For small ids a price like 19.99 can
      match, and the model's answer is then kept as is.
    """,
)


DATA_AND_PERSISTENCE = section(
    "5. Data & Persistence",
    """
    - DB: SQLite by default via SQLAlchemy; any SQLAlchemy URL works.
    - Entities: Product, Brand, Category, Feature, Tag, Order, OrderItem,
      ProductReview. The chat only reads them.
    - Embeddings live in memory for the lifetime of the process.
    """,
)


CONFIG_ENV = section(
    "6. Configuration & Environment",
    """
    - `.env` compatible; keys: DATABASE_URL, CHAT_PROVIDER, EMBEDDING_PROVIDER,
      GEMINI_API_KEY, GROQ_API_KEY, RETRIEVAL_TOP_K, BEST_SELLING_LIMIT.
    - Defaults and validation live in `app/config.py`.
    """,
)


TESTING = section(
    "7. Testing Strategy",
    """
    - Pytest runs the unittest suites under `/tests`.
    - Catalogs are built in in-memory SQLite; providers are faked or their
      HTTP calls mocked, so no key or network is needed.
    """,
)


RUNNING = section(
    "8. Running Locally",
    """
    - Seed: `python -m catalog_chat.data.populate_db`.
    - Serve: `uvicorn catalog_chat.app.main:app --reload`.
    """,
)


def as_text() -> str:
    return "\n".join(
        [
            SYSTEM_OVERVIEW,
            ARCHITECTURE,
            REQUEST_FLOW,
            DEGRADATION,
            DATA_AND_PERSISTENCE,
            CONFIG_ENV,
            TESTING,
            RUNNING,
        ]
    )


def main() -> None:
    print(textwrap.dedent(as_text()))


if __name__ == "__main__":
    main()
