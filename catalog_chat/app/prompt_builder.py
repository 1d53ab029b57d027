#!/usr/bin/env python3
"""
Prompt builder module for the catalog chat.

This module turns the candidate products into the grounding context, the
system prompt and the final two-turn conversation sent to the chat model.
"""

from typing import Dict, List, Optional

from ..schemas.io_models import CatalogItem

REFUSAL = "I can only answer questions about the products in the catalog."
NO_CONTEXT = "(no product context available)"
CONTEXT_SEPARATOR = "\n\n---\n\n"

SYSTEM_PROMPT = (
    "You are a strict product knowledge assistant. Answer ONLY using the provided product context. "
    f"If the question is outside product data, reply: '{REFUSAL}' Provide concise factual answers."
)
LOWEST_PRICE_RULE = (
    " If the user asks for the lowest priced product, respond ONLY with that single product's name, "
    "Id and price (and optionally a brief spec) drawn from context."
)
BEST_SELLING_RULE = (
    " If the user asks for best-selling or popular products, list the matched products with their "
    "name, Id and price, and say that the ranking is based on {basis}."
)
CLOSING_INSTRUCTIONS = "Limit answer to product facts. Do not speculate. Cite product Ids mentioned."

BASIS_TEXT = {"sales": "sales data", "ratings": "customer ratings"}


def _text(value) -> str:
    return "" if value is None else str(value)


def build_product_text(p: CatalogItem) -> str:
    """Descriptive text for one product; also the text that gets embedded."""
    lines = [
        f"Product Id: {p.id}",
        f"Name: {_text(p.name)}",
        f"Description: {_text(p.description)}",
        f"Specs: {_text(p.specs)}",
        f"Price: {_text(p.price)}",
        f"InStock: {p.in_stock}",
        f"ReleaseDate: {p.release_date.isoformat() if p.release_date else ''}",
        f"Brand: {','.join(p.brands)}",
        f"Categories: {','.join(p.categories)}",
        f"Features: {','.join(p.features)}",
        f"Tags: {','.join(p.tags)}",
    ]
    return "\n".join(lines).rstrip()


class PromptBuilder:
    """Builds prompts for the LLM from the candidate products."""

    def build_context(self, products: List[CatalogItem]) -> str:
        if not products:
            return NO_CONTEXT
        return CONTEXT_SEPARATOR.join(build_product_text(p) for p in products)

    def build_system_prompt(self, lowest_price: bool = False, best_selling_basis: Optional[str] = None) -> str:
        prompt = SYSTEM_PROMPT
        if lowest_price:
            prompt += LOWEST_PRICE_RULE
        if best_selling_basis:
            prompt += BEST_SELLING_RULE.format(basis=BASIS_TEXT.get(best_selling_basis, best_selling_basis))
        return prompt

    def build_prompt(self, question: str, products: List[CatalogItem], system_prompt: str) -> str:
        """
        Build the full prompt: system, context, user question and instructions sections.

        Args:
            question: User question
            products: Candidate products grounding the answer
            system_prompt: Output of build_system_prompt

        Returns:
            Formatted prompt string
        """
        context = self.build_context(products)
        return (
            f"<system>\n{system_prompt}\n</system>\n"
            f"<context>\n{context}\n</context>\n"
            f"<user_question>\n{question}\n</user_question>\n"
            f"<instructions>{CLOSING_INSTRUCTIONS}</instructions>"
        )

    def build_messages(self, system_prompt: str, prompt: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": system_prompt + " Context will follow."},
            {"role": "user", "content": prompt},
        ]
