#!/usr/bin/env python3
"""Tests for the answer postprocessor and the prompt builder."""
import os
import sys
import unittest
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from catalog_chat.app.postprocess import EMBEDDING_NOTE, Postprocessor
from catalog_chat.app.prompt_builder import NO_CONTEXT, REFUSAL, PromptBuilder
from catalog_chat.schemas.io_models import CatalogItem, ResolverResult


def item(id, name, price=None):
    return CatalogItem(id=id, name=name, price=Decimal(str(price)) if price is not None else None)


WIDGET = item(11, "Widget", 9.99)
GADGET = item(12, "Gadget", 49.99)


class TestGuardRails(unittest.TestCase):

    def setUp(self):
        self.post = Postprocessor()

    def test_no_products_refuses(self):
        self.assertEqual(self.post.apply_guard_rails("anything", "Sure thing.", []), REFUSAL)

    def test_i_dont_know_refuses(self):
        self.assertEqual(self.post.apply_guard_rails("q", "Honestly, I DON'T KNOW.", [WIDGET]), REFUSAL)

    def test_forbidden_topic_in_question_or_answer(self):
        self.assertEqual(self.post.apply_guard_rails("Any politics talk?", "The Widget is fine.", [WIDGET]), REFUSAL)
        self.assertEqual(self.post.apply_guard_rails("Widget?", "Great for sunny Weather.", [WIDGET]), REFUSAL)

    def test_forbidden_word_refuses_product_question_too(self):
        # substring match on the question; a catalog question that uses the word is refused as well
        self.assertEqual(self.post.apply_guard_rails("Do you sell sports shoes?", "Yes, the Widget.", [WIDGET]),
                         REFUSAL)

    def test_clean_answer_passes(self):
        self.assertEqual(self.post.apply_guard_rails("Widget?", "The Widget is small.", [WIDGET]),
                         "The Widget is small.")


class TestNotes(unittest.TestCase):

    def setUp(self):
        self.post = Postprocessor()

    def test_embedding_note(self):
        self.assertEqual(self.post.add_notes("A", embedding_available=False), "A" + EMBEDDING_NOTE)
        self.assertEqual(self.post.add_notes("A", embedding_available=True), "A")

    def test_list_all_note_only_when_truncated(self):
        answer = self.post.add_notes("A", True, shown=5, total_products=10)
        self.assertIn("Showing only 5 of 10 products", answer)
        self.assertEqual(self.post.add_notes("A", True, shown=10, total_products=10), "A")
        # no count means the question was not a list-all one
        self.assertEqual(self.post.add_notes("A", True, shown=5, total_products=None), "A")


class TestGuarantees(unittest.TestCase):

    def setUp(self):
        self.post = Postprocessor()

    def test_lowest_price_kept_when_named(self):
        self.assertEqual(self.post.guarantee_lowest_price("The widget it is.", WIDGET), "The widget it is.")
        self.assertEqual(self.post.guarantee_lowest_price("Product 11 wins.", WIDGET), "Product 11 wins.")

    def test_lowest_price_id_is_a_plain_substring(self):
        # any occurrence of "11" counts as naming product 11, even inside a price
        self.assertEqual(self.post.guarantee_lowest_price("The Gadget costs 11.50.", WIDGET),
                         "The Gadget costs 11.50.")

    def test_lowest_price_overwritten(self):
        self.assertEqual(self.post.guarantee_lowest_price("Try the Gadget.", WIDGET),
                         "Lowest priced product: Widget (Id 11) at price 9.99.")

    def test_lowest_price_without_item(self):
        self.assertEqual(self.post.guarantee_lowest_price("Anything.", None), "Anything.")

    def test_best_selling_listing(self):
        items = [item(i, f"Thing {c}", 5) for i, c in zip(range(1, 6), "ABCDE")]
        result = ResolverResult(agent="best_selling", intent="best_selling", items=items, basis="sales")
        answer = self.post.guarantee_best_selling("Nothing relevant.", result)
        self.assertEqual(answer.split("\n"), [
            "Best-selling products (based on sales):",
            "- Thing A (Id 1) at price 5.00",
            "- Thing B (Id 2) at price 5.00",
            "- Thing C (Id 3) at price 5.00",
            "(2 more not shown)",
        ])

    def test_best_selling_ratings_header_and_unknown_price(self):
        result = ResolverResult(agent="best_selling", intent="best_selling",
                                items=[item(3, "Gift Card")], basis="ratings")
        self.assertEqual(self.post.guarantee_best_selling("No idea.", result),
                         "Top rated products (based on ratings):\n- Gift Card (Id 3) at price unknown")

    def test_best_selling_kept_when_any_name_present(self):
        result = ResolverResult(agent="best_selling", intent="best_selling", items=[WIDGET, GADGET], basis="sales")
        self.assertEqual(self.post.guarantee_best_selling("The gadget sells most.", result),
                         "The gadget sells most.")

    def test_best_selling_overwrites_lowest_price(self):
        result = ResolverResult(agent="best_selling", intent="best_selling", items=[GADGET], basis="sales")
        answer = self.post.process("q", "Nothing useful here.", [WIDGET, GADGET], True,
                                   lowest=WIDGET, best_selling=result)
        self.assertEqual(answer, "Best-selling products (based on sales):\n- Gadget (Id 12) at price 49.99")

    def test_guarantee_replaces_refusal(self):
        answer = self.post.process("cheapest?", "I don't know.", [WIDGET], True, lowest=WIDGET)
        self.assertEqual(answer, "Lowest priced product: Widget (Id 11) at price 9.99.")


class TestPromptBuilder(unittest.TestCase):

    def setUp(self):
        self.builder = PromptBuilder()

    def test_sections_in_order(self):
        system = self.builder.build_system_prompt()
        prompt = self.builder.build_prompt("Which widget?", [WIDGET, GADGET], system)
        positions = [prompt.index(tag) for tag in ("<system>", "<context>", "<user_question>", "<instructions>")]
        self.assertEqual(positions, sorted(positions))
        self.assertIn("\n\n---\n\n", prompt)
        self.assertIn(REFUSAL, system)

    def test_empty_context_placeholder(self):
        self.assertEqual(self.builder.build_context([]), NO_CONTEXT)

    def test_intent_instructions(self):
        base = self.builder.build_system_prompt()
        self.assertNotIn("lowest priced", base)
        self.assertIn("lowest priced", self.builder.build_system_prompt(lowest_price=True))
        self.assertIn("customer ratings", self.builder.build_system_prompt(best_selling_basis="ratings"))
        self.assertIn("sales data", self.builder.build_system_prompt(best_selling_basis="sales"))

    def test_two_turn_conversation(self):
        messages = self.builder.build_messages("SYS", "PROMPT")
        self.assertEqual([m["role"] for m in messages], ["system", "user"])
        self.assertEqual(messages[0]["content"], "SYS Context will follow.")
        self.assertEqual(messages[1]["content"], "PROMPT")


if __name__ == "__main__":
    unittest.main()
