#!/usr/bin/env python3
"""Tests for the rule-based intent detection."""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from catalog_chat.nlu.rules import (
    Intent,
    detect_intents,
    is_best_selling_request,
    is_list_all_request,
    is_lowest_price_request,
)


class TestIntentRules(unittest.TestCase):

    def test_lowest_price(self):
        self.assertTrue(is_lowest_price_request("What is your cheapest item?"))
        self.assertTrue(is_lowest_price_request("Which is the LOWEST-PRICED laptop"))
        self.assertFalse(is_lowest_price_request("How is the weather?"))

    def test_list_all(self):
        self.assertTrue(is_list_all_request("Please show all products"))
        self.assertTrue(is_list_all_request("What's in your full catalog?"))
        self.assertFalse(is_list_all_request("show me a laptop"))

    def test_best_selling(self):
        for q in ["What are your best-selling items?", "most popular headphones", "Top rated monitors"]:
            self.assertTrue(is_best_selling_request(q), q)
        self.assertFalse(is_best_selling_request("Do you sell cables?"))

    def test_blank_questions_match_nothing(self):
        for q in ["", "   ", "\n"]:
            self.assertFalse(is_list_all_request(q))
            self.assertFalse(is_lowest_price_request(q))
            self.assertFalse(is_best_selling_request(q))
            self.assertEqual(detect_intents(q), frozenset())

    def test_intents_are_independent(self):
        intents = detect_intents("Show all products and tell me the best sellers")
        self.assertEqual(intents, frozenset({Intent.LIST_ALL, Intent.BEST_SELLING}))

        intents = detect_intents("cheapest of your most popular products")
        self.assertIn(Intent.LOWEST_PRICE, intents)
        self.assertIn(Intent.BEST_SELLING, intents)
        self.assertNotIn(Intent.LIST_ALL, intents)


if __name__ == "__main__":
    unittest.main()
