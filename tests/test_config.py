#!/usr/bin/env python3
"""Tests for configuration validation."""
import os
import sys
import unittest
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from catalog_chat.app.config import Config


class TestConfigValidation(unittest.TestCase):

    def test_defaults_are_valid(self):
        self.assertTrue(Config.validate())

    def test_unknown_provider(self):
        with patch.object(Config, "CHAT_PROVIDER", "openai"):
            with self.assertRaises(ValueError):
                Config.validate()

    def test_non_positive_limits(self):
        for name in ["RETRIEVAL_TOP_K", "HASH_EMBED_DIM", "BEST_SELLING_LIMIT", "MIN_RATINGS"]:
            for value in [0, -1]:
                with patch.object(Config, name, value):
                    with self.assertRaises(ValueError) as ctx:
                        Config.validate()
                    self.assertIn(name, str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
