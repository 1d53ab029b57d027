#!/usr/bin/env python3
"""HTTP tests for the FastAPI surface."""
import os
import sys
import unittest

from fastapi.testclient import TestClient

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from catalog_fixtures import FakeChatClient, FakeEmbeddingClient, make_store
from catalog_chat.app.controller import ChatService
from catalog_chat.app.main import app, get_chat_service


class TestProductChatAPI(unittest.TestCase):

    def setUp(self):
        self.service = ChatService(
            store=make_store([{"name": "Widget", "price": 9.99, "in_stock": True}]),
            embedding_client=FakeEmbeddingClient(),
            generation_client=FakeChatClient("The Widget costs 9.99."),
        )
        app.dependency_overrides[get_chat_service] = lambda: self.service
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_answer_with_sources(self):
        response = self.client.post("/api/chat/products", json={"question": "How much is the Widget?"})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["answer"], "The Widget costs 9.99.")
        self.assertEqual(data["sources"], [{"id": 1, "name": "Widget", "price": 9.99}])

    def test_blank_question_rejected(self):
        for body in [{"question": ""}, {"question": "   "}, {}]:
            response = self.client.post("/api/chat/products", json=body)
            self.assertEqual(response.status_code, 400, body)
            self.assertEqual(response.json()["detail"], "Question required")

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})


if __name__ == "__main__":
    unittest.main()
