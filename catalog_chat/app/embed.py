#!/usr/bin/env python3
"""
Embedding module for the catalog chat.

Two providers are available:
- EmbeddingClient: local sentence-transformers model
- GeminiEmbeddingClient: Gemini ``embedContent`` REST endpoint

Both raise ProviderAuthError / ProviderError; callers go through
``try_embed`` to get a ProviderResult instead of an exception.
"""

import requests
from typing import List

from .config import Config
from .errors import ProviderAuthError, ProviderError, ProviderResult, call_provider, raise_for_provider_response


class EmbeddingClient:
    """Client for generating text embeddings using sentence-transformers."""

    def __init__(self, model_name: str = None):
        """Initialize the embedding client. The model loads on first use."""
        self.model_name = model_name or Config.LOCAL_EMBEDDING_MODEL
        self.model = None

    def _load_model(self):
        if self.model is None:
            try:
                from sentence_transformers import SentenceTransformer
                self.model = SentenceTransformer(self.model_name)
            except Exception as e:
                raise ProviderError(f"Could not load embedding model {self.model_name}: {e}") from e
        return self.model

    def generate_embedding(self, text: str) -> List[float]:
        """
        Generate embedding for a text string.

        Args:
            text: Text to embed

        Returns:
            Embedding vector as a list of floats
        """
        model = self._load_model()
        try:
            embedding = model.encode(text)
        except Exception as e:
            raise ProviderError(f"Local embedding failed: {e}") from e
        return embedding.tolist()


class GeminiEmbeddingClient:
    """Client for generating text embeddings using the Gemini API."""

    def __init__(self, api_key: str = None, model: str = None):
        self.api_key = api_key or Config.GEMINI_API_KEY
        self.model = model or Config.GEMINI_EMBEDDING_MODEL
        self.api_base_url = f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:embedContent"

    def generate_embedding(self, text: str) -> List[float]:
        if not self.api_key:
            raise ProviderAuthError("Gemini API key is missing")

        payload = {
            "model": f"models/{self.model}",
            "content": {"parts": [{"text": text}]},
        }
        try:
            response = requests.post(
                f"{self.api_base_url}?key={self.api_key}",
                json=payload,
                timeout=Config.REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Error calling Gemini embeddings: {e}") from e

        raise_for_provider_response(response, "gemini-embeddings")

        try:
            return [float(v) for v in response.json()["embedding"]["values"]]
        except (ValueError, KeyError, TypeError) as e:
            raise ProviderError(f"Error parsing embedding response: {e}") from e


def get_embedding_client():
    if Config.EMBEDDING_PROVIDER == "gemini":
        return GeminiEmbeddingClient()
    return EmbeddingClient()


def try_embed(client, text: str) -> ProviderResult:
    return call_provider(client.generate_embedding, text)
