#!/usr/bin/env python3
"""
Generation module for the catalog chat.

This module handles answer generation through the Gemini or Groq APIs.
A conversation is a list of ``{"role": "system"|"user", "content": str}``
messages.
"""

import requests
from typing import Dict, List

from .config import Config
from .errors import ProviderAuthError, ProviderError, ProviderResult, call_provider, raise_for_provider_response
from ..utils.logger import get_logger

logger = get_logger()


class GenerationClient:
    """Client for generating answers using Gemini LLM API."""

    def __init__(self, api_key: str = None, model: str = None):
        """Initialize the generation client."""
        self.api_key = api_key or Config.GEMINI_API_KEY
        self.llm_model = model or Config.GEMINI_MODEL
        self.api_base_url = f"https://generativelanguage.googleapis.com/v1beta/models/{self.llm_model}:generateContent"

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Generate an answer for a conversation.

        Args:
            messages: System and user turns, in order

        Returns:
            Generated answer text
        """
        if not self.api_key:
            raise ProviderAuthError("Gemini API key is missing")

        system_text = "\n".join(m["content"] for m in messages if m["role"] == "system")
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": m["content"]}]}
                for m in messages if m["role"] != "system"
            ],
            "generationConfig": {
                "temperature": 0.2,
                "maxOutputTokens": 500,
            },
        }
        if system_text:
            payload["systemInstruction"] = {"parts": [{"text": system_text}]}

        logger.debug("Sending request to Gemini model %s", self.llm_model)
        try:
            response = requests.post(
                f"{self.api_base_url}?key={self.api_key}",
                json=payload,
                timeout=Config.REQUEST_TIMEOUT,
            )
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Error generating answer: {e}") from e

        raise_for_provider_response(response, "gemini")

        try:
            data = response.json()
            return data["candidates"][0]["content"]["parts"][0]["text"].strip()
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError(f"Error parsing generation response: {e}") from e


class GroqGenerationClient:
    """Client for generating answers using Groq's OpenAI-compatible API."""

    def __init__(self, api_key: str = None, model: str = None):
        self.api_key = api_key or Config.GROQ_API_KEY
        self.model = model or Config.GROQ_LLM_MODEL
        self.api_base_url = "https://api.groq.com/openai/v1/chat/completions"

    def complete(self, messages: List[Dict[str, str]]) -> str:
        if not self.api_key:
            raise ProviderAuthError("Groq API key is missing")

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": 0.2,
            "max_tokens": 500,
        }
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}

        logger.debug("Sending request to Groq model %s", self.model)
        try:
            response = requests.post(self.api_base_url, json=payload, headers=headers, timeout=Config.REQUEST_TIMEOUT)
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"Error generating answer: {e}") from e

        raise_for_provider_response(response, "groq")

        try:
            return response.json()["choices"][0]["message"]["content"].strip()
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            raise ProviderError(f"Error parsing generation response: {e}") from e


def get_generation_client():
    if Config.CHAT_PROVIDER == "groq":
        return GroqGenerationClient()
    return GenerationClient()


def try_complete(client, messages: List[Dict[str, str]]) -> ProviderResult:
    return call_provider(client.complete, messages)
