#!/usr/bin/env python3
"""
Configuration management for the catalog chat backend.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

_DEFAULT_DB_PATH = os.path.join(os.path.dirname(__file__), "..", "data", "catalog.db")


class Config:
    """Configuration class for the application."""

    # Catalog store
    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{os.path.abspath(_DEFAULT_DB_PATH)}")

    # Provider Switches
    CHAT_PROVIDER = os.getenv("CHAT_PROVIDER", "gemini").lower()          # gemini|groq
    EMBEDDING_PROVIDER = os.getenv("EMBEDDING_PROVIDER", "local").lower()  # gemini|local

    # Gemini (Google) API Configuration
    GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_EMBEDDING_MODEL = os.getenv("GEMINI_EMBEDDING_MODEL", "text-embedding-004")

    # Groq API Configuration
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")
    GROQ_LLM_MODEL = os.getenv("GROQ_LLM_MODEL", "llama-3.1-8b-instant")

    # Local sentence-transformers model
    LOCAL_EMBEDDING_MODEL = os.getenv("LOCAL_EMBEDDING_MODEL", "all-MiniLM-L6-v2")

    # Retrieval / answer composition
    RETRIEVAL_TOP_K = int(os.getenv("RETRIEVAL_TOP_K", 5))
    BEST_SELLING_LIMIT = int(os.getenv("BEST_SELLING_LIMIT", 5))
    MIN_RATINGS = int(os.getenv("MIN_RATINGS", 2))
    HASH_EMBED_DIM = int(os.getenv("HASH_EMBED_DIM", 32))

    # HTTP providers
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", 60))

    CHAT_PROVIDERS = ("gemini", "groq")
    EMBEDDING_PROVIDERS = ("gemini", "local")

    @classmethod
    def validate(cls):
        """Validate that the configuration is usable.

        Missing API keys are not an error here: the chat service degrades to
        its "AI not available" answers instead of refusing to start.
        """
        problems = []

        if cls.CHAT_PROVIDER not in cls.CHAT_PROVIDERS:
            problems.append(f"CHAT_PROVIDER must be one of {cls.CHAT_PROVIDERS}, got '{cls.CHAT_PROVIDER}'")
        if cls.EMBEDDING_PROVIDER not in cls.EMBEDDING_PROVIDERS:
            problems.append(f"EMBEDDING_PROVIDER must be one of {cls.EMBEDDING_PROVIDERS}, got '{cls.EMBEDDING_PROVIDER}'")
        if cls.RETRIEVAL_TOP_K <= 0:
            problems.append("RETRIEVAL_TOP_K must be positive")
        if cls.HASH_EMBED_DIM <= 0:
            problems.append("HASH_EMBED_DIM must be positive")
        if cls.BEST_SELLING_LIMIT <= 0:
            problems.append("BEST_SELLING_LIMIT must be positive")
        if cls.MIN_RATINGS <= 0:
            problems.append("MIN_RATINGS must be positive")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")

        return True

# Validate configuration on import
Config.validate()
