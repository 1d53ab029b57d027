"""Process-wide availability flags for the embedding and chat providers.

Both flags start True and can only ever be switched off.
"""
import threading

from ..utils.logger import get_logger

logger = get_logger()


class AvailabilityFlags:
    def __init__(self):
        self._lock = threading.Lock()
        self._embedding_available = True
        self._chat_available = True

    @property
    def embedding_available(self) -> bool:
        return self._embedding_available

    @property
    def chat_available(self) -> bool:
        return self._chat_available

    def disable_embeddings(self, reason: str = "") -> None:
        with self._lock:
            if self._embedding_available:
                self._embedding_available = False
                logger.warning("Embedding provider disabled for this process: %s", reason or "unknown error")

    def disable_chat(self, reason: str = "") -> None:
        with self._lock:
            if self._chat_available:
                self._chat_available = False
                logger.warning("Chat provider disabled for this process: %s", reason or "unknown error")
