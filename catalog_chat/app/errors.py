"""Error types shared by the providers, the catalog store and the chat service."""
import enum
from typing import Any, NamedTuple, Optional


class ProviderError(Exception):
    """An embedding or chat provider call failed (network, rate limit, bad payload...)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ProviderAuthError(ProviderError):
    """The provider rejected (or never received) our credentials."""


class CatalogError(Exception):
    """A catalog store query failed."""


class ChatCancelled(Exception):
    """The caller cancelled an in-flight ask()."""


class ErrorKind(str, enum.Enum):
    AUTH = "auth"
    OTHER = "other"


class ProviderResult(NamedTuple):
    """Outcome of one provider call: either a value or an error kind."""
    value: Any = None
    error: Optional[ErrorKind] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


AUTH_STATUS_CODES = (401, 403)


def raise_for_provider_response(response, provider: str) -> None:
    """Map a non-2xx provider HTTP response onto ProviderAuthError / ProviderError."""
    if 200 <= response.status_code < 300:
        return
    body = response.text or ""
    # Gemini reports a bad key as 400 INVALID_ARGUMENT with reason API_KEY_INVALID
    if response.status_code in AUTH_STATUS_CODES or "API_KEY_INVALID" in body:
        raise ProviderAuthError(f"{provider} rejected the API key ({response.status_code})", response.status_code)
    raise ProviderError(f"{provider} returned {response.status_code}: {body[:200]}", response.status_code)


def call_provider(fn, *args, **kwargs) -> ProviderResult:
    """Run a provider call and fold its failure into a ProviderResult."""
    try:
        return ProviderResult(value=fn(*args, **kwargs))
    except ProviderAuthError as e:
        return ProviderResult(error=ErrorKind.AUTH, detail=str(e))
    except ProviderError as e:
        return ProviderResult(error=ErrorKind.OTHER, detail=str(e))
