"""
Credential acquisition

The bearer token lives outside this package. Callers hand a token provider
(any zero-argument callable returning the token or None) to the gateways,
and every request asks for it through require_auth().
"""
from dataclasses import dataclass
from typing import Callable, Optional, Union

from workbench.config import get_settings
from workbench.utils.logger import get_logger

logger = get_logger(__name__)

TokenProvider = Callable[[], Optional[str]]


@dataclass(frozen=True)
class Credential:
    """A bearer credential ready to be sent"""
    token: str

    @property
    def authorization(self) -> str:
        return f"Bearer {self.token}"


@dataclass(frozen=True)
class MissingCredential:
    """No credential is available; the user has to log in again"""
    reason: str = "Authentication expired, please log in again"


CredentialResult = Union[Credential, MissingCredential]


def require_auth(provider: TokenProvider) -> CredentialResult:
    """
    Ask the provider for a token

    Args:
        provider: Token provider callable

    Returns:
        Credential if a non-blank token is available, MissingCredential otherwise
    """
    token = provider()
    if not token or not token.strip():
        logger.debug("No access token available")
        return MissingCredential()
    return Credential(token=token.strip())


class StaticTokenProvider:
    """Token provider holding a token in memory (login flows, tests)"""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None

    def __call__(self) -> Optional[str]:
        return self._token


class EnvTokenProvider:
    """Token provider reading ACCESS_TOKEN from settings"""

    def __call__(self) -> Optional[str]:
        return get_settings().access_token or None
