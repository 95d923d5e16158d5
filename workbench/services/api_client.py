"""
Base API client

Shared plumbing for every gateway:
- Credential check before any I/O (Unauthenticated)
- Bearer header, JSON content type on requests carrying a body
- Envelope decoding: {"success": true, "data": ...} or a RemoteError
- Network failures wrapped as TransportError

Nothing is retried here; retrying is up to the caller.
"""
import httpx
from typing import Dict, Any, Optional, List, Type, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from workbench.config import get_settings
from workbench.services.errors import Unauthenticated, RemoteError, TransportError
from workbench.utils.auth import TokenProvider, MissingCredential, require_auth
from workbench.utils.logger import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def path_segment(value: str) -> str:
    """Escape an identifier for use as a single URL path segment"""
    return quote(str(value), safe="")


def parse_body(response: httpx.Response) -> Dict[str, Any]:
    """
    Decode a JSON object body, tolerating empty or non-JSON bodies

    Returns:
        The decoded object, or {} when the body is empty, unparseable or not an object
    """
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def error_message(body: Dict[str, Any], status_code: int) -> str:
    """detail first, then error/message, then "HTTP <status>" """
    for key in ("detail", "error", "message"):
        value = body.get(key)
        if value:
            return value if isinstance(value, str) else str(value)
    return f"HTTP {status_code}"


class ApiClient:
    """
    JSON-over-HTTP client for the workbench API

    Args:
        token_provider: Callable returning the bearer token or None
        base_url: API base (defaults to settings.api_base)
        timeout: Seconds before giving up (defaults to settings.request_timeout)
        client: Shared httpx.AsyncClient; a short-lived one is opened per call otherwise
    """

    def __init__(
        self,
        token_provider: TokenProvider,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        settings = get_settings()
        self.token_provider = token_provider
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client = client

    def _auth_headers(self, with_json: bool) -> Dict[str, str]:
        credential = require_auth(self.token_provider)
        if isinstance(credential, MissingCredential):
            raise Unauthenticated(credential.reason)

        headers = {"Authorization": credential.authorization}
        if with_json:
            headers["Content-Type"] = "application/json"
        return headers

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None
    ) -> httpx.Response:
        """
        Send one request and return the raw response

        Raises:
            Unauthenticated: No credential (nothing is sent)
            TransportError: Connection/timeout failure
        """
        headers = self._auth_headers(with_json=json is not None)
        url = f"{self.base_url}{path}"
        kwargs: Dict[str, Any] = {"headers": headers}
        if params:
            kwargs["params"] = params
        if json is not None:
            kwargs["json"] = json

        logger.info(f"{method} {path}")
        try:
            if self._client is not None:
                return await self._client.request(method, url, **kwargs)
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                return await client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise TransportError(str(e) or e.__class__.__name__) from e

    def _unwrap(self, response: httpx.Response) -> Any:
        """Return envelope data or raise RemoteError"""
        body = parse_body(response)
        if response.is_success and body.get("success") is True:
            return body.get("data")

        message = error_message(body, response.status_code)
        logger.warning(f"Request rejected ({response.status_code}): {message}")
        raise RemoteError(message, status_code=response.status_code)

    async def _call(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None
    ) -> Any:
        response = await self._send(method, path, params=params, json=json)
        return self._unwrap(response)

    @staticmethod
    def _decode(model: Type[ModelT], data: Any) -> ModelT:
        """Validate envelope data into a model; malformed data is a RemoteError"""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RemoteError(
                f"Malformed response payload: {e.error_count()} invalid field(s) in {model.__name__}"
            ) from e

    @classmethod
    def _decode_list(cls, model: Type[ModelT], items: Any) -> List[ModelT]:
        if not items:
            return []
        if not isinstance(items, list):
            raise RemoteError(f"Malformed response payload: expected a list of {model.__name__}")
        return [cls._decode(model, item) for item in items]
