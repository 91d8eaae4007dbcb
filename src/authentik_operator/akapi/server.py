"""
HTTP transport for the authentik REST API.

AkServer sends a single request and hands back the raw response. It does
not retry and does not interpret status codes; routes do that. Every
transport failure is converted to an AkApiError subclass here so that all
routes report an unreachable server the same way.
"""

import logging
from typing import TypeVar
from urllib.parse import quote

import httpx
import pydantic
from pydantic import BaseModel

from ..settings import settings
from .errors import AkApiConnectionError, AkApiSerializeError, AkApiStreamError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Failures while receiving or decoding the body, as opposed to reaching the server
_STREAM_ERRORS = (
    httpx.ReadError,
    httpx.RemoteProtocolError,
    httpx.DecodingError,
    httpx.StreamError,
)


def encode_segment(value: str) -> str:
    """Percent-encode a single path segment, including ``/``."""
    return quote(value, safe="")


class AkServer:
    """
    Connection to one authentik instance.

    The httpx client may be injected (and is then owned by the caller) or is
    created lazily and closed by ``aclose``.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"Accept": "application/json"},
                follow_redirects=False,
            )
            logger.debug(f"Created httpx client for {self.base_url}")
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AkServer":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def send(
        self,
        method: str,
        path: str,
        api_key: str,
        body: BaseModel | None = None,
    ) -> httpx.Response:
        """
        Send an authenticated request.

        Args:
            method: HTTP method
            path: Absolute API path with segments already encoded
            api_key: authentik API token
            body: Optional request body, sent as JSON

        Returns:
            The response, whatever its status code

        Raises:
            AkApiConnectionError: If the server cannot be reached
            AkApiStreamError: If the response cannot be received
        """
        url = f"{self.base_url}{path}"
        payload = body.model_dump(mode="json", by_alias=True) if body is not None else None

        try:
            response = await self._get_client().request(
                method,
                url,
                json=payload,
                headers={"Authorization": f"Bearer {api_key}"},
            )
        except _STREAM_ERRORS as e:
            logger.error(f"Failed to read response: {method} {path} - {e}")
            raise AkApiStreamError(f"{method} {path}: {e}") from e
        except httpx.TransportError as e:
            logger.error(f"Request failed: {method} {path} - {e}")
            raise AkApiConnectionError(f"{method} {path}: {e}") from e

        logger.debug(
            f"{method} {path} -> {response.status_code}",
            extra={
                "http_method": method,
                "http_path": path,
                "http_status": response.status_code,
            },
        )
        return response

    async def decode(self, response: httpx.Response, model: type[ModelT]) -> ModelT:
        """
        Decode a response body into ``model``.

        Unknown fields are ignored; missing or mistyped fields are a
        decoding failure.

        Raises:
            AkApiStreamError: If the body cannot be read
            AkApiSerializeError: If the body is not a valid ``model``
        """
        try:
            content = await response.aread()
        except (*_STREAM_ERRORS, httpx.TransportError) as e:
            raise AkApiStreamError(f"Failed to read response body: {e}") from e

        try:
            return model.model_validate_json(content)
        except pydantic.ValidationError as e:
            raise AkApiSerializeError(
                f"Invalid {model.__name__} payload: {e}"
            ) from e
