"""
Route contract for the authentik REST API.

A route is one typed call: method, path, request body, response decoding
and the mapping of status codes to outcomes. New API operations are added
as new route classes; existing routes are not touched.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, TypeVar

import httpx
from pydantic import BaseModel

from .errors import AkApiError, NotFoundError, RequestError, UnknownStatusError
from .server import AkServer, encode_segment

BodyT = TypeVar("BodyT")
ResponseT = TypeVar("ResponseT")


class AkApiRoute(ABC, Generic[BodyT, ResponseT]):
    """
    A single authentik API operation.

    Subclasses define ``method``, ``path`` and ``handle``. ``send`` wraps
    any transport or decoding failure into ``RequestError``.
    """

    method: ClassVar[str]

    @abstractmethod
    def path(self, body: BodyT) -> str:
        """Request path, with caller-supplied segments percent-encoded."""

    def payload(self, body: BodyT) -> BaseModel | None:
        """JSON request body, if the route sends one."""
        return None

    @abstractmethod
    async def handle(self, api: AkServer, response: httpx.Response) -> ResponseT:
        """Classify the response into a result or a RouteError."""

    async def send(self, api: AkServer, api_key: str, body: BodyT) -> ResponseT:
        """
        Execute the route against ``api``.

        Raises:
            RouteError: A subclass describing the non-success outcome
        """
        try:
            response = await api.send(
                self.method, self.path(body), api_key, self.payload(body)
            )
            return await self.handle(api, response)
        except AkApiError as e:
            raise RequestError(e) from e


class DeleteBySlugRoute(AkApiRoute[str, None]):
    """Delete an object addressed by its slug; 204 on success, 404 if absent."""

    method = "DELETE"
    path_template: ClassVar[str]
    object_kind: ClassVar[str] = "object"

    def path(self, body: str) -> str:
        return self.path_template.format(slug=encode_segment(body))

    async def handle(self, api: AkServer, response: httpx.Response) -> None:
        if response.status_code == httpx.codes.NO_CONTENT:
            return None
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(f"The given {self.object_kind} was not found.")
        raise UnknownStatusError(response.status_code)
